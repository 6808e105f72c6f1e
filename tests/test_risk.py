"""Unit tests for the risk scorer."""

import pytest

from scamintel.core.classifier import CREDENTIAL_REQUEST_FLAG, SUSPICIOUS_TLD_FLAG, URL_SHORTENER_FLAG
from scamintel.core.risk import calculate_risk_score, risk_level
from scamintel.schemas import IntelligenceRecord, RiskLevel


def _keywords(n):
    return [f"kw{i}" for i in range(n)]


class TestCalculateRiskScore:
    """Test the additive weights and clamping."""

    def test_empty_record(self):
        risk = calculate_risk_score(IntelligenceRecord())
        assert risk.score == 0
        assert risk.level == RiskLevel.LOW
        assert risk.factors == []

    def test_link_payment_and_one_keyword(self):
        record = IntelligenceRecord(
            phishingLinks=["http://x.tk"], upiIds=["a@ybl"], suspiciousKeywords=["otp"]
        )
        risk = calculate_risk_score(record)
        assert risk.score == 75
        assert risk.level == RiskLevel.HIGH
        assert risk.factors == [
            "Contains suspicious URLs",
            "Payment request detected",
            "Some phishing indicators",
        ]

    def test_moderate_keyword_tier(self):
        record = IntelligenceRecord(upiIds=["a@ybl"], suspiciousKeywords=_keywords(6))
        risk = calculate_risk_score(record)
        assert risk.score == 50
        assert risk.level == RiskLevel.MEDIUM

    def test_two_phones_do_not_count(self):
        record = IntelligenceRecord(phoneNumbers=["9876543210", "9123456789"])
        assert calculate_risk_score(record).score == 0

    def test_three_phones(self):
        record = IntelligenceRecord(phoneNumbers=["9876543210", "9123456789", "8123456789"])
        risk = calculate_risk_score(record)
        assert risk.score == 30
        assert risk.factors == ["Multiple phone numbers"]

    def test_clamped_to_100(self):
        """Test every signal at once never exceeds the ceiling."""
        record = IntelligenceRecord(
            phoneNumbers=["9876543210", "9123456789", "8123456789"],
            phishingLinks=["https://bit.ly/x"],
            upiIds=["a@ybl"],
            suspiciousKeywords=_keywords(11)
            + [CREDENTIAL_REQUEST_FLAG, URL_SHORTENER_FLAG, SUSPICIOUS_TLD_FLAG],
        )
        risk = calculate_risk_score(record)
        assert risk.score == 100
        assert risk.level == RiskLevel.HIGH
        assert "High phishing keyword density" in risk.factors
        assert "Requests credentials/OTP" in risk.factors

    def test_bounds_on_session_record(self, rich_record):
        risk = calculate_risk_score(rich_record)
        assert 0 <= risk.score <= 100
        assert risk.level == risk_level(risk.score)


@pytest.mark.parametrize(
    "score, expected",
    [(0, RiskLevel.LOW), (39, RiskLevel.LOW), (40, RiskLevel.MEDIUM),
     (69, RiskLevel.MEDIUM), (70, RiskLevel.HIGH), (100, RiskLevel.HIGH)],
)
def test_risk_level_thresholds(score, expected):
    assert risk_level(score) == expected
