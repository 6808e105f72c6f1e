"""
Risk Scoring Engine
====================
Additive weighted risk model over an intelligence record (a single
message or an accumulated session).

Each triggered signal adds its weight and a human-readable factor:

    > 2 phone numbers               +30
    any phishing link               +40
    any UPI id                      +20
    suspicious keywords > 10 / > 5 / > 0   +50 / +30 / +15
    credential request flag         +40
    URL shortener flag              +25
    suspicious TLD flag             +35

The total is clamped to [0, 100]. Severity: >= 70 HIGH, >= 40 MEDIUM,
else LOW. Scoring is pure and never fails for a valid record.
"""

from typing import List, Tuple

from scamintel.core.classifier import (
    CREDENTIAL_REQUEST_FLAG,
    SUSPICIOUS_TLD_FLAG,
    URL_SHORTENER_FLAG,
)
from scamintel.schemas import IntelligenceRecord, RiskAssessment, RiskLevel

HIGH_THRESHOLD = 70
MEDIUM_THRESHOLD = 40
MAX_SCORE = 100

# (count above which the tier applies, weight, factor), highest tier first
KEYWORD_DENSITY_TIERS: Tuple[Tuple[int, int, str], ...] = (
    (10, 50, "High phishing keyword density"),
    (5, 30, "Moderate phishing keywords"),
    (0, 15, "Some phishing indicators"),
)

FLAG_WEIGHTS: Tuple[Tuple[str, int, str], ...] = (
    (CREDENTIAL_REQUEST_FLAG, 40, "Requests credentials/OTP"),
    (URL_SHORTENER_FLAG, 25, "Uses URL shortener"),
    (SUSPICIOUS_TLD_FLAG, 35, "Suspicious domain extension"),
)


def risk_level(score: int) -> RiskLevel:
    if score >= HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calculate_risk_score(record: IntelligenceRecord) -> RiskAssessment:
    """
    Score a record.

    Args:
        record: Per-message or accumulated session intelligence

    Returns:
        RiskAssessment with clamped score, level and factor list
    """
    score = 0
    factors: List[str] = []

    if len(record.phoneNumbers) > 2:
        score += 30
        factors.append("Multiple phone numbers")

    if record.phishingLinks:
        score += 40
        factors.append("Contains suspicious URLs")

    if record.upiIds:
        score += 20
        factors.append("Payment request detected")

    keyword_count = len(record.suspiciousKeywords)
    for above, weight, factor in KEYWORD_DENSITY_TIERS:
        if keyword_count > above:
            score += weight
            factors.append(factor)
            break

    for flag, weight, factor in FLAG_WEIGHTS:
        if flag in record.suspiciousKeywords:
            score += weight
            factors.append(factor)

    score = max(0, min(score, MAX_SCORE))
    return RiskAssessment(score=score, level=risk_level(score), factors=factors)
