"""Unit tests for the record models."""

import pytest
from pydantic import ValidationError

from scamintel.schemas import (
    IntelligenceRecord,
    MoneyAmount,
    RiskAssessment,
    RiskLevel,
    SophisticationLevel,
    UrgencyLevel,
)


class TestIntelligenceRecord:
    """Test the record model."""

    def test_default_is_empty(self):
        record = IntelligenceRecord()
        assert record.is_empty()
        assert record.urgencyLevel == UrgencyLevel.LOW
        assert record.phoneNumbers == []

    def test_set_fields_sorted_and_deduped(self):
        record = IntelligenceRecord(phoneNumbers=["9876543210", "6789012345", "9876543210"])
        assert record.phoneNumbers == ["6789012345", "9876543210"]

    def test_non_empty(self):
        assert not IntelligenceRecord(messageLength=1).is_empty()

    def test_round_trips_through_json(self, rich_record):
        data = rich_record.model_dump(mode="json")
        assert IntelligenceRecord.model_validate(data).model_dump() == rich_record.model_dump()

    def test_negative_length_rejected(self):
        with pytest.raises(ValidationError):
            IntelligenceRecord(messageLength=-1)


class TestOrdinals:
    def test_urgency_rank(self):
        ranks = [level.rank for level in UrgencyLevel]
        assert ranks == [0, 1, 2, 3]
        assert UrgencyLevel.CRITICAL.rank > UrgencyLevel.HIGH.rank

    def test_sophistication_rank(self):
        assert SophisticationLevel.HIGH.rank > SophisticationLevel.LOW.rank


def test_money_amount_must_be_positive():
    with pytest.raises(ValidationError):
        MoneyAmount(originalText="Rs 0", integerValue=0)


def test_risk_score_bounded():
    with pytest.raises(ValidationError):
        RiskAssessment(score=101, level=RiskLevel.HIGH)
