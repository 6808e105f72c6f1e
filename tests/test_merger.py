"""Unit tests for session merging."""

import itertools

import pytest

from scamintel.core.merger import merge_intelligence
from scamintel.schemas import (
    IntelligenceRecord,
    MoneyAmount,
    ScamType,
    SophisticationLevel,
    Tactic,
    ThreatType,
    UrgencyLevel,
)

EMPTY = IntelligenceRecord()


class TestEmptyIdentity:
    """Test merging with the empty record changes nothing."""

    def test_right_identity(self, rich_record):
        assert merge_intelligence(rich_record, EMPTY).model_dump() == rich_record.model_dump()

    def test_left_identity(self, rich_record):
        assert merge_intelligence(EMPTY, rich_record).model_dump() == rich_record.model_dump()

    def test_identity_on_extracted_records(self, engine, sample_message):
        record = engine.extract(sample_message)
        assert merge_intelligence(record, EMPTY).model_dump() == record.model_dump()
        assert merge_intelligence(EMPTY, record).model_dump() == record.model_dump()

    def test_empty_with_empty(self):
        assert merge_intelligence(EMPTY, EMPTY).is_empty()


class TestCollections:
    def test_union_sorted(self):
        a = IntelligenceRecord(phoneNumbers=["9876543210"])
        b = IntelligenceRecord(phoneNumbers=["9123456789", "9876543210"])
        assert merge_intelligence(a, b).phoneNumbers == ["9123456789", "9876543210"]

    def test_money_concatenated(self):
        """Test repeated money mentions across messages are all kept."""
        m = MoneyAmount(originalText="Rs 500", integerValue=500)
        merged = merge_intelligence(
            IntelligenceRecord(moneyAmounts=[m]), IntelligenceRecord(moneyAmounts=[m])
        )
        assert merged.moneyAmounts == [m, m]

    def test_length_summed_and_flags_ored(self):
        a = IntelligenceRecord(messageLength=10, hasNumbers=True)
        b = IntelligenceRecord(messageLength=5, hasLinks=True)
        merged = merge_intelligence(a, b)
        assert merged.messageLength == 15
        assert merged.hasNumbers and merged.hasLinks

    def test_inputs_unchanged(self):
        a = IntelligenceRecord(emails=["a@x.com"])
        merge_intelligence(a, IntelligenceRecord(emails=["b@x.com"]))
        assert a.emails == ["a@x.com"]


@pytest.mark.parametrize("a, b", list(itertools.product(UrgencyLevel, repeat=2)))
def test_urgency_is_maximum(a, b):
    merged = merge_intelligence(IntelligenceRecord(urgencyLevel=a), IntelligenceRecord(urgencyLevel=b))
    assert merged.urgencyLevel.rank == max(a.rank, b.rank)


class TestStickyClassification:
    """Test tactic, threat and scam type keep the first established value."""

    def test_established_value_kept(self):
        a = IntelligenceRecord(
            tacticUsed=Tactic.FEAR, threatType=ThreatType.LEGAL_THREAT, scamType=ScamType.BANKING_FRAUD
        )
        b = IntelligenceRecord(
            tacticUsed=Tactic.GREED, threatType=ThreatType.FALSE_REWARD, scamType=ScamType.LOTTERY_SCAM
        )
        merged = merge_intelligence(a, b)
        assert merged.tacticUsed == Tactic.FEAR
        assert merged.threatType == ThreatType.LEGAL_THREAT
        assert merged.scamType == ScamType.BANKING_FRAUD

    def test_default_replaced(self):
        a = IntelligenceRecord(messageLength=3)
        b = IntelligenceRecord(
            tacticUsed=Tactic.GREED, threatType=ThreatType.FALSE_REWARD, scamType=ScamType.LOTTERY_SCAM
        )
        merged = merge_intelligence(a, b)
        assert merged.tacticUsed == Tactic.GREED
        assert merged.threatType == ThreatType.FALSE_REWARD
        assert merged.scamType == ScamType.LOTTERY_SCAM

    def test_order_matters(self):
        a = IntelligenceRecord(tacticUsed=Tactic.FEAR)
        b = IntelligenceRecord(tacticUsed=Tactic.GREED)
        assert merge_intelligence(a, b).tacticUsed != merge_intelligence(b, a).tacticUsed


class TestSophistication:
    def test_latest_reading_wins(self):
        a = IntelligenceRecord(sophisticationLevel=SophisticationLevel.HIGH, messageLength=40)
        b = IntelligenceRecord(sophisticationLevel=SophisticationLevel.LOW, messageLength=5)
        assert merge_intelligence(a, b).sophisticationLevel == SophisticationLevel.LOW

    def test_empty_message_keeps_reading(self):
        a = IntelligenceRecord(sophisticationLevel=SophisticationLevel.HIGH, messageLength=40)
        assert merge_intelligence(a, EMPTY).sophisticationLevel == SophisticationLevel.HIGH
