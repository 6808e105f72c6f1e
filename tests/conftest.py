"""Shared fixtures for the scamintel test suite."""

import pytest

from scamintel.core.intelligence import IntelligenceEngine
from scamintel.core.patterns import DEFAULT_LIBRARY
from scamintel.schemas import (
    IntelligenceRecord,
    MoneyAmount,
    ScamType,
    SophisticationLevel,
    Tactic,
    ThreatType,
    UrgencyLevel,
)
from scamintel.session_store import SessionStore


@pytest.fixture
def library():
    return DEFAULT_LIBRARY


@pytest.fixture
def engine():
    """Engine with the default library and the permissive 9-digit account policy."""
    return IntelligenceEngine(min_bank_digits=9, max_input_chars=10000)


@pytest.fixture
def memory_store():
    return SessionStore(path=None)


@pytest.fixture
def file_store(tmp_path):
    return SessionStore(path=str(tmp_path / "sessions.json"))


@pytest.fixture
def rich_record():
    """A populated record with non-default values in every classification."""
    return IntelligenceRecord(
        emails=["agent@fraud-mail.com"],
        upiIds=["scammer.fraud@oksbi"],
        phoneNumbers=["9876543210", "6789012345"],
        phishingLinks=["http://secure-sbi.tk/login"],
        bankAccounts=["50100234567890"],
        ifscCodes=["SBIN0001234"],
        moneyAmounts=[MoneyAmount(originalText="5 lakh", integerValue=500000)],
        transactionIds=["TXN12345678"],
        banksImpersonated=["sbi"],
        authoritiesImpersonated=["police"],
        appsRequested=["anydesk"],
        urgencyLevel=UrgencyLevel.HIGH,
        tacticUsed=Tactic.FEAR,
        threatType=ThreatType.LEGAL_THREAT,
        scamType=ScamType.BANKING_FRAUD,
        sophisticationLevel=SophisticationLevel.MEDIUM,
        suspiciousKeywords=["otp", "verify"],
        credibilityMarkers=["TIME_PRESSURE"],
        messageLength=120,
        hasNumbers=True,
        hasLinks=True,
    )


# Messages scanned by the any-message property tests
SAMPLE_MESSAGES = [
    "My number is 9876543210 call me.",
    "Transfer to account 50100234567890 immediately.",
    "Sir, we have detected a suspicious transfer to UPI ID: scammer.fraud@oksbi. "
    "This is urgent! To reverse this, we sent an OTP to 6789012345. Please provide it "
    "immediately along with confirmation of your bank account 1234567890123456.",
    "Click https://bit.ly/scam-link for reward.",
    "Congratulations! You have won a lottery. Pay processing fee to claim your 5 lakh prize.",
    "Call +91 98765 43210 or 09876543210 or 919876543210, account 919876543210",
    "Mail SUPPORT@SBI-Help.com or pay Fraud.Agent@YBL, also help@gmail.com",
    "IFSC SBIN0001234, acct 1234 5678 9012 3456, order #ORD12345, txn id: TXN98765432",
    "",
    "no numbers here at all",
]


@pytest.fixture(params=SAMPLE_MESSAGES)
def sample_message(request):
    return request.param
