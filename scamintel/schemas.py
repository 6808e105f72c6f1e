"""
Pydantic Schema Definitions
============================
Defines the intelligence record produced for every scammer message and
accumulated across a conversation, plus the risk assessment model.

IntelligenceRecord: Frozen snapshot of what one message (or a whole
                    session) revealed. Set-like fields are stored as
                    sorted, de-duplicated lists so serialized output is
                    deterministic.
MoneyAmount:        One money mention with its parsed rupee value.
RiskAssessment:     Bounded score, severity tier and contributing factors.

Field names are camelCase because downstream reporting serializes the
record as-is.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==============================
# CLASSIFICATION ENUMS
# ==============================

class UrgencyLevel(str, Enum):
    """Ordinal urgency reading, LOW < MEDIUM < HIGH < CRITICAL."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(UrgencyLevel).index(self)


class Tactic(str, Enum):
    """Dominant social-engineering tactic."""
    FEAR = "FEAR"
    GREED = "GREED"
    URGENCY = "URGENCY"
    AUTHORITY = "AUTHORITY"
    TRUST = "TRUST"
    UNKNOWN = "UNKNOWN"


class ThreatType(str, Enum):
    LEGAL_THREAT = "LEGAL_THREAT"
    ACCOUNT_THREAT = "ACCOUNT_THREAT"
    TIME_PRESSURE = "TIME_PRESSURE"
    FALSE_REWARD = "FALSE_REWARD"
    GENERIC = "GENERIC"


class ScamType(str, Enum):
    BANKING_FRAUD = "BANKING_FRAUD"
    LOTTERY_SCAM = "LOTTERY_SCAM"
    JOB_SCAM = "JOB_SCAM"
    TECH_SUPPORT = "TECH_SUPPORT"
    PARCEL_SCAM = "PARCEL_SCAM"
    UTILITY_SCAM = "UTILITY_SCAM"
    INVESTMENT_FRAUD = "INVESTMENT_FRAUD"
    UNKNOWN = "UNKNOWN"


class SophisticationLevel(str, Enum):
    """Ordinal sophistication reading, LOW < MEDIUM < HIGH."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return list(SophisticationLevel).index(self)


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# ==============================
# RECORD MODELS
# ==============================

# Fields holding set semantics; everything else is scalar or ordered.
SET_FIELDS = (
    "emails",
    "upiIds",
    "phoneNumbers",
    "phishingLinks",
    "bankAccounts",
    "ifscCodes",
    "cryptoWallets",
    "transactionIds",
    "orderIds",
    "banksImpersonated",
    "authoritiesImpersonated",
    "appsRequested",
    "suspiciousKeywords",
    "credibilityMarkers",
)


class MoneyAmount(BaseModel):
    """A money mention, e.g. originalText='Rs 5 lakh', integerValue=500000."""
    model_config = ConfigDict(frozen=True)

    originalText: str = Field(description="Matched text as it appeared in the message")
    integerValue: int = Field(gt=0, description="Amount in rupees after applying the scale word")


class IntelligenceRecord(BaseModel):
    """
    Intelligence extracted from one scammer message, or accumulated over
    a whole session by the merger.

    The default-constructed record is the canonical empty record: every
    collection empty, LOW/UNKNOWN/GENERIC classifications and zero length.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    # ---------- CONTACT ----------
    emails: List[str] = Field(default_factory=list, description="Lower-cased email addresses")
    upiIds: List[str] = Field(default_factory=list, description="UPI payment handles (never emails)")
    phoneNumbers: List[str] = Field(default_factory=list, description="Canonical 10-digit phone numbers")
    phishingLinks: List[str] = Field(default_factory=list, description="URLs outside the legitimate allow-list")

    # ---------- FINANCIAL ----------
    bankAccounts: List[str] = Field(default_factory=list, description="Bank account numbers (never phones)")
    ifscCodes: List[str] = Field(default_factory=list, description="IFSC branch codes")
    cryptoWallets: List[str] = Field(default_factory=list, description="Crypto wallet addresses")
    moneyAmounts: List[MoneyAmount] = Field(default_factory=list, description="Money mentions in order")

    # ---------- REFERENCES ----------
    transactionIds: List[str] = Field(default_factory=list, description="Transaction/case references")
    orderIds: List[str] = Field(default_factory=list, description="Order/invoice references")

    # ---------- IMPERSONATION ----------
    banksImpersonated: List[str] = Field(default_factory=list)
    authoritiesImpersonated: List[str] = Field(default_factory=list)
    appsRequested: List[str] = Field(default_factory=list)

    # ---------- BEHAVIOR ----------
    urgencyLevel: UrgencyLevel = UrgencyLevel.LOW
    tacticUsed: Tactic = Tactic.UNKNOWN
    threatType: ThreatType = ThreatType.GENERIC
    scamType: ScamType = ScamType.UNKNOWN
    sophisticationLevel: SophisticationLevel = SophisticationLevel.LOW
    suspiciousKeywords: List[str] = Field(default_factory=list)
    credibilityMarkers: List[str] = Field(default_factory=list)

    # ---------- METADATA ----------
    messageLength: int = Field(default=0, ge=0, description="Characters seen (summed across a session)")
    hasNumbers: bool = False
    hasLinks: bool = False

    @field_validator(*SET_FIELDS)
    @classmethod
    def _dedupe_sorted(cls, values: List[str]) -> List[str]:
        return sorted(set(values))

    def is_empty(self) -> bool:
        """True if this record carries no message at all."""
        return self.model_dump() == IntelligenceRecord().model_dump()


class RiskAssessment(BaseModel):
    """Output of the risk scorer."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Clamped additive risk score")
    level: RiskLevel = Field(description="HIGH >= 70, MEDIUM >= 40, else LOW")
    factors: List[str] = Field(default_factory=list, description="Human-readable contributing factors")
