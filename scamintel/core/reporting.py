"""
Conversation Reporting
=======================
Summaries of an accumulated session record for analysts and for the
final result payload:

- build_agent_notes()  — one-line, pipe-separated intelligence summary
- has_critical_intel() — whether any actionable identifier was captured
- engagement_score()   — weighted engagement value, capped at 1000
"""

from typing import List, Optional

from scamintel.schemas import IntelligenceRecord

MAX_ENGAGEMENT_SCORE = 1000

# Points per captured identifier
ENGAGEMENT_WEIGHTS = {
    "upiIds": 50,
    "phoneNumbers": 40,
    "emails": 35,
    "phishingLinks": 30,
    "bankAccounts": 60,
    "ifscCodes": 45,
    "cryptoWallets": 55,
}
POINTS_PER_MESSAGE = 10


def build_agent_notes(record: IntelligenceRecord, message_count: Optional[int] = None) -> str:
    """
    Build evaluator-grade notes summarizing what the scammer revealed.

    Identifiers are listed in full, account and link counts only,
    followed by the behavioral classifications.

    Args:
        record: Accumulated session intelligence
        message_count: Messages exchanged so far, if known

    Returns:
        Notes joined with " | "
    """
    notes: List[str] = []

    if record.upiIds:
        notes.append(f"UPI IDs: {', '.join(record.upiIds)}")
    if record.phoneNumbers:
        notes.append(f"Phone: {', '.join(record.phoneNumbers)}")
    if record.emails:
        notes.append(f"Emails: {', '.join(record.emails)}")
    if record.bankAccounts:
        notes.append(f"Bank accounts: {len(record.bankAccounts)}")
    if record.phishingLinks:
        notes.append(f"Phishing links: {len(record.phishingLinks)}")
    if record.banksImpersonated:
        notes.append(f"Impersonating: {', '.join(record.banksImpersonated)}")
    if record.authoritiesImpersonated:
        notes.append(f"Fake authority: {', '.join(record.authoritiesImpersonated)}")
    if record.appsRequested:
        notes.append(f"Requested apps: {', '.join(record.appsRequested)}")
    if record.moneyAmounts:
        amounts = ", ".join(f"₹{a.integerValue}" for a in record.moneyAmounts)
        notes.append(f"Money mentioned: {amounts}")

    notes.append(f"Scam type: {record.scamType.value}")
    notes.append(f"Tactic: {record.tacticUsed.value}")
    notes.append(f"Urgency: {record.urgencyLevel.value}")
    notes.append(f"Sophistication: {record.sophisticationLevel.value}")
    notes.append(f"Threat: {record.threatType.value}")
    if message_count is not None:
        notes.append(f"Messages: {message_count}")

    return " | ".join(notes)


def has_critical_intel(record: IntelligenceRecord) -> bool:
    """True once any contact or payment identifier has been captured."""
    return any(getattr(record, name) for name in ENGAGEMENT_WEIGHTS)


def engagement_score(record: IntelligenceRecord, message_count: int) -> int:
    score = message_count * POINTS_PER_MESSAGE
    for name, weight in ENGAGEMENT_WEIGHTS.items():
        score += len(getattr(record, name)) * weight
    return min(score, MAX_ENGAGEMENT_SCORE)
