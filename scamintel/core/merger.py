"""
Session Merger
===============
Folds a per-message intelligence record into the accumulated session
record, field by field:

- Set-like fields:   union
- moneyAmounts:      concatenation (repeated mentions are signal)
- messageLength:     sum
- hasNumbers/Links:  logical OR
- urgencyLevel:      maximum — a CRITICAL reading is never downgraded
- tacticUsed, threatType, scamType: sticky-first — once away from the
  UNKNOWN/GENERIC default, the established value is kept
- sophisticationLevel: overwritten by the latest message's reading

The merge is total and deterministic. It is associative on collections
but not on the sticky scalars: which classification "sticks" depends on
the order messages arrive in.

Callers must serialize merges per session: two concurrent
read-merge-write cycles on the same session silently lose one side.
"""

from scamintel.schemas import (
    SET_FIELDS,
    IntelligenceRecord,
    ScamType,
    Tactic,
    ThreatType,
)


def _sticky(existing, incoming, default):
    return incoming if existing == default else existing


def merge_intelligence(existing: IntelligenceRecord, incoming: IntelligenceRecord) -> IntelligenceRecord:
    """
    Merge newly extracted intelligence into the session record.

    Args:
        existing: Current accumulated session intelligence
        incoming: Intelligence of the newest message

    Returns:
        A new merged record; neither input is modified
    """
    merged = {
        name: sorted(set(getattr(existing, name)) | set(getattr(incoming, name)))
        for name in SET_FIELDS
    }

    merged["moneyAmounts"] = list(existing.moneyAmounts) + list(incoming.moneyAmounts)
    merged["messageLength"] = existing.messageLength + incoming.messageLength
    merged["hasNumbers"] = existing.hasNumbers or incoming.hasNumbers
    merged["hasLinks"] = existing.hasLinks or incoming.hasLinks

    merged["urgencyLevel"] = max(existing.urgencyLevel, incoming.urgencyLevel, key=lambda u: u.rank)
    merged["tacticUsed"] = _sticky(existing.tacticUsed, incoming.tacticUsed, Tactic.UNKNOWN)
    merged["threatType"] = _sticky(existing.threatType, incoming.threatType, ThreatType.GENERIC)
    merged["scamType"] = _sticky(existing.scamType, incoming.scamType, ScamType.UNKNOWN)

    # The empty record carries no sophistication reading
    merged["sophisticationLevel"] = (
        existing.sophisticationLevel if incoming.is_empty() else incoming.sophisticationLevel
    )

    return IntelligenceRecord(**merged)
