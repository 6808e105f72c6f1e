"""
Intelligence Extraction Engine
================================
Ties the pipeline together for one scammer message:

    raw text → Entity Extractor → Normalizer → Conflict Resolver
             → Classifier → IntelligenceRecord

and exposes the session-level operations:

- extract(text)           — per-message record, never raises
- merge(existing, new)    — fold a message into the session record
- score(record)           — bounded risk assessment
- ingest(store, id, text) — get → extract → merge → put for one session

The engine holds only immutable configuration (Pattern Library and
thresholds), so one instance can serve any number of conversations in
parallel. The session record is the only shared mutable state and the
caller owns single-writer-per-session discipline.
"""

import logging
import re
from typing import Optional

from scamintel import config
from scamintel.core.classifier import classify_message
from scamintel.core.extractor import extract_candidates
from scamintel.core.merger import merge_intelligence as _merge
from scamintel.core.normalizer import (
    dedupe,
    normalize_addresses,
    normalize_money,
    normalize_phones,
    normalize_references,
    normalize_urls,
)
from scamintel.core.patterns import DEFAULT_LIBRARY, PatternLibrary
from scamintel.core.resolver import resolve_bank_accounts, resolve_upi_ids
from scamintel.core.risk import calculate_risk_score as _score
from scamintel.schemas import IntelligenceRecord, RiskAssessment

logger = logging.getLogger(__name__)

_DIGIT = re.compile(r"\d")


def empty_intel() -> IntelligenceRecord:
    """
    Returns the canonical empty record: no identifiers, LOW urgency,
    UNKNOWN tactic and scam type, GENERIC threat, zero length.
    """
    return IntelligenceRecord()


class IntelligenceEngine:
    """
    Stateless intelligence engine bound to one Pattern Library.

    Args:
        library: Rules and taxonomies to use; validated on construction
        min_bank_digits: Shortest digit run accepted as a bank account
        max_input_chars: Longer messages are truncated before scanning

    Raises:
        PatternLibraryError: If the library fails validation
        ValueError: If a threshold is out of range
    """

    def __init__(
        self,
        library: PatternLibrary = DEFAULT_LIBRARY,
        min_bank_digits: int = config.MIN_BANK_ACCOUNT_DIGITS,
        max_input_chars: int = config.MAX_INPUT_CHARS,
    ):
        if min_bank_digits < 1:
            raise ValueError("min_bank_digits must be positive")
        if max_input_chars < 1:
            raise ValueError("max_input_chars must be positive")

        self.library = library.validate()
        self.min_bank_digits = min_bank_digits
        self.max_input_chars = max_input_chars
        logger.debug(f"Intelligence engine ready (pattern library v{library.version})")

    # ---------- EXTRACTION ----------

    def extract(self, text) -> IntelligenceRecord:
        """
        Extract all intelligence from a single message.

        Phones and emails are settled before bank accounts and UPI IDs,
        since the resolver checks the latter against the former.

        Args:
            text: Message text; None, non-str or blank input is accepted

        Returns:
            IntelligenceRecord for this message (empty for invalid input)
        """
        if not isinstance(text, str) or not text.strip():
            logger.debug("Empty or non-text message — returning empty intelligence")
            return empty_intel()

        message_length = len(text)
        if message_length > self.max_input_chars:
            logger.warning(
                f"Message of {message_length} chars truncated to {self.max_input_chars} before extraction"
            )
            text = text[:self.max_input_chars]

        lib = self.library
        candidates = extract_candidates(text, lib)

        # ---------- CONTACT ----------
        phones = normalize_phones(candidates.phones)
        emails = normalize_addresses(candidates.emails)
        upis = resolve_upi_ids(normalize_addresses(candidates.upis), emails, lib.public_email_providers)
        links = normalize_urls(candidates.urls, lib.legitimate_domains)

        # ---------- FINANCIAL ----------
        banks = resolve_bank_accounts(candidates.bank_accounts, phones, self.min_bank_digits)

        signals = classify_message(text, links, phones, lib)

        record = IntelligenceRecord(
            emails=emails,
            upiIds=upis,
            phoneNumbers=phones,
            phishingLinks=links,
            bankAccounts=banks,
            ifscCodes=dedupe(candidates.ifsc_codes),
            cryptoWallets=dedupe(candidates.crypto_wallets),
            moneyAmounts=normalize_money(candidates.money, lib.money_scales),
            transactionIds=normalize_references(candidates.transaction_ids),
            orderIds=normalize_references(candidates.order_ids),
            banksImpersonated=signals.banks,
            authoritiesImpersonated=signals.authorities,
            appsRequested=signals.apps,
            urgencyLevel=signals.urgency_level,
            tacticUsed=signals.tactic,
            threatType=signals.threat_type,
            scamType=signals.scam_type,
            sophisticationLevel=signals.sophistication,
            suspiciousKeywords=signals.suspicious_keywords,
            credibilityMarkers=signals.credibility_markers,
            messageLength=message_length,
            hasNumbers=bool(_DIGIT.search(text)),
            hasLinks=bool(links) or bool(lib.link_rule.search(text)),
        )
        logger.debug(
            f"Extracted {len(phones)} phones, {len(banks)} accounts, {len(upis)} UPI IDs, "
            f"{len(links)} links — scam type {record.scamType.value}"
        )
        return record

    # ---------- SESSION ----------

    def merge(self, existing: IntelligenceRecord, incoming: IntelligenceRecord) -> IntelligenceRecord:
        return _merge(existing, incoming)

    def score(self, record: IntelligenceRecord) -> RiskAssessment:
        return _score(record)

    def ingest(self, store, session_id: str, text: Optional[str]) -> IntelligenceRecord:
        """
        Fold one message into a session's accumulated intelligence.

        Reads the session record (or starts an empty one), merges the new
        message and writes the result back.

        The read-merge-write cycle is NOT atomic. Callers must make sure
        only one message per session is ingested at a time; two concurrent
        ingests on the same session can silently drop one contribution.

        Args:
            store: Any object with get(session_id) and put(session_id, record)
            session_id: Conversation identifier
            text: The newest scammer message

        Returns:
            The updated session record
        """
        return self.ingest_record(store, session_id, self.extract(text))

    def ingest_record(self, store, session_id: str, record: IntelligenceRecord) -> IntelligenceRecord:
        """
        Fold an already extracted record into a session.

        Same read-merge-write cycle as ingest(), for callers that also
        need the per-message record and should not extract twice.
        """
        existing = store.get(session_id)
        if existing is None:
            logger.info(f"Starting intelligence record for session {session_id}")
            existing = empty_intel()

        merged = self.merge(existing, record)
        store.put(session_id, merged)
        return merged


# ==============================
# MODULE-LEVEL CONVENIENCE
# ==============================

# Built and validated at import
default_engine = IntelligenceEngine()


def extract_intelligence(text) -> IntelligenceRecord:
    """Extract intelligence from one message with the default engine."""
    return default_engine.extract(text)


def merge_intelligence(existing: IntelligenceRecord, new_intel: IntelligenceRecord) -> IntelligenceRecord:
    return default_engine.merge(existing, new_intel)


def calculate_risk_score(record: IntelligenceRecord) -> RiskAssessment:
    return default_engine.score(record)
