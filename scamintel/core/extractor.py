"""
Entity Extractor
=================
Applies Pattern Library rules to raw message text and returns raw
candidate matches per entity type.

Candidates are NOT normalized or disambiguated here — a digit run can
show up both as a phone and as a bank account candidate, and an
@-address both as an email and as a UPI candidate. The normalizer and
the conflict resolver settle that afterwards.

The extractor is a pure function of (text, library): no state, no I/O,
and empty text simply yields empty candidate lists.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from scamintel.core.patterns import PatternLibrary

logger = logging.getLogger(__name__)


@dataclass
class MoneyCandidate:
    """A raw money match: the matched text, its numeric part and scale word."""
    text: str
    amount: str
    scale: Optional[str] = None


@dataclass
class Candidates:
    """Raw, un-normalized matches grouped by entity type."""
    phones: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)
    upis: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    bank_accounts: List[str] = field(default_factory=list)
    ifsc_codes: List[str] = field(default_factory=list)
    crypto_wallets: List[str] = field(default_factory=list)
    money: List[MoneyCandidate] = field(default_factory=list)
    transaction_ids: List[str] = field(default_factory=list)
    order_ids: List[str] = field(default_factory=list)

    def total(self) -> int:
        return sum(
            len(values) for values in (
                self.phones, self.emails, self.upis, self.urls,
                self.bank_accounts, self.ifsc_codes, self.crypto_wallets,
                self.money, self.transaction_ids, self.order_ids,
            )
        )


def _match_value(match: re.Match) -> str:
    """Prefer the ``value`` group when the rule defines one."""
    if "value" in match.re.groupindex and match.group("value") is not None:
        return match.group("value")
    return match.group(0)


def find_all(text: str, rules: Iterable[re.Pattern]) -> List[str]:
    """
    Run every rule over the text and collect matches in rule order.

    Each rule contributes its own non-overlapping matches; results of
    cooperating rules are simply concatenated (de-duplication happens
    in the normalizer).

    Args:
        text: Message text
        rules: Compiled patterns for one entity type

    Returns:
        List of matched strings, possibly with repeats
    """
    found = []
    for rule in rules:
        for match in rule.finditer(text):
            value = _match_value(match).strip()
            if value:
                found.append(value)
    return found


def find_money(text: str, rules: Iterable[re.Pattern]) -> List[MoneyCandidate]:
    """
    Collect money mentions from all money rules, in text order.

    The currency-first and scale-word rules overlap on mentions such as
    "Rs 5 lakh"; a later rule's match that overlaps an accepted span is
    dropped so each mention is counted once.
    """
    accepted: List[Tuple[int, int, MoneyCandidate]] = []
    for rule in rules:
        for match in rule.finditer(text):
            start, end = match.span()
            if any(start < a_end and a_start < end for a_start, a_end, _ in accepted):
                continue
            groups = match.groupdict()
            accepted.append((start, end, MoneyCandidate(
                text=match.group(0).strip(),
                amount=groups["amount"],
                scale=groups.get("scale"),
            )))
    accepted.sort(key=lambda item: item[0])
    return [candidate for _, _, candidate in accepted]


def extract_candidates(text: str, library: PatternLibrary) -> Candidates:
    """
    Scan text with every entity rule of the library.

    Args:
        text: Message text (may be empty)
        library: Pattern Library supplying the rules

    Returns:
        Candidates with one (possibly empty) list per entity type
    """
    if not text:
        return Candidates()

    candidates = Candidates(
        phones=find_all(text, library.phone_rules),
        emails=find_all(text, library.email_rules),
        upis=find_all(text, library.upi_rules),
        urls=find_all(text, library.url_rules),
        bank_accounts=find_all(text, library.bank_account_rules),
        ifsc_codes=find_all(text, library.ifsc_rules),
        crypto_wallets=find_all(text, library.crypto_wallet_rules),
        money=find_money(text, library.money_rules),
        transaction_ids=find_all(text, library.transaction_id_rules),
        order_ids=find_all(text, library.order_id_rules),
    )
    logger.debug(f"Extracted {candidates.total()} raw candidates from {len(text)} chars")
    return candidates
