"""
Normalizer / Deduplicator
==========================
Canonicalizes raw candidates so that one real-world identifier maps to
exactly one string.

Canonical forms:
- Emails / UPI IDs: lower-cased, trailing dots stripped
- Phone numbers:    10 digits, "91" country code or leading "0" removed
- URLs:             verbatim (case kept), trailing punctuation trimmed,
                    legitimate-domain matches dropped
- Bank accounts, IFSC, crypto wallets: verbatim
- Money:            separators stripped, scale word applied
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

from scamintel.core.extractor import MoneyCandidate
from scamintel.schemas import MoneyAmount

_NON_DIGIT = re.compile(r"\D")


def dedupe(values: Iterable[str]) -> List[str]:
    """Drop repeats while preserving first-seen order."""
    seen = set()
    unique = []
    for v in values:
        if v not in seen:
            seen.add(v)
            unique.append(v)
    return unique


def digits_only(raw: str) -> str:
    return _NON_DIGIT.sub("", raw)


def normalize_phone(raw: str) -> Optional[str]:
    """
    Reduce a phone match to its canonical 10-digit national number.

    Args:
        raw: Phone text, e.g. "+91 98765-43210" or "09876543210"

    Returns:
        The 10-digit number, or None if the digits do not form one
    """
    digits = digits_only(raw)
    if len(digits) == 12 and digits.startswith("91"):
        digits = digits[2:]
    elif len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]
    return digits if len(digits) == 10 else None


def normalize_phones(raw_phones: Iterable[str]) -> List[str]:
    return dedupe(p for p in map(normalize_phone, raw_phones) if p)


def normalize_address(raw: str) -> str:
    """Lower-case an email or UPI address."""
    return raw.lower().rstrip(".")


def normalize_addresses(raw: Iterable[str]) -> List[str]:
    return dedupe(normalize_address(a) for a in raw)


def is_legitimate_url(url: str, legitimate_domains: Iterable[str]) -> bool:
    lowered = url.lower()
    return any(domain in lowered for domain in legitimate_domains)


def normalize_urls(raw_urls: Iterable[str], legitimate_domains: Iterable[str]) -> List[str]:
    """
    Trim trailing punctuation and drop links on allow-listed domains.

    Args:
        raw_urls: URL candidates
        legitimate_domains: Allow-list, matched by case-insensitive containment

    Returns:
        De-duplicated suspicious URLs, case preserved
    """
    legitimate_domains = tuple(legitimate_domains)
    urls = []
    for url in raw_urls:
        url = url.rstrip(".,;:!?)]}")
        if url and not is_legitimate_url(url, legitimate_domains):
            urls.append(url)
    return dedupe(urls)


def has_reference_digit(value: str) -> bool:
    """Reference IDs must carry at least one digit; plain words don't count."""
    return any(ch.isdigit() for ch in value)


def normalize_references(raw_ids: Iterable[str]) -> List[str]:
    return dedupe(v.strip("-") for v in raw_ids if has_reference_digit(v))


def parse_money(candidate: MoneyCandidate, scales: Dict[str, int]) -> Optional[MoneyAmount]:
    """
    Convert a money candidate into a MoneyAmount in rupees.

    Thousands separators are removed before parsing and the scale word
    (thousand / lakh / crore, plural or singular) multiplies the value.
    Fractions are truncated after scaling, so "1.5 lakh" is 150000.

    Returns:
        MoneyAmount, or None for zero or unparsable amounts
    """
    number = candidate.amount.replace(",", "")
    try:
        value = Decimal(number)
    except InvalidOperation:
        return None

    if candidate.scale:
        scale = candidate.scale.lower()
        multiplier = scales.get(scale) or scales.get(scale.rstrip("s"), 1)
        value *= multiplier

    integer_value = int(value)
    if integer_value <= 0:
        return None
    return MoneyAmount(originalText=candidate.text, integerValue=integer_value)


def normalize_money(candidates: Iterable[MoneyCandidate], scales: Dict[str, int]) -> List[MoneyAmount]:
    # Repeated mentions are kept
    amounts = []
    for candidate in candidates:
        amount = parse_money(candidate, scales)
        if amount is not None:
            amounts.append(amount)
    return amounts
