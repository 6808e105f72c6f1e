"""
Conflict Resolver
==================
Removes candidates that one entity type captured from another type's
domain, so a single real-world identifier is never reported twice under
two labels.

Resolution order matters and is fixed:
1. Canonical phone numbers and emails are settled first.
2. Bank accounts are checked against the phone set.
3. UPI IDs are checked against the email set and the public
   email-provider list.
"""

import logging
from typing import Iterable, List

from scamintel.core.normalizer import dedupe, digits_only, normalize_phone

logger = logging.getLogger(__name__)


def resolve_bank_accounts(
    raw_accounts: Iterable[str],
    phone_numbers: Iterable[str],
    min_digits: int = 9,
) -> List[str]:
    """
    Keep only bank-account candidates that are not phone numbers.

    A candidate is dropped when its phone-normalized digits equal a
    captured phone number (so "919876543210" or "09876543210" does not
    come back as an account) or when it has fewer than ``min_digits``
    digits.

    Args:
        raw_accounts: Bank account candidates, verbatim
        phone_numbers: Canonical phone numbers for the same text
        min_digits: Shortest accepted account length

    Returns:
        De-duplicated accounts, verbatim
    """
    phones = set(phone_numbers)
    accounts = []
    for account in raw_accounts:
        digits = digits_only(account)
        if len(digits) < min_digits:
            continue
        if digits in phones or normalize_phone(digits) in phones:
            logger.debug(f"Dropping bank candidate {account} — already captured as phone")
            continue
        accounts.append(account)
    return dedupe(accounts)


def is_public_email_handle(handle: str, providers: Iterable[str]) -> bool:
    handle = handle.lower()
    return any(handle.startswith(p) or p in handle for p in providers)


def resolve_upi_ids(
    raw_upis: Iterable[str],
    emails: Iterable[str],
    email_providers: Iterable[str],
) -> List[str]:
    """
    Keep only @-addresses that are payment handles rather than emails.

    Args:
        raw_upis: Lower-cased UPI candidates
        emails: Lower-cased emails found in the same text
        email_providers: Public email provider names (gmail, yahoo, ...)

    Returns:
        De-duplicated UPI IDs
    """
    email_set = set(emails)
    providers = tuple(email_providers)
    upis = []
    for upi in raw_upis:
        if upi in email_set:
            continue
        handle = upi.split("@", 1)[1] if "@" in upi else ""
        if not handle or is_public_email_handle(handle, providers):
            continue
        upis.append(upi)
    return dedupe(upis)
