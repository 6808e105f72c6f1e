"""Unit tests for cross-type conflict resolution."""

from scamintel.core.patterns import PUBLIC_EMAIL_PROVIDERS
from scamintel.core.resolver import is_public_email_handle, resolve_bank_accounts, resolve_upi_ids


class TestBankAccounts:
    """Test phone/bank-account disambiguation."""

    def test_phone_overlaps_dropped(self):
        """Test accounts equal to a phone, in any prefixed form, are dropped."""
        accounts = resolve_bank_accounts(
            ["9876543210", "50100234567890", "919876543210", "09876543210"],
            ["9876543210"],
            9,
        )
        assert accounts == ["50100234567890"]

    def test_short_runs_dropped(self):
        assert resolve_bank_accounts(["12345678", "123456789"], [], 9) == ["123456789"]

    def test_stricter_threshold(self):
        """Test the 12-digit policy rejects an 11-digit account."""
        assert resolve_bank_accounts(["123456789012", "12345678901"], [], 12) == ["123456789012"]

    def test_grouped_account_kept_verbatim(self):
        assert resolve_bank_accounts(["1234 5678 9012 3456"], [], 9) == ["1234 5678 9012 3456"]

    def test_duplicates_removed(self):
        assert resolve_bank_accounts(["50100234567890", "50100234567890"], [], 9) == ["50100234567890"]


class TestUpiIds:
    """Test UPI/email disambiguation."""

    def test_public_provider_handles_dropped(self):
        upis = resolve_upi_ids(
            ["scammer@oksbi", "user@gmail", "x@mypostmail", "dup@ybl"],
            ["dup@ybl"],
            PUBLIC_EMAIL_PROVIDERS,
        )
        assert upis == ["scammer@oksbi"]

    def test_provider_match(self):
        assert is_public_email_handle("user@Yahoo", PUBLIC_EMAIL_PROVIDERS)
        assert not is_public_email_handle("user@paytm", PUBLIC_EMAIL_PROVIDERS)
