"""
Pattern Library
================
Declarative rules and keyword taxonomies used by the intelligence engine.

Nothing in this module contains extraction logic. The module-level
constants are bundled into a frozen ``PatternLibrary`` value; the engine
receives a library at construction, so a different rule set (a newer
version, or a test double) can be swapped in without touching the
extractor, resolver or classifier.

Conventions the extractor relies on:
- A rule with a ``value`` named group yields that group, otherwise the
  whole match.
- Money rules carry an ``amount`` group and an optional ``scale`` group.
- Every keyword taxonomy is lower-case; it is matched against lower-cased
  text by substring containment.
- Threat and scam rules are ordered: the first matching rule wins.

Call ``PatternLibrary.validate()`` once at startup. A defective library is
a configuration error, not something the engine recovers from per message.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from scamintel.schemas import ScamType, Tactic, ThreatType


class PatternLibraryError(ValueError):
    """Raised when a Pattern Library fails validation."""


@dataclass(frozen=True)
class ClassificationRule:
    """One (predicate, category) entry of an ordered classification list.

    The predicate is disjunctive: the rule matches if any keyword occurs
    in the lower-cased message.
    """
    category: Enum
    keywords: Tuple[str, ...]

    def matches(self, lowered: str) -> bool:
        return any(kw in lowered for kw in self.keywords)


# ==============================
# ENTITY RULES
# ==============================

# --- Contact ---

# Indian mobile numbers: 9876543210, +91 98765 43210, 919876543210, 09876543210
# Standalone only: never inside "TXN9876543210", "ORD-9876543210" or a hex wallet
PHONE_RULES = (
    re.compile(r"(?<![\w\-])(?:\+?91[\s\-]?|0)?[6-9]\d{4}[\s\-]?\d{5}(?!\w)"),
)

EMAIL_RULES = (
    re.compile(r"\b[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}\b"),
)

# Loose form catches any user@handle; the dotted form catches
# first.last@handle names. Neither may be followed by a domain tail,
# which keeps "support@sbi-help.com" out of the UPI candidates.
UPI_RULES = (
    re.compile(r"(?<![\w.\-])[a-zA-Z0-9._\-]{2,}@[a-zA-Z]{2,}(?![\w\-]|\.[a-zA-Z0-9])"),
    re.compile(
        r"(?<![\w.\-])[a-zA-Z][a-zA-Z0-9]*(?:\.[a-zA-Z][a-zA-Z0-9]*)+@[a-zA-Z]{2,}"
        r"(?![\w\-]|\.[a-zA-Z0-9])"
    ),
)

URL_RULES = (
    re.compile(r"https?://[^\s\"'<>]+", re.IGNORECASE),
    # Protocol-less links such as "secure-sbi.net/login"; never inside a
    # query string, and the first label needs a letter ("2.0.com" is not a host)
    re.compile(
        r"(?<![@\w.\-/:=?&])(?:www\.)?(?=[a-z0-9\-]*[a-z])[a-z0-9][a-z0-9\-]*(?:\.[a-z0-9\-]+)*"
        r"\.(?:com|net|org|info|in|co|io|me|xyz|top|click|link|online|site|live|club|"
        r"work|buzz|tk|ml|ga|cf|gq|win|loan|racing|stream|trade|webcam|download)\b"
        r"(?:/[^\s\"'<>]*)?",
        re.IGNORECASE,
    ),
)

# --- Financial ---

BANK_ACCOUNT_RULES = (
    # Standalone only, like phones: "ORD-5566778899" is a reference, not an account
    re.compile(r"(?<![\w\-])\d{9,18}\b"),
    # Grouped: 1234 5678 9012 3456 / 1234-5678-9012
    re.compile(r"\b\d{4}[\s\-]\d{4}[\s\-]\d{4}(?:[\s\-]\d{1,6})?\b"),
)

IFSC_RULES = (
    re.compile(r"\b[A-Z]{4}0[A-Z0-9]{6}\b"),
)

CRYPTO_WALLET_RULES = (
    re.compile(r"\b(?:bc1|0x|3)[a-zA-Z0-9]{25,42}\b"),
)

_AMOUNT = r"(?P<amount>(?:\d{1,3}(?:,\d{2,3})+|\d+)(?:\.\d+)?)"

MONEY_RULES = (
    # Currency first: Rs 5,000 / ₹2 lakh / INR 1500
    re.compile(
        r"(?:\b(?:rs\.?|inr)|₹)\s*" + _AMOUNT + r"(?:\s*(?P<scale>thousand|lakhs?|lacs?|crores?)\b)?",
        re.IGNORECASE,
    ),
    # Scale or currency word after the number: 5 lakh / 20,000 rupees
    re.compile(
        r"(?<![\d,.])" + _AMOUNT + r"\s*(?:(?P<scale>thousand|lakhs?|lacs?|crores?)\b|(?:rupees?|rs)\b)",
        re.IGNORECASE,
    ),
)

MONEY_SCALES = {
    "thousand": 1_000,
    "lakh": 100_000,
    "lac": 100_000,
    "crore": 10_000_000,
}

# --- References ---

# "<label> [id|no|number|#] [:|#| - ] [is] <value>"; a hyphen glued to the
# label ("CASE-123456") belongs to the value, which must carry a digit
_REF_CONNECTOR = r"(?:id|no\.?|number|#)?(?:\s*[:#]|\s+-)?\s*(?:is\s+)?"
_REF_VALUE = r"(?P<value>(?=[A-Z0-9\-]*\d)[A-Z0-9][A-Z0-9\-]{5,19})\b"

TRANSACTION_ID_RULES = (
    re.compile(
        r"\b(?:txn|transaction|utr|ref|reference|ticket|case)\b\.?\s*" + _REF_CONNECTOR + _REF_VALUE,
        re.IGNORECASE,
    ),
    re.compile(r"\b(?P<value>(?:TXN|UTR|REF|CASE)-?\d{6,20})\b"),
)

ORDER_ID_RULES = (
    re.compile(
        r"\b(?:order|invoice|bill)\b\s*" + _REF_CONNECTOR
        + r"(?P<value>(?=[A-Z0-9\-]*\d)[A-Z0-9][A-Z0-9\-]{5,14})\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?P<value>(?:ORD|INV)-?\d{4,15})\b"),
)

CREDENTIAL_REQUEST_RULE = re.compile(
    r"\b(?:share|send|enter|provide|give)\b.*?\b(?:otp|password|pin|cvv)\b",
    re.IGNORECASE,
)


# ==============================
# ALLOW-LISTS & URL HEURISTICS
# ==============================

# An @-handle starting with or containing one of these is an email, not UPI
PUBLIC_EMAIL_PROVIDERS = (
    "gmail", "yahoo", "hotmail", "outlook", "mail", "protonmail",
)

LEGITIMATE_DOMAINS = (
    "sbi.co.in", "onlinesbi.com", "hdfcbank.com", "icicibank.com",
    "axisbank.com", "kotakbank.com", "yesbank.in", "pnbindia.in",
    "bankofbaroda.in", "canarabank.com", "unionbankofindia.co.in",
    "indianbank.in", "bankofindia.co.in", "boi.co.in",
    "paytm.com", "phonepe.com", "googlepay.com", "amazon.in",
)

URL_SHORTENERS = (
    "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly",
    "buff.ly", "rebrand.ly", "cutt.ly", "is.gd", "short.io",
    "tiny.cc", "cli.gs", "pic.gd", "migre.me", "ff.im",
    "tiny.pl", "url4.eu", "tr.im", "twit.ac", "su.pr",
    "twurl.nl", "snipurl.com", "short.to", "ping.fm",
    "post.ly", "bkite.com", "snipr.com", "fic.kr",
    "loopt.us", "doiop.com", "twitthis.com", "htxt.it",
    "short.ie", "kl.am", "wp.me", "rubyurl.com",
    "to.ly", "bit.do", "lnkd.in", "db.tt", "qr.ae",
    "adf.ly", "cur.lv", "ity.im", "q.gs", "v.gd",
)

SUSPICIOUS_TLDS = (
    ".tk", ".ml", ".ga", ".cf", ".gq",
    ".click", ".link", ".download", ".loan", ".racing",
    ".stream", ".trade", ".webcam", ".win", ".zip",
    ".top", ".buzz", ".club", ".work", ".online",
)

SUSPICIOUS_URL_WORDS = ("secure", "verify", "login", "account")


# ==============================
# IMPERSONATION TAXONOMIES
# ==============================

BANKS = (
    "sbi", "hdfc", "icici", "axis", "kotak", "pnb", "canara", "bob",
    "union bank", "indian bank", "idbi", "yes bank", "indusind",
)

AUTHORITIES = (
    "police", "cyber cell", "cyber crime", "cbi", "enforcement directorate",
    "income tax", "rbi", "sebi", "customs", "narcotics",
    "supreme court", "high court", "magistrate", "judge", "microsoft",
)

# Remote-access tools first, then payment apps
APPS = (
    "teamviewer", "anydesk", "quicksupport", "remotely", "supremo",
    "chrome remote", "ammyy", "ultraviewer", "rustdesk",
    "paytm", "phonepe", "gpay", "google pay", "bhim", "whatsapp pay",
)


# ==============================
# BEHAVIORAL TAXONOMIES
# ==============================

URGENCY_KEYWORDS = (
    "urgent", "immediately", "right now", "within 24 hours", "today only",
    "last chance", "final warning", "expire", "block", "suspend", "freeze",
    "arrest warrant", "legal action", "court case", "fine", "penalty",
)

# Declaration order breaks ties between equally-scored tactics
TACTIC_KEYWORDS = (
    (Tactic.FEAR, ("arrest", "warrant", "police", "jail", "court", "illegal", "fraud case")),
    (Tactic.GREED, ("won", "prize", "lottery", "reward", "cashback", "bonus", "offer")),
    (Tactic.URGENCY, ("immediately", "urgent", "expire", "last chance", "within")),
    (Tactic.AUTHORITY, ("officer", "government", "official", "department", "ministry")),
    (Tactic.TRUST, ("verify", "confirm", "update", "kyc", "secure", "protect")),
)

THREAT_RULES = (
    ClassificationRule(ThreatType.LEGAL_THREAT, ("arrest", "warrant", "police", "jail", "court")),
    ClassificationRule(ThreatType.ACCOUNT_THREAT, ("block", "suspend", "freeze", "close")),
    ClassificationRule(ThreatType.TIME_PRESSURE, ("expire", "deadline", "last chance")),
    ClassificationRule(ThreatType.FALSE_REWARD, ("won", "prize", "reward", "lottery")),
)

SCAM_RULES = (
    ClassificationRule(ScamType.BANKING_FRAUD, ("kyc", "aadhar", "aadhaar", "pan card", "pan number", "bank", "account")),
    ClassificationRule(ScamType.LOTTERY_SCAM, ("lottery", "won", "prize", "gift")),
    ClassificationRule(ScamType.JOB_SCAM, ("job", "work from home", "part time")),
    ClassificationRule(ScamType.TECH_SUPPORT, ("teamviewer", "anydesk", "remote")),
    ClassificationRule(ScamType.PARCEL_SCAM, ("parcel", "customs", "courier")),
    ClassificationRule(ScamType.UTILITY_SCAM, ("electricity", "gas", "water", "bill")),
    ClassificationRule(ScamType.INVESTMENT_FRAUD, ("investment", "trading", "crypto")),
)

# --- Sophistication signals ---

FORMAL_AUTHORITY_RULE = re.compile(r"official|government|department|authority", re.IGNORECASE)
REFERENCE_PHRASE_RULE = re.compile(r"case|ticket|reference|transaction", re.IGNORECASE)
LINK_RULE = re.compile(r"https?://", re.IGNORECASE)

# Matched case-sensitively against the original text
SALUTATION_TOKENS = ("Dear", "Sir", "Madam")

CREDIBILITY_RULES = (
    ("FAKE_CREDENTIALS", re.compile(r"employee id|officer name|badge number", re.IGNORECASE)),
    ("AUTHORITY_CLAIM", re.compile(r"official website|government portal", re.IGNORECASE)),
    ("REFERENCE_NUMBER", re.compile(r"case number|complaint id|ticket", re.IGNORECASE)),
    ("TIME_PRESSURE", re.compile(r"within \d+ hours|today|immediately", re.IGNORECASE)),
)

# --- Suspicious keyword taxonomy ---

SUSPICIOUS_KEYWORDS = (
    # Urgency & time pressure
    "urgent", "immediately", "within 24 hours", "within 48 hours",
    "action required", "respond now", "act now", "time sensitive",
    "last warning", "final notice", "expire", "expires today",
    "limited time", "hurry", "quick", "fast", "asap",

    # Verification & account threats
    "verify now", "verify your account", "verification required",
    "confirm your identity", "re-verify", "update required",
    "account suspended", "account blocked", "account locked",
    "account deactivated", "account terminated", "unauthorized activity",
    "unusual activity", "suspicious activity", "security alert",
    "kyc expired", "kyc pending", "kyc verification",

    # Financial threats
    "payment pending", "payment failed", "transaction failed",
    "pay now", "pay immediately", "transfer now", "transfer funds",
    "refund pending", "refund available", "tax refund",
    "prize money", "lottery", "winner", "congratulations",
    "cashback", "bonus", "reward", "claim now",
    "registration fee", "processing fee", "activation fee",
    "penalty", "fine", "overdue", "outstanding balance",

    # Banking & UPI
    "unlinked", "link expired", "manual sync", "re-link",
    "upi blocked", "upi deactivated", "pension credit",
    "mandate", "rbi mandate", "regulatory block", "compliance",
    "aadhar", "aadhaar", "pan card", "kyc documents",

    # Authority impersonation
    "official", "government", "income tax", "irs", "tax authority",
    "police", "cyber crime", "legal action", "court notice",
    "arrest warrant", "case filed", "fir", "investigation",
    "rbi", "reserve bank", "sebi", "uidai",

    # Tech support
    "anydesk", "teamviewer", "remote access", "screen share",
    "download app", "install app", "apk file", "update app",
    "tech support", "customer care", "helpline",
    "quick support", "instant help",

    # Credential theft
    "otp", "one time password", "verification code",
    "share otp", "send otp", "enter otp", "confirm otp",
    "password", "pin", "cvv", "card details",
    "banking details", "account details", "personal information",

    # Modern lures
    "ai verification", "biometric update", "face verification",
    "whatsapp verification", "telegram verification",
    "nft", "crypto", "bitcoin", "investment opportunity",
    "trading bot", "forex", "stock tips",
    "zoom meeting", "google meet", "online interview",
    "work from home", "job offer", "recruitment",
    "package delivery", "courier", "redelivery fee",
    "customs clearance", "import duty",
    "click here", "tap here", "swipe up", "link in bio",
    "exclusive offer", "limited seats", "vip access",
    "free gift", "free trial", "risk free",

    # Brand impersonation
    "amazon", "flipkart", "paytm", "phonepe", "google pay",
    "gpay", "netflix", "prime video", "hotstar",
    "tata", "reliance", "airtel", "jio", "vodafone",
    "sbi", "hdfc", "icici", "axis", "kotak",
    "income tax department", "gst portal", "epfo",

    # Social engineering
    "help needed", "family emergency", "medical emergency",
    "accident", "hospital", "medicine",
    "you won", "selected", "eligible",
    "claim your", "redeem now", "activate now",
    "don't ignore", "important", "confidential",
)


# ==============================
# LIBRARY VALUE
# ==============================

_SAMPLE_TEXT = (
    "Dear Sir, call +91 98765 43210 or mail help@example.com, pay scammer.fraud@oksbi "
    "Rs 5,000 or 2 lakh to account 50100234567890 IFSC SBIN0001234, "
    "order ORD12345678, txn id TXN9876543, visit https://bit.ly/x now."
)


@dataclass(frozen=True)
class PatternLibrary:
    """
    Versioned bundle of every rule and taxonomy the engine consults.

    Frozen so one library value can be shared across threads and
    conversations.
    """
    version: str = "1.0"

    phone_rules: Tuple[re.Pattern, ...] = PHONE_RULES
    email_rules: Tuple[re.Pattern, ...] = EMAIL_RULES
    upi_rules: Tuple[re.Pattern, ...] = UPI_RULES
    url_rules: Tuple[re.Pattern, ...] = URL_RULES
    bank_account_rules: Tuple[re.Pattern, ...] = BANK_ACCOUNT_RULES
    ifsc_rules: Tuple[re.Pattern, ...] = IFSC_RULES
    crypto_wallet_rules: Tuple[re.Pattern, ...] = CRYPTO_WALLET_RULES
    money_rules: Tuple[re.Pattern, ...] = MONEY_RULES
    money_scales: Dict[str, int] = field(default_factory=lambda: dict(MONEY_SCALES), hash=False)
    transaction_id_rules: Tuple[re.Pattern, ...] = TRANSACTION_ID_RULES
    order_id_rules: Tuple[re.Pattern, ...] = ORDER_ID_RULES
    credential_request_rule: re.Pattern = CREDENTIAL_REQUEST_RULE

    public_email_providers: Tuple[str, ...] = PUBLIC_EMAIL_PROVIDERS
    legitimate_domains: Tuple[str, ...] = LEGITIMATE_DOMAINS
    url_shorteners: Tuple[str, ...] = URL_SHORTENERS
    suspicious_tlds: Tuple[str, ...] = SUSPICIOUS_TLDS
    suspicious_url_words: Tuple[str, ...] = SUSPICIOUS_URL_WORDS

    banks: Tuple[str, ...] = BANKS
    authorities: Tuple[str, ...] = AUTHORITIES
    apps: Tuple[str, ...] = APPS

    urgency_keywords: Tuple[str, ...] = URGENCY_KEYWORDS
    tactic_keywords: Tuple[Tuple[Tactic, Tuple[str, ...]], ...] = TACTIC_KEYWORDS
    threat_rules: Tuple[ClassificationRule, ...] = THREAT_RULES
    scam_rules: Tuple[ClassificationRule, ...] = SCAM_RULES
    suspicious_keywords: Tuple[str, ...] = SUSPICIOUS_KEYWORDS

    formal_authority_rule: re.Pattern = FORMAL_AUTHORITY_RULE
    reference_phrase_rule: re.Pattern = REFERENCE_PHRASE_RULE
    link_rule: re.Pattern = LINK_RULE
    salutation_tokens: Tuple[str, ...] = SALUTATION_TOKENS
    credibility_rules: Tuple[Tuple[str, re.Pattern], ...] = CREDIBILITY_RULES

    def validate(self) -> "PatternLibrary":
        """
        Check the library is usable before serving any message.

        Every rule must be a compiled pattern that scans a sample text,
        money rules must expose an ``amount`` group, taxonomies must be
        non-empty lower-case strings and ordered rule lists must carry
        categories of the right type.

        Returns:
            The library itself, so construction can be chained

        Raises:
            PatternLibraryError: On the first defect found
        """
        rule_groups = {
            "phone_rules": self.phone_rules,
            "email_rules": self.email_rules,
            "upi_rules": self.upi_rules,
            "url_rules": self.url_rules,
            "bank_account_rules": self.bank_account_rules,
            "ifsc_rules": self.ifsc_rules,
            "crypto_wallet_rules": self.crypto_wallet_rules,
            "money_rules": self.money_rules,
            "transaction_id_rules": self.transaction_id_rules,
            "order_id_rules": self.order_id_rules,
            "credential_request_rule": (self.credential_request_rule,),
            "formal_authority_rule": (self.formal_authority_rule,),
            "reference_phrase_rule": (self.reference_phrase_rule,),
            "link_rule": (self.link_rule,),
            "credibility_rules": tuple(rule for _, rule in self.credibility_rules),
        }
        for name, rules in rule_groups.items():
            if not rules:
                raise PatternLibraryError(f"{name} is empty")
            for rule in rules:
                _check_rule(name, rule)

        for rule in self.money_rules:
            if "amount" not in rule.groupindex:
                raise PatternLibraryError(f"money rule {rule.pattern!r} has no 'amount' group")

        for scale, multiplier in self.money_scales.items():
            if not isinstance(multiplier, int) or multiplier <= 0:
                raise PatternLibraryError(f"money scale {scale!r} must be a positive integer")

        taxonomies = {
            "public_email_providers": self.public_email_providers,
            "legitimate_domains": self.legitimate_domains,
            "url_shorteners": self.url_shorteners,
            "suspicious_tlds": self.suspicious_tlds,
            "suspicious_url_words": self.suspicious_url_words,
            "banks": self.banks,
            "authorities": self.authorities,
            "apps": self.apps,
            "urgency_keywords": self.urgency_keywords,
            "suspicious_keywords": self.suspicious_keywords,
        }
        for tactic, keywords in self.tactic_keywords:
            if not isinstance(tactic, Tactic) or tactic is Tactic.UNKNOWN:
                raise PatternLibraryError(f"invalid tactic category {tactic!r}")
            taxonomies[f"tactic_keywords[{tactic.value}]"] = keywords
        for name, entries in taxonomies.items():
            _check_taxonomy(name, entries)

        _check_ordered_rules("threat_rules", self.threat_rules, ThreatType, ThreatType.GENERIC)
        _check_ordered_rules("scam_rules", self.scam_rules, ScamType, ScamType.UNKNOWN)

        if not self.salutation_tokens:
            raise PatternLibraryError("salutation_tokens is empty")

        return self


def _check_rule(name: str, rule) -> None:
    if not isinstance(rule, re.Pattern):
        raise PatternLibraryError(f"{name} contains a non-compiled rule: {rule!r}")
    try:
        rule.findall(_SAMPLE_TEXT)
    except (re.error, RecursionError) as e:
        raise PatternLibraryError(f"{name} rule {rule.pattern!r} failed on sample text: {e}") from e


def _check_taxonomy(name: str, entries: Tuple[str, ...]) -> None:
    if not entries:
        raise PatternLibraryError(f"{name} is empty")
    for entry in entries:
        if not isinstance(entry, str) or not entry or entry != entry.lower():
            raise PatternLibraryError(f"{name} entry {entry!r} must be a non-empty lower-case string")


def _check_ordered_rules(name: str, rules, category_type, default) -> None:
    if not rules:
        raise PatternLibraryError(f"{name} is empty")
    for rule in rules:
        if not isinstance(rule, ClassificationRule):
            raise PatternLibraryError(f"{name} entry {rule!r} is not a ClassificationRule")
        if not isinstance(rule.category, category_type) or rule.category is default:
            raise PatternLibraryError(f"{name} has invalid category {rule.category!r}")
        _check_taxonomy(f"{name}[{rule.category.value}]", rule.keywords)


DEFAULT_LIBRARY = PatternLibrary()
