"""
Behavioral Classifier
======================
Derives behavioral signals from keyword-taxonomy hits:

- Urgency level      — count of distinct urgency keywords
- Tactic             — category with the strictly highest hit count
- Threat / scam type — first match of an ordered rule list
- Sophistication     — 0-4 score from four independent signals
- Credibility markers — independent flags, not mutually exclusive
- Suspicious keywords — taxonomy hits plus derived link/phone/credential flags

All matching is substring-based on lower-cased text except salutations,
which are case-sensitive.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple
from urllib.parse import urlsplit

from scamintel.core.patterns import ClassificationRule, PatternLibrary
from scamintel.schemas import (
    ScamType,
    SophisticationLevel,
    Tactic,
    ThreatType,
    UrgencyLevel,
)

# Derived flags appended to suspiciousKeywords
URL_SHORTENER_FLAG = "url_shortener_detected"
SUSPICIOUS_TLD_FLAG = "suspicious_tld_detected"
SUSPICIOUS_URL_PATTERN_FLAG = "suspicious_url_pattern"
MULTIPLE_PHONES_FLAG = "multiple_phone_numbers"
CREDENTIAL_REQUEST_FLAG = "credential_request_detected"


@dataclass
class Classification:
    urgency_level: UrgencyLevel = UrgencyLevel.LOW
    tactic: Tactic = Tactic.UNKNOWN
    threat_type: ThreatType = ThreatType.GENERIC
    scam_type: ScamType = ScamType.UNKNOWN
    sophistication: SophisticationLevel = SophisticationLevel.LOW
    credibility_markers: List[str] = field(default_factory=list)
    suspicious_keywords: List[str] = field(default_factory=list)
    banks: List[str] = field(default_factory=list)
    authorities: List[str] = field(default_factory=list)
    apps: List[str] = field(default_factory=list)


def find_matches(lowered: str, entries: Iterable[str]) -> List[str]:
    """Taxonomy entries occurring in the lower-cased text, in taxonomy order."""
    return [entry for entry in entries if entry in lowered]


# ==============================
# URGENCY & TACTIC
# ==============================

def classify_urgency(lowered: str, keywords: Sequence[str]) -> UrgencyLevel:
    hits = len(set(find_matches(lowered, keywords)))
    if hits >= 5:
        return UrgencyLevel.CRITICAL
    if hits >= 3:
        return UrgencyLevel.HIGH
    if hits >= 1:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def identify_tactic(lowered: str, tactic_keywords: Sequence[Tuple[Tactic, Sequence[str]]]) -> Tactic:
    """
    Pick the tactic with the strictly highest keyword count.

    Ties go to the tactic declared first; no hits at all means UNKNOWN.
    """
    best, best_hits = Tactic.UNKNOWN, 0
    for tactic, keywords in tactic_keywords:
        hits = len(find_matches(lowered, keywords))
        if hits > best_hits:
            best, best_hits = tactic, hits
    return best


def classify_ordered(lowered: str, rules: Sequence[ClassificationRule], default):
    """Return the category of the first matching rule, or the default."""
    for rule in rules:
        if rule.matches(lowered):
            return rule.category
    return default


# ==============================
# SOPHISTICATION & CREDIBILITY
# ==============================

def assess_sophistication(text: str, library: PatternLibrary) -> SophisticationLevel:
    lowered = text.lower()
    score = 0
    if library.formal_authority_rule.search(text):
        score += 1
    if library.reference_phrase_rule.search(text):
        score += 1
    if any(token in text for token in library.salutation_tokens):
        score += 1
    if library.link_rule.search(text) or find_matches(lowered, library.apps):
        score += 1

    if score >= 3:
        return SophisticationLevel.HIGH
    if score >= 2:
        return SophisticationLevel.MEDIUM
    return SophisticationLevel.LOW


def find_credibility_markers(text: str, rules: Sequence[Tuple[str, object]]) -> List[str]:
    return [marker for marker, rule in rules if rule.search(text)]


# ==============================
# SUSPICIOUS KEYWORDS
# ==============================

def _host(url: str) -> str:
    target = url if "://" in url else "//" + url
    try:
        return (urlsplit(target).hostname or "").lower()
    except ValueError:
        return ""


def _is_shortened(url: str, shorteners: Sequence[str]) -> bool:
    host = _host(url)
    if host.startswith("www."):
        host = host[4:]
    return any(host == s or host.endswith("." + s) for s in shorteners)


def _has_suspicious_tld(url: str, tlds: Sequence[str]) -> bool:
    host = _host(url)
    lowered = url.lower()
    return any(host.endswith(tld) or lowered.endswith(tld) for tld in tlds)


def find_suspicious_keywords(
    text: str,
    phishing_links: Sequence[str],
    phone_numbers: Sequence[str],
    library: PatternLibrary,
) -> List[str]:
    """
    Collect scam-indicator keywords and derived red-flag markers.

    Args:
        text: Original message text
        phishing_links: Links that survived allow-list filtering
        phone_numbers: Canonical phone numbers of the message
        library: Pattern Library in use

    Returns:
        Keyword hits followed by any derived flags
    """
    lowered = text.lower()
    keywords = find_matches(lowered, library.suspicious_keywords)

    if any(_is_shortened(url, library.url_shorteners) for url in phishing_links):
        keywords.append(URL_SHORTENER_FLAG)

    if any(_has_suspicious_tld(url, library.suspicious_tlds) for url in phishing_links):
        keywords.append(SUSPICIOUS_TLD_FLAG)

    if any(word in url.lower() for url in phishing_links for word in library.suspicious_url_words):
        keywords.append(SUSPICIOUS_URL_PATTERN_FLAG)

    if len(set(phone_numbers)) > 2:
        keywords.append(MULTIPLE_PHONES_FLAG)

    if library.credential_request_rule.search(text):
        keywords.append(CREDENTIAL_REQUEST_FLAG)

    return keywords


def classify_message(
    text: str,
    phishing_links: Sequence[str],
    phone_numbers: Sequence[str],
    library: PatternLibrary,
) -> Classification:
    """
    Run every classifier over one message.

    Args:
        text: Original message text
        phishing_links: Resolved links of the message
        phone_numbers: Resolved canonical phone numbers
        library: Pattern Library in use

    Returns:
        Classification with all behavioral signals filled in
    """
    lowered = text.lower()
    return Classification(
        urgency_level=classify_urgency(lowered, library.urgency_keywords),
        tactic=identify_tactic(lowered, library.tactic_keywords),
        threat_type=classify_ordered(lowered, library.threat_rules, ThreatType.GENERIC),
        scam_type=classify_ordered(lowered, library.scam_rules, ScamType.UNKNOWN),
        sophistication=assess_sophistication(text, library),
        credibility_markers=find_credibility_markers(text, library.credibility_rules),
        suspicious_keywords=find_suspicious_keywords(text, phishing_links, phone_numbers, library),
        banks=find_matches(lowered, library.banks),
        authorities=find_matches(lowered, library.authorities),
        apps=find_matches(lowered, library.apps),
    )
