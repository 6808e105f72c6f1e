"""Unit tests for Pattern Library validation and injection."""

import re

import pytest

from scamintel.core.intelligence import IntelligenceEngine
from scamintel.core.patterns import (
    DEFAULT_LIBRARY,
    SCAM_RULES,
    ClassificationRule,
    PatternLibrary,
    PatternLibraryError,
)
from scamintel.schemas import ScamType, Tactic, ThreatType


class TestValidate:
    """Test library validation catches broken configuration."""

    def test_default_library_is_valid(self):
        assert DEFAULT_LIBRARY.validate() is DEFAULT_LIBRARY

    def test_non_compiled_rule(self):
        with pytest.raises(PatternLibraryError, match="non-compiled"):
            PatternLibrary(phone_rules=(r"\d{10}",)).validate()

    def test_empty_rule_group(self):
        with pytest.raises(PatternLibraryError, match="email_rules is empty"):
            PatternLibrary(email_rules=()).validate()

    def test_money_rule_without_amount_group(self):
        with pytest.raises(PatternLibraryError, match="amount"):
            PatternLibrary(money_rules=(re.compile(r"rs\d+"),)).validate()

    def test_non_positive_scale(self):
        with pytest.raises(PatternLibraryError, match="money scale"):
            PatternLibrary(money_scales={"lakh": 0}).validate()

    def test_upper_case_taxonomy_entry(self):
        with pytest.raises(PatternLibraryError, match="lower-case"):
            PatternLibrary(banks=("SBI",)).validate()

    def test_empty_taxonomy(self):
        with pytest.raises(PatternLibraryError, match="urgency_keywords is empty"):
            PatternLibrary(urgency_keywords=()).validate()

    def test_unknown_tactic_category(self):
        with pytest.raises(PatternLibraryError, match="tactic"):
            PatternLibrary(tactic_keywords=((Tactic.UNKNOWN, ("x",)),)).validate()

    def test_wrong_category_type_in_ordered_rules(self):
        rules = (ClassificationRule(ScamType.LOTTERY_SCAM, ("won",)),)
        with pytest.raises(PatternLibraryError, match="threat_rules"):
            PatternLibrary(threat_rules=rules).validate()

    def test_default_category_not_allowed(self):
        rules = (ClassificationRule(ThreatType.GENERIC, ("hello",)),)
        with pytest.raises(PatternLibraryError):
            PatternLibrary(threat_rules=rules).validate()

    def test_engine_rejects_invalid_library(self):
        with pytest.raises(PatternLibraryError):
            IntelligenceEngine(library=PatternLibrary(banks=()))

    def test_error_is_value_error(self):
        assert issubclass(PatternLibraryError, ValueError)


class TestInjection:
    """Test a substituted library changes behavior without code changes."""

    def test_custom_bank_taxonomy(self):
        engine = IntelligenceEngine(library=PatternLibrary(banks=("acme bank",)))
        assert engine.extract("This is Acme Bank calling").banksImpersonated == ["acme bank"]
        assert engine.extract("This is SBI calling").banksImpersonated == []

    def test_reordered_scam_rules(self):
        """Test precedence follows the rule list order."""
        lottery_first = (SCAM_RULES[1], SCAM_RULES[0]) + SCAM_RULES[2:]
        engine = IntelligenceEngine(library=PatternLibrary(scam_rules=lottery_first))
        text = "You won a prize, update your bank details"
        assert engine.extract(text).scamType == ScamType.LOTTERY_SCAM
        assert IntelligenceEngine().extract(text).scamType == ScamType.BANKING_FRAUD

    def test_library_version(self):
        assert PatternLibrary(version="2.0-test").version == "2.0-test"


def test_classification_rule_matches_substrings():
    rule = ClassificationRule(ScamType.JOB_SCAM, ("part time",))
    assert rule.matches("earn with part time work")
    assert not rule.matches("full time")
