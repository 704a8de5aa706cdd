import pytest

from carecoord.services.severity import (
    HIGH_SEVERITY_TERMS,
    LOW_SEVERITY_TERMS,
    Severity,
    classify_severity,
)


@pytest.mark.parametrize("term", HIGH_SEVERITY_TERMS)
def test_each_high_term_is_high(term):
    assert classify_severity(f"Combination carries {term} risk") is Severity.HIGH


@pytest.mark.parametrize("term", LOW_SEVERITY_TERMS)
def test_each_low_term_is_low(term):
    assert classify_severity(f"Only a {term} change in absorption") is Severity.LOW


@pytest.mark.parametrize("description", [
    "Severe risk of bleeding",
    "SERIOUS hypotension",
    "Avoid combination; mild sedation also reported",
    "A minor but Contraindicated pairing",
])
def test_high_terms_win_over_low_terms_case_insensitively(description):
    assert classify_severity(description) is Severity.HIGH


@pytest.mark.parametrize("description", [
    "",
    None,
    "The serum concentration of warfarin can be increased.",
    "   ",
])
def test_no_keyword_defaults_to_medium(description):
    assert classify_severity(description) is Severity.MEDIUM


def test_substring_match_counts_inside_words():
    assert classify_severity("Mildly increased exposure") is Severity.LOW
    assert classify_severity("Seriously increased exposure") is Severity.HIGH


def test_severity_values_are_the_wire_strings():
    assert [s.value for s in Severity] == ["high", "medium", "low"]
