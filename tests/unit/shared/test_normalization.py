from dispatch_advisor.shared.normalization import (
    contains_either_way,
    lower_or_empty,
    normalize_str_or_none,
    normalize_text,
)


def test_normalize_text_lowercases() -> None:
    assert normalize_text("Zeer Groot") == "zeer groot"

def test_normalize_text_collapses_whitespace_runs() -> None:
    assert normalize_text("zeer \t  groot") == "zeer groot"

def test_normalize_text_turns_periods_into_spaces() -> None:
    assert normalize_text("o.b.v. melding") == "o b v melding"

def test_normalize_text_collapses_mixed_periods_and_spaces() -> None:
    assert normalize_text("Gr. . ongeval") == "gr ongeval"

def test_normalize_text_trims() -> None:
    assert normalize_text("  groot. ") == "groot"

def test_normalize_text_none_is_empty() -> None:
    assert normalize_text(None) == ""

def test_lower_or_empty() -> None:
    assert lower_or_empty("WOH") == "woh"
    assert lower_or_empty(None) == ""

def test_contains_either_way() -> None:
    assert contains_either_way("groot", "zeer groot")
    assert contains_either_way("zeer groot", "groot")
    assert not contains_either_way("klein", "groot")

def test_contains_either_way_ignores_empty_sides() -> None:
    assert not contains_either_way("", "groot")
    assert not contains_either_way("groot", "")

def test_normalize_str_or_none() -> None:
    assert normalize_str_or_none("  Brand ") == "Brand"
    assert normalize_str_or_none("   ") is None
    assert normalize_str_or_none(None) is None
    assert normalize_str_or_none(12) == "12"
