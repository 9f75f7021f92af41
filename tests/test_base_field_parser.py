import pytest

from services.field_parsers import (
    clean_input,
    digits_or_none,
    lower_trimmed,
    pass_through,
    strip_spaces,
    to_title_case,
    upper_first_char,
    upper_trimmed,
)


def test_clean_input():
    assert clean_input("  JOHN   DOE \n") == "JOHN DOE"
    assert clean_input(50000.0) == "50000"
    assert clean_input(12.5) == "12.5"
    assert clean_input(42) == "42"


@pytest.mark.parametrize("value", [None, "", "   ", True, False])
def test_clean_input_blank(value):
    assert clean_input(value) is None


def test_to_title_case():
    assert to_title_case("JOHN DOE") == "John Doe"
    assert to_title_case("o'neil") == "O'Neil"
    assert to_title_case("MCKAY") == "McKay"
    assert to_title_case("mary-kate") == "Mary-Kate"


def test_simple_table_parsers():
    assert pass_through("  First National  ") == "First National"
    assert digits_or_none("Acct 12-34") == "1234"
    assert digits_or_none("n/a") is None
    assert strip_spaces(" D123 456 789 ") == "D123456789"
    assert lower_trimmed(" CHECKING ") == "checking"
    assert upper_trimmed(" blu ") == "BLU"
    assert upper_first_char("female") == "F"


@pytest.mark.parametrize("parser", [
    pass_through, digits_or_none, strip_spaces, lower_trimmed, upper_trimmed, upper_first_char,
])
def test_simple_table_parsers_blank(parser):
    assert parser(None) is None
    assert parser("  ") is None
