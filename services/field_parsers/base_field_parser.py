"""
Shared helpers for field parsers
Every parser accepts the raw OCR value (str, number, or None) and returns
its normalized form, or None when the value cannot be parsed
"""
import re
from typing import Optional, Union

RawInput = Union[str, int, float, None]

_WHITESPACE_RE = re.compile(r'\s+')


def clean_input(value: RawInput) -> Optional[str]:
    """
    Convert a raw OCR value into a trimmed string

    Args:
        value: Raw value from the OCR provider

    Returns:
        Trimmed string with collapsed whitespace, or None for blank input
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, float):
        # 50000.0 -> "50000", keep real fractions as-is
        text = str(int(value)) if value.is_integer() else repr(value)
    else:
        text = str(value)

    text = _WHITESPACE_RE.sub(' ', text).strip()
    return text or None


def is_number(value: RawInput) -> bool:
    """True for real int/float values (bool excluded)"""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def digits_only(value: str) -> str:
    """Strip every non-digit character"""
    return re.sub(r'\D', '', value)


def to_title_case(text: str) -> str:
    """
    Title-case a name or place, handling Mc-, O'- and hyphenated names

    "MCDONALD" -> "McDonald", "o'brien" -> "O'Brien", "smith-jones" -> "Smith-Jones"
    """
    words = []
    for word in text.lower().split(' '):
        if not word:
            continue
        words.append('-'.join(_title_word(part) for part in word.split('-')))
    return ' '.join(words)


def _title_word(word: str) -> str:
    if not word:
        return word
    if word.startswith('mc') and len(word) > 2:
        return 'Mc' + word[2].upper() + word[3:]
    if "'" in word and len(word) > 2:
        prefix, _, rest = word.partition("'")
        return prefix[:1].upper() + prefix[1:] + "'" + rest[:1].upper() + rest[1:]
    return word[0].upper() + word[1:]


# Simple parsers used directly by the document field tables

def pass_through(value: RawInput) -> Optional[str]:
    """Trim and return; used for fields without a dedicated parser"""
    return clean_input(value)


def digits_or_none(value: RawInput) -> Optional[str]:
    """Keep only digits (e.g. EINs stored without a hyphen)"""
    text = clean_input(value)
    if text is None:
        return None
    return digits_only(text) or None


def strip_spaces(value: RawInput) -> Optional[str]:
    """Remove all whitespace (license and passport numbers)"""
    text = clean_input(value)
    if text is None:
        return None
    return text.replace(' ', '')


def lower_trimmed(value: RawInput) -> Optional[str]:
    text = clean_input(value)
    return text.lower() if text is not None else None


def upper_trimmed(value: RawInput) -> Optional[str]:
    text = clean_input(value)
    return text.upper() if text is not None else None


def upper_first_char(value: RawInput) -> Optional[str]:
    """First character, upper-cased ("female" -> "F")"""
    text = clean_input(value)
    return text[0].upper() if text is not None else None
