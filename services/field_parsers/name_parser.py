"""
Name Parser
Handles "LAST, FIRST" and "First [Middle] Last [Suffix]" orderings as printed on
W-2s, pay stubs, IDs, and statements
"""
import logging
from typing import List, Optional, Tuple

from config.normalization_config import NORMALIZATION_CONFIG
from models import ParsedName
from .base_field_parser import RawInput, clean_input, to_title_case

logger = logging.getLogger(__name__)

NAME_SUFFIXES = frozenset(NORMALIZATION_CONFIG['name_suffixes'])

# Display forms that plain title-casing would get wrong
_SUFFIX_DISPLAY = {
    'ii': 'II',
    'iii': 'III',
    'iv': 'IV',
    'v': 'V',
    'phd': 'PhD',
    'md': 'MD',
}


def parse_name(value: RawInput) -> Optional[ParsedName]:
    """
    Parse a personal name into components

    Examples:
        "SMITH, JOHN"       -> first="John", last="Smith", full="John Smith"
        "John Michael Doe"  -> first="John", middle="Michael", last="Doe"
        "john doe jr."      -> first="John", last="Doe", suffix="Jr."

    Returns:
        ParsedName, or None for empty / whitespace-only input
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    tokens, suffix = _split_tokens(cleaned)
    if not tokens:
        if suffix is None:
            return None
        # Only a suffix-looking token: read it as a given name
        tokens, suffix = [suffix], None

    first = to_title_case(tokens[0])
    middle = None
    last = ""
    if len(tokens) >= 2:
        last = to_title_case(tokens[-1])
    if len(tokens) >= 3:
        middle = to_title_case(' '.join(tokens[1:-1]))

    display_suffix = _display_suffix(suffix) if suffix else None
    full = ' '.join(part for part in (first, middle, last, display_suffix) if part)

    return ParsedName(first=first, middle=middle, last=last, suffix=display_suffix, full=full)


def normalize_name(value: RawInput) -> Optional[str]:
    """Full normalized name ("SMITH, JOHN" -> "John Smith")"""
    parsed = parse_name(value)
    return parsed.full if parsed else None


def _split_tokens(cleaned: str) -> Tuple[List[str], Optional[str]]:
    """
    Put name tokens into natural order and pull off a trailing suffix

    Returns:
        (tokens in First..Last order, raw suffix token or None)
    """
    segments = [s.strip() for s in cleaned.split(',') if s.strip()]

    # "John Doe, Jr." is natural order with a comma before the suffix
    if len(segments) >= 2 and all(_is_suffix(s) for s in segments[1:]):
        tokens = segments[0].split(' ') + segments[1].split(' ')
        return _pop_suffix(tokens)

    if len(segments) >= 2:
        last_part = segments[0].split(' ')
        given_part = ' '.join(segments[1:]).split(' ')

        given_part, suffix = _pop_suffix(given_part)
        if suffix is None and len(last_part) >= 2:
            # "SMITH JR, JOHN"
            last_part, suffix = _pop_suffix(last_part)
        return given_part + [' '.join(last_part)], suffix

    tokens = segments[0].split(' ') if segments else []
    return _pop_suffix(tokens)


def _pop_suffix(tokens: List[str]) -> Tuple[List[str], Optional[str]]:
    """Remove a suffix from the trailing position (only when a name remains)"""
    if len(tokens) >= 2 and _is_suffix(tokens[-1]):
        return tokens[:-1], tokens[-1]
    if len(tokens) == 1 and _is_suffix(tokens[0]):
        return [], tokens[0]
    return tokens, None


def _is_suffix(token: str) -> bool:
    return token.lower().rstrip('.') in NAME_SUFFIXES


def _display_suffix(token: str) -> str:
    key = token.lower().rstrip('.')
    period = '.' if token.endswith('.') else ''
    return _SUFFIX_DISPLAY.get(key, key.capitalize()) + period
