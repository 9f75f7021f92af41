"""
Address Parser
Splits a one-line US postal address into street, unit, city, state, and ZIP

Segmenting is comma-driven: a street line that itself contains commas
("100 Main St, Floor 2 Rear, ...") can be misread. Missing pieces are
returned empty rather than failing the whole address.

Without a ZIP, a trailing word that names a state is read as the state unless
the segment before it is a numbered street line: "12 Elm St, Washington" keeps
Washington as the city, but "Apt 4, Washington" still yields state WA. With a
ZIP and no comma, a street type that is also a state code ("123 Main Ct 78701")
is read as the state.
"""
import logging
import re
from typing import List, Optional, Tuple

from config.normalization_config import NORMALIZATION_CONFIG
from models import ParsedAddress
from .base_field_parser import RawInput, clean_input, to_title_case
from .state_normalizer import normalize_state

logger = logging.getLogger(__name__)

UNIT_DESIGNATORS = tuple(NORMALIZATION_CONFIG['unit_designators'])

ZIP_RE = re.compile(r'(?:^|(?<=[\s,]))(\d{5})(?:-(\d{4}))?\s*$')

_WORD_DESIGNATORS = '|'.join(re.escape(d) for d in UNIT_DESIGNATORS if d != '#')
# Unit ids carry a digit ("4", "2B") or are a single letter ("B")
_UNIT_ID = r'(?:[\w-]*\d[\w-]*|[A-Za-z])'
UNIT_SEGMENT_RE = re.compile(
    rf'^(?:(?:{_WORD_DESIGNATORS})\b\.?\s*#?\s*{_UNIT_ID}|#\s*{_UNIT_ID})$',
    re.IGNORECASE
)
UNIT_IN_STREET_RE = re.compile(
    rf'\s+((?:{_WORD_DESIGNATORS})\b\.?\s*#?\s*{_UNIT_ID}|#\s*{_UNIT_ID})$',
    re.IGNORECASE
)

# Longest state names are three words ("District of Columbia")
MAX_STATE_WORDS = 3


def parse_address(value: RawInput) -> Optional[ParsedAddress]:
    """
    Parse a one-line US address

    Example:
        "123 Main St, Apt 4, Boston, MA 02101"
        -> street="123 Main St", unit="Apt 4", city="Boston", state="MA", zip="02101"

    Returns:
        ParsedAddress (pieces that were not found are empty), or None when
        the input has nothing address-like in it
    """
    cleaned = clean_input(value)
    if cleaned is None or not re.search(r'[A-Za-z0-9]', cleaned):
        return None

    remaining, zip_code = _take_zip(cleaned)
    remaining, state = _take_state(remaining, anchored=bool(zip_code))

    parts = [p.strip() for p in remaining.split(',') if p.strip()]

    street, unit, city = "", None, ""
    if len(parts) >= 2:
        city = to_title_case(parts[-1])
        street_parts, unit = _take_unit_segment(parts[:-1])
        street = ', '.join(street_parts)
    elif parts and state and not parts[0][:1].isdigit():
        # "Boston, MA 02101": the only segment left is the city
        city = to_title_case(parts[0])
    elif parts:
        street = parts[0]

    if street and unit is None:
        match = UNIT_IN_STREET_RE.search(street)
        if match and match.start() > 0:
            unit = match.group(1)
            street = street[:match.start()].strip()

    state_zip = ' '.join(p for p in (state, zip_code) if p)
    full = ', '.join(p for p in (street, unit, city, state_zip) if p)

    if not street or not zip_code:
        logger.debug("Address parsed without street or ZIP")

    return ParsedAddress(street=street, unit=unit, city=city, state=state, zip=zip_code, full=full)


def normalize_address(value: RawInput) -> Optional[str]:
    """Canonical one-line rendering of an address"""
    parsed = parse_address(value)
    return parsed.full if parsed else None


def _take_zip(text: str) -> Tuple[str, str]:
    match = ZIP_RE.search(text)
    if not match:
        return text, ""
    zip_code = match.group(1) + (f"-{match.group(2)}" if match.group(2) else "")
    return _trim_tail(text[:match.start()]), zip_code


def _take_state(text: str, anchored: bool) -> Tuple[str, str]:
    """
    Peel a trailing state name or abbreviation off the last comma segment

    Without a ZIP to anchor on, a comma must precede the state token so a
    lone street line ("123 Washington") is never read as a state.
    """
    head, sep, last_segment = text.rpartition(',')
    words = last_segment.split()

    for count in range(min(MAX_STATE_WORDS, len(words)), 0, -1):
        candidate = ' '.join(words[-count:])
        state = normalize_state(candidate)
        if state is None:
            continue

        rest = ' '.join(words[:-count])
        if not anchored and not sep:
            return text, ""
        if not anchored and not rest and _looks_like_street(head):
            # "12 Elm St, Washington": a city that shares a state's name
            return text, ""
        if rest:
            return _trim_tail(f"{head}{sep} {rest}" if sep else rest), state
        return _trim_tail(head), state

    # A 2-letter token right before the ZIP is an unrecognized state, not the city
    if anchored and sep and words and len(words[-1]) == 2 and words[-1].isalpha():
        rest = ' '.join(words[:-1])
        if rest:
            return _trim_tail(f"{head}{sep} {rest}"), ""
        return _trim_tail(head), ""

    return text, ""


def _take_unit_segment(street_parts: List[str]) -> Tuple[List[str], Optional[str]]:
    """Pull a standalone unit segment ("Apt 4") out of the street segments"""
    for index in range(len(street_parts) - 1, 0, -1):
        if UNIT_SEGMENT_RE.match(street_parts[index]):
            unit = street_parts[index]
            return street_parts[:index] + street_parts[index + 1:], unit
    return street_parts, None


def _looks_like_street(segment: str) -> bool:
    return segment.rpartition(',')[2].strip()[:1].isdigit()


def _trim_tail(text: str) -> str:
    return text.strip().rstrip(',').strip()
