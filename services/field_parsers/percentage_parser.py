"""Percentage Parser for rates (interest, tax, ownership)"""
import re
from typing import Optional

from .base_field_parser import RawInput, clean_input, is_number

_MARKER_RE = re.compile(r'\s*(?:%|percent)\s*$', re.IGNORECASE)
_NUMBER_RE = re.compile(r'^-?\d+(?:\.\d+)?$|^-?\.\d+$')


def parse_percentage(value: RawInput) -> Optional[float]:
    """
    Parse a percentage into percent units

    - "4.5%", "4.5 %", "4.5 percent" -> 4.5
    - "0.045" -> 4.5 (bare value <= 1 is a fraction of one)
    - "4.5", "50" -> already percent

    A bare "1" reads as 100%; the <= 1 threshold is kept as-is because
    downstream rate calculations depend on it.
    """
    if is_number(value):
        return _scale_bare(float(value))

    cleaned = clean_input(value)
    if cleaned is None:
        return None

    marked = _MARKER_RE.search(cleaned) is not None
    cleaned = _MARKER_RE.sub('', cleaned).replace(',', '').strip()

    if not _NUMBER_RE.match(cleaned):
        return None

    number = float(cleaned)
    if marked:
        return number
    return _scale_bare(number)


def _scale_bare(number: float) -> float:
    if 0 < number <= 1:
        # round away float noise: 0.045 * 100 = 4.499999...
        return round(number * 100, 10)
    return number
