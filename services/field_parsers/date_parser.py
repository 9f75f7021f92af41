"""
Date Parser
Normalizes the date formats seen on pay stubs, statements, and IDs to ISO YYYY-MM-DD
"""
import logging
import re
from datetime import date
from typing import Optional

from config.normalization_config import NORMALIZATION_CONFIG
from .base_field_parser import RawInput, clean_input

logger = logging.getLogger(__name__)

MONTH_NAMES = {
    'january': 1, 'jan': 1,
    'february': 2, 'feb': 2,
    'march': 3, 'mar': 3,
    'april': 4, 'apr': 4,
    'may': 5,
    'june': 6, 'jun': 6,
    'july': 7, 'jul': 7,
    'august': 8, 'aug': 8,
    'september': 9, 'sep': 9, 'sept': 9,
    'october': 10, 'oct': 10,
    'november': 11, 'nov': 11,
    'december': 12, 'dec': 12,
}

# Tried in order; the first pattern that matches decides the reading
ISO_RE = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})$')
US_SLASH_RE = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$')
US_DASH_RE = re.compile(r'^(\d{1,2})-(\d{1,2})-(\d{2}|\d{4})$')
MONTH_FIRST_RE = re.compile(r'^([A-Za-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})$')
DAY_FIRST_RE = re.compile(r'^(\d{1,2})\s+([A-Za-z]+)\.?,?\s+(\d{4})$')


def parse_date(value: RawInput) -> Optional[str]:
    """
    Parse a date string into ISO format

    Handles:
    - "2026-01-15" (ISO)
    - "01/15/2026", "1/15/26" (US, 2-digit years pivot at 50)
    - "01-15-2026" (US with dashes)
    - "January 15, 2026", "Jan 15 2026"
    - "15 January 2026"

    Args:
        value: Raw date value

    Returns:
        "YYYY-MM-DD", or None if unparseable or not a real calendar date
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    match = ISO_RE.match(cleaned)
    if match:
        year, month, day = match.groups()
        return _format_iso_date(int(year), int(month), int(day))

    for pattern in (US_SLASH_RE, US_DASH_RE):
        match = pattern.match(cleaned)
        if match:
            month, day, year = match.groups()
            return _format_iso_date(_expand_year(year), int(month), int(day))

    match = MONTH_FIRST_RE.match(cleaned)
    if match:
        month_name, day, year = match.groups()
        month = MONTH_NAMES.get(month_name.lower())
        if month is not None:
            return _format_iso_date(int(year), month, int(day))

    match = DAY_FIRST_RE.match(cleaned)
    if match:
        day, month_name, year = match.groups()
        month = MONTH_NAMES.get(month_name.lower())
        if month is not None:
            return _format_iso_date(int(year), month, int(day))

    logger.debug("Date value matched no known format")
    return None


def _expand_year(year: str) -> int:
    """Expand a 2-digit year: 00-49 -> 20xx, 50-99 -> 19xx"""
    value = int(year)
    if len(year) == 2:
        pivot = NORMALIZATION_CONFIG['dates']['two_digit_year_pivot']
        value += 1900 if value >= pivot else 2000
    return value


def _format_iso_date(year: int, month: int, day: int) -> Optional[str]:
    """Build a real calendar date; overflow such as Feb 30 is rejected"""
    config = NORMALIZATION_CONFIG['dates']
    if not config['min_year'] <= year <= config['max_year']:
        return None

    try:
        parsed = date(year, month, day)
    except ValueError:
        return None

    return parsed.isoformat()
