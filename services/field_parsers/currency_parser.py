"""Currency Parser for monetary amounts on W-2s, pay stubs, and statements"""
import logging
import re
from typing import Optional

from config.normalization_config import NORMALIZATION_CONFIG
from .base_field_parser import RawInput, clean_input, is_number

logger = logging.getLogger(__name__)

_SYMBOLS = NORMALIZATION_CONFIG['currency']['symbols']
_SYMBOL_RE = re.compile(f"[{re.escape(_SYMBOLS)}]")
_CODE_RE = re.compile(
    r'\s*(?:' + '|'.join(NORMALIZATION_CONFIG['currency']['codes']) + r')\s*',
    re.IGNORECASE
)
# "5", "5.25", "5." and ".50"
_NUMBER_RE = re.compile(r'^(?:\d+(?:\.\d*)?|\.\d+)$')


def parse_currency(value: RawInput) -> Optional[float]:
    """
    Parse a currency string into a float

    Handles:
    - "$1,234.56" -> 1234.56
    - "$1,234.56 USD" -> 1234.56
    - "(1,234.56)" -> -1234.56 (accounting negative)
    - "-$1,234.56" -> -1234.56
    - "€500", "£500"

    Args:
        value: Raw currency value

    Returns:
        Amount as float, or None if no numeric core remains after stripping
    """
    if is_number(value):
        return float(value)

    cleaned = clean_input(value)
    if cleaned is None:
        return None

    # Accounting-style negative
    negative = False
    if cleaned.startswith('(') and cleaned.endswith(')'):
        negative = True
        cleaned = cleaned[1:-1].strip()

    cleaned = _CODE_RE.sub('', cleaned)

    # Sign may sit before or after the symbol: "-$5" / "$-5"
    if cleaned.startswith('-'):
        negative = True
        cleaned = cleaned[1:]
    cleaned = _SYMBOL_RE.sub('', cleaned).strip()
    if cleaned.startswith('-'):
        negative = True
        cleaned = cleaned[1:]

    cleaned = cleaned.replace(',', '').replace(' ', '')

    if not _NUMBER_RE.match(cleaned):
        logger.debug("Currency value has no numeric core")
        return None

    amount = float(cleaned)
    return -amount if negative else amount


def format_currency(amount: Optional[float]) -> Optional[str]:
    """Render an amount as "$1,234.56" / "-$1,234.56" """
    if amount is None:
        return None
    sign = '-' if amount < 0 else ''
    return f"{sign}${abs(amount):,.2f}"
