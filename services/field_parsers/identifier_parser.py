"""Identifier parsers: EINs, tax years, and hour counts"""
import re
from typing import Optional

from config.normalization_config import NORMALIZATION_CONFIG
from .base_field_parser import RawInput, clean_input, digits_only, is_number


def normalize_ein(value: RawInput) -> Optional[str]:
    """
    Normalize an Employer Identification Number to XX-XXXXXXX

    Repairs OCR spacing ("3 9 - 0 8 0 6 2 5 1" -> "39-0806251")
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    digits = digits_only(cleaned)
    if len(digits) != 9:
        return None

    return f"{digits[:2]}-{digits[2:]}"


def parse_tax_year(value: RawInput) -> Optional[str]:
    """Four-digit tax year ("Tax Year 2025" -> "2025"), within the accepted range"""
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    match = re.search(r'(?<!\d)(\d{4})(?!\d)', cleaned)
    if not match:
        return None

    year = int(match.group(1))
    config = NORMALIZATION_CONFIG['dates']
    if not config['min_year'] <= year <= config['max_year']:
        return None

    return match.group(1)


def parse_hours(value: RawInput) -> Optional[float]:
    """Hours worked ("80.00 hrs" -> 80.0); zero or unreadable -> None"""
    if is_number(value):
        return float(value) or None

    cleaned = clean_input(value)
    if cleaned is None:
        return None

    match = re.match(r'^(\d+(?:\.\d+)?)\s*(?:h|hr|hrs|hours)?\.?$', cleaned.replace(',', ''), re.IGNORECASE)
    if not match:
        return None

    return float(match.group(1)) or None
