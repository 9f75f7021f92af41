"""
SSN Masker and Validity Checker
The full number is never returned or logged; only the last four digits survive masking
"""
from typing import Optional

from .base_field_parser import RawInput, clean_input, digits_only

MASK_PREFIX = "****"

# SSA issuance rules
INVALID_AREAS = frozenset({"000", "666"})
INVALID_AREA_START = 900  # 900-999 are never issued
INVALID_GROUP = "00"
INVALID_SERIAL = "0000"
# Placeholder numbers seen on sample and advertising cards
INVALID_NUMBERS = frozenset({"111111111", "123456789"})


def mask_ssn(value: RawInput) -> Optional[str]:
    """
    Mask an SSN down to its last four digits

    "123-45-6789" -> "****6789", "XXX-XX-6789" -> "****6789"

    Returns:
        "****NNNN", or None when fewer than four digits are present
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    digits = digits_only(cleaned)
    if len(digits) < 4:
        return None

    return MASK_PREFIX + digits[-4:]


def is_valid_ssn_format(value: RawInput) -> bool:
    """
    Check a full, unmasked SSN against the SSA numbering rules

    Rejects anything that is not exactly 9 digits, area numbers 000, 666 and
    900-999, group 00, serial 0000, and the placeholder numbers 111-11-1111
    and 123-45-6789.
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return False

    digits = digits_only(cleaned)
    if len(digits) != 9:
        return False

    if digits in INVALID_NUMBERS:
        return False

    area, group, serial = digits[:3], digits[3:5], digits[5:]

    if area in INVALID_AREAS or int(area) >= INVALID_AREA_START:
        return False
    if group == INVALID_GROUP or serial == INVALID_SERIAL:
        return False

    return True
