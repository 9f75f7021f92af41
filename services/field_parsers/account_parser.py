"""Account Number Masker for bank statements and utility bills"""
import re
from typing import Optional

from .base_field_parser import RawInput, clean_input, digits_only
from .ssn_parser import MASK_PREFIX

# "Account:", "Acct #", "Account No." labels ahead of the number
_LABEL_RE = re.compile(r'^\s*(?:account|acct)\.?\s*(?:number|no\.?|#)?\s*[:#]?\s*', re.IGNORECASE)


def get_account_last4(value: RawInput) -> Optional[str]:
    """Last four digits of an account number, without the mask prefix"""
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    digits = digits_only(_LABEL_RE.sub('', cleaned))
    if len(digits) < 4:
        return None

    return digits[-4:]


def parse_account_number(value: RawInput) -> Optional[str]:
    """
    Mask an account number to "****NNNN"

    Accepts "1234567890", "****1234", "XXXX1234", "...1234", "Account: 1234567890"
    """
    last4 = get_account_last4(value)
    if last4 is None:
        return None
    return MASK_PREFIX + last4
