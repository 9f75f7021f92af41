"""
Field Parsers Package
"""
from .base_field_parser import (
    clean_input,
    digits_or_none,
    lower_trimmed,
    pass_through,
    strip_spaces,
    to_title_case,
    upper_first_char,
    upper_trimmed,
)
from .currency_parser import parse_currency, format_currency
from .date_parser import parse_date
from .percentage_parser import parse_percentage
from .ssn_parser import mask_ssn, is_valid_ssn_format
from .account_parser import parse_account_number, get_account_last4
from .state_normalizer import normalize_state, state_name
from .name_parser import parse_name, normalize_name
from .address_parser import parse_address, normalize_address
from .identifier_parser import normalize_ein, parse_tax_year, parse_hours

__all__ = [
    'clean_input',
    'digits_or_none',
    'lower_trimmed',
    'pass_through',
    'strip_spaces',
    'to_title_case',
    'upper_first_char',
    'upper_trimmed',
    'parse_currency',
    'format_currency',
    'parse_date',
    'parse_percentage',
    'mask_ssn',
    'is_valid_ssn_format',
    'parse_account_number',
    'get_account_last4',
    'normalize_state',
    'state_name',
    'parse_name',
    'normalize_name',
    'parse_address',
    'normalize_address',
    'normalize_ein',
    'parse_tax_year',
    'parse_hours',
]
