"""
Normalization Configuration
Centralized configuration for field parsing, confidence scoring, and review thresholds
"""

NORMALIZATION_CONFIG = {
    # Confidence thresholds
    "confidence_thresholds": {
        "production": 0.70,  # Minimum overall score to skip manual review
        "review": 0.50,      # Fields below this are flagged for the reviewer
    },

    # Defaults applied when the OCR provider omits metadata
    "defaults": {
        "confidence": 1.0,
        "ocr_source": "ocr",
        "manual_source": "manual",
    },

    # Field weights for overall confidence (higher = more important)
    "field_weights": {
        # Identity
        "ssn": 3.0,
        "name": 2.5,
        "dateOfBirth": 2.5,

        # Income
        "grossIncome": 3.0,
        "netIncome": 2.5,
        "employerName": 2.0,

        # Financial
        "accountBalance": 2.5,
        "accountNumber": 2.0,

        # Address
        "address": 1.5,
        "city": 1.0,
        "state": 1.0,
        "zip": 1.0,

        "default": 1.0,
    },

    # Date parsing
    "dates": {
        "two_digit_year_pivot": 50,  # 00-49 -> 20xx, 50-99 -> 19xx
        "min_year": 1900,
        "max_year": 2100,
    },

    # Currency decoration stripped before the numeric core is read
    "currency": {
        "symbols": "$€£¥₹",
        "codes": ["USD", "EUR", "GBP", "CAD", "AUD"],
    },

    # Trailing name tokens treated as suffixes (compared lowercase, no period)
    "name_suffixes": ["jr", "sr", "ii", "iii", "iv", "v", "esq", "phd", "md"],

    # Leading words that mark an address segment as a unit designator
    "unit_designators": ["apt", "apartment", "unit", "suite", "ste", "#", "bldg", "building", "room", "rm", "fl", "floor"],

    # Parallel fan-out for the normalizer (1 = sequential)
    "normalizer": {
        "max_workers": 1,
    },
}
