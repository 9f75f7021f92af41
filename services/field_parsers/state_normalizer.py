"""State Normalizer: full US state names and abbreviations to 2-letter codes"""
from types import MappingProxyType
from typing import Optional

from .base_field_parser import RawInput, clean_input

STATE_ABBREVIATIONS = MappingProxyType({
    'alabama': 'AL',
    'alaska': 'AK',
    'arizona': 'AZ',
    'arkansas': 'AR',
    'california': 'CA',
    'colorado': 'CO',
    'connecticut': 'CT',
    'delaware': 'DE',
    'florida': 'FL',
    'georgia': 'GA',
    'hawaii': 'HI',
    'idaho': 'ID',
    'illinois': 'IL',
    'indiana': 'IN',
    'iowa': 'IA',
    'kansas': 'KS',
    'kentucky': 'KY',
    'louisiana': 'LA',
    'maine': 'ME',
    'maryland': 'MD',
    'massachusetts': 'MA',
    'michigan': 'MI',
    'minnesota': 'MN',
    'mississippi': 'MS',
    'missouri': 'MO',
    'montana': 'MT',
    'nebraska': 'NE',
    'nevada': 'NV',
    'new hampshire': 'NH',
    'new jersey': 'NJ',
    'new mexico': 'NM',
    'new york': 'NY',
    'north carolina': 'NC',
    'north dakota': 'ND',
    'ohio': 'OH',
    'oklahoma': 'OK',
    'oregon': 'OR',
    'pennsylvania': 'PA',
    'rhode island': 'RI',
    'south carolina': 'SC',
    'south dakota': 'SD',
    'tennessee': 'TN',
    'texas': 'TX',
    'utah': 'UT',
    'vermont': 'VT',
    'virginia': 'VA',
    'washington': 'WA',
    'west virginia': 'WV',
    'wisconsin': 'WI',
    'wyoming': 'WY',
    'district of columbia': 'DC',
    # Territories
    'puerto rico': 'PR',
    'guam': 'GU',
    'virgin islands': 'VI',
    'american samoa': 'AS',
    'northern mariana islands': 'MP',
})

STATE_NAMES = MappingProxyType({code: name for name, code in STATE_ABBREVIATIONS.items()})


def normalize_state(value: RawInput) -> Optional[str]:
    """
    Normalize a state name or abbreviation

    "California" -> "CA", "ny" -> "NY", "XX" -> None
    """
    cleaned = clean_input(value)
    if cleaned is None:
        return None

    cleaned = cleaned.rstrip('.').lower()

    if len(cleaned) == 2 and cleaned.upper() in STATE_NAMES:
        return cleaned.upper()

    return STATE_ABBREVIATIONS.get(cleaned)


def state_name(code: RawInput) -> Optional[str]:
    """Title-cased full name for a 2-letter code ("NY" -> "New York")"""
    normalized = normalize_state(code)
    if normalized is None:
        return None
    return STATE_NAMES[normalized].title()
