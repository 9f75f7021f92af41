"""
Field Builder
Wraps a raw value, its parsed form, and confidence metadata into an ExtractedField
"""
import logging
from typing import Any, Callable, Optional

from config.normalization_config import NORMALIZATION_CONFIG
from models import ExtractedField, FieldConfidence, RawValue
from services.confidence_scorer import clamp_confidence

logger = logging.getLogger(__name__)

FieldParser = Callable[[RawValue], Optional[Any]]


def create_field(
    field_name: str,
    raw: RawValue,
    parser: FieldParser,
    confidence: Optional[float] = None,
    source: Optional[str] = None
) -> ExtractedField:
    """
    Build an ExtractedField from a raw value

    Args:
        field_name: Name of the field (e.g. "wagesTips")
        raw: Raw value from OCR or user entry
        parser: Parser applied to the raw value
        confidence: Confidence 0.0-1.0 (defaults to 1.0, clamped)
        source: Where the value came from (defaults to "manual")

    Returns:
        ExtractedField; `parsed` is None when raw is None or the parser rejects it
    """
    defaults = NORMALIZATION_CONFIG['defaults']
    if confidence is None:
        confidence = defaults['confidence']
    if source is None:
        source = defaults['manual_source']

    parsed = None
    if raw is not None:
        try:
            parsed = parser(raw)
        except Exception as e:
            # never log the raw value: it may be an SSN or account number
            logger.warning(f"Parser {getattr(parser, '__name__', parser)} failed for {field_name}: {type(e).__name__}")
            parsed = None

    return ExtractedField(
        field_name=field_name,
        raw=raw,
        parsed=parsed,
        confidence=FieldConfidence(value=clamp_confidence(confidence), source=source),
    )
