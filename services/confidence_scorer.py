"""
Confidence Scoring System
Folds per-field confidence scores into one overall score and flags fields for review
"""
from typing import Dict, List, Mapping, Optional
import logging
import math

from config.normalization_config import NORMALIZATION_CONFIG
from models import ExtractedField, NormalizedExtraction

logger = logging.getLogger(__name__)

DEFAULT_FIELD_WEIGHTS: Mapping[str, float] = NORMALIZATION_CONFIG['field_weights']


def clamp_confidence(value: float) -> float:
    """Clamp a confidence score into [0, 1]; NaN and infinities count as no confidence"""
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


def calculate_confidence(
    field_confidences: Mapping[str, float],
    weights: Optional[Mapping[str, float]] = None
) -> float:
    """
    Calculate overall confidence as a weighted mean

    Each score is clamped to [0, 1] first. A field's weight comes from
    `weights[name]`, then `weights["default"]`, then 1.0.

    Args:
        field_confidences: Field name -> confidence score
        weights: Field name -> weight (uses the configured weights if not provided)

    Returns:
        Overall confidence 0.0-1.0 (0.0 for empty input)

    Example:
        calculate_confidence({"name": 0.95, "ssn": 0.90, "address": 0.85})  # ~0.91
    """
    if not field_confidences:
        return 0.0

    weights = DEFAULT_FIELD_WEIGHTS if weights is None else weights
    default_weight = weights.get('default', 1.0)

    total_weight = 0.0
    weighted_sum = 0.0
    for field_name, confidence in field_confidences.items():
        weight = weights.get(field_name, default_weight)
        total_weight += weight
        weighted_sum += weight * clamp_confidence(confidence)

    if total_weight <= 0:
        return 0.0

    return clamp_confidence(weighted_sum / total_weight)


def calculate_fields_confidence(
    fields: Mapping[str, ExtractedField],
    weights: Optional[Mapping[str, float]] = None
) -> float:
    """Overall confidence over the fields that parsed; unparsed fields contribute nothing"""
    confidence_map = {
        name: field.confidence.value
        for name, field in fields.items()
        if field.parsed is not None
    }
    return calculate_confidence(confidence_map, weights)


class ConfidenceScorer:
    """Decides whether a normalized extraction needs manual review"""

    def __init__(self, config: Dict = None):
        """
        Initialize confidence scorer

        Args:
            config: Configuration dict (uses NORMALIZATION_CONFIG if not provided)
        """
        self.config = config or NORMALIZATION_CONFIG
        self.threshold = self.config['confidence_thresholds']['production']
        self.review_threshold = self.config['confidence_thresholds']['review']

    def passes_threshold(self, extraction: NormalizedExtraction) -> bool:
        """True when the extraction can be accepted without manual review"""
        return (
            extraction.overall_confidence >= self.threshold and
            not self.low_confidence_fields(extraction)
        )

    def low_confidence_fields(self, extraction: NormalizedExtraction) -> List[str]:
        """Fields that failed to parse or scored below the review threshold"""
        flagged = []
        for name, field in extraction.fields.items():
            if field.parsed is None or field.confidence.value < self.review_threshold:
                flagged.append(name)
        return flagged

    def get_review_reason(self, extraction: NormalizedExtraction) -> Optional[str]:
        """Human-readable reason for sending an extraction to review, or None"""
        if extraction.overall_confidence < self.threshold:
            return (
                f"Overall confidence ({extraction.overall_confidence:.2f}) "
                f"below threshold ({self.threshold})"
            )

        flagged = self.low_confidence_fields(extraction)
        if flagged:
            return "Fields need review: " + ", ".join(flagged)

        return None
