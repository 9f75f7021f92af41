from datetime import datetime, timezone

import pytest

from models import NormalizedExtraction
from services.confidence_scorer import (
    ConfidenceScorer,
    calculate_confidence,
    calculate_fields_confidence,
    clamp_confidence,
)
from services.field_builder import create_field
from services.field_parsers import parse_currency


def _extraction(fields, overall):
    return NormalizedExtraction(
        document_type="w2",
        fields={field.field_name: field for field in fields},
        overall_confidence=overall,
        extracted_at=datetime(2026, 1, 15, tzinfo=timezone.utc),
    )


def test_calculate_confidence_empty_is_zero():
    assert calculate_confidence({}) == 0.0
    assert calculate_confidence({}, {"default": 1.0}) == 0.0


def test_calculate_confidence_equal_weights_is_plain_mean():
    assert calculate_confidence({"a": 0.8, "b": 0.6}, weights={}) == pytest.approx(0.7)


def test_calculate_confidence_uses_field_and_default_weights():
    result = calculate_confidence({"a": 1.0, "b": 0.0}, weights={"a": 3.0, "default": 1.0})
    assert result == pytest.approx(0.75)


def test_calculate_confidence_configured_weights():
    result = calculate_confidence({"name": 0.95, "ssn": 0.90, "address": 0.85})
    assert result == pytest.approx(6.35 / 7.0)


def test_calculate_confidence_clamps_scores():
    assert calculate_confidence({"a": 1.5, "b": -0.5}, weights={}) == pytest.approx(0.5)
    assert calculate_confidence({"a": 7.0}, weights={}) == 1.0


def test_calculate_confidence_zero_total_weight():
    assert calculate_confidence({"a": 0.9}, weights={"default": 0.0}) == 0.0


def test_clamp_confidence():
    assert clamp_confidence(-1) == 0.0
    assert clamp_confidence(0.42) == 0.42
    assert clamp_confidence(2) == 1.0


def test_calculate_fields_confidence_skips_unparsed_fields():
    fields = {
        "wagesTips": create_field("wagesTips", "$50,000.00", parse_currency, 0.9),
        "federalTaxWithheld": create_field("federalTaxWithheld", "unreadable", parse_currency, 0.1),
    }
    assert calculate_fields_confidence(fields, weights={}) == pytest.approx(0.9)


def test_calculate_fields_confidence_nothing_parsed():
    fields = {"wagesTips": create_field("wagesTips", None, parse_currency, 0.9)}
    assert calculate_fields_confidence(fields) == 0.0


def test_scorer_passes_confident_extraction():
    scorer = ConfidenceScorer()
    extraction = _extraction([create_field("wagesTips", "$100", parse_currency, 0.95)], 0.95)

    assert scorer.passes_threshold(extraction)
    assert scorer.low_confidence_fields(extraction) == []
    assert scorer.get_review_reason(extraction) is None


def test_scorer_flags_low_overall_confidence():
    scorer = ConfidenceScorer()
    extraction = _extraction([create_field("wagesTips", "$100", parse_currency, 0.6)], 0.6)

    assert not scorer.passes_threshold(extraction)
    assert "below threshold" in scorer.get_review_reason(extraction)


def test_scorer_flags_unparsed_and_low_fields():
    scorer = ConfidenceScorer()
    extraction = _extraction([
        create_field("wagesTips", "$100", parse_currency, 0.99),
        create_field("federalTaxWithheld", "n/a", parse_currency, 0.99),
        create_field("medicareTax", "$10", parse_currency, 0.2),
    ], 0.9)

    assert scorer.low_confidence_fields(extraction) == ["federalTaxWithheld", "medicareTax"]
    assert not scorer.passes_threshold(extraction)
    assert scorer.get_review_reason(extraction) == "Fields need review: federalTaxWithheld, medicareTax"


def test_scorer_custom_thresholds():
    config = {"confidence_thresholds": {"production": 0.5, "review": 0.1}}
    scorer = ConfidenceScorer(config)
    extraction = _extraction([create_field("wagesTips", "$100", parse_currency, 0.6)], 0.6)

    assert scorer.passes_threshold(extraction)


def test_calculate_confidence_non_finite_scores_count_as_zero():
    assert clamp_confidence(float("nan")) == 0.0
    assert clamp_confidence(float("inf")) == 0.0
    assert calculate_confidence({"a": float("nan"), "b": 1.0}, weights={}) == pytest.approx(0.5)
