from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from config.normalization_config import NORMALIZATION_CONFIG
from models import RawField
from services.document_fields import (
    DOCUMENT_FIELD_CONFIGS,
    PASS_THROUGH,
    DocumentType,
    FieldParserConfig,
    get_field_config,
)
from services import extraction_normalizer
from services.extraction_normalizer import (
    ExtractionNormalizer,
    document_fields,
    normalize_extraction,
)

FIXED_TIME = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

W2_RAW = {
    "employeeName": {"value": "JOHN DOE", "confidence": 0.95},
    "wagesTips": {"value": "$50,000.00", "confidence": 0.90},
    "employeeSSN": {"value": "123-45-6789", "confidence": 0.85},
}


@pytest.fixture
def normalizer():
    return ExtractionNormalizer(clock=lambda: FIXED_TIME)


def test_normalize_w2(normalizer):
    result = normalizer.normalize(W2_RAW, "w2")

    assert result.document_type == "w2"
    assert result.fields["employeeName"].parsed == "John Doe"
    assert result.fields["wagesTips"].parsed == 50000.0
    assert result.fields["employeeSSN"].parsed == "****6789"
    assert result.fields["wagesTips"].raw == "$50,000.00"
    assert result.extracted_at == FIXED_TIME

    expected = (2.5 * 0.95 + 3.0 * 0.90 + 3.0 * 0.85) / 8.5
    assert result.overall_confidence == pytest.approx(expected)


def test_normalize_paystub(normalizer):
    raw = {
        "grossPay": {"value": "$5,000.00", "confidence": 0.9},
        "payDate": {"value": "01/15/2026", "confidence": 0.9},
        "hoursWorked": {"value": "80.00 hrs", "confidence": 0.8},
    }
    result = normalizer.normalize(raw, DocumentType.PAYSTUB)

    assert result.document_type == "paystub"
    assert result.fields["grossPay"].parsed == 5000.0
    assert result.fields["payDate"].parsed == "2026-01-15"
    assert result.fields["hoursWorked"].parsed == 80.0


def test_normalize_bank_statement_masks_account(normalizer):
    raw = {"accountNumber": {"value": "1234567890", "confidence": 0.9}}
    result = normalizer.normalize(raw, DocumentType.BANK_STATEMENT)

    assert result.fields["accountNumber"].parsed == "****7890"


def test_unknown_fields_are_kept_as_trimmed_text(normalizer):
    raw = {"someExtraField": {"value": "  some   value  ", "confidence": 0.7}}
    result = normalizer.normalize(raw, "w2")

    field = result.fields["someExtraField"]
    assert field.parsed == "some value"
    assert result.overall_confidence == pytest.approx(0.7)


def test_missing_metadata_gets_defaults(normalizer):
    result = normalizer.normalize({"wagesTips": {"value": "$100"}}, "w2")

    confidence = result.fields["wagesTips"].confidence
    assert confidence.value == 1.0
    assert confidence.source == "ocr"


def test_source_is_kept_when_known_and_replaced_when_not(normalizer):
    raw = {
        "wagesTips": {"value": "$100", "confidence": 0.9, "source": "manual"},
        "medicareTax": {"value": "$10", "confidence": 0.9, "source": "scanner-v2"},
    }
    result = normalizer.normalize(raw, "w2")

    assert result.fields["wagesTips"].confidence.source == "manual"
    assert result.fields["medicareTax"].confidence.source == "ocr"


def test_accepts_raw_field_models(normalizer):
    raw = {"wagesTips": RawField(value=50000, confidence=0.9)}
    result = normalizer.normalize(raw, "W2")

    assert result.fields["wagesTips"].parsed == 50000.0


def test_unparsed_fields_are_missing_and_excluded_from_score(normalizer):
    raw = {
        "wagesTips": {"value": "$50,000.00", "confidence": 0.9},
        "federalTaxWithheld": {"value": "illegible", "confidence": 0.2},
        "employeeName": {"value": None, "confidence": 0.99},
    }
    result = normalizer.normalize(raw, "w2")

    assert result.missing_fields() == ["federalTaxWithheld", "employeeName"]
    assert result.parsed_values() == {"wagesTips": 50000.0}
    assert result.fields["federalTaxWithheld"].raw == "illegible"
    assert result.overall_confidence == pytest.approx(0.9)


def test_empty_document(normalizer):
    result = normalizer.normalize({}, "w2")

    assert result.fields == {}
    assert result.overall_confidence == 0.0


def test_unknown_document_type_raises(normalizer):
    with pytest.raises(ValueError, match="Unsupported document type"):
        normalizer.normalize(W2_RAW, "pay_stub_v2")


def test_parallel_fan_out_matches_sequential():
    config = dict(NORMALIZATION_CONFIG, normalizer={"max_workers": 4})
    parallel = ExtractionNormalizer(config, clock=lambda: FIXED_TIME)
    sequential = ExtractionNormalizer(clock=lambda: FIXED_TIME)

    assert parallel.normalize(W2_RAW, "w2") == sequential.normalize(W2_RAW, "w2")


def test_result_is_immutable(normalizer):
    result = normalizer.normalize(W2_RAW, "w2")

    with pytest.raises(ValidationError):
        result.overall_confidence = 0.1
    with pytest.raises(ValidationError):
        result.fields["wagesTips"].parsed = 1.0


def test_to_json_dict_uses_camel_case(normalizer):
    data = normalizer.normalize(W2_RAW, "w2").to_json_dict()

    assert set(data) == {"documentType", "fields", "overallConfidence", "extractedAt"}
    assert data["documentType"] == "w2"
    assert data["fields"]["wagesTips"]["fieldName"] == "wagesTips"
    assert data["fields"]["wagesTips"]["parsed"] == 50000.0
    assert data["fields"]["wagesTips"]["confidence"] == {"value": 0.9, "source": "ocr"}
    assert isinstance(data["extractedAt"], str)


def test_normalize_extraction_uses_default_normalizer():
    result = normalize_extraction(W2_RAW, "w2")

    assert result.fields["employeeName"].parsed == "John Doe"
    assert result.extracted_at.tzinfo is not None


def test_every_document_type_has_a_table():
    for doc_type in DocumentType:
        assert doc_type in DOCUMENT_FIELD_CONFIGS
        assert document_fields(doc_type)


def test_document_fields():
    assert "wagesTips" in document_fields("w2")
    assert "grossPay" in document_fields(DocumentType.PAYSTUB)


def test_get_field_config():
    assert get_field_config("w2", "wagesTips").weight == 3.0
    assert get_field_config("w2", "notAField") is PASS_THROUGH


def test_document_type_coerce():
    assert DocumentType.coerce("  Bank_Statement ") is DocumentType.BANK_STATEMENT
    assert DocumentType.coerce("1099") is DocumentType.FORM_1099
    with pytest.raises(ValueError):
        DocumentType.coerce("mortgage")


def test_nan_confidence_does_not_skip_review(normalizer):
    raw = {"wagesTips": {"value": "$1", "confidence": float("nan")}}
    result = normalizer.normalize(raw, "w2")

    assert result.fields["wagesTips"].confidence.value == 0.0
    assert result.overall_confidence == 0.0


def test_parser_errors_do_not_escape_normalize(monkeypatch):
    def broken(value):
        raise IndexError("out of range")

    monkeypatch.setattr(extraction_normalizer, "PASS_THROUGH", FieldParserConfig(parser=broken))
    result = ExtractionNormalizer(clock=lambda: FIXED_TIME).normalize(
        {"someExtraField": {"value": "x", "confidence": 0.9}}, "w2"
    )

    assert result.fields["someExtraField"].parsed is None
    assert result.missing_fields() == ["someExtraField"]
