"""
Extraction Normalizer
Maps a document's raw OCR fields through the document-type field table into one
NormalizedExtraction with an overall confidence score
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Tuple, Union
import logging

from config.normalization_config import NORMALIZATION_CONFIG
from models import CONFIDENCE_SOURCES, ExtractedField, NormalizedExtraction, RawField
from services.confidence_scorer import calculate_fields_confidence
from services.document_fields import DOCUMENT_FIELD_CONFIGS, PASS_THROUGH, DocumentType
from services.field_builder import create_field

logger = logging.getLogger(__name__)

RawFields = Mapping[str, Union[RawField, Mapping[str, Any]]]


class ExtractionNormalizer:
    """
    Normalizes raw OCR output for a loan application document

    - Looks up each field's parser in the document-type table
    - Keeps unknown fields with a trim-and-return parse instead of dropping them
    - Folds parsed-field confidences into a weighted overall confidence
    """

    def __init__(self, config: Dict = None, clock: Callable[[], datetime] = None):
        """
        Initialize extraction normalizer

        Args:
            config: Configuration dict (uses NORMALIZATION_CONFIG if not provided)
            clock: Returns the extraction timestamp (UTC now if not provided)
        """
        self.config = config or NORMALIZATION_CONFIG
        self.max_workers = self.config['normalizer']['max_workers']
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def normalize(
        self,
        raw_fields: RawFields,
        document_type: Union[DocumentType, str]
    ) -> NormalizedExtraction:
        """
        Normalize one document's raw fields

        Args:
            raw_fields: Raw field name -> {value, confidence[, source]}
            document_type: DocumentType or its tag ("w2", "paystub", ...)

        Returns:
            NormalizedExtraction

        Raises:
            ValueError: if document_type is not a supported type
        """
        doc_type = DocumentType.coerce(document_type)
        table = DOCUMENT_FIELD_CONFIGS[doc_type]

        items = [(name, self._to_raw_field(raw)) for name, raw in raw_fields.items()]
        logger.info(f"Normalizing {len(items)} fields for {doc_type.value} document")

        if self.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                built = list(pool.map(lambda item: self._build_field(item, table), items))
        else:
            built = [self._build_field(item, table) for item in items]

        fields = {field.field_name: field for field, _ in built}
        weights = {field.field_name: weight for field, weight in built}

        unknown = [name for name, _ in items if name not in table]
        if unknown:
            logger.info(f"Kept {len(unknown)} unrecognized fields as plain text: {', '.join(unknown)}")

        missing = [name for name, field in fields.items() if field.parsed is None]
        if missing:
            logger.debug(f"Unparsed fields: {', '.join(missing)}")

        overall_confidence = calculate_fields_confidence(fields, weights)
        logger.info(f"Normalized {doc_type.value} document with confidence {overall_confidence:.2f}")

        return NormalizedExtraction(
            document_type=doc_type.value,
            fields=fields,
            overall_confidence=overall_confidence,
            extracted_at=self.clock(),
        )

    def _build_field(
        self,
        item: Tuple[str, RawField],
        table: Mapping[str, Any]
    ) -> Tuple[ExtractedField, float]:
        name, raw = item
        config = table.get(name, PASS_THROUGH)
        defaults = self.config['defaults']

        field = create_field(
            name,
            raw.value,
            config.parser,
            confidence=defaults['confidence'] if raw.confidence is None else raw.confidence,
            source=raw.source if raw.source in CONFIDENCE_SOURCES else defaults['ocr_source'],
        )
        return field, config.weight

    @staticmethod
    def _to_raw_field(raw: Union[RawField, Mapping[str, Any]]) -> RawField:
        if isinstance(raw, RawField):
            return raw
        return RawField.model_validate(raw)


_default_normalizer = ExtractionNormalizer()


def normalize_extraction(
    raw_fields: RawFields,
    document_type: Union[DocumentType, str]
) -> NormalizedExtraction:
    """
    Normalize a raw document extraction with the default normalizer

    Example:
        raw = {
            "employeeName": {"value": "JOHN DOE", "confidence": 0.95},
            "wagesTips": {"value": "$50,000.00", "confidence": 0.90},
        }
        result = normalize_extraction(raw, "w2")
        # result.fields["employeeName"].parsed == "John Doe"
        # result.fields["wagesTips"].parsed == 50000.0
    """
    return _default_normalizer.normalize(raw_fields, document_type)


def document_fields(document_type: Union[DocumentType, str]) -> List[str]:
    """Field names the table for a document type knows how to parse"""
    return list(DOCUMENT_FIELD_CONFIGS[DocumentType.coerce(document_type)].keys())
