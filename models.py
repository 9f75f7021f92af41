"""
Pydantic models for the loan document field normalizer
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Union, Literal, get_args
from datetime import datetime


RawValue = Union[str, float, int, None]
ConfidenceSource = Literal["manual", "ocr", "ml", "rule"]
CONFIDENCE_SOURCES = frozenset(get_args(ConfidenceSource))


class FrozenModel(BaseModel):
    """Immutable value object with camelCase JSON aliases"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FieldConfidence(FrozenModel):
    """Confidence attached to a single field"""
    value: float = Field(ge=0.0, le=1.0, description="Confidence score 0.0-1.0")
    source: ConfidenceSource = "manual"


class ExtractedField(FrozenModel):
    """Raw value, its parsed form, and the confidence the source reported"""
    field_name: str = Field(alias="fieldName")
    raw: RawValue = None
    parsed: Optional[Any] = None
    confidence: FieldConfidence

    @property
    def is_parsed(self) -> bool:
        return self.parsed is not None


class ParsedName(FrozenModel):
    """Parsed personal name; `full` is the title-cased canonical rendering"""
    first: str
    middle: Optional[str] = None
    last: str = ""
    suffix: Optional[str] = None
    full: str


class ParsedAddress(FrozenModel):
    """Parsed US postal address; pieces that could not be located are empty"""
    street: str = ""
    unit: Optional[str] = None
    city: str = ""
    state: str = Field(default="", description="2-letter canonical abbreviation")
    zip: str = Field(default="", description="5-digit ZIP or ZIP+4")
    full: str = ""


class RawField(FrozenModel):
    """A field as delivered by the OCR / document-intelligence provider"""
    value: RawValue = None
    confidence: Optional[float] = None
    source: Optional[str] = None


class NormalizedExtraction(FrozenModel):
    """Normalized result of one document extraction"""
    document_type: str = Field(alias="documentType")
    fields: Dict[str, ExtractedField] = Field(default_factory=dict)
    overall_confidence: float = Field(alias="overallConfidence", ge=0.0, le=1.0)
    extracted_at: datetime = Field(alias="extractedAt")

    def parsed_values(self) -> Dict[str, Any]:
        """Field name -> parsed value, for fields that parsed"""
        return {name: f.parsed for name, f in self.fields.items() if f.parsed is not None}

    def missing_fields(self) -> List[str]:
        """Fields whose raw value could not be parsed (need manual entry)"""
        return [name for name, f in self.fields.items() if f.parsed is None]

    def to_json_dict(self) -> Dict[str, Any]:
        """Flat JSON-compatible structure for persistence and UI comparison"""
        return self.model_dump(by_alias=True, mode="json")


# API models

class NormalizeRequest(BaseModel):
    """Request body for the normalize endpoint"""
    document_type: str = Field(alias="documentType")
    fields: Dict[str, RawField] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class NormalizeResponse(BaseModel):
    """API response for the normalize endpoint"""
    success: bool
    message: str
    data: Optional[NormalizedExtraction] = None
    needs_review: bool = Field(default=False, alias="needsReview")
    low_confidence_fields: List[str] = Field(default_factory=list, alias="lowConfidenceFields")

    model_config = ConfigDict(populate_by_name=True)


class ParseRequest(BaseModel):
    """Request body for parsing a single value"""
    value: RawValue = None


class ParseResponse(BaseModel):
    """API response for parsing a single value (raw input is not echoed back)"""
    kind: str
    parsed: Optional[Any] = None


class DocumentTypeInfo(BaseModel):
    """A supported document type and the fields it knows how to parse"""
    document_type: str = Field(alias="documentType")
    fields: List[str]

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """API health check response"""
    status: str
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)
