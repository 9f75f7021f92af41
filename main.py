"""
Loan Document Field Normalizer API
FastAPI application exposing the normalization engine to the application-update service
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import logging

from models import (
    DocumentTypeInfo,
    HealthResponse,
    NormalizeRequest,
    NormalizeResponse,
    ParseRequest,
    ParseResponse,
)
from services.confidence_scorer import ConfidenceScorer
from services.document_fields import DocumentType
from services.extraction_normalizer import ExtractionNormalizer, document_fields
from services.field_parsers import (
    mask_ssn,
    normalize_ein,
    normalize_state,
    parse_account_number,
    parse_address,
    parse_currency,
    parse_date,
    parse_name,
    parse_percentage,
    parse_tax_year,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="Loan Document Field Normalizer",
    description="API for normalizing OCR-extracted loan document fields into typed, confidence-scored values",
    version=VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
normalizer = ExtractionNormalizer()
confidence_scorer = ConfidenceScorer()

# Single-value parsers exposed for the manual-correction UI
PARSERS = {
    "currency": parse_currency,
    "date": parse_date,
    "percentage": parse_percentage,
    "ssn": mask_ssn,
    "account": parse_account_number,
    "name": parse_name,
    "address": parse_address,
    "state": normalize_state,
    "ein": normalize_ein,
    "tax_year": parse_tax_year,
}


@app.get("/", response_model=HealthResponse)
async def root():
    """Root endpoint - health check"""
    return HealthResponse(status="healthy", version=VERSION)


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="healthy", version=VERSION)


@app.get("/api/document-types", response_model=List[DocumentTypeInfo])
async def list_document_types():
    """Supported document types and the fields each one parses"""
    return [
        DocumentTypeInfo(document_type=doc_type.value, fields=document_fields(doc_type))
        for doc_type in DocumentType
    ]


@app.post("/api/normalize", response_model=NormalizeResponse)
async def normalize_document(request: NormalizeRequest):
    """
    Normalize the raw fields the OCR provider returned for one document

    Args:
        request: Document type and raw field name -> {value, confidence}

    Returns:
        NormalizeResponse with the normalized extraction and review flags
    """
    try:
        result = normalizer.normalize(request.fields, request.document_type)
    except ValueError as e:
        logger.error(f"Normalization rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    needs_review = not confidence_scorer.passes_threshold(result)
    reason = confidence_scorer.get_review_reason(result)

    if needs_review:
        message = f"Normalized with confidence {result.overall_confidence:.2f}. Manual review required: {reason}"
    else:
        message = f"Normalized successfully with confidence {result.overall_confidence:.2f}"

    return NormalizeResponse(
        success=True,
        message=message,
        data=result,
        needs_review=needs_review,
        low_confidence_fields=confidence_scorer.low_confidence_fields(result),
    )


@app.post("/api/parse/{kind}", response_model=ParseResponse)
async def parse_value(kind: str, request: ParseRequest):
    """
    Parse a single value (e.g. a user's manual correction)

    Args:
        kind: Parser name (currency, date, percentage, ssn, account, name, address, state, ein, tax_year)
        request: The raw value

    Returns:
        ParseResponse; `parsed` is null when the value could not be parsed
    """
    parser = PARSERS.get(kind)
    if parser is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown parser '{kind}' (expected one of: {', '.join(PARSERS)})"
        )

    return ParseResponse(kind=kind, parsed=parser(request.value))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
