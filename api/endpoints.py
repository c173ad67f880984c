"""
API endpoints for document analysis.

Uploads arrive as multipart/form-data under either the 'files' or the legacy
'documents' field, are analyzed, and come back as one merged AnalysisResponse.
"""
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from api.schemas import AnalysisResponse, ErrorResponse, HealthResponse
from config import settings
from core.exceptions import AnalysisError, TransportError
from core.interfaces import IDocumentAnalysisService, IExtractionClient
from services.factory import get_analysis_service, get_extraction_client

logger = logging.getLogger(settings.LOGGER_NAME)

router = APIRouter()

STARTED_AT = time.monotonic()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Upload rejected"},
    500: {"model": ErrorResponse, "description": "Pipeline failure"},
}


def select_upload_parts(
    files: Optional[List[UploadFile]],
    documents: Optional[List[UploadFile]],
) -> List[UploadFile]:
    """Prefer the 'files' field, fall back to 'documents'."""
    if files:
        return files
    if documents:
        logger.info("No files in 'files' field, using 'documents' field")
        return documents
    return []


# ---------- Process documents ----------
@router.post(
    "/api/process-documents",
    response_model=AnalysisResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
@router.post(
    "/process-documents",
    response_model=AnalysisResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    include_in_schema=False,
)
async def process_documents(
    files: Optional[List[UploadFile]] = File(None),
    documents: Optional[List[UploadFile]] = File(None),
    analysis_service: IDocumentAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    uploads = select_upload_parts(files, documents)
    logger.info(f"Received process-documents request with {len(uploads)} file part(s)")

    try:
        result = await analysis_service.analyze_uploads(uploads)
    except AnalysisError:
        raise
    except Exception as e:
        logger.error(f"Error processing documents: {e}", exc_info=True)
        raise TransportError(str(e)) from e

    return AnalysisResponse.from_result(result)


# ---------- Health ----------
@router.get("/api/health", response_model=HealthResponse)
async def health(
    extraction_client: IExtractionClient = Depends(get_extraction_client),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="Document analysis API is running",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        mockMode=extraction_client.is_mock,
        version=settings.APP_VERSION,
    )
