import logging
from functools import lru_cache

from fastapi import Depends

from config import settings
from core.interfaces import IDocumentAnalysisService, IExtractionClient, IFileStorage
from infrastructure.extraction_clients import LiveExtractionClient, MockExtractionClient
from infrastructure.file_storage import LocalFileStorage
from services.document_analysis_service import DocumentAnalysisService
from services.text_extractor_factory import TextExtractorFactory

logger = logging.getLogger(settings.LOGGER_NAME)


# Provider functions for each component
@lru_cache
def get_extraction_client() -> IExtractionClient:
    """Create the extraction client once, based on configuration."""
    if settings.mock_mode:
        logger.warning("Using mock extraction client (no API key provided)")
        return MockExtractionClient()
    logger.info(f"Using live extraction client with model '{settings.LLM_MODEL_NAME}'")
    return LiveExtractionClient(api_key=settings.OPENAI_API_KEY)


@lru_cache
def get_file_storage() -> IFileStorage:
    """Create file storage based on configuration."""
    return LocalFileStorage(base_path=settings.UPLOADS_DIR)


@lru_cache
def get_text_extractor_factory() -> TextExtractorFactory:
    return TextExtractorFactory()


def get_analysis_service(
    extraction_client: IExtractionClient = Depends(get_extraction_client),
    file_storage: IFileStorage = Depends(get_file_storage),
    extractor_factory: TextExtractorFactory = Depends(get_text_extractor_factory),
) -> IDocumentAnalysisService:
    """
    Create the analysis service with full dependency injection.
    Override get_analysis_service (or any single provider) in app.dependency_overrides for tests.
    """
    return DocumentAnalysisService(
        extraction_client=extraction_client,
        file_storage=file_storage,
        extractor_factory=extractor_factory,
    )


def clear_instances() -> None:
    """Forget cached providers so the next request rebuilds them from settings."""
    get_extraction_client.cache_clear()
    get_file_storage.cache_clear()
    get_text_extractor_factory.cache_clear()
