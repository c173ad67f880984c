"""Application configuration"""
from typing import List
from pydantic_settings import BaseSettings
from utils.common import get_log_file_path, get_project_root

MOCK_API_KEY_PLACEHOLDER = "your_openai_api_key_here"


class Settings(BaseSettings):
    """Application configuration"""

    # Logger configuration
    LOGGER_NAME: str = "docanalysis"
    LOG_FILE_PATH: str = get_log_file_path()
    LOG_LEVEL: str = "INFO"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5

    # Extraction service
    OPENAI_API_KEY: str = ""
    USE_MOCK_EXTRACTION: bool = False
    LLM_BASE_URL: str = "https://api.openai.com/v1"
    LLM_MODEL_NAME: str = "gpt-4"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 2000
    EXTRACTION_TIMEOUT_SECONDS: float = 120.0

    # Document processing
    CHARS_PER_TOKEN: int = 4
    MAX_SINGLE_PASS_TOKENS: int = 7000  # Leaves room for the prompt
    CHUNK_SIZE: int = 3000
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    UPLOADS_DIR: str = f"{get_project_root()}/uploads"

    # File type categorization
    TEXT_EXTENSIONS: List[str] = ["txt", "md", "markdown"]
    DOCUMENT_EXTENSIONS: List[str] = ["pdf"]

    @property
    def mock_mode(self) -> bool:
        """True when no usable credential is configured for the extraction service."""
        if self.USE_MOCK_EXTRACTION:
            return True
        key = (self.OPENAI_API_KEY or "").strip()
        return not key or key.startswith(MOCK_API_KEY_PLACEHOLDER)

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    PORT: int = 5001

    # App metadata
    APP_TITLE: str = "Document Analysis Service"
    APP_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
