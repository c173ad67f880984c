"""Shared enumerations used across the application."""
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for user-facing error messages."""
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    EXTRACTION_TIMEOUT = "EXTRACTION_TIMEOUT"
    NO_FILES = "NO_FILES"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"


class ProcessingMode(str, Enum):
    """How a single file was sent to the extraction service."""
    SINGLE_PASS = "single_pass"
    CHUNKED = "chunked"
