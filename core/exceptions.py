"""Exception taxonomy for the document analysis pipeline.

File- and chunk-level errors (UnsupportedFileTypeError, ExtractionError) are
caught by the orchestrator and turned into degraded results. Request-level
errors (UploadAdmissionError, TransportError) surface as HTTP responses.
"""
from core.enums import ErrorCode


class AnalysisError(Exception):
    """Base error carrying a machine-readable error code"""

    error_code: ErrorCode = ErrorCode.EXTRACTION_FAILED

    def __init__(self, message: str, error_code: ErrorCode = None):
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        super().__init__(message)

    def __str__(self):
        return self.message

    def log_format(self) -> str:
        # Format used for logging
        return f"[{self.error_code.value}] {self.message}"


class UnsupportedFileTypeError(AnalysisError):
    error_code = ErrorCode.UNSUPPORTED_FILE_TYPE

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(
            f"Unsupported file type: {extension or '(none)'}. Please upload a PDF or text file."
        )


class ExtractionError(AnalysisError):
    error_code = ErrorCode.EXTRACTION_FAILED


class UploadAdmissionError(AnalysisError):
    """Request rejected before any file is processed (400)."""
    error_code = ErrorCode.NO_FILES

    def __init__(self, message: str, details: str = "", error_code: ErrorCode = None):
        self.details = details or message
        super().__init__(message, error_code)


class TransportError(AnalysisError):
    """The request itself could not be read or written (500)."""
    error_code = ErrorCode.TRANSPORT_FAILED
