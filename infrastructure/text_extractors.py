"""Text extraction implementations (PDF via PyMuPDF, plain text / markdown)"""
import asyncio
import logging

import fitz  # PyMuPDF

from config import settings
from core.domain import UploadedFile
from core.exceptions import ExtractionError
from core.interfaces import ITextExtractor

logger = logging.getLogger(settings.LOGGER_NAME)


class PdfTextExtractor(ITextExtractor):
    """Extracts the text layer of every page, in page order."""

    def _read_pdf(self, path: str) -> str:
        with open(path, "rb") as fh:
            data = fh.read()
        # Stream-open so the content is sniffed as PDF regardless of the file name
        with fitz.open(stream=data, filetype="pdf") as doc:
            pages = [page.get_text() for page in doc]
        return "\n".join(pages)

    async def extract(self, file: UploadedFile) -> str:
        logger.info(f"Processing PDF file: {file.original_name}")
        try:
            return await asyncio.to_thread(self._read_pdf, file.path)
        except Exception as e:
            logger.error(f"Error extracting text from PDF '{file.original_name}': {e}")
            raise ExtractionError("Failed to extract text from PDF") from e


class PlainTextExtractor(ITextExtractor):
    """Reads .txt / .md / .markdown files as UTF-8."""

    def _read_text(self, path: str) -> str:
        with open(path, "rb") as fh:
            return fh.read().decode("utf-8")

    async def extract(self, file: UploadedFile) -> str:
        logger.info(f"Processing text file: {file.original_name}")
        try:
            return await asyncio.to_thread(self._read_text, file.path)
        except UnicodeDecodeError as e:
            raise ExtractionError(f"File is not valid UTF-8 text: {file.original_name}") from e
