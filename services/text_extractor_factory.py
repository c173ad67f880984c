"""Factory selecting a text extractor by file extension"""
from typing import Dict, Optional

from config import settings
from core.domain import UploadedFile
from core.exceptions import UnsupportedFileTypeError
from core.interfaces import ITextExtractor
from infrastructure.text_extractors import PdfTextExtractor, PlainTextExtractor


class TextExtractorFactory:
    """
    Maps file extensions to extractors.
    PDFs go through PyMuPDF, the configured text extensions are read as UTF-8.
    """

    def __init__(self, extractors: Optional[Dict[str, ITextExtractor]] = None):
        if extractors is None:
            pdf = PdfTextExtractor()
            text = PlainTextExtractor()
            extractors = {ext: pdf for ext in settings.DOCUMENT_EXTENSIONS}
            extractors.update({ext: text for ext in settings.TEXT_EXTENSIONS})
        self._extractors = extractors

    @property
    def supported_extensions(self):
        return sorted(self._extractors)

    def get_extractor(self, extension: str) -> ITextExtractor:
        """
        Get the extractor for an extension ("pdf", "txt", ...).

        Raises:
            UnsupportedFileTypeError: carrying the dotted extension, e.g. ".exe"
        """
        extractor = self._extractors.get(extension.lower())
        if extractor is None:
            raise UnsupportedFileTypeError(f".{extension}" if extension else "")
        return extractor

    async def extract_text(self, file: UploadedFile) -> str:
        return await self.get_extractor(file.extension).extract(file)
