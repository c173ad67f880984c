"""Core interfaces for the document analysis pipeline"""
from abc import ABC, abstractmethod
from typing import List

from fastapi import UploadFile

from core.domain import AnalysisResult, UploadedFile


# ============= Text Extractor Interface =============
class ITextExtractor(ABC):
    """Turns one stored upload into plain text."""

    @abstractmethod
    async def extract(self, file: UploadedFile) -> str:
        """
        Read the file and return its text.

        Raises:
            ExtractionError: If the content cannot be decoded or parsed
        """
        pass


# ============= Extraction Client Interface =============
class IExtractionClient(ABC):
    """Interface for language-model extraction of project data"""

    @abstractmethod
    async def extract(self, text_segment: str, is_first_segment: bool) -> AnalysisResult:
        """
        Extract structured project data from a text segment.

        The first segment of a document asks for the full schema; later
        segments ask only for information not already reported.

        Raises:
            ExtractionError: On empty replies, unparsable replies or service failures.
                Not retried at this layer.
        """
        pass

    @property
    @abstractmethod
    def is_mock(self) -> bool:
        """True when replies are canned rather than produced by a live model."""
        pass


# ============= File Storage Interface =============
class IFileStorage(ABC):
    """Interface for the temporary upload directory"""

    @abstractmethod
    async def save(self, file: UploadFile, max_size: int) -> UploadedFile:
        """
        Store an uploaded part under a unique name.

        Raises:
            UploadAdmissionError: If the part exceeds max_size bytes. Nothing is left on disk.
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Delete a stored file. Returns False if it was already gone."""
        pass


# ============= Service Interface =============
class IDocumentAnalysisService(ABC):
    """Main document analysis service interface"""

    @abstractmethod
    async def process_file(self, file: UploadedFile) -> AnalysisResult:
        """Analyze one stored file. Never raises; failures are encoded into the result."""
        pass

    @abstractmethod
    async def analyze_uploads(self, uploads: List[UploadFile]) -> AnalysisResult:
        """
        Admit, store and analyze a batch, then merge the per-file results.

        Raises:
            UploadAdmissionError: No files, or a file over the size limit
        """
        pass
