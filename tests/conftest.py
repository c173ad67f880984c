"""Pytest configuration and fixtures."""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from core.domain import AnalysisResult, UploadedFile
from core.exceptions import ExtractionError
from core.interfaces import IExtractionClient
from infrastructure.extraction_clients import MockExtractionClient
from infrastructure.file_storage import LocalFileStorage
from services.document_analysis_service import DocumentAnalysisService
from utils.common import get_file_extension


class RecordingExtractionClient(IExtractionClient):
    """Returns a scripted result per call and remembers what it was asked."""

    def __init__(self, results: Optional[List[AnalysisResult]] = None, fail_on: Tuple[int, ...] = ()):
        self.results = results or []
        self.fail_on = set(fail_on)
        self.calls: List[Tuple[str, bool]] = []

    @property
    def is_mock(self) -> bool:
        return True

    async def extract(self, text_segment: str, is_first_segment: bool) -> AnalysisResult:
        call_index = len(self.calls)
        self.calls.append((text_segment, is_first_segment))
        if call_index in self.fail_on:
            raise ExtractionError(f"scripted failure on call {call_index}")
        if call_index < len(self.results):
            return self.results[call_index]
        return AnalysisResult(project_name=f"Result {call_index}", requirements=[f"req {call_index}"])


@pytest.fixture
def recording_client_cls():
    return RecordingExtractionClient


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def file_storage(upload_dir) -> LocalFileStorage:
    return LocalFileStorage(base_path=upload_dir)


@pytest.fixture
def mock_client() -> MockExtractionClient:
    return MockExtractionClient()


@pytest.fixture
def analysis_service(mock_client, file_storage) -> DocumentAnalysisService:
    return DocumentAnalysisService(extraction_client=mock_client, file_storage=file_storage)


@pytest.fixture
def make_stored_file(upload_dir):
    """Write bytes into the upload directory and describe them as a stored upload."""
    def _make(name: str, content: bytes) -> UploadedFile:
        path = upload_dir / f"stored-{name}"
        path.write_bytes(content)
        return UploadedFile(
            original_name=name,
            path=str(path),
            size=len(content),
            extension=get_file_extension(name),
        )
    return _make


@pytest.fixture
def sample_analysis() -> Dict:
    return {
        "projectName": "Todo App",
        "description": "A simple todo application.",
        "phases": [{"name": "Discovery", "description": "Interview users"}],
        "personas": [
            {
                "name": "Busy Parent",
                "description": "Juggles many tasks",
                "goals": ["Remember groceries"],
                "painPoints": ["Forgets things"],
            }
        ],
        "requirements": ["Add tasks", "Mark tasks done"],
    }
