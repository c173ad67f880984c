"""HTTP-level tests for the document processing endpoints."""
import logging
import os

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app
from services.document_analysis_service import DocumentAnalysisService
from services.factory import get_analysis_service, get_extraction_client

API_URL = "/api/process-documents"
LEGACY_URL = "/process-documents"


@pytest.fixture
def client(analysis_service, mock_client):
    app.dependency_overrides[get_analysis_service] = lambda: analysis_service
    app.dependency_overrides[get_extraction_client] = lambda: mock_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def _txt(name="brief.txt", content=b"Build a todo app."):
    return (name, content, "text/plain")


class TestProcessDocuments:

    def test_single_text_file(self, client, upload_dir):
        response = client.post(API_URL, files=[("files", _txt())])

        assert response.status_code == 200
        body = response.json()
        assert body["projectName"]
        assert isinstance(body["requirements"], list) and body["requirements"]
        assert set(body) == {"projectName", "description", "phases", "personas", "requirements"}
        assert set(body["personas"][0]) == {"name", "description", "goals", "painPoints"}
        assert os.listdir(upload_dir) == []

    def test_documents_field_is_accepted(self, client):
        response = client.post(API_URL, files=[("documents", _txt())])
        assert response.status_code == 200
        assert response.json()["projectName"] == "Mock Project"

    def test_legacy_route(self, client):
        response = client.post(LEGACY_URL, files=[("documents", _txt())])
        assert response.status_code == 200
        assert response.json()["phases"]

    def test_multiple_files_are_merged(self, client):
        response = client.post(
            API_URL,
            files=[("files", _txt("a.txt")), ("files", _txt("b.md", b"# Plan\nShip it."))],
        )
        body = response.json()
        assert response.status_code == 200
        names = [p["name"].lower() for p in body["phases"]]
        assert len(names) == len(set(names))
        assert body["description"] == "This is a mock project generated for testing purposes."

    def test_bad_file_does_not_fail_batch(self, client, upload_dir):
        response = client.post(
            API_URL,
            files=[("files", _txt()), ("files", ("setup.exe", b"MZ\x90\x00", "application/octet-stream"))],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["projectName"] == "Mock Project"
        assert body["requirements"]
        assert body["errors"] == [{
            "error": "Failed to process setup.exe",
            "details": "Unsupported file type: .exe. Please upload a PDF or text file.",
        }]
        assert os.listdir(upload_dir) == []

    def test_only_bad_file(self, client):
        response = client.post(API_URL, files=[("files", ("setup.exe", b"MZ", "application/octet-stream"))])

        assert response.status_code == 200
        body = response.json()
        assert body["description"].startswith("Error:")
        assert body["phases"] == [] and body["personas"] == [] and body["requirements"] == []

    def test_no_files(self, client):
        response = client.post(API_URL, data={"note": "nothing attached"})

        assert response.status_code == 400
        assert response.json()["error"] == "No files uploaded"

    def test_oversized_file(self, client, mock_client, file_storage, upload_dir):
        app.dependency_overrides[get_analysis_service] = lambda: DocumentAnalysisService(
            mock_client, file_storage, max_file_size=64
        )

        response = client.post(API_URL, files=[("files", _txt(content=b"x" * 65))])

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "File upload error"
        assert "too large" in body["details"]
        assert os.listdir(upload_dir) == []

    def test_pipeline_failure_is_500(self, client):
        class ExplodingService:
            async def analyze_uploads(self, uploads):
                raise RuntimeError("disk on fire")

        app.dependency_overrides[get_analysis_service] = lambda: ExplodingService()

        response = client.post(API_URL, files=[("files", _txt())])

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process documents", "details": "disk on fire"}

    def test_non_file_part_is_400(self, client, upload_dir):
        response = client.post(API_URL, data={"files": "not a file"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "File upload error"
        assert "files" in body["details"]
        assert os.listdir(upload_dir) == []

    def test_failure_outside_the_pipeline_is_500(self, client):
        def broken_service():
            raise OSError("read-only file system")

        app.dependency_overrides[get_analysis_service] = broken_service
        raw_client = TestClient(app, raise_server_exceptions=False)

        response = raw_client.post(API_URL, files=[("files", _txt())])

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process documents", "details": "read-only file system"}


class TestHealth:

    def test_health_reports_mock_mode(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["mockMode"] is True
        assert body["uptime"] >= 0


class TestLifespan:

    def test_mock_mode_is_announced_at_startup(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "USE_MOCK_EXTRACTION", True)

        with caplog.at_level(logging.INFO, logger=settings.LOGGER_NAME):
            with TestClient(app):
                pass

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["No extraction credential configured - running in mock mode"]
