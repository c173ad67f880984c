"""Extraction clients: a live chat-completion client and a canned mock"""
import asyncio
import json
import logging
from abc import abstractmethod
from typing import Any, Dict, Optional

import requests

from config import settings
from core.domain import AnalysisResult
from core.enums import ErrorCode
from core.exceptions import ExtractionError
from core.interfaces import IExtractionClient
from infrastructure.extraction_prompts import SYSTEM_PROMPT, build_extraction_prompt
from utils.json_recovery import recover_json_object

logger = logging.getLogger(settings.LOGGER_NAME)

MOCK_ANALYSIS: Dict[str, Any] = {
    "projectName": "Mock Project",
    "description": "This is a mock project generated for testing purposes.",
    "phases": [
        {"name": "Phase 1", "description": "Initial setup and planning"},
        {"name": "Phase 2", "description": "Development and implementation"},
        {"name": "Phase 3", "description": "Testing and deployment"},
    ],
    "personas": [
        {
            "name": "End User",
            "description": "Primary user of the application",
            "goals": ["Ease of use", "Efficiency", "Reliability"],
            "painPoints": ["Complex interfaces", "Slow performance", "Bugs and errors"],
        }
    ],
    "requirements": [
        "User authentication system",
        "Responsive design for all devices",
        "Data visualization capabilities",
        "Export functionality",
        "User settings and preferences",
    ],
}


def parse_analysis_response(content: Optional[str]) -> AnalysisResult:
    """Turn raw model text into an AnalysisResult, raising ExtractionError if that is impossible."""
    if not content or not content.strip():
        raise ExtractionError("No content in AI response")

    json_text = recover_json_object(content)
    try:
        raw = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Invalid JSON in AI response: {e}") from e

    if not isinstance(raw, dict):
        raise ExtractionError("AI response is not a JSON object")
    # Model output never reports file failures
    return AnalysisResult.from_dict(raw, include_errors=False)


class BaseExtractionClient(IExtractionClient):
    """Shared prompt building, timeout and reply parsing. Subclasses only produce raw text."""

    def __init__(self, timeout: float = settings.EXTRACTION_TIMEOUT_SECONDS):
        self.timeout = timeout

    @abstractmethod
    async def _complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        """Return the model's raw reply text."""
        raise NotImplementedError

    async def extract(self, text_segment: str, is_first_segment: bool) -> AnalysisResult:
        prompt = build_extraction_prompt(text_segment, is_first_segment)
        try:
            content = await asyncio.wait_for(
                self._complete(SYSTEM_PROMPT, prompt),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Extraction timed out after {self.timeout} seconds")
            raise ExtractionError(
                f"Extraction timed out after {self.timeout} seconds",
                ErrorCode.EXTRACTION_TIMEOUT,
            )

        result = parse_analysis_response(content)
        logger.debug(
            f"Parsed extraction reply: {len(result.phases)} phases, "
            f"{len(result.personas)} personas, {len(result.requirements)} requirements"
        )
        return result


class MockExtractionClient(BaseExtractionClient):
    """Returns the same canned analysis for every call. Used when no credential is configured."""

    @property
    def is_mock(self) -> bool:
        return True

    async def _complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        return json.dumps(MOCK_ANALYSIS, indent=2)


class LiveExtractionClient(BaseExtractionClient):
    """Calls an OpenAI-compatible /chat/completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = settings.LLM_BASE_URL,
        model: str = settings.LLM_MODEL_NAME,
        temperature: float = settings.LLM_TEMPERATURE,
        max_tokens: int = settings.LLM_MAX_TOKENS,
        timeout: float = settings.EXTRACTION_TIMEOUT_SECONDS,
    ):
        """
        Initializes the client.

        Args:
            api_key: Bearer credential for the completion service.
            base_url: API root, e.g. "https://api.openai.com/v1".
            model: The name of the model to use.
            temperature: Sampling temperature.
            max_tokens: Upper bound on reply length.
            timeout: Per-call timeout in seconds.
        """
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def is_mock(self) -> bool:
        return False

    def _post(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        logger.info(f"Sending extraction prompt to model '{self.model}'...")
        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"Completion request timed out after {self.timeout} seconds.")
            raise ExtractionError("Extraction service request timed out", ErrorCode.EXTRACTION_TIMEOUT) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to extraction service at {self.base_url}.")
            raise ExtractionError("Cannot connect to extraction service") from e
        except requests.exceptions.HTTPError as e:
            logger.error(f"Extraction service returned an error: {e.response.status_code} {e.response.text}")
            raise ExtractionError(f"Extraction service error: {e.response.status_code}") from e
        except ValueError as e:
            raise ExtractionError("Extraction service returned a non-JSON body") from e

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if content:
            logger.info("Successfully received response from extraction service.")
        return content

    async def _complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        return await asyncio.to_thread(self._post, system_prompt, user_prompt)
