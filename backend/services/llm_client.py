"""LLM Client for Gemini API integration."""
import time
from typing import List, Optional, Dict, Any
import httpx
import logging

from config import (
    GEMINI_API_KEY,
    GEMINI_API_URL,
    GEMINI_MODEL,
    LLM_TEMPERATURE,
    LLM_TOP_K,
    LLM_TOP_P,
    LLM_TIMEOUT,
)
from models.conversation import ContextTurn
from models.results import ErrorKind, LLMResult, ServiceError

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = GEMINI_MODEL,
        api_url: str = GEMINI_API_URL,
        timeout: float = LLM_TIMEOUT
    ):
        """
        Initialize LLM client with Gemini API key.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY from environment)
            model: Gemini model name
            api_url: Base URL of the Generative Language API
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or GEMINI_API_KEY
        self.model = model
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.generation_config = {
            "temperature": LLM_TEMPERATURE,
            "topK": LLM_TOP_K,
            "topP": LLM_TOP_P,
        }

        if self.api_key:
            logger.info(f"LLMClient initialized for model {self.model}")
        else:
            logger.error("GEMINI_API_KEY is not set; general chat will be unavailable")

    @property
    def endpoint(self) -> str:
        return f"{self.api_url}/models/{self.model}:generateContent"

    def generate(self, context: List[ContextTurn]) -> LLMResult:
        """
        Generate a reply for an ordered conversation context.

        Args:
            context: Turns oldest first, ending with the current user message

        Returns:
            LLMResult with the first candidate's text, or a structured error
        """
        if not self.api_key:
            return self._failure(
                ErrorKind.CONFIGURATION,
                "Gemini API Key is not configured.",
                latency_ms=0
            )

        payload = {
            "contents": [turn.to_content() for turn in context],
            "generationConfig": self.generation_config,
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        start_time = time.time()

        try:
            logger.debug(f"Generating response with model: {self.model} ({len(context)} turns)")
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.endpoint, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            return self._failure(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                "The language model took too long to respond.",
                latency_ms=self._elapsed_ms(start_time),
                original_error=str(e)
            )
        except httpx.RequestError as e:
            return self._failure(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                "Failed to connect to the language model service.",
                latency_ms=self._elapsed_ms(start_time),
                original_error=str(e)
            )

        latency_ms = self._elapsed_ms(start_time)

        if response.status_code != 200:
            return self._failure(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                f"LLM API error: {response.status_code}",
                latency_ms=latency_ms,
                status_code=response.status_code,
                original_error=response.text[:500]
            )

        try:
            result = response.json()
        except ValueError as e:
            return self._failure(
                ErrorKind.MALFORMED_RESPONSE,
                "LLM did not return a valid text response.",
                latency_ms=latency_ms,
                original_error=str(e)
            )

        text = self.extract_text(result)
        if text is None:
            logger.warning(f"Gemini API response structure unexpected: {str(result)[:500]}")
            return self._failure(
                ErrorKind.MALFORMED_RESPONSE,
                "LLM did not return a valid text response.",
                latency_ms=latency_ms
            )

        logger.info(f"Generated response: model={self.model}, latency={latency_ms}ms")
        return LLMResult(text=text, latency_ms=latency_ms, model_used=self.model)

    @staticmethod
    def extract_text(result: Any) -> Optional[str]:
        """Return ``candidates[0].content.parts[0].text`` or None if absent."""
        try:
            text = result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None

    def _failure(
        self,
        code: ErrorKind,
        message: str,
        latency_ms: int,
        status_code: Optional[int] = None,
        original_error: Optional[str] = None
    ) -> LLMResult:
        details: Dict[str, Any] = {"model": self.model, "latency_ms": latency_ms}
        if original_error is not None:
            details["original_error"] = original_error

        logger.error(
            f"LLM error: code={code.value}, model={self.model}, latency={latency_ms}ms, "
            f"error={original_error or message}",
            extra={"error_code": code.value}
        )
        return LLMResult(
            error=ServiceError(code=code, message=message, status_code=status_code, details=details),
            latency_ms=latency_ms,
            model_used=self.model
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)
