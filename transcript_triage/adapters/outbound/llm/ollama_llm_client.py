"""Ollama LLM client adapter."""

import asyncio
from typing import Optional

import httpx

from transcript_triage.application.errors import LLMUnavailableError
from transcript_triage.application.ports.llm_client import LLMClient
from transcript_triage.infrastructure.config.settings import settings
from transcript_triage.infrastructure.logging.logger import logger


class OllamaLLMClient(LLMClient):
    """Ollama ``/api/generate`` client implementation using httpx."""

    GENERATE_PATH = "/api/generate"

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize Ollama LLM client.

        Args:
            base_url: Ollama server URL (defaults to settings.ollama_base_url)
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._client = httpx.AsyncClient(base_url=self._base_url, transport=transport)

    async def _post(self, model: str, prompt: str, timeout_seconds: float) -> httpx.Response:
        """
        Send one non-streaming generate request under a total deadline.

        httpx timeouts apply per phase (connect, each read), so the whole call
        is also bounded with ``asyncio.wait_for``.

        Returns:
            Successful (2xx) response

        Raises:
            LLMUnavailableError: On timeout, network error or non-2xx status
        """
        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self.GENERATE_PATH,
                    json={"model": model, "prompt": prompt, "stream": False},
                    timeout=timeout_seconds,
                ),
                timeout=timeout_seconds,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Ollama request timed out after {timeout_seconds}s (model={model})")
            raise LLMUnavailableError("Ollama request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Ollama returned status {e.response.status_code} (model={model}): "
                f"{e.response.text[:200]}"
            )
            raise LLMUnavailableError("Ollama returned an error status") from e
        except httpx.HTTPError as e:
            logger.warning(f"Ollama request failed (model={model}): {str(e)}")
            raise LLMUnavailableError("Ollama request failed") from e
        return response

    async def generate(self, model: str, prompt: str, timeout_seconds: float) -> str:
        """
        Generate text with a single non-streaming request.

        Args:
            model: Model identifier
            prompt: Complete prompt string
            timeout_seconds: Hard limit for the whole request

        Returns:
            Raw generated text

        Raises:
            LLMUnavailableError: On timeout, network error, non-2xx status or empty body
        """
        response = await self._post(model, prompt, timeout_seconds)
        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Ollama returned a non-JSON body (model={model})")
            raise LLMUnavailableError("Ollama returned an unreadable body") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise LLMUnavailableError("Empty response from Ollama")

        return text.strip()

    async def warmup(self, model: str, prompt: str, timeout_seconds: float) -> None:
        """
        Load a model; any 2xx response counts as success.

        Args:
            model: Model identifier
            prompt: Warmup prompt
            timeout_seconds: Hard limit for the whole request

        Raises:
            LLMUnavailableError: On timeout, network error or non-2xx status
        """
        await self._post(model, prompt, timeout_seconds)

    async def close(self) -> None:
        """Close the HTTP connection pool."""
        await self._client.aclose()
