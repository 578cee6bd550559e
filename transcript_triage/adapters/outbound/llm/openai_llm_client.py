"""OpenAI-compatible LLM client adapter."""

import asyncio
from typing import Any, Optional

from openai import APIError, AsyncOpenAI

from transcript_triage.application.errors import LLMUnavailableError
from transcript_triage.application.ports.llm_client import LLMClient
from transcript_triage.infrastructure.config.settings import settings
from transcript_triage.infrastructure.logging.logger import logger


class OpenAILLMClient(LLMClient):
    """Chat-completions client for OpenAI-compatible servers (Ollama ``/v1``, vLLM, ...)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """
        Initialize OpenAI-compatible LLM client.

        Args:
            api_key: API key (defaults to settings.openai_api_key)
            base_url: Server URL (defaults to settings.openai_base_url)
        """
        self._api_key = api_key or settings.openai_api_key
        self._base_url = base_url or settings.openai_base_url

        if not self._api_key:
            raise ValueError("OpenAI API key is required")

        # Single attempt: failures go back to the caller for a manual re-trigger
        self._client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            max_retries=0,
        )

    async def _complete(self, model: str, prompt: str, timeout_seconds: float) -> Any:
        """
        Run one chat completion under a total deadline.

        Returns:
            Chat completion response

        Raises:
            LLMUnavailableError: On timeout or any API error
        """
        try:
            return await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    stream=False,
                    timeout=timeout_seconds,
                ),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"OpenAI-compatible call timed out after {timeout_seconds}s (model={model})"
            )
            raise LLMUnavailableError("OpenAI-compatible call timed out") from e
        except APIError as e:
            logger.warning(f"OpenAI-compatible call failed (model={model}): {str(e)}")
            raise LLMUnavailableError("OpenAI-compatible call failed") from e

    async def generate(self, model: str, prompt: str, timeout_seconds: float) -> str:
        """
        Generate text from a single user message.

        Args:
            model: Model identifier
            prompt: Complete prompt string
            timeout_seconds: Hard limit for the whole request

        Returns:
            Raw generated text

        Raises:
            LLMUnavailableError: On timeout, network error, error status or empty reply
        """
        response = await self._complete(model, prompt, timeout_seconds)

        if not response.choices or response.choices[0].message.content is None:
            raise LLMUnavailableError("Empty response from OpenAI-compatible server")

        reply = response.choices[0].message.content.strip()
        if not reply:
            raise LLMUnavailableError("Empty reply from OpenAI-compatible server")

        return reply

    async def warmup(self, model: str, prompt: str, timeout_seconds: float) -> None:
        """Load a model; a completed call counts as success whatever it returns."""
        await self._complete(model, prompt, timeout_seconds)
