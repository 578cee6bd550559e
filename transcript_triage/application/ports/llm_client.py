"""LLM client port interface."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Port interface for the text-generation backend."""

    @abstractmethod
    async def generate(self, model: str, prompt: str, timeout_seconds: float) -> str:
        """
        Generate text for a single prompt (non-streaming).

        Args:
            model: Allow-listed model identifier
            prompt: Complete prompt string
            timeout_seconds: Hard limit for the whole request

        Returns:
            Raw generated text (never empty)

        Raises:
            LLMUnavailableError: On timeout, network error, non-2xx status or empty body
        """
        pass

    @abstractmethod
    async def warmup(self, model: str, prompt: str, timeout_seconds: float) -> None:
        """
        Send a throwaway prompt so the backend loads the model.

        Only the request outcome matters; the reply body is ignored.

        Args:
            model: Allow-listed model identifier
            prompt: Warmup prompt
            timeout_seconds: Hard limit for the whole request

        Raises:
            LLMUnavailableError: On timeout, network error or non-2xx status
        """
        pass
