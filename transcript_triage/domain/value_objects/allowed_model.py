"""Allow-listed model identifier value object."""

from dataclasses import dataclass

from transcript_triage.application.errors import ModelNotAllowedError

ALLOWED_MODELS = ("qwen2.5:1.5b", "llama3.2:1b")


@dataclass(frozen=True)
class AllowedModel:
    """Model identifier from the closed allow-list."""

    name: str

    def __post_init__(self) -> None:
        """Validate model identifier."""
        if self.name not in ALLOWED_MODELS:
            raise ModelNotAllowedError(f"Model {self.name!r} is not allowed")

    def __str__(self) -> str:
        return self.name
