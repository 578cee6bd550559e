"""Generation pipeline DTOs."""

from typing import Literal, Optional

from pydantic import ConfigDict, Field

from transcript_triage.application.dtos.base import DTO


class LeadOpportunityDraft(DTO):
    """Normalized, not-yet-persisted lead candidate."""

    title: str = Field(min_length=1)
    reason: str = Field(min_length=1)
    next_action: str = Field(min_length=1)
    outreach_channel: Literal["call", "text", "email"]
    lead_score: float = Field(ge=0.0, le=1.0)
    due_in_days: int = Field(ge=0, le=30)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "Re-engage after missed knee follow-up",
                "reason": "Patient missed the scheduled follow-up visit for knee pain.",
                "next_action": (
                    "Call to check on knee pain and ask if they want to revisit; "
                    "share slots only if they confirm."
                ),
                "outreach_channel": "call",
                "lead_score": 0.7,
                "due_in_days": 3,
            }
        },
    )


class SummaryResult(DTO):
    """Outcome of summary generation.

    The secondary lead extraction never fails the summary: ``lead_count`` is
    always present and ``lead_warning`` explains a zero count caused by a
    non-fatal error.
    """

    artifact_id: str
    transcript_id: str
    model: str
    content: str
    latency_ms: int
    lead_count: int = 0
    lead_warning: Optional[str] = None


class LeadGenerationResult(DTO):
    """Outcome of lead generation."""

    transcript_id: str
    model: str
    lead_count: int
    lead_id: Optional[str] = None
    latency_ms: int = 0
    warning: Optional[str] = None


class WarmupResult(DTO):
    """Outcome of a model warmup."""

    model: str
    ok: bool = True
    latency_ms: int = 0
