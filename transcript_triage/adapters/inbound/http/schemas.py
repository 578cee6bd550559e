"""HTTP adapter request schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ModelRequest(BaseModel):
    """Body for generation and warmup requests."""

    model: Optional[str] = None  # Must be one of the allow-listed models

    model_config = ConfigDict(
        json_schema_extra={"example": {"model": "qwen2.5:1.5b"}},
        protected_namespaces=(),
    )


class TranscriptRequest(BaseModel):
    """Body for ingesting a redacted transcript; required fields are checked by the use case."""

    patient_pseudonym: Optional[str] = None
    source: Optional[str] = None
    source_ref: Optional[str] = None
    text: Optional[str] = None
    idempotency_key: Optional[str] = None
    meta: Optional[dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "patient_pseudonym": "patient-042",
                "source": "telehealth",
                "source_ref": "visit-2026-10-12",
                "text": "Provider: How has sleep been?\nPatient: Still waking at 3am.",
                "idempotency_key": "telehealth:visit-2026-10-12",
                "meta": {"duration_minutes": 25},
            }
        }
    )


class ProcessRequest(BaseModel):
    """Body for approving a summary and marking its transcript processed."""

    artifact_id: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"artifact_id": "3f0c9a52-5d1e-4a7b-9a57-0d2b1f8e6c11"}}
    )


class LeadStatusRequest(BaseModel):
    """Body for a lead status transition."""

    status: str
    notes: Optional[str] = None
    due_at: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "contacted",
                "notes": "Left a voicemail, will retry Friday",
                "due_at": "2026-10-23T15:00:00Z",
            }
        }
    )


class ProcessResponse(BaseModel):
    """Result of processing a transcript."""

    transcript_id: str
    artifact_id: str
    status: str = "processed"
