"""Postgres-backed lead opportunity repository adapter."""

from enum import Enum
from typing import Any, Optional

from transcript_triage.application.errors import NotFoundError
from transcript_triage.application.ports.lead_repository import LeadRepository
from transcript_triage.domain.entities.lead_opportunity import LeadOpportunity
from transcript_triage.domain.value_objects.lead_status import LeadStatus
from transcript_triage.infrastructure.db import ensure_utc, session_scope

from .models import LeadOpportunityModel

# Entity attribute -> column name, where they differ
_COLUMN_NAMES = {"metadata": "meta"}


class PostgresLeadRepository(LeadRepository):
    """Postgres implementation of lead opportunity repository."""

    def _model_to_entity(self, model: LeadOpportunityModel) -> LeadOpportunity:
        """
        Convert LeadOpportunityModel to LeadOpportunity entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            LeadOpportunity entity
        """
        return LeadOpportunity(
            id=model.id,
            transcript_id=model.transcript_id,
            source_artifact_id=model.source_artifact_id,
            model=model.model,
            title=model.title,
            reason=model.reason,
            next_action=model.next_action,
            lead_score=model.lead_score,
            status=LeadStatus.parse(model.status),
            owner=model.owner,
            due_at=ensure_utc(model.due_at),
            last_contacted_at=ensure_utc(model.last_contacted_at),
            notes=model.notes,
            metadata=dict(model.meta or {}),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    def _entity_to_model(
        self, lead: LeadOpportunity, model: Optional[LeadOpportunityModel] = None
    ) -> LeadOpportunityModel:
        """
        Convert LeadOpportunity entity to LeadOpportunityModel (for upsert).

        On overwrite, identity, creation time, owner, notes and
        last_contacted_at of the existing row are kept.

        Args:
            lead: Freshly generated lead
            model: Existing model instance (for update) or None (for insert)

        Returns:
            LeadOpportunityModel instance
        """
        if model:
            model.model = lead.model
            model.title = lead.title
            model.reason = lead.reason
            model.next_action = lead.next_action
            model.lead_score = lead.lead_score
            model.status = LeadStatus.OPEN.value
            model.source_artifact_id = lead.source_artifact_id
            model.due_at = lead.due_at
            model.meta = dict(lead.metadata)
            model.updated_at = lead.updated_at
            return model

        return LeadOpportunityModel(
            id=lead.id,
            transcript_id=lead.transcript_id,
            source_artifact_id=lead.source_artifact_id,
            model=lead.model,
            title=lead.title,
            reason=lead.reason,
            next_action=lead.next_action,
            lead_score=lead.lead_score,
            status=lead.status.value,
            owner=lead.owner,
            due_at=lead.due_at,
            last_contacted_at=lead.last_contacted_at,
            notes=lead.notes,
            meta=dict(lead.metadata),
            created_at=lead.created_at,
            updated_at=lead.updated_at,
        )

    async def get(self, lead_id: str) -> Optional[LeadOpportunity]:
        with session_scope(f"get lead {lead_id}") as db:
            model = db.get(LeadOpportunityModel, lead_id)
            if model is None:
                return None
            return self._model_to_entity(model)

    async def get_by_transcript(self, transcript_id: str) -> Optional[LeadOpportunity]:
        with session_scope(f"get lead for transcript {transcript_id}") as db:
            model = (
                db.query(LeadOpportunityModel)
                .filter(LeadOpportunityModel.transcript_id == transcript_id)
                .first()
            )
            if model is None:
                return None
            return self._model_to_entity(model)

    async def upsert(self, lead: LeadOpportunity) -> LeadOpportunity:
        """
        Save a lead (upsert by transcript_id).

        Args:
            lead: Freshly generated lead

        Returns:
            Stored lead

        Raises:
            StorageError: If the write fails
        """
        with session_scope(f"upsert lead for transcript {lead.transcript_id}") as db:
            model = (
                db.query(LeadOpportunityModel)
                .filter(LeadOpportunityModel.transcript_id == lead.transcript_id)
                .first()
            )

            if model:
                self._entity_to_model(lead, model)
            else:
                model = self._entity_to_model(lead)
                db.add(model)

            db.flush()
            return self._model_to_entity(model)

    async def update(self, lead_id: str, patch: dict[str, Any]) -> None:
        """
        Apply a partial update to a lead.

        Args:
            lead_id: Lead identifier
            patch: Entity field name to new value

        Raises:
            NotFoundError: If the lead does not exist
            StorageError: If the write fails
        """
        with session_scope(f"update lead {lead_id}") as db:
            model = db.get(LeadOpportunityModel, lead_id)
            if model is None:
                raise NotFoundError(f"Lead {lead_id} not found")
            for field_name, value in patch.items():
                if isinstance(value, Enum):
                    value = value.value
                setattr(model, _COLUMN_NAMES.get(field_name, field_name), value)

    async def list(self) -> list[LeadOpportunity]:
        with session_scope("list leads") as db:
            models = db.query(LeadOpportunityModel).all()
            return [self._model_to_entity(model) for model in models]
