"""Lead lifecycle status value object."""

from enum import Enum

from transcript_triage.application.errors import InvalidLeadStatusError


class LeadStatus(str, Enum):
    """Lifecycle status of a lead opportunity.

    Nominal flow is open -> in_progress -> contacted -> qualified ->
    closed_won | closed_lost. Any status may move to dismissed or superseded.
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"
    DISMISSED = "dismissed"
    SUPERSEDED = "superseded"

    @classmethod
    def parse(cls, value: object) -> "LeadStatus":
        """
        Parse a requested status.

        Args:
            value: Raw status value from a caller

        Returns:
            Matching LeadStatus

        Raises:
            InvalidLeadStatusError: If value is not one of the eight statuses
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidLeadStatusError(f"Unknown lead status: {value!r}")

    @property
    def is_active(self) -> bool:
        """Whether the lead still needs staff follow-up."""
        return self in ACTIVE_STATUSES

    @property
    def rank(self) -> int:
        """Position of the status in queue ordering."""
        return STATUS_RANK[self]


ACTIVE_STATUSES = frozenset(
    {
        LeadStatus.OPEN,
        LeadStatus.IN_PROGRESS,
        LeadStatus.CONTACTED,
        LeadStatus.QUALIFIED,
    }
)

STATUS_RANK = {status: index for index, status in enumerate(LeadStatus)}
