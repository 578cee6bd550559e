"""Application error taxonomy.

Every failure the core reports to its callers carries a stable ``code`` that
the HTTP adapter turns into a response. Parse failures are not in this list:
they always degrade to a fallback value instead of raising.
"""


class TriageError(Exception):
    """Base class for failures surfaced to callers."""

    code = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)


class ModelNotAllowedError(TriageError):
    """Requested model is not in the allow-list."""

    code = "model_not_allowed"


class InvalidLeadStatusError(TriageError):
    """Requested lead status is not one of the recognized values."""

    code = "invalid_status"


class NotFoundError(TriageError):
    """Transcript, artifact or lead does not exist."""

    code = "not_found"


class LLMUnavailableError(TriageError):
    """Text-generation backend timed out, failed or returned nothing."""

    code = "backend_unavailable"


class StorageError(TriageError):
    """Persistent store rejected a read or write."""

    code = "storage_error"


class MissingFieldsError(TriageError):
    """Request omitted one or more required fields."""

    code = "missing_fields"
