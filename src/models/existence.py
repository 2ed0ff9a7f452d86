"""
Existence probe result.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from src.models.base import RecordBaseModel


class ExistenceStatus(str, Enum):
    """Outcome of probing a path."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


class ExistenceResult(RecordBaseModel):
    """
    Result of ``has()``.

    Truthy only when the blob was found, so it can be used directly in a
    condition. Callers that need to tell a missing blob apart from a failed
    probe inspect ``status``.
    """

    status: ExistenceStatus
    path: str
    properties: Any | None = Field(None, description="Blob properties when found")
    error: str | None = Field(None, description="Remote error message for failed probes")

    def __bool__(self) -> bool:
        return self.status == ExistenceStatus.FOUND

    @property
    def is_transport_error(self) -> bool:
        return self.status == ExistenceStatus.TRANSPORT_ERROR
