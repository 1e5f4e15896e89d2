"""Heap state models returned by the Indx state endpoint."""

from enum import IntEnum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SystemState(IntEnum):
    """Lifecycle stage of a heap on the remote service."""

    NOT_LOADED = 0
    LOADED_READY_TO_INDEX = 1
    INDEXING = 2
    READY_TO_SEARCH = 3


class HeapState(BaseModel):
    """
    State object for one heap.

    Only ``systemState`` and ``indexProgressPercent`` are relied upon; every
    other field the server sends (documentCount, secondsToIndex, version ...)
    is kept as-is and available through ``extra_fields``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    system_state: SystemState = Field(
        default=SystemState.NOT_LOADED, alias="systemState", description="Heap lifecycle stage"
    )
    index_progress_percent: float = Field(
        default=0.0,
        alias="indexProgressPercent",
        ge=0,
        description="Indexing progress reported by the server (0-100)",
    )

    @field_validator("index_progress_percent", mode="before")
    @classmethod
    def default_missing_progress(cls, v):
        """Servers report null progress before indexing has started."""
        return 0.0 if v is None else v

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """Server-specific fields beyond the ones modelled here."""
        return dict(self.model_extra or {})

    @property
    def is_indexed(self) -> bool:
        return self.index_progress_percent >= 100

    def has_only_system_state(self) -> bool:
        """True when the server returned nothing meaningful besides the state value."""
        values = [self.index_progress_percent, *self.extra_fields.values()]
        return all(value in (None, False, 0, "") for value in values)
