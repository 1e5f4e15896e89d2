"""Progress and status models for upload and indexing operations."""

from typing import Optional

from pydantic import BaseModel, Field

from heap_ingestion.models.state import HeapState


class UploadProgress(BaseModel):
    """Progress event emitted by the chunked uploader."""

    processed: int = Field(..., ge=0, description="Records submitted so far")
    total: int = Field(..., ge=0, description="Records in the whole upload")
    batch_index: int = Field(default=0, ge=0, description="Zero-based batch the event belongs to")
    batch_count: int = Field(default=0, ge=0, description="Number of batches in the upload")
    reset: bool = Field(default=False, description="True when a failed upload reset progress to zero")

    @property
    def label(self) -> str:
        return f"{self.processed} / {self.total}"

    @property
    def complete(self) -> bool:
        return not self.reset and self.processed == self.total


class UploadResult(BaseModel):
    """Outcome of a finished upload."""

    total: int = Field(..., ge=0)
    processed: int = Field(..., ge=0)
    batches_submitted: int = Field(..., ge=0)
    success: bool = True

    @property
    def label(self) -> str:
        return f"{self.processed} / {self.total}"


class IndexingProgress(BaseModel):
    """Progress event emitted by the indexing monitor for each successful poll."""

    percent: float = Field(..., ge=0)
    state: HeapState
    polls: int = Field(..., ge=1, description="Poll attempts made so far, failed ones included")

    @property
    def complete(self) -> bool:
        return self.percent >= 100


class OperationStatus(BaseModel):
    """Caller-owned status of the control-panel operations."""

    deleting: bool = False
    creating: bool = False
    loading: bool = False
    indexing: bool = False
    saving: bool = False
    progress_label: str = ""
    index_progress_percent: float = 0.0
    state: HeapState = Field(default_factory=HeapState)
    last_error: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.deleting or self.creating or self.loading or self.indexing or self.saving
