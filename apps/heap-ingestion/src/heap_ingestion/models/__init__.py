"""Data models for heap ingestion."""

from heap_ingestion.models.document import DocumentRecord
from heap_ingestion.models.progress import (
    IndexingProgress,
    OperationStatus,
    UploadProgress,
    UploadResult,
)
from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.models.state import HeapState, SystemState

__all__ = [
    "DocumentRecord",
    "HeapState",
    "IndexingProgress",
    "OperationStatus",
    "SegmentationConfig",
    "SystemState",
    "UploadProgress",
    "UploadResult",
]
