"""Segmentation configuration model."""

from pydantic import BaseModel, Field

from heap_ingestion.config import SegmentationSettings


class SegmentationConfig(BaseModel):
    """How source lines are split into segments."""

    enabled: bool = Field(default=True, description="If false, each line yields exactly one record")
    target_length: int = Field(default=80, description="Desired segment length in characters")

    @property
    def min_tail_length(self) -> float:
        """Shortest acceptable final segment; shorter tails are merged backwards."""
        return self.target_length / 2

    @classmethod
    def from_settings(cls, settings: SegmentationSettings) -> "SegmentationConfig":
        return cls(enabled=settings.enabled, target_length=settings.target_length)
