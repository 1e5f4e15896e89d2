"""End-to-end heap operations with caller-visible status."""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from heap_ingestion.clients.indx_client import IndxClient
from heap_ingestion.config import get_settings
from heap_ingestion.models.progress import (
    IndexingProgress,
    OperationStatus,
    UploadProgress,
    UploadResult,
)
from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.models.state import HeapState, SystemState
from heap_ingestion.services.document_builder import build_documents, split_lines
from heap_ingestion.services.indexing_monitor import IndexingMonitor
from heap_ingestion.services.text_source import read_text
from heap_ingestion.services.upload_service import ChunkedUploader
from heap_ingestion.utils.errors import IngestionException, ValidationError
from heap_ingestion.utils.logging import get_logger

logger = get_logger("heap_console")
settings = get_settings()

SYSTEM_STATE_LABELS: Dict[int, str] = {
    SystemState.NOT_LOADED: "Created, not loaded",
    SystemState.LOADED_READY_TO_INDEX: "Loaded and ready to index",
    SystemState.INDEXING: "Indexing",
    SystemState.READY_TO_SEARCH: "Ready to search",
}


def describe_state(state: HeapState, connected: bool = True) -> str:
    """Human-readable label for a heap state."""
    if state.system_state == SystemState.NOT_LOADED and not connected:
        return "Not connected"
    if state.has_only_system_state():
        return "No status obtained"
    return SYSTEM_STATE_LABELS.get(state.system_state, "Unknown state")


class HeapConsole:
    """
    Drive heap operations against one heap and keep their status.

    The ``status`` object is the single place callers read flags, the upload
    progress label and the indexing percentage from. Each flag is cleared once
    its operation ends, whether it succeeded or not.
    """

    def __init__(
        self,
        client: Optional[IndxClient] = None,
        heap_id: Optional[str] = None,
        segmentation: Optional[SegmentationConfig] = None,
        uploader: Optional[ChunkedUploader] = None,
        poll_interval: Optional[float] = None,
        monitor_timeout: Optional[float] = None,
    ):
        self.client = client or IndxClient()
        self.heap_id = heap_id or settings.indx.heap_id
        self.segmentation = segmentation or SegmentationConfig.from_settings(settings.segmentation)
        self.uploader = uploader or ChunkedUploader()
        self.poll_interval = poll_interval
        self.monitor_timeout = monitor_timeout
        self.status = OperationStatus()

    @property
    def state_label(self) -> str:
        return describe_state(self.status.state, connected=self.client.is_authenticated)

    async def refresh_state(self) -> HeapState:
        """
        Read the heap state into ``status.state``.

        A failed or malformed read is logged and the safe default
        (``NotLoaded``, 0%) is returned instead.
        """
        try:
            state = await self.client.get_state(self.heap_id)
        except IngestionException as e:
            logger.error(f"Error getting state of heap {self.heap_id}: {e.message}")
            return HeapState()
        self.status.state = state
        return state

    async def create(self, configuration: Optional[str] = None) -> HeapState:
        self.status.creating = True
        try:
            await self.client.create_heap(self.heap_id, configuration)
        finally:
            self.status.creating = False
        return await self.refresh_state()

    async def delete(self) -> None:
        self.status.deleting = True
        try:
            await self.client.delete_heap(self.heap_id)
        finally:
            self.status.deleting = False
            self.status.state = HeapState()

    async def save(self) -> None:
        self.status.saving = True
        try:
            await self.client.save_heap(self.heap_id)
        finally:
            self.status.saving = False

    async def load(
        self,
        source: Optional[Union[str, Path]] = None,
        text: Optional[str] = None,
        skip_blank_lines: Optional[bool] = None,
        on_progress: Optional[Callable[[UploadProgress], Any]] = None,
    ) -> UploadResult:
        """
        Read a text source, build document records and upload them.

        Args:
            source: File path or predefined dataset name
            text: Raw text to load instead of a source
            skip_blank_lines: Override settings.upload.skip_blank_lines
            on_progress: Optional callback per upload progress event

        Raises:
            ValidationError: If neither or both of ``source`` and ``text`` are given
            UploadError: If a batch fails (``status.progress_label`` is reset)
        """
        if (source is None) == (text is None):
            raise ValidationError("Provide exactly one of source or text")
        if skip_blank_lines is None:
            skip_blank_lines = settings.upload.skip_blank_lines

        self.status.loading = True
        self.status.last_error = None
        try:
            if text is None:
                text = await read_text(source)
            documents = build_documents(split_lines(text), self.segmentation, skip_blank_lines)

            def track(progress: UploadProgress) -> Any:
                self.status.progress_label = progress.label
                if on_progress is not None:
                    return on_progress(progress)
                return None

            return await self.uploader.upload(
                documents, self.heap_id, self.client.put_documents, on_progress=track
            )
        except IngestionException as e:
            self.status.last_error = e.message
            raise
        finally:
            self.status.loading = False
            await self.refresh_state()

    async def index(
        self,
        on_progress: Optional[Callable[[IndexingProgress], Any]] = None,
    ) -> HeapState:
        """Start indexing and wait until the heap reports 100%."""
        monitor = IndexingMonitor(
            self.client.get_state,
            poll_interval=self.poll_interval,
            timeout=self.monitor_timeout,
        )

        def track(progress: IndexingProgress) -> Any:
            self.status.index_progress_percent = progress.percent
            self.status.state = progress.state
            if on_progress is not None:
                return on_progress(progress)
            return None

        self.status.indexing = True
        self.status.index_progress_percent = 0.0
        self.status.last_error = None
        try:
            return await monitor.run(self.heap_id, self.client.start_indexing, on_progress=track)
        except IngestionException as e:
            self.status.last_error = e.message
            raise
        finally:
            self.status.indexing = False
