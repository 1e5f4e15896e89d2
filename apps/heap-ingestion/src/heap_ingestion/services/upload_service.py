"""Chunked, sequential upload of document records."""

import asyncio
import inspect
import math
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Sequence

from heap_ingestion.config import get_settings
from heap_ingestion.models.document import DocumentRecord
from heap_ingestion.models.progress import UploadProgress, UploadResult
from heap_ingestion.utils.errors import IngestionException, UploadError, ValidationError
from heap_ingestion.utils.logging import get_logger

logger = get_logger("upload_service")
settings = get_settings()

# transport(heap_id, batch) submits one batch and raises on failure
Transport = Callable[[str, List[DocumentRecord]], Awaitable[Any]]
ProgressCallback = Callable[[UploadProgress], Any]


class ChunkedUploader:
    """
    Upload document records to a heap in fixed-size batches.

    Batches are submitted one at a time, in order; the next batch is only sent
    after the previous transport call returned. A failed batch stops the
    upload. Batches already submitted are not rolled back, so a heap can hold
    a partial upload after an error.
    """

    def __init__(
        self,
        chunk_size: Optional[int] = None,
        progress_step: Optional[int] = None,
    ):
        """
        Initialize the uploader.

        Args:
            chunk_size: Records per transport call (defaults to settings.upload.chunk_size)
            progress_step: Records between progress events inside a batch
                (defaults to settings.upload.progress_step)
        """
        self.chunk_size = chunk_size if chunk_size is not None else settings.upload.chunk_size
        self.progress_step = (
            progress_step if progress_step is not None else settings.upload.progress_step
        )
        if self.chunk_size <= 0 or self.progress_step <= 0:
            raise ValidationError(
                "chunk_size and progress_step must be > 0",
                details={"chunk_size": self.chunk_size, "progress_step": self.progress_step},
            )

    def batch_count(self, total: int) -> int:
        return math.ceil(total / self.chunk_size)

    async def iter_upload(
        self,
        documents: Sequence[DocumentRecord],
        heap_id: str,
        transport: Transport,
    ) -> AsyncIterator[UploadProgress]:
        """
        Upload documents, yielding progress as it is made.

        After each submitted batch progress advances in ``progress_step``
        increments, handing control back to the event loop between events; the
        last event of a batch always reports the exact processed count. An
        empty upload yields a single ``0 / 0`` event without calling the
        transport.

        Raises:
            UploadError: When a batch fails. A ``reset`` event reporting
                ``0 / total`` is yielded right before.
        """
        total = len(documents)
        batch_count = self.batch_count(total)

        if total == 0:
            logger.info(f"Nothing to upload to heap {heap_id}")
            yield UploadProgress(processed=0, total=0)
            return

        logger.info(
            f"Uploading {total} documents to heap {heap_id} "
            f"in {batch_count} batch(es) of up to {self.chunk_size}"
        )

        processed = 0
        for batch_index, offset in enumerate(range(0, total, self.chunk_size)):
            batch = list(documents[offset : offset + self.chunk_size])
            try:
                await transport(heap_id, batch)
            except Exception as e:
                logger.error(
                    f"Batch {batch_index + 1}/{batch_count} failed for heap {heap_id} "
                    f"after {batch_index} submitted batch(es): {e}"
                )
                yield UploadProgress(
                    processed=0,
                    total=total,
                    batch_index=batch_index,
                    batch_count=batch_count,
                    reset=True,
                )
                status_code = e.status_code if isinstance(e, IngestionException) else 502
                raise UploadError(
                    f"Upload to heap {heap_id} failed at batch {batch_index + 1} of {batch_count}: {e}",
                    batches_submitted=batch_index,
                    failed_batch=batch_index,
                    status_code=status_code,
                    details={"heap_id": heap_id, "processed_before_failure": processed},
                ) from e

            batch_end = offset + len(batch)
            for step_end in range(offset + self.progress_step, batch_end, self.progress_step):
                yield UploadProgress(
                    processed=step_end,
                    total=total,
                    batch_index=batch_index,
                    batch_count=batch_count,
                )
                await asyncio.sleep(0)

            processed = batch_end
            logger.debug(f"Batch {batch_index + 1}/{batch_count} submitted: {processed} / {total}")
            yield UploadProgress(
                processed=processed,
                total=total,
                batch_index=batch_index,
                batch_count=batch_count,
            )

        logger.info(f"Upload to heap {heap_id} complete: {processed} / {total}")

    async def upload(
        self,
        documents: Sequence[DocumentRecord],
        heap_id: str,
        transport: Transport,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadResult:
        """
        Upload documents and return the outcome.

        Args:
            documents: Records in upload order
            heap_id: Target heap
            transport: Async callable submitting one batch
            on_progress: Optional callback (sync or async) invoked per progress event

        Returns:
            UploadResult for a fully submitted upload

        Raises:
            UploadError: If a batch fails
        """
        async for progress in self.iter_upload(documents, heap_id, transport):
            if on_progress is not None:
                outcome = on_progress(progress)
                if inspect.isawaitable(outcome):
                    await outcome

        total = len(documents)
        return UploadResult(
            total=total,
            processed=total,
            batches_submitted=self.batch_count(total),
        )
