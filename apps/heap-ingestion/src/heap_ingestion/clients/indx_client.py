"""Indx search API client for heap lifecycle, document upload and state."""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError
from py_common.clients import APIClient

from heap_ingestion.config import get_settings
from heap_ingestion.models.document import DocumentRecord
from heap_ingestion.models.state import HeapState
from heap_ingestion.utils.errors import ExternalServiceError, StateReadError
from heap_ingestion.utils.logging import get_logger

logger = get_logger("indx_client")
settings = get_settings()

SERVICE_NAME = "indx"


class IndxClient:
    """
    HTTP client for the Indx REST API.

    Handles:
    - Creating, deleting and saving heaps
    - Uploading document batches (the chunked uploader's transport)
    - Starting indexing and reading heap state
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the Indx client.

        Args:
            base_url: API base URL (defaults to settings.indx.url)
            api_token: Bearer token (defaults to settings.indx.api_token)
            timeout: Request timeout in seconds (defaults to settings.indx.timeout)
        """
        self._client = APIClient(
            base_url=base_url or settings.indx.url,
            bearer_token=api_token if api_token is not None else settings.indx.api_token,
            timeout=float(timeout if timeout is not None else settings.indx.timeout),
        )

    @property
    def is_authenticated(self) -> bool:
        return self._client.is_authenticated

    async def _call(self, action: str, request: Callable[[], Awaitable[Any]]) -> Any:
        """Run one request, mapping httpx failures to ExternalServiceError."""
        try:
            return await request()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Failed to {action}. Status: {status_code}, Response: {e.response.text}")
            if status_code == 401:
                message = f"Unauthorized to {action}; check the API token"
            else:
                message = f"Failed to {action}: {status_code}"
            raise ExternalServiceError(
                SERVICE_NAME, message=message, status_code=status_code
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout trying to {action} - {e}")
            raise ExternalServiceError(
                SERVICE_NAME, message=f"Timeout trying to {action}", status_code=504
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error trying to {action} - {e}")
            raise ExternalServiceError(
                SERVICE_NAME, message=f"Request error trying to {action}", status_code=502
            ) from e

    async def get_state(self, heap_id: str) -> HeapState:
        """
        Read the state of a heap.

        Raises:
            StateReadError: If the body is not a well-formed state object
            ExternalServiceError: If the request fails
        """
        data = await self._call(
            f"get state of heap {heap_id}",
            lambda: self._client.get(f"Search/{heap_id}", headers={"Accept": "application/json"}),
        )
        if not isinstance(data, dict):
            raise StateReadError(
                f"Invalid state response for heap {heap_id}",
                details={"heap_id": heap_id, "body_type": type(data).__name__},
            )
        try:
            return HeapState.model_validate(data)
        except PydanticValidationError as e:
            raise StateReadError(
                f"Invalid state response for heap {heap_id}",
                details={"heap_id": heap_id, "errors": e.errors(include_url=False)},
            ) from e

    async def create_heap(self, heap_id: str, configuration: Optional[str] = None) -> None:
        """Create a heap with the given configuration (defaults to settings.indx.configuration)."""
        configuration = configuration or settings.indx.configuration
        await self._call(
            f"create heap {heap_id}",
            lambda: self._client.put(f"Search/{heap_id}/{configuration}", headers={"Accept": "*/*"}),
        )
        logger.info(f"Created heap {heap_id} (configuration {configuration})")

    async def delete_heap(self, heap_id: str) -> None:
        await self._call(
            f"delete heap {heap_id}",
            lambda: self._client.delete(f"Search/{heap_id}", headers={"Accept": "*/*"}),
        )
        logger.info(f"Deleted heap {heap_id}")

    async def save_heap(self, heap_id: str) -> None:
        """Persist the heap on the server's file system."""
        await self._call(
            f"save heap {heap_id}",
            lambda: self._client.put(f"Search/{heap_id}", headers={"Accept": "*/*"}),
        )
        logger.info(f"Saved heap {heap_id}")

    async def put_documents(self, heap_id: str, documents: Sequence[DocumentRecord]) -> None:
        """Submit one batch of document records to a heap."""
        payload: List[Dict[str, Any]] = [document.to_wire() for document in documents]
        await self._call(
            f"upload {len(payload)} documents to heap {heap_id}",
            lambda: self._client.put(
                f"Search/array/{heap_id}", json=payload, headers={"Accept": "*/*"}
            ),
        )
        logger.debug(f"Uploaded {len(payload)} documents to heap {heap_id}")

    async def start_indexing(self, heap_id: str) -> None:
        """Start server-side indexing; returns as soon as the server acknowledges."""
        await self._call(
            f"start indexing of heap {heap_id}",
            lambda: self._client.get(f"Search/DoIndex/{heap_id}", headers={"Accept": "text/plain"}),
        )
        logger.info(f"Indexing started for heap {heap_id}")
