"""Custom exception classes for the heap ingestion tooling."""

from typing import Any, Dict, Optional


class IngestionException(Exception):
    """Base exception for all heap ingestion errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "status_code": self.status_code,
                "details": self.details,
            }
        }


class SegmentationConfigError(IngestionException):
    """Exception raised for an unusable segmentation configuration."""

    def __init__(
        self,
        message: str = "Invalid segmentation configuration",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=422,
            code="SEGMENTATION_CONFIG_ERROR",
            details=details,
        )


class UploadError(IngestionException):
    """Exception raised when a document batch could not be submitted.

    Batches submitted before the failing one stay on the server.
    """

    def __init__(
        self,
        message: str = "Document upload failed",
        batches_submitted: int = 0,
        failed_batch: Optional[int] = None,
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        error_details["batches_submitted"] = batches_submitted
        if failed_batch is not None:
            error_details["failed_batch"] = failed_batch
        self.batches_submitted = batches_submitted
        self.failed_batch = failed_batch
        super().__init__(
            message=message,
            status_code=status_code,
            code="UPLOAD_ERROR",
            details=error_details,
        )


class StateReadError(IngestionException):
    """Exception raised when a heap state response cannot be read."""

    def __init__(
        self,
        message: str = "Heap state could not be read",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=502,
            code="STATE_READ_ERROR",
            details=details,
        )


class IndexingTimeoutError(IngestionException):
    """Exception raised when indexing does not complete in the allowed time."""

    def __init__(
        self,
        timeout: float,
        last_percent: float = 0.0,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        error_details["timeout"] = timeout
        error_details["last_percent"] = last_percent
        super().__init__(
            message=f"Indexing did not complete within {timeout} seconds",
            status_code=504,
            code="INDEXING_TIMEOUT",
            details=error_details,
        )


class ValidationError(IngestionException):
    """Exception raised for validation errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if errors:
            error_details["validation_errors"] = errors
        super().__init__(
            message=message,
            status_code=422,
            code="VALIDATION_ERROR",
            details=error_details,
        )


class NotFoundError(IngestionException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id:
            message += f" with id: {resource_id}"
        error_details = details or {}
        error_details["resource"] = resource
        if resource_id:
            error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            status_code=404,
            code="NOT_FOUND",
            details=error_details,
        )


class ExternalServiceError(IngestionException):
    """Exception raised when calls to the Indx API fail."""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_message = message or f"External service '{service}' unavailable"
        error_details = details or {}
        error_details["service"] = service
        super().__init__(
            message=error_message,
            status_code=status_code,
            code="EXTERNAL_SERVICE_ERROR",
            details=error_details,
        )
