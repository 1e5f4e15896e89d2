"""Tests for custom exceptions."""

from heap_ingestion.utils.errors import (
    ExternalServiceError,
    IndexingTimeoutError,
    IngestionException,
    NotFoundError,
    SegmentationConfigError,
    StateReadError,
    UploadError,
    ValidationError,
)


def test_base_exception_defaults():
    error = IngestionException("boom")

    assert str(error) == "boom"
    assert error.status_code == 500
    assert error.code == "IngestionException"
    assert error.details == {}


def test_to_dict():
    error = ValidationError("Bad input", errors={"chunk_size": "must be > 0"})

    assert error.to_dict() == {
        "error": {
            "message": "Bad input",
            "code": "VALIDATION_ERROR",
            "status_code": 422,
            "details": {"validation_errors": {"chunk_size": "must be > 0"}},
        }
    }


def test_segmentation_config_error():
    error = SegmentationConfigError(details={"target_length": 0})

    assert isinstance(error, IngestionException)
    assert error.status_code == 422
    assert error.code == "SEGMENTATION_CONFIG_ERROR"
    assert error.details == {"target_length": 0}


def test_upload_error_records_batches():
    error = UploadError("failed", batches_submitted=2, failed_batch=2, status_code=500)

    assert error.batches_submitted == 2
    assert error.failed_batch == 2
    assert error.status_code == 500
    assert error.details == {"batches_submitted": 2, "failed_batch": 2}


def test_upload_error_without_failed_batch():
    error = UploadError()

    assert error.status_code == 502
    assert error.details == {"batches_submitted": 0}


def test_state_read_error():
    error = StateReadError()

    assert error.status_code == 502
    assert error.code == "STATE_READ_ERROR"


def test_indexing_timeout_error():
    error = IndexingTimeoutError(timeout=30.0, last_percent=42.0, details={"heap_id": "0"})

    assert error.status_code == 504
    assert error.code == "INDEXING_TIMEOUT"
    assert "30.0 seconds" in error.message
    assert error.details == {"heap_id": "0", "timeout": 30.0, "last_percent": 42.0}


def test_not_found_error():
    error = NotFoundError(resource="Dataset", resource_id="films.txt")

    assert error.status_code == 404
    assert error.message == "Dataset not found with id: films.txt"
    assert error.details["resource_id"] == "films.txt"


def test_external_service_error():
    error = ExternalServiceError("indx")

    assert error.status_code == 502
    assert error.message == "External service 'indx' unavailable"
    assert error.details == {"service": "indx"}
