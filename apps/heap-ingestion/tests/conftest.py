"""Pytest configuration and fixtures for heap ingestion tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.models.state import HeapState


@pytest.fixture
def segmentation_config():
    """Segmentation enabled with a 20 character target."""
    return SegmentationConfig(enabled=True, target_length=20)


@pytest.fixture
def disabled_segmentation():
    """Segmentation switched off."""
    return SegmentationConfig(enabled=False, target_length=20)


@pytest.fixture
def sample_lines():
    """A handful of source lines of mixed length."""
    return [
        "Alien",
        "The Lord of the Rings: The Fellowship of the Ring",
        "",
        "Star Wars: Episode V - The Empire Strikes Back",
        "Up",
    ]


@pytest.fixture
def mock_indx_client():
    """IndxClient stand-in with async methods."""
    client = MagicMock()
    client.is_authenticated = True
    client.get_state = AsyncMock(return_value=HeapState(systemState=1, documentCount=5))
    client.create_heap = AsyncMock(return_value=None)
    client.delete_heap = AsyncMock(return_value=None)
    client.save_heap = AsyncMock(return_value=None)
    client.put_documents = AsyncMock(return_value=None)
    client.start_indexing = AsyncMock(return_value=None)
    return client
