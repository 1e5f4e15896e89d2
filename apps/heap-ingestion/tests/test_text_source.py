"""Tests for reading raw text sources."""

import pytest

from heap_ingestion.services import text_source
from heap_ingestion.services.text_source import PREDEFINED_DATASETS, read_text, resolve_dataset
from heap_ingestion.utils.errors import NotFoundError


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Predefined datasets directory with the movie names file present."""
    (tmp_path / "movie_names.txt").write_text("Alien\nHeat\nUp", encoding="utf-8")
    monkeypatch.setattr(text_source.settings.data, "directory", tmp_path)
    return tmp_path


def test_predefined_datasets():
    assert PREDEFINED_DATASETS == ["movie_names.txt", "movie_metadata.txt", "airports.txt"]


def test_resolve_dataset(data_dir):
    assert resolve_dataset("movie_names.txt") == data_dir / "movie_names.txt"


def test_resolve_unknown_dataset():
    with pytest.raises(NotFoundError) as exc_info:
        resolve_dataset("films.txt")

    assert exc_info.value.details["available"] == PREDEFINED_DATASETS


def test_resolve_missing_dataset_file(data_dir):
    with pytest.raises(NotFoundError):
        resolve_dataset("airports.txt")


@pytest.mark.asyncio
async def test_read_predefined_dataset(data_dir):
    assert await read_text("movie_names.txt") == "Alien\nHeat\nUp"


@pytest.mark.asyncio
async def test_read_user_file(tmp_path):
    path = tmp_path / "mine.txt"
    path.write_text("Kaufhaus\nMünchen\n", encoding="utf-8")

    assert await read_text(path) == "Kaufhaus\nMünchen\n"
    assert await read_text(str(path)) == "Kaufhaus\nMünchen\n"


@pytest.mark.asyncio
async def test_read_missing_file():
    with pytest.raises(NotFoundError):
        await read_text("/nowhere/missing.txt")


@pytest.mark.asyncio
async def test_read_file_with_invalid_utf8_replaces_bad_bytes(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\nok\n")

    assert await read_text(path) == "caf\ufffd\nok\n"
