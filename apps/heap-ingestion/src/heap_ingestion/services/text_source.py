"""Raw text sources: predefined datasets or user supplied files."""

import asyncio
from pathlib import Path
from typing import List, Optional, Union

from heap_ingestion.config import get_settings
from heap_ingestion.utils.errors import NotFoundError
from heap_ingestion.utils.logging import get_logger

logger = get_logger("text_source")
settings = get_settings()

PREDEFINED_DATASETS: List[str] = ["movie_names.txt", "movie_metadata.txt", "airports.txt"]


def resolve_dataset(name: str, data_dir: Optional[Path] = None) -> Path:
    """
    Resolve a predefined dataset name to its file.

    Raises:
        NotFoundError: If the name is unknown or the file is missing
    """
    if name not in PREDEFINED_DATASETS:
        raise NotFoundError(
            resource="Dataset",
            resource_id=name,
            details={"available": PREDEFINED_DATASETS},
        )
    path = Path(data_dir or settings.data.directory) / name
    if not path.is_file():
        raise NotFoundError(resource="Dataset file", resource_id=str(path))
    return path


async def read_text(source: Union[str, Path], encoding: str = "utf-8") -> str:
    """
    Read the whole contents of a text source.

    Bytes that do not decode are replaced with U+FFFD rather than failing the
    read.

    Args:
        source: Path to a user file, or the name of a predefined dataset
        encoding: Text encoding of the file

    Returns:
        File contents as text

    Raises:
        NotFoundError: If the source cannot be found
    """
    path = Path(source)
    if not path.is_file():
        path = resolve_dataset(str(source))

    logger.info(f"Reading text source: {path}")
    text = await asyncio.to_thread(path.read_text, encoding=encoding, errors="replace")
    logger.debug(f"Read {len(text)} characters from {path}")
    return text
