"""Turn raw text into ordered document records."""

from typing import Iterable, List

from heap_ingestion.models.document import DocumentRecord
from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.services.segmentation_service import segment_line, validate_config
from heap_ingestion.utils.logging import get_logger

logger = get_logger("document_builder")


def split_lines(text: str) -> List[str]:
    """
    Split raw text into source lines.

    Lines are separated on ``\\n``; a trailing ``\\r`` is dropped from each
    line. A text ending in a newline produces a final empty line, so line
    indices match what a plain ``split("\\n")`` would give.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def build_documents(
    lines: Iterable[str],
    config: SegmentationConfig,
    skip_blank_lines: bool = False,
) -> List[DocumentRecord]:
    """
    Map source lines to document records.

    Every line is segmented; segment ``j`` of line ``i`` becomes a record with
    ``document_key=i`` and ``segment_number=j``. Output is ordered by
    (line, segment).

    Args:
        lines: Source lines in order
        config: Segmentation configuration, validated before any line is read
        skip_blank_lines: Drop whitespace-only lines. Remaining records keep
            their original line index as key.

    Returns:
        Flat list of document records

    Raises:
        SegmentationConfigError: If the configuration is invalid
    """
    validate_config(config)

    documents: List[DocumentRecord] = []
    line_count = 0
    skipped = 0
    for index, line in enumerate(lines):
        line_count += 1
        if skip_blank_lines and not line.strip():
            skipped += 1
            continue
        for segment_number, segment in enumerate(segment_line(line, config)):
            documents.append(
                DocumentRecord(
                    document_key=index,
                    segment_number=segment_number,
                    text=segment,
                )
            )

    logger.info(
        f"Built {len(documents)} documents from {line_count} lines "
        f"(skipped={skipped}, segmentation={'on' if config.enabled else 'off'}, "
        f"target_length={config.target_length})"
    )
    return documents
