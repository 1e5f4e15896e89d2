"""Word-boundary aware line segmentation."""

import math
from typing import List

from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.utils.errors import SegmentationConfigError


def validate_config(config: SegmentationConfig) -> None:
    """
    Reject configurations that cannot produce sensible segments.

    Raises:
        SegmentationConfigError: If the target length is not a positive integer
    """
    target = config.target_length
    if isinstance(target, bool) or not isinstance(target, int) or target <= 0:
        raise SegmentationConfigError(
            "target_length must be a positive integer",
            details={"target_length": target},
        )


def segment_line(line: str, config: SegmentationConfig) -> List[str]:
    """
    Split one line into bounded-length segments on word boundaries.

    The line is divided into roughly equal windows of ``ceil(len / n)``
    characters. Each window is cut at its last space that leaves at least
    ``min_tail_length`` characters behind. Failing that it may run on to a
    space up to ``min_tail_length`` characters past its end, and only when
    there is none is it cut mid-word. A final segment shorter than ``min_tail_length`` is merged into
    the one before it.

    Args:
        line: Source line (without the line terminator)
        config: Segmentation configuration

    Returns:
        Ordered, non-empty list of trimmed segments. An empty line yields
        ``[""]``; with segmentation disabled the line is returned untouched.

    Raises:
        SegmentationConfigError: If the configuration is invalid
    """
    validate_config(config)

    if not config.enabled:
        return [line]

    length = len(line)
    target = config.target_length
    min_tail = config.min_tail_length

    if length <= target:
        return [line.strip()]

    estimated = math.ceil(length / target)
    # fold a short equal-split tail into the other segments
    tail = length - (estimated - 1) * target
    if estimated > 1 and tail < min_tail:
        estimated -= 1
    average = math.ceil(length / estimated)

    segments: List[str] = []
    hard_before: List[bool] = []
    previous_cut_hard = False
    min_piece = math.ceil(min_tail)
    start = 0

    while start < length:
        end = min(start + average, length)
        if end == length:
            cut, next_start, hard = length, length, False
        else:
            cut = line.rfind(" ", start + max(min_piece, 1), end + 1)
            if cut == -1:
                # run on to the next space rather than split a word
                cut = line.find(" ", end + 1, end + 1 + min_piece)
            if cut == -1:
                cut, next_start, hard = end, end, True
            else:
                next_start, hard = cut + 1, False

        piece = line[start:cut].strip()
        if piece:
            segments.append(piece)
            hard_before.append(previous_cut_hard)
        previous_cut_hard = hard
        start = next_start

    if not segments:
        # whitespace-only line
        return [""]

    if len(segments) > 1 and len(segments[-1]) < min_tail:
        last = segments.pop()
        separator = "" if hard_before.pop() else " "
        segments[-1] = f"{segments[-1]}{separator}{last}"

    return segments
