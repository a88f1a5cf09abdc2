"""Summaries of media files grouped by type.

Types come from file names only (see :mod:`mediainfoutils.core.classifier`),
so no file is probed. Besides one row per type, three group rows are kept:

- ``audio+image+video``: every audio, image or video file
- ``image+video``: every image or video file
- ``ALL``: every file
"""

import logging
import os
from collections import defaultdict
from typing import Dict, List, Sequence

from mediainfoutils.core.classifier import type_from_name
from mediainfoutils.errors import FilesystemAccessFailure
from mediainfoutils.models.core import MediaType, TypeSummaryRow

logger = logging.getLogger(__name__)

GROUP_AUDIO_IMAGE_VIDEO = "audio+image+video"
GROUP_IMAGE_VIDEO = "image+video"
GROUP_ALL = "ALL"

_GROUPS = {
    GROUP_AUDIO_IMAGE_VIDEO: {MediaType.AUDIO, MediaType.IMAGE, MediaType.VIDEO},
    GROUP_IMAGE_VIDEO: {MediaType.IMAGE, MediaType.VIDEO},
}


def file_size(path: str) -> int:
    """Return the size of *path* in bytes.

    Raises:
        FilesystemAccessFailure: If the file cannot be stat'ed.
    """
    try:
        return os.stat(path).st_size
    except OSError as exc:
        raise FilesystemAccessFailure(path, exc.strerror or str(exc)) from exc


def summarize_by_type(
    media: Sequence[str], skip_missing: bool = False
) -> List[TypeSummaryRow]:
    """Summarize media files by type (from file names).

    Args:
        media: File paths.
        skip_missing: Log and leave out files whose size can't be read
            instead of aborting.

    Returns:
        One row per label seen, sorted by label.

    Raises:
        FilesystemAccessFailure: If a file's size can't be read and
            *skip_missing* is False.
    """
    counts: Dict[str, int] = defaultdict(int)
    sizes: Dict[str, int] = defaultdict(int)

    for path in media:
        try:
            size = file_size(path)
        except FilesystemAccessFailure as exc:
            if not skip_missing:
                raise
            logger.warning("Skipping %s: %s", path, exc)
            continue

        media_type = type_from_name(path)
        labels = [media_type.value]
        labels += [group for group, members in _GROUPS.items() if media_type in members]
        labels.append(GROUP_ALL)
        for label in labels:
            counts[label] += 1
            sizes[label] += size

    return [
        TypeSummaryRow(type=label, count=counts[label], total_size=sizes[label])
        for label in sorted(counts)
    ]


media_summary_by_type = summarize_by_type
