"""Media info retrieval for one or many media files/URLs.

- get_info: probe a sequence of media references in input order. Items a
  backend cannot probe are logged and recorded as failures; they never abort
  the batch. Always sequence-in, sequence-out.
- probe_one: probe a single reference, raising BackendProbeFailure on failure.
- media_info: the CLI-facing adapter. One reference gives that item's
  metadata, several give a list.

Every successful item is the backend metadata merged with ``media`` (the
reference), ``info_backend`` (the backend that answered) and
``type_from_name`` (the filename-based media type).
"""

import logging
from typing import Optional, Sequence, Union

from mediainfoutils.backends import probe, select_backend
from mediainfoutils.core.classifier import type_from_name
from mediainfoutils.errors import BackendProbeFailure
from mediainfoutils.models.core import (
    BatchResult,
    MediaMetadata,
    ProbeFailure,
    ProbeResult,
)

logger = logging.getLogger(__name__)


def _merge(media: str, result: ProbeResult) -> MediaMetadata:
    return {
        **result.metadata,
        "media": media,
        "info_backend": result.backend,
        "type_from_name": type_from_name(media).value,
    }


def _probe(media: str, backend: Optional[str]) -> ProbeResult:
    logger.debug("Getting media info for %s ...", media)
    return probe(media, backend=backend)


def probe_one(media: str, backend: Optional[str] = None) -> MediaMetadata:
    """Get the metadata of a single media file/URL.

    Args:
        media: File path or URL.
        backend: Optional backend name.

    Returns:
        The merged metadata mapping.

    Raises:
        InvalidBackendName: If the backend name is malformed or unknown.
        BackendProbeFailure: If the backend could not probe the item.
    """
    result = _probe(media, backend)
    if not result.ok:
        raise BackendProbeFailure(media, result.message, result.status)
    return _merge(media, result)


def get_info(media: Sequence[str], backend: Optional[str] = None) -> BatchResult:
    """Get metadata for a batch of media files/URLs.

    Items are probed one at a time in input order. A failed item is logged as
    a warning, recorded in ``failures`` and skipped; the rest of the batch is
    still probed.

    Args:
        media: File paths or URLs.
        backend: Optional backend name, validated once before probing starts.

    Returns:
        A BatchResult with successful items and failures, both in input order.

    Raises:
        InvalidBackendName: If the backend name is malformed or unknown.
    """
    select_backend(backend)

    batch = BatchResult()
    for m in media:
        result = _probe(m, backend)
        if not result.ok:
            logger.warning(
                "Can't get media info for '%s': %s (%s)", m, result.message, result.status
            )
            batch.failures.append(
                ProbeFailure(media=m, message=result.message, status=result.status)
            )
            continue
        batch.items.append(_merge(m, result))
    return batch


def media_info(
    media: Union[str, Sequence[str]], backend: Optional[str] = None
) -> Union[MediaMetadata, list[MediaMetadata]]:
    """Get information about media files/URLs.

    Args:
        media: One reference, or a sequence of references.
        backend: Optional backend name.

    Returns:
        The metadata mapping when exactly one reference is given, otherwise
        the list of successful metadata mappings (failures are logged and
        skipped).

    Raises:
        BackendProbeFailure: If a single requested item cannot be probed.
    """
    refs = [media] if isinstance(media, str) else list(media)
    if len(refs) == 1:
        return probe_one(refs[0], backend=backend)
    return get_info(refs, backend=backend).items
