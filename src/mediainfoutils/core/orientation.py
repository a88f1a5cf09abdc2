"""Portrait/landscape classification of media.

Portrait is defined as having ``rotate`` metadata of 90 or 270 when the
width > height, or no such rotation when width <= height. Everything else is
landscape.

The rule is ``is_portrait = rotated XOR tall_or_square`` where

- ``rotated`` is true for a rotation of 90 or 270 degrees, and
- ``tall_or_square`` is true when the stored frame's width <= height.

A square frame therefore counts as portrait when it is not rotated.
``video_width``/``video_height`` take precedence over ``width``/``height``.
"""

import logging
from typing import Any, Optional, Tuple

from mediainfoutils.core.info import probe_one
from mediainfoutils.errors import MissingDimensions
from mediainfoutils.models.core import MediaMetadata, Orientation, OrientationResult

logger = logging.getLogger(__name__)

ROTATED_ANGLES = (90, 270)


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def effective_dimensions(metadata: MediaMetadata) -> Tuple[Any, Any]:
    """Return the width and height to use for orientation.

    ``video_width``/``video_height`` win when they are non-zero numbers; a
    missing, zero or non-numeric value falls back to ``width``/``height``.
    """
    width = _dimension(metadata, "video_width", "width")
    height = _dimension(metadata, "video_height", "height")
    return width, height


def _dimension(metadata: MediaMetadata, preferred: str, fallback: str) -> Any:
    value = metadata.get(preferred)
    return value if _number(value) else metadata.get(fallback)


def classify_orientation(metadata: MediaMetadata) -> OrientationResult:
    """Classify media metadata as portrait or landscape.

    Args:
        metadata: Metadata with width/height (or video_width/video_height) and
            an optional ``rotate`` in degrees.

    Returns:
        The OrientationResult.

    Raises:
        MissingDimensions: If the effective width or height is absent, zero,
            or not a number.
    """
    width, height = effective_dimensions(metadata)
    width, height = _number(width), _number(height)
    if not width or not height:
        raise MissingDimensions(metadata.get("media"))

    rotate = _number(metadata.get("rotate")) or 0
    rotated = rotate in ROTATED_ANGLES
    tall_or_square = width <= height
    is_portrait = rotated ^ tall_or_square

    logger.debug(
        "width=%s height=%s rotate=%s -> portrait=%s", width, height, rotate, is_portrait
    )
    return OrientationResult(
        is_portrait=is_portrait,
        is_landscape=not is_portrait,
        orientation=Orientation.PORTRAIT if is_portrait else Orientation.LANDSCAPE,
    )


def media_orientation(media: str, backend: Optional[str] = None) -> Orientation:
    """Return the orientation of a media file/URL.

    Raises:
        BackendProbeFailure: If the media could not be probed.
        MissingDimensions: If width x height cannot be determined.
    """
    return classify_orientation(probe_one(media, backend=backend)).orientation


def media_is_portrait(media: str, backend: Optional[str] = None) -> bool:
    """Return True if a media file/URL is portrait."""
    return classify_orientation(probe_one(media, backend=backend)).is_portrait


def media_is_landscape(media: str, backend: Optional[str] = None) -> bool:
    """Return True if a media file/URL is landscape."""
    return classify_orientation(probe_one(media, backend=backend)).is_landscape
