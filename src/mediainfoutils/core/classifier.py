"""Media type classification from file names.

This module guesses whether a file or URL is video, audio or an image from its
extension alone. File contents are never inspected, so classification is cheap
enough for summarising large batches.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import Union
from urllib.parse import urlsplit

from mediainfoutils.models.core import MediaType

# Logger for this module
logger = logging.getLogger(__name__)

# Lowercase extensions, leading dot included.
MEDIA_EXTENSIONS = {
    MediaType.VIDEO: {
        ".3g2",
        ".3gp",
        ".asf",
        ".avi",
        ".divx",
        ".dv",
        ".f4v",
        ".flv",
        ".m2ts",
        ".m2v",
        ".m4v",
        ".mkv",
        ".mov",
        ".mp4",
        ".mpeg",
        ".mpg",
        ".mts",
        ".mxf",
        ".ogm",
        ".ogv",
        ".qt",
        ".rm",
        ".rmvb",
        ".ts",
        ".vob",
        ".webm",
        ".wmv",
    },
    MediaType.AUDIO: {
        ".aac",
        ".ac3",
        ".aif",
        ".aifc",
        ".aiff",
        ".alac",
        ".amr",
        ".ape",
        ".au",
        ".dts",
        ".flac",
        ".m4a",
        ".m4b",
        ".mid",
        ".midi",
        ".mka",
        ".mp2",
        ".mp3",
        ".mpc",
        ".oga",
        ".ogg",
        ".opus",
        ".ra",
        ".wav",
        ".wma",
        ".wv",
    },
    MediaType.IMAGE: {
        ".avif",
        ".bmp",
        ".cr2",
        ".dng",
        ".gif",
        ".heic",
        ".heif",
        ".ico",
        ".jfif",
        ".jp2",
        ".jpe",
        ".jpeg",
        ".jpg",
        ".nef",
        ".pcx",
        ".png",
        ".psd",
        ".svg",
        ".tga",
        ".tif",
        ".tiff",
        ".webp",
        ".xcf",
    },
}


def is_url(media: str) -> bool:
    """Check whether a media reference looks like a URL rather than a path.

    Args:
        media: The media reference to check.

    Returns:
        True if the reference has a network scheme (http, https, ftp, ...).
    """
    scheme = urlsplit(media).scheme
    # A single letter is a Windows drive (C:\...), not a scheme.
    return len(scheme) > 1


def _name_part(name: Union[str, Path]) -> str:
    """Return the final path component, dropping URL query and fragment."""
    if isinstance(name, Path):
        return name.name
    if is_url(name):
        return PurePosixPath(urlsplit(name).path).name
    return PurePosixPath(name.replace("\\", "/")).name


def type_from_name(name: Union[str, Path]) -> MediaType:
    """Guess the media type of a file or URL from its extension.

    Args:
        name: A file path or URL.

    Returns:
        The MediaType for the extension, or MediaType.UNKNOWN.
    """
    ext = PurePosixPath(_name_part(name)).suffix.lower()
    if not ext:
        return MediaType.UNKNOWN

    for media_type, extensions in MEDIA_EXTENSIONS.items():
        if ext in extensions:
            return media_type

    logger.debug("No media type for extension %s (%s)", ext, name)
    return MediaType.UNKNOWN
