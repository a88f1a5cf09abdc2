"""Pillow backend for still images.

Reads image dimensions and the EXIF Orientation tag with Pillow. Remote
images are downloaded with httpx first. Only the header is decoded, pixel data
is never loaded.
"""

import io
import logging
from http import HTTPStatus
from typing import IO, Optional

import httpx
from PIL import Image, UnidentifiedImageError

from mediainfoutils.backends.base import MediaInfoBackend
from mediainfoutils.backends.process import check_local_media
from mediainfoutils.backends.settings import BackendSettings
from mediainfoutils.core.classifier import is_url
from mediainfoutils.models.core import MediaMetadata, ProbeResult

logger = logging.getLogger(__name__)

EXIF_ORIENTATION_TAG = 0x0112

# EXIF Orientation value -> clockwise rotation needed for display. The
# mirrored variants (2, 4, 5, 7) rotate the same way as their neighbours.
EXIF_ROTATION = {1: 0, 2: 0, 3: 180, 4: 180, 5: 270, 6: 90, 7: 90, 8: 270}


def read_image_metadata(fp: IO[bytes]) -> MediaMetadata:
    """Read the metadata of an image from a binary file object.

    Raises:
        PIL.UnidentifiedImageError: If Pillow does not recognise the format.
    """
    with Image.open(fp) as img:
        width, height = img.size
        info: MediaMetadata = {
            "width": width,
            "height": height,
            "image_format": img.format,
            "image_mode": img.mode,
        }
        orientation = img.getexif().get(EXIF_ORIENTATION_TAG)
        if orientation in EXIF_ROTATION:
            info["rotate"] = EXIF_ROTATION[orientation]
        frames = getattr(img, "n_frames", 1)
        if frames > 1:
            info["num_frames"] = frames
    return info


class PillowBackend(MediaInfoBackend):
    """Media info backend for images using Pillow."""

    name = "pillow"

    def __init__(self, settings: Optional[BackendSettings] = None) -> None:
        self.settings = settings or BackendSettings()

    def available(self) -> bool:
        # Pillow is a hard dependency of the package.
        return True

    def _fetch(self, url: str) -> bytes:
        logger.debug("Fetching image %s", url)
        with httpx.Client(
            timeout=self.settings.HTTP_TIMEOUT, follow_redirects=True
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content

    def probe(self, media: str) -> ProbeResult:
        try:
            if is_url(media):
                try:
                    content = self._fetch(media)
                except httpx.HTTPStatusError as exc:
                    return ProbeResult.failure(
                        exc.response.status_code,
                        f"HTTP error fetching image: {exc.response.reason_phrase}",
                        self.name,
                    )
                except httpx.HTTPError as exc:
                    return ProbeResult.failure(
                        HTTPStatus.BAD_GATEWAY, f"Can't fetch image: {exc}", self.name
                    )
                metadata = read_image_metadata(io.BytesIO(content))
            else:
                missing = check_local_media(media, self.name)
                if missing is not None:
                    return missing
                with open(media, "rb") as fp:
                    metadata = read_image_metadata(fp)
        except UnidentifiedImageError:
            return ProbeResult.failure(
                HTTPStatus.PRECONDITION_FAILED, "Not an image Pillow can read", self.name
            )
        except Image.DecompressionBombError as exc:
            return ProbeResult.failure(HTTPStatus.PRECONDITION_FAILED, str(exc), self.name)
        except (OSError, ValueError, SyntaxError) as exc:
            # Corrupt headers and EXIF blocks surface as any of these.
            return ProbeResult.failure(
                HTTPStatus.INTERNAL_SERVER_ERROR, f"Can't read image: {exc}", self.name
            )
        return ProbeResult(metadata=metadata, backend=self.name)
