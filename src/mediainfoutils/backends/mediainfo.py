"""MediaInfo backend.

Reads media with libmediainfo through :mod:`pymediainfo` and maps its
General/Video/Audio/Image tracks onto the common metadata field names.
"""

import logging
from http import HTTPStatus
from typing import Any, Iterable, List, Optional

from pymediainfo import MediaInfo

from mediainfoutils.backends.base import MediaInfoBackend
from mediainfoutils.backends.process import (
    check_local_media,
    normalize_rotation,
    to_float,
    to_int,
)
from mediainfoutils.backends.settings import BackendSettings
from mediainfoutils.models.core import MediaMetadata, ProbeResult

logger = logging.getLogger(__name__)


def _attr(track: Any, name: str) -> Any:
    return getattr(track, name, None)


def _first_track(tracks: List[Any], kind: str) -> Optional[Any]:
    return next((track for track in tracks if _attr(track, "track_type") == kind), None)


def _seconds(milliseconds: Any) -> Optional[float]:
    value = to_float(milliseconds)
    return None if value is None else value / 1000.0


def parse_mediainfo_tracks(tracks: Iterable[Any]) -> MediaMetadata:
    """Flatten pymediainfo tracks into metadata fields.

    Args:
        tracks: ``MediaInfo.tracks`` (objects with ``track_type`` and
            lowercase attribute names).

    Returns:
        The metadata mapping; fields MediaInfo did not report are left out.
    """
    tracks = list(tracks)
    streams = [track for track in tracks if _attr(track, "track_type") != "General"]
    info: MediaMetadata = {"num_streams": len(streams)}

    general = _first_track(tracks, "General")
    if general is not None:
        info.update(
            {
                "duration": _seconds(_attr(general, "duration")),
                "bit_rate": to_int(_attr(general, "overall_bit_rate")),
                "format_name": _attr(general, "format"),
                "title": _attr(general, "title"),
            }
        )

    video = _first_track(tracks, "Video")
    if video is not None:
        width = to_int(_attr(video, "width"))
        height = to_int(_attr(video, "height"))
        info.update(
            {
                "video_codec": _attr(video, "format"),
                "video_width": width,
                "video_height": height,
                "width": width,
                "height": height,
                "video_fps": to_float(_attr(video, "frame_rate")),
                "rotate": normalize_rotation(_attr(video, "rotation")),
            }
        )

    audio = _first_track(tracks, "Audio")
    if audio is not None:
        info.update(
            {
                "audio_codec": _attr(audio, "format"),
                "audio_channels": to_int(_attr(audio, "channel_s")),
                "audio_rate": to_int(_attr(audio, "sampling_rate")),
            }
        )

    image = _first_track(tracks, "Image")
    if image is not None and video is None:
        info.update(
            {
                "width": to_int(_attr(image, "width")),
                "height": to_int(_attr(image, "height")),
                "image_format": _attr(image, "format"),
            }
        )

    return {key: value for key, value in info.items() if value is not None}


class PyMediaInfoBackend(MediaInfoBackend):
    """Media info backend using libmediainfo via pymediainfo."""

    name = "mediainfo"

    def __init__(self, settings: Optional[BackendSettings] = None) -> None:
        self.settings = settings or BackendSettings()

    def available(self) -> bool:
        return MediaInfo.can_parse(self.settings.MEDIAINFO_LIBRARY)

    def probe(self, media: str) -> ProbeResult:
        missing = check_local_media(media, self.name)
        if missing is not None:
            return missing

        logger.debug("Parsing %s with libmediainfo", media)
        try:
            parsed = MediaInfo.parse(media, library_file=self.settings.MEDIAINFO_LIBRARY)
        except FileNotFoundError:
            return ProbeResult.failure(HTTPStatus.NOT_FOUND, "File not found", self.name)
        except OSError as exc:
            return ProbeResult.failure(
                HTTPStatus.PRECONDITION_FAILED, f"Can't use libmediainfo: {exc}", self.name
            )
        except (RuntimeError, ValueError, SyntaxError) as exc:
            return ProbeResult.failure(
                HTTPStatus.INTERNAL_SERVER_ERROR, f"mediainfo failed: {exc}", self.name
            )

        metadata = parse_mediainfo_tracks(parsed.tracks)
        if not metadata.get("format_name") and metadata.get("num_streams", 0) == 0:
            return ProbeResult.failure(
                HTTPStatus.PRECONDITION_FAILED, "mediainfo found no media tracks", self.name
            )
        return ProbeResult(metadata=metadata, backend=self.name)
