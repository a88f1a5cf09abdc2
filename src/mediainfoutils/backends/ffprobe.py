"""ffprobe backend.

Runs ``ffprobe -show_format -show_streams`` with JSON output and flattens the
container and first video/audio streams into the common field names used by
the rest of mediainfoutils. Works for local files and for any URL ffprobe
itself can open.
"""

import logging
from fractions import Fraction
from typing import Any, Dict, Optional

from mediainfoutils.backends.base import MediaInfoBackend
from mediainfoutils.backends.process import (
    check_local_media,
    normalize_rotation,
    run_json_tool,
    to_float,
    to_int,
    tool_available,
)
from mediainfoutils.backends.settings import BackendSettings
from mediainfoutils.models.core import MediaMetadata, ProbeResult

logger = logging.getLogger(__name__)


def _frame_rate(value: Optional[str]) -> Optional[float]:
    """Convert an ffprobe rate such as ``30000/1001`` to frames per second."""
    if not value:
        return None
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError):
        return None
    if rate <= 0:
        return None
    return round(float(rate), 3)


def _stream_rotation(stream: Dict[str, Any]) -> Optional[int]:
    """Read the display rotation of a video stream.

    Older files carry a ``rotate`` tag (clockwise degrees). Newer ffprobe
    versions report a display matrix whose ``rotation`` is counter-clockwise,
    so it is negated.
    """
    tags = stream.get("tags") or {}
    if "rotate" in tags:
        return normalize_rotation(tags["rotate"])
    for side_data in stream.get("side_data_list") or []:
        if "rotation" in side_data:
            rotation = to_float(side_data["rotation"])
            if rotation is not None:
                return normalize_rotation(-rotation)
    return None


def _first_stream(data: Dict[str, Any], codec_type: str) -> Optional[Dict[str, Any]]:
    for stream in data.get("streams") or []:
        if stream.get("codec_type") != codec_type:
            continue
        # Embedded cover art shows up as a one-frame video stream.
        if (stream.get("disposition") or {}).get("attached_pic"):
            continue
        return stream
    return None


def parse_ffprobe_output(data: Dict[str, Any]) -> MediaMetadata:
    """Flatten ffprobe JSON into mediainfoutils metadata fields.

    Args:
        data: Parsed output of ``ffprobe -print_format json -show_format
            -show_streams``.

    Returns:
        The metadata mapping; fields ffprobe did not report are left out.
    """
    fmt = data.get("format") or {}
    info: MediaMetadata = {
        "duration": to_float(fmt.get("duration")),
        "bit_rate": to_int(fmt.get("bit_rate")),
        "format_name": fmt.get("format_name"),
        "title": (fmt.get("tags") or {}).get("title"),
        "num_streams": len(data.get("streams") or []),
    }

    video = _first_stream(data, "video")
    if video is not None:
        width = to_int(video.get("width"))
        height = to_int(video.get("height"))
        info.update(
            {
                "video_codec": video.get("codec_name"),
                "video_width": width,
                "video_height": height,
                "width": width,
                "height": height,
                "video_fps": _frame_rate(video.get("avg_frame_rate"))
                or _frame_rate(video.get("r_frame_rate")),
                "rotate": _stream_rotation(video),
            }
        )

    audio = _first_stream(data, "audio")
    if audio is not None:
        info.update(
            {
                "audio_codec": audio.get("codec_name"),
                "audio_channels": to_int(audio.get("channels")),
                "audio_rate": to_int(audio.get("sample_rate")),
            }
        )

    return {key: value for key, value in info.items() if value is not None}


class FFProbeBackend(MediaInfoBackend):
    """Media info backend using ffprobe from FFmpeg."""

    name = "ffprobe"

    def __init__(self, settings: Optional[BackendSettings] = None) -> None:
        self.settings = settings or BackendSettings()

    def available(self) -> bool:
        return tool_available(self.settings.FFPROBE_PATH)

    def probe(self, media: str) -> ProbeResult:
        missing = check_local_media(media, self.name)
        if missing is not None:
            return missing

        cmd = [
            self.settings.FFPROBE_PATH,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            media,
        ]
        data = run_json_tool(cmd, self.name, self.settings.PROBE_TIMEOUT)
        if isinstance(data, ProbeResult):
            return data
        return ProbeResult(metadata=parse_ffprobe_output(data), backend=self.name)
