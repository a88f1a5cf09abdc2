"""Tests for the MediaInfo (pymediainfo) backend.

libmediainfo is never loaded: ``MediaInfo.parse`` is patched to return
canned tracks shaped like pymediainfo's.
"""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from pymediainfo import MediaInfo

from mediainfoutils.backends.mediainfo import PyMediaInfoBackend, parse_mediainfo_tracks
from mediainfoutils.backends.settings import BackendSettings

MOV_TRACKS = [
    SimpleNamespace(
        track_type="General", format="MPEG-4", duration=8342, overall_bit_rate=15872345
    ),
    SimpleNamespace(
        track_type="Video",
        format="HEVC",
        width=3840,
        height=2160,
        frame_rate="29.970",
        rotation="90.000",
    ),
    SimpleNamespace(track_type="Audio", format="AAC", channel_s=2, sampling_rate=44100),
]

JPEG_TRACKS = [
    SimpleNamespace(track_type="General", format="JPEG"),
    SimpleNamespace(track_type="Image", format="JPEG", width=4032, height=3024),
]


@pytest.fixture
def media_file(tmp_path: Path) -> str:
    path = tmp_path / "clip.mov"
    path.write_bytes(b"\x00")
    return str(path)


def test_parse_video() -> None:
    info = parse_mediainfo_tracks(MOV_TRACKS)
    assert info["video_width"] == 3840
    assert info["video_height"] == 2160
    assert info["rotate"] == 90
    assert info["video_codec"] == "HEVC"
    assert info["video_fps"] == 29.97
    assert info["audio_channels"] == 2
    assert info["audio_rate"] == 44100
    assert info["duration"] == 8.342
    assert info["bit_rate"] == 15872345
    assert info["format_name"] == "MPEG-4"
    assert info["num_streams"] == 2


def test_parse_image() -> None:
    info = parse_mediainfo_tracks(JPEG_TRACKS)
    assert info["width"] == 4032
    assert info["height"] == 3024
    assert info["image_format"] == "JPEG"
    assert "video_width" not in info


def test_parse_general_only() -> None:
    info = parse_mediainfo_tracks([SimpleNamespace(track_type="General", format="Wave")])
    assert info["format_name"] == "Wave"
    assert info["num_streams"] == 0


def test_probe(media_file: str) -> None:
    settings = BackendSettings(MEDIAINFO_LIBRARY="/opt/lib/libmediainfo.so.0")
    with patch.object(
        MediaInfo, "parse", return_value=SimpleNamespace(tracks=MOV_TRACKS)
    ) as parse:
        result = PyMediaInfoBackend(settings).probe(media_file)
    assert result.ok
    assert result.backend == "mediainfo"
    assert result.metadata["rotate"] == 90
    parse.assert_called_once_with(media_file, library_file="/opt/lib/libmediainfo.so.0")


def test_probe_no_tracks(tmp_path: Path) -> None:
    media = tmp_path / "notes.txt"
    media.write_text("hello")
    with patch.object(MediaInfo, "parse", return_value=SimpleNamespace(tracks=[])):
        result = PyMediaInfoBackend().probe(str(media))
    assert result.status == 412


def test_probe_missing_file(tmp_path: Path) -> None:
    with patch.object(MediaInfo, "parse") as parse:
        result = PyMediaInfoBackend().probe(str(tmp_path / "missing.mov"))
    assert result.status == 404
    parse.assert_not_called()


@pytest.mark.parametrize(
    "error, status",
    [
        (OSError("libmediainfo.so.0: cannot open shared object file"), 412),
        (RuntimeError("An error occurred while opening the file"), 500),
    ],
)
def test_probe_errors_become_results(media_file: str, error: Exception, status: int) -> None:
    with patch.object(MediaInfo, "parse", side_effect=error):
        result = PyMediaInfoBackend().probe(media_file)
    assert result.status == status
    assert result.backend == "mediainfo"


def test_available() -> None:
    with patch.object(MediaInfo, "can_parse", return_value=False):
        assert PyMediaInfoBackend().available() is False
    with patch.object(MediaInfo, "can_parse", return_value=True):
        assert PyMediaInfoBackend().available() is True
