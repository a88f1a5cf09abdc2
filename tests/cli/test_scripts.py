"""Tests for the standalone media-* console scripts."""

import sys

import pytest

from mediainfoutils.cli import scripts

RESPONSES = {
    "tall.mp4": {"video_width": 720, "video_height": 1280},
    "wide.mp4": {"video_width": 1280, "video_height": 720},
}


def _run_script(monkeypatch, func, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", [func.__name__.replace("_", "-"), *args])
    with pytest.raises(SystemExit) as excinfo:
        func()
    return excinfo.value.code or 0


def test_media_orientation(monkeypatch, capsys, fake_backend):
    fake_backend(RESPONSES)
    assert _run_script(monkeypatch, scripts.media_orientation, "tall.mp4") == 0
    assert capsys.readouterr().out.strip() == "portrait"


def test_media_is_portrait_quiet(monkeypatch, capsys, fake_backend):
    fake_backend(RESPONSES)
    assert _run_script(monkeypatch, scripts.media_is_portrait, "-q", "tall.mp4") == 0
    assert _run_script(monkeypatch, scripts.media_is_portrait, "-q", "wide.mp4") == 1
    assert capsys.readouterr().out == ""


def test_media_is_landscape(monkeypatch, fake_backend):
    fake_backend(RESPONSES)
    assert _run_script(monkeypatch, scripts.media_is_landscape, "-q", "wide.mp4") == 0


def test_media_info_json(monkeypatch, capsys, fake_backend):
    fake_backend(RESPONSES)
    assert _run_script(monkeypatch, scripts.media_info, "--json", "wide.mp4") == 0
    assert '"video_width": 1280' in capsys.readouterr().out


def test_media_summary_by_type(monkeypatch, capsys, tmp_path):
    song = tmp_path / "song.mp3"
    song.write_bytes(b"\0" * 42)
    assert _run_script(monkeypatch, scripts.media_summary_by_type, "--json", str(song)) == 0
    out = capsys.readouterr().out
    assert '"type": "audio"' in out
    assert '"total_size": 42' in out
