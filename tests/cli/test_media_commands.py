"""Tests for the mediainfo-utils CLI commands.

This test suite covers:
- Exit codes of the predicate commands (0 true, 1 false, status - 300 on errors)
- --quiet suppressing the human-readable sentence
- info output shape for one vs. many media, JSON and tables
- summary-by-type tables, JSON and --skip-missing
- Backend validation before probing, backends listing and default-backend

Rationale:
- The predicate commands are meant for shell loops (``cmd -q f && mv f dir``),
  so their exit codes are the contract.
"""

import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mediainfoutils.cli.commands import app, exit_code_for_status
from mediainfoutils.models.core import ProbeResult

RESPONSES = {
    "portrait.mp4": {"video_width": 1080, "video_height": 1920},
    "rotated.mp4": {"video_width": 1920, "video_height": 1080, "rotate": 90},
    "wide.mp4": {"video_width": 1920, "video_height": 1080, "rotate": 0},
    "song.mp3": {"duration": 180.0},
    "broken.mkv": ProbeResult.failure(500, "ffprobe failed: moov atom not found", "fake"),
}


def _clean(txt: str) -> str:
    _ansi = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")
    return _ansi.sub("", txt)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def backend(fake_backend):
    return fake_backend(RESPONSES)


def test_exit_code_for_status() -> None:
    assert exit_code_for_status(412) == 112
    assert exit_code_for_status(404) == 104
    assert exit_code_for_status(500) == 200
    assert exit_code_for_status(200) == 2


class TestPredicates:
    """Tests for is-portrait, is-landscape and orientation."""

    @pytest.mark.parametrize(
        "media, code, sentence",
        [
            ("portrait.mp4", 0, "Media is portrait"),
            ("rotated.mp4", 0, "Media is portrait"),
            ("wide.mp4", 1, "Media is NOT portrait (landscape)"),
        ],
    )
    def test_is_portrait(self, runner, backend, media, code, sentence) -> None:
        result = runner.invoke(app, ["is-portrait", media])
        assert result.exit_code == code, result.output
        assert sentence in _clean(result.stdout)

    @pytest.mark.parametrize(
        "media, code, sentence",
        [
            ("wide.mp4", 0, "Media is landscape"),
            ("portrait.mp4", 1, "Media is NOT landscape (portrait)"),
        ],
    )
    def test_is_landscape(self, runner, backend, media, code, sentence) -> None:
        result = runner.invoke(app, ["is-landscape", media])
        assert result.exit_code == code, result.output
        assert sentence in _clean(result.stdout)

    @pytest.mark.parametrize("flag", ["-q", "--quiet", "--silent"])
    def test_quiet(self, runner, backend, flag) -> None:
        result = runner.invoke(app, ["is-portrait", flag, "wide.mp4"])
        assert result.exit_code == 1
        assert result.stdout == ""

        result = runner.invoke(app, ["is-landscape", flag, "wide.mp4"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_missing_dimensions(self, runner, backend) -> None:
        result = runner.invoke(app, ["is-portrait", "song.mp3"])
        assert result.exit_code == 112
        assert "Can't determine video width x height" in _clean(result.output)

    def test_probe_failure(self, runner, backend) -> None:
        result = runner.invoke(app, ["is-landscape", "-q", "nothere.mp4"])
        assert result.exit_code == 104
        assert "nothere.mp4" in _clean(result.output)

    def test_orientation(self, runner, backend) -> None:
        result = runner.invoke(app, ["orientation", "rotated.mp4"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "portrait"

        result = runner.invoke(app, ["orientation", "wide.mp4"])
        assert result.stdout.strip() == "landscape"

    def test_orientation_missing_dimensions(self, runner, backend) -> None:
        result = runner.invoke(app, ["orientation", "song.mp3"])
        assert result.exit_code == 112


class TestInfo:
    """Tests for the info command."""

    def test_single_json_is_object(self, runner, backend) -> None:
        result = runner.invoke(app, ["info", "--json", "wide.mp4"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert isinstance(data, dict)
        assert data["media"] == "wide.mp4"
        assert data["info_backend"] == "fake"
        assert data["type_from_name"] == "video"

    def test_batch_json_is_list(self, runner, backend) -> None:
        result = runner.invoke(
            app, ["info", "--json", "wide.mp4", "broken.mkv", "song.mp3"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [item["media"] for item in data] == ["wide.mp4", "song.mp3"]
        # One diagnostic line per skipped item, on stderr only.
        assert result.stderr.count("Can't get media info") == 1
        assert "broken.mkv" in result.stderr
        assert "Can't get media info" not in result.stdout

    def test_batch_table(self, runner, backend) -> None:
        result = runner.invoke(app, ["info", "wide.mp4", "portrait.mp4"])
        assert result.exit_code == 0
        out = _clean(result.stdout)
        assert "wide.mp4" in out
        assert "portrait.mp4" in out
        assert "video_width" in out

    def test_single_failure_exit_code(self, runner, backend) -> None:
        result = runner.invoke(app, ["info", "broken.mkv"])
        assert result.exit_code == 200
        assert "moov atom not found" in _clean(result.output)

    def test_invalid_backend_rejected(self, runner, backend) -> None:
        result = runner.invoke(app, ["info", "--backend", "bad-name", "wide.mp4"])
        assert result.exit_code == 2
        assert backend.calls == []

    def test_unknown_backend_rejected(self, runner, backend) -> None:
        result = runner.invoke(app, ["info", "-b", "quicktime", "wide.mp4"])
        assert result.exit_code == 2
        assert "Unknown backend" in _clean(result.output)
        assert backend.calls == []

    def test_explicit_backend(self, runner, backend, fake_backend) -> None:
        fake_backend({"wide.mp4": {"width": 10, "height": 5}}, name="alt")
        result = runner.invoke(app, ["info", "--json", "-b", "alt", "wide.mp4"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["info_backend"] == "alt"


class TestSummaryByType:
    """Tests for the summary-by-type command."""

    @pytest.fixture
    def files(self, tmp_path: Path) -> list[str]:
        sizes = {"a.mp4": 100, "b.jpg": 50, "c.txt": 10}
        paths = []
        for name, size in sizes.items():
            path = tmp_path / name
            path.write_bytes(b"\0" * size)
            paths.append(str(path))
        return paths

    def test_json(self, runner, files) -> None:
        result = runner.invoke(app, ["summary-by-type", "--json", *files])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows[0] == {"type": "ALL", "count": 3, "total_size": 160}
        assert [row["type"] for row in rows] == [
            "ALL",
            "audio+image+video",
            "image",
            "image+video",
            "unknown",
            "video",
        ]

    def test_table(self, runner, files) -> None:
        result = runner.invoke(app, ["summary-by-type", *files])
        assert result.exit_code == 0
        out = _clean(result.stdout)
        assert "total_size" in out
        assert "160 bytes" in out

    def test_missing_file_aborts(self, runner, files, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["summary-by-type", *files, str(tmp_path / "missing.mp4")]
        )
        assert result.exit_code == 104
        assert "missing.mp4" in _clean(result.output)

    def test_skip_missing(self, runner, files, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["summary-by-type", "--json", "--skip-missing", *files, str(tmp_path / "x.mp4")],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)[0]["count"] == 3


class TestBackendCommands:
    """Tests for backends, default-backend and version."""

    def test_backends_json(self, runner) -> None:
        result = runner.invoke(app, ["backends", "--json"])
        assert result.exit_code == 0
        names = [row["name"] for row in json.loads(result.stdout)]
        assert {"ffprobe", "mediainfo", "pillow"} <= set(names)

    def test_default_backend_roundtrip(self, runner, isolated_config) -> None:
        result = runner.invoke(app, ["default-backend"])
        assert "none" in _clean(result.stdout)

        result = runner.invoke(app, ["default-backend", "pillow"])
        assert result.exit_code == 0
        assert 'default = "pillow"' in isolated_config.CONFIG_FILE.read_text()

        result = runner.invoke(app, ["default-backend"])
        assert "pillow" in _clean(result.stdout)

        result = runner.invoke(app, ["default-backend", "--unset"])
        assert result.exit_code == 0
        assert "default" not in isolated_config.CONFIG_FILE.read_text()

    def test_default_backend_rejects_unknown(self, runner) -> None:
        result = runner.invoke(app, ["default-backend", "nope"])
        assert result.exit_code == 2

    def test_version(self, runner) -> None:
        from mediainfoutils import __version__

        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in _clean(result.stdout)
