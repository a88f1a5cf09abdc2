"""Helpers for backends that shell out to a JSON-emitting command-line tool."""

import json
import logging
import math
import shutil
import subprocess
from http import HTTPStatus
from pathlib import Path
from typing import Any, Sequence

from mediainfoutils.core.classifier import is_url
from mediainfoutils.models.core import ProbeResult

logger = logging.getLogger(__name__)


def tool_available(executable: str) -> bool:
    """Check whether *executable* is an existing file or found on PATH."""
    return shutil.which(executable) is not None


def check_local_media(media: str, backend: str) -> ProbeResult | None:
    """Return a 404 result when a local (non-URL) media file does not exist."""
    if is_url(media):
        return None
    path = Path(media)
    if not path.exists():
        return ProbeResult.failure(HTTPStatus.NOT_FOUND, "File not found", backend)
    if not path.is_file():
        return ProbeResult.failure(
            HTTPStatus.PRECONDITION_FAILED, "Not a regular file", backend
        )
    return None


def _decode(output: bytes | str | None) -> str:
    # Tags are not always UTF-8 (e.g. Latin-1 titles).
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def run_json_tool(
    cmd: Sequence[str], backend: str, timeout: float
) -> dict[str, Any] | ProbeResult:
    """Run a tool that prints JSON on stdout.

    Args:
        cmd: Full command line, executable first.
        backend: Backend name, used in failure results.
        timeout: Seconds before the tool is killed.

    Returns:
        The parsed JSON object, or a failed ProbeResult.
    """
    tool = Path(cmd[0]).name
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            list(cmd),
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        return ProbeResult.failure(
            HTTPStatus.PRECONDITION_FAILED, f"{cmd[0]} is not installed", backend
        )
    except subprocess.TimeoutExpired:
        return ProbeResult.failure(
            HTTPStatus.GATEWAY_TIMEOUT, f"{tool} timed out after {timeout:g}s", backend
        )
    except OSError as exc:
        return ProbeResult.failure(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Can't run {tool}: {exc}", backend
        )

    if proc.returncode != 0:
        stderr_lines = _decode(proc.stderr).strip().splitlines()
        detail = stderr_lines[-1] if stderr_lines else f"exit code {proc.returncode}"
        return ProbeResult.failure(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"{tool} failed: {detail}", backend
        )

    try:
        data = json.loads(_decode(proc.stdout) or "{}")
    except json.JSONDecodeError as exc:
        return ProbeResult.failure(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Can't parse {tool} output: {exc}", backend
        )
    if not isinstance(data, dict):
        return ProbeResult.failure(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Unexpected {tool} output", backend
        )
    return data


def to_int(value: Any) -> int | None:
    """Convert a tool-reported value to int, returning None when impossible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).replace(" ", "")))
    except (ValueError, OverflowError):
        return None


def to_float(value: Any) -> float | None:
    """Convert a tool-reported value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def normalize_rotation(value: Any) -> int | None:
    """Normalise a rotation in degrees to the range 0..359."""
    degrees = to_float(value)
    if degrees is None:
        return None
    return int(round(degrees)) % 360
