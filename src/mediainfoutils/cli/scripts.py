"""Standalone console scripts, one per command.

Each script runs a single command of :mod:`mediainfoutils.cli.commands`
directly, e.g. ``media-is-portrait -q clip.mp4`` instead of
``mediainfo-utils is-portrait -q clip.mp4``.
"""

from typing import Any, Callable

import typer

from mediainfoutils.cli import commands
from mediainfoutils.utils.debug import setup_logger


def _run(command: Callable[..., Any]) -> None:
    setup_logger()
    typer.run(command)


def media_info() -> None:
    """Entry point for ``media-info``."""
    _run(commands.info)


def media_is_portrait() -> None:
    """Entry point for ``media-is-portrait``."""
    _run(commands.is_portrait)


def media_is_landscape() -> None:
    """Entry point for ``media-is-landscape``."""
    _run(commands.is_landscape)


def media_orientation() -> None:
    """Entry point for ``media-orientation``."""
    _run(commands.orientation)


def media_summary_by_type() -> None:
    """Entry point for ``media-summary-by-type``."""
    _run(commands.summary_by_type)
