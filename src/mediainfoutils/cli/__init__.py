"""Command-line interface for mediainfoutils.

- app: The Typer application with every subcommand (``mediainfo-utils``).
- scripts: single-command entry points (``media-info``, ``media-is-portrait``,
  ...), one per subcommand.
"""

from mediainfoutils.cli.commands import app

__all__ = ["app"]
