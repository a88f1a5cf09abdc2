"""Console utilities & context manager for CLI commands.

This module centralises Rich configuration for CLI commands:

* Pretty traceback installation with show_locals enabled.
* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console` for stdout, or stderr with ``stderr=True``.
* Opt-out via the ``--no-rich`` flag (sets env var ``MEDIAINFOUTILS_NO_RICH``)
  or the environment variable being set externally.

Consoles are created per command invocation rather than at import time so
that they bind to the streams in effect when the command runs (which is what
``typer.testing.CliRunner`` swaps out).
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.traceback import install as install_rich_traceback

__all__ = ["ConsoleManager", "rich_enabled"]

# ENV VAR used to disable rich output entirely (useful for piping or testing)
_ENV_DISABLE_RICH = "MEDIAINFOUTILS_NO_RICH"


def rich_enabled() -> bool:
    """Whether Rich styling is enabled for this process."""
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    stderr:
        Write to stderr instead of stdout (diagnostics and errors).
    force_use:
        When *True* / *False* this overrides autodetection and forces rich
        enabled/disabled. When *None*, autodetect via ``MEDIAINFOUTILS_NO_RICH``.
    console_kwargs:
        Additional keyword arguments forwarded verbatim to the Console.
    """

    def __init__(
        self,
        *,
        stderr: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._stderr = stderr
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        use_rich = self._force_use if self._force_use is not None else rich_enabled()

        if use_rich:
            self.console = Console(stderr=self._stderr, **self._console_kwargs)
        else:
            # Disable colour, otherwise output may contain escape codes.
            self.console = Console(
                stderr=self._stderr,
                color_system=None,
                force_terminal=False,
                **self._console_kwargs,
            )

        install_rich_traceback(show_locals=True, console=self.console)
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()
        # Propagate exceptions, typer.Exit included.
        return False
