"""CLI commands for mediainfoutils.

This module implements all user-facing CLI commands: info, is-portrait,
is-landscape, orientation, summary-by-type, backends, default-backend and
version.
- Uses Typer for declarative CLI structure and option parsing.
- All human-readable output is routed through Rich consoles; ``--json``
  output is written to stdout verbatim so it can be piped.
- Diagnostics for skipped batch items come from the ``mediainfoutils``
  logger on stderr.

Design:
- Annotated aliases define the shared arguments/options once (media,
  backend, quiet, json).
- Exit codes are defined as an Enum. Errors carrying an HTTP-like status map
  to ``status - 300`` (412 -> 112, 404 -> 104, 500 -> 200).
"""

import json
import sys
from enum import Enum
from typing import Annotated, Any, List, NoReturn, Optional

import typer
from rich.markup import escape
from rich.traceback import install as install_traceback

from mediainfoutils.backends import (
    get_backend,
    list_available_backends,
    validate_backend_name,
)
from mediainfoutils.cli.console import ConsoleManager
from mediainfoutils.cli.renderer import (
    render_backends,
    render_info,
    render_info_list,
    render_summary,
)
from mediainfoutils.core.info import media_info
from mediainfoutils.core.orientation import (
    media_is_landscape,
    media_is_portrait,
    media_orientation,
)
from mediainfoutils.core.summary import summarize_by_type
from mediainfoutils.errors import InvalidBackendName, MediaInfoUtilsError
from mediainfoutils.utils.config import get_default_backend, set_default_backend
from mediainfoutils.utils.debug import setup_logger

# Install rich traceback handler
install_traceback(show_locals=True)

app = typer.Typer(
    name="mediainfo-utils",
    help="Get (metadata) information from media files/URLs.",
    add_completion=True,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    PREDICATE_FALSE = 1
    ERROR = 2


def exit_code_for_status(status: int) -> int:
    """Map an HTTP-like error status to a process exit code.

    4xx/5xx statuses become ``status - 300`` so they stay distinguishable
    from the 0/1 answers of the predicate commands.
    """
    if 400 <= status <= 555:
        return status - 300
    return ExitCode.ERROR


def _fail(exc: MediaInfoUtilsError) -> NoReturn:
    """Report *exc* on stderr and exit with its mapped exit code."""
    with ConsoleManager(stderr=True) as err_console:
        err_console.print(
            f"[red]Error: {escape(str(exc))}[/red]", highlight=False, soft_wrap=True
        )
    raise typer.Exit(exit_code_for_status(int(exc.status)))


def _write_json(data: Any) -> None:
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")


def _validate_backend(value: Optional[str]) -> Optional[str]:
    """Reject malformed or unregistered backend names before probing."""
    if value is None:
        return None
    try:
        validate_backend_name(value)
    except InvalidBackendName as e:
        raise typer.BadParameter(str(e))
    if value not in list_available_backends():
        raise typer.BadParameter(
            f"Unknown backend {value!r}. "
            f"Must be one of: {', '.join(list_available_backends())}"
        )
    return value


def _complete_backend(incomplete: str) -> List[str]:
    return [name for name in list_available_backends() if name.startswith(incomplete)]


MEDIA_MULTIPLE = Annotated[
    List[str],
    typer.Argument(help="Media files/URLs", show_default=False),
]

MEDIA_SINGLE = Annotated[
    str,
    typer.Argument(help="Media file/URL", show_default=False),
]

BACKEND = Annotated[
    Optional[str],
    typer.Option(
        "--backend",
        "-b",
        help="Choose a specific backend",
        callback=_validate_backend,
        autocompletion=_complete_backend,
    ),
]

QUIET = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        "--silent",
        help="Don't output anything on command-line, just return appropriate exit code",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output machine-readable JSON"),
]

SKIP_MISSING = Annotated[
    bool,
    typer.Option(
        "--skip-missing",
        help="Skip (and log) files whose size can't be read instead of aborting",
    ),
]


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the MEDIAINFOUTILS_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Get (metadata) information from media files/URLs."""
    setup_logger(debug=True if debug else None)
    if no_rich:
        import os

        os.environ["MEDIAINFOUTILS_NO_RICH"] = "1"


@app.command()
def info(
    media: MEDIA_MULTIPLE,
    backend: BACKEND = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Get information about media files/URLs.

    With a single media file the metadata is shown directly; with several,
    items that can't be probed are reported on stderr and skipped.
    """
    try:
        result = media_info(media, backend=backend)
    except MediaInfoUtilsError as exc:
        _fail(exc)

    if json_output:
        _write_json(result)
        return
    with ConsoleManager() as console:
        if isinstance(result, dict):
            render_info(result, console=console)
        else:
            render_info_list(result, console=console)


@app.command("is-portrait")
def is_portrait(
    media: MEDIA_SINGLE,
    backend: BACKEND = None,
    quiet: QUIET = False,
) -> None:
    """Return exit code 0 if media is portrait.

    Portrait is defined as having 'rotate' metadata of 90 or 270 when the
    width > height, or no such rotation when width <= height. Otherwise, media
    is assumed to be 'landscape'.

    Example, move all portrait videos to portrait/:

        for f in *.mp4; do mediainfo-utils is-portrait -q "$f" && mv "$f" portrait/; done
    """
    try:
        portrait = media_is_portrait(media, backend=backend)
    except MediaInfoUtilsError as exc:
        _fail(exc)

    if not quiet:
        with ConsoleManager() as console:
            console.print(
                "Media is " + ("portrait" if portrait else "NOT portrait (landscape)")
            )
    raise typer.Exit(ExitCode.SUCCESS if portrait else ExitCode.PREDICATE_FALSE)


@app.command("is-landscape")
def is_landscape(
    media: MEDIA_SINGLE,
    backend: BACKEND = None,
    quiet: QUIET = False,
) -> None:
    """Return exit code 0 if media is landscape.

    Landscape is the complement of portrait: see ``is-portrait``.

    Example, convert all landscape mkv videos to mp4:

        for f in *.mkv; do mediainfo-utils is-landscape -q "$f" && ffmpeg -i "$f" "$f.mp4"; done
    """
    try:
        landscape = media_is_landscape(media, backend=backend)
    except MediaInfoUtilsError as exc:
        _fail(exc)

    if not quiet:
        with ConsoleManager() as console:
            console.print(
                "Media is " + ("landscape" if landscape else "NOT landscape (portrait)")
            )
    raise typer.Exit(ExitCode.SUCCESS if landscape else ExitCode.PREDICATE_FALSE)


@app.command()
def orientation(
    media: MEDIA_SINGLE,
    backend: BACKEND = None,
) -> None:
    """Return orientation of media ('portrait' or 'landscape')."""
    try:
        result = media_orientation(media, backend=backend)
    except MediaInfoUtilsError as exc:
        _fail(exc)
    typer.echo(result.value)


@app.command("summary-by-type")
def summary_by_type(
    media: MEDIA_MULTIPLE,
    json_output: JSON_OUTPUT = False,
    skip_missing: SKIP_MISSING = False,
) -> None:
    """Summarize media by types (from filenames)."""
    try:
        rows = summarize_by_type(media, skip_missing=skip_missing)
    except MediaInfoUtilsError as exc:
        _fail(exc)

    if json_output:
        _write_json([row.model_dump() for row in rows])
        return
    with ConsoleManager() as console:
        render_summary(rows, console=console)


@app.command()
def backends(json_output: JSON_OUTPUT = False) -> None:
    """List the registered media info backends and their availability."""
    statuses = [(name, get_backend(name).available()) for name in list_available_backends()]
    default = get_default_backend()
    if json_output:
        _write_json(
            [
                {"name": name, "available": available, "default": name == default}
                for name, available in statuses
            ]
        )
        return
    with ConsoleManager() as console:
        render_backends(statuses, default=default, console=console)


@app.command("default-backend")
def default_backend(
    name: Annotated[
        Optional[str],
        typer.Argument(
            help="Backend to use when --backend is not given",
            callback=_validate_backend,
            autocompletion=_complete_backend,
        ),
    ] = None,
    unset: Annotated[
        bool, typer.Option("--unset", help="Go back to trying every backend in order")
    ] = False,
) -> None:
    """Show or set the default media info backend."""
    with ConsoleManager() as console:
        if unset:
            set_default_backend(None)
            console.print("Default backend unset")
        elif name:
            set_default_backend(name)
            console.print(f"Default backend set to [bold]{name}[/bold]")
        else:
            console.print(get_default_backend() or "(none, backends are tried in order)")


@app.command()
def version() -> None:
    """Show the version of mediainfoutils."""
    from mediainfoutils.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"mediainfo-utils version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
