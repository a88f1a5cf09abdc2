"""Exceptions raised by mediainfoutils.

Every error carries an HTTP-like ``status`` so the CLI can map it onto an
exit code (see :func:`mediainfoutils.cli.commands.exit_code_for_status`).

- BackendProbeFailure: a backend could not probe one media item. Batch callers
  catch it per item and keep going.
- MissingDimensions: width/height could not be resolved, so orientation is
  undefined.
- FilesystemAccessFailure: a file size lookup failed while summarising.
- InvalidBackendName / UnknownBackend: rejected before any probing happens.
"""

from http import HTTPStatus


class MediaInfoUtilsError(Exception):
    """Base class for all mediainfoutils errors."""

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR


class BackendProbeFailure(MediaInfoUtilsError):
    """Raised when a backend returns a non-200 result for a media item."""

    def __init__(self, media: str, message: str, status: int) -> None:
        """Initialize the error with the failing media and backend result."""
        super().__init__(f"Can't get media info for '{media}': {message} ({status})")
        self.media = media
        self.message = message
        self.status = status


class MissingDimensions(MediaInfoUtilsError):
    """Raised when width x height cannot be determined from metadata."""

    status = HTTPStatus.PRECONDITION_FAILED

    def __init__(self, media: str | None = None) -> None:
        """Initialize the error, optionally naming the media item."""
        msg = "Can't determine video width x height"
        if media:
            msg = f"{msg} for '{media}'"
        super().__init__(msg)
        self.media = media


class FilesystemAccessFailure(MediaInfoUtilsError):
    """Raised when the size of a file cannot be read."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, path: str, reason: str = "") -> None:
        """Initialize the error with the inaccessible path."""
        msg = f"Can't read size of '{path}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class InvalidBackendName(MediaInfoUtilsError):
    """Raised when a backend name is not a simple identifier."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, name: str, message: str | None = None) -> None:
        """Initialize the error with the rejected name."""
        super().__init__(message or f"Invalid backend name: {name!r}")
        self.name = name


class UnknownBackend(InvalidBackendName):
    """Raised when a well-formed backend name is not registered."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        """Initialize the error, listing the registered backends if known."""
        msg = f"Unknown backend: {name!r}"
        if available:
            msg = f"{msg} (available: {', '.join(available)})"
        super().__init__(name, msg)
