"""Base abstraction for media info backends.

Defines the interface every probing backend (ffprobe, mediainfo, Pillow, ...)
implements. Backends are looked up by name in the registry in
:mod:`mediainfoutils.backends`.
"""

from abc import ABC, abstractmethod

from mediainfoutils.models.core import ProbeResult


class MediaInfoBackend(ABC):
    """Abstract base class for all media info backends.

    A backend turns one media reference into a :class:`ProbeResult`. It must
    not raise for media it cannot handle: missing files, unsupported formats
    and tool errors are all reported through a non-200 status so that batch
    callers can skip the item and continue.
    """

    name: str = ""
    """Registry key of the backend, also reported as ``info_backend``."""

    @abstractmethod
    def available(self) -> bool:
        """Whether the underlying tool or library can be used on this host."""
        raise NotImplementedError

    @abstractmethod
    def probe(self, media: str) -> ProbeResult:
        """Probe a media file or URL.

        Args:
            media: File path or URL of the media item.

        Returns:
            A ProbeResult; ``status`` is 200 on success.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
