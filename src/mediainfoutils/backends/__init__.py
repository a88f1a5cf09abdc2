"""Media info backends and the registry that selects them by name.

- register_backend / get_backend / list_available_backends manage the
  name -> backend class registry.
- probe() is the single entry point used by the core: it probes one media
  reference with an explicit backend, the configured default backend, or each
  backend of the configured order in turn.

Backend names are validated (``^\\w+$``) and looked up before any probing, so
a typo fails fast instead of once per media item.
"""

import logging
import re
from http import HTTPStatus
from typing import Dict, List, Optional, Type

from mediainfoutils.backends.base import MediaInfoBackend
from mediainfoutils.backends.ffprobe import FFProbeBackend
from mediainfoutils.backends.mediainfo import PyMediaInfoBackend
from mediainfoutils.backends.pillow import PillowBackend
from mediainfoutils.errors import InvalidBackendName, UnknownBackend
from mediainfoutils.models.core import ProbeResult
from mediainfoutils.utils.config import get_backend_order, get_default_backend

logger = logging.getLogger(__name__)

BACKEND_NAME_PATTERN = re.compile(r"\w+")

# Tried in this order when neither the caller nor the config names a backend.
DEFAULT_BACKEND_ORDER = ["ffprobe", "mediainfo", "pillow"]

_BACKENDS: Dict[str, Type[MediaInfoBackend]] = {}


def validate_backend_name(name: str) -> str:
    """Check that *name* is a simple identifier.

    Raises:
        InvalidBackendName: If the name does not match ``^\\w+$``.
    """
    if not isinstance(name, str) or not BACKEND_NAME_PATTERN.fullmatch(name):
        raise InvalidBackendName(str(name))
    return name


def register_backend(name: str, backend_cls: Type[MediaInfoBackend]) -> None:
    """Register a backend class under *name*, replacing any previous one."""
    _BACKENDS[validate_backend_name(name)] = backend_cls


def unregister_backend(name: str) -> None:
    """Remove a backend from the registry (no-op if it is not registered)."""
    _BACKENDS.pop(name, None)


def list_available_backends() -> List[str]:
    """Return the names of all registered backends in registration order."""
    return list(_BACKENDS)


def get_backend(name: str) -> MediaInfoBackend:
    """Instantiate the backend registered under *name*.

    Raises:
        InvalidBackendName: If the name is malformed.
        UnknownBackend: If no backend is registered under the name.
    """
    backend_cls = _BACKENDS.get(validate_backend_name(name))
    if backend_cls is None:
        raise UnknownBackend(name, list_available_backends())
    return backend_cls()


def select_backend(backend: Optional[str] = None) -> Optional[str]:
    """Resolve the backend to use for a call, validating it up front.

    Args:
        backend: Backend requested by the caller, if any.

    Returns:
        The explicit or configured default backend name, or None when every
        backend of the configured order should be tried.

    Raises:
        InvalidBackendName: If the name is malformed.
        UnknownBackend: If the name is not registered.
    """
    name = backend if backend is not None else get_default_backend()
    if name is None:
        return None
    if validate_backend_name(name) not in _BACKENDS:
        raise UnknownBackend(name, list_available_backends())
    return name


def probe(media: str, backend: Optional[str] = None) -> ProbeResult:
    """Probe one media reference.

    With a backend (explicit or configured default) only that backend is
    used. Otherwise the backends of the configured order are tried: ones that
    are not available on this host are skipped, the first successful result
    wins, and if all fail the last failure is returned.

    Args:
        media: File path or URL.
        backend: Optional backend name.

    Returns:
        The ProbeResult, with ``backend`` set to the backend that produced it.
    """
    name = select_backend(backend)
    if name is not None:
        result = get_backend(name).probe(media)
        result.backend = result.backend or name
        return result

    last_failure: Optional[ProbeResult] = None
    for candidate in get_backend_order(DEFAULT_BACKEND_ORDER):
        if candidate not in _BACKENDS:
            logger.debug("Skipping unregistered backend %s in backend order", candidate)
            continue
        impl = get_backend(candidate)
        if not impl.available():
            logger.debug("Backend %s is not available, skipping", candidate)
            continue
        result = impl.probe(media)
        result.backend = result.backend or candidate
        if result.ok:
            return result
        logger.debug(
            "Backend %s failed for %s: %s (%s)",
            candidate,
            media,
            result.message,
            result.status,
        )
        last_failure = result

    if last_failure is not None:
        return last_failure
    return ProbeResult.failure(
        HTTPStatus.PRECONDITION_FAILED, "No media info backend available"
    )


register_backend(FFProbeBackend.name, FFProbeBackend)
register_backend(PyMediaInfoBackend.name, PyMediaInfoBackend)
register_backend(PillowBackend.name, PillowBackend)

__all__ = [
    "DEFAULT_BACKEND_ORDER",
    "MediaInfoBackend",
    "get_backend",
    "list_available_backends",
    "probe",
    "register_backend",
    "select_backend",
    "unregister_backend",
    "validate_backend_name",
]
