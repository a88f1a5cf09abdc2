"""Shared fixtures for the mediainfoutils test suite."""

from typing import Any, Callable, Iterator, Mapping, Type

import pytest

from mediainfoutils import backends
from mediainfoutils.backends.base import MediaInfoBackend
from mediainfoutils.utils import config as cfg
from tests.helpers.fake_backend import make_fake_backend


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> Iterator[Any]:
    """Point the config file at a temp dir and clear MEDIAINFOUTILS_* env vars.

    Keeps a developer's own default backend or backend order from leaking
    into tests.
    """
    config_dir = tmp_path / "config"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    for var in ("BACKEND_DEFAULT", "BACKEND_ORDER", "DEBUG", "NO_RICH"):
        monkeypatch.delenv(f"MEDIAINFOUTILS_{var}", raising=False)
    yield cfg


@pytest.fixture
def fake_backend(monkeypatch) -> Callable[..., Type[MediaInfoBackend]]:
    """Register an in-memory backend and make it the only one tried.

    Returns a factory taking ``responses`` (media -> metadata or ProbeResult)
    and optional ``name``/``available``; registrations are undone after the
    test.
    """
    registered: list[str] = []

    def factory(
        responses: Mapping[str, Any],
        name: str = "fake",
        available: bool = True,
    ) -> Type[MediaInfoBackend]:
        backend_cls = make_fake_backend(responses, name=name, available=available)
        backends.register_backend(name, backend_cls)
        registered.append(name)
        monkeypatch.setenv("MEDIAINFOUTILS_BACKEND_ORDER", ",".join(registered))
        return backend_cls

    yield factory

    for name in registered:
        backends.unregister_backend(name)
