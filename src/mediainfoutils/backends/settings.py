"""Settings loader for the external tools used by the backends.

Reads tool locations and the probe timeout from environment variables
(prefix ``MEDIAINFOUTILS_``) or a ``.env`` file:

- MEDIAINFOUTILS_FFPROBE_PATH (default ``ffprobe`` on PATH)
- MEDIAINFOUTILS_MEDIAINFO_LIBRARY (libmediainfo to load, default: pymediainfo's lookup)
- MEDIAINFOUTILS_PROBE_TIMEOUT (seconds, default 60)
- MEDIAINFOUTILS_HTTP_TIMEOUT (seconds, default 30)
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Tool paths and timeouts shared by the built-in backends."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIAINFOUTILS_", env_file=".env", extra="ignore"
    )

    FFPROBE_PATH: str = "ffprobe"
    MEDIAINFO_LIBRARY: Optional[str] = None
    PROBE_TIMEOUT: float = Field(default=60.0, gt=0)
    HTTP_TIMEOUT: float = Field(default=30.0, gt=0)
