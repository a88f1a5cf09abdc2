"""Core domain models for mediainfoutils.

This module defines the data structures passed between the backends, the core
operations and the CLI.
- MediaType and Orientation enums give type-safe labels for classification.
- ProbeResult is the structured outcome of a single backend call. Backends
  return it for failures too, they never raise for an un-probeable item.
- BatchResult keeps successful metadata and per-item failures apart so a
  batch stays useful when some inputs are bad.
- OrientationResult and TypeSummaryRow are the outputs of the orientation
  analyzer and the type summarizer.

Metadata itself stays a plain ``dict``: backends report different fields and
anything beyond width/height/rotate is passed through uninterpreted.
"""

from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

MediaMetadata = Dict[str, Any]


class MediaType(str, Enum):
    """Type of media, guessed from the file name only."""

    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    UNKNOWN = "unknown"


class Orientation(str, Enum):
    """Display orientation of a media item."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ProbeResult(BaseModel):
    """Outcome of probing one media reference with one backend."""

    status: int = HTTPStatus.OK
    """HTTP-like status code; 200 means success."""

    message: str = "OK"
    """Human-readable message, the diagnostic when status is not 200."""

    metadata: MediaMetadata = Field(default_factory=dict)
    """Fields reported by the backend (empty on failure)."""

    backend: Optional[str] = None
    """Name of the backend that serviced the call."""

    @property
    def ok(self) -> bool:
        """Whether the probe succeeded."""
        return self.status == HTTPStatus.OK

    @classmethod
    def failure(
        cls, status: int, message: str, backend: Optional[str] = None
    ) -> "ProbeResult":
        """Build a failed result."""
        return cls(status=status, message=message, backend=backend)


class ProbeFailure(BaseModel):
    """A media item skipped by a batch probe."""

    media: str
    message: str
    status: int


class BatchResult(BaseModel):
    """Ordered results of probing a batch of media references.

    ``items`` holds the successful metadata in input order; ``failures`` holds
    the skipped items, also in input order.
    """

    items: List[MediaMetadata] = Field(default_factory=list)
    failures: List[ProbeFailure] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


class OrientationResult(BaseModel):
    """Portrait/landscape classification of one media item."""

    is_portrait: bool
    is_landscape: bool
    orientation: Orientation

    @model_validator(mode="after")
    def check_complementary(self) -> "OrientationResult":
        """Ensure exactly one of the two predicates holds.

        Raises:
            ValueError: If the predicates and orientation disagree.
        """
        if self.is_portrait == self.is_landscape:
            raise ValueError("is_portrait and is_landscape must be complementary")
        expected = Orientation.PORTRAIT if self.is_portrait else Orientation.LANDSCAPE
        if self.orientation != expected:
            raise ValueError(f"orientation must be {expected.value!r}")
        return self


class TypeSummaryRow(BaseModel):
    """File count and total byte size for one type or group label."""

    type: str
    """Media type label, or one of the group labels (``audio+image+video``,
    ``image+video``, ``ALL``)."""

    count: int = 0
    total_size: int = 0
