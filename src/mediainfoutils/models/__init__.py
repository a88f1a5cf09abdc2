"""Domain models for the mediainfoutils application."""

from mediainfoutils.models.core import (
    BatchResult,
    MediaMetadata,
    MediaType,
    Orientation,
    OrientationResult,
    ProbeFailure,
    ProbeResult,
    TypeSummaryRow,
)

__all__ = [
    "BatchResult",
    "MediaMetadata",
    "MediaType",
    "Orientation",
    "OrientationResult",
    "ProbeFailure",
    "ProbeResult",
    "TypeSummaryRow",
]
