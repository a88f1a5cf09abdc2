"""Core functionality for mediainfoutils.

- classifier: media type from file names.
- info: probing one or many media references with failure tolerance.
- orientation: portrait/landscape classification.
- summary: counts and sizes grouped by media type.

Only the classifier is re-exported here; the other modules depend on the
backend registry, which itself uses the classifier.
"""

from mediainfoutils.core.classifier import type_from_name

__all__ = ["type_from_name"]
