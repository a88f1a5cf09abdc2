"""Configure pytest: make the src/ layout and tests.helpers importable without installing."""

import sys
from pathlib import Path

root = Path(__file__).parent
for path in (str(root / "src"), str(root)):
    if path not in sys.path:
        sys.path.insert(0, path)
