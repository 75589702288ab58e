"""Test package; puts the repository root on sys.path so `framestack` and `cli` import uninstalled."""

import sys
from pathlib import Path

_ROOT = str(Path(__file__).resolve().parents[1])
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)
