"""Put the ``src`` layout on ``sys.path`` so ``maskfield`` imports from a checkout."""
from __future__ import annotations

import sys
from pathlib import Path

_src = Path(__file__).resolve().parent / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))
