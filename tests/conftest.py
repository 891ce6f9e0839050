"""Pytest configuration that makes the ``maskfield`` package importable."""
from __future__ import annotations

import sys
from pathlib import Path

_repo_root = str(Path(__file__).resolve().parents[1])
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

import sitecustomize  # noqa: E402,F401  # Adds src/ to sys.path for in-tree runs.
