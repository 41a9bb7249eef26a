"""Pytest configuration.

The search package is imported through the top-level `src.*` namespace. Put the repository root on
`sys.path` so tests run with plain `pytest` from a checkout, without `pip install -e .`.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))
