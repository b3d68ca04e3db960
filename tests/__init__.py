"""Repository-level tests.

``main`` and ``utils`` live at the repository root rather than in an
installed package, so the root is put on ``sys.path`` before any test module
imports them.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))
