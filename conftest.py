"""
Root-level pytest configuration for httpdebug.

The importable package lives under packages/core/; put it on sys.path so
the test suite runs from a plain checkout without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

root = Path(__file__).parent
core_path = root / "packages" / "core"
if str(core_path) not in sys.path:
    sys.path.insert(0, str(core_path))
