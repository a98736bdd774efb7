#!/usr/bin/env python3
"""Validate message catalogues without requiring an editable install."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src directory is available on the import path when running directly
# from a Git checkout, as ``tests/conftest.py`` does for the test-suite.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from polymsg.config.validator import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
