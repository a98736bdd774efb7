"""Resolve the installed ``polymsg`` version."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path

DISTRIBUTION = "polymsg"
UNKNOWN_VERSION = "0+unknown"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_PROJECT_VERSION = re.compile(
    r'^\[project\][^\[]*?^version\s*=\s*"(?P<version>[^"]+)"',
    re.MULTILINE | re.DOTALL,
)


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the distribution version.

    A source checkout without installed metadata reads ``pyproject.toml``;
    anything else reports :data:`UNKNOWN_VERSION` so imports never fail.
    """

    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        pass

    if _PYPROJECT.is_file():
        match = _PROJECT_VERSION.search(_PYPROJECT.read_text(encoding="utf-8"))
        if match:
            return match.group("version")
    return UNKNOWN_VERSION


__all__ = ["DISTRIBUTION", "UNKNOWN_VERSION", "get_project_version"]
