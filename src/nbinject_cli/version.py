"""Version management for nbinject."""

import re
from importlib.metadata import PackageNotFoundError, version as _dist_version
from pathlib import Path
from typing import Optional

DISTRIBUTION_NAME = "nbinject"

# src/nbinject_cli/version.py -> repo root, only present in a source checkout
PYPROJECT_PATH = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

_VERSION_LINE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def _version_from_pyproject(path: Optional[Path] = None) -> Optional[str]:
    """Read ``version = "..."`` from a pyproject.toml, or return None."""
    path = path or PYPROJECT_PATH
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return None
    match = _VERSION_LINE.search(content)
    return match.group(1) if match else None


def get_version() -> str:
    """
    Get the current version.

    Installed distribution metadata wins; a source checkout that was never
    installed falls back to pyproject.toml.

    Returns:
        str: Version string, or "unknown"
    """
    try:
        return _dist_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pass

    return _version_from_pyproject() or "unknown"


__version__ = get_version()
