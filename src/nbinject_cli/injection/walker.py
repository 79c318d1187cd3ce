"""Discovery of built HTML pages under the candidate output roots."""

import os
from pathlib import Path
from typing import Iterator, List, Tuple

from .constants import HTML_SUFFIX


def find_html_files(root: Path) -> Iterator[Path]:
    """Yield every ``.html`` file below ``root`` in a stable order.

    A missing root yields nothing. The suffix match is case-sensitive, so
    ``.HTML`` and ``.htm`` pages are left alone. Symlinked directories are not
    descended into, which keeps the walk free of cycles; symlinked files are
    still yielded.

    Args:
        root (Path): Output directory to scan.

    Yields:
        Path: HTML file paths, directories and files sorted by name.
    """
    root = Path(root)
    if not root.is_dir():
        return

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(HTML_SUFFIX):
                yield Path(dirpath) / filename


def split_existing(candidates: List[Path]) -> Tuple[List[Path], List[Path]]:
    """Partition candidate roots into (existing, missing), preserving order."""
    existing: List[Path] = []
    missing: List[Path] = []
    for candidate in candidates:
        (existing if candidate.is_dir() else missing).append(candidate)
    return existing, missing
