"""Payload injection into built HTML pages.

Injection is a plain regex replace on the raw file text: the payload goes in
front of the first closing body tag. A file that already carries the marker is
never touched again, which makes repeated runs over the same tree no-ops.
"""
from __future__ import annotations

import os
import re
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Literal, Optional, Dict

from .payload import render_payload
from .walker import find_html_files, split_existing

if TYPE_CHECKING:
    from ..config import InjectionConfig

FileStatus = Literal["PATCHED", "ALREADY_PATCHED", "NO_BODY_TAG", "ERROR"]

BODY_CLOSE_REGEX = re.compile(r"</body>", re.IGNORECASE)


def inject_content(content: str, payload: str, marker: str) -> tuple[str, FileStatus]:
    """Return ``content`` with ``payload`` inserted before the closing body tag.

    Args:
        content: Full page text.
        payload: Rendered payload block (must contain ``marker``).
        marker: Sentinel substring that flags an already patched page.
    Returns:
        (new_content, status). Content is returned unchanged unless status is PATCHED.
    """
    if marker in content:
        return content, "ALREADY_PATCHED"

    # Only the first closing tag is patched; the lambda keeps the payload literal
    new_content, count = BODY_CLOSE_REGEX.subn(lambda m: payload + m.group(0), content, count=1)
    if count == 0:
        return content, "NO_BODY_TAG"
    return new_content, "PATCHED"


def atomic_write(path: Path, data: str) -> None:
    """Atomically replace ``path`` with ``data``, keeping its permission bits.

    Symlinks are resolved first so the link target is rewritten, not the link.
    """
    path = Path(os.path.realpath(path))
    fd, tmp_name = tempfile.mkstemp(prefix=".nbinject-", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(data)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except Exception:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


@dataclass
class FileOutcome:
    """What happened to a single HTML file."""
    path: Path
    status: FileStatus
    error: Optional[str] = None


@dataclass
class InjectionResult:
    """Summary of one injection run."""
    directories: List[Path] = field(default_factory=list)
    missing_directories: List[Path] = field(default_factory=list)
    outcomes: List[FileOutcome] = field(default_factory=list)
    dry_run: bool = False

    @property
    def found_directory(self) -> bool:
        return bool(self.directories)

    def _with_status(self, status: FileStatus) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def patched(self) -> List[FileOutcome]:
        return self._with_status("PATCHED")

    @property
    def already_patched(self) -> List[FileOutcome]:
        return self._with_status("ALREADY_PATCHED")

    @property
    def without_body_tag(self) -> List[FileOutcome]:
        return self._with_status("NO_BODY_TAG")

    @property
    def errors(self) -> List[FileOutcome]:
        return self._with_status("ERROR")

    @property
    def files_scanned(self) -> int:
        return len(self.outcomes)


class HtmlInjector:
    """Walks the candidate output roots and patches every HTML page once."""

    def __init__(self, config: InjectionConfig):
        self.config = config
        # Rendered once so every page in the run gets identical bytes
        self.payload = render_payload(config)

    def inject_file(self, path: Path) -> FileOutcome:
        """Patch a single file in place unless it is already patched.

        Read and write failures are recorded on the outcome instead of raised.
        """
        try:
            with open(path, "r", encoding="utf-8", newline="") as fh:
                content = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            return FileOutcome(path, "ERROR", f"read failed: {e}")

        new_content, status = inject_content(content, self.payload, self.config.marker)
        if status != "PATCHED" or self.config.dry_run:
            return FileOutcome(path, status)

        try:
            atomic_write(path, new_content)
        except OSError as e:
            return FileOutcome(path, "ERROR", f"write failed: {e}")
        return FileOutcome(path, status)

    def inject_directory(self, root: Path, seen: Optional[Dict[str, FileOutcome]] = None) -> List[FileOutcome]:
        """Patch every HTML file below ``root``; a missing root yields no outcomes.

        ``seen`` maps real paths to their first outcome across calls. A file
        reached again through a symlink is not reprocessed: it is reported as
        already patched if the first visit patched it, dry runs included.
        """
        seen = {} if seen is None else seen
        outcomes = []
        for path in find_html_files(root):
            real = os.path.realpath(path)
            first = seen.get(real)
            if first is not None:
                status = "ALREADY_PATCHED" if first.status == "PATCHED" else first.status
                outcomes.append(FileOutcome(path, status, first.error))
                continue
            outcome = self.inject_file(path)
            seen[real] = outcome
            outcomes.append(outcome)
        return outcomes

    def run(self) -> InjectionResult:
        """Process every existing candidate root in configured order."""
        existing, missing = split_existing(self.config.candidate_paths())
        result = InjectionResult(
            directories=existing,
            missing_directories=missing,
            dry_run=self.config.dry_run,
        )
        seen: Dict[str, FileOutcome] = {}
        for root in existing:
            result.outcomes.extend(self.inject_directory(root, seen))
        return result
