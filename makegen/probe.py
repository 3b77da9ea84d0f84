"""Read-only filesystem queries used by the detection engine."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional


class DetectionError(RuntimeError):
    """Raised when the project root itself cannot be inspected."""


class LocalFileProbe:
    """Answers existence and content queries relative to a project root.

    Every query except :meth:`list_dir` treats I/O failures as an absent
    signal rather than an error.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def path(self, relative: str) -> Path:
        return self.root / relative

    def exists(self, relative: str) -> bool:
        try:
            return self.path(relative).exists()
        except OSError:
            return False

    def is_file(self, relative: str) -> bool:
        try:
            return self.path(relative).is_file()
        except OSError:
            return False

    def is_dir(self, relative: str) -> bool:
        try:
            return self.path(relative).is_dir()
        except OSError:
            return False

    def read_text(self, relative: str) -> Optional[str]:
        """Return file text with undecodable bytes replaced, or None on I/O failure."""
        try:
            return self.path(relative).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None

    def list_dir(self, relative: str = ".") -> List[str]:
        """Return sorted entry names of a directory, raising when unlistable."""
        directory = self.path(relative)
        try:
            return sorted(entry.name for entry in directory.iterdir())
        except FileNotFoundError as exc:
            raise DetectionError(f"Project path not found: {directory}") from exc
        except NotADirectoryError as exc:
            raise DetectionError(f"Project path is not a directory: {directory}") from exc
        except OSError as exc:
            raise DetectionError(f"Cannot list project path {directory}: {exc}") from exc

    def list_by_extension(
        self, relative: str = ".", extensions: Iterable[str] | None = None
    ) -> List[str]:
        """Return top-level file names in ``relative`` filtered by suffix.

        ``extensions=None`` returns every file. Unlistable directories yield an
        empty list.
        """
        wanted = None if extensions is None else {ext.lower() for ext in extensions}
        directory = self.path(relative)
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError:
            return []

        files: List[str] = []
        for entry in entries:
            if not entry.is_file():
                continue
            if wanted is not None and entry.suffix.lower() not in wanted:
                continue
            files.append(entry.name)
        return files


__all__ = ["DetectionError", "LocalFileProbe"]
