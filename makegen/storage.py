"""Persistence of rendered Makefiles."""

from __future__ import annotations

from pathlib import Path

from .logging import get_logger


class LocalStorage:
    """Reads and writes Makefiles on the local filesystem."""

    def __init__(self) -> None:
        self.logger = get_logger("storage")

    def write_makefile(self, directory: str | Path, content: str, filename: str = "Makefile") -> Path:
        """Write ``content`` and return the path; ``OSError`` propagates to the caller."""
        path = Path(directory) / filename
        if path.exists():
            self.logger.warning("%s already exists and will be overwritten", path)
        path.write_text(content, encoding="utf-8")
        self.logger.info("Makefile written to %s", path)
        return path

    def read_makefile(self, directory: str | Path, filename: str = "Makefile") -> str:
        path = Path(directory) / filename
        if not path.is_file():
            raise FileNotFoundError(f"Makefile not found at {path}")
        return path.read_text(encoding="utf-8")


__all__ = ["LocalStorage"]
