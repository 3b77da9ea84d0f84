"""Tests for Makefile persistence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from makegen.storage import LocalStorage


def test_write_and_read_round_trip(tmp_path: Path) -> None:
    storage = LocalStorage()

    path = storage.write_makefile(tmp_path, "all:\n\t@true\n")

    assert path == tmp_path / "Makefile"
    assert storage.read_makefile(tmp_path) == "all:\n\t@true\n"


def test_overwrite_logs_a_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    storage = LocalStorage()
    storage.write_makefile(tmp_path, "old\n", "build.mk")

    with caplog.at_level(logging.WARNING, logger="makegen"):
        storage.write_makefile(tmp_path, "new\n", "build.mk")

    assert "will be overwritten" in caplog.text
    assert (tmp_path / "build.mk").read_text(encoding="utf-8") == "new\n"


def test_read_missing_makefile(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LocalStorage().read_makefile(tmp_path)


def test_write_into_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        LocalStorage().write_makefile(tmp_path / "missing", "x\n")
