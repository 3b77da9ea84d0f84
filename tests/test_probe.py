"""Tests for the filesystem probe."""

from __future__ import annotations

from pathlib import Path

import pytest

from makegen.probe import DetectionError, LocalFileProbe


def test_queries_relative_to_root(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    probe = LocalFileProbe(tmp_path)

    assert probe.exists("src/main.rs")
    assert probe.is_file("src/main.rs")
    assert probe.is_dir("src")
    assert not probe.is_dir("src/main.rs")
    assert probe.read_text("src/main.rs") == "fn main() {}\n"
    assert probe.read_text("missing.txt") is None


def test_undecodable_bytes_are_replaced(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_bytes(b"module x // caf\xe9\n")

    assert LocalFileProbe(tmp_path).read_text("go.mod") == "module x // caf\ufffd\n"


def test_list_by_extension_is_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ("b.py", "a.PY", "c.txt"):
        (tmp_path / name).write_text("", encoding="utf-8")
    (tmp_path / "pkg.py").mkdir()
    probe = LocalFileProbe(tmp_path)

    assert probe.list_by_extension(".", [".py"]) == ["a.PY", "b.py"]
    assert probe.list_by_extension() == ["a.PY", "b.py", "c.txt"]
    assert probe.list_by_extension("missing") == []


def test_list_dir_raises_for_unlistable_root(tmp_path: Path) -> None:
    (tmp_path / "b").mkdir()
    (tmp_path / "a.txt").write_text("", encoding="utf-8")

    assert LocalFileProbe(tmp_path).list_dir() == ["a.txt", "b"]
    with pytest.raises(DetectionError):
        LocalFileProbe(tmp_path / "nowhere").list_dir()
