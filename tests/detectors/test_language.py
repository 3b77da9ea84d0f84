"""Tests for language classification precedence."""

from __future__ import annotations

import pytest

from makegen.detectors.language import classify_language, uses_package_manifest
from makegen.models import Language
from tests._fixtures.repo_builder import RepoBuilder


@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        ("go.mod", Language.GO),
        ("requirements.txt", Language.PYTHON),
        ("setup.py", Language.PYTHON),
        ("pyproject.toml", Language.PYTHON),
        ("package.json", Language.JAVASCRIPT),
        ("Cargo.toml", Language.RUST),
        ("pom.xml", Language.JAVA),
        ("build.gradle", Language.JAVA),
        ("build.gradle.kts", Language.JAVA),
        ("Gemfile", Language.RUBY),
        ("composer.json", Language.PHP),
        ("CMakeLists.txt", Language.CPP),
        ("Makefile", Language.CPP),
    ],
)
def test_single_marker_selects_its_language(
    repo_builder: RepoBuilder, marker: str, expected: Language
) -> None:
    repo_builder.write({marker: ""})

    assert classify_language(repo_builder.probe()) is expected


def test_package_json_with_tsconfig_is_typescript(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": "{}", "tsconfig.json": "{}"})

    assert classify_language(repo_builder.probe()) is Language.TYPESCRIPT


def test_earlier_marker_wins_for_polyglot_root(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Makefile": "all:\n",
            "package.json": "{}",
            "requirements.txt": "flask\n",
            "Cargo.toml": "[package]\n",
        }
    )

    assert classify_language(repo_builder.probe()) is Language.PYTHON


def test_go_beats_everything(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"go.mod": "module demo\n", "pyproject.toml": "", "Gemfile": ""})

    assert classify_language(repo_builder.probe()) is Language.GO


def test_empty_root_is_unknown(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"README.md": "# demo\n"})

    assert classify_language(repo_builder.probe()) is Language.UNKNOWN


def test_package_manifest_languages() -> None:
    assert uses_package_manifest(Language.GO)
    assert uses_package_manifest(Language.TYPESCRIPT)
    assert not uses_package_manifest(Language.PYTHON)
    assert not uses_package_manifest(Language.UNKNOWN)
