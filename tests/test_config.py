"""Tests for makegen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from makegen.config import ConfigError, MakegenConfig, load_config
from makegen.models import CustomTarget


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, MakegenConfig)
    assert config.root == tmp_path.resolve()
    assert config.project_name is None
    assert config.output == "Makefile"
    assert config.docker_image is None
    assert config.include_help is None
    assert config.targets == []
    assert config.custom_targets == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".makegen.yml"
    config_file.write_text(
        """
project_name: "shop-api"
output: "build.mk"
docker_image: "registry.example.com/shop-api"
help: false
targets: [Build, test, lint]
custom_targets:
  - name: migrate
    description: "Apply database migrations"
    dependencies: [build]
    commands:
      - "alembic upgrade head"
  - name: dist/app.tar.gz
    phony: false
    commands: "tar czf dist/app.tar.gz src"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.project_name == "shop-api"
    assert config.output == "build.mk"
    assert config.docker_image == "registry.example.com/shop-api"
    assert config.include_help is False
    assert config.targets == ["build", "test", "lint"]
    assert config.custom_targets == [
        CustomTarget(
            name="migrate",
            dependencies=("build",),
            commands=("alembic upgrade head",),
            description="Apply database migrations",
        ),
        CustomTarget(
            name="dist/app.tar.gz",
            commands=("tar czf dist/app.tar.gz src",),
            phony=False,
        ),
    ]


def test_load_config_accepts_a_sibling_path(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("project_name: demo\n", encoding="utf-8")

    config = load_config(tmp_path / "Makefile")

    assert config.project_name == "demo"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).output == "Makefile"


@pytest.mark.parametrize(
    "content",
    [
        "project_name: [unterminated\n",
        "- just\n- a list\n",
        "custom_targets: nope\n",
        "custom_targets:\n  - just-a-string\n",
        "custom_targets:\n  - commands: [echo hi]\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".makegen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_target_kind_in_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".makegen.yml").write_text("targets: [docs, build]\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="'docs'"):
        load_config(tmp_path)
