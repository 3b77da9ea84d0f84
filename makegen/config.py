"""Configuration loading for makegen (.makegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import CustomTarget, TargetKind

CONFIG_FILENAME = ".makegen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MakegenConfig:
    """Project-level defaults defined in .makegen.yml."""

    root: Path
    project_name: Optional[str] = None
    output: str = "Makefile"
    docker_image: Optional[str] = None
    include_help: Optional[bool] = None
    targets: List[str] = field(default_factory=list)
    custom_targets: List[CustomTarget] = field(default_factory=list)


def load_config(config_path: Path) -> MakegenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MakegenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    return MakegenConfig(
        root=root,
        project_name=_as_str(data.get("project_name")),
        output=_as_str(data.get("output")) or "Makefile",
        docker_image=_as_str(data.get("docker_image")),
        include_help=_as_bool(data.get("help")),
        targets=_parse_targets(data.get("targets")),
        custom_targets=_parse_custom_targets(data.get("custom_targets")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_targets(value: Any) -> List[str]:
    known = {kind.value for kind in TargetKind}
    targets = [item.strip().lower() for item in _as_str_list(value)]
    for item in targets:
        if item not in known:
            raise ConfigError(f"Unknown target kind '{item}' in targets")
    return targets


def _parse_custom_targets(value: Any) -> List[CustomTarget]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("custom_targets must be a list of mappings")

    targets: List[CustomTarget] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"custom_targets[{index}] must be a mapping")
        name = _as_str(entry.get("name"))
        if not name:
            raise ConfigError(f"custom_targets[{index}] is missing a name")
        phony = _as_bool(entry.get("phony"))
        targets.append(
            CustomTarget(
                name=name,
                dependencies=tuple(_as_str_list(entry.get("dependencies"))),
                commands=tuple(_as_str_list(entry.get("commands"))),
                description=_as_str(entry.get("description")),
                phony=True if phony is None else phony,
            )
        )
    return targets


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
