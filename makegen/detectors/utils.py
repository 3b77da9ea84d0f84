"""Shared helper utilities for detector implementations."""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Set

from ..probe import LocalFileProbe


def has_content(content: str, needle: str) -> bool:
    """Case-insensitive substring check used for plain-text manifests."""
    return needle.lower() in content.lower()


def load_json_manifest(probe: LocalFileProbe, name: str) -> Dict[str, object]:
    """Return the parsed JSON manifest or an empty dict when absent or malformed."""
    text = probe.read_text(name)
    if text is None:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return {}
    if isinstance(data, dict):
        return data
    return {}


def dependency_names(manifest: Dict[str, object], groups: Iterable[str]) -> Set[str]:
    """Collect dependency keys from the named sub-maps of a package descriptor."""
    names: Set[str] = set()
    for group in groups:
        deps = manifest.get(group)
        if isinstance(deps, dict):
            names.update(str(key) for key in deps.keys())
    return names


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeated items while keeping first-occurrence order."""
    seen: Set[str] = set()
    result: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
