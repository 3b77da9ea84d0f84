"""Primary language classification from ecosystem marker files."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from ..logging import get_logger
from ..models import Language
from ..probe import LocalFileProbe

_LOGGER = get_logger("detectors.language")


def _package_json_language(probe: LocalFileProbe) -> Language:
    if probe.exists("tsconfig.json"):
        return Language.TYPESCRIPT
    return Language.JAVASCRIPT


# Evaluated top to bottom; the first rule with any marker present wins. A
# polyglot root therefore resolves to whichever ecosystem is listed first.
_MARKER_RULES: Tuple[Tuple[Tuple[str, ...], Callable[[LocalFileProbe], Language]], ...] = (
    (("go.mod",), lambda probe: Language.GO),
    (("requirements.txt", "setup.py", "pyproject.toml"), lambda probe: Language.PYTHON),
    (("package.json",), _package_json_language),
    (("Cargo.toml",), lambda probe: Language.RUST),
    (("pom.xml",), lambda probe: Language.JAVA),
    (("build.gradle", "build.gradle.kts"), lambda probe: Language.JAVA),
    (("Gemfile",), lambda probe: Language.RUBY),
    (("composer.json",), lambda probe: Language.PHP),
    (("CMakeLists.txt", "Makefile"), lambda probe: Language.CPP),
)

_MODULE_LANGUAGES = frozenset({Language.GO, Language.JAVASCRIPT, Language.TYPESCRIPT})


def classify_language(probe: LocalFileProbe) -> Language:
    """Return the language of the first matching marker rule, or ``unknown``."""
    for markers, resolve in _MARKER_RULES:
        marker = _first_present(probe, markers)
        if marker is None:
            continue
        language = resolve(probe)
        _LOGGER.debug("Marker %s selects language %s", marker, language.value)
        return language
    _LOGGER.debug("No language markers found")
    return Language.UNKNOWN


def uses_package_manifest(language: Language) -> bool:
    """Return True for ecosystems whose manifest also declares the module."""
    return language in _MODULE_LANGUAGES


def _first_present(probe: LocalFileProbe, markers: Tuple[str, ...]) -> Optional[str]:
    for marker in markers:
        if probe.exists(marker):
            return marker
    return None
