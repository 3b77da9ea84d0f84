"""Project layout probes: tests, build output, vendoring, entry point, manifests."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..logging import get_logger
from ..models import Language, StructureSignals
from ..probe import LocalFileProbe

_LOGGER = get_logger("detectors.structure")

TEST_DIRS: Tuple[str, ...] = (
    "test",
    "tests",
    "spec",
    "specs",
    "__tests__",
    ".test",
    ".tests",
)

BUILD_DIRS: Tuple[str, ...] = (
    "build",
    "dist",
    "out",
    "bin",
    "target",
    "release",
    "debug",
    ".build",
    "__pycache__",
    "node_modules/.bin",
)

VENDOR_DIR = "vendor"

DEPENDENCY_FILES: Tuple[str, ...] = (
    "go.mod",
    "go.sum",
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "requirements.txt",
    "setup.py",
    "pyproject.toml",
    "Pipfile",
    "Gemfile",
    "Gemfile.lock",
    "Cargo.toml",
    "Cargo.lock",
    "pom.xml",
    "build.gradle",
    "composer.json",
    "composer.lock",
)

CONFIG_FILES: Tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.example",
    "config.yaml",
    "config.yml",
    "config.json",
    ".eslintrc",
    ".eslintrc.json",
    ".prettierrc",
    "jest.config.js",
    "tsconfig.json",
    ".pylintrc",
    "setup.cfg",
    "tox.ini",
    ".gitignore",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    ".github/workflows",
    ".gitlab-ci.yml",
    ".travis.yml",
    "Jenkinsfile",
)

_NODE_ENTRY_POINTS = ("index.js", "main.js", "app.js", "server.js", "index.ts", "main.ts")

# Ordered candidates per language, plus an optional (manifest, marker, label)
# fallback consulted when no candidate exists.
_ENTRY_POINTS: Mapping[Language, Tuple[Tuple[str, ...], Optional[Tuple[str, str, str]]]] = MappingProxyType(
    {
        Language.GO: (("main.go", "cmd/main.go"), None),
        Language.PYTHON: (("main.py", "app.py", "__main__.py", "run.py", "wsgi.py", "manage.py"), None),
        Language.JAVASCRIPT: (
            _NODE_ENTRY_POINTS,
            ("package.json", '"main"', "package.json (main field)"),
        ),
        Language.TYPESCRIPT: (
            _NODE_ENTRY_POINTS,
            ("package.json", '"main"', "package.json (main field)"),
        ),
        Language.RUST: (("src/main.rs",), ("Cargo.toml", "[[bin]]", "Cargo.toml ([[bin]] section)")),
        Language.JAVA: (("src/main/java",), None),
        Language.RUBY: (("app.rb", "main.rb", "server.rb", "config.ru"), None),
        Language.PHP: (("index.php", "public/index.php", "artisan"), None),
        Language.CPP: (("main.cpp", "src/main.cpp", "main.c", "src/main.c"), None),
        Language.UNKNOWN: ((), None),
    }
)


def has_test_dir(probe: LocalFileProbe) -> bool:
    for name in TEST_DIRS:
        if probe.is_dir(name):
            _LOGGER.debug("Found test directory: %s", name)
            return True

    for name in probe.list_by_extension("."):
        if "_test." in name or name.endswith(".test.js"):
            _LOGGER.debug("Found test file in root: %s", name)
            return True
    return False


def has_build_dir(probe: LocalFileProbe) -> bool:
    for name in BUILD_DIRS:
        if probe.is_dir(name):
            _LOGGER.debug("Found build directory: %s", name)
            return True
    return False


def find_entry_point(probe: LocalFileProbe, language: Language) -> Optional[str]:
    """Return the first existing entry point candidate for ``language``."""
    candidates, fallback = _ENTRY_POINTS[language]
    for candidate in candidates:
        if probe.exists(candidate):
            _LOGGER.debug("Found %s entry point: %s", language.value, candidate)
            return candidate

    if fallback is not None:
        manifest, marker, label = fallback
        content = probe.read_text(manifest)
        if content is not None and marker in content:
            _LOGGER.debug("Found %s entry point in %s", language.value, manifest)
            return label
    return None


def present_files(probe: LocalFileProbe, candidates: Tuple[str, ...]) -> Tuple[str, ...]:
    """Return candidates that exist as a file or directory, in candidate order."""
    found = tuple(name for name in candidates if probe.exists(name))
    for name in found:
        _LOGGER.debug("Found %s", name)
    return found


def classify_structure(probe: LocalFileProbe, language: Language) -> StructureSignals:
    return StructureSignals(
        has_test_dir=has_test_dir(probe),
        has_build_dir=has_build_dir(probe),
        has_vendor_dir=probe.is_dir(VENDOR_DIR),
        entry_point=find_entry_point(probe, language),
        dependency_manifests=present_files(probe, DEPENDENCY_FILES),
        config_files=present_files(probe, CONFIG_FILES),
    )


__all__ = [
    "BUILD_DIRS",
    "CONFIG_FILES",
    "DEPENDENCY_FILES",
    "TEST_DIRS",
    "classify_structure",
    "find_entry_point",
    "has_build_dir",
    "has_test_dir",
    "present_files",
]
