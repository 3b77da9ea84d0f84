"""Language-specific framework classification."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, List, Mapping, Sequence, Tuple

from ..logging import get_logger
from ..models import Framework, FrameworkCategory, Language
from ..probe import LocalFileProbe
from .utils import dependency_names, has_content, load_json_manifest

_LOGGER = get_logger("detectors.frameworks")

_WEB = FrameworkCategory.WEB
_FRONTEND = FrameworkCategory.FRONTEND
_ORM = FrameworkCategory.ORM
_CLI = FrameworkCategory.CLI

FRAMEWORKS: Mapping[str, Framework] = MappingProxyType(
    {
        framework.name: framework
        for framework in (
            # Go
            Framework("Gin", _WEB, 3000),
            Framework("Echo", _WEB, 8080),
            Framework("Fiber", _WEB, 3000),
            Framework("GORM", _ORM),
            Framework("Cobra", _CLI),
            # JavaScript / TypeScript
            Framework("Next.js", _WEB, 3000),
            Framework("React", _FRONTEND, 3000),
            Framework("Vue", _FRONTEND, 5173),
            Framework("Express", _WEB, 3000),
            Framework("Fastify", _WEB, 3000),
            Framework("NestJS", _WEB, 3000),
            # Python
            Framework("Django", _WEB, 8000),
            Framework("Flask", _WEB, 5000),
            Framework("FastAPI", _WEB, 8000),
            Framework("SQLAlchemy", _ORM),
            Framework("Click", _CLI),
            Framework("Typer", _CLI),
            # Rust
            Framework("Actix", _WEB, 8000),
            Framework("Rocket", _WEB, 8000),
            Framework("Axum", _WEB, 8000),
            Framework("Clap", _CLI),
            # Java
            Framework("Spring Boot", _WEB, 8080),
            # Ruby
            Framework("Rails", _WEB, 3000),
            Framework("Sinatra", _WEB, 4567),
            # PHP
            Framework("Laravel", _WEB, 8000),
            Framework("Symfony", _WEB, 8000),
        )
    }
)

# (identifier, framework name) pairs, checked in order.
_GO_MODULES: Tuple[Tuple[str, str], ...] = (
    ("github.com/gin-gonic/gin", "Gin"),
    ("github.com/labstack/echo", "Echo"),
    ("github.com/gofiber/fiber", "Fiber"),
    ("gorm.io/gorm", "GORM"),
    ("github.com/spf13/cobra", "Cobra"),
)

_NODE_PACKAGES: Tuple[Tuple[str, str], ...] = (
    ("next", "Next.js"),
    ("react", "React"),
    ("vue", "Vue"),
    ("express", "Express"),
    ("fastify", "Fastify"),
    ("@nestjs/core", "NestJS"),
)

_PYTHON_PACKAGES: Tuple[Tuple[str, str], ...] = (
    ("django", "Django"),
    ("flask", "Flask"),
    ("fastapi", "FastAPI"),
    ("sqlalchemy", "SQLAlchemy"),
    ("click", "Click"),
    ("typer", "Typer"),
)

_RUST_CRATES: Tuple[Tuple[str, str], ...] = (
    ("actix-web", "Actix"),
    ("rocket", "Rocket"),
    ("axum", "Axum"),
    ("clap", "Clap"),
)

_RUBY_GEMS: Tuple[Tuple[str, str], ...] = (
    ("rails", "Rails"),
    ("sinatra", "Sinatra"),
)

_PHP_PACKAGES: Tuple[Tuple[str, str], ...] = (
    ("laravel/framework", "Laravel"),
    ("symfony/framework-bundle", "Symfony"),
)

_NODE_GROUPS = ("dependencies", "devDependencies")
_PHP_GROUPS = ("require", "require-dev")


class _Collector:
    """Accumulates frameworks for one run, refusing repeats by name."""

    def __init__(self) -> None:
        self.frameworks: List[Framework] = []

    def add(self, name: str) -> None:
        if any(existing.name == name for existing in self.frameworks):
            return
        self.frameworks.append(FRAMEWORKS[name])
        _LOGGER.debug("Detected framework: %s", name)

    def scan_text(self, content: str, identifiers: Sequence[Tuple[str, str]]) -> None:
        for identifier, name in identifiers:
            if has_content(content, identifier):
                self.add(name)

    def scan_keys(self, keys: set[str], identifiers: Sequence[Tuple[str, str]]) -> None:
        for identifier, name in identifiers:
            if identifier in keys:
                self.add(name)


def _text_manifest(probe: LocalFileProbe, name: str, identifiers: Sequence[Tuple[str, str]]) -> List[Framework]:
    content = probe.read_text(name)
    if content is None:
        _LOGGER.debug("Could not read %s", name)
        return []
    collector = _Collector()
    collector.scan_text(content, identifiers)
    return collector.frameworks


def _go_frameworks(probe: LocalFileProbe) -> List[Framework]:
    return _text_manifest(probe, "go.mod", _GO_MODULES)


def _node_frameworks(probe: LocalFileProbe) -> List[Framework]:
    package = load_json_manifest(probe, "package.json")
    collector = _Collector()
    collector.scan_keys(dependency_names(package, _NODE_GROUPS), _NODE_PACKAGES)
    return collector.frameworks


def _python_frameworks(probe: LocalFileProbe) -> List[Framework]:
    collector = _Collector()
    for manifest in ("requirements.txt", "pyproject.toml"):
        content = probe.read_text(manifest)
        if content is not None:
            collector.scan_text(content, _PYTHON_PACKAGES)
    return collector.frameworks


def _rust_frameworks(probe: LocalFileProbe) -> List[Framework]:
    return _text_manifest(probe, "Cargo.toml", _RUST_CRATES)


def _java_frameworks(probe: LocalFileProbe) -> List[Framework]:
    # Only the first readable build file is consulted.
    for manifest in ("pom.xml", "build.gradle", "build.gradle.kts"):
        content = probe.read_text(manifest)
        if content is None:
            continue
        collector = _Collector()
        collector.scan_text(content, (("spring-boot", "Spring Boot"),))
        return collector.frameworks
    return []


def _ruby_frameworks(probe: LocalFileProbe) -> List[Framework]:
    return _text_manifest(probe, "Gemfile", _RUBY_GEMS)


def _php_frameworks(probe: LocalFileProbe) -> List[Framework]:
    composer = load_json_manifest(probe, "composer.json")
    collector = _Collector()
    collector.scan_keys(dependency_names(composer, _PHP_GROUPS), _PHP_PACKAGES)
    return collector.frameworks


def _no_frameworks(probe: LocalFileProbe) -> List[Framework]:
    return []


FRAMEWORK_DETECTORS: Mapping[Language, Callable[[LocalFileProbe], List[Framework]]] = MappingProxyType(
    {
        Language.GO: _go_frameworks,
        Language.PYTHON: _python_frameworks,
        Language.JAVASCRIPT: _node_frameworks,
        Language.TYPESCRIPT: _node_frameworks,
        Language.RUST: _rust_frameworks,
        Language.JAVA: _java_frameworks,
        Language.RUBY: _ruby_frameworks,
        Language.PHP: _php_frameworks,
        Language.CPP: _no_frameworks,
        Language.UNKNOWN: _no_frameworks,
    }
)


def classify_frameworks(probe: LocalFileProbe, language: Language) -> Tuple[Framework, ...]:
    """Return frameworks detected for ``language`` in detection order."""
    detector = FRAMEWORK_DETECTORS[language]
    frameworks = tuple(detector(probe))
    if not frameworks:
        _LOGGER.debug("No %s frameworks detected", language.value)
    return frameworks
