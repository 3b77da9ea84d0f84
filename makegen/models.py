"""Core data models shared across makegen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


class Language(str, Enum):
    """Primary languages the detection engine can classify."""

    GO = "go"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    RUST = "rust"
    JAVA = "java"
    RUBY = "ruby"
    PHP = "php"
    CPP = "cpp"
    UNKNOWN = "unknown"


class FrameworkCategory(str, Enum):
    WEB = "web"
    FRONTEND = "frontend"
    ORM = "orm"
    CLI = "cli"


class TargetKind(str, Enum):
    """Generated target kinds, declared in canonical output order."""

    BUILD = "build"
    CLEAN = "clean"
    RUN = "run"
    TEST = "test"
    COVERAGE = "coverage"
    LINT = "lint"
    FORMAT = "format"
    CI = "ci"
    DEPLOY = "deploy"


@dataclass(frozen=True)
class Framework:
    """A detected framework; identity is the name."""

    name: str
    category: FrameworkCategory
    default_port: Optional[int] = None


@dataclass(frozen=True)
class ContainerSignals:
    containerized: bool = False
    services: Tuple[str, ...] = ()


@dataclass(frozen=True)
class StructureSignals:
    has_test_dir: bool = False
    has_build_dir: bool = False
    has_vendor_dir: bool = False
    entry_point: Optional[str] = None
    dependency_manifests: Tuple[str, ...] = ()
    config_files: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectSignals:
    """Everything the detection engine learned about a project root."""

    root: str
    language: Language = Language.UNKNOWN
    frameworks: Tuple[Framework, ...] = ()
    containerized: bool = False
    container_services: Tuple[str, ...] = ()
    has_test_dir: bool = False
    has_build_dir: bool = False
    has_vendor_dir: bool = False
    uses_package_manifest: bool = False
    dependency_manifests: Tuple[str, ...] = ()
    config_files: Tuple[str, ...] = ()
    entry_point: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "language": self.language.value,
            "frameworks": [
                {
                    "name": framework.name,
                    "category": framework.category.value,
                    "default_port": framework.default_port,
                }
                for framework in self.frameworks
            ],
            "containerized": self.containerized,
            "container_services": list(self.container_services),
            "has_test_dir": self.has_test_dir,
            "has_build_dir": self.has_build_dir,
            "has_vendor_dir": self.has_vendor_dir,
            "uses_package_manifest": self.uses_package_manifest,
            "dependency_manifests": list(self.dependency_manifests),
            "config_files": list(self.config_files),
            "entry_point": self.entry_point,
        }


@dataclass(frozen=True)
class ContainerConfig:
    enabled: bool = False
    image: Optional[str] = None
    services: Tuple[str, ...] = ()
    compose_targets: bool = False


@dataclass(frozen=True)
class CustomTarget:
    """User-defined target appended verbatim to the rendered document."""

    name: str
    dependencies: Tuple[str, ...] = ()
    commands: Tuple[str, ...] = ()
    description: Optional[str] = None
    phony: bool = True


@dataclass(frozen=True)
class BuildConfig:
    """User decisions handed to the composition engine."""

    project_name: str = "myproject"
    language: Language = Language.UNKNOWN
    selected_framework: Optional[Framework] = None
    container: ContainerConfig = field(default_factory=ContainerConfig)
    build_targets: FrozenSet[Any] = frozenset()
    custom_targets: Tuple[CustomTarget, ...] = ()
    entry_point: Optional[str] = None
    include_help: bool = False


@dataclass(frozen=True)
class Variable:
    name: str
    value: str


@dataclass
class Target:
    """A named group of recipe lines in the rendered document."""

    name: str
    dependencies: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    phony: bool = True
    description: Optional[str] = None
    comment: Optional[str] = None

    def add_dependency(self, name: str) -> None:
        if name not in self.dependencies:
            self.dependencies.append(name)


@dataclass
class MakefileDocument:
    """Ordered variables and targets prior to text rendering."""

    variables: list[Variable] = field(default_factory=list)
    targets: list[Target] = field(default_factory=list)

    @property
    def phony(self) -> list[str]:
        return [target.name for target in self.targets if target.phony]

    def target_names(self) -> list[str]:
        return [target.name for target in self.targets]

    def get(self, name: str) -> Optional[Target]:
        for target in self.targets:
            if target.name == name:
                return target
        return None
