"""Assembles a ``BuildConfig`` into an ordered Makefile document and renders it."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..logging import get_logger
from ..models import (
    BuildConfig,
    CustomTarget,
    Language,
    MakefileDocument,
    Target,
    TargetKind,
    Variable,
)
from .constants import (
    CI_STAGES,
    COMMANDS,
    COMPOSE_COMMAND,
    DEFAULT_ENTRY_POINTS,
    FRAMEWORK_RUN_COMMANDS,
    RUN_NEEDS_BUILD,
    TARGET_DESCRIPTIONS,
)

HELP_COMMAND = (
    "@grep -E '^[a-zA-Z0-9_.-]+:.*?## .*$$' $(MAKEFILE_LIST) | "
    "awk 'BEGIN {FS = \":.*?## \"}; {printf \"%-20s %s\\n\", $$1, $$2}'"
)

_INVALID_NAME_CHARS = (":", "=", "#")


class CompositionError(ValueError):
    """Raised when a build configuration cannot produce a valid Makefile."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class MakefileBuilder:
    """Builds Makefile documents from user decisions.

    ``compose`` is pure: identical configs yield identical documents, and
    ``render`` turns a document into byte-stable text through the
    ``Makefile.j2`` template.
    """

    TEMPLATE_NAME = "Makefile.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.logger = get_logger("composer")

    def render(self, config: BuildConfig) -> str:
        document = self.compose(config)
        return self.render_document(document, project_name=self._project_name(config))

    def render_document(self, document: MakefileDocument, *, project_name: str) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(
            header_lines=[
                f"Makefile for {project_name}",
                "Generated by makegen; re-running makegen rewrites this file.",
            ],
            variables=document.variables,
            phony_line=" ".join([".PHONY:", *document.phony]).rstrip(),
            targets=[
                {
                    "comment": target.comment,
                    "header": _target_header(target),
                    "commands": target.commands,
                }
                for target in document.targets
            ],
            indent="\t",
        )

    def compose(self, config: BuildConfig) -> MakefileDocument:
        kinds = _normalise_kinds(config.build_targets)
        custom_targets = _validate_custom_targets(config.custom_targets)

        document = MakefileDocument(variables=self._variables(config))

        if config.include_help:
            document.targets.append(
                Target(name="help", commands=[HELP_COMMAND], description="Show available targets")
            )

        for kind in kinds:
            document.targets.append(self._kind_target(kind, kinds, config))

        document.targets.extend(self._container_targets(config))

        shadowed = {custom.name for custom in custom_targets}
        for target in document.targets:
            if target.name in shadowed:
                self.logger.debug("Custom target '%s' replaces the generated one", target.name)
        document.targets = [target for target in document.targets if target.name not in shadowed]
        document.targets.extend(_custom_to_target(custom) for custom in custom_targets)

        _check_dependencies(document)
        self.logger.debug(
            "Composed %d variables and %d targets",
            len(document.variables),
            len(document.targets),
        )
        return document

    # ------------------------------------------------------------------
    # Variables

    def _variables(self, config: BuildConfig) -> List[Variable]:
        variables = [Variable("PROJECT_NAME", self._project_name(config))]
        port = _port(config)
        if port is not None:
            variables.append(Variable("PORT", str(port)))
        if config.container.enabled:
            image = (config.container.image or "").strip() or self._project_name(config)
            variables.append(Variable("IMAGE", image))
            if config.container.compose_targets:
                variables.append(Variable("COMPOSE", COMPOSE_COMMAND))
        return variables

    @staticmethod
    def _project_name(config: BuildConfig) -> str:
        return config.project_name.strip() or "myproject"

    # ------------------------------------------------------------------
    # Generated targets

    def _kind_target(
        self, kind: TargetKind, kinds: Sequence[TargetKind], config: BuildConfig
    ) -> Target:
        description = TARGET_DESCRIPTIONS[kind]

        if kind is TargetKind.CI:
            return Target(
                name=kind.value,
                dependencies=[stage.value for stage in CI_STAGES if stage in kinds],
                commands=['@echo "CI checks passed for $(PROJECT_NAME)"'],
                description=description,
            )

        if kind is TargetKind.DEPLOY:
            if config.container.enabled:
                return Target(
                    name=kind.value,
                    dependencies=["docker-build"],
                    commands=["docker push $(IMAGE)"],
                    description=description,
                )
            return _placeholder(kind, config.language)

        if kind is TargetKind.RUN:
            commands = _run_commands(config)
        else:
            commands = COMMANDS[config.language].get(kind)
        if commands is None:
            return _placeholder(kind, config.language)

        target = Target(name=kind.value, commands=list(commands), description=description)
        if kind is TargetKind.RUN and config.language in RUN_NEEDS_BUILD and TargetKind.BUILD in kinds:
            target.add_dependency(TargetKind.BUILD.value)
        return target

    def _container_targets(self, config: BuildConfig) -> List[Target]:
        container = config.container
        if not container.enabled:
            return []

        publish = " -p $(PORT):$(PORT)" if _port(config) is not None else ""
        targets = [
            Target(
                name="docker-build",
                commands=["docker build -t $(IMAGE) ."],
                description="Build the container image",
            ),
            Target(
                name="docker-run",
                dependencies=["docker-build"],
                commands=[f"docker run --rm -it{publish} $(IMAGE)"],
                description="Run the container image",
            ),
        ]
        if not container.compose_targets:
            return targets

        targets.extend(
            [
                Target(
                    name="compose-up",
                    commands=["$(COMPOSE) up -d"],
                    description="Start all compose services",
                ),
                Target(
                    name="compose-down",
                    commands=["$(COMPOSE) down"],
                    description="Stop all compose services",
                ),
                Target(
                    name="compose-logs",
                    commands=["$(COMPOSE) logs -f"],
                    description="Follow compose service logs",
                ),
            ]
        )
        for service in _unique(container.services):
            targets.append(
                Target(
                    name=f"compose-up-{service}",
                    commands=[f"$(COMPOSE) up -d {service}"],
                    description=f"Start the {service} service",
                )
            )
        return targets


def render(config: BuildConfig) -> str:
    """Render ``config`` with the bundled template."""
    return MakefileBuilder().render(config)


def _normalise_kinds(requested: Iterable[object]) -> List[TargetKind]:
    wanted = set()
    for item in requested:
        if isinstance(item, TargetKind):
            wanted.add(item)
            continue
        try:
            wanted.add(TargetKind(str(item).strip().lower()))
        except ValueError:
            raise CompositionError(f"Unknown target kind '{item}'", name=str(item)) from None
    return [kind for kind in TargetKind if kind in wanted]


def _validate_custom_targets(custom_targets: Sequence[CustomTarget]) -> List[CustomTarget]:
    seen = set()
    for custom in custom_targets:
        name = custom.name
        if not name or not name.strip():
            raise CompositionError("Custom target name must not be empty", name=name)
        if any(char.isspace() for char in name) or any(char in name for char in _INVALID_NAME_CHARS):
            raise CompositionError(f"Invalid custom target name '{name}'", name=name)
        if name in seen:
            raise CompositionError(f"Custom target '{name}' is defined more than once", name=name)
        if name in custom.dependencies:
            raise CompositionError(f"Custom target '{name}' depends on itself", name=name)
        # Recipe and header text must each stay on one line.
        if any(_has_line_break(command) for command in custom.commands):
            raise CompositionError(f"Custom target '{name}' has a multi-line command", name=name)
        if custom.description and _has_line_break(custom.description):
            raise CompositionError(f"Custom target '{name}' has a multi-line description", name=name)
        seen.add(name)
    return list(custom_targets)


def _has_line_break(text: str) -> bool:
    return "\n" in text or "\r" in text


def _custom_to_target(custom: CustomTarget) -> Target:
    return Target(
        name=custom.name,
        dependencies=list(_unique(custom.dependencies)),
        commands=list(custom.commands),
        phony=custom.phony,
        description=custom.description or None,
    )


def _check_dependencies(document: MakefileDocument) -> None:
    names = set(document.target_names())
    for target in document.targets:
        for dependency in target.dependencies:
            if dependency not in names:
                raise CompositionError(
                    f"Target '{target.name}' depends on unknown target '{dependency}'",
                    name=dependency,
                )


def _placeholder(kind: TargetKind, language: Language) -> Target:
    return Target(
        name=kind.value,
        commands=[f'@echo "No default {kind.value} command for {language.value}; edit this target."'],
        description=TARGET_DESCRIPTIONS[kind],
        comment=f"No default '{kind.value}' command is known for {language.value}; replace the recipe below.",
    )


def _run_commands(config: BuildConfig) -> Optional[Sequence[str]]:
    framework = config.selected_framework
    templates = None
    if framework is not None:
        templates = FRAMEWORK_RUN_COMMANDS.get(framework.name)
    if templates is None:
        templates = COMMANDS[config.language].get(TargetKind.RUN)
    if templates is None:
        return None

    entry = _entry_point(config)
    module = entry[: -len(".py")].replace("/", ".") if entry.endswith(".py") else "main"
    return [template.format(entry=entry, module=module) for template in templates]


def _entry_point(config: BuildConfig) -> str:
    default, suffix = DEFAULT_ENTRY_POINTS.get(config.language, ("main.py", ".py"))
    entry = (config.entry_point or "").strip()
    if entry.endswith(suffix):
        return entry
    return default


def _port(config: BuildConfig) -> Optional[int]:
    framework = config.selected_framework
    if framework is None:
        return None
    return framework.default_port


def _target_header(target: Target) -> str:
    header = " ".join([f"{target.name}:", *target.dependencies])
    if target.description:
        header = f"{header} ## {target.description}"
    return header


def _unique(items: Iterable[str]) -> List[str]:
    result: List[str] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


__all__ = ["CompositionError", "MakefileBuilder", "render"]
