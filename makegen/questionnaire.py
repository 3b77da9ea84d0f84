"""Interactive question flow that turns detected signals into a ``BuildConfig``."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional, Set, TextIO

from .config import MakegenConfig
from .logging import get_logger
from .models import (
    BuildConfig,
    ContainerConfig,
    CustomTarget,
    Framework,
    ProjectSignals,
    TargetKind,
)

InputFunc = Callable[[str], str]


class Questionnaire:
    """Asks the user for Makefile decisions, seeded by detection and config defaults.

    With ``assume_yes`` every prompt resolves to its default without reading
    input, which makes the flow usable from scripts and tests.
    """

    def __init__(
        self,
        signals: ProjectSignals,
        defaults: MakegenConfig | None = None,
        *,
        input_func: InputFunc = input,
        output: TextIO | None = None,
        assume_yes: bool = False,
    ) -> None:
        self.signals = signals
        self.defaults = defaults or MakegenConfig(root=Path(signals.root))
        self._input = input_func
        self._output = output or sys.stdout
        self.assume_yes = assume_yes
        self.logger = get_logger("questionnaire")

    def ask(self) -> BuildConfig:
        project_name = self._ask_project_name()
        framework = self._ask_framework()
        container = self._ask_container(project_name)
        targets = self._ask_targets()
        include_help = self.prompt_yes_no(
            "Add 'help' target?",
            True if self.defaults.include_help is None else self.defaults.include_help,
        )
        custom_targets = list(self.defaults.custom_targets)
        custom_targets.extend(self._ask_custom_targets())

        return BuildConfig(
            project_name=project_name,
            language=self.signals.language,
            selected_framework=framework,
            container=container,
            build_targets=frozenset(targets),
            custom_targets=tuple(custom_targets),
            entry_point=self.signals.entry_point,
            include_help=include_help,
        )

    # ------------------------------------------------------------------
    # Question groups

    def _ask_project_name(self) -> str:
        default = self.defaults.project_name or Path(self.signals.root).name or "myproject"
        name = self.prompt_text("Project name", default)
        self.logger.info("Project: %s", name)
        return name

    def _ask_framework(self) -> Optional[Framework]:
        frameworks = self.signals.frameworks
        if not frameworks:
            return None

        self._say("Detected frameworks:")
        for index, framework in enumerate(frameworks, start=1):
            self._say(f"  {index}. {framework.name} ({framework.category.value})")

        if not self.prompt_yes_no("Use a detected framework?", True):
            return None
        if len(frameworks) == 1:
            return frameworks[0]

        answer = self.prompt_text("Framework number", "1")
        try:
            index = int(answer)
        except ValueError:
            index = 0
        if not 1 <= index <= len(frameworks):
            self.logger.warning("Invalid framework choice '%s'; using %s", answer, frameworks[0].name)
            index = 1
        return frameworks[index - 1]

    def _ask_container(self, project_name: str) -> ContainerConfig:
        services = self.signals.container_services
        if not self.signals.containerized:
            if not self.prompt_yes_no("Add Docker support?", False):
                return ContainerConfig()
        else:
            self._say("Docker detected.")
            if services:
                self._say(f"  Services: {', '.join(services)}")
            if not self.prompt_yes_no("Add Docker targets?", True):
                return ContainerConfig()

        image = self.prompt_text("Docker image name", self.defaults.docker_image or project_name)
        has_compose = bool(services) or any(
            name.startswith("docker-compose") for name in self.signals.config_files
        )
        compose = has_compose and self.prompt_yes_no("Add docker-compose targets?", True)
        return ContainerConfig(
            enabled=True,
            image=image,
            services=tuple(services),
            compose_targets=compose,
        )

    def _ask_targets(self) -> Set[TargetKind]:
        configured = set(self.defaults.targets)
        selected: Set[TargetKind] = set()

        def default_for(kind: TargetKind, fallback: bool) -> bool:
            if configured:
                return kind.value in configured
            return fallback

        for kind in (TargetKind.BUILD, TargetKind.CLEAN, TargetKind.RUN):
            if self.prompt_yes_no(f"Add '{kind.value}' target?", default_for(kind, True)):
                selected.add(kind)

        test_question = "Add 'test' target?"
        if not self.signals.has_test_dir:
            test_question = "No test directory found. Add 'test' target anyway?"
        if self.prompt_yes_no(test_question, default_for(TargetKind.TEST, self.signals.has_test_dir)):
            selected.add(TargetKind.TEST)
            if self.prompt_yes_no("Add 'coverage' target?", default_for(TargetKind.COVERAGE, True)):
                selected.add(TargetKind.COVERAGE)

        for kind, fallback in (
            (TargetKind.LINT, True),
            (TargetKind.FORMAT, True),
            (TargetKind.CI, False),
            (TargetKind.DEPLOY, False),
        ):
            if self.prompt_yes_no(f"Add '{kind.value}' target?", default_for(kind, fallback)):
                selected.add(kind)
        return selected

    def _ask_custom_targets(self) -> List[CustomTarget]:
        targets: List[CustomTarget] = []
        while self.prompt_yes_no("Add custom target?", False):
            name = self.prompt_text("Target name", "")
            if not name:
                self._say("A custom target needs a name; skipping.")
                continue
            dependencies = self.prompt_text("Dependencies (space separated)", "").split()
            commands = [
                command.strip()
                for command in self.prompt_text("Commands (separated by ';')", "").split(";")
                if command.strip()
            ]
            description = self.prompt_text("Description", "") or None
            targets.append(
                CustomTarget(
                    name=name,
                    dependencies=tuple(dependencies),
                    commands=tuple(commands),
                    description=description,
                )
            )
        return targets

    # ------------------------------------------------------------------
    # Prompt primitives

    def prompt_yes_no(self, message: str, default: bool) -> bool:
        if self.assume_yes:
            return default
        return prompt_yes_no(message, default, input_func=self._input)

    def prompt_text(self, message: str, default: str) -> str:
        if self.assume_yes:
            return default
        prompt = f"{message} [{default}]: " if default else f"{message}: "
        response = self._read(prompt).strip()
        return response or default

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError:
            return ""

    def _say(self, message: str) -> None:
        if not self.assume_yes:
            print(message, file=self._output)


def prompt_yes_no(message: str, default: bool, *, input_func: InputFunc = input) -> bool:
    """Ask a yes/no question; an empty answer or end of input selects ``default``."""
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        response = input_func(f"{message} {suffix}: ")
    except EOFError:
        return default
    response = response.strip().lower()
    if not response:
        return default
    return response in {"y", "yes"}


__all__ = ["Questionnaire", "prompt_yes_no"]
