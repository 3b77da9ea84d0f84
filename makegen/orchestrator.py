"""Pipeline orchestration for the detect and generate flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .composer import MakefileBuilder
from .config import MakegenConfig, load_config
from .detectors import ProjectAnalyzer
from .logging import get_logger
from .models import BuildConfig, ProjectSignals
from .questionnaire import InputFunc, Questionnaire
from .storage import LocalStorage


@dataclass
class GeneratePlan:
    """A rendered Makefile that has not been persisted yet."""

    root: Path
    output_path: Path
    signals: ProjectSignals
    build_config: BuildConfig
    content: str


class Orchestrator:
    """Coordinates detection, questioning, composition and persistence."""

    def __init__(
        self,
        analyzer: ProjectAnalyzer | None = None,
        builder: MakefileBuilder | None = None,
        storage: LocalStorage | None = None,
    ) -> None:
        self.analyzer = analyzer or ProjectAnalyzer()
        self.builder = builder or MakefileBuilder()
        self.storage = storage or LocalStorage()
        self.logger = get_logger("orchestrator")

    def run_detect(self, path: str | Path) -> ProjectSignals:
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Analyzing project at %s", repo_path)
        return self.analyzer.analyze(repo_path)

    def run_generate(
        self,
        path: str | Path,
        *,
        output: str | None = None,
        assume_yes: bool = False,
        input_func: InputFunc = input,
        stream: TextIO | None = None,
    ) -> GeneratePlan:
        """Detect, ask and render; raises ``DetectionError``, ``ConfigError`` or ``CompositionError``."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting generate run for %s", repo_path)

        signals = self.analyzer.analyze(repo_path)
        config = self._load_config(repo_path)

        questionnaire = Questionnaire(
            signals,
            config,
            input_func=input_func,
            output=stream,
            assume_yes=assume_yes,
        )
        build_config = questionnaire.ask()

        self.logger.info("Generating Makefile")
        content = self.builder.render(build_config)

        return GeneratePlan(
            root=repo_path,
            output_path=repo_path / (output or config.output),
            signals=signals,
            build_config=build_config,
            content=content,
        )

    def save(self, plan: GeneratePlan) -> Optional[Path]:
        """Persist ``plan``; returns None when the file already holds identical text."""
        directory = plan.output_path.parent
        filename = plan.output_path.name
        try:
            existing = self.storage.read_makefile(directory, filename)
        except FileNotFoundError:
            existing = None
        if existing == plan.content:
            self.logger.info("%s already up to date; skipping write", plan.output_path)
            return None
        return self.storage.write_makefile(directory, plan.content, filename)

    def _load_config(self, repo_path: Path) -> MakegenConfig:
        config = load_config(repo_path)
        self.logger.debug("Loaded config from %s", config.root)
        return config


__all__ = ["GeneratePlan", "Orchestrator"]
