"""Detection engine: turns a project root into immutable ``ProjectSignals``."""

from __future__ import annotations

from pathlib import Path

from ..logging import get_logger
from ..models import ProjectSignals
from ..probe import DetectionError, LocalFileProbe
from .container import classify_container, extract_service_names
from .frameworks import FRAMEWORKS, classify_frameworks
from .language import classify_language, uses_package_manifest
from .structure import classify_structure


class ProjectAnalyzer:
    """Runs the language, framework, container and structure classifiers in order."""

    def __init__(self) -> None:
        self.logger = get_logger("detectors")

    def analyze(self, root: str | Path) -> ProjectSignals:
        """Return signals for ``root``; raises :class:`DetectionError` if unlistable."""
        root_path = Path(root).expanduser().resolve()
        probe = LocalFileProbe(root_path)
        entries = probe.list_dir(".")
        self.logger.debug("Project root %s has %d entries", root_path, len(entries))

        language = classify_language(probe)
        self.logger.info("Language detected: %s", language.value)

        frameworks = classify_frameworks(probe, language)
        if frameworks:
            self.logger.info("Frameworks detected: %d", len(frameworks))
            for framework in frameworks:
                self.logger.info("  - %s (%s)", framework.name, framework.category.value)

        container = classify_container(probe)
        if container.containerized:
            self.logger.info("Docker detected")
            if container.services:
                self.logger.info("  Services: %s", ", ".join(container.services))

        structure = classify_structure(probe, language)

        return ProjectSignals(
            root=str(root_path),
            language=language,
            frameworks=frameworks,
            containerized=container.containerized,
            container_services=container.services,
            has_test_dir=structure.has_test_dir,
            has_build_dir=structure.has_build_dir,
            has_vendor_dir=structure.has_vendor_dir,
            uses_package_manifest=uses_package_manifest(language),
            dependency_manifests=structure.dependency_manifests,
            config_files=structure.config_files,
            entry_point=structure.entry_point,
        )


def analyze(root: str | Path) -> ProjectSignals:
    """Convenience wrapper around :class:`ProjectAnalyzer`."""
    return ProjectAnalyzer().analyze(root)


__all__ = [
    "DetectionError",
    "FRAMEWORKS",
    "ProjectAnalyzer",
    "analyze",
    "classify_container",
    "classify_frameworks",
    "classify_language",
    "classify_structure",
    "extract_service_names",
]
