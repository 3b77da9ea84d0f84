"""Container setup detection, including compose service discovery."""

from __future__ import annotations

from typing import List

from ..logging import get_logger
from ..models import ContainerSignals
from ..probe import LocalFileProbe
from .utils import dedupe

_LOGGER = get_logger("detectors.container")

DOCKERFILE = "Dockerfile"
COMPOSE_FILES = ("docker-compose.yml", "docker-compose.yaml")

# A service declaration sits one level below ``services:``. One level is one
# or two spaces; files indented four spaces per level are read as body content.
_MAX_SERVICE_INDENT = 2


def extract_service_names(text: str) -> List[str]:
    """Return service names declared under the top-level ``services:`` key.

    This is a line scanner, not a YAML parser: it only tracks whether the
    current line is inside the services block and at service depth.
    """
    services: List[str] = []
    in_services = False

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if stripped == "services:":
            in_services = True
            continue

        if not in_services:
            continue

        indent = len(line) - len(line.lstrip(" "))
        if indent == 0 and not line[0].isspace():
            in_services = False
            continue

        if indent == 0 or indent > _MAX_SERVICE_INDENT or line[indent].isspace():
            continue

        if not stripped.endswith(":"):
            continue

        name = stripped[:-1].strip()
        if not name or " " in name:
            continue
        services.append(name)

    return dedupe(services)


def classify_container(probe: LocalFileProbe) -> ContainerSignals:
    """Return whether the project is containerized and its compose services."""
    containerized = False
    services: List[str] = []

    if probe.exists(DOCKERFILE):
        containerized = True
        _LOGGER.debug("Found %s", DOCKERFILE)

    for compose_file in COMPOSE_FILES:
        if not probe.exists(compose_file):
            continue
        containerized = True
        _LOGGER.debug("Found %s", compose_file)
        content = probe.read_text(compose_file)
        if content is None:
            _LOGGER.warning("Failed to read %s; continuing without services", compose_file)
            continue
        found = extract_service_names(content)
        for name in found:
            _LOGGER.debug("Found compose service: %s", name)
        services.extend(found)

    return ContainerSignals(containerized=containerized, services=tuple(dedupe(services)))
