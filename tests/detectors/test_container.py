"""Tests for container detection and compose service extraction."""

from __future__ import annotations

import logging

import pytest

from makegen.detectors.container import classify_container, extract_service_names
from makegen.probe import LocalFileProbe
from tests._fixtures.repo_builder import RepoBuilder

COMPOSE = """\
services:
  web:
    image: app
  db:
    image: postgres
networks:
  default:
"""


def test_extracts_top_level_services_only() -> None:
    assert extract_service_names(COMPOSE) == ["web", "db"]


def test_nested_keys_are_not_services() -> None:
    text = """\
version: "3.9"
services:
  api:
    build: .
    depends_on:
      web:
        condition: service_started
    environment:
      - DEBUG=1
  worker:
    command: celery
"""
    assert extract_service_names(text) == ["api", "worker"]


def test_duplicate_services_are_collapsed() -> None:
    text = "services:\n  web:\n    image: a\n  web:\n    image: b\n  cache:\n"
    assert extract_service_names(text) == ["web", "cache"]


def test_comments_and_blank_lines_are_skipped() -> None:
    text = "# header\n\nservices:\n\n  # disabled:\n  web:\n"
    assert extract_service_names(text) == ["web"]


def test_single_space_indentation_is_a_service_level() -> None:
    assert extract_service_names("services:\n web:\n  image: app\n") == ["web"]


def test_four_space_indentation_is_treated_as_body() -> None:
    assert extract_service_names("services:\n    web:\n        image: app\n") == []


def test_malformed_candidates_are_rejected() -> None:
    text = "services:\n  my service:\n  :\n  ok:\n  image: app\n"
    assert extract_service_names(text) == ["ok"]


def test_services_block_ends_at_next_top_level_key() -> None:
    text = "services:\n  web:\nvolumes:\n  data:\n"
    assert extract_service_names(text) == ["web"]


def test_no_services_key() -> None:
    assert extract_service_names("volumes:\n  data:\n") == []


def test_dockerfile_alone_is_containerized(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Dockerfile": "FROM alpine\n"})

    signals = classify_container(repo_builder.probe())

    assert signals.containerized is True
    assert signals.services == ()


def test_both_compose_variants_are_merged(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "docker-compose.yml": "services:\n  web:\n  db:\n",
            "docker-compose.yaml": "services:\n  db:\n  cache:\n",
        }
    )

    signals = classify_container(repo_builder.probe())

    assert signals.containerized is True
    assert signals.services == ("web", "db", "cache")


def test_no_container_files(repo_builder: RepoBuilder) -> None:
    signals = classify_container(repo_builder.probe())

    assert signals.containerized is False
    assert signals.services == ()


def test_unreadable_compose_keeps_containerized(
    repo_builder: RepoBuilder, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    repo_builder.write({"docker-compose.yml": "services:\n  web:\n"})
    monkeypatch.setattr(LocalFileProbe, "read_text", lambda self, relative: None)

    with caplog.at_level(logging.WARNING, logger="makegen"):
        signals = classify_container(repo_builder.probe())

    assert signals.containerized is True
    assert signals.services == ()
    assert "docker-compose.yml" in caplog.text
