"""Tests for per-language framework detection."""

from __future__ import annotations

from makegen.detectors.frameworks import FRAMEWORK_DETECTORS, classify_frameworks
from makegen.models import FrameworkCategory, Language
from tests._fixtures.repo_builder import RepoBuilder


def _names(frameworks) -> list[str]:
    return [framework.name for framework in frameworks]


def test_every_language_has_a_detector() -> None:
    assert set(FRAMEWORK_DETECTORS) == set(Language)


def test_go_module_frameworks_in_table_order(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "go.mod": """
                module example.com/demo

                require (
                    gorm.io/gorm v1.25.0
                    github.com/Gin-Gonic/Gin v1.9.1
                )
            """,
        }
    )

    frameworks = classify_frameworks(repo_builder.probe(), Language.GO)

    assert _names(frameworks) == ["Gin", "GORM"]
    assert frameworks[0].default_port == 3000
    assert frameworks[1].category is FrameworkCategory.ORM
    assert frameworks[1].default_port is None


def test_node_frameworks_from_runtime_and_dev_dependencies(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": """
                {
                  "dependencies": {"express": "^4.18.2", "@nestjs/core": "10"},
                  "devDependencies": {"react": "18", "vue": "3"}
                }
            """,
        }
    )

    frameworks = classify_frameworks(repo_builder.probe(), Language.JAVASCRIPT)

    assert _names(frameworks) == ["React", "Vue", "Express", "NestJS"]
    assert frameworks[1].category is FrameworkCategory.FRONTEND
    assert frameworks[1].default_port == 5173


def test_node_dependency_match_is_exact(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": '{"dependencies": {"next-auth": "4", "preact": "10"}}'})

    assert classify_frameworks(repo_builder.probe(), Language.TYPESCRIPT) == ()


def test_malformed_package_json_yields_no_frameworks(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": '{"dependencies": {"express": '})

    assert classify_frameworks(repo_builder.probe(), Language.JAVASCRIPT) == ()


def test_python_framework_reported_once_across_manifests(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "requirements.txt": "Django==4.2\nSQLAlchemy>=2\n",
            "pyproject.toml": '[project]\ndependencies = ["django", "fastapi"]\n',
        }
    )

    frameworks = classify_frameworks(repo_builder.probe(), Language.PYTHON)

    assert _names(frameworks) == ["Django", "SQLAlchemy", "FastAPI"]


def test_python_pyproject_only(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pyproject.toml": '[project]\ndependencies = ["flask", "typer"]\n'})

    frameworks = classify_frameworks(repo_builder.probe(), Language.PYTHON)

    assert _names(frameworks) == ["Flask", "Typer"]
    assert frameworks[0].default_port == 5000
    assert frameworks[1].category is FrameworkCategory.CLI


def test_rust_and_ruby_frameworks(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Cargo.toml": '[dependencies]\naxum = "0.7"\nclap = "4"\n',
            "Gemfile": "gem 'sinatra'\n",
        }
    )
    probe = repo_builder.probe()

    assert _names(classify_frameworks(probe, Language.RUST)) == ["Axum", "Clap"]
    sinatra = classify_frameworks(probe, Language.RUBY)
    assert _names(sinatra) == ["Sinatra"]
    assert sinatra[0].default_port == 4567


def test_java_prefers_pom_over_gradle(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "pom.xml": "<project></project>\n",
            "build.gradle": "id 'org.springframework.boot' version '3.2.0'\nspring-boot\n",
        }
    )

    assert classify_frameworks(repo_builder.probe(), Language.JAVA) == ()


def test_java_gradle_spring_boot(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {"build.gradle": "implementation 'org.springframework.boot:spring-boot-starter-web'\n"}
    )

    frameworks = classify_frameworks(repo_builder.probe(), Language.JAVA)

    assert _names(frameworks) == ["Spring Boot"]
    assert frameworks[0].default_port == 8080


def test_php_composer_frameworks(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"composer.json": '{"require": {"laravel/framework": "^11.0"}}'})

    assert _names(classify_frameworks(repo_builder.probe(), Language.PHP)) == ["Laravel"]


def test_missing_manifest_and_unsupported_languages(repo_builder: RepoBuilder) -> None:
    probe = repo_builder.probe()

    assert classify_frameworks(probe, Language.GO) == ()
    assert classify_frameworks(probe, Language.CPP) == ()
    assert classify_frameworks(probe, Language.UNKNOWN) == ()
