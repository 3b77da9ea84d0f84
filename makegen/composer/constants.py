"""Static command tables for Makefile target synthesis."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from ..models import Language, TargetKind

_BUILD = TargetKind.BUILD
_CLEAN = TargetKind.CLEAN
_RUN = TargetKind.RUN
_TEST = TargetKind.TEST
_COVERAGE = TargetKind.COVERAGE
_LINT = TargetKind.LINT
_FORMAT = TargetKind.FORMAT

TARGET_DESCRIPTIONS: Mapping[TargetKind, str] = MappingProxyType(
    {
        TargetKind.BUILD: "Build the project",
        TargetKind.CLEAN: "Remove build artifacts",
        TargetKind.RUN: "Run the application",
        TargetKind.TEST: "Run the test suite",
        TargetKind.COVERAGE: "Run tests with coverage reporting",
        TargetKind.LINT: "Run static analysis",
        TargetKind.FORMAT: "Format the source tree",
        TargetKind.CI: "Run the CI pipeline locally",
        TargetKind.DEPLOY: "Deploy the project",
    }
)

_NODE: Mapping[TargetKind, Tuple[str, ...]] = {
    _BUILD: ("npm run build",),
    _CLEAN: ("rm -rf dist/ build/ coverage/",),
    _RUN: ("npm start",),
    _TEST: ("npm test",),
    _COVERAGE: ("npm test -- --coverage",),
    _LINT: ("npx eslint .",),
    _FORMAT: ("npx prettier --write .",),
}

# Language -> kind -> recipe. A missing kind renders as a placeholder target.
COMMANDS: Mapping[Language, Mapping[TargetKind, Tuple[str, ...]]] = MappingProxyType(
    {
        Language.GO: MappingProxyType(
            {
                _BUILD: ("go build -o bin/$(PROJECT_NAME) .",),
                _CLEAN: ("go clean", "rm -rf bin/ coverage.out coverage.html"),
                _RUN: ("go run .",),
                _TEST: ("go test ./...",),
                _COVERAGE: (
                    "go test -coverprofile=coverage.out ./...",
                    "go tool cover -html=coverage.out -o coverage.html",
                ),
                _LINT: ("go vet ./...", "golangci-lint run ./..."),
                _FORMAT: ("gofmt -s -w .",),
            }
        ),
        Language.PYTHON: MappingProxyType(
            {
                _BUILD: ("python -m build",),
                _CLEAN: (
                    "rm -rf build/ dist/ *.egg-info .pytest_cache .coverage htmlcov/",
                    "find . -type d -name __pycache__ -prune -exec rm -rf {} +",
                ),
                _RUN: ("python {entry}",),
                _TEST: ("python -m pytest",),
                _COVERAGE: ("python -m pytest --cov=. --cov-report=term-missing --cov-report=html",),
                _LINT: ("ruff check .",),
                _FORMAT: ("ruff format .",),
            }
        ),
        Language.JAVASCRIPT: MappingProxyType(dict(_NODE)),
        Language.TYPESCRIPT: MappingProxyType(
            {
                **_NODE,
                _BUILD: ("npx tsc --noEmit", "npm run build"),
                _LINT: ("npx eslint . --ext .ts,.tsx",),
            }
        ),
        Language.RUST: MappingProxyType(
            {
                _BUILD: ("cargo build --release",),
                _CLEAN: ("cargo clean",),
                _RUN: ("cargo run",),
                _TEST: ("cargo test",),
                _COVERAGE: ("cargo tarpaulin --out Html",),
                _LINT: ("cargo clippy -- -D warnings",),
                _FORMAT: ("cargo fmt",),
            }
        ),
        Language.JAVA: MappingProxyType(
            {
                _BUILD: ("mvn package -DskipTests",),
                _CLEAN: ("mvn clean",),
                _RUN: ("java -jar target/$(PROJECT_NAME).jar",),
                _TEST: ("mvn test",),
                _COVERAGE: ("mvn test jacoco:report",),
                _LINT: ("mvn checkstyle:check",),
            }
        ),
        Language.RUBY: MappingProxyType(
            {
                _BUILD: ("bundle install",),
                _CLEAN: ("rm -rf coverage/ tmp/ .bundle/",),
                _RUN: ("bundle exec ruby {entry}",),
                _TEST: ("bundle exec rspec",),
                _COVERAGE: ("COVERAGE=true bundle exec rspec",),
                _LINT: ("bundle exec rubocop",),
                _FORMAT: ("bundle exec rubocop -a",),
            }
        ),
        Language.PHP: MappingProxyType(
            {
                _BUILD: ("composer install",),
                _CLEAN: ("rm -rf vendor/ coverage/",),
                _RUN: ("php -S localhost:8000 -t public",),
                _TEST: ("vendor/bin/phpunit",),
                _COVERAGE: ("vendor/bin/phpunit --coverage-html coverage",),
                _LINT: ("vendor/bin/phpstan analyse",),
                _FORMAT: ("vendor/bin/php-cs-fixer fix",),
            }
        ),
        Language.CPP: MappingProxyType(
            {
                _BUILD: ("cmake -S . -B build", "cmake --build build"),
                _CLEAN: ("rm -rf build/",),
                _RUN: ("./build/$(PROJECT_NAME)",),
                _TEST: ("ctest --test-dir build --output-on-failure",),
                _FORMAT: (
                    "find . \\( -name '*.cpp' -o -name '*.hpp' -o -name '*.c' -o -name '*.h' \\) "
                    "-not -path './build/*' | xargs clang-format -i",
                ),
            }
        ),
        Language.UNKNOWN: MappingProxyType({}),
    }
)

# Run commands that replace the language default when the framework is selected.
FRAMEWORK_RUN_COMMANDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "Django": ("python manage.py runserver 0.0.0.0:$(PORT)",),
        "Flask": ("flask run --host 0.0.0.0 --port $(PORT)",),
        "FastAPI": ("uvicorn {module}:app --reload --port $(PORT)",),
        "Next.js": ("npm run dev",),
        "Vue": ("npm run dev",),
        "NestJS": ("npm run start:dev",),
        "Spring Boot": ("mvn spring-boot:run",),
        "Rails": ("bundle exec rails server -p $(PORT)",),
        "Sinatra": ("bundle exec ruby {entry} -p $(PORT)",),
        "Laravel": ("php artisan serve --port=$(PORT)",),
        "Symfony": ("symfony server:start --port=$(PORT)",),
    }
)

# Entry points substituted into ``{entry}`` run templates.
DEFAULT_ENTRY_POINTS: Mapping[Language, Tuple[str, str]] = MappingProxyType(
    {
        Language.PYTHON: ("main.py", ".py"),
        Language.RUBY: ("app.rb", ".rb"),
    }
)

# Compiled outputs must exist before ``run``.
RUN_NEEDS_BUILD = frozenset({Language.CPP, Language.JAVA})

CI_STAGES: Tuple[TargetKind, ...] = (TargetKind.LINT, TargetKind.TEST, TargetKind.BUILD)

COMPOSE_COMMAND = "docker compose"


__all__ = [
    "CI_STAGES",
    "COMMANDS",
    "COMPOSE_COMMAND",
    "DEFAULT_ENTRY_POINTS",
    "FRAMEWORK_RUN_COMMANDS",
    "RUN_NEEDS_BUILD",
    "TARGET_DESCRIPTIONS",
]
