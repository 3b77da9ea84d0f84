"""makegen command line: `detect` prints project signals, `generate` renders and saves a Makefile."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .composer import CompositionError
from .config import ConfigError
from .logging import configure_logging
from .models import ProjectSignals
from .orchestrator import Orchestrator
from .probe import DetectionError
from .questionnaire import prompt_yes_no


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="makegen",
        description="Detect a project's stack and generate a Makefile for it.",
    )
    parser.add_argument("--version", action="version", version=f"makegen {__version__}")
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Print what makegen detects about a project.",
    )
    _add_verbose_option(detect_parser, suppress_default=True)
    _add_path_argument(detect_parser)
    detect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit detection results as JSON.",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Answer a few questions and write a Makefile.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Accept every default answer without prompting.",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file name relative to the project root (defaults to Makefile).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview the Makefile without writing it.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for makegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()

    if args.command == "detect":
        try:
            signals = orchestrator.run_detect(args.path)
        except DetectionError as exc:
            parser.exit(1, f"{exc}\n")
        if args.json:
            print(json.dumps(signals.to_dict(), indent=2))
        else:
            print(_format_signals(signals))
    elif args.command == "generate":
        try:
            plan = orchestrator.run_generate(
                args.path,
                output=args.output,
                assume_yes=bool(args.yes),
            )
        except DetectionError as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except CompositionError as exc:
            parser.exit(1, f"Cannot compose Makefile: {exc}\n")

        print(plan.content, end="")
        if args.dry_run:
            print("Makefile not written (dry-run)")
            return
        if not args.yes and not prompt_yes_no(f"Save to {plan.output_path.name}?", True):
            print("Makefile not saved")
            return
        try:
            written = orchestrator.save(plan)
        except OSError as exc:
            parser.exit(1, f"makegen generate failed to write {plan.output_path}: {exc}\n")
        if written is None:
            print("Makefile already up to date")
        else:
            print(f"Makefile written to {_relativize(written)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _format_signals(signals: ProjectSignals) -> str:
    lines = [f"Language: {signals.language.value}"]
    if signals.frameworks:
        names = ", ".join(
            f"{framework.name} ({framework.category.value})" for framework in signals.frameworks
        )
        lines.append(f"Frameworks: {names}")
    else:
        lines.append("Frameworks: none")
    lines.append(f"Docker: {'yes' if signals.containerized else 'no'}")
    if signals.container_services:
        lines.append(f"Services: {', '.join(signals.container_services)}")
    lines.append(f"Tests: {'yes' if signals.has_test_dir else 'no'}")
    lines.append(f"Build output: {'yes' if signals.has_build_dir else 'no'}")
    lines.append(f"Vendor: {'yes' if signals.has_vendor_dir else 'no'}")
    lines.append(f"Entry point: {signals.entry_point or 'not found'}")
    if signals.dependency_manifests:
        lines.append(f"Dependency files: {', '.join(signals.dependency_manifests)}")
    if signals.config_files:
        lines.append(f"Config files: {', '.join(signals.config_files)}")
    return "\n".join(lines)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
