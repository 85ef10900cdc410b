#!/usr/bin/env python3
"""
fyne-doctor: check a machine for the tools needed to build Fyne applications.

The command line only builds a DoctorConfig and hands it to the core run;
rendering and file output happen here, at the edge.
"""

from __future__ import annotations

# Standard library imports
import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

# Third-party imports
from pydantic import ValidationError

# Local application imports
from ..config import DEFAULT_TIMEOUT_SEC, DoctorConfig
from ..core.doctor import run_doctor
from ..core.types import Category
from ..output.logger import SimpleLogger
from ..output.report import render_json, render_text

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(
        prog="fyne-doctor",
        description="Fyne Environment Check Tool",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND", required=True)

    d = sub.add_parser(
        "doctor",
        help="Check Fyne development environment",
        description="Check the Fyne development environment and diagnose missing dependencies.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    d.add_argument("-v", "--verbose", action="store_true", help="Log every probe and its outcome to stderr")
    d.add_argument("--json", dest="json_output", action="store_true", help="Print the results as JSON")
    d.add_argument(
        "-c",
        "--category",
        dest="categories",
        action="append",
        choices=[c.value for c in Category],
        default=None,
        help="Only check this category (repeatable). Default: all categories",
    )
    d.add_argument(
        "-t", "--timeout", type=float, default=DEFAULT_TIMEOUT_SEC, help="Timeout per probe in seconds"
    )
    d.add_argument("-o", "--output", dest="output_file", type=Path, help="Also write the output to this file")
    d.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when required dependencies are missing",
    )
    d.add_argument("--log-file", type=Path, help="Append log lines to this file")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> DoctorConfig:
    """Create a DoctorConfig from parsed args.

    Raises:
        ValidationError: For out-of-range values such as a non-positive timeout
    """
    return DoctorConfig(
        verbose=args.verbose,
        json_output=args.json_output,
        categories=args.categories or [],
        timeout=args.timeout,
        output_file=args.output_file,
        strict=args.strict,
    )


def write_output(path: Path, text: str) -> None:
    """Write the rendered output to `path`, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    try:
        logger = SimpleLogger(args.log_file, verbose=args.verbose)
    except OSError as e:
        SimpleLogger().error(f"Could not open log file {args.log_file}: {e}")
        return EXIT_USAGE

    try:
        config = build_config(args)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            logger.error(f"Invalid {field}: {err['msg']}")
        return EXIT_USAGE

    run = run_doctor(config, logger)
    text = render_json(run) if config.json_output else render_text(run)
    sys.stdout.write(text)
    sys.stdout.flush()

    if config.output_file:
        try:
            write_output(config.output_file, text)
        except OSError as e:
            logger.error(f"Could not write {config.output_file}: {e}")
            return EXIT_FAILURE
        logger.info(f"Output written to {config.output_file}")

    if config.strict and not run.diagnosis.success:
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
