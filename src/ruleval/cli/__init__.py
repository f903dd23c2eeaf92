"""Ruleval CLI — validate JSON records from the command line.

Entry point registered as ``ruleval`` in ``pyproject.toml``::

    [project.scripts]
    ruleval = "ruleval.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``ruleval`` command."""
    parser = argparse.ArgumentParser(
        prog="ruleval",
        description="Ruleval — rule-string validation for JSON records.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- ruleval check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a JSON record against a rule set")
    check_parser.add_argument("record", help="JSON record file, or - for stdin")
    check_parser.add_argument("rules", help="JSON rule set file")
    check_parser.add_argument(
        "--resume-on-failed",
        action="store_true",
        help="Report every failed rule instead of stopping at the first",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on rule names that are not registered",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from ruleval.cli._check import run_check

        run_check(args)
