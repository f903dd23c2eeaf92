"""``ruleval check`` — validate one JSON record against a JSON rule set.

Prints the result as JSON to stdout. Exits with code 1 if the record
fails validation and 2 if the rule set cannot be loaded.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from ruleval.config import ValidatorConfig
from ruleval.engine import Validator
from ruleval.errors import RulevalError


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_rules(source: str) -> dict[str, Any]:
    rules = json.loads(_read_text(source))
    if not isinstance(rules, dict):
        msg = f"rule set must be a JSON object, got {type(rules).__name__}"
        raise ValueError(msg)
    return rules


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.record`` against ``args.rules`` and print the result.

    The record is handed to the validator as raw text so malformed JSON
    is reported as an ``invalid_input`` reject rather than a crash.
    """
    try:
        rules = _load_rules(args.rules)
        record = _read_text(args.record)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    validator = Validator(ValidatorConfig(resume_on_failed=args.resume_on_failed, strict=args.strict))
    try:
        result = validator.validate(record, rules)
    except RulevalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    print(json.dumps(result.to_dict(), indent=2))
    if not result:
        raise SystemExit(1)
