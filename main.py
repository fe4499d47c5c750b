#!/usr/bin/env python
# main.py
"""
CLI entry point for the progressive income tax calculator.

Usage:
    python main.py [--config brackets.json] [--income 55000] [--detailed]

The bracket file can also be supplied via the TAX_CONFIG env var; the
--config flag takes precedence. Without --income the program prompts for
the taxable income on stdin.

Exit codes:
  0  report printed
  1  configuration could not be loaded
  2  income missing or not a finite number
"""

import argparse
import logging
import math
import os
import sys

from config import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, ConfigError, load_config
from reporting.tax_report import print_tax_report
from tax.tax_engine import TaxEngine

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2


class InputError(ValueError):
    """Raised when the taxable income is missing or not a finite number."""


def parse_income(raw) -> float:
    if raw is None or not str(raw).strip():
        raise InputError("no income given")
    text = str(raw).strip().replace(",", "").lstrip("$")
    try:
        income = float(text)
    except ValueError as exc:
        raise InputError(f"not a number: {raw!r}") from exc
    if not math.isfinite(income):
        raise InputError(f"not a finite number: {raw!r}")
    return income


def read_income(stream=None) -> float:
    """Prompt for the taxable income and parse one line from ``stream`` (stdin by default)."""
    stream = stream or sys.stdin
    print("Enter your taxable income: ", end="", flush=True)
    line = stream.readline()
    if not line:
        raise InputError("no income given (end of input)")
    return parse_income(line)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute progressive income tax from a JSON bracket schedule"
    )
    parser.add_argument("--config",    type=str, default=None,
                        help=f"Tax bracket JSON file (overrides {CONFIG_ENV_VAR}; default {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--income",    type=str, default=None, help="Taxable income; prompts on stdin if omitted")
    parser.add_argument("--detailed",  action="store_true", help="Also print one row per contributing bracket")
    parser.add_argument("--strict",    action="store_true", help="Reject configs with suspicious brackets")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Diagnostic logging level (stderr)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config_path = args.config or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    logger.debug("Using bracket config %s", config_path)

    try:
        config = load_config(config_path, strict=args.strict)
    except ConfigError as exc:
        print(f"Error loading config: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        if args.income is not None:
            income = parse_income(args.income)
        else:
            income = read_income()
    except InputError as exc:
        print(f"Invalid income: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    engine = TaxEngine(config=config)
    result = engine.calculate(income)
    print_tax_report(result, income, detailed=args.detailed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
