#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
swiftlint_shims/__main__.py
===========================

Command-line entry point.

Usage
-----
    python -m swiftlint_shims <command> [options]
    swiftlint-shims <command> [options]

Commands
--------
    lint        Lint Swift files or directories
    rules       List the available rules

Exit codes
----------
    0   no violations at error severity
    1   error-severity violations (any violation with ``--strict``)
    2   infrastructure failure: bad configuration, unreadable input
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import textwrap
from typing import List, Optional, Sequence

from . import __version__
from .config import REPORTERS, Configuration, DEFAULT_CONFIG_FILENAME
from .errors import SwiftLintShimsError
from .rules import default_registry
from .runner import LintRunner

_log = logging.getLogger("swiftlint_shims")

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2

_handler: Optional[logging.Handler] = None


# ═══════════════════════════════════════════════════════════════════════════
# UTILITY HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _configure_logging(verbosity: int) -> None:
    """Set up the ``swiftlint_shims`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    global _handler

    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    if _handler is not None:
        _log.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    _log.setLevel(level)
    _log.addHandler(_handler)


def _rule_list(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _load_configuration(path: Optional[str]) -> Configuration:
    if path:
        return Configuration.from_file(path)
    return Configuration.discover(".")


# ═══════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════

def cmd_lint(args: argparse.Namespace) -> int:
    """Lint the given paths and print violations."""
    _configure_logging(args.verbose)
    try:
        configuration = _load_configuration(args.config)
        registry = default_registry()
        if args.rules:
            rules = []
            for identifier in args.rules:
                rule_cls = registry.get_by_identifier(identifier)
                if rule_cls is None:
                    _log.error("unknown rule: %s", identifier)
                    return EXIT_INFRA
                rule = rule_cls()
                if identifier in configuration.rule_options:
                    rule.configure(configuration.rule_options[identifier])
                rules.append(rule)
            runner = LintRunner(rules=rules, configuration=configuration, registry=registry)
        else:
            runner = LintRunner(configuration=configuration, registry=registry)
        results = runner.lint_paths(args.paths)
    except SwiftLintShimsError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    reporter = args.reporter or configuration.reporter or "xcode"
    if reporter == "json":
        sys.stdout.write(results.to_json_str() + "\n")
    elif reporter == "xcode":
        if results.violations:
            sys.stdout.write(results.to_xcode_format() + "\n")
    else:
        sys.stdout.write(results.summary() + "\n")

    if results.failed_files:
        return EXIT_INFRA
    if results.error_count > 0 or (args.strict and results.total_count > 0):
        return EXIT_ERROR
    return EXIT_OK


def cmd_rules(args: argparse.Namespace) -> int:
    """List every registered rule."""
    registry = default_registry()
    for identifier in registry.identifiers:
        rule_cls = registry.get_by_identifier(identifier)
        if rule_cls is None:
            continue
        rule = rule_cls()
        opt_in = "yes" if rule_cls.opt_in else "no"
        print(f"  {identifier:25s} {rule_cls.description.name}")
        print(f"  {'':25s} opt-in: {opt_in}")
        print(f"  {'':25s} configuration: {rule.configuration.console_description}")
        if args.verbose:
            print(f"  {'':25s} {rule_cls.description.description}")
        print()
    return EXIT_OK


# ═══════════════════════════════════════════════════════════════════════════
# ARGUMENT PARSER
# ═══════════════════════════════════════════════════════════════════════════

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the swiftlint-shims CLI."""

    parser = argparse.ArgumentParser(
        prog="swiftlint-shims",
        description="Lint Swift source against SwiftLint-compatible rules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              %(prog)s lint Sources
              %(prog)s lint --reporter json Sources/App.swift
              %(prog)s lint --rules line_length,object_literal --strict .
              %(prog)s rules
        """),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="available commands",
        metavar="<command>",
    )

    # ── lint ─────────────────────────────────────────────────────────────

    p_lint = subparsers.add_parser(
        "lint",
        help="Lint Swift files or directories",
        description=(
            "Lint Swift files. Directories are searched recursively for "
            "*.swift files. Without paths, the configuration's 'included' "
            "entries (or the current directory) are linted."
        ),
    )
    p_lint.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to lint",
    )
    p_lint.add_argument(
        "--config",
        default=None,
        help=f"Configuration file (default: ./{DEFAULT_CONFIG_FILENAME} if present)",
    )
    p_lint.add_argument(
        "--reporter",
        choices=REPORTERS,
        default=None,
        help="Output format (default: the configuration's reporter, else xcode)",
    )
    p_lint.add_argument(
        "--rules",
        type=_rule_list,
        default=None,
        metavar="RULE[,RULE...]",
        help="Run only these rules, comma-separated (opt-in rules included)",
    )
    p_lint.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit non-zero on warnings too",
    )
    p_lint.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    p_lint.set_defaults(func=cmd_lint)

    # ── rules ────────────────────────────────────────────────────────────

    p_rules = subparsers.add_parser(
        "rules",
        help="List the available rules",
    )
    p_rules.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Include rule descriptions",
    )
    p_rules.set_defaults(func=cmd_rules)

    return parser


# ═══════════════════════════════════════════════════════════════════════════
# MAIN
# ═══════════════════════════════════════════════════════════════════════════

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the swiftlint-shims CLI.

    Returns
    -------
    int
        Exit code (0 = success, non-zero = failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args)
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        return 130
    except BrokenPipeError:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
