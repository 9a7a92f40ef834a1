# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Command-line interface for modcheck."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from ..config.config import Config
from ..config.constants import ModCheckConstants
from ..core.exceptions import ConfigurationError
from ..core.linter import Linter
from ..core.models import Report
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.sarif_reporter import SARIFReporter
from ..core.rules import BUILTIN_RULES

logger = logging.getLogger("modcheck.cli")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_config(args: argparse.Namespace) -> Config:
    """Build the effective config from files, environment and CLI flags."""
    env_file = getattr(args, "env_file", None)
    if env_file:
        if not Path(env_file).is_file():
            raise FileNotFoundError(f"Environment file not found: {env_file}")
        # Variables already set in the shell take precedence
        load_dotenv(env_file)

    config_path = getattr(args, "config", None)
    config = Config.from_yaml(config_path) if config_path else Config.discover()

    if getattr(args, "require", None):
        config.required_modules = list(args.require)
    if getattr(args, "source_type", None):
        config.source_type = args.source_type
    if getattr(args, "severity", None):
        config.severity = args.severity
    if getattr(args, "format", None):
        config.output_format = args.format
    return config


def _format_output(args: argparse.Namespace, config: Config, report: Report) -> str:
    """Generate the formatted output string for a report."""
    fmt = config.output_format
    if fmt == "json":
        return JSONReporter(pretty=not args.compact).generate_report(report)
    if fmt == "sarif":
        return SARIFReporter().generate_report(report)
    return _generate_summary(report)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}")
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def lint_command(args: argparse.Namespace) -> int:
    """Handle the ``lint`` command."""
    missing = [p for p in args.paths if not Path(p).exists()]
    if missing:
        for p in missing:
            print(f"Error: Path does not exist: {p}", file=sys.stderr)
        return 1

    try:
        config = _load_config(args)
        linter = Linter(config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Required modules: %s", ", ".join(config.required_modules) or "(none)")
    report = linter.lint_paths(args.paths, recursive=not args.no_recursive)
    if report.total_files == 0:
        print("No files found to lint.", file=sys.stderr)
        return 1

    _write_output(args, _format_output(args, config, report))

    if args.fail_on_findings and report.has_errors:
        return 1
    return 0


def print_config_command(args: argparse.Namespace) -> int:
    """Handle the ``print-config`` command."""
    try:
        config = _load_config(args)
        config.validate()
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False), end="")
    return 0


def list_rules_command(_args: argparse.Namespace) -> int:
    """Handle the ``list-rules`` command."""
    print("Available Rules:\n")
    for i, (rule_id, rule_cls) in enumerate(BUILTIN_RULES.items(), 1):
        print(f"  {i}. {rule_id}")
        print(f"     {rule_cls.description}")
        print()
    return 0


# ---------------------------------------------------------------------------
# Summary formatter
# ---------------------------------------------------------------------------


def _generate_summary(report: Report) -> str:
    lines: list[str] = []
    for result in report.results:
        if result.is_clean:
            continue
        lines.append(result.file_path or "<source>")
        if result.error:
            lines.append(f"  [FAIL] {result.error}")
        for d in result.diagnostics:
            lines.append(f"  {d.line}:{d.column}  {d.severity.value:<7s}  {d.message}  {d.rule_id}")
        lines.append("")

    lines.extend(
        [
            "=" * 60,
            f"Files Linted: {report.total_files}",
            f"Clean Files: {report.clean_files}",
            f"Problems: {report.total_diagnostics} ({report.error_count} errors, {report.warning_count} warnings)",
        ]
    )
    if report.failed_files:
        lines.append(f"Failed Files: {report.failed_files}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Shared argparse helpers
# ---------------------------------------------------------------------------


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags that shape the effective configuration."""
    parser.add_argument(
        "--require",
        action="append",
        metavar="MODULE",
        help="Module that every file must load (repeatable, replaces required_modules from config)",
    )
    parser.add_argument("--config", "-c", metavar="PATH", help="Path to a YAML config (default: ./.modcheck.yaml)")
    parser.add_argument("--env-file", metavar="PATH", help="Load MODCHECK_* variables from a .env file")
    parser.add_argument(
        "--source-type",
        choices=ModCheckConstants.SOURCE_TYPES,
        help="Parsing mode: module (import), script (require), or auto by file extension",
    )
    parser.add_argument("--severity", choices=ModCheckConstants.SEVERITIES, help="Severity of reported problems")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="modcheck - verify that JavaScript files load their mandatory modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  modcheck lint test/ --require common
  modcheck lint lib/ --require fs --require path --source-type script
  modcheck lint test/ --config .modcheck.yaml --format sarif -o results.sarif
  modcheck print-config
  modcheck list-rules
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- lint --------------------------------------------------------------
    lint_p = subparsers.add_parser("lint", help="Lint files and directories")
    lint_p.add_argument("paths", nargs="+", help="Files or directories to lint")
    _add_config_flags(lint_p)
    lint_p.add_argument("--format", choices=ModCheckConstants.OUTPUT_FORMATS, help="Output format (default: summary)")
    lint_p.add_argument("--output", "-o", help="Output file path")
    lint_p.add_argument("--compact", action="store_true", help="Compact JSON output")
    lint_p.add_argument("--no-recursive", action="store_true", help="Do not descend into subdirectories")
    lint_p.add_argument(
        "--fail-on-findings", action="store_true", help="Exit with error on error-severity problems or unreadable files"
    )

    # -- print-config ------------------------------------------------------
    pc_p = subparsers.add_parser("print-config", help="Print the effective configuration as YAML")
    _add_config_flags(pc_p)

    # -- list-rules --------------------------------------------------------
    subparsers.add_parser("list-rules", help="List available rules")

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args)

    dispatch = {
        "lint": lint_command,
        "print-config": print_config_command,
        "list-rules": list_rules_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
