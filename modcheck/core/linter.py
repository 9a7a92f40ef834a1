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


"""
Linter: parses files, runs rule handlers over the tree, collects diagnostics.

Traversal is a single depth-first, pre-order walk. Each node is offered to
the handler registered for its kind; once every node has been visited the
``program:exit`` handlers run, exactly once per file.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from tree_sitter import Node

from ..config.config import Config
from ..config.constants import ModCheckConstants
from .exceptions import SourceLoadError, SourceParseError
from .models import Diagnostic, LintResult, Report, SourceType
from .parser.javascript_parser import JavaScriptParser, node_location
from .rules import BUILTIN_RULES
from .rules.base import PROGRAM_EXIT, Handler, Rule, RuleContext, format_message

logger = logging.getLogger(__name__)


class Linter:
    """Runs the configured rules over JavaScript files."""

    def __init__(self, config: Config | None = None, parser: JavaScriptParser | None = None):
        """
        Initialize the linter.

        Args:
            config: Linter configuration. Defaults to ``Config()``.
            parser: Parser instance; a new one is created if not given.

        Raises:
            ConfigurationError: If the configuration or rule options are invalid
        """
        self.config = config or Config()
        self.config.validate()
        self.parser = parser or JavaScriptParser()
        self.rules: list[Rule] = [rule_cls() for rule_cls in BUILTIN_RULES.values()]
        self._rule_options: dict[str, list[Any]] = {
            rule.rule_id: rule.validate_options(self._options_for(rule)) for rule in self.rules
        }

    def _options_for(self, rule: Rule) -> list[Any]:
        if rule.rule_id == ModCheckConstants.RULE_REQUIRED_MODULES:
            return self.config.required_modules
        return []

    def lint_source(
        self,
        source: str,
        file_path: str | None = None,
        source_type: SourceType | None = None,
    ) -> LintResult:
        """
        Lint JavaScript source text.

        Args:
            source: The source code
            file_path: Path reported in diagnostics
            source_type: Parsing mode; resolved from the config when omitted

        Returns:
            LintResult with the file's diagnostics

        Raises:
            SourceParseError: If the source does not parse
        """
        start_time = time.time()
        source_type = source_type or self.config.source_type_for(file_path)
        result = LintResult(file_path=file_path, source_type=source_type)

        handlers: dict[str, list[Handler]] = {}
        for rule in self.rules:
            context = RuleContext(
                rule_id=rule.rule_id,
                source_type=source_type,
                report=self._make_reporter(rule.rule_id, file_path, result),
                options=self._rule_options[rule.rule_id],
                file_path=file_path,
            )
            for kind, handler in rule.create(context).items():
                handlers.setdefault(kind, []).append(handler)

        if handlers:
            tree = self.parser.parse(source)
            self._traverse(tree.root_node, handlers)
        else:
            logger.debug("No rule handlers for %s, skipping traversal", file_path or "<source>")

        result.duration_seconds = time.time() - start_time
        logger.debug(
            "Linted %s in %.3fs: %d problem(s)",
            file_path or "<source>",
            result.duration_seconds,
            len(result.diagnostics),
        )
        return result

    def lint_file(self, path: str | Path) -> LintResult:
        """
        Lint a single file.

        Raises:
            SourceLoadError: If the file cannot be read as UTF-8 text
            SourceParseError: If the file does not parse
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceLoadError(f"Failed to read {path}: {e}") from e
        return self.lint_source(source, file_path=str(path))

    def lint_paths(self, paths: Iterable[str | Path], recursive: bool = True) -> Report:
        """
        Lint files and directories.

        Files that fail to load or parse are logged and recorded on their
        result; they do not stop the run.

        Args:
            paths: Files or directories to lint
            recursive: Descend into subdirectories

        Returns:
            Aggregated report
        """
        report = Report()
        for file_path in self.discover_files(paths, recursive=recursive):
            try:
                result = self.lint_file(file_path)
            except (SourceLoadError, SourceParseError) as e:
                logger.warning("Skipping %s: %s", file_path, e)
                result = LintResult(file_path=str(file_path), error=str(e))
            report.add_result(result)
        return report

    def discover_files(self, paths: Iterable[str | Path], recursive: bool = True) -> Iterator[Path]:
        """Yield lintable files under *paths*, in sorted order per directory."""
        extensions = {ext.lower() for ext in self.config.extensions}
        excluded = set(self.config.exclude_dirs)
        for path in paths:
            path = Path(path)
            if path.is_file():
                yield path
            elif path.is_dir():
                pattern = "**/*" if recursive else "*"
                for candidate in sorted(path.glob(pattern)):
                    if excluded.intersection(candidate.relative_to(path).parts[:-1]):
                        continue
                    if candidate.is_file() and candidate.suffix.lower() in extensions:
                        yield candidate
            else:
                logger.warning("Path does not exist: %s", path)

    def _make_reporter(self, rule_id: str, file_path: str | None, result: LintResult):
        severity = self.config.diagnostic_severity

        def report(node: Node, message: str, data: dict[str, Any] | None = None) -> None:
            line, column = node_location(node)
            result.diagnostics.append(
                Diagnostic(
                    rule_id=rule_id,
                    message=format_message(message, data),
                    severity=severity,
                    file_path=file_path,
                    line=line,
                    column=column,
                    message_template=message,
                    data=dict(data or {}),
                )
            )

        return report

    @staticmethod
    def _traverse(root: Node, handlers: dict[str, list[Handler]]) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            for handler in handlers.get(node.type, ()):
                handler(node)
            stack.extend(reversed(node.children))

        for handler in handlers.get(PROGRAM_EXIT, ()):
            handler(root)


def lint_source(source: str, required_modules: list[str], source_type: SourceType = SourceType.SCRIPT) -> LintResult:
    """
    Convenience function to lint source text for required modules.

    Args:
        source: JavaScript source
        required_modules: Module names the source must load
        source_type: Parsing mode of the source

    Returns:
        LintResult
    """
    return Linter(Config(required_modules=list(required_modules))).lint_source(source, source_type=source_type)
