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
required-modules: every configured module must be loaded by the file.

A module counts as loaded when the file references it syntactically:

* ES modules: ``import ... from "<path>"``
* Scripts: ``require("<path>")`` with a string literal first argument

The referenced path is reduced to a canonical name (its last path segment,
or ``common`` for the shared test helper) and compared with the configured
names. Nothing is decided until the whole file has been walked; the
``program:exit`` handler then reports each configured module that was never
seen, in configured order.
"""

from __future__ import annotations

import logging
import re

from tree_sitter import Node

from ...config.constants import ModCheckConstants
from ..models import SourceType
from ..parser.javascript_parser import (
    CALL_EXPRESSION,
    IMPORT_STATEMENT,
    callee_identifier,
    first_argument,
    import_source_value,
    string_literal_value,
)
from .base import PROGRAM_EXIT, Handler, Rule, RuleContext

logger = logging.getLogger(__name__)

_RELATIVE_PREFIX_RE = re.compile(r"^(?:\.\.?/)+")
_JS_EXTENSION_RE = re.compile(r"\.[cm]?js$")


def _alias_for(path: str) -> str | None:
    """Return the canonical name for an aliased relative path."""
    if not path.startswith("."):
        return None
    return ModCheckConstants.COMMON_ALIASES.get(_RELATIVE_PREFIX_RE.sub("", path))


class RequiredModulesChecker:
    """Tracks module references for one file and reports what is missing."""

    def __init__(self, context: RuleContext, required_modules: list[str]):
        self.context = context
        self.required_modules = tuple(required_modules)
        self.found_modules: list[str] = []

    def resolve(self, path: str) -> str | None:
        """
        Map a referenced path to a required module name.

        Args:
            path: Literal module path as written in the source

        Returns:
            The canonical name, or None when the path names no required module
        """
        path = path.strip()
        alias = _alias_for(path)
        if alias is not None:
            return alias

        basename = path.rstrip("/").rsplit("/", 1)[-1]
        if basename in self.required_modules:
            return basename

        # "node:fs" and "./fs.js" both name the module "fs"
        stem = _JS_EXTENSION_RE.sub("", basename.removeprefix(ModCheckConstants.BUILTIN_SCHEME))
        if stem in self.required_modules:
            return stem
        return None

    def _track(self, path: str | None) -> None:
        if path is None:
            return
        name = self.resolve(path)
        if name is not None:
            self.found_modules.append(name)

    def on_import_declaration(self, node: Node) -> None:
        self._track(import_source_value(node))

    def on_call_expression(self, node: Node) -> None:
        if callee_identifier(node) != "require":
            return
        self._track(string_literal_value(first_argument(node)))

    def missing_modules(self) -> list[str]:
        """Required modules not referenced so far, in configured order."""
        found = set(self.found_modules)
        return [name for name in self.required_modules if name not in found]

    def on_program_exit(self, node: Node) -> None:
        for module_name in self.missing_modules():
            self.context.report(
                node,
                ModCheckConstants.MESSAGE_MANDATORY_MODULE,
                {"moduleName": module_name},
            )

    def handlers(self) -> dict[str, Handler]:
        """Visit handlers for the file's source type."""
        rules: dict[str, Handler] = {PROGRAM_EXIT: self.on_program_exit}
        if self.context.source_type == SourceType.MODULE:
            rules[IMPORT_STATEMENT] = self.on_import_declaration
        else:
            rules[CALL_EXPRESSION] = self.on_call_expression
        return rules


class RequiredModulesRule(Rule):
    """Require usage of the configured modules."""

    rule_id = ModCheckConstants.RULE_REQUIRED_MODULES
    description = "Require usage of specified node modules"
    schema = {
        "type": "array",
        "items": {"type": "string"},
        "uniqueItems": True,
    }

    def create(self, context: RuleContext) -> dict[str, Handler]:
        # No required modules, nothing to look for
        if not context.options:
            return {}

        checker = RequiredModulesChecker(context, context.options)
        logger.debug(
            "Checking %s for %d required module(s) as %s",
            context.file_path or "<source>",
            len(checker.required_modules),
            context.source_type.value,
        )
        return checker.handlers()
