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
Rule interface shared by every lint rule.

A rule is a factory: for each file the linter builds a fresh
:class:`RuleContext` and calls :meth:`Rule.create`, which returns a mapping
of node kind to visit function. The linter walks the tree once and calls the
visit function registered for each node kind it meets, then calls the
``program:exit`` handler exactly once.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import jsonschema
from tree_sitter import Node

from ..exceptions import RuleConfigurationError
from ..models import SourceType

PROGRAM_EXIT = "program:exit"

# ESLint-style "{{ name }}" placeholders
_PLACEHOLDER_RE = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")

Handler = Callable[[Node], None]
ReportFn = Callable[[Node, str, dict[str, Any]], None]


def format_message(template: str, data: dict[str, Any] | None = None) -> str:
    """Interpolate ``{{name}}`` placeholders; unknown names are kept verbatim."""
    if not data:
        return template

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        return str(data[key]) if key in data else match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


@dataclass
class RuleContext:
    """Per-file view of the host handed to :meth:`Rule.create`."""

    rule_id: str
    source_type: SourceType
    report: ReportFn
    options: list[Any] = field(default_factory=list)
    file_path: str | None = None


class Rule(ABC):
    """Abstract base class for all lint rules."""

    rule_id: str = ""
    description: str = ""

    # JSON schema of the accepted options
    schema: dict[str, Any] = {"type": "array", "maxItems": 0}

    @abstractmethod
    def create(self, context: RuleContext) -> dict[str, Handler]:
        """
        Build the visit handlers for one file.

        Args:
            context: The file's rule context

        Returns:
            Mapping of node kind (or ``program:exit``) to handler. An empty
            mapping means the rule has nothing to check in this file.
        """
        pass

    def validate_options(self, options: Any) -> list[Any]:
        """Check *options* against :attr:`schema` and return them as a list.

        Raises:
            RuleConfigurationError: If the options do not match the schema
        """
        if isinstance(options, tuple):
            options = list(options)
        try:
            jsonschema.validate(instance=options, schema=self.schema)
        except jsonschema.ValidationError as e:
            raise RuleConfigurationError(self.rule_id, e.message) from e
        return list(options)
