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
JavaScript parser and node helpers built on tree-sitter.

Rules never look at tree-sitter field names directly; they go through the
capability helpers at the bottom of this module (``string_literal_value``,
``callee_identifier``, ...), so the node shapes a rule depends on are
defined in one place.
"""

import logging

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from ..exceptions import SourceParseError

logger = logging.getLogger(__name__)

JS_LANGUAGE = Language(tree_sitter_javascript.language())

# Node kinds used by the linter and its rules
IMPORT_STATEMENT = "import_statement"
CALL_EXPRESSION = "call_expression"
IDENTIFIER = "identifier"
STRING = "string"
STRING_FRAGMENT = "string_fragment"
ESCAPE_SEQUENCE = "escape_sequence"
ARGUMENTS = "arguments"

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_CONTINUATIONS = ("\n", "\r\n", "\r", "\u2028", "\u2029")
_MAX_CODE_POINT = 0x10FFFF


class JavaScriptParser:
    """Parse JavaScript source (scripts and ES modules) into a syntax tree."""

    def __init__(self):
        self._parser = Parser(JS_LANGUAGE)

    def parse(self, source: str) -> Tree:
        """
        Parse the source code.

        Args:
            source: JavaScript source text

        Returns:
            The tree-sitter syntax tree

        Raises:
            SourceParseError: If the source contains a syntax error
        """
        tree = self._parser.parse(source.encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            error_node = _first_error_node(root)
            line, column = node_location(error_node if error_node is not None else root)
            logger.debug("Syntax error at %d:%d", line, column)
            raise SourceParseError(f"Syntax error at line {line}, column {column}", line=line, column=column)
        return tree


def _first_error_node(root: Node) -> Node | None:
    """Find the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _decode_escape(text: str) -> str:
    """Decode one JavaScript escape sequence (including its backslash).

    Code points outside the Unicode range are kept as written.
    """
    body = text[1:]
    if body in _LINE_CONTINUATIONS:
        return ""
    if body.startswith("u{"):
        return _code_point(body[2:-1], text)
    if len(body) > 1 and body[0] in ("u", "x"):
        return _code_point(body[1:], text)
    if body[0] in "01234567":
        return chr(int(body, 8))
    return _SIMPLE_ESCAPES.get(body, body)


def _code_point(digits: str, raw: str) -> str:
    try:
        value = int(digits, 16)
    except ValueError:
        return raw
    return chr(value) if value <= _MAX_CODE_POINT else raw


def node_text(node: Node) -> str:
    """Return the source text covered by *node*."""
    return node.text.decode("utf-8") if node.text is not None else ""


def node_location(node: Node) -> tuple[int, int]:
    """Return the 1-based (line, column) where *node* starts.

    Columns count bytes, as tree-sitter does.
    """
    row, column = node.start_point
    return row + 1, column + 1


def string_literal_value(node: Node | None) -> str | None:
    """Return the value of a constant string expression, or None.

    Only quoted string literals qualify. Template literals, even without
    substitutions, are not constant strings here.
    """
    if node is None or node.type != STRING:
        return None
    parts: list[str] = []
    for child in node.named_children:
        if child.type == STRING_FRAGMENT:
            parts.append(node_text(child))
        elif child.type == ESCAPE_SEQUENCE:
            parts.append(_decode_escape(node_text(child)))
    return "".join(parts)


def import_source_value(node: Node) -> str | None:
    """Return the module path of an import declaration."""
    return string_literal_value(node.child_by_field_name("source"))


def callee_identifier(node: Node) -> str | None:
    """Return the callee name of a call whose callee is a bare identifier."""
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != IDENTIFIER:
        return None
    return node_text(callee)


def first_argument(node: Node) -> Node | None:
    """Return the first argument expression of a call, skipping comments."""
    arguments = node.child_by_field_name("arguments")
    # Tagged templates (require`x`) put a template_string here
    if arguments is None or arguments.type != ARGUMENTS:
        return None
    for child in arguments.named_children:
        if not child.is_extra:
            return child
    return None
