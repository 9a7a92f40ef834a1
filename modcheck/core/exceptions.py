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


"""modcheck exceptions.

All exceptions inherit from ModCheckError for easy catching.

Example:
    >>> from modcheck.core.linter import Linter
    >>> from modcheck.core.exceptions import SourceLoadError, SourceParseError
    >>>
    >>> linter = Linter()
    >>>
    >>> try:
    ...     result = linter.lint_file("src/index.js")
    ... except SourceLoadError as e:
    ...     print(f"Failed to read source: {e}")
    ... except SourceParseError as e:
    ...     print(f"Failed to parse source: {e}")
"""


class ModCheckError(Exception):
    """Base exception for all modcheck errors."""

    pass


class SourceLoadError(ModCheckError):
    """Raised when a source file cannot be read.

    This can indicate:
    - Missing or unreadable file
    - Content that is not valid UTF-8
    """

    pass


class SourceParseError(ModCheckError):
    """Raised when a source file does not parse as JavaScript.

    Carries the 1-based position of the first syntax error.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class ConfigurationError(ModCheckError):
    """Raised when the linter configuration is invalid.

    This indicates:
    - Unknown source type or severity
    - Unreadable or malformed configuration file
    """

    pass


class RuleConfigurationError(ConfigurationError):
    """Raised when a rule's options do not match its schema."""

    def __init__(self, rule_id: str, message: str):
        super().__init__(f"Invalid options for rule '{rule_id}': {message}")
        self.rule_id = rule_id
