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
Data models for lint diagnostics and results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity levels for diagnostics."""

    ERROR = "error"
    WARNING = "warning"


class SourceType(str, Enum):
    """How a file declares its dependencies.

    ``MODULE`` files use ``import`` declarations, ``SCRIPT`` files use
    ``require()`` calls.
    """

    MODULE = "module"
    SCRIPT = "script"


@dataclass
class Diagnostic:
    """A single problem reported by a rule."""

    rule_id: str
    message: str
    severity: Severity
    file_path: str | None = None
    line: int = 1  # 1-based
    column: int = 1  # 1-based
    message_template: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert diagnostic to dictionary."""
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "severity": self.severity.value,
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
            "message_template": self.message_template,
            "data": self.data,
        }


@dataclass
class LintResult:
    """Results from linting a single file."""

    file_path: str | None
    source_type: SourceType | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    error: str | None = None  # load or parse failure; no diagnostics when set

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def is_clean(self) -> bool:
        """Check if the file produced no diagnostics and no failure."""
        return not self.diagnostics and self.error is None

    def get_diagnostics_by_rule(self, rule_id: str) -> list[Diagnostic]:
        """Get all diagnostics reported by a specific rule."""
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert lint result to dictionary."""
        return {
            "file_path": self.file_path,
            "source_type": self.source_type.value if self.source_type else None,
            "is_clean": self.is_clean,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "duration_seconds": self.duration_seconds,
            "timestamp": self.timestamp.isoformat(),
            "error": self.error,
        }


@dataclass
class Report:
    """Aggregated report from linting one or more files."""

    results: list[LintResult] = field(default_factory=list)
    total_files: int = 0
    total_diagnostics: int = 0
    error_count: int = 0
    warning_count: int = 0
    failed_files: int = 0
    clean_files: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def add_result(self, result: LintResult):
        """Add a lint result and update counters."""
        self.results.append(result)
        self.total_files += 1
        self.total_diagnostics += len(result.diagnostics)
        self.error_count += result.error_count
        self.warning_count += result.warning_count

        if result.error is not None:
            self.failed_files += 1
        if result.is_clean:
            self.clean_files += 1

    @property
    def has_errors(self) -> bool:
        """True when any file has error diagnostics or failed to lint."""
        return self.error_count > 0 or self.failed_files > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "summary": {
                "total_files": self.total_files,
                "clean_files": self.clean_files,
                "failed_files": self.failed_files,
                "total_diagnostics": self.total_diagnostics,
                "errors": self.error_count,
                "warnings": self.warning_count,
                "timestamp": self.timestamp.isoformat(),
            },
            "results": [result.to_dict() for result in self.results],
        }
