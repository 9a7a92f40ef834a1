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
SARIF format reporter for GitHub Code Scanning integration.

Implements SARIF 2.1.0 specification for lint results.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import json
from typing import Any

from ...config.constants import ModCheckConstants
from ...core.models import Diagnostic, LintResult, Report, Severity
from ...core.rules import BUILTIN_RULES


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports for GitHub Code Scanning."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    SEVERITY_TO_LEVEL = {
        Severity.ERROR: "error",
        Severity.WARNING: "warning",
    }

    def __init__(self, tool_name: str = "modcheck", tool_version: str = ModCheckConstants.VERSION):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the linting tool
            tool_version: Version of the linting tool
        """
        self.tool_name = tool_name
        self.tool_version = tool_version

    def generate_report(self, data: LintResult | Report) -> str:
        """
        Generate SARIF report.

        Args:
            data: LintResult or Report object

        Returns:
            SARIF JSON string
        """
        results = [data] if isinstance(data, LintResult) else data.results
        diagnostics = [d for result in results for d in result.diagnostics]

        sarif = {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": self._create_tool_component(self._extract_rules(diagnostics)),
                    "results": self._convert_diagnostics(diagnostics),
                    "invocations": [self._create_invocation(results, data.timestamp.isoformat())],
                }
            ],
        }
        return json.dumps(sarif, indent=2, default=str)

    def _create_tool_component(self, rules: list[dict[str, Any]]) -> dict[str, Any]:
        """Create the tool component with rules."""
        return {
            "driver": {
                "name": self.tool_name,
                "version": self.tool_version,
                "rules": rules,
            }
        }

    def _create_invocation(self, results: list[LintResult], end_time: str) -> dict[str, Any]:
        invocation: dict[str, Any] = {
            "executionSuccessful": all(r.error is None for r in results),
            "endTimeUtc": end_time + "Z",
        }
        failures = [
            {
                "level": "error",
                "message": {"text": r.error},
                "locations": [{"physicalLocation": {"artifactLocation": {"uri": r.file_path}}}],
            }
            for r in results
            if r.error is not None
        ]
        if failures:
            invocation["toolExecutionNotifications"] = failures
        return invocation

    def _extract_rules(self, diagnostics: list[Diagnostic]) -> list[dict[str, Any]]:
        """Extract unique rules from diagnostics."""
        seen_rules: set[str] = set()
        rules = []

        for diagnostic in diagnostics:
            if diagnostic.rule_id in seen_rules:
                continue
            seen_rules.add(diagnostic.rule_id)

            rule_cls = BUILTIN_RULES.get(diagnostic.rule_id)
            description = rule_cls.description if rule_cls else diagnostic.rule_id
            rules.append(
                {
                    "id": diagnostic.rule_id,
                    "name": diagnostic.rule_id.replace("-", " ").title().replace(" ", ""),
                    "shortDescription": {"text": description},
                    "defaultConfiguration": {
                        "level": self.SEVERITY_TO_LEVEL.get(diagnostic.severity, "warning"),
                    },
                }
            )

        return rules

    def _convert_diagnostics(self, diagnostics: list[Diagnostic]) -> list[dict[str, Any]]:
        """Convert diagnostics to SARIF results."""
        results = []

        for diagnostic in diagnostics:
            result: dict[str, Any] = {
                "ruleId": diagnostic.rule_id,
                "level": self.SEVERITY_TO_LEVEL.get(diagnostic.severity, "warning"),
                "message": {"text": diagnostic.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {
                                "uri": diagnostic.file_path or "<source>",
                                "uriBaseId": "%SRCROOT%",
                            },
                            "region": {
                                "startLine": diagnostic.line,
                                "startColumn": diagnostic.column,
                            },
                        }
                    }
                ],
            }
            if diagnostic.data:
                result["properties"] = dict(diagnostic.data)
            results.append(result)

        return results

    def save_report(self, data: LintResult | Report, output_path: str):
        """
        Save SARIF report to file.

        Args:
            data: LintResult or Report object
            output_path: Path to save file
        """
        report_json = self.generate_report(data)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_json)
