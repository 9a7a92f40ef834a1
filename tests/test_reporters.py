# Copyright 2026 Cisco Systems, Inc. and its affiliates
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

"""Tests for report generation across reporter formats."""

from __future__ import annotations

import json

import pytest

from modcheck.core.models import Diagnostic, LintResult, Report, Severity, SourceType
from modcheck.core.reporters.json_reporter import JSONReporter
from modcheck.core.reporters.sarif_reporter import SARIFReporter
from modcheck.core.rules.base import format_message


def _diagnostic(module_name: str, file_path: str = "test/parallel/test-fs.js") -> Diagnostic:
    template = 'Mandatory module "{{moduleName}}" must be loaded.'
    return Diagnostic(
        rule_id="required-modules",
        message=format_message(template, {"moduleName": module_name}),
        severity=Severity.ERROR,
        file_path=file_path,
        message_template=template,
        data={"moduleName": module_name},
    )


@pytest.fixture
def sample_report() -> Report:
    report = Report()
    report.add_result(
        LintResult(
            file_path="test/parallel/test-fs.js",
            source_type=SourceType.SCRIPT,
            diagnostics=[_diagnostic("common")],
        )
    )
    report.add_result(LintResult(file_path="test/parallel/test-ok.mjs", source_type=SourceType.MODULE))
    report.add_result(LintResult(file_path="test/parallel/test-bad.js", error="Syntax error at line 3, column 1"))
    return report


class TestFormatMessage:
    def test_interpolates_placeholders(self):
        assert format_message("load {{ name }} now", {"name": "fs"}) == "load fs now"

    def test_unknown_placeholder_kept(self):
        assert format_message("load {{other}}", {"name": "fs"}) == "load {{other}}"

    def test_no_data(self):
        assert format_message("plain {{x}}") == "plain {{x}}"


class TestReportCounters:
    def test_counts(self, sample_report):
        assert sample_report.total_files == 3
        assert sample_report.total_diagnostics == 1
        assert sample_report.error_count == 1
        assert sample_report.clean_files == 1
        assert sample_report.failed_files == 1
        assert sample_report.has_errors

    def test_clean_report_has_no_errors(self):
        report = Report()
        report.add_result(LintResult(file_path="a.js"))
        assert not report.has_errors


class TestJSONReporter:
    def test_report_structure(self, sample_report):
        data = json.loads(JSONReporter().generate_report(sample_report))

        assert data["summary"]["total_files"] == 3
        assert data["summary"]["errors"] == 1
        first = data["results"][0]
        assert first["source_type"] == "script"
        assert first["diagnostics"][0]["message"] == 'Mandatory module "common" must be loaded.'
        assert first["diagnostics"][0]["data"] == {"moduleName": "common"}
        assert data["results"][2]["error"].startswith("Syntax error")

    def test_compact_output_is_single_line(self, sample_report):
        assert "\n" not in JSONReporter(pretty=False).generate_report(sample_report)

    def test_single_result(self):
        result = LintResult(file_path="a.js", diagnostics=[_diagnostic("fs", "a.js")])
        data = json.loads(JSONReporter().generate_report(result))
        assert data["error_count"] == 1
        assert data["is_clean"] is False

    def test_save_report(self, sample_report, tmp_path):
        out = tmp_path / "report.json"
        JSONReporter().save_report(sample_report, str(out))
        assert json.loads(out.read_text())["summary"]["failed_files"] == 1


class TestSARIFReporter:
    def test_sarif_envelope(self, sample_report):
        sarif = json.loads(SARIFReporter().generate_report(sample_report))

        assert sarif["version"] == "2.1.0"
        run = sarif["runs"][0]
        assert run["tool"]["driver"]["name"] == "modcheck"
        assert [r["id"] for r in run["tool"]["driver"]["rules"]] == ["required-modules"]

    def test_results_and_locations(self, sample_report):
        run = json.loads(SARIFReporter().generate_report(sample_report))["runs"][0]

        assert len(run["results"]) == 1
        result = run["results"][0]
        assert result["ruleId"] == "required-modules"
        assert result["level"] == "error"
        assert result["message"]["text"] == 'Mandatory module "common" must be loaded.'
        location = result["locations"][0]["physicalLocation"]
        assert location["artifactLocation"]["uri"] == "test/parallel/test-fs.js"
        assert location["region"] == {"startLine": 1, "startColumn": 1}

    def test_failed_files_become_notifications(self, sample_report):
        invocation = json.loads(SARIFReporter().generate_report(sample_report))["runs"][0]["invocations"][0]

        assert invocation["executionSuccessful"] is False
        notes = invocation["toolExecutionNotifications"]
        assert notes[0]["locations"][0]["physicalLocation"]["artifactLocation"]["uri"] == "test/parallel/test-bad.js"

    def test_warning_level(self):
        diagnostic = _diagnostic("fs", "a.js")
        diagnostic.severity = Severity.WARNING
        run = json.loads(SARIFReporter().generate_report(LintResult(file_path="a.js", diagnostics=[diagnostic])))[
            "runs"
        ][0]
        assert run["results"][0]["level"] == "warning"
        assert run["invocations"][0]["executionSuccessful"] is True
