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

"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from modcheck.config.config import Config
from modcheck.core.linter import Linter
from modcheck.core.models import LintResult, SourceType
from modcheck.core.parser.javascript_parser import JavaScriptParser

_MODCHECK_ENV_VARS = (
    "MODCHECK_REQUIRED_MODULES",
    "MODCHECK_SOURCE_TYPE",
    "MODCHECK_SEVERITY",
    "MODCHECK_OUTPUT_FORMAT",
)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep MODCHECK_* variables from the developer's shell out of tests.

    Each variable is registered with monkeypatch so values loaded from .env
    files during a test are removed again at teardown.
    """
    for name in _MODCHECK_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def js_parser() -> JavaScriptParser:
    return JavaScriptParser()


@pytest.fixture
def lint():
    """Lint source text against a list of required modules.

    Usage::

        result = lint('require("fs");', ["fs"])
        result = lint('import fs from "fs";', ["fs"], SourceType.MODULE)
    """

    def _lint(source: str, required: list[str], source_type: SourceType = SourceType.SCRIPT) -> LintResult:
        linter = Linter(Config(required_modules=list(required)))
        return linter.lint_source(source, file_path="test.js", source_type=source_type)

    return _lint


@pytest.fixture
def make_js_tree(tmp_path: Path):
    """Factory fixture writing a tree of source files under *tmp_path*.

    Usage::

        root = make_js_tree({
            "test/parallel/test-fs.js": 'require("../common");',
            "node_modules/dep/index.js": "",
        })
    """
    _counter = [0]

    def _make(files: dict[str, str | bytes]) -> Path:
        _counter[0] += 1
        root = tmp_path / f"tree-{_counter[0]}"
        root.mkdir(parents=True, exist_ok=True)
        for rel_path, content in files.items():
            fp = root / rel_path
            fp.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                fp.write_bytes(content)
            else:
                fp.write_text(content, encoding="utf-8")
        return root

    return _make
