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
modcheck - verifies that JavaScript sources load their mandatory modules.
"""

from ._version import __version__

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``import modcheck`` cheap: the tree-sitter grammar is only loaded
    once a linter or parser is actually requested.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "ModCheckConstants": (".config.constants", "ModCheckConstants"),
        "Linter": (".core.linter", "Linter"),
        "lint_source": (".core.linter", "lint_source"),
        "Diagnostic": (".core.models", "Diagnostic"),
        "LintResult": (".core.models", "LintResult"),
        "Report": (".core.models", "Report"),
        "Severity": (".core.models", "Severity"),
        "SourceType": (".core.models", "SourceType"),
        "RequiredModulesRule": (".core.rules.required_modules", "RequiredModulesRule"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "Linter",
    "lint_source",
    "Diagnostic",
    "LintResult",
    "Report",
    "Severity",
    "SourceType",
    "RequiredModulesRule",
    "Config",
    "ModCheckConstants",
]
