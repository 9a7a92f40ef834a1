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
Constants for modcheck.
"""

from pathlib import Path

from .._version import __version__ as PACKAGE_VERSION


class ModCheckConstants:
    """Constants used throughout the linter."""

    VERSION = PACKAGE_VERSION

    # Project paths
    PACKAGE_ROOT = Path(__file__).parent.parent

    # Resource paths
    DATA_DIR = PACKAGE_ROOT / "data"
    DEFAULT_CONFIG_PATH = DATA_DIR / "default_config.yaml"

    # Config file names looked up in the working directory
    CONFIG_FILE_NAMES = (".modcheck.yaml", ".modcheck.yml")

    # Rule identity
    RULE_REQUIRED_MODULES = "required-modules"
    MESSAGE_MANDATORY_MODULE = 'Mandatory module "{{moduleName}}" must be loaded.'

    # Test-helper entry point reachable from any relative depth. Keys are the
    # path with its leading "../" and "./" segments removed.
    COMMON_ALIASES = {"common/index.mjs": "common"}

    # Prefix for Node.js built-in specifiers ("node:fs")
    BUILTIN_SCHEME = "node:"

    # File handling
    DEFAULT_EXTENSIONS = (".js", ".mjs", ".cjs")
    MODULE_EXTENSIONS = (".mjs",)
    DEFAULT_EXCLUDE_DIRS = ("node_modules", ".git")

    # Accepted settings
    SOURCE_TYPES = ("auto", "module", "script")
    SEVERITIES = ("error", "warning")
    OUTPUT_FORMATS = ("summary", "json", "sarif")

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get path to the built-in default configuration."""
        return cls.DEFAULT_CONFIG_PATH
