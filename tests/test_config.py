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
Tests for configuration module.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from modcheck.config.config import Config
from modcheck.config.constants import ModCheckConstants
from modcheck.core.exceptions import ConfigurationError, RuleConfigurationError
from modcheck.core.models import Severity, SourceType


class TestConfigInitialization:
    """Test Config class initialization."""

    def test_config_with_defaults(self):
        config = Config()

        assert config.required_modules == []
        assert config.source_type == "auto"
        assert config.severity == "error"
        assert config.extensions == [".js", ".mjs", ".cjs"]
        assert config.exclude_dirs == ["node_modules", ".git"]
        assert config.output_format == "summary"

    def test_config_with_custom_values(self):
        config = Config(required_modules=["common"], source_type="module", severity="warning")

        assert config.required_modules == ["common"]
        assert config.source_type == "module"
        assert config.diagnostic_severity == Severity.WARNING

    def test_config_from_env_variables(self):
        with patch.dict(
            "os.environ",
            {
                "MODCHECK_REQUIRED_MODULES": "common, fs,,path",
                "MODCHECK_SOURCE_TYPE": "MODULE",
                "MODCHECK_SEVERITY": "warning",
                "MODCHECK_OUTPUT_FORMAT": "json",
            },
        ):
            config = Config.from_env()

            assert config.required_modules == ["common", "fs", "path"]
            assert config.source_type == "module"
            assert config.severity == "warning"
            assert config.output_format == "json"

    def test_explicit_values_win_over_env(self):
        with patch.dict("os.environ", {"MODCHECK_REQUIRED_MODULES": "fs"}):
            config = Config(required_modules=["common"])
            assert config.required_modules == ["common"]

    def test_config_from_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("MODCHECK_REQUIRED_MODULES=common\nMODCHECK_SEVERITY=warning\n")

        with patch.dict("os.environ", {}):
            config = Config.from_file(env_file)
            assert config.required_modules == ["common"]
            assert config.severity == "warning"

        assert "MODCHECK_REQUIRED_MODULES" not in os.environ

    def test_missing_dotenv_file_falls_back_to_env(self, tmp_path):
        config = Config.from_file(tmp_path / "missing.env")
        assert config.required_modules == []


class TestConfigYaml:
    def test_yaml_overrides_defaults(self, tmp_path):
        path = tmp_path / ".modcheck.yaml"
        path.write_text("required_modules:\n  - common\n  - fs\nsource_type: script\n")

        config = Config.from_yaml(path)

        assert config.required_modules == ["common", "fs"]
        assert config.source_type == "script"
        # Untouched keys come from the built-in defaults
        assert config.extensions == [".js", ".mjs", ".cjs"]

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("required_modules: [fs]\nplugins: [foo]\n")
        assert Config.from_yaml(path).required_modules == ["fs"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- fs\n- common\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            Config.from_yaml(path)

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("required_modules: [fs\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Config.from_yaml(path)

    def test_round_trip_through_to_yaml(self, tmp_path):
        path = tmp_path / "out.yaml"
        Config(required_modules=["common"], severity="warning").to_yaml(path)

        data = yaml.safe_load(path.read_text())
        assert data["required_modules"] == ["common"]
        assert Config.from_yaml(path).severity == "warning"

    def test_discover_in_directory(self, tmp_path):
        (tmp_path / ".modcheck.yaml").write_text("required_modules: [common]\n")
        assert Config.discover(tmp_path).required_modules == ["common"]

    def test_discover_without_file(self, tmp_path):
        assert Config.discover(tmp_path).required_modules == []


class TestConfigValidation:
    def test_valid_config(self):
        Config(required_modules=["fs", "common"]).validate()

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"source_type": "commonjs"}, "source_type"),
            ({"severity": "fatal"}, "severity"),
            ({"output_format": "xml"}, "output_format"),
        ],
    )
    def test_unknown_values(self, kwargs, match):
        with pytest.raises(ConfigurationError, match=match):
            Config(**kwargs).validate()

    def test_duplicate_modules(self):
        with pytest.raises(RuleConfigurationError, match="non-unique"):
            Config(required_modules=["fs", "fs"]).validate()


class TestSourceTypeResolution:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("test/a.mjs", SourceType.MODULE),
            ("test/A.MJS", SourceType.MODULE),
            ("test/a.js", SourceType.SCRIPT),
            ("test/a.cjs", SourceType.SCRIPT),
            (None, SourceType.SCRIPT),
        ],
    )
    def test_auto(self, path, expected):
        assert Config().source_type_for(path) == expected

    def test_forced(self):
        assert Config(source_type="module").source_type_for("a.cjs") == SourceType.MODULE
        assert Config(source_type="script").source_type_for(Path("a.mjs")) == SourceType.SCRIPT


class TestConstants:
    def test_default_config_ships_with_package(self):
        assert ModCheckConstants.get_default_config_path().exists()

    def test_message_template(self):
        assert ModCheckConstants.MESSAGE_MANDATORY_MODULE == 'Mandatory module "{{moduleName}}" must be loaded.'
