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
Configuration class for modcheck.

Values come from, in increasing precedence: the built-in defaults, a YAML
config file, environment variables (only for fields still at their default)
and explicit constructor arguments.
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..core.exceptions import ConfigurationError
from ..core.models import Severity, SourceType
from .constants import ModCheckConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Configuration for the linter.
    """

    # Rule options
    required_modules: list[str] = field(default_factory=list)

    # "auto", "module" or "script"
    source_type: str = "auto"
    severity: str = "error"

    # File discovery
    extensions: list[str] = field(default_factory=lambda: list(ModCheckConstants.DEFAULT_EXTENSIONS))
    exclude_dirs: list[str] = field(default_factory=lambda: list(ModCheckConstants.DEFAULT_EXCLUDE_DIRS))

    # Output Options
    output_format: str = "summary"

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if not self.required_modules:
            if env_required := os.getenv("MODCHECK_REQUIRED_MODULES"):
                self.required_modules = [m.strip() for m in env_required.split(",") if m.strip()]

        if self.source_type == "auto":
            if env_source_type := os.getenv("MODCHECK_SOURCE_TYPE"):
                self.source_type = env_source_type.lower()

        if self.severity == "error":
            if env_severity := os.getenv("MODCHECK_SEVERITY"):
                self.severity = env_severity.lower()

        if self.output_format == "summary":
            if env_format := os.getenv("MODCHECK_OUTPUT_FORMAT"):
                self.output_format = env_format.lower()

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from a .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if Path(config_file).exists():
            load_dotenv(config_file, override=True)
        else:
            logger.warning("Environment file not found: %s", config_file)
        return cls.from_env()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """
        Load configuration from a YAML file.

        The file is merged on top of the built-in defaults, so it only needs
        the keys it changes.

        Raises:
            FileNotFoundError: If *path* does not exist
            ConfigurationError: If the file is not a YAML mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        raw = cls._load_yaml_mapping(path)
        merged = cls._deep_merge(cls._load_default_raw(), raw)

        known = {f.name for f in fields(cls)}
        for key in sorted(set(merged) - known):
            logger.warning("Ignoring unknown config key '%s' in %s", key, path)
        return cls(**{key: value for key, value in merged.items() if key in known})

    @classmethod
    def discover(cls, directory: str | Path | None = None) -> "Config":
        """Load the first ``.modcheck.yaml`` found in *directory*, else defaults."""
        base = Path(directory) if directory else Path.cwd()
        for name in ModCheckConstants.CONFIG_FILE_NAMES:
            candidate = base / name
            if candidate.exists():
                logger.debug("Using config file %s", candidate)
                return cls.from_yaml(candidate)
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: str | Path) -> None:
        """Dump the effective configuration to a YAML file."""
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("# modcheck configuration\n")
            fh.write("# Omitted keys fall back to the built-in defaults.\n\n")
            yaml.dump(self.to_dict(), fh, default_flow_style=False, sort_keys=False)

    def validate(self) -> None:
        """
        Check settings and rule options.

        Raises:
            ConfigurationError: On an unknown setting value
            RuleConfigurationError: If ``required_modules`` breaks the rule schema
        """
        from ..core.rules.required_modules import RequiredModulesRule

        if self.source_type not in ModCheckConstants.SOURCE_TYPES:
            raise ConfigurationError(
                f"Unknown source_type '{self.source_type}'. "
                f"Available: {', '.join(ModCheckConstants.SOURCE_TYPES)}"
            )
        if self.severity not in ModCheckConstants.SEVERITIES:
            raise ConfigurationError(
                f"Unknown severity '{self.severity}'. Available: {', '.join(ModCheckConstants.SEVERITIES)}"
            )
        if self.output_format not in ModCheckConstants.OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output_format '{self.output_format}'. "
                f"Available: {', '.join(ModCheckConstants.OUTPUT_FORMATS)}"
            )
        RequiredModulesRule().validate_options(self.required_modules)

    def source_type_for(self, path: str | Path | None) -> SourceType:
        """Resolve the source type of one file."""
        if self.source_type != "auto":
            return SourceType(self.source_type)
        if path is not None and Path(path).suffix.lower() in ModCheckConstants.MODULE_EXTENSIONS:
            return SourceType.MODULE
        return SourceType.SCRIPT

    @property
    def diagnostic_severity(self) -> Severity:
        return Severity(self.severity)

    # -----------------------------------------------------------------------
    # Internal parsing
    # -----------------------------------------------------------------------

    @staticmethod
    def _load_yaml_mapping(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return raw

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        default_path = ModCheckConstants.get_default_config_path()
        if default_path.exists():
            return cls._load_yaml_mapping(default_path)
        return {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into *base*; lists are replaced."""
        result = dict(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = Config._deep_merge(result[key], val)
            else:
                result[key] = val
        return result
