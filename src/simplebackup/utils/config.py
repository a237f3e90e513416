#!/usr/bin/env python3
"""
utils/config.py

Simple configuration management utilities.
Provides centralized configuration loading.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from simplebackup.core.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_DESCRIPTION_MARKER,
    DEFAULT_KEEP,
    DEFAULT_LOG_PATH,
)
from simplebackup.utils.exceptions import CLIError
from simplebackup.utils.logger import setup_logger

logger = setup_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support
    """

    def __init__(
        self, config_file: Optional[Path] = None, config_dir: Optional[Path] = None
    ):
        """
        Initialize ConfigManager.

        Args:
            config_file: Explicit settings file; it must exist
            config_dir: Directory searched for settings.yml / settings.yaml
                (defaults to $SIMPLEBACKUP_CONFIG_DIR or ./configs)
        """
        if config_file is not None:
            self.settings_file = Path(config_file)
            if not self.settings_file.exists():
                raise CLIError(f"Config file not found: {self.settings_file}")
            return

        self.config_dir = Path(
            config_dir or os.environ.get("SIMPLEBACKUP_CONFIG_DIR", "configs")
        )

        # Try both .yml and .yaml extensions
        yml_file = self.config_dir / "settings.yml"
        yaml_file = self.config_dir / "settings.yaml"

        if yml_file.exists():
            self.settings_file = yml_file
        else:
            self.settings_file = yaml_file

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.debug(f"Config file not found: {file_path}, using defaults")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CLIError(f"Error parsing {file_path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise CLIError(f"Expected a mapping at the top of {file_path}")
        return content

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings.
        """
        return self._load_yaml_file(self.settings_file)

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration as a cached property."""
        if not hasattr(self, "_cached_config"):
            self._cached_config = self.load_settings()
        return self._cached_config

    def reload_config(self) -> None:
        """Force reload of configuration from file."""
        if hasattr(self, "_cached_config"):
            delattr(self, "_cached_config")

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.
        """
        # Check environment variable first
        if env_var and env_var in os.environ:
            return os.environ[env_var]

        current = self.config
        try:
            for key in key_path.split("."):
                current = current[key]
        except (KeyError, TypeError):
            return default
        return default if current is None else current

    def get_aws_region(self) -> str:
        """Get AWS region with environment variable override support."""
        return self.get_value("aws.region", DEFAULT_AWS_REGION, env_var="AWS_REGION")

    def get_aws_profile(self) -> Optional[str]:
        """Get the named AWS profile, if any."""
        return self.get_value("aws.profile", None, env_var="AWS_PROFILE")

    def get_max_attempts(self) -> Optional[int]:
        """Get the botocore retry attempt limit, if configured."""
        value = self.get_value("aws.max_attempts")
        return None if value is None else self._as_int("aws.max_attempts", value)

    def get_marker(self) -> str:
        """Get the ownership marker stamped on created snapshots and images."""
        marker = self.get_value(
            "backup.marker", DEFAULT_DESCRIPTION_MARKER, env_var="SIMPLEBACKUP_MARKER"
        )
        marker = str(marker).strip()
        if not marker:
            raise CLIError("backup.marker must not be empty")
        return marker

    def get_keep(self) -> int:
        """Get the default number of owned snapshots kept per volume."""
        return self._as_int("backup.keep", self.get_value("backup.keep", DEFAULT_KEEP))

    def get_logging_level(self) -> str:
        """Get logging level."""
        level = str(self.get_value("logging.level", "INFO", env_var="LOG_LEVEL")).upper()
        if level not in LOG_LEVELS:
            raise CLIError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )
        return level

    def get_logging_path(self) -> str:
        """Get logging file path."""
        return self.get_value("logging.path", DEFAULT_LOG_PATH, env_var="LOG_PATH")

    @staticmethod
    def _as_int(key_path: str, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise CLIError(f"{key_path} must be an integer, got {value!r}") from e
