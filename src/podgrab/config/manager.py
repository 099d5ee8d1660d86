"""Configuration manager for loading batch task files."""

import logging
from pathlib import Path

import pydantic
import yaml

from podgrab.config.schema import BatchConfig
from podgrab.utils.errors import (
    ConfigNotFoundError,
    InvalidConfigError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and validates a podgrab batch configuration file."""

    def __init__(self, config_file: Path) -> None:
        """Initialize the config manager.

        Args:
            config_file: Path to the YAML configuration document
        """
        self.config_file = config_file

    def load_config(self) -> BatchConfig:
        """Load and validate the batch configuration.

        Returns:
            Validated BatchConfig instance

        Raises:
            ConfigNotFoundError: If the config file doesn't exist
            UnsupportedVersionError: If apiVersion is not the supported version
            InvalidConfigError: If the file is unreadable or invalid
        """
        if not self.config_file.exists():
            raise ConfigNotFoundError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigError(
                f"Could not read configuration {self.config_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: expected a mapping"
            )

        # Version is checked before the tasks so a bad version always wins
        version = data.get("apiVersion")
        if version != BatchConfig.SUPPORTED_VERSION:
            raise UnsupportedVersionError(
                None if version is None else str(version), BatchConfig.SUPPORTED_VERSION
            )

        try:
            config = BatchConfig.model_validate(data)
        except pydantic.ValidationError as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        logger.debug("Loaded %d task(s) from %s", len(config.tasks), self.config_file)
        return config
