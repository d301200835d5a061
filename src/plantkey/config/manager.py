"""Configuration management for PlantKey."""

import logging
import os
import shutil
from typing import Any

import yaml

from plantkey.config.models import PlantKeyConfig
from plantkey.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and saving."""

    CURRENT_VERSION = "1.0.0"
    SUPPORTED_VERSIONS = frozenset({"1.0.0"})

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_plantkey_config_path()

    def load(self) -> PlantKeyConfig:
        """Load and validate configuration.

        Returns:
            PlantKeyConfig: Loaded and validated configuration

        Raises:
            ValueError: If the config version is unsupported or validation fails
        """
        self._ensure_config_exists()

        raw_config = self._read_yaml()

        config_version = str(raw_config.get("config_version", self.CURRENT_VERSION))
        if config_version not in self.SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version '{config_version}'. "
                f"Supported versions: {', '.join(sorted(self.SUPPORTED_VERSIONS))}"
            )

        config = self._create_config_object(raw_config)

        # Secrets from the environment win over the file
        api_key = os.getenv("PLANTNET_API_KEY")
        if api_key:
            config.recognition.api_key = api_key

        return config

    def save(self, config: PlantKeyConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_dict = self._config_to_dict(config)
        config_yaml = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def _ensure_config_exists(self) -> None:
        """Ensure config file exists, create it from defaults if needed."""
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = self._config_to_dict(PlantKeyConfig())
            config_yaml = yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            self.config_path.write_text(config_yaml)
            logger.info("Created default configuration at %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary
        """
        config_text = self.config_path.read_text()
        data = yaml.safe_load(config_text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {self.config_path} must contain a mapping")
        return data

    def _create_config_object(self, raw_config: dict[str, Any]) -> PlantKeyConfig:
        """Create PlantKeyConfig object from dictionary.

        Args:
            raw_config: Configuration dictionary

        Returns:
            PlantKeyConfig: Typed configuration object
        """
        expected_fields = set(PlantKeyConfig.model_fields.keys())

        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Filtered out unexpected config fields: %s", unexpected_fields)

        return PlantKeyConfig(**filtered_config)

    def _config_to_dict(self, config: PlantKeyConfig) -> dict[str, Any]:
        """Convert PlantKeyConfig to a YAML-safe dictionary."""
        return config.model_dump(mode="json")
