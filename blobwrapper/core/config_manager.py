"""
Configuration management for BlobWrapper.

Assembles StorageOptions and logging settings from a file, the environment
and explicit overrides. The storage service never reads the environment
itself; applications that want environment-driven setup go through here.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

import yaml
from pydantic import BaseModel, Field, ValidationError, ConfigDict

from ..storage.models import StorageOptions
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "BLOBWRAPPER_"


class LogLevel(str, Enum):
    """Valid log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: str = "json"
    file: Optional[str] = None
    rotation_size: str = "10MB"
    rotation_count: int = 5
    module_levels: Optional[Dict[str, str]] = Field(
        default=None,
        description="Per-module log levels, e.g., {'azure.core': 'WARNING'}"
    )


class BlobWrapperConfig(BaseModel):
    """Main BlobWrapper configuration schema."""

    storage: StorageOptions = Field(default_factory=StorageOptions)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(use_enum_values=True)


class ConfigManager:
    """
    Loads and validates BlobWrapper configuration.

    Configuration precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (BLOBWRAPPER_*)
    3. Configuration file (YAML/JSON)
    4. Defaults
    """

    # environment variable suffix -> (section, key)
    ENV_MAPPING = {
        "ACCOUNT_NAME": ("storage", "account_name"),
        "CONTAINER_NAME": ("storage", "container_name"),
        "TENANT_ID": ("storage", "tenant_id"),
        "CLIENT_ID": ("storage", "client_id"),
        "LOG_LEVEL": ("logging", "level"),
        "LOG_FORMAT": ("logging", "format"),
        "LOG_FILE": ("logging", "file"),
    }

    def __init__(self):
        self._config: Optional[BlobWrapperConfig] = None
        self._config_file: Optional[Path] = None

    def load(
        self,
        config_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> BlobWrapperConfig:
        """
        Load and validate configuration from multiple sources.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            overrides: Dictionary of explicit overrides, same shape as the file

        Returns:
            Validated BlobWrapperConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If specified config file doesn't exist
            ValueError: If the config file format is not supported
        """
        logger.info("Loading BlobWrapper configuration")

        config_dict: Dict[str, Any] = {}

        if config_file:
            config_dict = self._load_from_file(config_file)
            self._config_file = Path(config_file)
            logger.info(f"Loaded configuration from file: {config_file}")

        env_config = self._load_from_env()
        config_dict = self._merge_configs(config_dict, env_config)
        if env_config:
            logger.info(f"Applied environment overrides for: {', '.join(sorted(env_config))}")

        if overrides:
            config_dict = self._merge_configs(config_dict, overrides)
            logger.info(f"Applied {len(overrides)} explicit overrides")

        try:
            self._config = BlobWrapperConfig(**config_dict)
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.info("Configuration validated successfully")
        self._log_configuration()
        return self._config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}
            elif path.suffix == '.json':
                return json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from BLOBWRAPPER_* environment variables."""
        config: Dict[str, Any] = {}

        for suffix, (section, key) in self.ENV_MAPPING.items():
            value = os.getenv(f"{ENV_PREFIX}{suffix}")
            if value is None:
                continue
            if key == "level":
                value = value.upper()
            config.setdefault(section, {})[key] = value

        return config

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _log_configuration(self) -> None:
        """Log the loaded configuration with identity ids masked."""
        if not self._config:
            return

        config_dict = self._config.model_dump()

        storage = config_dict.get("storage", {})
        for key in ("tenant_id", "client_id"):
            if storage.get(key):
                storage[key] = "***REDACTED***"

        logger.debug(f"Active configuration: {json.dumps(config_dict, indent=2, default=str)}")

    def get_config(self) -> BlobWrapperConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If configuration hasn't been loaded
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def storage_options(self) -> StorageOptions:
        """Storage options from the loaded configuration."""
        return self.get_config().storage

    def configure_logging(self) -> None:
        """Apply the loaded logging section through setup_logging."""
        settings = self.get_config().logging
        level = settings.level.value if isinstance(settings.level, LogLevel) else settings.level
        setup_logging(
            level=level,
            format_type=settings.format,
            log_file=settings.file,
            rotation_size=settings.rotation_size,
            rotation_count=settings.rotation_count,
            module_levels=settings.module_levels,
        )

    def reload(self) -> BlobWrapperConfig:
        """Reload configuration from the same sources."""
        config_file = str(self._config_file) if self._config_file else None
        return self.load(config_file=config_file)
