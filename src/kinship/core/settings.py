"""
Configuration for kinship.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, cast

import yaml

from kinship.core.exceptions import ConfigurationError
from kinship.core.logging import LOG_LEVELS, logger

CONFIG_FILE_NAME = ".kinship.yml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "sources": {"extensions": [".rb"], "encoding": "utf-8"},
    "analysis": {"skip_invalid_sources": False},
    "output": {"format": "text"},
    "logging": {"level": "WARNING", "file": None, "debug_mode": False},
}


class ConfigValidator:
    """
    Configuration validator.

    Validations:
    1. Source extensions are a list of dotted suffixes
    2. Output format is a known report format
    3. Log level is a loguru level
    """

    def validate_config(self, config: Dict[str, Any]) -> None:
        extensions = config.get("sources", {}).get("extensions")
        if not isinstance(extensions, list) or not extensions:
            logger.error("Invalid source extensions", extensions=extensions)
            raise ConfigurationError(
                f"sources.extensions must be a non-empty list, got: {extensions!r}"
            )
        for extension in extensions:
            if not isinstance(extension, str) or not extension.startswith("."):
                logger.error("Invalid source extension", extension=extension)
                raise ConfigurationError(f"Invalid source extension: {extension!r}")

        from kinship.reporting.formats import ReportFormat

        output_format = config.get("output", {}).get("format")
        if output_format not in ReportFormat.values():
            logger.error("Invalid output format", format=output_format)
            error = ConfigurationError(f"Unknown output format in configuration: {output_format}")
            error.add_suggestion(f"Use one of: {', '.join(ReportFormat.values())}")
            raise error

        level = str(config.get("logging", {}).get("level", "")).upper()
        if level not in LOG_LEVELS:
            logger.error("Invalid log level", level=level)
            raise ConfigurationError(f"Unknown log level: {level}")


class Settings:
    """
    Main configuration.

    Priority:
    1. Default values
    2. .kinship.yml (or an explicit config file)
    3. Environment variables
    """

    ENV_OVERRIDES = {
        "KINSHIP_LOG_LEVEL": ("logging", "level"),
        "KINSHIP_LOG_FILE": ("logging", "file"),
        "KINSHIP_FORMAT": ("output", "format"),
    }

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._explicit_path = Path(config_path) if config_path else None
        self.config = self._load_config()
        self.validator = ConfigValidator()
        self.validator.validate_config(self.config)
        logger.debug(
            "Settings initialized",
            config_source=str(self._find_config_file() or "defaults"),
        )

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Settings":
        """Build settings from defaults plus ``overrides``, ignoring files and env."""
        settings = cls.__new__(cls)
        settings._explicit_path = None
        settings.config = copy.deepcopy(DEFAULT_CONFIG)
        settings._deep_merge(settings.config, overrides)
        settings.validator = ConfigValidator()
        settings.validator.validate_config(settings.config)
        return settings

    def _find_config_file(self) -> Optional[Path]:
        """Explicit path first, then .kinship.yml in the current directory."""
        if self._explicit_path is not None:
            if not self._explicit_path.exists():
                raise ConfigurationError(f"Configuration file not found: {self._explicit_path}")
            return self._explicit_path

        local_config = Path.cwd() / CONFIG_FILE_NAME
        if local_config.exists():
            return local_config
        return None

    def _load_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)

        config_path = self._find_config_file()
        if config_path is not None:
            try:
                with open(config_path, encoding="utf-8") as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(
                    "Error reading configuration file", file=str(config_path), error=str(e)
                )
                raise ConfigurationError(
                    f"Error reading configuration file: {e}", cause=e
                ) from e
            if file_config:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(
                        f"Configuration file must contain a mapping: {config_path}"
                    )
                self._deep_merge(config, file_config)
                logger.debug("Config loaded", file=str(config_path), keys=list(file_config))

        for env_key, path_tuple in self.ENV_OVERRIDES.items():
            env_value = os.getenv(env_key)
            if env_value:
                self._set_nested(config, path_tuple, env_value)

        if os.getenv("KINSHIP_DEBUG", "false").lower() == "true":
            self._set_nested(config, ("logging", "debug_mode"), True)

        return config

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        """Deep merge of dictionaries."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(cast(Dict[str, Any], base[key]), cast(Dict[str, Any], value))
            else:
                base[key] = value

    def _set_nested(self, data: Dict[str, Any], path: tuple, value: Any) -> None:
        """Set value at nested path."""
        current = data
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value, with dotted paths: "sources.extensions"."""
        current: Any = self.config
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def require(self, key: str) -> Any:
        """Get a value or raise ConfigurationError."""
        sentinel = object()
        value = self.get(key, sentinel)
        if value is sentinel:
            logger.error("Required config missing", key=key)
            raise ConfigurationError(f"Missing required config: {key}")
        return value
