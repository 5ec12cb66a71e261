"""Configuration loader for the AIME switcher."""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import ValidationError

from aimeswitcher.errors import ConfigError
from aimeswitcher.models.config import AppConfig

log = structlog.stdlib.get_logger()


class ConfigLoader:
    """Loads and validates application configuration from YAML files and environment variables."""

    def __init__(self) -> None:
        # ${NAME} or ${NAME:-default}
        self.env_var_pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

    def load_config(self, config_path: Optional[str] = None) -> AppConfig:
        """Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to the configuration YAML file. If None, uses
                config/$APP_ENV.yaml, falling back to config/default.yaml

        Returns:
            AppConfig: Validated application configuration

        Raises:
            ConfigError: If the file is missing or invalid, a referenced
                environment variable is unset, or validation fails
        """
        if config_path is None:
            config_path = self._get_default_config_path()

        log.info("loading_configuration", config_path=config_path)

        config_dict = self._load_yaml_file(config_path)
        config_dict = self._substitute_env_vars(config_dict)

        try:
            app_config = AppConfig(**config_dict)
        except ValidationError as e:
            log.error("configuration_validation_failed", error=str(e))
            raise ConfigError(f"Configuration validation failed: {e}") from e

        log.info("configuration_loaded_successfully", sync_enabled=app_config.sync_enabled)
        return app_config

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path based on environment.

        Returns:
            str: Path to the configuration file
        """
        env = os.getenv("APP_ENV", "default")
        config_dir = Path(__file__).parent.parent.parent / "config"
        config_file = config_dir / f"{env}.yaml"

        if not config_file.exists():
            config_file = config_dir / "default.yaml"

        if not config_file.exists():
            raise ConfigError(
                f"Configuration file not found: {config_file}. "
                f"Please create config/default.yaml or pass --config."
            )

        return str(config_file)

    def _load_yaml_file(self, config_path: str) -> Dict[str, Any]:
        """Load YAML configuration file.

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Configuration file not found: {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {config_path}: {e}") from e

        if config_dict is None:
            raise ConfigError(f"Configuration file is empty: {config_path}")
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {config_path}")

        log.debug("yaml_file_loaded", config_path=config_path)
        return config_dict

    def _substitute_env_vars(self, config: Any) -> Any:
        """Recursively substitute environment variables in configuration values."""
        if isinstance(config, dict):
            return {key: self._substitute_env_vars(value) for key, value in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._substitute_env_var_in_string(config)
        else:
            return config

    def _substitute_env_var_in_string(self, value: str) -> str:
        """Substitute ${VAR} and ${VAR:-default} patterns in a string.

        Raises:
            ConfigError: If a variable without a default is not set
        """

        def replace(match: re.Match) -> str:
            var_name, default = match.group(1), match.group(2)
            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            raise ConfigError(
                f"Required environment variable not set: {var_name}. "
                f"Please set {var_name} in your environment."
            )

        return self.env_var_pattern.sub(replace, value)

    def validate_config(self, config: AppConfig, sync_only: bool = False) -> list[str]:
        """Check settings the models cannot validate on their own.

        Args:
            config: Application configuration to validate
            sync_only: Whether the bot half will be skipped

        Returns:
            List of warning messages (empty if no warnings)

        Raises:
            ConfigError: If a setting required for this run mode is missing
        """
        if not sync_only and (config.discord is None or not config.discord.is_configured):
            raise ConfigError("discord.token and discord.app_id are required to run the bot")
        if not sync_only and config.cards is None:
            raise ConfigError(
                "cards.active_card_path and cards.directory_path are required to run the bot"
            )
        if sync_only and not config.sync_enabled:
            raise ConfigError("database.url is required when running with --sync-only")

        warnings = []

        if not config.sync_enabled:
            warnings.append("database.url is not set; snapshot sync is disabled")

        if config.sync.interval_seconds < 10:
            warnings.append(
                f"sync.interval_seconds ({config.sync.interval_seconds}) is very short; "
                f"every cycle queries both tables in full"
            )

        if warnings:
            log.warning("configuration_validation_warnings", warnings=warnings)

        return warnings
