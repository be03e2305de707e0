"""Unified configuration management for the application."""
from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from dispatchkit.config.loader import (
    apply_environment_overrides,
    get_nested,
    load_config_file,
    set_nested,
)
from dispatchkit.config.schemas.app_schema import AppConfig
from dispatchkit.domain.base.exceptions import ConfigurationError
from dispatchkit.infrastructure.logging.logger import get_logger
from dispatchkit.infrastructure.patterns.singleton_access import get_singleton
from dispatchkit.infrastructure.patterns.singleton_registry import ManagedSingleton

logger = get_logger(__name__)

_MISSING = object()


class ConfigurationManager(ManagedSingleton):
    """
    Process-wide configuration resource.

    Holds the raw configuration dictionary together with its validated
    AppConfig view. It is a managed singleton: obtain it through
    get_config_manager(); direct construction raises
    IllegalConstructionError. A value changed with set() is seen by every
    later caller until the singleton is reset.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional JSON/YAML configuration file; defaults apply when None
        """
        self._config_file = config_file
        self._lock = threading.RLock()
        self._raw_config: Dict[str, Any] = {}
        self._app_config: AppConfig = AppConfig()
        self._load()

    @property
    def config_file(self) -> Optional[str]:
        return self._config_file

    @property
    def app_config(self) -> AppConfig:
        """Validated application configuration."""
        with self._lock:
            return self._app_config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key (dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Validated configuration value; keys outside the schema come from
            the raw configuration
        """
        path = key.split(".")
        with self._lock:
            value = get_nested(self._app_config.model_dump(), path, _MISSING)
            if value is _MISSING:
                value = get_nested(self._raw_config, path, default)
            return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        The whole configuration is revalidated; on failure nothing changes.

        Args:
            key: Configuration key (dot notation for nested keys)
            value: Configuration value

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        with self._lock:
            candidate = copy.deepcopy(self._raw_config)
            set_nested(candidate, key.split("."), value)
            self._app_config = self._validate(candidate)
            self._raw_config = candidate

        logger.debug("Configuration value set", key=key)

    def to_dict(self) -> Dict[str, Any]:
        """Get the effective configuration as a plain dictionary."""
        with self._lock:
            return self._app_config.model_dump(mode="json")

    def reload(self) -> None:
        """Reload configuration from its sources, discarding set() changes."""
        with self._lock:
            self._load()

    def _load(self) -> None:
        config_data: Dict[str, Any] = {}
        if self._config_file:
            config_data = load_config_file(self._config_file)

        # Apply environment variable overrides
        config_data = apply_environment_overrides(config_data)

        self._app_config = self._validate(config_data)
        self._raw_config = config_data
        logger.info(
            "Configuration loaded",
            config_file=self._config_file or "<defaults>",
            environment=self._app_config.environment,
        )

    @staticmethod
    def _validate(config_data: Dict[str, Any]) -> AppConfig:
        try:
            return AppConfig(**config_data)
        except PydanticValidationError as e:
            missing = [
                ".".join(str(part) for part in error["loc"])
                for error in e.errors()
                if error.get("type") == "missing"
            ]
            raise ConfigurationError(
                f"Invalid configuration: {e}", missing_fields=missing, details=e.errors()
            ) from e


def get_config_manager(config_file: Optional[str] = None) -> ConfigurationManager:
    """
    Get the configuration manager singleton instance.

    The instance is created on first use with default configuration, or from
    config_file when one is given on that first call.

    Args:
        config_file: Optional path to configuration file

    Returns:
        Configuration manager instance
    """
    manager = get_singleton(ConfigurationManager, config_file)
    if config_file is not None and config_file != manager.config_file:
        logger.warning(
            "Configuration already loaded; ignoring config file",
            requested_file=config_file,
            active_file=manager.config_file or "<defaults>",
        )
    return manager
