"""Configuration package with clean public API."""

# Main configuration classes
from .schemas import (
    AppConfig,
    LoggingConfig,
    PaymentConfig,
    RegistryConfig,
    validate_config,
)

# Configuration management
from .loader import apply_environment_overrides, load_config_file
from .manager import ConfigurationManager, get_config_manager

__all__ = [
    # Main configuration
    'AppConfig',
    'validate_config',

    # Specific configurations
    'LoggingConfig',
    'PaymentConfig',
    'RegistryConfig',

    # Configuration management
    'ConfigurationManager',
    'get_config_manager',
    'load_config_file',
    'apply_environment_overrides',
]
