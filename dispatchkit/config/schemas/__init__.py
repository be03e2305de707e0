"""Configuration schemas."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LoggingConfig
from .registry_schema import PaymentConfig, RegistryConfig

__all__ = [
    "AppConfig",
    "validate_config",
    "LoggingConfig",
    "PaymentConfig",
    "RegistryConfig",
]
