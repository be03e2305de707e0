"""Base domain layer - capability contract and error taxonomy."""

from .contracts import Strategy, conforms_to_contract
from .exceptions import (
    ConfigurationError,
    ContractViolationError,
    DomainException,
    DuplicateKeyError,
    IllegalConstructionError,
    RegistryError,
    UnknownKeyError,
    ValidationError,
)

__all__ = [
    "Strategy",
    "conforms_to_contract",
    "ConfigurationError",
    "ContractViolationError",
    "DomainException",
    "DuplicateKeyError",
    "IllegalConstructionError",
    "RegistryError",
    "UnknownKeyError",
    "ValidationError",
]
