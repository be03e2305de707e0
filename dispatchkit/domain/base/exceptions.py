"""Domain exceptions for registry, contract and singleton failures."""
from typing import Any, Iterable, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when a payload or discriminator fails validation."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None, details: Any = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []
        self.details = details


class RegistryError(DomainException):
    """Base exception for creator registry failures."""
    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.key = key


class DuplicateKeyError(RegistryError):
    """Raised when a discriminator is registered twice."""
    def __init__(self, key: Any, registry_name: str = "default"):
        super().__init__(
            f"Strategy '{key}' is already registered in registry '{registry_name}'", key
        )
        self.registry_name = registry_name


class UnknownKeyError(RegistryError):
    """Raised when no strategy is registered for a discriminator."""
    def __init__(self, key: Any, available: Iterable[Any] = (), registry_name: str = "default"):
        self.available = sorted(str(k) for k in available)
        super().__init__(
            f"Strategy '{key}' is not registered in registry '{registry_name}'. "
            f"Available strategies: {self.available}",
            key,
        )
        self.registry_name = registry_name


class ContractViolationError(DomainException):
    """Raised when a factory or its product does not implement the capability contract."""
    def __init__(self, message: str, offending: Any = None):
        super().__init__(message)
        self.offending = offending


class IllegalConstructionError(DomainException):
    """Raised when a singleton-guarded resource is constructed outside its manager."""
    def __init__(self, resource_type: type):
        super().__init__(
            f"{resource_type.__name__} is a managed singleton and cannot be constructed "
            f"directly; obtain it through its singleton manager"
        )
        self.resource_type = resource_type
