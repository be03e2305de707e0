"""dispatchkit - pluggable object creation and strategy dispatch."""

__version__ = "1.0.0"

from dispatchkit.application.dispatcher import Dispatcher
from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.domain.base.exceptions import (
    ContractViolationError,
    DomainException,
    DuplicateKeyError,
    IllegalConstructionError,
    UnknownKeyError,
    ValidationError,
)
from dispatchkit.infrastructure.patterns.singleton_registry import (
    ManagedSingleton,
    SingletonManager,
)
from dispatchkit.infrastructure.registry.strategy_registry import StrategyRegistry

__all__ = [
    "__version__",
    "ContractViolationError",
    "Dispatcher",
    "DomainException",
    "DuplicateKeyError",
    "IllegalConstructionError",
    "ManagedSingleton",
    "SingletonManager",
    "Strategy",
    "StrategyRegistry",
    "UnknownKeyError",
    "ValidationError",
]
