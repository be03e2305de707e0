"""Infrastructure patterns package."""

from dispatchkit.infrastructure.patterns.singleton_access import get_singleton
from dispatchkit.infrastructure.patterns.singleton_registry import (
    ManagedSingleton,
    SingletonManager,
    SingletonRegistry,
    SingletonState,
    get_singleton_registry,
    reset_singletons,
)

__all__ = [
    "ManagedSingleton",
    "SingletonManager",
    "SingletonRegistry",
    "SingletonState",
    "get_singleton",
    "get_singleton_registry",
    "reset_singletons",
]
