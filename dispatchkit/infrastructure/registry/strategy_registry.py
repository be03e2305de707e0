"""Strategy Registry - Registry pattern for strategy factories.

This module implements the registry pattern for strategy creation,
eliminating hard-coded type conditionals. New strategies are added by
registering their factories at composition time, without modifying
existing entries.

The registry only routes; it never performs business logic and never
hands its factories back to callers.
"""

import inspect
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, List, Optional

from dispatchkit.domain.base.contracts import Strategy, conforms_to_contract
from dispatchkit.domain.base.exceptions import (
    ContractViolationError,
    DuplicateKeyError,
    UnknownKeyError,
    ValidationError,
)
from dispatchkit.infrastructure.logging.logger import get_logger

StrategyFactory = Callable[[], Strategy]


def normalize_key(key: Any) -> Hashable:
    """
    Normalize a discriminator to its registry form.

    Enum members are reduced to their value so that ``PaymentMethod.UPI``
    and ``"upi"`` address the same entry.

    Raises:
        ValidationError: If the key is None, an empty string or unhashable
    """
    if isinstance(key, Enum):
        key = key.value
    if key is None or (isinstance(key, str) and not key.strip()):
        raise ValidationError("Strategy key must be a non-empty value", details={"key": key})
    try:
        hash(key)
    except TypeError as e:
        raise ValidationError(f"Strategy key must be hashable: {key!r}", details={"key": key}) from e
    return key


@dataclass(frozen=True)
class RegistryEntry:
    """Immutable pairing of a discriminator with its factory."""

    key: Hashable
    factory: StrategyFactory
    cache_instance: bool = False
    product_type: Optional[type] = None

    def __repr__(self) -> str:
        return f"RegistryEntry(key='{self.key}', cached={self.cache_instance})"


class StrategyRegistry:
    """
    Registry for strategy factories.

    Maps each discriminator to a factory producing an object that
    implements the Strategy contract. Contract conformance is checked at
    registration when the factory is a class or declares its product type,
    and otherwise on every create.

    Thread-safe: a lock guards the entry map, and cached entries are built
    at most once.
    """

    def __init__(self, name: str = "default", cache_instances: bool = False):
        """
        Initialize strategy registry.

        Args:
            name: Registry name used in logs and error messages
            cache_instances: Default caching policy for new entries
        """
        self.name = name
        self._cache_instances = cache_instances
        self._entries: Dict[Hashable, RegistryEntry] = {}
        self._cached: Dict[Hashable, Strategy] = {}
        self._registry_lock = threading.RLock()
        self.logger = get_logger(__name__)

        self.logger.debug("Strategy registry initialized", registry=name)

    def register(self,
                 key: Any,
                 factory: StrategyFactory,
                 *,
                 cache_instance: Optional[bool] = None,
                 product_type: Optional[type] = None) -> None:
        """
        Register a strategy factory under a discriminator.

        Args:
            key: Discriminator (string or enum) identifying the strategy
            factory: Strategy class or zero-argument callable returning a strategy
            cache_instance: Reuse one instance for this entry; defaults to the
                registry policy
            product_type: Declared type produced by a non-class factory

        Raises:
            DuplicateKeyError: If the key is already registered
            ContractViolationError: If the factory cannot produce a strategy
            ValidationError: If the key is not a usable discriminator
        """
        key = normalize_key(key)
        self._check_factory(key, factory, product_type)

        entry = RegistryEntry(
            key=key,
            factory=factory,
            cache_instance=self._cache_instances if cache_instance is None else cache_instance,
            product_type=factory if inspect.isclass(factory) else product_type,
        )

        with self._registry_lock:
            if key in self._entries:
                raise DuplicateKeyError(key, self.name)
            self._entries[key] = entry

        self.logger.info("Registered strategy", registry=self.name, key=str(key))
        self.logger.debug("Strategy registration", registry=self.name, entry=repr(entry))

    def unregister(self, key: Any) -> None:
        """
        Remove a registered strategy.

        Raises:
            UnknownKeyError: If the key is not registered
        """
        key = normalize_key(key)
        with self._registry_lock:
            if key not in self._entries:
                raise UnknownKeyError(key, self._entries.keys(), self.name)
            del self._entries[key]
            self._cached.pop(key, None)

        self.logger.info("Unregistered strategy", registry=self.name, key=str(key))

    def create(self, key: Any) -> Strategy:
        """
        Create the strategy registered under a discriminator.

        Args:
            key: Discriminator of the strategy to build

        Returns:
            A fresh strategy instance, or the cached one for cached entries

        Raises:
            UnknownKeyError: If the key is not registered
            ContractViolationError: If the factory produced a non-strategy
        """
        key = normalize_key(key)
        entry = self._get_entry(key)

        if entry.cache_instance:
            with self._registry_lock:
                instance = self._cached.get(key)
                if instance is None:
                    instance = self._build(entry)
                    self._cached[key] = instance
            return instance

        return self._build(entry)

    def is_registered(self, key: Any) -> bool:
        """Check if a strategy is registered under the key."""
        try:
            key = normalize_key(key)
        except ValidationError:
            return False
        with self._registry_lock:
            return key in self._entries

    def get_registered_keys(self) -> List[Hashable]:
        """Get list of registered discriminators in registration order."""
        with self._registry_lock:
            return list(self._entries.keys())

    def clear_registrations(self) -> None:
        """
        Clear all registrations.

        This method is primarily for testing purposes.
        """
        with self._registry_lock:
            self._entries.clear()
            self._cached.clear()
        self.logger.debug("Cleared all strategy registrations", registry=self.name)

    def __contains__(self, key: Any) -> bool:
        return self.is_registered(key)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"StrategyRegistry(name='{self.name}', keys={self.get_registered_keys()})"

    def _get_entry(self, key: Hashable) -> RegistryEntry:
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                raise UnknownKeyError(key, self._entries.keys(), self.name)
            return entry

    def _build(self, entry: RegistryEntry) -> Strategy:
        instance = entry.factory()
        if not conforms_to_contract(instance):
            raise ContractViolationError(
                f"Factory for strategy '{entry.key}' produced {type(instance).__name__}, "
                f"which does not implement {Strategy.__name__}.execute",
                offending=instance,
            )
        self.logger.debug(
            "Created strategy",
            registry=self.name,
            key=str(entry.key),
            strategy=type(instance).__name__,
        )
        return instance

    def _check_factory(self, key: Hashable, factory: Any, product_type: Optional[type]) -> None:
        if not callable(factory):
            raise ContractViolationError(
                f"Factory for strategy '{key}' is not callable", offending=factory
            )

        declared = factory if inspect.isclass(factory) else product_type
        if declared is not None and not conforms_to_contract(declared):
            raise ContractViolationError(
                f"{getattr(declared, '__name__', declared)!s} registered for '{key}' "
                f"does not implement {Strategy.__name__}.execute",
                offending=declared,
            )


# Global registry instance
_strategy_registry: Optional[StrategyRegistry] = None
_strategy_registry_lock = threading.Lock()


def get_strategy_registry() -> StrategyRegistry:
    """
    Get the global strategy registry instance.

    Returns:
        Default strategy registry
    """
    global _strategy_registry
    if _strategy_registry is None:
        with _strategy_registry_lock:
            if _strategy_registry is None:
                _strategy_registry = StrategyRegistry()
    return _strategy_registry


def reset_strategy_registry() -> None:
    """
    Reset the global strategy registry instance.

    This function is primarily for testing purposes.
    """
    global _strategy_registry
    with _strategy_registry_lock:
        _strategy_registry = None
