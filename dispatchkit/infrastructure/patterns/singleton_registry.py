"""Singleton Resource Manager - single-instance lifecycle for shared resources.

Shared resources (configuration, ledgers, pooled connections) are owned by a
SingletonManager, which constructs the resource lazily on first demand and
hands out the same reference until an explicit reset. Resource types that
derive from ManagedSingleton refuse construction anywhere else.

The right to construct a guarded type is carried in a context variable that
is only set while a manager runs the factory; nothing is stored on the
resource class itself.
"""
import threading
from contextvars import ContextVar
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from dispatchkit.domain.base.exceptions import IllegalConstructionError
from dispatchkit.infrastructure.logging.logger import get_logger

T = TypeVar("T")

_construction_scope: ContextVar[Optional[type]] = ContextVar(
    "dispatchkit_singleton_construction_scope", default=None
)


class SingletonState(str, Enum):
    """Lifecycle state of a managed singleton."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class ManagedSingleton:
    """
    Base class for resources that may only be built by a SingletonManager.

    Direct construction raises IllegalConstructionError. A manager for a
    base type may build any of its subclasses.
    """

    def __new__(cls, *args: Any, **kwargs: Any):
        scope = _construction_scope.get()
        if scope is None or not issubclass(cls, scope):
            raise IllegalConstructionError(cls)
        return super().__new__(cls)


class SingletonManager(Generic[T]):
    """
    Owns at most one live instance of a resource type.

    Transitions:
        UNINITIALIZED -> INITIALIZED on the first get_instance()
        INITIALIZED -> INITIALIZED on later get_instance() calls
        INITIALIZED -> UNINITIALIZED on reset()
    """

    def __init__(self, resource_type: Type[T], factory: Optional[Callable[..., T]] = None):
        """
        Initialize the manager.

        Args:
            resource_type: Type of the managed resource
            factory: Callable building the resource; defaults to the type itself
        """
        self._resource_type = resource_type
        self._factory = factory or resource_type
        self._instance: Optional[T] = None
        self._lock = threading.Lock()
        self._logger = get_logger(__name__)

    @property
    def resource_type(self) -> Type[T]:
        return self._resource_type

    @property
    def state(self) -> SingletonState:
        if self._instance is None:
            return SingletonState.UNINITIALIZED
        return SingletonState.INITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self.state is SingletonState.INITIALIZED

    def get_instance(self, *args: Any, **kwargs: Any) -> T:
        """
        Return the managed instance, constructing it on first use.

        Constructor arguments only apply to the first construction; later
        calls return the existing instance unchanged.
        """
        instance = self._instance
        if instance is not None:
            return instance

        with self._lock:
            if self._instance is None:
                self._instance = self._construct(*args, **kwargs)
                self._logger.debug(
                    "Singleton constructed", resource=self._resource_type.__name__
                )
            return self._instance

    def reset(self) -> None:
        """
        Drop the managed instance so the next get_instance() rebuilds it.

        Intended for test harnesses and explicit teardown. A resource
        exposing close() is closed first.
        """
        with self._lock:
            instance, self._instance = self._instance, None

        if instance is not None:
            close = getattr(instance, "close", None)
            if callable(close):
                close()
            self._logger.debug("Singleton reset", resource=self._resource_type.__name__)

    def _construct(self, *args: Any, **kwargs: Any) -> T:
        token = _construction_scope.set(self._resource_type)
        try:
            return self._factory(*args, **kwargs)
        finally:
            _construction_scope.reset(token)


class SingletonRegistry:
    """
    Explicit registry of singleton managers keyed by resource type.

    Each resource type gets its own manager and lock, so building one
    resource never blocks access to another.
    """

    def __init__(self):
        self._managers: Dict[type, SingletonManager] = {}
        self._lock = threading.Lock()

    def manager_for(self, resource_type: Type[T], factory: Optional[Callable[..., T]] = None) -> SingletonManager[T]:
        """
        Get the manager for a resource type, creating it if needed.

        Args:
            resource_type: Type of the managed resource
            factory: Optional factory, only used when the manager is first created
        """
        with self._lock:
            manager = self._managers.get(resource_type)
            if manager is None:
                manager = SingletonManager(resource_type, factory)
                self._managers[resource_type] = manager
            return manager

    def get(self, resource_type: Type[T], *args: Any, **kwargs: Any) -> T:
        """Get the single instance of a resource type."""
        return self.manager_for(resource_type).get_instance(*args, **kwargs)

    def is_initialized(self, resource_type: type) -> bool:
        with self._lock:
            manager = self._managers.get(resource_type)
        return manager is not None and manager.is_initialized

    def reset(self, resource_type: Optional[type] = None) -> None:
        """
        Reset one resource type, or every managed resource when None.

        This method is primarily for testing purposes.
        """
        with self._lock:
            if resource_type is None:
                managers = list(self._managers.values())
            else:
                managers = [m for t, m in self._managers.items() if t is resource_type]

        for manager in managers:
            manager.reset()


# Global registry instance
_singleton_registry = SingletonRegistry()


def get_singleton_registry() -> SingletonRegistry:
    """Get the process-wide singleton registry."""
    return _singleton_registry


def reset_singletons(resource_type: Optional[type] = None) -> None:
    """
    Reset managed singletons in the process-wide registry.

    This function is primarily for testing purposes.
    """
    _singleton_registry.reset(resource_type)
