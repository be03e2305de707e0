"""Capability contract shared by every interchangeable strategy."""
import inspect
from abc import ABC, abstractmethod
from typing import Any


class Strategy(ABC):
    """
    Capability contract for interchangeable implementations.

    Concrete strategies subclass this and implement ``execute``. The
    dispatcher only ever talks to a strategy through this method, so a
    strategy must not require any other behaviour from its callers.
    Each implementation documents its own side effects.
    """

    @abstractmethod
    def execute(self, payload: Any) -> Any:
        """Run the strategy against a payload and return its result."""


def conforms_to_contract(candidate: Any) -> bool:
    """
    Check whether a class or an instance implements the capability contract.

    Args:
        candidate: A type or an object

    Returns:
        True for concrete Strategy subclasses and their instances
    """
    if inspect.isclass(candidate):
        return issubclass(candidate, Strategy) and not inspect.isabstract(candidate)
    return isinstance(candidate, Strategy)
