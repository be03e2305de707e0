"""Dispatcher - single entry point routing payloads to registered strategies."""
from typing import Any, Hashable, List, Optional

from dispatchkit.domain.base.exceptions import DomainException
from dispatchkit.infrastructure.logging.logger import get_logger
from dispatchkit.infrastructure.registry.strategy_registry import StrategyRegistry


class Dispatcher:
    """
    Resolves a strategy by discriminator and runs it through the contract.

    The dispatcher holds no per-call state, so one instance can be shared
    by every caller. Errors from the registry and from the strategy itself
    propagate unchanged.
    """

    def __init__(self, registry: StrategyRegistry, name: Optional[str] = None):
        self._registry = registry
        self.name = name or registry.name
        self._logger = get_logger(__name__)

    def process(self, key: Any, payload: Any = None) -> Any:
        """
        Dispatch a payload to the strategy registered under key.

        Args:
            key: Discriminator of the strategy
            payload: Operation payload handed to Strategy.execute

        Returns:
            Whatever the strategy returns

        Raises:
            UnknownKeyError: If no strategy is registered under key
        """
        strategy = self._registry.create(key)
        self._logger.debug(
            "Dispatching", dispatcher=self.name, key=str(key), strategy=type(strategy).__name__
        )
        try:
            return strategy.execute(payload)
        except DomainException as e:
            self._logger.warning(
                "Strategy failed", dispatcher=self.name, key=str(key), error=str(e)
            )
            raise

    def supports(self, key: Any) -> bool:
        """Check whether a strategy is registered under key."""
        return self._registry.is_registered(key)

    def available_keys(self) -> List[Hashable]:
        """Discriminators this dispatcher can route to."""
        return self._registry.get_registered_keys()

    def __repr__(self) -> str:
        return f"Dispatcher(name='{self.name}')"
