"""Application bootstrap - composition root wiring registries and dispatchers."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from dispatchkit.application.dispatcher import Dispatcher
from dispatchkit.config.manager import get_config_manager
from dispatchkit.domain.base.exceptions import UnknownKeyError
from dispatchkit.infrastructure.logging.logger import get_logger, setup_logging
from dispatchkit.infrastructure.registry.strategy_registry import StrategyRegistry
from dispatchkit.providers.bonus.strategy import register_bonus_strategies
from dispatchkit.providers.notification.strategy import register_notification_strategies
from dispatchkit.providers.payment.registration import register_payment_strategies

# family name -> function registering that family's strategies
STRATEGY_FAMILIES: Dict[str, Callable[[StrategyRegistry], None]] = {
    "payment": register_payment_strategies,
    "bonus": register_bonus_strategies,
    "notification": register_notification_strategies,
}


class Application:
    """Application context owning one registry and dispatcher per strategy family."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize the instance."""
        self.config_path = config_path
        self._initialized = False
        self._lock = threading.Lock()
        self._dispatchers: Dict[str, Dispatcher] = {}

        # Only create logger immediately (lightweight)
        self.logger = get_logger(__name__)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def families(self) -> List[str]:
        return list(self._dispatchers.keys())

    def initialize(self) -> "Application":
        """
        Load configuration, set up logging and compose every strategy family.

        Safe to call more than once; later calls are no-ops.
        """
        with self._lock:
            if self._initialized:
                return self

            config_manager = get_config_manager(self.config_path)
            app_config = config_manager.app_config
            setup_logging(app_config.logging)

            for family, register in STRATEGY_FAMILIES.items():
                registry = StrategyRegistry(
                    name=family, cache_instances=app_config.registry.cache_instances
                )
                register(registry)
                self._dispatchers[family] = Dispatcher(registry)

            self._initialized = True
            self.logger.info(
                "Application initialized",
                environment=app_config.environment,
                families=self.families,
            )
        return self

    def get_dispatcher(self, family: str) -> Dispatcher:
        """
        Get the dispatcher for a strategy family.

        Raises:
            UnknownKeyError: If the family does not exist
        """
        if not self._initialized:
            self.initialize()
        try:
            return self._dispatchers[family]
        except KeyError:
            raise UnknownKeyError(family, self._dispatchers.keys(), "families") from None


def create_application(config_path: Optional[str] = None) -> Application:
    """Create and initialize an application."""
    return Application(config_path).initialize()
