import logging
import os
from unittest.mock import patch

import pytest

from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.infrastructure.patterns.singleton_registry import reset_singletons
from dispatchkit.infrastructure.registry.strategy_registry import (
    StrategyRegistry,
    reset_strategy_registry,
)


@pytest.fixture(autouse=True)
def isolated_environment():
    """Reset process-wide singletons and drop DISPATCHKIT_* overrides around each test."""
    clean_env = {k: v for k, v in os.environ.items() if not k.startswith("DISPATCHKIT_")}
    with patch.dict(os.environ, clean_env, clear=True):
        reset_singletons()
        reset_strategy_registry()
        yield
        reset_singletons()
        reset_strategy_registry()

    # Drop handlers installed by setup_logging; they hold per-test capture streams
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_dispatchkit_handler", False):
            root_logger.removeHandler(handler)
            handler.close()


class EchoStrategy(Strategy):
    """Returns its payload tagged with the strategy name."""

    def execute(self, payload):
        return {"strategy": "echo", "payload": payload}


class UpperStrategy(Strategy):
    def execute(self, payload):
        return str(payload).upper()


class FailingStrategy(Strategy):
    def execute(self, payload):
        raise RuntimeError("strategy exploded")


@pytest.fixture
def registry():
    return StrategyRegistry(name="test")
