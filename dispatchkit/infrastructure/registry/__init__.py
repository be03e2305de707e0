"""Infrastructure registry patterns."""

from .strategy_registry import (
    RegistryEntry,
    StrategyRegistry,
    get_strategy_registry,
    normalize_key,
    reset_strategy_registry,
)

__all__ = [
    'RegistryEntry',
    'StrategyRegistry',
    'get_strategy_registry',
    'normalize_key',
    'reset_strategy_registry',
]
