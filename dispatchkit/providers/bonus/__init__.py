"""Bonus calculation strategies."""

from .strategy import (
    BONUS_RATES,
    BonusRequest,
    BonusResult,
    EmployeeRole,
    RateBonus,
    register_bonus_strategies,
)

__all__ = [
    "BONUS_RATES",
    "BonusRequest",
    "BonusResult",
    "EmployeeRole",
    "RateBonus",
    "register_bonus_strategies",
]
