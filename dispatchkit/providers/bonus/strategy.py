"""Bonus calculation strategies keyed by employee role."""
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.domain.base.exceptions import ValidationError


class EmployeeRole(str, Enum):
    """Discriminators for the bonus strategies."""
    DEVELOPER = "developer"
    MANAGER = "manager"
    TESTER = "tester"
    HR = "hr"


BONUS_RATES: Dict[EmployeeRole, Decimal] = {
    EmployeeRole.DEVELOPER: Decimal("0.20"),
    EmployeeRole.MANAGER: Decimal("0.30"),
    EmployeeRole.TESTER: Decimal("0.15"),
    EmployeeRole.HR: Decimal("0.18"),
}


class BonusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    salary: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2, description="Salary the bonus is based on")


class BonusResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: EmployeeRole
    salary: Decimal
    rate: Decimal
    bonus: Decimal


class RateBonus(Strategy):
    """
    Bonus computed as a fixed share of salary.

    Has no side effects. Results are rounded half-up to two decimals.
    """

    def __init__(self, role: EmployeeRole, rate: Decimal):
        self.role = role
        self.rate = rate

    def execute(self, payload: Any) -> BonusResult:
        request = self._parse(payload)
        bonus = (request.salary * self.rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return BonusResult(role=self.role, salary=request.salary, rate=self.rate, bonus=bonus)

    @staticmethod
    def _parse(payload: Any) -> BonusRequest:
        if isinstance(payload, BonusRequest):
            return payload
        if isinstance(payload, (int, float, Decimal, str)) and not isinstance(payload, bool):
            payload = {"salary": payload}
        if not isinstance(payload, Mapping):
            raise ValidationError(
                f"Bonus payload must be a mapping, got {type(payload).__name__}"
            )
        try:
            return BonusRequest.model_validate(dict(payload))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid bonus payload: {e}", details=e.errors()) from e

    def __repr__(self) -> str:
        return f"RateBonus(role='{self.role.value}', rate={self.rate})"


def register_bonus_strategies(registry) -> None:
    """
    Register a rate-based bonus strategy for every role.

    Factories are closures rather than classes, so each declares RateBonus
    as its product type for the registration-time contract check.
    """
    for role, rate in BONUS_RATES.items():
        registry.register(role, _rate_bonus_factory(role, rate), product_type=RateBonus)


def _rate_bonus_factory(role: EmployeeRole, rate: Decimal):
    def factory() -> RateBonus:
        return RateBonus(role, rate)
    return factory
