"""Strategy registry and payment configuration schemas."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RegistryConfig(BaseModel):
    """Strategy registry configuration."""

    cache_instances: bool = Field(
        False, description="Reuse one strategy instance per registered key"
    )


class PaymentConfig(BaseModel):
    """Payment strategy configuration."""

    currency: str = Field("INR", description="Default ISO 4217 currency code")
    max_amount: Optional[Decimal] = Field(
        None,
        max_digits=18,
        decimal_places=2,
        description="Upper limit for a single payment, unlimited when unset",
    )

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate currency code."""
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a three-letter code")
        return v

    @field_validator("max_amount")
    @classmethod
    def validate_max_amount(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Maximum payment amount must be positive")
        return v
