"""Payment request and result models."""
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentMethod(str, Enum):
    """Discriminators for the payment strategies."""
    UPI = "upi"
    CARD = "card"
    NET_BANKING = "netbanking"
    PAYPAL = "paypal"


class PaymentRequest(BaseModel):
    """Payload accepted by every payment strategy."""
    model_config = ConfigDict(extra="forbid")

    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2, description="Amount to charge")
    currency: Optional[str] = Field(None, description="ISO 4217 code, configured default when omitted")
    reference: Optional[str] = Field(None, description="Caller-supplied reference")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a three-letter code")
        return v


class PaymentResult(BaseModel):
    """Outcome of a settled payment."""
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    method: PaymentMethod
    amount: Decimal
    currency: str
    message: str
    reference: Optional[str] = None


def format_amount(amount: Decimal, currency: str) -> str:
    """Render an amount the way receipts print it (``Rs.100`` for rupees)."""
    if amount == amount.to_integral_value():
        amount = amount.quantize(Decimal(1))
    text = format(amount, "f")
    if currency == "INR":
        return f"Rs.{text}"
    return f"{currency} {text}"
