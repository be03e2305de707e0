"""Payment strategies.

Every payment method is an independent Strategy. Shared settlement steps
(currency defaulting, limit checks, ledger bookkeeping) live in
PaymentSettlement, which each strategy composes rather than inherits.

Side effects: a settled payment is appended to the process-wide
TransactionLedger and logged at info level.
"""
import uuid
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from dispatchkit.config.manager import ConfigurationManager, get_config_manager
from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.domain.base.exceptions import ValidationError
from dispatchkit.infrastructure.logging.logger import get_logger
from dispatchkit.providers.payment.ledger import TransactionLedger, get_transaction_ledger
from dispatchkit.providers.payment.models import (
    PaymentMethod,
    PaymentRequest,
    PaymentResult,
    format_amount,
)


def parse_payment_request(payload: Any) -> PaymentRequest:
    """
    Coerce a payload into a PaymentRequest.

    Accepts a PaymentRequest, a mapping such as ``{"amount": 100}`` or a bare
    amount.

    Raises:
        ValidationError: If the payload is missing or invalid
    """
    if isinstance(payload, PaymentRequest):
        return payload
    if payload is None:
        raise ValidationError("Payment payload is required")
    if isinstance(payload, (int, float, Decimal, str)) and not isinstance(payload, bool):
        payload = {"amount": payload}
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"Payment payload must be a mapping, got {type(payload).__name__}"
        )
    try:
        return PaymentRequest.model_validate(dict(payload))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid payment payload: {e}", details=e.errors()) from e


class PaymentSettlement:
    """Settlement steps shared by the payment strategies."""

    def __init__(self,
                 ledger_provider: Callable[[], TransactionLedger] = get_transaction_ledger,
                 config_provider: Callable[[], ConfigurationManager] = get_config_manager):
        self._ledger_provider = ledger_provider
        self._config_provider = config_provider
        self._logger = get_logger(__name__)

    def settle(self, method: PaymentMethod, request: PaymentRequest, template: str) -> PaymentResult:
        """
        Settle a validated request and record it.

        Args:
            method: Payment method performing the settlement
            request: Validated payment request
            template: Receipt message with an ``{amount}`` placeholder

        Raises:
            ValidationError: If the amount exceeds the configured limit
        """
        payment_config = self._config_provider().app_config.payment
        currency = request.currency or payment_config.currency

        if payment_config.max_amount is not None and request.amount > payment_config.max_amount:
            raise ValidationError(
                f"Payment of {format_amount(request.amount, currency)} exceeds the limit of "
                f"{format_amount(payment_config.max_amount, currency)}",
                details={"amount": str(request.amount), "max_amount": str(payment_config.max_amount)},
            )

        result = PaymentResult(
            transaction_id=f"{method.value}-{uuid.uuid4().hex[:12]}",
            method=method,
            amount=request.amount,
            currency=currency,
            message=template.format(amount=format_amount(request.amount, currency)),
            reference=request.reference,
        )
        self._ledger_provider().record(result)
        self._logger.info(
            result.message, method=method.value, transaction_id=result.transaction_id
        )
        return result


class UpiPayment(Strategy):
    """Pays through UPI."""

    def __init__(self, settlement: Optional[PaymentSettlement] = None):
        self._settlement = settlement or PaymentSettlement()

    def execute(self, payload: Any) -> PaymentResult:
        request = parse_payment_request(payload)
        return self._settlement.settle(PaymentMethod.UPI, request, "Amount paid via UPI: {amount}")


class CreditCardPayment(Strategy):
    """Pays with a credit card."""

    def __init__(self, settlement: Optional[PaymentSettlement] = None):
        self._settlement = settlement or PaymentSettlement()

    def execute(self, payload: Any) -> PaymentResult:
        request = parse_payment_request(payload)
        return self._settlement.settle(
            PaymentMethod.CARD, request, "Amount paid via Credit Card: {amount}"
        )


class NetBankingPayment(Strategy):
    """Pays through net banking."""

    def __init__(self, settlement: Optional[PaymentSettlement] = None):
        self._settlement = settlement or PaymentSettlement()

    def execute(self, payload: Any) -> PaymentResult:
        request = parse_payment_request(payload)
        return self._settlement.settle(
            PaymentMethod.NET_BANKING, request, "Amount paid via Net Banking: {amount}"
        )


class PayPalPayment(Strategy):
    """Pays through PayPal."""

    def __init__(self, settlement: Optional[PaymentSettlement] = None):
        self._settlement = settlement or PaymentSettlement()

    def execute(self, payload: Any) -> PaymentResult:
        request = parse_payment_request(payload)
        return self._settlement.settle(
            PaymentMethod.PAYPAL, request, "Processing PayPal payment of {amount}"
        )
