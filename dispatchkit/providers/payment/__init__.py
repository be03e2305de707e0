"""Payment strategies."""

from .ledger import TransactionLedger, get_transaction_ledger
from .models import PaymentMethod, PaymentRequest, PaymentResult
from .registration import register_payment_strategies
from .strategy import (
    CreditCardPayment,
    NetBankingPayment,
    PaymentSettlement,
    PayPalPayment,
    UpiPayment,
)

__all__ = [
    "CreditCardPayment",
    "NetBankingPayment",
    "PaymentMethod",
    "PaymentRequest",
    "PaymentResult",
    "PaymentSettlement",
    "PayPalPayment",
    "TransactionLedger",
    "UpiPayment",
    "get_transaction_ledger",
    "register_payment_strategies",
]
