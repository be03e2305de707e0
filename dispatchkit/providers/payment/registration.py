"""Payment strategy registration."""
from dispatchkit.infrastructure.logging.logger import get_logger
from dispatchkit.infrastructure.registry.strategy_registry import StrategyRegistry
from dispatchkit.providers.payment.models import PaymentMethod
from dispatchkit.providers.payment.strategy import (
    CreditCardPayment,
    NetBankingPayment,
    PayPalPayment,
    UpiPayment,
)

PAYMENT_STRATEGIES = {
    PaymentMethod.UPI: UpiPayment,
    PaymentMethod.CARD: CreditCardPayment,
    PaymentMethod.NET_BANKING: NetBankingPayment,
    PaymentMethod.PAYPAL: PayPalPayment,
}


def register_payment_strategies(registry: StrategyRegistry) -> None:
    """
    Register every payment method with the registry.

    Raises:
        DuplicateKeyError: If a payment method is already registered
    """
    for method, strategy_class in PAYMENT_STRATEGIES.items():
        registry.register(method, strategy_class)

    get_logger(__name__).debug(
        "Payment strategies registered", methods=[m.value for m in PAYMENT_STRATEGIES]
    )
