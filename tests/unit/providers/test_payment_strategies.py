"""Tests for the payment strategies."""

from decimal import Decimal

import pytest

from dispatchkit.config.manager import get_config_manager
from dispatchkit.domain.base.contracts import Strategy
from dispatchkit.domain.base.exceptions import (
    DuplicateKeyError,
    IllegalConstructionError,
    ValidationError,
)
from dispatchkit.infrastructure.registry.strategy_registry import StrategyRegistry
from dispatchkit.providers.payment import (
    CreditCardPayment,
    NetBankingPayment,
    PaymentMethod,
    PaymentRequest,
    PaymentResult,
    PayPalPayment,
    TransactionLedger,
    UpiPayment,
    get_transaction_ledger,
    register_payment_strategies,
)
from dispatchkit.providers.payment.models import format_amount


class TestPaymentStrategies:
    """Test each payment method and its settlement side effects."""

    @pytest.mark.parametrize("strategy_class,method,message", [
        (UpiPayment, PaymentMethod.UPI, "Amount paid via UPI: Rs.100"),
        (CreditCardPayment, PaymentMethod.CARD, "Amount paid via Credit Card: Rs.100"),
        (NetBankingPayment, PaymentMethod.NET_BANKING, "Amount paid via Net Banking: Rs.100"),
        (PayPalPayment, PaymentMethod.PAYPAL, "Processing PayPal payment of Rs.100"),
    ])
    def test_method_specific_result(self, strategy_class, method, message):
        result = strategy_class().execute({"amount": 100})

        assert isinstance(result, PaymentResult)
        assert result.method is method
        assert result.amount == Decimal("100")
        assert result.currency == "INR"
        assert result.message == message
        assert result.transaction_id.startswith(f"{method.value}-")

    def test_all_strategies_declare_contract(self):
        for strategy_class in (UpiPayment, CreditCardPayment, NetBankingPayment, PayPalPayment):
            assert issubclass(strategy_class, Strategy)

    def test_payment_recorded_in_ledger(self):
        first = UpiPayment().execute({"amount": 100})
        second = CreditCardPayment().execute({"amount": 250, "reference": "order-7"})

        ledger = get_transaction_ledger()
        assert ledger.entries() == (first, second)
        assert ledger.entries(PaymentMethod.CARD) == (second,)
        assert second.reference == "order-7"

    def test_transaction_ids_unique(self):
        ids = {UpiPayment().execute(10).transaction_id for _ in range(20)}

        assert len(ids) == 20

    def test_accepts_request_model_and_bare_amount(self):
        assert UpiPayment().execute(PaymentRequest(amount=5)).amount == Decimal("5")
        assert UpiPayment().execute("12.50").message == "Amount paid via UPI: Rs.12.50"

    def test_explicit_currency(self):
        result = UpiPayment().execute({"amount": 10, "currency": "usd"})

        assert result.currency == "USD"
        assert result.message == "Amount paid via UPI: USD 10"

    def test_configured_currency_used_by_default(self):
        """Test that strategies read shared configuration through the singleton."""
        get_config_manager().set("payment.currency", "EUR")

        assert NetBankingPayment().execute({"amount": 1}).currency == "EUR"

    def test_max_amount_enforced(self):
        get_config_manager().set("payment.max_amount", "500")

        with pytest.raises(ValidationError, match="exceeds the limit of Rs.500"):
            UpiPayment().execute({"amount": 501})

        assert len(get_transaction_ledger()) == 0
        assert UpiPayment().execute({"amount": 500}).amount == Decimal("500")

    @pytest.mark.parametrize("payload", [
        None,
        {"amount": 0},
        {"amount": -5},
        {"amount": "lots"},
        {},
        {"amount": 10, "tip": 1},
        {"amount": 10, "currency": "RUPEES"},
        ["amount", 10],
        True,
    ])
    def test_invalid_payloads(self, payload):
        with pytest.raises(ValidationError):
            UpiPayment().execute(payload)

    def test_validation_error_carries_details(self):
        with pytest.raises(ValidationError) as exc_info:
            CreditCardPayment().execute({"amount": -1})

        assert exc_info.value.details[0]["loc"] == ("amount",)

    @pytest.mark.parametrize("amount", ["1E+30", "1000000000000000000", "10.001"])
    def test_out_of_range_amount_rejected(self, amount):
        with pytest.raises(ValidationError, match="Invalid payment payload"):
            UpiPayment().execute({"amount": amount})

        assert len(get_transaction_ledger()) == 0

    def test_largest_amount_accepted(self):
        result = UpiPayment().execute({"amount": "9999999999999999.99"})

        assert result.message == "Amount paid via UPI: Rs.9999999999999999.99"


class TestTransactionLedger:
    """Test the ledger resource."""

    def test_ledger_is_singleton(self):
        assert get_transaction_ledger() is get_transaction_ledger()

    def test_direct_construction_is_illegal(self):
        with pytest.raises(IllegalConstructionError):
            TransactionLedger()


class TestPaymentRegistration:
    """Test composing payment strategies into a registry."""

    def test_registers_every_method(self):
        registry = StrategyRegistry(name="payment")

        register_payment_strategies(registry)

        assert registry.get_registered_keys() == ["upi", "card", "netbanking", "paypal"]
        assert isinstance(registry.create(PaymentMethod.UPI), UpiPayment)
        assert isinstance(registry.create("paypal"), PayPalPayment)

    def test_registering_twice_fails(self):
        registry = StrategyRegistry()
        register_payment_strategies(registry)

        with pytest.raises(DuplicateKeyError):
            register_payment_strategies(registry)


@pytest.mark.parametrize("amount,currency,expected", [
    (Decimal("100"), "INR", "Rs.100"),
    (Decimal("100.00"), "INR", "Rs.100"),
    (Decimal("99.5"), "INR", "Rs.99.5"),
    (Decimal("1E+3"), "USD", "USD 1000"),
])
def test_format_amount(amount, currency, expected):
    assert format_amount(amount, currency) == expected
