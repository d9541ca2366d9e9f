"""Tests for FixtureStore."""

import threading
from decimal import Decimal

import pytest

from chari_stub.config import FixtureConfig
from chari_stub.exceptions import (
    EntityNotFoundError,
    InsufficientBalanceError,
    InvalidConfirmationCodeError,
    InvalidEntityStateError,
    NoContentError,
    ValidationError,
)
from chari_stub.models import CustomerStatus, OperationType
from chari_stub.store import FixtureStore, to_amount


class TestSeeding:
    """Tests for the reference fixtures."""

    def test_reference_customers(self, store: FixtureStore) -> None:
        statuses = {phone: c.status for phone, c in store.customers.items()}

        assert statuses == {
            "+212600000002": CustomerStatus.NOT_CONFIRMED,
            "+212600000003": CustomerStatus.CONFIRMED_NO_PIN,
            "+212600000004": CustomerStatus.ACTIVE,
            "+212600000005": CustomerStatus.TEMPORARILY_LOCKED,
            "+212600000006": CustomerStatus.PERMANENTLY_LOCKED,
        }

    def test_status_zero_is_absent(self, store: FixtureStore) -> None:
        assert store.get("+212600000001") is None

    def test_active_customer_history(self, store: FixtureStore, active_phone: str) -> None:
        customer = store.customers[active_phone]

        assert len(customer.transactions) == 25
        assert customer.balance == customer.transactions[0].balance_after
        assert customer.pin == "1234"

    @pytest.mark.parametrize("seed", [0, 7, 42, 1234])
    def test_seeded_balances_not_negative(self, seed: int) -> None:
        store = FixtureStore.seeded(FixtureConfig(seed=seed, extra_customers=3))

        for customer in store.customers.values():
            assert customer.balance >= 0
            assert all(tx.balance_after >= 0 for tx in customer.transactions)

    def test_hand_written_history(self, store: FixtureStore) -> None:
        history = store.transactions_of("+212600000003")

        assert [tx.id for tx in history] == ["TXN_001"]
        assert history[0].balance_after == store.balance_of("+212600000003")

    def test_extra_customers(self) -> None:
        store = FixtureStore.seeded(FixtureConfig(seed=1, transactions_per_customer=3, extra_customers=4))
        generated = [c for p, c in store.customers.items() if not p.startswith("+21260000000")]

        assert len(generated) == 4
        assert all(len(c.transactions) == 3 for c in generated)

    def test_beneficiaries(self, store: FixtureStore) -> None:
        names = [b.name for b in store.list_beneficiaries()]
        assert names == ["Ahmed Benali", "Fatima Zahra"]

    def test_summary(self, store: FixtureStore) -> None:
        assert store.summary() == {
            "customers": 5,
            "transactions": 26,
            "beneficiaries": 2,
            "cash_requests": 0,
        }


class TestLifecycle:
    """Register, confirm, PIN and login flows."""

    def test_full_onboarding(self, store: FixtureStore) -> None:
        phone = "+212600000009"
        store.register(phone, "Youssef", "Idrissi", "GH901234", "P")
        assert store.status_of(phone).status == CustomerStatus.NOT_CONFIRMED

        store.confirm(phone, "123456", "P")
        assert store.status_of(phone).status == CustomerStatus.CONFIRMED_NO_PIN

        store.create_pin(phone, "1234")
        assert store.status_of(phone).status == CustomerStatus.ACTIVE

        assert store.login(phone, "1234") == {"logged": True, "remainingAttempts": 3}

    def test_reregistration_overwrites(self, store: FixtureStore, active_phone: str) -> None:
        store.register(active_phone, "New", "Name", "ZZ000000", "P")

        customer = store.get(active_phone)
        assert customer.registration.first_name == "New"
        assert customer.status == CustomerStatus.NOT_CONFIRMED

    def test_bad_confirmation_code(self, store: FixtureStore) -> None:
        with pytest.raises(InvalidConfirmationCodeError, match="Invalid confirmation code"):
            store.confirm("+212600000002", "000000")
        assert store.get("+212600000002").status == CustomerStatus.NOT_CONFIRMED

    def test_login_wrong_pin(self, store: FixtureStore, active_phone: str) -> None:
        assert store.login(active_phone, "9999") == {"logged": False, "remainingAttempts": 2}

    def test_login_requires_activation(self, store: FixtureStore) -> None:
        with pytest.raises(InvalidEntityStateError):
            store.login("+212600000003", "1234")
        with pytest.raises(InvalidEntityStateError):
            store.login("+212699999999", "1234")

    def test_update_pin(self, store: FixtureStore, active_phone: str) -> None:
        store.update_pin(active_phone, "0000", "4321")

        assert store.login(active_phone, "4321")["logged"]

    def test_unregister(self, store: FixtureStore, active_phone: str) -> None:
        store.unregister(active_phone)

        assert store.get(active_phone) is None
        assert store.transactions_of(active_phone) == []
        with pytest.raises(NoContentError):
            store.status_of(active_phone)

    def test_lookups(self, store: FixtureStore) -> None:
        with pytest.raises(EntityNotFoundError):
            store.require("+212600000001")
        with pytest.raises(EntityNotFoundError):
            store.registration_of("+212600000005")
        assert store.balance_of("+212600000099") == Decimal("1500.00")


class TestTransfer:
    """Balance arithmetic for transfers."""

    def test_transfer(self, store: FixtureStore, active_phone: str) -> None:
        store.customers[active_phone].balance = Decimal("150.00")
        store.customers["+212600000002"].balance = Decimal("0.00")

        store.transfer(active_phone, "+212600000002", Decimal("100"))

        assert store.balance_of(active_phone) == Decimal("50.00")
        assert store.balance_of("+212600000002") == Decimal("100.00")

    def test_insufficient_balance(self, store: FixtureStore, active_phone: str) -> None:
        store.customers[active_phone].balance = Decimal("50.00")

        with pytest.raises(InsufficientBalanceError, match="Insufficient balance"):
            store.transfer(active_phone, "+212600000002", Decimal("100"))

        assert store.balance_of(active_phone) == Decimal("50.00")
        assert store.balance_of("+212600000002") == Decimal("0.00")

    def test_unknown_recipient_is_not_a_customer(self, store: FixtureStore, active_phone: str) -> None:
        store.transfer(active_phone, "+212677777777", Decimal("10"))

        assert store.balance_of("+212677777777") == Decimal("10.00")
        with pytest.raises(NoContentError):
            store.status_of("+212677777777")

    def test_seeded_customer_can_transfer(self, store: FixtureStore, active_phone: str) -> None:
        before = store.balance_of(active_phone)
        amount = min(before, Decimal("10.00"))

        assert amount > 0
        store.transfer(active_phone, "+212600000002", amount)

        assert store.balance_of(active_phone) == before - amount

    def test_amount_rounded_to_cents(self, store: FixtureStore, active_phone: str) -> None:
        store.customers[active_phone].balance = Decimal("150.00")

        moved = store.transfer(active_phone, "+212600000002", Decimal("10.005"))

        assert moved == Decimal("10.00")
        assert store.balance_of(active_phone) == Decimal("140.00")

    def test_oversized_amount_rejected(self, store: FixtureStore, active_phone: str) -> None:
        before = store.balance_of(active_phone)

        with pytest.raises(ValidationError, match="Invalid amount"):
            store.transfer(active_phone, "+212600000002", Decimal("1e27"))

        assert store.balance_of(active_phone) == before

    def test_sender_must_be_active(self, store: FixtureStore) -> None:
        with pytest.raises(InvalidEntityStateError, match="Sender not found"):
            store.transfer("+212600000003", "+212600000004", Decimal("10"))

    def test_amount_must_be_positive(self, store: FixtureStore, active_phone: str) -> None:
        with pytest.raises(ValidationError):
            store.transfer(active_phone, "+212600000002", Decimal("-5"))

    def test_concurrent_transfers_conserve_money(self, store: FixtureStore, active_phone: str) -> None:
        store.customers[active_phone].balance = Decimal("1000.00")
        store.customers["+212600000002"].balance = Decimal("0.00")

        def worker() -> None:
            for _ in range(50):
                try:
                    store.transfer(active_phone, "+212600000002", Decimal("3"))
                except InsufficientBalanceError:
                    pass

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        sender = store.balance_of(active_phone)
        recipient = store.balance_of("+212600000002")
        assert sender + recipient == Decimal("1000.00")
        assert sender >= 0


class TestTransactionsAndOperations:
    def test_find_transaction(self, store: FixtureStore, active_phone: str) -> None:
        assert store.find_transaction(active_phone, "TXN_007").id == "TXN_007"
        assert store.find_transaction(active_phone, "7").id == "TXN_007"
        with pytest.raises(EntityNotFoundError):
            store.find_transaction(active_phone, "TXN_999")

    def test_find_operation_by_transaction_number(self, store: FixtureStore, active_phone: str) -> None:
        operation = store.find_operation(active_phone, 5)
        history = store.transactions_of(active_phone)

        assert operation.transaction_id == 5
        assert operation.operation_id == [tx.id for tx in history].index("TXN_005") + 1

    def test_find_operation_falls_back_to_position(self, store: FixtureStore, active_phone: str) -> None:
        history = store.customers[active_phone].transactions[:6]
        for number, tx in enumerate(history, start=101):
            tx.id = f"TXN_{number}"
        store.customers[active_phone].transactions = history

        operation = store.find_operation(active_phone, 5)

        assert operation.operation_id == 5
        assert operation.transaction_id == 105

    def test_find_operation_missing(self, store: FixtureStore, active_phone: str) -> None:
        with pytest.raises(EntityNotFoundError):
            store.find_operation(active_phone, 400)

    def test_operations_numbering(self, store: FixtureStore, active_phone: str) -> None:
        history = store.transactions_of(active_phone)[10:13]
        operations = store.operations_of(active_phone, history, first_id=11)

        assert [op.operation_id for op in operations] == [11, 12, 13]


class TestToAmount:
    @pytest.mark.parametrize(
        "value, expected",
        [(Decimal("10"), Decimal("10.00")), ("10.005", Decimal("10.00")), (Decimal("0.015"), Decimal("0.02"))],
    )
    def test_rounds_to_cents(self, value: object, expected: Decimal) -> None:
        assert to_amount(value) == expected

    @pytest.mark.parametrize("value", [Decimal("1e27"), Decimal("Infinity"), Decimal("NaN"), "lots", None])
    def test_rejects_unrepresentable(self, value: object) -> None:
        with pytest.raises(ValidationError, match="Invalid amount"):
            to_amount(value)


class TestCashRequests:
    def test_request_and_lookup(self, store: FixtureStore) -> None:
        request = store.request_cash("+212600000004", Decimal("250"), OperationType.CASHIN)

        assert request.reference.startswith("OR01-")
        assert len(request.reference) == len("OR01-") + 10 + 6
        assert store.cash_request(request.reference, OperationType.CASHIN) is request

    def test_oversized_request_rejected(self, store: FixtureStore) -> None:
        with pytest.raises(ValidationError):
            store.request_cash("+212600000004", Decimal("1e27"), OperationType.CASHIN)

        assert store.cash_requests == {}

    def test_unknown_reference_is_canned(self, store: FixtureStore) -> None:
        request = store.cash_request("OR02-unknown", OperationType.CASHOUT)

        assert request.reference == "OR02-unknown"
        assert request.amount == Decimal("500.00")


class TestBeneficiaries:
    def test_new_requires_phone_or_rib(self, store: FixtureStore) -> None:
        with pytest.raises(ValidationError, match="phone number or RIB"):
            store.new_beneficiary("Nobody")

    def test_new_beneficiary_not_persisted(self, store: FixtureStore) -> None:
        beneficiary = store.new_beneficiary("Karim", rib="8276400000")

        assert 1 <= beneficiary.id <= 999
        assert beneficiary.phone_number is None
        assert len(store.list_beneficiaries()) == 2

    def test_update_keeps_creation_date(self, store: FixtureStore) -> None:
        updated = store.update_beneficiary(2, "Fatima Z.", rib="827640000010000000001234")

        assert updated.name == "Fatima Z."
        assert updated.created_at == store.beneficiaries[1].created_at
