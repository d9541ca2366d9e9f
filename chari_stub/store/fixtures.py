"""Process-wide wallet state, owned by the application and injected into handlers."""

import random
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from chari_stub.config import FixtureConfig
from chari_stub.exceptions import (
    EntityNotFoundError,
    InsufficientBalanceError,
    InvalidConfirmationCodeError,
    InvalidEntityStateError,
    NoContentError,
    ValidationError,
)
from chari_stub.generators import CustomerGenerator, TransactionGenerator
from chari_stub.logging import get_logger
from chari_stub.models import (
    Beneficiary,
    CashRequest,
    Customer,
    CustomerStatus,
    Operation,
    OperationType,
    Registration,
    Transaction,
    TransactionStatus,
    TransactionType,
    format_transaction_id,
)
from chari_stub.operations import to_operation

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def to_amount(value: object) -> Decimal:
    """Money amount rounded to cents.

    Raises
    ------
    ValidationError
        If the value is not a finite number that fits in a ``Decimal``
        with two decimal places.
    """
    try:
        amount = Decimal(value).quantize(CENTS)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid amount: {value}") from e
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value}")
    return amount


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@dataclass
class FixtureStore:
    """In-memory wallet state keyed by phone number.

    All reads and writes go through ``lock``; a transfer updates both
    balances inside one critical section.
    """

    config: FixtureConfig = field(default_factory=FixtureConfig)
    customers: dict[str, Customer] = field(default_factory=dict)
    beneficiaries: list[Beneficiary] = field(default_factory=list)
    cash_requests: dict[str, CashRequest] = field(default_factory=dict)
    rng: random.Random = field(default=None, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)

    # Seeding
    @classmethod
    def seeded(cls, config: FixtureConfig | None = None) -> "FixtureStore":
        """Create a store loaded with the reference fixtures."""
        store = cls(config=config or FixtureConfig())
        store.seed_defaults()
        return store

    def seed_defaults(self) -> None:
        """Load reference customers, generated histories and beneficiaries."""
        tx_gen = TransactionGenerator(seed=self.config.seed, rng=self.rng)
        customer_gen = CustomerGenerator(seed=self.config.seed, rng=self.rng)

        reference = [
            Customer(
                phone_number="+212600000002",
                status=CustomerStatus.NOT_CONFIRMED,
                registration=Registration("Ahmed", "Ben Ali", "AB123456", "P", _utc(2024, 1, 15, 10, 30)),
            ),
            Customer(
                phone_number="+212600000003",
                status=CustomerStatus.CONFIRMED_NO_PIN,
                registration=Registration("Fatima", "Zahra", "CD789012", "P", _utc(2024, 1, 20, 14, 15)),
                balance=Decimal("150.00"),
                transactions=[
                    Transaction(
                        id=format_transaction_id(1),
                        type=TransactionType.CASHIN,
                        amount=Decimal("150.00"),
                        currency=self.config.currency,
                        date=_utc(2024, 1, 21, 10, 15),
                        description="Initial deposit",
                        status=TransactionStatus.COMPLETED,
                        balance_after=Decimal("150.00"),
                    )
                ],
            ),
            Customer(
                phone_number="+212600000004",
                status=CustomerStatus.ACTIVE,
                registration=Registration("Mohammed", "Alami", "EF345678", "P", _utc(2024, 1, 10, 9, 45)),
                pin="1234",
            ),
            Customer(phone_number="+212600000005", status=CustomerStatus.TEMPORARILY_LOCKED),
            Customer(phone_number="+212600000006", status=CustomerStatus.PERMANENTLY_LOCKED),
        ]
        demo = list(customer_gen.generate_batch(self.config.extra_customers))
        for customer in demo:
            customer.pin = "1234"

        with self.lock:
            for customer in reference + demo:
                if customer.phone_number in self.customers:
                    continue
                if customer.status == CustomerStatus.ACTIVE:
                    self._give_history(customer, tx_gen)
                self.customers[customer.phone_number] = customer

            self.beneficiaries = [
                Beneficiary(
                    id=1,
                    customer_id=1,
                    name="Ahmed Benali",
                    phone_number="+212611111111",
                    email="ahmed@example.com",
                    created_at=_utc(2025, 1, 15, 10, 30),
                ),
                Beneficiary(
                    id=2,
                    customer_id=1,
                    name="Fatima Zahra",
                    rib="827640000010000000001234",
                    created_at=_utc(2025, 1, 20, 14, 15),
                ),
            ]

        logger.info(
            "Loaded %d customers (%d generated), %d beneficiaries",
            len(self.customers),
            len(demo),
            len(self.beneficiaries),
        )

    def _give_history(self, customer: Customer, tx_gen: TransactionGenerator) -> None:
        history = tx_gen.generate(
            self.config.transactions_per_customer,
            starting_balance=self.config.starting_balance,
            currency=self.config.currency,
        )
        customer.transactions = history
        customer.balance = history[0].balance_after if history else self.config.starting_balance

    # Lookups
    def get(self, phone_number: str) -> Customer | None:
        """Customer record for a number, including balance-only records."""
        with self.lock:
            return self.customers.get(phone_number)

    def require(self, phone_number: str) -> Customer:
        """Existing customer or ``EntityNotFoundError``."""
        customer = self.get(phone_number)
        if customer is None or not customer.exists:
            raise EntityNotFoundError("Customer not found")
        return customer

    def status_of(self, phone_number: str) -> Customer:
        """Customer for a status check; unknown numbers raise ``NoContentError``."""
        customer = self.get(phone_number)
        if customer is None or not customer.exists:
            raise NoContentError(f"Customer not found: {phone_number}")
        return customer

    def registered(self, phone_number: str) -> Customer:
        """Customer holding a registration, found in a single locked lookup."""
        with self.lock:
            customer = self.customers.get(phone_number)
            if customer is None or customer.registration is None:
                raise EntityNotFoundError("Customer not found")
            return customer

    def registration_of(self, phone_number: str) -> Registration:
        return self.registered(phone_number).registration

    def balance_of(self, phone_number: str) -> Decimal:
        """Stored balance, or the configured default for unknown numbers."""
        customer = self.get(phone_number)
        if customer is None:
            return self.config.default_balance
        return customer.balance

    # Lifecycle
    def _record(self, phone_number: str) -> Customer:
        customer = self.customers.get(phone_number)
        if customer is None:
            customer = Customer(phone_number=phone_number)
            self.customers[phone_number] = customer
        return customer

    def register(
        self,
        phone_number: str,
        first_name: str,
        last_name: str,
        cin: str,
        wallet_type: str,
    ) -> Customer:
        """Store (or overwrite) a registration and mark the customer unconfirmed."""
        with self.lock:
            customer = self._record(phone_number)
            customer.registration = Registration(
                first_name=first_name,
                last_name=last_name,
                cin=cin,
                wallet_type=wallet_type,
                registered_at=datetime.now(timezone.utc).replace(microsecond=0),
            )
            customer.status = CustomerStatus.NOT_CONFIRMED
        logger.info("Customer registered: %s", phone_number)
        return customer

    def confirm(self, phone_number: str, code: str, wallet_type: str | None = None) -> Customer:
        """Confirm a registration with the one-time code."""
        if code != self.config.otp_code:
            raise InvalidConfirmationCodeError("Invalid confirmation code")
        with self.lock:
            customer = self._record(phone_number)
            customer.status = CustomerStatus.CONFIRMED_NO_PIN
        logger.info("Customer confirmed: %s", phone_number)
        return customer

    def create_pin(self, phone_number: str, pin: str) -> Customer:
        """Store a PIN and activate the customer."""
        with self.lock:
            customer = self._record(phone_number)
            customer.pin = pin
            customer.status = CustomerStatus.ACTIVE
        logger.info("PIN created for: %s", phone_number)
        return customer

    def update_pin(self, phone_number: str, old_pin: str, new_pin: str) -> Customer:
        """Replace the PIN. The old PIN is not checked."""
        with self.lock:
            customer = self._record(phone_number)
            customer.pin = new_pin
        logger.info("PIN updated for: %s", phone_number)
        return customer

    def login(self, phone_number: str, pin: str) -> dict[str, object]:
        """Check a PIN for an activated customer."""
        customer = self.get(phone_number)
        if customer is None or not customer.is_active:
            raise InvalidEntityStateError("Customer not found or not activated")
        logged = customer.pin is not None and pin == customer.pin
        return {"logged": logged, "remainingAttempts": 3 if logged else 2}

    def unregister(self, phone_number: str) -> None:
        """Forget everything about a number."""
        with self.lock:
            self.customers.pop(phone_number, None)
        logger.info("Customer unregistered: %s", phone_number)

    # Money movement
    def transfer(self, sender_phone: str, recipient_phone: str, amount: Decimal) -> Decimal:
        """Move ``amount`` between wallets and return it.

        Raises
        ------
        ValidationError
            If the amount is not positive.
        InvalidEntityStateError
            If the sender is unknown or not activated.
        InsufficientBalanceError
            If the sender balance is below the amount.
        """
        amount = to_amount(amount)
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        with self.lock:
            sender = self.customers.get(sender_phone)
            if sender is None or not sender.is_active:
                raise InvalidEntityStateError("Sender not found or not activated")
            if sender.balance < amount:
                raise InsufficientBalanceError("Insufficient balance")

            recipient = self._record(recipient_phone)
            sender.balance -= amount
            recipient.balance += amount

        logger.info("Transfer of %s from %s to %s", amount, sender_phone, recipient_phone)
        return amount

    # Transactions and operations
    def transactions_of(self, phone_number: str) -> list[Transaction]:
        """Newest-first history; unknown numbers have none."""
        customer = self.get(phone_number)
        return list(customer.transactions) if customer else []

    def find_transaction(self, phone_number: str, transaction_id: str) -> Transaction:
        """Match on the full id (``TXN_003``) or its numeric part (``3``)."""
        wanted = transaction_id.strip()
        numeric = int(wanted) if wanted.isdigit() else None
        for tx in self.transactions_of(phone_number):
            if tx.id == wanted or (numeric is not None and tx.numeric_id == numeric):
                return tx
        raise EntityNotFoundError(f"Transaction not found: {transaction_id}")

    def operations_of(self, phone_number: str, transactions: list[Transaction], first_id: int = 1) -> list[Operation]:
        """Operation views numbered from ``first_id``."""
        return [
            to_operation(tx, phone_number, first_id + index)
            for index, tx in enumerate(transactions)
        ]

    def find_operation(self, phone_number: str, operation_id: int) -> Operation:
        """Resolve by transaction number first, then by 1-based position."""
        history = self.transactions_of(phone_number)
        for index, tx in enumerate(history):
            if tx.numeric_id == operation_id:
                return to_operation(tx, phone_number, index + 1)
        if 1 <= operation_id <= len(history):
            return to_operation(history[operation_id - 1], phone_number, operation_id)
        raise EntityNotFoundError(f"Operation not found: {operation_id}")

    # Cash requests
    def request_cash(self, phone_number: str, amount: Decimal, operation_type: OperationType) -> CashRequest:
        """Open a cash-in or cash-out request with a fresh reference."""
        now = datetime.now(timezone.utc)
        label = "CashIn" if operation_type == OperationType.CASHIN else "CashOut"
        with self.lock:
            reference = f"OR{int(operation_type):02d}-{now:%Y%m%d%H}{self.rng.randint(0, 999999):06d}"
            request = CashRequest(
                reference=reference,
                phone_number=phone_number,
                operation_type=operation_type,
                amount=to_amount(amount),
                created_at=now,
                description=f"{label} request",
            )
            self.cash_requests[reference] = request
        logger.info("%s request %s for %s", label, reference, phone_number)
        return request

    def cash_request(self, reference: str, operation_type: OperationType) -> CashRequest:
        """Stored request, or a canned pending request for unknown references."""
        with self.lock:
            request = self.cash_requests.get(reference)
        if request is not None and request.operation_type == operation_type:
            return request
        return CashRequest(
            reference=reference,
            phone_number="+212600000004",
            operation_type=operation_type,
            amount=Decimal("1000.00") if operation_type == OperationType.CASHIN else Decimal("500.00"),
            created_at=datetime(2025, 6, 3, 9, 37, 26, 881973),
            description="",
        )

    # Beneficiaries
    def list_beneficiaries(self) -> list[Beneficiary]:
        with self.lock:
            return [b for b in self.beneficiaries if b.is_visible]

    def new_beneficiary(
        self,
        name: str,
        phone_number: str | None = None,
        rib: str | None = None,
        email: str | None = None,
    ) -> Beneficiary:
        """Build a beneficiary with a random id. Not added to the fixtures."""
        if not phone_number and not rib:
            raise ValidationError("Either phone number or RIB must be provided")
        with self.lock:
            beneficiary_id = self.rng.randint(1, 999)
        return Beneficiary(
            id=beneficiary_id,
            customer_id=1,
            name=name,
            phone_number=phone_number or None,
            rib=rib or None,
            email=email or None,
            created_at=datetime.now(timezone.utc).replace(microsecond=0),
        )

    def update_beneficiary(
        self,
        beneficiary_id: int,
        name: str,
        phone_number: str | None = None,
        rib: str | None = None,
        email: str | None = None,
    ) -> Beneficiary:
        """Return the beneficiary as it would look after the update."""
        with self.lock:
            existing = next((b for b in self.beneficiaries if b.id == beneficiary_id), None)
        created_at = existing.created_at if existing else _utc(2025, 1, 15, 10, 30)
        return Beneficiary(
            id=beneficiary_id,
            customer_id=1,
            name=name,
            phone_number=phone_number or None,
            rib=rib or None,
            email=email or None,
            created_at=created_at,
        )

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self.lock:
            return {
                "customers": sum(1 for c in self.customers.values() if c.exists),
                "transactions": sum(len(c.transactions) for c in self.customers.values()),
                "beneficiaries": len(self.beneficiaries),
                "cash_requests": len(self.cash_requests),
            }
