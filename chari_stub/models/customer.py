"""Customer aggregate for the wallet domain."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from chari_stub.models.enums import CustomerStatus
from chari_stub.models.transaction import Transaction


@dataclass
class Registration:
    """Identity captured at registration time."""

    first_name: str
    last_name: str
    cin: str
    wallet_type: str
    registered_at: datetime


@dataclass
class Customer:
    """Everything the stub knows about one phone number.

    A record with status ``NOT_FOUND`` may exist to hold a balance for a
    transfer recipient; it is never exposed as a customer.
    """

    phone_number: str
    status: CustomerStatus = CustomerStatus.NOT_FOUND
    registration: Registration | None = None
    pin: str | None = None
    balance: Decimal = Decimal("0.00")
    transactions: list[Transaction] = field(default_factory=list)  # newest first

    @property
    def message(self) -> str:
        return self.status.message

    @property
    def exists(self) -> bool:
        return self.status != CustomerStatus.NOT_FOUND

    @property
    def is_active(self) -> bool:
        return self.status >= CustomerStatus.ACTIVE

    @property
    def numeric_id(self) -> str:
        return "".join(ch for ch in self.phone_number if ch.isdigit())
