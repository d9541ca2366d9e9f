"""Enumeration types for wallet entities."""

from enum import Enum, IntEnum


class CustomerStatus(IntEnum):
    NOT_FOUND = 0
    NOT_CONFIRMED = 1
    CONFIRMED_NO_PIN = 2
    ACTIVE = 3
    TEMPORARILY_LOCKED = 4
    PERMANENTLY_LOCKED = 5

    @property
    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    CustomerStatus.NOT_FOUND: "Customer not found",
    CustomerStatus.NOT_CONFIRMED: "Customer not confirmed",
    CustomerStatus.CONFIRMED_NO_PIN: "Customer confirmed but no PIN",
    CustomerStatus.ACTIVE: "Active customer",
    CustomerStatus.TEMPORARILY_LOCKED: "Temporarily locked",
    CustomerStatus.PERMANENTLY_LOCKED: "Permanently locked",
}


class TransactionType(str, Enum):
    CASHIN = "CASHIN"
    CASHOUT = "CASHOUT"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    BILL_PAYMENT = "BILL_PAYMENT"

    @property
    def is_credit(self) -> bool:
        return self in (TransactionType.CASHIN, TransactionType.TRANSFER_IN)


class TransactionStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"


class OperationType(IntEnum):
    UNKNOWN = 0
    CASHIN = 1
    CASHOUT = 2
    TRANSFER = 3
    BILL_PAYMENT = 4


class OperationStatus(IntEnum):
    PENDING = 1
    COMPLETED = 2


class Sens(IntEnum):
    """Direction of an operation as seen by the account owner."""

    CREDIT = 1
    DEBIT = 2


class Absence(Enum):
    """Why an optional counter-party field carries no value.

    Serialized as JSON ``null``; kept distinct in Python so callers can
    tell a failed extraction from a field that never applies.
    """

    NOT_FOUND = "NOT_FOUND"
    NOT_APPLICABLE = "NOT_APPLICABLE"
