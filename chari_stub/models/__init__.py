"""Wallet domain models."""

from chari_stub.models.beneficiary import Beneficiary
from chari_stub.models.customer import Customer, Registration
from chari_stub.models.enums import (
    Absence,
    CustomerStatus,
    OperationStatus,
    OperationType,
    Sens,
    TransactionStatus,
    TransactionType,
)
from chari_stub.models.operation import CashRequest, Operation
from chari_stub.models.transaction import Transaction, format_transaction_id

__all__ = [
    "Absence",
    "Beneficiary",
    "CashRequest",
    "Customer",
    "CustomerStatus",
    "Operation",
    "OperationStatus",
    "OperationType",
    "Registration",
    "Sens",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "format_transaction_id",
]
