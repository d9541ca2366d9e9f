"""Derivation of the Operation view from stored transactions.

Everything here is a pure function of its arguments: the same transaction
and owner always yield an identical ``Operation``.
"""

import re
from datetime import timezone
from decimal import Decimal

from chari_stub.models import (
    Absence,
    Operation,
    OperationStatus,
    OperationType,
    Sens,
    Transaction,
    TransactionStatus,
    TransactionType,
)

PHONE_PATTERN = re.compile(r"\+\d{8,15}")

OPERATION_TYPES = {
    TransactionType.CASHIN: OperationType.CASHIN,
    TransactionType.CASHOUT: OperationType.CASHOUT,
    TransactionType.TRANSFER_IN: OperationType.TRANSFER,
    TransactionType.TRANSFER_OUT: OperationType.TRANSFER,
    TransactionType.BILL_PAYMENT: OperationType.BILL_PAYMENT,
}


def operation_type_of(tx_type: TransactionType | str) -> OperationType:
    """Map a transaction type to its operation code, ``UNKNOWN`` if unmapped."""
    try:
        return OPERATION_TYPES[TransactionType(tx_type)]
    except ValueError:
        return OperationType.UNKNOWN


def operation_status_of(status: TransactionStatus | str) -> OperationStatus:
    if status == TransactionStatus.COMPLETED:
        return OperationStatus.COMPLETED
    return OperationStatus.PENDING


def extract_phone(text: str | None) -> str | Absence:
    """First phone-number-shaped substring of ``text``."""
    match = PHONE_PATTERN.search(text or "")
    return match.group(0) if match else Absence.NOT_FOUND


def transaction_reference(tx: Transaction) -> str:
    """Reference of the form ``T0303-YYMMDDHH-7``."""
    when = tx.date.astimezone(timezone.utc) if tx.date.tzinfo else tx.date
    code = int(operation_type_of(tx.type))
    return f"T{code:02d}{code:02d}-{when:%y%m%d%H}-{tx.numeric_id}"


def counterparties(
    tx: Transaction, owner_phone: str
) -> tuple[str | Absence, str | Absence, str | Absence]:
    """Return ``(sender, receiver, beneficiary)`` for a transaction."""
    if tx.type == TransactionType.TRANSFER_OUT:
        return owner_phone, extract_phone(tx.description), tx.description
    if tx.type == TransactionType.TRANSFER_IN:
        return extract_phone(tx.description), owner_phone, tx.description
    if tx.type in (TransactionType.CASHIN, TransactionType.CASHOUT):
        return owner_phone, owner_phone, Absence.NOT_APPLICABLE
    if tx.type == TransactionType.BILL_PAYMENT:
        return owner_phone, Absence.NOT_APPLICABLE, Absence.NOT_APPLICABLE
    return Absence.NOT_APPLICABLE, Absence.NOT_APPLICABLE, Absence.NOT_APPLICABLE


def to_operation(tx: Transaction, owner_phone: str, operation_id: int) -> Operation:
    """Project a transaction into the Operation view.

    Parameters
    ----------
    tx : Transaction
        Source transaction.
    owner_phone : str
        Phone number of the customer whose ledger holds ``tx``.
    operation_id : int
        Caller-assigned id, usually the 1-based position in the listing.

    Returns
    -------
    Operation
        Derived view; fees are always zero.
    """
    sender, receiver, beneficiary = counterparties(tx, owner_phone)
    amount = abs(Decimal(tx.amount))
    fees = Decimal("0.00")

    return Operation(
        operation_id=operation_id,
        transaction_id=tx.numeric_id,
        transaction_reference=transaction_reference(tx),
        operation_type=operation_type_of(tx.type),
        amount=amount,
        fees_amount=fees,
        total_amount=amount + fees,
        currency=tx.currency,
        reason=tx.description,
        transaction_date=tx.date,
        account_number=owner_phone,
        sender=sender,
        receiver=receiver,
        beneficiary=beneficiary,
        transaction_status=operation_status_of(tx.status),
        sens=Sens.CREDIT if tx.amount > 0 else Sens.DEBIT,
    )
