"""Operation view derived from a transaction."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from chari_stub.models.enums import Absence, OperationStatus, OperationType, Sens


@dataclass(frozen=True)
class Operation:
    """Externally visible projection of a transaction. Never stored."""

    operation_id: int
    transaction_id: int
    transaction_reference: str
    operation_type: OperationType
    amount: Decimal
    fees_amount: Decimal
    total_amount: Decimal
    currency: str
    reason: str
    transaction_date: datetime
    account_number: str
    sender: str | Absence
    receiver: str | Absence
    beneficiary: str | Absence
    transaction_status: OperationStatus
    sens: Sens

    @property
    def beneficiary_name(self) -> str:
        return self.beneficiary if isinstance(self.beneficiary, str) else ""


@dataclass
class CashRequest:
    """Pending cash-in or cash-out request identified by its reference."""

    reference: str
    phone_number: str
    operation_type: OperationType
    amount: Decimal
    created_at: datetime
    description: str
    operation_status: OperationStatus = OperationStatus.PENDING
    account_id: int = 1
    partner_id: int = 1
    closed_at: datetime | None = None
