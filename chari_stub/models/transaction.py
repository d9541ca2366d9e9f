"""Transaction model for the wallet domain."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from chari_stub.models.enums import TransactionStatus, TransactionType

TRANSACTION_ID_PREFIX = "TXN_"


def format_transaction_id(sequence: int) -> str:
    """Render a 1-based sequence number as ``TXN_###``."""
    return f"{TRANSACTION_ID_PREFIX}{sequence:03d}"


@dataclass
class Transaction:
    """Wallet ledger entry owned by exactly one customer."""

    id: str
    type: TransactionType
    amount: Decimal  # positive = credit, negative = debit
    currency: str
    date: datetime
    description: str
    status: TransactionStatus
    balance_after: Decimal

    @property
    def numeric_id(self) -> int:
        """Numeric suffix of the id (``TXN_007`` -> ``7``)."""
        digits = "".join(ch for ch in self.id.rsplit("_", 1)[-1] if ch.isdigit())
        return int(digits) if digits else 0
