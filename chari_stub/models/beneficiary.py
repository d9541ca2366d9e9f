"""Beneficiary model for the wallet domain."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Beneficiary:
    """Saved transfer recipient. At least one of phone number or RIB is set."""

    id: int
    customer_id: int
    name: str
    created_at: datetime
    phone_number: str | None = None
    rib: str | None = None
    email: str | None = None
    is_visible: bool = True
