"""Customer generator for demo fixtures."""

from __future__ import annotations

import string
from datetime import datetime, timedelta, timezone
from typing import Iterator

from chari_stub.generators.base import BaseGenerator
from chari_stub.models import Customer, CustomerStatus, Registration


class CustomerGenerator(BaseGenerator):
    """Generate synthetic registered customers."""

    WALLET_TYPES = ["P"]

    def generate(self, status: CustomerStatus = CustomerStatus.ACTIVE) -> Customer:
        """Generate a single customer.

        Returns
        -------
        Customer
            Customer with a registration, no PIN and a zero balance.
        """
        return Customer(
            phone_number=self.phone_number(),
            status=status,
            registration=self.registration(),
        )

    def generate_batch(
        self,
        count: int,
        status: CustomerStatus = CustomerStatus.ACTIVE,
    ) -> Iterator[Customer]:
        """Generate multiple customers with distinct phone numbers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        Customer
            Generated customers.
        """
        seen: set[str] = set()
        while len(seen) < count:
            customer = self.generate(status)
            if customer.phone_number in seen:
                continue
            seen.add(customer.phone_number)
            yield customer

    def registration(self) -> Registration:
        """Registration with a Faker name and a random CIN."""
        days_ago = self.rng.randint(30, 2 * 365)
        return Registration(
            first_name=self.fake.first_name(),
            last_name=self.fake.last_name(),
            cin=self.cin(),
            wallet_type=self.rng.choice(self.WALLET_TYPES),
            registered_at=(datetime.now(timezone.utc) - timedelta(days=days_ago)).replace(microsecond=0),
        )

    def cin(self) -> str:
        """National ID in the ``AA999999`` shape."""
        letters = "".join(self.rng.choice(string.ascii_uppercase) for _ in range(2))
        digits = "".join(str(self.rng.randint(0, 9)) for _ in range(6))
        return letters + digits
