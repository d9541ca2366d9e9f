"""Transaction history generator."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from chari_stub.generators.base import BaseGenerator
from chari_stub.models import Transaction, TransactionStatus, TransactionType, format_transaction_id


class TransactionGenerator(BaseGenerator):
    """Generate a customer's synthetic ledger.

    Histories are one transaction per day, oldest ``count`` days ago and
    newest yesterday, returned newest-first with running balances.
    """

    TRANSACTION_TYPES = list(TransactionType)

    STATUSES = [TransactionStatus.COMPLETED, TransactionStatus.PENDING]
    STATUS_WEIGHTS = [0.85, 0.15]

    AMOUNT_RANGE = (50, 1050)

    DESCRIPTIONS = {
        TransactionType.CASHIN: [
            "Mobile money deposit",
            "Cash deposit at agent",
            "Cash deposit at branch",
            "Card top-up",
        ],
        TransactionType.CASHOUT: [
            "Cash withdrawal at agent",
            "ATM withdrawal",
            "Cash withdrawal at branch",
        ],
        TransactionType.TRANSFER_IN: [
            "Transfer from {phone}",
            "Money received from {phone}",
        ],
        TransactionType.TRANSFER_OUT: [
            "Transfer to {phone}",
            "Money sent to {phone}",
        ],
        TransactionType.BILL_PAYMENT: [
            "Electricity bill payment",
            "Water bill payment",
            "Internet bill payment",
            "Mobile recharge",
        ],
    }

    def generate(
        self,
        count: int,
        starting_balance: Decimal = Decimal("0.00"),
        now: datetime | None = None,
        currency: str = "MAD",
    ) -> list[Transaction]:
        """Generate ``count`` transactions for one customer.

        Parameters
        ----------
        count : int
            Number of transactions.
        starting_balance : Decimal
            Balance before the oldest transaction.
        now : datetime | None
            Reference time; defaults to the current UTC time.
        currency : str
            Currency code stamped on every transaction.

        Returns
        -------
        list[Transaction]
            Transactions newest first. Replaying them oldest first from
            ``starting_balance`` reproduces every ``balance_after``, and no
            ``balance_after`` is negative.
        """
        now = now or datetime.now(timezone.utc)
        balance = Decimal(starting_balance).quantize(Decimal("0.01"))

        history = []
        for i in range(count):
            tx_type = self.rng.choice(self.TRANSACTION_TYPES)
            amount = self._amount()
            if not tx_type.is_credit and amount > balance:
                # A wallet cannot go negative; an unaffordable debit becomes a deposit
                tx_type = TransactionType.CASHIN
            if not tx_type.is_credit:
                amount = -amount
            balance += amount

            history.append(
                Transaction(
                    id=format_transaction_id(i + 1),
                    type=tx_type,
                    amount=amount,
                    currency=currency,
                    date=self._timestamp(now, days_ago=count - i),
                    description=self._description(tx_type),
                    status=self.rng.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0],
                    balance_after=balance,
                )
            )

        history.reverse()
        return history

    def _amount(self) -> Decimal:
        """Magnitude with two-decimal precision."""
        low, high = self.AMOUNT_RANGE
        cents = self.rng.randint(low * 100, high * 100)
        return (Decimal(cents) / 100).quantize(Decimal("0.01"))

    def _timestamp(self, now: datetime, days_ago: int) -> datetime:
        """Random time of day, ``days_ago`` days before ``now``."""
        day = (now - timedelta(days=days_ago)).replace(second=0, microsecond=0)
        return day.replace(hour=self.rng.randint(0, 23), minute=self.rng.randint(0, 59))

    def _description(self, tx_type: TransactionType) -> str:
        template = self.rng.choice(self.DESCRIPTIONS[tx_type])
        if "{phone}" in template:
            return template.format(phone=self.phone_number())
        return template
