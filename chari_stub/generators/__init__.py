"""Fixture generators."""

from chari_stub.generators.customer import CustomerGenerator
from chari_stub.generators.transaction import TransactionGenerator

__all__ = ["CustomerGenerator", "TransactionGenerator"]
