"""In-memory wallet state."""

from chari_stub.store.fixtures import FixtureStore, to_amount

__all__ = ["FixtureStore", "to_amount"]
