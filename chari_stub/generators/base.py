"""Base generator class for all data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: an owned ``random.Random`` source
    and a Faker instance, both seeded from the same value so fixtures
    are reproducible.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``fr_FR``).
    rng : random.Random | None
        Shared random source. When provided, ``seed`` only seeds Faker.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "fr_FR",
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng or random.Random(seed)
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def phone_number(self) -> str:
        """Random Moroccan mobile number in E.164 form."""
        return "+2126" + "".join(str(self.rng.randint(0, 9)) for _ in range(8))
