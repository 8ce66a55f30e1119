"""Generators for base types."""

import random
import string
from typing import Any, Sequence

from lawfinder.generators.base import Generator, SampleGenerator

# Characters drawn by characters()/strings(): mostly letters, some punctuation
_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits + " .,-"


def integers() -> Generator:
    """Integers uniformly in ``[-size, size]``."""
    return SampleGenerator(lambda rng, size: rng.randint(-size, size))


def naturals() -> Generator:
    """Integers uniformly in ``[0, size]``."""
    return SampleGenerator(lambda rng, size: rng.randint(0, size))


def booleans() -> Generator:
    return SampleGenerator(lambda rng, size: rng.random() < 0.5)


def characters() -> Generator:
    def sample(rng: random.Random, size: int) -> str:
        # Small sizes stick to a few letters so that equal characters show up
        pool = _ALPHABET[: max(3, min(len(_ALPHABET), size + 3))]
        return rng.choice(pool)

    return SampleGenerator(sample)


def strings() -> Generator:
    chars = characters()
    return SampleGenerator(
        lambda rng, size: "".join(
            chars.generate(rng, size) for _ in range(rng.randint(0, size))
        )
    )


def units() -> Generator:
    return SampleGenerator(lambda rng, size: ())


def elements(choices: Sequence[Any]) -> Generator:
    """Pick uniformly from a fixed, non-empty sequence."""
    if not choices:
        raise ValueError("elements() needs at least one choice")
    options = list(choices)
    return SampleGenerator(lambda rng, size: rng.choice(options))


def constant(value: Any) -> Generator:
    return SampleGenerator(lambda rng, size: value)
