"""Base class for random value generators."""

import hashlib
import random
from abc import ABC, abstractmethod
from typing import Any, Callable


class GenerationError(Exception):
    """Raised when a generator cannot produce a value."""


def stable_seed(*parts: Any) -> int:
    """Derive a reproducible 64-bit seed from arbitrary parts.

    Unlike ``hash()``, the result does not depend on the interpreter's
    hash randomisation.
    """
    text = "\x1f".join(repr(p) for p in parts)
    return int(hashlib.sha256(text.encode()).hexdigest()[:16], 16)


class Generator(ABC):
    """Produces random values of one type.

    ``size`` bounds the magnitude of generated values (list lengths, integer
    ranges). It ramps up over the test cases of a run so that small
    counterexamples are tried first.
    """

    @abstractmethod
    def generate(self, rng: random.Random, size: int) -> Any:
        """Draw one value.

        Args:
            rng: Random stream to draw from
            size: Size parameter

        Returns:
            The generated value
        """
        pass

    def map(self, fn: Callable[[Any], Any]) -> "Generator":
        return MappedGenerator(self, fn)

    def such_that(
        self, predicate: Callable[[Any], bool], max_tries: int = 200, tries_per_size: int = 10
    ) -> "Generator":
        """Restrict this generator to values satisfying ``predicate``."""
        return FilteredGenerator(self, predicate, max_tries, tries_per_size)


class SampleGenerator(Generator):
    """Generator backed by a plain ``(rng, size) -> value`` function."""

    def __init__(self, sample: Callable[[random.Random, int], Any]):
        self._sample = sample

    def generate(self, rng: random.Random, size: int) -> Any:
        return self._sample(rng, size)


class MappedGenerator(Generator):
    def __init__(self, inner: Generator, fn: Callable[[Any], Any]):
        self._inner = inner
        self._fn = fn

    def generate(self, rng: random.Random, size: int) -> Any:
        return self._fn(self._inner.generate(rng, size))


class FilteredGenerator(Generator):
    """Rejection sampling.

    Failed attempts retry at the same size ``tries_per_size`` times, then
    grow the size parameter by one, so predicates that are rarely true of
    small values (e.g. "list has at least 3 elements") still get satisfied
    without the accepted values drifting far above the requested size.
    """

    def __init__(
        self,
        inner: Generator,
        predicate: Callable[[Any], bool],
        max_tries: int,
        tries_per_size: int = 10,
    ):
        self._inner = inner
        self._predicate = predicate
        self._max_tries = max_tries
        self._tries_per_size = tries_per_size

    def generate(self, rng: random.Random, size: int) -> Any:
        for attempt in range(self._max_tries):
            value = self._inner.generate(rng, size + attempt // self._tries_per_size)
            if self._predicate(value):
                return value
        raise GenerationError(
            f"No value satisfying the predicate after {self._max_tries} tries"
        )
