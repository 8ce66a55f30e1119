"""Generator combinators for compound types."""

import random
from typing import Any, Callable

from lawfinder.generators.base import Generator, SampleGenerator, stable_seed


def lists(elem: Generator) -> Generator:
    """Lists of length ``0..size``."""
    return SampleGenerator(
        lambda rng, size: [elem.generate(rng, size) for _ in range(rng.randint(0, size))]
    )


def tuples(*components: Generator) -> Generator:
    return SampleGenerator(
        lambda rng, size: tuple(c.generate(rng, size) for c in components)
    )


def optionals(elem: Generator) -> Generator:
    """``None`` about one time in four, otherwise a value of ``elem``."""
    return SampleGenerator(
        lambda rng, size: None if rng.random() < 0.25 else elem.generate(rng, size)
    )


def dicts(keys: Generator, values: Generator) -> Generator:
    return SampleGenerator(
        lambda rng, size: {
            keys.generate(rng, size): values.generate(rng, size)
            for _ in range(rng.randint(0, size))
        }
    )


def functions(variant: Callable[[Any], Any], result: Generator) -> Generator:
    """Random pure functions.

    The result for an argument is drawn from a stream seeded by the
    function's own seed and the argument's variant token, so a generated
    function always returns the same result for the same argument.
    Functions of several arguments are generated one argument at a time and
    called uncurried: ``f(x, y)`` is ``(f x) y``.

    Args:
        variant: Maps an argument to a stable token (see ``CoArbitrary``)
        result: Generator for results after one argument is applied
    """

    def sample(rng: random.Random, size: int) -> Callable[..., Any]:
        seed = rng.getrandbits(64)

        def generated(first: Any, *rest: Any) -> Any:
            value = result.generate(random.Random(stable_seed(seed, variant(first))), size)
            if rest:
                return value(*rest)
            return value

        return generated

    return SampleGenerator(sample)
