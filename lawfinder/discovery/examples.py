"""Ready-made signatures used by the runner script and the tests."""

import operator
import random
from typing import Callable

from lawfinder.catalogue.constants import declare_function
from lawfinder.catalogue.predicates import declare_predicate
from lawfinder.catalogue.prelude import arith, bools, lists
from lawfinder.discovery.config import ExploreConfig
from lawfinder.discovery.signature import Signature
from lawfinder.generators import Generator, SampleGenerator
from lawfinder.universe.types import A, BOOL, INT, arrow, list_of


def _insert(x: int, xs: list[int]) -> list[int]:
    """Insert before the first element not smaller than ``x``."""
    for i, y in enumerate(xs):
        if x <= y:
            return [*xs[:i], x, *xs[i:]]
    return [*xs, x]


def _delete(x: int, xs: list[int]) -> list[int]:
    """Remove the first occurrence of ``x``, if any."""
    for i, y in enumerate(xs):
        if x == y:
            return [*xs[:i], *xs[i + 1:]]
    return list(xs)


def _is_sorted(xs: list[int]) -> bool:
    return all(a <= b for a, b in zip(xs, xs[1:]))


def sorted_lists() -> Generator:
    """Sorted lists, as one-element argument tuples for ``sorted``.

    Elements come from half the usual range so that repeated elements, and
    variables that hit one of them, are common.
    """

    def sample(rng: random.Random, size: int) -> tuple[list[int]]:
        bound = size // 2
        return (sorted(rng.randint(-bound, bound) for _ in range(rng.randint(0, size))),)

    return SampleGenerator(sample)


def list_signature(config: ExploreConfig | None = None) -> Signature:
    """Empty list, cons, append and reverse."""
    constants = [
        *lists(),
        declare_function("reverse", arrow(list_of(A), list_of(A)), lambda xs: xs[::-1]),
    ]
    return Signature([constants], config=config or ExploreConfig())


def arith_signature(config: ExploreConfig | None = None) -> Signature:
    """Zero, one, addition and multiplication over integers."""
    constants = [*arith(INT), declare_function("*", arrow(INT, INT, INT), operator.mul)]
    return Signature([constants], config=config or ExploreConfig())


def bool_signature(config: ExploreConfig | None = None) -> Signature:
    return Signature([bools()], config=config or ExploreConfig())


def sorted_signature(config: ExploreConfig | None = None) -> Signature:
    """Insertion into and deletion from sorted lists, with ``sorted`` as a predicate."""
    ints = list_of(INT)
    constants = [
        declare_function("insert", arrow(INT, ints, ints), _insert),
        declare_function("delete", arrow(INT, ints, ints), _delete),
    ]
    predicate = declare_predicate("sorted", arrow(ints, BOOL), _is_sorted, sorted_lists())
    return Signature([constants], [[predicate]], config=config or ExploreConfig())


EXAMPLES: dict[str, Callable[[ExploreConfig | None], Signature]] = {
    "lists": list_signature,
    "arith": arith_signature,
    "bools": bool_signature,
    "sorted": sorted_signature,
}
