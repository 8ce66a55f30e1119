"""Capability kinds and the values that implement them.

A capability is requested with a constraint type such as ``Ord [Int]`` and
answered with one of the witness values defined here (or a ``Generator``
for ``Arbitrary``).
"""

import random
from dataclasses import dataclass
from functools import partial
from itertools import count
from typing import Any, Callable, Iterator

from lawfinder.generators import Generator, SampleGenerator
from lawfinder.universe.types import TyCon, Type

ORD = "Ord"
EQ = "Eq"
ARBITRARY = "Arbitrary"
COARBITRARY = "CoArbitrary"
OBSERVE = "Observe"
NAMES = "Names"
CONJUNCTION = "&"
ENTAILS = "=>"


def ord_type(t: Type) -> TyCon:
    return TyCon(ORD, (t,))


def eq_type(t: Type) -> TyCon:
    return TyCon(EQ, (t,))


def arbitrary_type(t: Type) -> TyCon:
    return TyCon(ARBITRARY, (t,))


def coarbitrary_type(t: Type) -> TyCon:
    return TyCon(COARBITRARY, (t,))


def observe_type(t: Type) -> TyCon:
    return TyCon(OBSERVE, (t,))


def names_type(t: Type) -> TyCon:
    return TyCon(NAMES, (t,))


def conj(*constraints: Type) -> TyCon:
    """Conjunction of constraints; its witness is a tuple of witnesses."""
    return TyCon(CONJUNCTION, tuple(constraints))


def entails(premise: Type, conclusion: Type) -> TyCon:
    """``premise => conclusion``; its witness turns a premise witness into a conclusion witness."""
    return TyCon(ENTAILS, (premise, conclusion))


def _apply_one(fn: Callable[..., Any], arg: Any, more: bool) -> Any:
    # Functions are uncurried, so a function still expecting arguments is
    # partially applied instead of called.
    return partial(fn, arg) if more else fn(arg)


# ---------------------------------------------------------------------------
# Witness values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ordering:
    """Total order on a type, given by a key function.

    ``key`` maps a value to a hashable representative compared with the
    usual Python ordering. Two values are equal iff their keys are.
    """

    key: Callable[[Any], Any]

    @classmethod
    def natural(cls) -> "Ordering":
        return cls(lambda value: value)

    @classmethod
    def of_list(cls, elem: "Ordering") -> "Ordering":
        return cls(lambda xs: tuple(elem.key(x) for x in xs))

    @classmethod
    def of_tuple(cls, *components: "Ordering") -> "Ordering":
        return cls(lambda xs: tuple(c.key(x) for c, x in zip(components, xs)))

    @classmethod
    def of_optional(cls, elem: "Ordering") -> "Ordering":
        return cls(lambda x: (0,) if x is None else (1, elem.key(x)))

    @classmethod
    def of_dict(cls, keys: "Ordering", values: "Ordering") -> "Ordering":
        return cls(
            lambda d: tuple(sorted((keys.key(k), values.key(v)) for k, v in d.items()))
        )


@dataclass(frozen=True)
class Equality:
    """Equality test, usually derived from an ``Ordering``."""

    eq: Callable[[Any, Any], bool]

    @classmethod
    def from_ordering(cls, ordering: Ordering) -> "Equality":
        return cls(lambda x, y: ordering.key(x) == ordering.key(y))


@dataclass(frozen=True)
class CoArbitrary:
    """Maps a value to a stable token used to perturb a random stream.

    Random functions use the token of their argument to pick their result,
    so arguments with equal tokens get equal results.

    Attributes:
        variant: Value -> token (must have a stable ``repr``)
        arity: Number of arguments still expected when the value is a function
    """

    variant: Callable[[Any], Any]
    arity: int = 0

    @classmethod
    def natural(cls) -> "CoArbitrary":
        return cls(repr)

    @classmethod
    def of_list(cls, elem: "CoArbitrary") -> "CoArbitrary":
        return cls(lambda xs: tuple(elem.variant(x) for x in xs))

    @classmethod
    def of_tuple(cls, *components: "CoArbitrary") -> "CoArbitrary":
        return cls(lambda xs: tuple(c.variant(x) for c, x in zip(components, xs)))

    @classmethod
    def of_optional(cls, elem: "CoArbitrary") -> "CoArbitrary":
        return cls(lambda x: None if x is None else (elem.variant(x),))

    @classmethod
    def of_dict(cls, keys: "CoArbitrary", values: "CoArbitrary") -> "CoArbitrary":
        return cls(
            lambda d: tuple(sorted((repr(keys.variant(k)), values.variant(v)) for k, v in d.items()))
        )

    @classmethod
    def of_function(cls, arg: Generator, result: "CoArbitrary", probes: int = 3) -> "CoArbitrary":
        """Tokens for functions: results at a few fixed probe arguments."""
        probe_args = [arg.generate(random.Random(i), 5) for i in range(probes)]
        more = result.arity > 0
        return cls(
            lambda f: tuple(result.variant(_apply_one(f, x, more)) for x in probe_args),
            result.arity + 1,
        )


@dataclass(frozen=True)
class Observer:
    """Observational equality for a type.

    Two values are observationally equal when ``observe(test, value)`` gives
    equal outcomes (under ``outcome``) for every test value drawn from
    ``test``.

    Attributes:
        test: Generator for the hidden test value, or None if not needed
        observe: (test value, value) -> outcome value
        outcome: Ordering on outcome values
        arity: Number of function arguments consumed by the observation
    """

    test: Generator | None
    observe: Callable[[Any, Any], Any]
    outcome: Ordering
    arity: int = 0

    @classmethod
    def identity(cls, ordering: Ordering) -> "Observer":
        """Observe a value by itself, for types that have an ``Ordering``."""
        return cls(None, lambda test, value: value, ordering)

    @classmethod
    def function(cls, arg: Generator, result: "Observer") -> "Observer":
        """Observe a function by applying it to a random argument."""

        def draw(rng, size):
            inner = result.test.generate(rng, size) if result.test is not None else None
            return (arg.generate(rng, size), inner)

        more = result.arity > 0
        return cls(
            SampleGenerator(draw),
            lambda test, f: result.observe(test[1], _apply_one(f, test[0], more)),
            result.outcome,
            result.arity + 1,
        )

    def key(self, test: Any, value: Any) -> Any:
        return self.outcome.key(self.observe(test, value))


@dataclass(frozen=True)
class Names:
    """Preferred variable names for a type."""

    names: tuple[str, ...]

    def plural(self) -> "Names":
        return Names(tuple(name + "s" for name in self.names))

    def supply(self) -> Iterator[str]:
        """All names in preference order: the names, then numbered variants."""
        yield from self.names
        for i in count(1):
            for name in self.names:
                yield f"{name}{i}"
