"""Built-in capability entries and helpers for user types."""

from typing import Any, Callable

from lawfinder import generators as gen
from lawfinder.capabilities.kinds import (
    CoArbitrary,
    Equality,
    Names,
    Observer,
    Ordering,
    arbitrary_type,
    coarbitrary_type,
    eq_type,
    names_type,
    observe_type,
    ord_type,
)
from lawfinder.capabilities.registry import Instance, Instances, derived, entailment, instance
from lawfinder.generators import Generator
from lawfinder.universe.types import (
    A,
    B,
    BOOL,
    C,
    CHAR,
    D,
    E,
    INT,
    STR,
    UNIT,
    Type,
    arrow,
    dict_of,
    list_of,
    optional_of,
    tuple_of,
)

_TUPLE_VARS = (A, B, C, D, E)


def base_type(
    ty: Type,
    generator: Generator,
    ordering: Ordering | None = None,
    coarbitrary: CoArbitrary | None = None,
) -> Instances:
    """Make a monomorphic type testable.

    Registers ``Ord`` (natural ordering unless given) and ``Arbitrary``, plus
    ``CoArbitrary`` when given, so that random functions over the type can
    be generated.
    """
    entries = [
        instance(ord_type(ty), ordering or Ordering.natural()),
        instance(arbitrary_type(ty), generator),
    ]
    if coarbitrary is not None:
        entries.append(instance(coarbitrary_type(ty), coarbitrary))
    return Instances.of(*entries)


def observer_instance(
    ty: Type,
    test: Generator | None,
    observe: Callable[[Any, Any], Any],
    outcome_type: Type,
) -> Instances:
    """Observational equality for a type without a usable ordering.

    Args:
        ty: Type being observed
        test: Generator for the hidden test value (None if unused)
        observe: (test value, value) -> outcome
        outcome_type: Type of outcomes; must have an ``Ord`` instance
    """
    return Instances.of(
        derived(observe_type(ty), [ord_type(outcome_type)], lambda o: Observer(test, observe, o))
    )


def names_instance(ty: Type, names: list[str]) -> Instances:
    return Instances.of(instance(names_type(ty), Names(tuple(names))))


def _tuple_entries(n: int) -> list[Instance]:
    vars_ = _TUPLE_VARS[:n]
    ty = tuple_of(*vars_)
    return [
        derived(
            arbitrary_type(ty),
            [arbitrary_type(v) for v in vars_],
            lambda *gs: gen.tuples(*gs),
        ),
        derived(ord_type(ty), [ord_type(v) for v in vars_], Ordering.of_tuple),
        derived(coarbitrary_type(ty), [coarbitrary_type(v) for v in vars_], CoArbitrary.of_tuple),
    ]


def base_instances() -> Instances:
    """Entries every exploration starts from.

    Order matters: observers try the identity observation (via ``Ord``)
    before observing functions by application, and names prefer the most
    specific shape.
    """
    entries: list[Instance] = []

    for n in range(2, 6):
        entries.extend(_tuple_entries(n))

    entries += [
        derived(arbitrary_type(list_of(A)), [arbitrary_type(A)], gen.lists),
        derived(ord_type(list_of(A)), [ord_type(A)], Ordering.of_list),
        derived(coarbitrary_type(list_of(A)), [coarbitrary_type(A)], CoArbitrary.of_list),
        derived(arbitrary_type(optional_of(A)), [arbitrary_type(A)], gen.optionals),
        derived(ord_type(optional_of(A)), [ord_type(A)], Ordering.of_optional),
        derived(coarbitrary_type(optional_of(A)), [coarbitrary_type(A)], CoArbitrary.of_optional),
        derived(
            arbitrary_type(dict_of(A, B)), [arbitrary_type(A), arbitrary_type(B)], gen.dicts
        ),
        derived(ord_type(dict_of(A, B)), [ord_type(A), ord_type(B)], Ordering.of_dict),
        derived(
            coarbitrary_type(dict_of(A, B)),
            [coarbitrary_type(A), coarbitrary_type(B)],
            CoArbitrary.of_dict,
        ),
        derived(
            arbitrary_type(arrow(A, B)),
            [coarbitrary_type(A), arbitrary_type(B)],
            lambda co, g: gen.functions(co.variant, g),
        ),
        derived(
            coarbitrary_type(arrow(A, B)),
            [arbitrary_type(A), coarbitrary_type(B)],
            CoArbitrary.of_function,
        ),
        entailment(ord_type(A), eq_type(A), Equality.from_ordering),
        derived(observe_type(A), [ord_type(A)], Observer.identity),
        derived(observe_type(arrow(A, B)), [arbitrary_type(A), observe_type(B)], Observer.function),
        derived(names_type(list_of(A)), [names_type(A)], Names.plural),
        instance(names_type(arrow(A, BOOL)), Names(("p", "q", "r"))),
        instance(names_type(arrow(A, B)), Names(("f", "g", "h"))),
        instance(names_type(A), Names(("x", "y", "z", "w"))),
    ]

    base = Instances.of(*entries)
    base += base_type(INT, gen.integers(), coarbitrary=CoArbitrary.natural())
    base += base_type(BOOL, gen.booleans(), coarbitrary=CoArbitrary.natural())
    base += base_type(CHAR, gen.characters(), coarbitrary=CoArbitrary.natural())
    base += base_type(STR, gen.strings(), coarbitrary=CoArbitrary.natural())
    base += base_type(UNIT, gen.units(), coarbitrary=CoArbitrary.natural())
    return base
