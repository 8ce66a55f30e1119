"""Predicate declarations.

A predicate ``p :: a1 -> ... -> an -> Bool`` is explored through a
synthetic test-case type whose values are argument tuples satisfying ``p``.
Selector constants ``p_0 .. p_{n-1}`` project the arguments back out, so a
term such as ``insert x (sorted_0 v)`` talks about inserting into a sorted
list. Laws over such terms are later displayed as conditional laws.
"""

from dataclasses import dataclass
from operator import itemgetter
from typing import Any, Callable

from lawfinder.capabilities import Instances, Names, arbitrary_type, derived, instance, names_type
from lawfinder.catalogue.constants import (
    TRUE_TERM,
    Constant,
    DeclarationError,
    PredicateInfo,
    SelectorInfo,
)
from lawfinder.claims.schema import Equation, Property
from lawfinder.claims.terms import App, Var
from lawfinder.generators import Generator, tuples
from lawfinder.universe.types import BOOL, TyCon, Type, arg_types, arrow, is_ground, pretty_type, result_type

TEST_CASE_PREFIX = "TestCase:"


def is_test_case_type(t: Type) -> bool:
    return isinstance(t, TyCon) and t.name.startswith(TEST_CASE_PREFIX)


@dataclass
class PredicateDeclaration:
    """Everything a predicate contributes to a signature.

    Attributes:
        predicate: The predicate itself, usable as an ordinary function
        selectors: One projection per argument position
        instances: Generator and names for the test-case type
    """

    predicate: Constant
    selectors: tuple[Constant, ...]
    instances: Instances

    @property
    def test_case_type(self) -> Type:
        return self.predicate.classification.test_case_type

    @property
    def constants(self) -> list[Constant]:
        return [self.predicate, *self.selectors]

    def background_fact(self) -> Property:
        """``p (p_0 v) ... (p_{n-1} v) = True`` for a test-case variable ``v``."""
        v = Var(self.test_case_type, 0)
        lhs = App(self.predicate, tuple(App(sel, (v,)) for sel in self.selectors))
        return Property((), Equation(lhs, TRUE_TERM))


def _satisfying(value: Callable[..., Any]) -> Callable[[tuple], bool]:
    return lambda args: bool(value(*args))


def declare_predicate(
    name: str,
    type: Type,
    value: Callable[..., Any],
    generator: Generator | None = None,
) -> PredicateDeclaration:
    """Declare a predicate usable as a hypothesis.

    Test cases are drawn by rejection sampling from the argument types'
    generators unless ``generator`` is given. Rejection sampling favours
    small values, so predicates that few random values satisfy (such as
    sortedness) are better served by a generator that builds satisfying
    argument tuples directly.

    Args:
        name: Predicate name
        type: Ground type ``a1 -> ... -> an -> Bool`` with ``n >= 1``
        value: Python callable taking ``n`` arguments and returning a bool
        generator: Generator of argument tuples; values failing the
            predicate are still rejected

    Returns:
        The predicate, its selectors and its capability entries

    Raises:
        DeclarationError: If the type is not a ground predicate type
    """
    args = arg_types(type)
    if not args or result_type(type) != BOOL:
        raise DeclarationError(
            f"Predicate {name!r} must have type a1 -> ... -> Bool, got {pretty_type(type)}"
        )
    if not is_ground(type):
        raise DeclarationError(
            f"Predicate {name!r} must have a monomorphic type, got {pretty_type(type)}"
        )

    test_case = TyCon(TEST_CASE_PREFIX + name, tuple(args))
    predicate = Constant(name, type, value)
    selectors = tuple(
        Constant(
            f"{name}_{i}",
            arrow(test_case, arg),
            itemgetter(i),
            size=0,
            classification=SelectorInfo(i, predicate, test_case),
        )
        for i, arg in enumerate(args)
    )
    predicate.classification = PredicateInfo(selectors, test_case, TRUE_TERM)

    if generator is None:
        cases = derived(
            arbitrary_type(test_case),
            [arbitrary_type(a) for a in args],
            lambda *gens: tuples(*gens).such_that(_satisfying(value)),
        )
    else:
        cases = instance(arbitrary_type(test_case), generator.such_that(_satisfying(value)))
    instances = Instances.of(
        cases,
        instance(names_type(test_case), Names((f"{name}_var",))),
    )
    return PredicateDeclaration(predicate, selectors, instances)
