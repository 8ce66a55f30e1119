"""Declared constants and their classification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from lawfinder.claims.terms import App, Term
from lawfinder.universe.types import BOOL, Substitution, Type, pretty_type, substitute, type_arity, type_key, type_vars


class DeclarationError(ValueError):
    """Raised when a constant or predicate declaration is malformed."""


class Style(str, Enum):
    """How a constant is displayed when applied."""

    INFIX = "infix"
    PREFIX = "prefix"
    CURRIED = "curried"


def is_op(name: str) -> bool:
    """Whether a name looks like an operator (``++``, ``:``, ``.``)."""
    if name == "[]" or name.startswith('"'):
        return False
    if name and all(ch == "." for ch in name):
        return True
    return any(not (ch.isalnum() or ch in "'_.") for ch in name)


def twiddle(arity: int) -> int:
    """Swap ranks 1 and 2 so binary operators sort before unary functions."""
    if arity == 1:
        return 2
    if arity == 2:
        return 1
    return arity


@dataclass(frozen=True)
class Function:
    """An ordinary function or value."""


@dataclass(eq=False)
class PredicateInfo:
    """A predicate and the selectors that project its satisfying arguments.

    Attributes:
        selectors: One selector constant per argument position
        test_case_type: Type of a tuple of arguments satisfying the predicate
        true_term: Right-hand side used for predicate hypotheses
    """

    selectors: tuple["Constant", ...]
    test_case_type: Type
    true_term: Term


@dataclass(eq=False)
class SelectorInfo:
    """Projection of argument ``index`` out of a predicate's test case."""

    index: int
    predicate: "Constant"
    test_case_type: Type


Classification = Union[Function, PredicateInfo, SelectorInfo]


@dataclass(eq=False)
class Constant:
    """A named, typed value that terms are built from.

    Two constants are equal when they have the same name and type.

    Attributes:
        name: Display name; operator-looking names are shown infix
        type: Semantic type (may contain variables until specialised)
        value: Python payload. Functions take their arguments uncurried;
            constrained constants take the constraint witness first
        constraint: Constraint type that must resolve for the constant to be used
        size: Contribution to term size
        classification: Function, predicate or selector
    """

    name: str
    type: Type
    value: Any = field(repr=False)
    constraint: Type | None = None
    size: int = 1
    classification: Classification = field(default_factory=Function, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return self.name == other.name and self.type == other.type

    def __hash__(self) -> int:
        return hash((self.name, self.type))

    @property
    def arity(self) -> int:
        return type_arity(self.type)

    @property
    def pretty_arity(self) -> int:
        """Arity used for display and ordering.

        An operator applied to two or more arguments counts as binary.
        """
        if is_op(self.name):
            return 2 if self.arity >= 2 else 1
        return self.arity

    @property
    def style(self) -> Style:
        if is_op(self.name):
            return Style.INFIX if self.arity >= 2 else Style.PREFIX
        return Style.CURRIED

    @property
    def sort_key(self) -> tuple:
        return (self.name, twiddle(self.pretty_arity), type_key(self.type))

    @property
    def is_predicate(self) -> bool:
        return isinstance(self.classification, PredicateInfo)

    @property
    def is_selector(self) -> bool:
        return isinstance(self.classification, SelectorInfo)

    def specialize(self, sub: Substitution) -> "Constant":
        """A copy with type variables replaced according to ``sub``."""
        if not sub or not type_vars(self.type):
            return self
        constraint = substitute(self.constraint, sub) if self.constraint is not None else None
        return Constant(
            self.name,
            substitute(self.type, sub),
            self.value,
            constraint,
            self.size,
            self.classification,
        )

    def signature_line(self) -> str:
        name = f"({self.name})" if is_op(self.name) else self.name
        if self.constraint is not None:
            return f"{name} :: {pretty_type(self.constraint)} => {pretty_type(self.type)}"
        return f"{name} :: {pretty_type(self.type)}"


def declare_function(
    name: str,
    type: Type,
    value: Any,
    constraint: Type | None = None,
    size: int = 1,
) -> Constant:
    """Declare a function or value.

    Args:
        name: Display name
        type: Semantic type; variables are specialised before exploration
        value: Python payload (a callable taking all arguments at once,
            with the constraint witness first when ``constraint`` is given)
        constraint: Optional constraint type, e.g. ``Ord a``
        size: Term size weight (at least 1)

    Raises:
        DeclarationError: If the declaration is malformed
    """
    if not name:
        raise DeclarationError("Constant name must not be empty")
    if size < 1:
        raise DeclarationError(f"Constant {name!r} must have size >= 1, got {size}")
    if constraint is not None:
        unknown = [v for v in type_vars(constraint) if v not in type_vars(type)]
        if unknown:
            raise DeclarationError(
                f"Constraint of {name!r} mentions variables not in its type: {unknown}"
            )
    return Constant(name, type, value, constraint, size)


TRUE = Constant("True", BOOL, True)
TRUE_TERM = App(TRUE)
