"""Equations and properties (possibly conditional laws)."""

from dataclasses import dataclass
from functools import total_ordering

from lawfinder.claims.terms import Term, term_constants, term_key, term_measure, term_type, term_vars
from lawfinder.universe.types import pretty_type


@dataclass(frozen=True)
class Equation:
    """A claim that two terms of the same type are equal."""

    lhs: Term
    rhs: Term

    def __post_init__(self) -> None:
        left, right = term_type(self.lhs), term_type(self.rhs)
        if left != right:
            raise ValueError(
                f"Equation sides differ in type: {pretty_type(left)} vs {pretty_type(right)}"
            )

    @property
    def key(self) -> tuple:
        return (term_key(self.lhs), term_key(self.rhs))

    def oriented(self) -> "Equation":
        """The same equation with the larger side on the left."""
        if term_measure(self.rhs) > term_measure(self.lhs):
            return Equation(self.rhs, self.lhs)
        return self


@total_ordering
@dataclass(frozen=True, eq=False)
class Property:
    """Hypotheses plus a conclusion.

    Equality, hashing and ordering ignore the order of hypotheses and any
    duplicates among them.
    """

    hypotheses: tuple[Equation, ...]
    conclusion: Equation

    @property
    def canonical(self) -> tuple:
        hyps = sorted({h.key for h in self.hypotheses})
        return (tuple(hyps), self.conclusion.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return self.canonical == other.canonical

    def __lt__(self, other: "Property") -> bool:
        return self.canonical < other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    @property
    def is_conditional(self) -> bool:
        return bool(self.hypotheses)

    def equations(self) -> list[Equation]:
        return [*self.hypotheses, self.conclusion]

    def terms(self) -> list[Term]:
        return [t for eq in self.equations() for t in (eq.lhs, eq.rhs)]

    def variables(self) -> list:
        found: list = []
        for t in self.terms():
            for v in term_vars(t):
                if v not in found:
                    found.append(v)
        return found

    def constants(self) -> list:
        found: list = []
        for t in self.terms():
            for con in term_constants(t):
                if con not in found:
                    found.append(con)
        return found


def unit_property(equation: Equation) -> Property:
    """An unconditional property."""
    return Property((), equation)
