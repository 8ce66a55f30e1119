"""Terms: typed expression trees over constants and variables."""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Iterator, Union

from lawfinder.universe.types import Type, drop_args, type_key

if TYPE_CHECKING:
    from lawfinder.catalogue.constants import Constant


@dataclass(frozen=True)
class Var:
    """A typed variable, identified by its index among variables of that type."""

    type: Type
    index: int

    def __repr__(self) -> str:
        return f"Var({self.index})"


@dataclass(frozen=True)
class App:
    """A constant applied to zero or more argument terms."""

    head: "Constant"
    args: tuple["Term", ...] = ()

    def __repr__(self) -> str:
        if not self.args:
            return f"App({self.head.name})"
        return f"App({self.head.name}, {list(self.args)!r})"


Term = Union[Var, App]


@lru_cache(maxsize=200_000)
def term_size(term: Term) -> int:
    """Variables count 1, applications their head's size plus their arguments."""
    if isinstance(term, Var):
        return 1
    return term.head.size + sum(term_size(a) for a in term.args)


@lru_cache(maxsize=200_000)
def term_type(term: Term) -> Type:
    if isinstance(term, Var):
        return term.type
    return drop_args(term.head.type, len(term.args))


def subterms(term: Term) -> Iterator[Term]:
    """All subterms, outermost first."""
    yield term
    if isinstance(term, App):
        for arg in term.args:
            yield from subterms(arg)


def term_vars(term: Term) -> list[Var]:
    """Distinct variables in order of first occurrence."""
    found: list[Var] = []
    for sub in subterms(term):
        if isinstance(sub, Var) and sub not in found:
            found.append(sub)
    return found


def term_constants(term: Term) -> list["Constant"]:
    found: list = []
    for sub in subterms(term):
        if isinstance(sub, App) and sub.head not in found:
            found.append(sub.head)
    return found


def substitute_vars(term: Term, mapping: dict[Var, Term]) -> Term:
    if isinstance(term, Var):
        return mapping.get(term, term)
    if not term.args:
        return term
    return App(term.head, tuple(substitute_vars(a, mapping) for a in term.args))


@lru_cache(maxsize=200_000)
def term_key(term: Term) -> tuple:
    """Structural total order following the constant order."""
    if isinstance(term, Var):
        return (0, type_key(term.type), term.index)
    return (1, term.head.sort_key, len(term.args), tuple(term_key(a) for a in term.args))


def term_measure(term: Term) -> tuple:
    """Enumeration order within the whole term space.

    Smaller terms come first; among terms of one size, those with more
    distinct variables (the more general ones) come first.
    """
    return (term_size(term), -len(term_vars(term)), term_key(term))
