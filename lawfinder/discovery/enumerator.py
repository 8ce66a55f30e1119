"""Size-bounded enumeration of well-typed terms.

Terms are produced size class by size class. Compound terms only ever use
accepted representatives as arguments, so once a term is known to equal a
smaller one, nothing is built on top of it.
"""

import logging
from typing import Callable, Iterator

from lawfinder.catalogue.constants import Constant
from lawfinder.catalogue.predicates import is_test_case_type
from lawfinder.claims.terms import App, Term, Var, term_measure, term_size, term_type
from lawfinder.universe.types import Type, arg_types, drop_args, is_function, type_key
from lawfinder.universe.values import InternalError

logger = logging.getLogger(__name__)


class Enumerator:
    """Enumerates terms over a fixed set of monomorphic constants.

    Atoms are variables (``max_vars`` per argument type), constants of
    arity zero, and for each predicate selector its projection of a
    test-case variable. Selectors are never atoms on their own.

    Functions may also be applied to fewer arguments than their arity when
    the resulting function type is an argument type of some constant (as
    for ``f . g``).
    """

    def __init__(
        self,
        constants: list[Constant],
        max_size: int,
        max_vars: int = 3,
        allowed: Callable[[Term], bool] | None = None,
    ):
        """Initialize the enumerator.

        Args:
            constants: Monomorphic constants, including predicates and selectors
            max_size: Largest term size to produce
            max_vars: Number of distinct variables per type
            allowed: Extra filter on produced terms
        """
        self.max_size = max_size
        self.max_vars = max_vars
        self.allowed = allowed or (lambda term: True)
        ordered = sorted(constants, key=lambda c: c.sort_key)
        self.heads = [c for c in ordered if not c.is_selector]
        self.selectors = [c for c in ordered if c.is_selector]
        self.consumed = {t for c in self.heads for t in arg_types(c.type) if is_function(t)}
        self._reps: dict[tuple[Type, int], list[Term]] = {}
        self._accepted: set[Term] = set()

    # ------------------------------------------------------------------
    # Representatives
    # ------------------------------------------------------------------

    def accept(self, term: Term) -> None:
        """Make ``term`` available as an argument of larger terms."""
        if term in self._accepted:
            return
        self._accepted.add(term)
        self._reps.setdefault((term_type(term), term_size(term)), []).append(term)

    @property
    def representative_count(self) -> int:
        return len(self._accepted)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def variable_types(self) -> list[Type]:
        """Types that get variables: every argument type of a non-selector constant."""
        found = {t for c in self.heads for t in arg_types(c.type) if not is_test_case_type(t)}
        return sorted(found, key=type_key)

    def atoms(self) -> list[Term]:
        atoms: list[Term] = []
        for ty in self.variable_types():
            atoms.extend(Var(ty, i) for i in range(self.max_vars))
        for con in self.heads:
            if con.arity == 0 or con.type in self.consumed:
                atoms.append(App(con))
        for sel in self.selectors:
            test_case = sel.classification.test_case_type
            atoms.extend(App(sel, (Var(test_case, i),)) for i in range(self.max_vars))
        return atoms

    def terms(self) -> Iterator[Term]:
        """Lazily yield terms in increasing size.

        Terms of size ``k`` are built only after every term of size ``k - 1``
        has been yielded, so they see all representatives accepted so far.
        """
        atoms = self.atoms()
        for size in range(1, self.max_size + 1):
            batch = [a for a in atoms if term_size(a) == size]
            batch.extend(self._applications(size))
            batch = [t for t in batch if self.allowed(t)]
            batch.sort(key=term_measure)
            logger.debug(f"Size {size}: {len(batch)} terms")
            for term in batch:
                self._check(term)
                yield term

    def _applications(self, size: int) -> Iterator[Term]:
        for head in self.heads:
            budget = size - head.size
            if budget < 1:
                continue
            types = arg_types(head.type)
            for count in range(1, len(types) + 1):
                if count < len(types) and drop_args(head.type, count) not in self.consumed:
                    continue
                for args in self._fill(types[:count], budget):
                    yield App(head, args)

    def _fill(self, types: list[Type], budget: int) -> Iterator[tuple[Term, ...]]:
        if not types:
            if budget == 0:
                yield ()
            return
        first, rest = types[0], types[1:]
        for size in range(1, budget - len(rest) + 1):
            for term in self._reps.get((first, size), []):
                for tail in self._fill(rest, budget - size):
                    yield (term, *tail)

    @staticmethod
    def _check(term: Term) -> None:
        if isinstance(term, App) and term.head.is_selector and not term.args:
            raise InternalError(f"Selector {term.head.name} enumerated as a bare atom")
