"""Observed equivalence classes of terms."""

from dataclasses import dataclass

from lawfinder.claims.terms import Term, term_type
from lawfinder.harness.harness import Harness, OutcomeVector
from lawfinder.universe.types import Type


@dataclass
class EquivalenceClass:
    """Terms that agreed on every test case.

    Attributes:
        representative: First (smallest) term of the class
        outcomes: Outcome vector of the representative
    """

    representative: Term
    outcomes: OutcomeVector


class EquivalenceClasses:
    """Classes of terms keyed by type.

    Fully observable outcome vectors are looked up by their exact keys.
    Vectors with gaps (samples where evaluation failed) are compared one by
    one, since a gap matches anything.
    """

    def __init__(self) -> None:
        self._classes: dict[Type, list[EquivalenceClass]] = {}
        self._exact: dict[Type, dict[tuple, EquivalenceClass]] = {}
        self._partial: dict[Type, list[EquivalenceClass]] = {}

    def __len__(self) -> int:
        return sum(len(cs) for cs in self._classes.values())

    @staticmethod
    def _signature(vector: OutcomeVector) -> tuple | None:
        if any(o is None for o in vector):
            return None
        return tuple(o.key for o in vector)

    def find_equal(self, term: Term, vector: OutcomeVector) -> EquivalenceClass | None:
        """The class whose representative agrees with ``vector``, if any."""
        ty = term_type(term)
        signature = self._signature(vector)
        if signature is not None:
            found = self._exact.get(ty, {}).get(signature)
            if found is not None:
                return found
        candidates = self._partial.get(ty, []) if signature is not None else self._classes.get(ty, [])
        for cls in candidates:
            if Harness.agree(cls.outcomes, vector):
                return cls
        return None

    def add(self, term: Term, vector: OutcomeVector) -> EquivalenceClass:
        """Start a new class with ``term`` as representative."""
        ty = term_type(term)
        cls = EquivalenceClass(term, vector)
        self._classes.setdefault(ty, []).append(cls)
        signature = self._signature(vector)
        if signature is not None:
            self._exact.setdefault(ty, {})[signature] = cls
        else:
            self._partial.setdefault(ty, []).append(cls)
        return cls
