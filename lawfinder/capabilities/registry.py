"""Type-indexed capability registry.

Entries are kept in registration order. A lookup tries every entry whose
result pattern matches the (skolemized) query, in order, and returns the
first one whose requirements can all be resolved in turn. Entailment
entries ``C1 => C2`` are tried after the direct entries: a witness for
``C1`` is resolved and transformed into a witness for ``C2``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from lawfinder.capabilities.kinds import CONJUNCTION, ENTAILS, entails
from lawfinder.universe.types import TyCon, Type, match, pretty_type, skolemize, substitute, type_vars

logger = logging.getLogger(__name__)

# Compound shapes nest at most this deep in practice; the bound only
# guarantees that resolution terminates on cyclic entailments.
MAX_RESOLUTION_DEPTH = 16

_MISSING = object()


@dataclass(frozen=True)
class Instance:
    """A registry entry.

    Attributes:
        result: Constraint type this entry provides, e.g. ``Ord [a]``
        requires: Constraint types that must be resolved first, e.g. ``Ord a``
        build: Called with one witness per requirement; returns the witness
    """

    result: Type
    requires: tuple[Type, ...] = ()
    build: Callable[..., Any] = field(default=lambda: None, repr=False)

    def __post_init__(self) -> None:
        free = set(type_vars(self.result))
        for req in self.requires:
            missing = [v for v in type_vars(req) if v not in free]
            if missing:
                raise ValueError(
                    f"Requirement {pretty_type(req)} of {pretty_type(self.result)} "
                    f"mentions variables not in the result: {missing}"
                )


def instance(result: Type, value: Any) -> Instance:
    """An entry with no requirements that always answers ``value``."""
    return Instance(result, (), lambda: value)


def derived(result: Type, requires: list[Type], build: Callable[..., Any]) -> Instance:
    """An entry assembled from the witnesses of ``requires``."""
    return Instance(result, tuple(requires), build)


def entailment(premise: Type, conclusion: Type, transform: Callable[[Any], Any]) -> Instance:
    """An entry stating ``premise => conclusion``."""
    return instance(entails(premise, conclusion), transform)


@dataclass(frozen=True)
class Instances:
    """Immutable, ordered collection of capability entries.

    Merging with ``+`` concatenates entries, so it is associative with
    ``Instances.empty()`` as identity. Earlier entries take priority.
    """

    entries: tuple[Instance, ...] = ()
    _cache: dict = field(default_factory=dict, compare=False, repr=False, hash=False)

    @classmethod
    def empty(cls) -> "Instances":
        return cls()

    @classmethod
    def of(cls, *entries: Instance) -> "Instances":
        return cls(tuple(entries))

    def __add__(self, other: "Instances") -> "Instances":
        return Instances(self.entries + other.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def register(self, entry: Instance) -> "Instances":
        """Return a new registry with ``entry`` appended."""
        return Instances(self.entries + (entry,))

    def find(self, query: Type) -> Any | None:
        """Resolve a witness for a constraint type.

        Args:
            query: Constraint type, e.g. ``Ord [Int]``

        Returns:
            The witness, or None if nothing resolves
        """
        goal = skolemize(query)
        if goal in self._cache:
            return self._cache[goal]
        result = self._solve(goal, 0, frozenset())
        witness = None if result is _MISSING else result
        self._cache[goal] = witness
        return witness

    def has(self, query: Type) -> bool:
        return self.find(query) is not None

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _solve(self, goal: Type, depth: int, active: frozenset) -> Any:
        if depth > MAX_RESOLUTION_DEPTH:
            logger.debug(f"Resolution depth exceeded at {pretty_type(goal)}")
            return _MISSING
        if isinstance(goal, TyCon) and goal.name == CONJUNCTION:
            witnesses = []
            for part in goal.args:
                w = self._solve(part, depth + 1, active)
                if w is _MISSING:
                    return _MISSING
                witnesses.append(w)
            return tuple(witnesses)
        if goal in active:
            return _MISSING
        cached = self._cache.get(goal)
        if cached is not None:
            return cached
        active = active | {goal}

        for entry in self.entries:
            sub = match(entry.result, goal)
            if sub is None:
                continue
            witness = self._build(entry, sub, depth, active)
            if witness is not _MISSING:
                return witness

        if not (isinstance(goal, TyCon) and goal.name == ENTAILS):
            for entry in self.entries:
                if not (isinstance(entry.result, TyCon) and entry.result.name == ENTAILS):
                    continue
                premise, conclusion = entry.result.args
                sub = match(conclusion, goal)
                if sub is None:
                    continue
                premise = substitute(premise, sub)
                if type_vars(premise):
                    continue
                transform = self._build(entry, sub, depth, active)
                if transform is _MISSING:
                    continue
                evidence = self._solve(premise, depth + 1, active)
                if evidence is _MISSING:
                    continue
                return transform(evidence)

        return _MISSING

    def _build(self, entry: Instance, sub: dict, depth: int, active: frozenset) -> Any:
        witnesses = []
        for req in entry.requires:
            w = self._solve(substitute(req, sub), depth + 1, active)
            if w is _MISSING:
                return _MISSING
            witnesses.append(w)
        return entry.build(*witnesses)
