"""Redundancy detection for discovered laws."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Protocol

from lawfinder.claims.schema import Property
from lawfinder.claims.terms import App, Term, substitute_vars, term_size
from lawfinder.pruning.completion import canonical_pair, critical_pairs
from lawfinder.pruning.ordering import skolem
from lawfinder.pruning.rewriting import Normaliser, RewriteLimitExceeded, Rule, RuleSet, rules_for

logger = logging.getLogger(__name__)


@dataclass
class PruningConfig:
    """Limits that keep redundancy queries tractable.

    Attributes:
        max_cp_depth: Critical-pair steps completion follows from a law
            (None = unbounded)
        max_term_size: Facts with a side larger than this are remembered but
            not used for rewriting, and larger critical pairs are dropped
            (None = the largest side among the facts so far)
        max_rewrite_steps: Rewrite steps allowed per normalisation
            (None = unbounded)
    """

    max_cp_depth: int | None = None
    max_term_size: int | None = None
    max_rewrite_steps: int | None = None


class PruningOracle(Protocol):
    """Decides whether a candidate law follows from the laws accepted so far."""

    def is_redundant(self, prop: Property) -> bool: ...

    def record_fact(self, prop: Property) -> None: ...

    def normalise(self, term: Term) -> Term: ...

    def is_reducible(self, term: Term) -> bool: ...


class RewritingPruner:
    """Pruning oracle based on ground rewriting.

    Accepted laws become rewrite rules, oriented by the Knuth-Bendix
    ordering where possible and used for ordered rewriting otherwise. Each
    new law is completed against the rules so far: critical pairs that do
    not already rewrite to a common form are added as rules too, so that
    consequences such as ``0 + x = x`` (from ``x + 0 = x`` and
    commutativity) are known.

    A candidate is redundant when, after replacing its variables with fresh
    rigid constants and adding its hypotheses as rules, both sides of its
    conclusion rewrite to the same normal form.

    The check is sound (every rule is a consequence of the recorded laws,
    so an independent law is never called redundant) but incomplete. If the
    step budget runs out, the candidate is reported as not redundant.
    """

    def __init__(self, config: PruningConfig | None = None):
        """Initialize the pruner.

        Args:
            config: Pruning limits (uses defaults if not provided)
        """
        self.config = config or PruningConfig()
        self._rules = RuleSet()
        self._known: set[Property] = set()
        self._facts: list[Property] = []
        self._seen_pairs: set[tuple[Term, Term]] = set()
        self._largest_fact = 0

    @property
    def fact_count(self) -> int:
        return len(self._facts)

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def record_fact(self, prop: Property) -> None:
        """Add an accepted law to the known set and complete the rules.

        Conditional laws are remembered for exact matching only.
        """
        if prop in self._known:
            return
        self._known.add(prop)
        self._facts.append(prop)
        if prop.hypotheses:
            return

        eq = prop.conclusion
        size = max(term_size(eq.lhs), term_size(eq.rhs))
        limit = self.config.max_term_size
        if limit is not None and size > limit:
            logger.debug(f"Fact too large for rewriting: {eq.lhs!r} = {eq.rhs!r}")
            return
        self._largest_fact = max(self._largest_fact, size)
        self._complete(eq.lhs, eq.rhs)

    def _complete(self, lhs: Term, rhs: Term) -> None:
        """Add rules for a law, then for the critical pairs it gives rise to."""
        pending = deque([(lhs, rhs, 0)])
        law = True
        added = 0
        while pending:
            lhs, rhs, depth = pending.popleft()
            new_rules = self._add_equation(lhs, rhs, depth, law)
            law = False
            added += len(new_rules)
            for rule in new_rules:
                for pair, pair_depth in self._overlaps(rule):
                    pending.append((*pair, pair_depth))
        logger.debug(f"Completion added {added} rule(s), {len(self._rules)} in total")

    def _overlaps(self, rule: Rule) -> Iterator[tuple[tuple[Term, Term], int]]:
        """New critical pairs between ``rule`` and every rule so far."""
        limit = self.config.max_term_size or self._largest_fact
        max_depth = self.config.max_cp_depth
        for other in self._rules:
            depth = max(rule.depth, other.depth) + 1
            if max_depth is not None and depth > max_depth:
                continue
            pairs = critical_pairs(rule, other)
            if other is not rule:
                pairs += critical_pairs(other, rule)
            for left, right in pairs:
                pair = canonical_pair(left, right)
                if pair in self._seen_pairs:
                    continue
                self._seen_pairs.add(pair)
                self._seen_pairs.add((pair[1], pair[0]))
                if max(term_size(pair[0]), term_size(pair[1])) > limit:
                    continue
                yield pair, depth

    def _add_equation(self, lhs: Term, rhs: Term, depth: int, law: bool) -> list[Rule]:
        """Turn an equation into rules unless the current rules already join it.

        A recorded law always gets rules, even if normalising it runs out
        of budget.
        """
        try:
            lhs, rhs = self._normal(lhs), self._normal(rhs)
        except RewriteLimitExceeded as e:
            if not law:
                logger.debug(f"Dropping critical pair: {e}")
                return []
        if lhs == rhs:
            return []
        rules = rules_for(lhs, rhs, depth)
        for rule in rules:
            self._rules.add(rule)
        return rules

    def _normal(self, term: Term) -> Term:
        return Normaliser([self._rules], self.config.max_rewrite_steps).normalise(term)

    def is_redundant(self, prop: Property) -> bool:
        """Check whether a law follows from the known laws.

        Args:
            prop: Candidate law

        Returns:
            True if the law is implied, False if it is not or if the
            query ran out of budget
        """
        if prop in self._known:
            return True

        rigid = {v: App(skolem(v)) for v in prop.variables()}
        normaliser = Normaliser([self._rules], self.config.max_rewrite_steps)
        try:
            if prop.hypotheses:
                assumptions = RuleSet()
                for hyp in prop.hypotheses:
                    lhs = normaliser.normalise(substitute_vars(hyp.lhs, rigid))
                    rhs = normaliser.normalise(substitute_vars(hyp.rhs, rigid))
                    for rule in rules_for(lhs, rhs):
                        assumptions.add(rule)
                normaliser.rule_sets = [self._rules, assumptions]

            eq = prop.conclusion
            lhs = normaliser.normalise(substitute_vars(eq.lhs, rigid))
            rhs = normaliser.normalise(substitute_vars(eq.rhs, rigid))
        except RewriteLimitExceeded as e:
            logger.debug(f"Redundancy check gave up: {e}")
            return False
        return lhs == rhs

    def normalise(self, term: Term) -> Term:
        """Normal form of a term under the known laws (the term itself on budget exhaustion)."""
        try:
            return Normaliser([self._rules], self.config.max_rewrite_steps).normalise(term)
        except RewriteLimitExceeded:
            return term

    def is_reducible(self, term: Term) -> bool:
        """Whether a known law rewrites some subterm of ``term``."""
        return Normaliser([self._rules]).reducible(term)

    def clear(self) -> None:
        """Forget all known laws."""
        self._rules = RuleSet()
        self._known.clear()
        self._facts.clear()
        self._seen_pairs.clear()
        self._largest_fact = 0
