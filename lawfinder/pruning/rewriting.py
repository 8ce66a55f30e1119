"""Term rewriting with oriented and ordered rules."""

from dataclasses import dataclass, field
from typing import Iterator

from lawfinder.claims.terms import App, Term, Var, substitute_vars, term_type, term_vars
from lawfinder.pruning.ordering import kbo_greater


class RewriteLimitExceeded(Exception):
    """Raised when normalisation exceeds its step budget."""


@dataclass(frozen=True)
class Rule:
    """A rewrite rule.

    Oriented rules always apply. Unoriented rules (from equations like
    commutativity that the ordering cannot orient) apply only when the
    instance they produce is smaller than the term they rewrite. ``depth``
    counts the critical-pair steps the rule is derived by (0 for a law).
    """

    lhs: Term
    rhs: Term
    oriented: bool = True
    depth: int = field(default=0, compare=False)


def match_term(pattern: Term, term: Term, sub: dict[Var, Term] | None = None) -> dict[Var, Term] | None:
    """One-way matching of a pattern against a term."""
    result = dict(sub) if sub else {}
    stack = [(pattern, term)]
    while stack:
        pat, target = stack.pop()
        if isinstance(pat, Var):
            if term_type(target) != pat.type:
                return None
            bound = result.get(pat)
            if bound is None:
                result[pat] = target
            elif bound != target:
                return None
        elif (
            isinstance(target, App)
            and pat.head == target.head
            and len(pat.args) == len(target.args)
        ):
            stack.extend(zip(pat.args, target.args))
        else:
            return None
    return result


def rules_for(lhs: Term, rhs: Term, depth: int = 0) -> list[Rule]:
    """Rules usable for the equation ``lhs = rhs``."""
    if kbo_greater(lhs, rhs):
        return [Rule(lhs, rhs, depth=depth)]
    if kbo_greater(rhs, lhs):
        return [Rule(rhs, lhs, depth=depth)]
    rules = []
    for left, right in ((lhs, rhs), (rhs, lhs)):
        if isinstance(left, Var):
            continue
        if not set(term_vars(right)) <= set(term_vars(left)):
            continue
        rules.append(Rule(left, right, oriented=False, depth=depth))
    return rules


class RuleSet:
    """Rules indexed by the head and argument count of their left-hand side."""

    def __init__(self) -> None:
        self._rules: dict[tuple, list[Rule]] = {}
        self._all: list[Rule] = []

    def __len__(self) -> int:
        return len(self._all)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._all))

    def add(self, rule: Rule) -> None:
        key = (rule.lhs.head, len(rule.lhs.args))
        self._rules.setdefault(key, []).append(rule)
        self._all.append(rule)

    def candidates(self, term: App) -> list[Rule]:
        return self._rules.get((term.head, len(term.args)), [])


class Normaliser:
    """Innermost normalisation against one or more rule sets.

    Args:
        rule_sets: Rule sets consulted in order
        max_steps: Budget of rewrite steps, or None for no limit
    """

    def __init__(self, rule_sets: list[RuleSet], max_steps: int | None = None):
        self.rule_sets = rule_sets
        self.max_steps = max_steps
        self.steps = 0

    def step_root(self, term: App) -> Term | None:
        """Rewrite ``term`` once at its root, or return None."""
        for rules in self.rule_sets:
            for rule in rules.candidates(term):
                sub = match_term(rule.lhs, term)
                if sub is None:
                    continue
                result = substitute_vars(rule.rhs, sub)
                if rule.oriented or kbo_greater(term, result):
                    return result
        return None

    def normalise(self, term: Term) -> Term:
        """Normal form of ``term``.

        Raises:
            RewriteLimitExceeded: If the step budget runs out
        """
        if isinstance(term, Var):
            return term
        if term.args:
            term = App(term.head, tuple(self.normalise(a) for a in term.args))
        result = self.step_root(term)
        if result is None:
            return term
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise RewriteLimitExceeded(f"More than {self.max_steps} rewrite steps")
        return self.normalise(result)

    def reducible(self, term: Term) -> bool:
        """Whether any subterm of ``term`` can be rewritten."""
        if isinstance(term, Var):
            return False
        if any(self.reducible(a) for a in term.args):
            return True
        return self.step_root(term) is not None
