"""Critical pairs between rewrite rules.

A critical pair arises where the left-hand side of one rule unifies with a
non-variable subterm of another's. The overlapped term can be rewritten in
two ways, and the two results are equal consequences of the rules. Adding
the pairs that do not already rewrite to a common form makes the rule set
decide more equations (unfailing Knuth-Bendix completion, cut off by depth
and term size).
"""

from typing import Callable, Iterator

from lawfinder.claims.terms import App, Term, Var, substitute_vars, term_type, term_vars
from lawfinder.pruning.ordering import kbo_greater
from lawfinder.pruning.rewriting import Rule

Substitution = dict[Var, Term]


def _walk(term: Term, sub: Substitution) -> Term:
    while isinstance(term, Var) and term in sub:
        term = sub[term]
    return term


def _occurs(var: Var, term: Term, sub: Substitution) -> bool:
    term = _walk(term, sub)
    if isinstance(term, Var):
        return term == var
    return any(_occurs(var, arg, sub) for arg in term.args)


def resolve(term: Term, sub: Substitution) -> Term:
    """Apply a triangular substitution all the way down."""
    term = _walk(term, sub)
    if isinstance(term, Var) or not term.args:
        return term
    return App(term.head, tuple(resolve(arg, sub) for arg in term.args))


def unify(s: Term, t: Term) -> Substitution | None:
    """Most general unifier of two terms, or None.

    Variables only unify with terms of their own type.
    """
    sub: Substitution = {}
    stack = [(s, t)]
    while stack:
        a, b = stack.pop()
        a, b = _walk(a, sub), _walk(b, sub)
        if a == b:
            continue
        if isinstance(b, Var) and not isinstance(a, Var):
            a, b = b, a
        if isinstance(a, Var):
            if term_type(b) != a.type or _occurs(a, b, sub):
                return None
            sub[a] = b
        elif a.head == b.head and len(a.args) == len(b.args):
            stack.extend(zip(a.args, b.args))
        else:
            return None
    return sub


def _contexts(term: Term) -> Iterator[tuple[App, Callable[[Term], Term]]]:
    """Non-variable subterms, outermost first, each with a function that puts a replacement in its place."""
    if isinstance(term, Var):
        return
    yield term, lambda new: new
    for i, arg in enumerate(term.args):
        for sub, plug in _contexts(arg):
            yield sub, (
                lambda new, i=i, plug=plug: App(
                    term.head, term.args[:i] + (plug(new),) + term.args[i + 1:]
                )
            )


def rename_apart(rule: Rule, other: Rule) -> Rule:
    """A copy of ``rule`` sharing no variables with ``other``."""
    used = term_vars(other.lhs) + term_vars(other.rhs)
    offset = 1 + max((v.index for v in used), default=-1)
    mapping = {v: Var(v.type, v.index + offset) for v in term_vars(rule.lhs) + term_vars(rule.rhs)}
    return Rule(
        substitute_vars(rule.lhs, mapping),
        substitute_vars(rule.rhs, mapping),
        rule.oriented,
        rule.depth,
    )


def _usable(rule: Rule, lhs: Term, rhs: Term) -> bool:
    """Whether an instance of ``rule`` can rewrite ``lhs`` to ``rhs``."""
    return rule.oriented or not kbo_greater(rhs, lhs)


def critical_pairs(outer: Rule, inner: Rule) -> list[tuple[Term, Term]]:
    """Critical pairs from rewriting inside ``outer.lhs`` with ``inner``.

    Args:
        outer: Rule applied at the root of the overlapped term
        inner: Rule applied at a non-variable position of ``outer.lhs``

    Returns:
        Non-trivial (left, right) pairs, left being the root rewrite
    """
    inner = rename_apart(inner, outer)
    pairs = []
    for sub, plug in _contexts(outer.lhs):
        sigma = unify(sub, inner.lhs)
        if sigma is None:
            continue
        top = resolve(outer.lhs, sigma)
        left = resolve(outer.rhs, sigma)
        if not _usable(outer, top, left):
            continue
        if not _usable(inner, resolve(inner.lhs, sigma), resolve(inner.rhs, sigma)):
            continue
        right = resolve(plug(inner.rhs), sigma)
        if left != right:
            pairs.append((left, right))
    return pairs


def canonical_pair(lhs: Term, rhs: Term) -> tuple[Term, Term]:
    """Renumber variables per type in order of first occurrence."""
    mapping: Substitution = {}
    counts: dict = {}
    for v in term_vars(lhs) + term_vars(rhs):
        if v not in mapping:
            mapping[v] = Var(v.type, counts.get(v.type, 0))
            counts[v.type] = counts.get(v.type, 0) + 1
    return substitute_vars(lhs, mapping), substitute_vars(rhs, mapping)
