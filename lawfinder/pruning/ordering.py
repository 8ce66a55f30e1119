"""Knuth-Bendix ordering on terms.

Every constant and variable has weight 1. Ties in weight are broken by
constant precedence, which follows the constant order (skolem constants
rank lowest), and then by the arguments from left to right. On ground terms
the ordering is total.
"""

from collections import Counter
from dataclasses import dataclass

from lawfinder.catalogue.constants import Constant
from lawfinder.claims.terms import Term, Var, subterms
from lawfinder.universe.types import type_key


@dataclass(frozen=True)
class SkolemInfo:
    """Classification of a rigid constant standing in for a variable."""

    var: Var


def skolem(var: Var) -> Constant:
    """A fresh rigid constant for ``var``."""
    return Constant(f"?{var.index}", var.type, None, size=1, classification=SkolemInfo(var))


def is_skolem(con: Constant) -> bool:
    return isinstance(con.classification, SkolemInfo)


def precedence(con: Constant) -> tuple:
    if is_skolem(con):
        var = con.classification.var
        return (0, type_key(var.type), var.index)
    return (1, con.sort_key)


def weight(term: Term) -> int:
    if isinstance(term, Var):
        return 1
    return 1 + sum(weight(a) for a in term.args)


def _var_counts(term: Term) -> Counter:
    return Counter(t for t in subterms(term) if isinstance(t, Var))


def kbo_greater(s: Term, t: Term) -> bool:
    """Whether ``s`` is strictly greater than ``t`` in the ordering."""
    if s == t or isinstance(s, Var):
        return False
    if isinstance(t, Var):
        return any(sub == t for sub in subterms(s))

    s_vars, t_vars = _var_counts(s), _var_counts(t)
    if any(s_vars[v] < n for v, n in t_vars.items()):
        return False

    ws, wt = weight(s), weight(t)
    if ws != wt:
        return ws > wt
    ps = (precedence(s.head), len(s.args))
    pt = (precedence(t.head), len(t.args))
    if ps != pt:
        return ps > pt
    for a, b in zip(s.args, t.args):
        if a != b:
            return kbo_greater(a, b)
    return False


def is_ground_term(term: Term) -> bool:
    return not any(isinstance(sub, Var) for sub in subterms(term))
