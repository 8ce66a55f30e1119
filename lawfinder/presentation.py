"""Presentation of discovered laws.

These are pure display transforms: none of them affects which laws are
accepted.
"""

from typing import Callable

from lawfinder.capabilities import Instances, Names, names_type
from lawfinder.catalogue.constants import TRUE_TERM, Constant, PredicateInfo, SelectorInfo, Style
from lawfinder.claims.schema import Equation, Property
from lawfinder.claims.terms import App, Term, Var, subterms, term_type
from lawfinder.pruning.ordering import skolem
from lawfinder.universe.types import pretty_type, type_key

_FALLBACK_NAMES = Names(("x",))


def _replace(term: Term, mapping: dict[Term, Term]) -> Term:
    if term in mapping:
        return mapping[term]
    if isinstance(term, Var) or not term.args:
        return term
    return App(term.head, tuple(_replace(a, mapping) for a in term.args))


def _replace_prop(prop: Property, mapping: dict[Term, Term]) -> Property:
    hyps = tuple(Equation(_replace(h.lhs, mapping), _replace(h.rhs, mapping)) for h in prop.hypotheses)
    concl = Equation(_replace(prop.conclusion.lhs, mapping), _replace(prop.conclusion.rhs, mapping))
    return Property(hyps, concl)


def conditionalise(prop: Property) -> Property:
    """Turn selector projections into variables guarded by a hypothesis.

    ``delete x (insert x (sorted_0 v)) = sorted_0 v`` becomes
    ``sorted xs = True => delete x (insert x xs) = xs``.
    """
    projections: dict[Var, Constant] = {}
    next_index: dict = {}
    for term in prop.terms():
        for sub in subterms(term):
            if isinstance(sub, Var):
                next_index[sub.type] = max(next_index.get(sub.type, 0), sub.index + 1)
            elif isinstance(sub.head.classification, SelectorInfo) and sub.args:
                (arg,) = sub.args
                if isinstance(arg, Var) and arg not in projections:
                    projections[arg] = sub.head.classification.predicate
    if not projections:
        return prop

    mapping: dict[Term, Term] = {}
    hyps = list(prop.hypotheses)
    for var, predicate in projections.items():
        info: PredicateInfo = predicate.classification
        fresh = []
        for selector in info.selectors:
            ty = term_type(App(selector, (var,)))
            index = next_index.get(ty, 0)
            next_index[ty] = index + 1
            x = Var(ty, index)
            mapping[App(selector, (var,))] = x
            fresh.append(x)
        hyps.append(Equation(App(predicate, tuple(fresh)), info.true_term))

    return _replace_prop(Property(tuple(hyps), prop.conclusion), mapping)


def associativity_display(prop: Property, normalise: Callable[[Term], Term]) -> Property:
    """Show ``f x (f y z) = f y (f x z)`` as associativity when ``f`` commutes.

    Args:
        prop: Law to display
        normalise: Normal form under the known laws, used to test whether
            ``f a b`` and ``f b a`` are already known to be equal

    Returns:
        The law to display (``prop`` itself unless the shape matches)
    """
    lhs, rhs = prop.conclusion.lhs, prop.conclusion.rhs
    shape = _left_commuted(lhs)
    other = _left_commuted(rhs)
    if shape is None or other is None:
        return prop
    f, x, y, z = shape
    g, y2, x2, z2 = other
    if f != g or (x, y, z) != (x2, y2, z2) or len({x, y, z}) != 3:
        return prop

    ty = term_type(x)
    a, b = App(skolem(Var(ty, 1000))), App(skolem(Var(ty, 1001)))
    if normalise(App(f, (a, b))) != normalise(App(f, (b, a))):
        return prop

    assoc = Equation(App(f, (App(f, (x, y)), z)), App(f, (x, App(f, (y, z)))))
    return Property(prop.hypotheses, assoc)


def _left_commuted(term: Term):
    # Matches f x (f y z) with variables x, y, z
    if not (isinstance(term, App) and len(term.args) == 2 and term.head.arity == 2):
        return None
    x, inner = term.args
    if not (isinstance(inner, App) and inner.head == term.head and len(inner.args) == 2):
        return None
    y, z = inner.args
    if not all(isinstance(v, Var) for v in (x, y, z)):
        return None
    if not (term_type(x) == term_type(y) == term_type(z) == term_type(term)):
        return None
    return term.head, x, y, z


def name_vars(prop: Property, registry: Instances) -> dict[Var, str]:
    """Assign display names to the variables of a law.

    Names come from each type's ``Names`` capability; a name already taken
    by another variable is skipped.
    """
    used: set[str] = set()
    names: dict[Var, str] = {}
    for var in sorted(prop.variables(), key=lambda v: (type_key(v.type), v.index)):
        supply = registry.find(names_type(var.type)) or _FALLBACK_NAMES
        for candidate in supply.supply():
            if candidate not in used:
                used.add(candidate)
                names[var] = candidate
                break
    return names


def type_annotation(prop: Property) -> str | None:
    """Type of a law whose conclusion equates two bare variables."""
    eq = prop.conclusion
    if isinstance(eq.lhs, Var) and isinstance(eq.rhs, Var):
        return pretty_type(eq.lhs.type)
    return None


def _atomic(term: Term) -> bool:
    return isinstance(term, Var) or not term.args


def _arg_text(term: Term, names: dict[Var, str]) -> str:
    text = term_to_string(term, names)
    return text if _atomic(term) else f"({text})"


def term_to_string(term: Term, names: dict[Var, str]) -> str:
    """Render a term, writing operators infix."""
    if isinstance(term, Var):
        return names.get(term, f"v{term.index}")
    head = term.head
    args = [_arg_text(a, names) for a in term.args]
    if head.style == Style.CURRIED:
        return " ".join([head.name, *args])
    op = f"({head.name})"
    if head.style == Style.PREFIX or not args:
        return " ".join([op, *args])
    if len(args) == 1:
        return f"({args[0]} {head.name})"
    applied = f"{args[0]} {head.name} {args[1]}"
    if len(args) == 2:
        return applied
    return " ".join([f"({applied})", *args[2:]])


def equation_to_string(eq: Equation, names: dict[Var, str]) -> str:
    """Render an equation, dropping an ``= True`` side."""
    if eq.rhs == TRUE_TERM:
        return term_to_string(eq.lhs, names)
    if eq.lhs == TRUE_TERM:
        return term_to_string(eq.rhs, names)
    return f"{term_to_string(eq.lhs, names)} = {term_to_string(eq.rhs, names)}"


def pretty_property(prop: Property, names: dict[Var, str]) -> str:
    """Render a law as ``h1 & h2 => lhs = rhs``."""
    conclusion = equation_to_string(prop.conclusion, names)
    if not prop.hypotheses:
        return conclusion
    hyps = " & ".join(equation_to_string(h, names) for h in prop.hypotheses)
    return f"{hyps} => {conclusion}"
