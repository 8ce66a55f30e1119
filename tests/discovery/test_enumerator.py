"""Tests for term enumeration."""

import pytest

from lawfinder.catalogue import declare_function, declare_predicate
from lawfinder.claims import App, Var, subterms, term_measure, term_size, term_type
from lawfinder.discovery import Enumerator
from lawfinder.universe.types import BOOL, INT, arg_types, arrow, list_of
from lawfinder.universe.values import InternalError

INTS = list_of(INT)
NIL = declare_function("[]", INTS, [])
APPEND = declare_function("++", arrow(INTS, INTS, INTS), lambda x, y: x + y)
REV = declare_function("reverse", arrow(INTS, INTS), lambda xs: xs[::-1])
COMPOSE = declare_function(
    ".", arrow(arrow(INT, INT), arrow(INT, INT), INT, INT), lambda f, g, x: f(g(x))
)
NEG = declare_function("negate", arrow(INT, INT), lambda x: -x)


def accept_all(enumerator):
    terms = []
    for term in enumerator.terms():
        enumerator.accept(term)
        terms.append(term)
    return terms


class TestAtoms:
    """Tests for the atoms an enumeration starts from."""

    def test_variables_per_argument_type(self):
        enumerator = Enumerator([NIL, APPEND, REV], max_size=3, max_vars=2)
        assert enumerator.variable_types() == [INTS]
        assert Var(INTS, 0) in enumerator.atoms()
        assert Var(INTS, 1) in enumerator.atoms()
        assert Var(INTS, 2) not in enumerator.atoms()
        assert App(NIL) in enumerator.atoms()

    def test_functions_as_atoms_only_when_consumed(self):
        enumerator = Enumerator([COMPOSE, NEG], max_size=3)
        assert App(NEG) in enumerator.atoms()
        assert App(COMPOSE) not in enumerator.atoms()


class TestEnumeration:
    """Tests for terms()."""

    def test_size_order(self):
        terms = accept_all(Enumerator([NIL, APPEND, REV], max_size=4, max_vars=2))
        measures = [term_measure(t) for t in terms]
        assert measures == sorted(measures)
        assert max(term_size(t) for t in terms) == 4

    def test_only_accepted_terms_used_as_arguments(self):
        enumerator = Enumerator([NIL, REV], max_size=3, max_vars=1)
        produced = []
        for term in enumerator.terms():
            produced.append(term)
            if term != App(REV, (Var(INTS, 0),)):
                enumerator.accept(term)
        assert App(REV, (App(REV, (Var(INTS, 0),)),)) not in produced
        assert App(REV, (App(REV, (App(NIL),)),)) in produced
        assert enumerator.representative_count == len(produced) - 1

    def test_partial_application_at_consumed_type(self):
        terms = accept_all(Enumerator([COMPOSE, NEG], max_size=4, max_vars=1))
        f = Var(arrow(INT, INT), 0)
        assert App(COMPOSE, (App(NEG), App(NEG))) in terms
        assert App(COMPOSE, (f, App(NEG))) in terms
        assert App(COMPOSE, (App(NEG), f, Var(INT, 0))) in terms

    def test_allowed_filter(self):
        enumerator = Enumerator(
            [NIL, APPEND, REV], max_size=3, allowed=lambda t: not (isinstance(t, App) and t.head == REV)
        )
        assert all(not (isinstance(t, App) and t.head == REV) for t in accept_all(enumerator))

    def test_enumeration_is_well_typed(self):
        for term in accept_all(Enumerator([NIL, APPEND, REV, COMPOSE, NEG], max_size=5, max_vars=2)):
            for sub in subterms(term):
                if isinstance(sub, App):
                    expected = arg_types(sub.head.type)
                    assert [term_type(a) for a in sub.args] == expected[: len(sub.args)]


class TestSelectors:
    """Tests for predicate selectors in enumeration."""

    def test_selectors_never_bare(self):
        decl = declare_predicate("le", arrow(INT, INT, BOOL), lambda x, y: x <= y)
        constants = [NEG, decl.predicate, *decl.selectors]
        enumerator = Enumerator(constants, max_size=4, max_vars=2)
        for term in accept_all(enumerator):
            for sub in subterms(term):
                if isinstance(sub, App) and sub.head.is_selector:
                    (arg,) = sub.args
                    assert isinstance(arg, Var)
                    assert arg.type == decl.test_case_type

    def test_projections_are_atoms(self):
        decl = declare_predicate("le", arrow(INT, INT, BOOL), lambda x, y: x <= y)
        enumerator = Enumerator([decl.predicate, *decl.selectors], max_size=3, max_vars=1)
        v = Var(decl.test_case_type, 0)
        terms = accept_all(enumerator)
        projection = App(decl.selectors[0], (v,))
        assert projection in terms
        assert term_size(projection) == 1
        assert App(decl.predicate, (projection, App(decl.selectors[1], (v,)))) in terms
        assert Var(decl.test_case_type, 0) not in terms

    def test_bare_selector_is_rejected(self):
        decl = declare_predicate("le", arrow(INT, INT, BOOL), lambda x, y: x <= y)
        with pytest.raises(InternalError):
            Enumerator._check(App(decl.selectors[0]))
