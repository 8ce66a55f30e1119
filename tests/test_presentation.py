"""Tests for law presentation."""

from lawfinder.capabilities import base_instances
from lawfinder.catalogue import TRUE_TERM, declare_function, declare_predicate
from lawfinder.claims import App, Equation, Property, Var, unit_property
from lawfinder.presentation import (
    associativity_display,
    conditionalise,
    equation_to_string,
    name_vars,
    pretty_property,
    term_to_string,
    type_annotation,
)
from lawfinder.pruning import RewritingPruner
from lawfinder.universe.types import BOOL, INT, arrow, list_of

INTS = list_of(INT)
NIL = declare_function("[]", INTS, [])
CONS = declare_function(":", arrow(INT, INTS, INTS), None)
APPEND = declare_function("++", arrow(INTS, INTS, INTS), None)
REV = declare_function("reverse", arrow(INTS, INTS), None)
PLUS = declare_function("+", arrow(INT, INT, INT), None)
NEG = declare_function("-", arrow(INT, INT), None)
COMPOSE = declare_function(".", arrow(arrow(INT, INT), arrow(INT, INT), INT, INT), None)
INSERT = declare_function("insert", arrow(INT, INTS, INTS), None)
DELETE = declare_function("delete", arrow(INT, INTS, INTS), None)

XS, YS = Var(INTS, 0), Var(INTS, 1)
X, Y, Z = Var(INT, 0), Var(INT, 1), Var(INT, 2)
NAMES = {XS: "xs", YS: "ys", X: "x", Y: "y", Z: "z"}


def app(f, *args):
    return App(f, tuple(args))


class TestTermToString:
    """Tests for rendering terms."""

    def test_curried(self):
        assert term_to_string(app(REV, app(APPEND, XS, YS)), NAMES) == "reverse (xs ++ ys)"
        assert term_to_string(app(INSERT, X, XS), NAMES) == "insert x xs"

    def test_infix(self):
        assert term_to_string(app(CONS, X, app(NIL)), NAMES) == "x : []"
        assert term_to_string(app(APPEND, app(REV, XS), YS), NAMES) == "(reverse xs) ++ ys"

    def test_operator_sections(self):
        assert term_to_string(app(PLUS), NAMES) == "(+)"
        assert term_to_string(app(PLUS, X), NAMES) == "(x +)"
        assert term_to_string(app(NEG, X), NAMES) == "(-) x"

    def test_operator_with_extra_arguments(self):
        f, g = Var(arrow(INT, INT), 0), Var(arrow(INT, INT), 1)
        names = {f: "f", g: "g", X: "x"}
        assert term_to_string(app(COMPOSE, f, g, X), names) == "(f . g) x"

    def test_true_side_hidden(self):
        sorted_ = declare_function("sorted", arrow(INTS, BOOL), None)
        eq = Equation(app(sorted_, XS), TRUE_TERM)
        assert equation_to_string(eq, NAMES) == "sorted xs"


class TestConditionalise:
    """Tests for turning selector projections into hypotheses."""

    def test_selector_becomes_guarded_variable(self):
        decl = declare_predicate("sorted", arrow(INTS, BOOL), None)
        v = Var(decl.test_case_type, 0)
        sel = app(decl.selectors[0], v)
        prop = unit_property(Equation(app(DELETE, X, app(INSERT, X, sel)), sel))
        shown = conditionalise(prop)
        assert shown.is_conditional
        (hyp,) = shown.hypotheses
        assert hyp.rhs == TRUE_TERM
        assert hyp.lhs.head == decl.predicate
        (fresh,) = hyp.lhs.args
        assert fresh == Var(INTS, 0)
        assert shown.conclusion == Equation(app(DELETE, X, app(INSERT, X, fresh)), fresh)

    def test_fresh_variables_avoid_existing_ones(self):
        decl = declare_predicate("sorted", arrow(INTS, BOOL), None)
        v = Var(decl.test_case_type, 0)
        sel = app(decl.selectors[0], v)
        prop = unit_property(Equation(app(APPEND, XS, sel), app(APPEND, sel, XS)))
        (hyp,) = conditionalise(prop).hypotheses
        assert hyp.lhs.args == (Var(INTS, 1),)

    def test_plain_law_unchanged(self):
        prop = unit_property(Equation(app(REV, app(REV, XS)), XS))
        assert conditionalise(prop) is prop


class TestAssociativityDisplay:
    """Tests for the associativity display heuristic."""

    def test_left_commuted_shown_as_associativity(self):
        pruner = RewritingPruner()
        pruner.record_fact(unit_property(Equation(app(PLUS, X, Y), app(PLUS, Y, X))))
        prop = unit_property(Equation(app(PLUS, X, app(PLUS, Y, Z)), app(PLUS, Y, app(PLUS, X, Z))))
        shown = associativity_display(prop, pruner.normalise)
        assert shown.conclusion == Equation(app(PLUS, app(PLUS, X, Y), Z), app(PLUS, X, app(PLUS, Y, Z)))

    def test_needs_known_commutativity(self):
        pruner = RewritingPruner()
        prop = unit_property(Equation(app(PLUS, X, app(PLUS, Y, Z)), app(PLUS, Y, app(PLUS, X, Z))))
        assert associativity_display(prop, pruner.normalise) is prop


class TestNaming:
    """Tests for variable names and annotations."""

    def test_names_from_capabilities(self):
        prop = unit_property(Equation(app(INSERT, X, XS), app(INSERT, Y, YS)))
        names = name_vars(prop, base_instances())
        assert names == {X: "x", Y: "y", XS: "xs", YS: "ys"}

    def test_names_are_unique(self):
        other = Var(list_of(BOOL), 0)
        prop = unit_property(Equation(app(REV, XS), XS))
        names = name_vars(Property((Equation(other, other),), prop.conclusion), base_instances())
        assert len(set(names.values())) == 2

    def test_type_annotation_for_bare_variables(self):
        prop = unit_property(Equation(X, Y))
        assert type_annotation(prop) == "Int"
        assert type_annotation(unit_property(Equation(app(REV, XS), XS))) is None

    def test_pretty_property(self):
        sorted_ = declare_function("sorted", arrow(INTS, BOOL), None)
        prop = Property(
            (Equation(app(sorted_, XS), TRUE_TERM),),
            Equation(app(sorted_, app(INSERT, X, XS)), TRUE_TERM),
        )
        assert pretty_property(prop, NAMES) == "sorted xs => sorted (insert x xs)"
