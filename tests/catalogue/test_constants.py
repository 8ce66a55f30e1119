"""Tests for constant declarations, predicates and specialisation."""

import random

import pytest

from lawfinder.capabilities import arbitrary_type, base_instances, names_type, ord_type
from lawfinder.catalogue import (
    TRUE,
    DeclarationError,
    Style,
    declare_function,
    declare_predicate,
    inferred_types,
    is_op,
    is_test_case_type,
    prelude,
    specialize_constants,
    twiddle,
    type_universe,
)
from lawfinder.claims.terms import App, Var
from lawfinder.universe.types import A, B, BOOL, CHAR, INT, STR, UNIT, TyCon, arrow, list_of


class TestNames:
    """Tests for operator detection and display rank."""

    def test_is_op(self):
        assert is_op("++")
        assert is_op(":")
        assert is_op(".")
        assert is_op("+")
        assert not is_op("reverse")
        assert not is_op("[]")
        assert not is_op("x'")
        assert not is_op('"abc"')

    def test_twiddle_swaps_unary_and_binary(self):
        assert twiddle(0) == 0
        assert twiddle(1) == 2
        assert twiddle(2) == 1
        assert twiddle(3) == 3

    def test_style(self):
        plus = declare_function("+", arrow(INT, INT, INT), lambda x, y: x + y)
        neg = declare_function("-", arrow(INT, INT), lambda x: -x)
        rev = declare_function("reverse", arrow(list_of(A), list_of(A)), lambda xs: xs[::-1])
        assert plus.style == Style.INFIX
        assert neg.style == Style.PREFIX
        assert rev.style == Style.CURRIED

    def test_pretty_arity(self):
        compose = declare_function(".", arrow(arrow(B, A), arrow(A, B), A, A), None)
        assert compose.arity == 3
        assert compose.pretty_arity == 2
        assert declare_function("f", arrow(INT, INT, INT, INT), None).pretty_arity == 3

    def test_binary_sorts_before_unary_of_same_name(self):
        binary = declare_function("f", arrow(INT, INT, INT), None)
        unary = declare_function("f", arrow(INT, INT), None)
        assert binary.sort_key < unary.sort_key


class TestDeclarations:
    """Tests for declare_function()."""

    def test_empty_name(self):
        with pytest.raises(DeclarationError):
            declare_function("", INT, 0)

    def test_size_at_least_one(self):
        with pytest.raises(DeclarationError):
            declare_function("zero", INT, 0, size=0)

    def test_constraint_variables_must_be_in_type(self):
        with pytest.raises(DeclarationError):
            declare_function("bad", arrow(A, A), lambda o, x: x, constraint=ord_type(B))

    def test_equality_by_name_and_type(self):
        first = declare_function("id", arrow(INT, INT), lambda x: x)
        second = declare_function("id", arrow(INT, INT), lambda y: y)
        other = declare_function("id", arrow(BOOL, BOOL), lambda x: x)
        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_signature_line(self):
        app = declare_function("++", arrow(list_of(A), list_of(A), list_of(A)), None)
        assert app.signature_line() == "(++) :: [a] -> [a] -> [a]"
        sort = declare_function("sort", arrow(list_of(A), list_of(A)), None, constraint=ord_type(A))
        assert sort.signature_line() == "sort :: Ord a => [a] -> [a]"


class TestPredicates:
    """Tests for predicate declarations and selectors."""

    def test_selectors(self):
        decl = declare_predicate("le", arrow(INT, INT, BOOL), lambda x, y: x <= y)
        assert [s.name for s in decl.selectors] == ["le_0", "le_1"]
        assert all(s.is_selector and s.size == 0 for s in decl.selectors)
        assert decl.predicate.is_predicate
        assert is_test_case_type(decl.test_case_type)
        assert decl.selectors[1].value((3, 7)) == 7

    def test_generated_test_cases_satisfy_predicate(self):
        decl = declare_predicate("le", arrow(INT, INT, BOOL), lambda x, y: x <= y)
        registry = decl.instances + base_instances()
        generator = registry.find(arbitrary_type(decl.test_case_type))
        rng = random.Random(0)
        for _ in range(50):
            x, y = generator.generate(rng, 10)
            assert x <= y
        assert registry.find(names_type(decl.test_case_type)).names == ("le_var",)

    def test_background_fact(self):
        decl = declare_predicate("sorted", arrow(list_of(INT), BOOL), lambda xs: xs == sorted(xs))
        fact = decl.background_fact()
        v = Var(decl.test_case_type, 0)
        assert fact.conclusion.lhs == App(decl.predicate, (App(decl.selectors[0], (v,)),))
        assert fact.conclusion.rhs == App(TRUE)

    def test_predicate_must_return_bool(self):
        with pytest.raises(DeclarationError):
            declare_predicate("len", arrow(list_of(INT), INT), len)

    def test_predicate_needs_arguments(self):
        with pytest.raises(DeclarationError):
            declare_predicate("yes", BOOL, True)

    def test_predicate_must_be_monomorphic(self):
        with pytest.raises(DeclarationError):
            declare_predicate("nonempty", arrow(list_of(A), BOOL), bool)


class TestSpecialisation:
    """Tests for specialize_constants() and friends."""

    def test_specialise_at_default_type(self):
        registry = base_instances()
        cons = declare_function(":", arrow(A, list_of(A), list_of(A)), None)
        (spec,) = specialize_constants([cons], registry, [INT])
        assert spec.type == arrow(INT, list_of(INT), list_of(INT))

    def test_specialise_at_several_types(self):
        registry = base_instances()
        ident = declare_function("id", arrow(A, A), lambda x: x)
        specs = specialize_constants([ident], registry, [INT, BOOL])
        assert [s.type for s in specs] == [arrow(INT, INT), arrow(BOOL, BOOL)]

    def test_unresolvable_constraint_dropped(self):
        registry = base_instances()
        widget = TyCon("Widget")
        sort = declare_function("sort", arrow(list_of(A), list_of(A)), None, constraint=ord_type(A))
        assert specialize_constants([sort], registry, [widget]) == []
        assert len(specialize_constants([sort], registry, [INT])) == 1

    def test_inferred_types(self):
        assert inferred_types(base_instances()) == [INT, BOOL, CHAR, STR, UNIT]

    def test_type_universe(self):
        plus = declare_function("+", arrow(INT, INT, INT), None)
        null = declare_function("null", arrow(list_of(INT), BOOL), None)
        universe = type_universe([plus, null])
        assert INT in universe
        assert list_of(INT) in universe
        assert arrow(INT, INT) in universe
        assert BOOL in universe


class TestPrelude:
    """Tests for the standard signatures."""

    def test_groups(self):
        groups = prelude()
        assert [len(g) for g in groups] == [5, 3, 3, 2]
        names = {c.name for g in groups for c in g}
        assert {"&&", "+", "++", ".", "id"} <= names

    def test_true_matches_prelude_true(self):
        true = next(c for c in prelude()[0] if c.name == "True")
        assert true == TRUE
