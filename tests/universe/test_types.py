"""Tests for type descriptors, unification and matching."""

import pytest

from lawfinder.universe.types import (
    A,
    B,
    BOOL,
    INT,
    TyCon,
    TypeVar,
    UnificationError,
    arg_types,
    arrow,
    default_to,
    drop_args,
    is_function,
    is_ground,
    list_of,
    match,
    pretty_type,
    rename_apart,
    result_type,
    skolemize,
    substitute,
    tuple_of,
    type_arity,
    type_vars,
    unify,
)


class TestBuilders:
    """Tests for building and inspecting types."""

    def test_arrow_nests_right(self):
        t = arrow(INT, list_of(INT), list_of(INT))
        assert t == TyCon("->", (INT, TyCon("->", (list_of(INT), list_of(INT)))))

    def test_arrow_needs_a_type(self):
        with pytest.raises(ValueError):
            arrow()

    def test_arity_and_result(self):
        t = arrow(INT, BOOL, list_of(INT))
        assert is_function(t)
        assert type_arity(t) == 2
        assert arg_types(t) == [INT, BOOL]
        assert result_type(t) == list_of(INT)
        assert not is_function(INT)
        assert type_arity(INT) == 0

    def test_drop_args(self):
        t = arrow(INT, BOOL, INT)
        assert drop_args(t, 0) == t
        assert drop_args(t, 1) == arrow(BOOL, INT)
        assert drop_args(t, 2) == INT
        with pytest.raises(ValueError):
            drop_args(t, 3)

    def test_type_vars_in_order(self):
        t = arrow(arrow(B, A), list_of(A), B)
        assert type_vars(t) == ["b", "a"]
        assert not is_ground(t)
        assert is_ground(list_of(INT))


class TestUnification:
    """Tests for unify() and match()."""

    def test_unify_binds_variables(self):
        sub = unify(arrow(A, list_of(A)), arrow(INT, B))
        assert substitute(A, sub) == INT
        assert substitute(B, sub) == list_of(INT)

    def test_unify_occurs_check(self):
        with pytest.raises(UnificationError):
            unify(A, list_of(A))

    def test_unify_constructor_clash(self):
        with pytest.raises(UnificationError):
            unify(list_of(INT), tuple_of(INT, INT))

    def test_match_is_one_way(self):
        assert match(list_of(A), list_of(INT)) == {"a": INT}
        assert match(list_of(INT), list_of(A)) is None

    def test_match_requires_consistent_bindings(self):
        assert match(tuple_of(A, A), tuple_of(INT, INT)) == {"a": INT}
        assert match(tuple_of(A, A), tuple_of(INT, BOOL)) is None

    def test_skolemized_variables_are_rigid(self):
        rigid = skolemize(list_of(A))
        assert is_ground(rigid)
        assert match(list_of(A), rigid) is not None
        assert match(list_of(INT), rigid) is None

    def test_rename_apart(self):
        renamed = rename_apart(arrow(A, B), "1")
        assert type_vars(renamed) == ["a#1", "b#1"]

    def test_default_to(self):
        assert default_to(INT, arrow(A, list_of(B))) == arrow(INT, list_of(INT))


class TestPrettyType:
    """Tests for type rendering."""

    def test_function_arguments_are_parenthesised(self):
        assert pretty_type(arrow(arrow(A, B), list_of(A), list_of(B))) == "(a -> b) -> [a] -> [b]"

    def test_tuples_and_constructors(self):
        assert pretty_type(tuple_of(INT, BOOL)) == "(Int, Bool)"
        assert pretty_type(TyCon("Maybe", (list_of(INT),))) == "Maybe [Int]"
        assert pretty_type(TyCon("Maybe", (TyCon("Maybe", (INT,)),))) == "Maybe (Maybe Int)"
        assert pretty_type(TypeVar("a")) == "a"
