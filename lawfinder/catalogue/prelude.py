"""Standard signatures, usable as background theory."""

import operator

from lawfinder.catalogue.constants import Constant, declare_function
from lawfinder.universe.types import A, B, BOOL, C, INT, Type, arrow, list_of


def bools() -> list[Constant]:
    return [
        declare_function("||", arrow(BOOL, BOOL, BOOL), lambda x, y: x or y),
        declare_function("&&", arrow(BOOL, BOOL, BOOL), lambda x, y: x and y),
        declare_function("not", arrow(BOOL, BOOL), operator.not_),
        declare_function("True", BOOL, True),
        declare_function("False", BOOL, False),
    ]


def arith(ty: Type = INT) -> list[Constant]:
    """Zero, one and addition at a numeric type."""
    return [
        declare_function("0", ty, 0),
        declare_function("1", ty, 1),
        declare_function("+", arrow(ty, ty, ty), operator.add),
    ]


def lists() -> list[Constant]:
    return [
        declare_function("[]", list_of(A), []),
        declare_function(":", arrow(A, list_of(A), list_of(A)), lambda x, xs: [x, *xs]),
        declare_function("++", arrow(list_of(A), list_of(A), list_of(A)), operator.add),
    ]


def funs() -> list[Constant]:
    """Function composition and identity."""
    return [
        declare_function(".", arrow(arrow(B, C), arrow(A, B), A, C), lambda f, g, x: f(g(x))),
        declare_function("id", arrow(A, A), lambda x: x),
    ]


def prelude() -> list[list[Constant]]:
    """The standard signatures as consecutive background groups."""
    return [bools(), arith(), lists(), funs()]
