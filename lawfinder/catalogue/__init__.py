"""Constant catalogue: functions, predicates and selectors."""

from lawfinder.catalogue.constants import (
    TRUE,
    TRUE_TERM,
    Constant,
    DeclarationError,
    Function,
    PredicateInfo,
    SelectorInfo,
    Style,
    declare_function,
    is_op,
    twiddle,
)
from lawfinder.catalogue.constraints import (
    constraint_resolvable,
    inferred_types,
    specialize_constants,
    type_universe,
)
from lawfinder.catalogue.predicates import (
    PredicateDeclaration,
    declare_predicate,
    is_test_case_type,
)
from lawfinder.catalogue.prelude import arith, bools, funs, lists, prelude

__all__ = [
    # Constants
    "Constant",
    "DeclarationError",
    "Function",
    "PredicateInfo",
    "SelectorInfo",
    "Style",
    "TRUE",
    "TRUE_TERM",
    "declare_function",
    "is_op",
    "twiddle",
    # Predicates
    "PredicateDeclaration",
    "declare_predicate",
    "is_test_case_type",
    # Constraints
    "constraint_resolvable",
    "specialize_constants",
    "inferred_types",
    "type_universe",
    # Prelude
    "bools",
    "arith",
    "lists",
    "funs",
    "prelude",
]
