from lawfinder.universe.types import (
    A,
    B,
    BOOL,
    C,
    CHAR,
    D,
    E,
    INT,
    STR,
    UNIT,
    TyCon,
    Type,
    TypeVar,
    UnificationError,
    arg_types,
    arrow,
    default_to,
    dict_of,
    list_of,
    optional_of,
    pretty_type,
    result_type,
    skolemize,
    tuple_of,
    type_arity,
    unify,
)
from lawfinder.universe.values import (
    InternalError,
    TypeMismatchError,
    Value,
    apply_value,
    type_of,
    unwrap_as,
    wrap,
)

__all__ = [
    # Types
    "Type",
    "TypeVar",
    "TyCon",
    "UnificationError",
    "INT",
    "BOOL",
    "CHAR",
    "STR",
    "UNIT",
    "A",
    "B",
    "C",
    "D",
    "E",
    "arrow",
    "list_of",
    "tuple_of",
    "optional_of",
    "dict_of",
    "arg_types",
    "result_type",
    "type_arity",
    "unify",
    "skolemize",
    "default_to",
    "pretty_type",
    # Values
    "Value",
    "InternalError",
    "TypeMismatchError",
    "wrap",
    "type_of",
    "unwrap_as",
    "apply_value",
]
