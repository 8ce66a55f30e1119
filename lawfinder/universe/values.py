"""Type-erased values.

Every value that moves through the engine is boxed together with its type
descriptor. Unboxing checks the descriptor, so a capability bound to one type
can never be handed a payload of another.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any

from lawfinder.universe.types import Type, arg_types, drop_args, pretty_type


class InternalError(Exception):
    """An engine invariant was broken. Never caught by the engine."""


class TypeMismatchError(InternalError):
    """A boxed value was unboxed or applied at the wrong type."""


@dataclass(frozen=True)
class Value:
    """A payload tagged with its type descriptor.

    Attributes:
        type: Semantic type of the payload
        payload: The underlying Python object
    """

    type: Type
    payload: Any


def wrap(type: Type, payload: Any) -> Value:
    return Value(type, payload)


def type_of(box: Value) -> Type:
    return box.type


def unwrap_as(box: Value, expected: Type) -> Any:
    """Return the payload of ``box`` if it has type ``expected``.

    Raises:
        TypeMismatchError: If the descriptors differ
    """
    if box.type != expected:
        raise TypeMismatchError(
            f"Expected a value of type {pretty_type(expected)}, "
            f"got {pretty_type(box.type)}"
        )
    return box.payload


def apply_value(fn: Value, args: list[Value]) -> Value:
    """Apply a boxed function to boxed arguments.

    Functions of type ``a1 -> ... -> an -> r`` are Python callables taking
    ``n`` positional arguments. Supplying fewer arguments yields a partial
    application.

    Raises:
        TypeMismatchError: If an argument has the wrong type or too many
            arguments are given
    """
    expected = arg_types(fn.type)
    if len(args) > len(expected):
        raise TypeMismatchError(
            f"Too many arguments ({len(args)}) for {pretty_type(fn.type)}"
        )
    payloads = [unwrap_as(arg, want) for arg, want in zip(args, expected)]
    remaining = drop_args(fn.type, len(args))
    if not args:
        return fn
    if len(args) == len(expected):
        return Value(remaining, fn.payload(*payloads))
    return Value(remaining, partial(fn.payload, *payloads))
