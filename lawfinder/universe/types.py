"""Semantic type descriptors.

A type is either a variable (``a``, ``b``...) or a constructor applied to
argument types. Function types use the ``->`` constructor and nest to the
right, so ``Int -> [Int] -> [Int]`` is ``->(Int, ->([Int], [Int]))``.

Capabilities are described with the same representation: ``Ord [a]`` is the
constructor ``Ord`` applied to ``[a]``.
"""

from dataclasses import dataclass
from typing import Union

ARROW = "->"
LIST = "[]"
TUPLE = "(,)"
OPTIONAL = "Maybe"
DICT = "Dict"


@dataclass(frozen=True)
class TypeVar:
    """A type variable."""

    name: str

    def __repr__(self) -> str:
        return f"TypeVar({self.name!r})"


@dataclass(frozen=True)
class TyCon:
    """A type constructor applied to zero or more argument types."""

    name: str
    args: tuple["Type", ...] = ()

    def __repr__(self) -> str:
        if not self.args:
            return f"TyCon({self.name!r})"
        return f"TyCon({self.name!r}, {self.args!r})"


Type = Union[TypeVar, TyCon]
Substitution = dict[str, Type]

# Base types
INT = TyCon("Int")
BOOL = TyCon("Bool")
CHAR = TyCon("Char")
STR = TyCon("String")
UNIT = TyCon(TUPLE)

# Type variables for polymorphic declarations
A = TypeVar("a")
B = TypeVar("b")
C = TypeVar("c")
D = TypeVar("d")
E = TypeVar("e")


class UnificationError(Exception):
    """Raised when two types cannot be unified."""


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def arrow(*types: Type) -> Type:
    """Build the curried function type ``t1 -> t2 -> ... -> tn``."""
    if not types:
        raise ValueError("arrow() needs at least one type")
    result = types[-1]
    for arg in reversed(types[:-1]):
        result = TyCon(ARROW, (arg, result))
    return result


def list_of(elem: Type) -> TyCon:
    return TyCon(LIST, (elem,))


def tuple_of(*elems: Type) -> TyCon:
    return TyCon(TUPLE, tuple(elems))


def optional_of(elem: Type) -> TyCon:
    return TyCon(OPTIONAL, (elem,))


def dict_of(key: Type, value: Type) -> TyCon:
    return TyCon(DICT, (key, value))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def is_function(t: Type) -> bool:
    return isinstance(t, TyCon) and t.name == ARROW


def arg_types(t: Type) -> list[Type]:
    """Argument types of a (possibly curried) function type."""
    args = []
    while is_function(t):
        args.append(t.args[0])
        t = t.args[1]
    return args


def result_type(t: Type) -> Type:
    """Final result type after all arguments are supplied."""
    while is_function(t):
        t = t.args[1]
    return t


def type_arity(t: Type) -> int:
    return len(arg_types(t))


def drop_args(t: Type, n: int) -> Type:
    """The type left after applying a function of type ``t`` to ``n`` arguments."""
    for _ in range(n):
        if not is_function(t):
            raise ValueError(f"Cannot apply {pretty_type(t)} to {n} arguments")
        t = t.args[1]
    return t


def type_vars(t: Type) -> list[str]:
    """Names of the variables in ``t``, in order of first occurrence."""
    found: list[str] = []

    def walk(node: Type) -> None:
        if isinstance(node, TypeVar):
            if node.name not in found:
                found.append(node.name)
        else:
            for arg in node.args:
                walk(arg)

    walk(t)
    return found


def is_ground(t: Type) -> bool:
    return not type_vars(t)


def type_key(t: Type) -> tuple:
    """Total order key over types."""
    if isinstance(t, TypeVar):
        return (0, t.name)
    return (1, t.name, tuple(type_key(a) for a in t.args))


# ---------------------------------------------------------------------------
# Substitution and unification
# ---------------------------------------------------------------------------


def substitute(t: Type, sub: Substitution) -> Type:
    """Apply a substitution, following chains of bound variables."""
    if isinstance(t, TypeVar):
        if t.name in sub:
            return substitute(sub[t.name], sub)
        return t
    if not t.args:
        return t
    return TyCon(t.name, tuple(substitute(a, sub) for a in t.args))


def _occurs(name: str, t: Type, sub: Substitution) -> bool:
    t = substitute(t, sub)
    if isinstance(t, TypeVar):
        return t.name == name
    return any(_occurs(name, a, sub) for a in t.args)


def unify(t1: Type, t2: Type, sub: Substitution | None = None) -> Substitution:
    """Robinson unification with occurs check.

    Args:
        t1: First type
        t2: Second type
        sub: Substitution to extend (not modified)

    Returns:
        A new substitution making both types equal

    Raises:
        UnificationError: If the types do not unify
    """
    result = dict(sub) if sub else {}
    stack = [(t1, t2)]
    while stack:
        left, right = stack.pop()
        left = substitute(left, result)
        right = substitute(right, result)
        if left == right:
            continue
        if isinstance(left, TypeVar):
            if _occurs(left.name, right, result):
                raise UnificationError(f"{left.name} occurs in {pretty_type(right)}")
            result[left.name] = right
        elif isinstance(right, TypeVar):
            stack.append((right, left))
        elif left.name == right.name and len(left.args) == len(right.args):
            stack.extend(zip(left.args, right.args))
        else:
            raise UnificationError(
                f"Cannot unify {pretty_type(left)} with {pretty_type(right)}"
            )
    return result


def match(pattern: Type, t: Type, sub: Substitution | None = None) -> Substitution | None:
    """One-way matching: find ``sub`` with ``substitute(pattern, sub) == t``."""
    result = dict(sub) if sub else {}
    stack = [(pattern, t)]
    while stack:
        pat, target = stack.pop()
        if isinstance(pat, TypeVar):
            bound = result.get(pat.name)
            if bound is None:
                result[pat.name] = target
            elif bound != target:
                return None
        elif (
            isinstance(target, TyCon)
            and pat.name == target.name
            and len(pat.args) == len(target.args)
        ):
            stack.extend(zip(pat.args, target.args))
        else:
            return None
    return result


def rename_apart(t: Type, tag: str) -> Type:
    """Rename every variable of ``t`` by suffixing ``tag``."""
    return substitute(t, {name: TypeVar(f"{name}#{tag}") for name in type_vars(t)})


def skolemize(t: Type) -> Type:
    """Replace every variable with a rigid placeholder constructor."""
    return substitute(t, {name: TyCon(f"${name}") for name in type_vars(t)})


def default_to(default: Type, t: Type) -> Type:
    """Replace every variable of ``t`` with ``default``."""
    return substitute(t, {name: default for name in type_vars(t)})


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def pretty_type(t: Type) -> str:
    """Render a type the way it would be written in a signature."""
    if isinstance(t, TypeVar):
        return t.name
    if t.name == ARROW:
        left, right = t.args
        left_text = pretty_type(left)
        if is_function(left):
            left_text = f"({left_text})"
        return f"{left_text} -> {pretty_type(right)}"
    if t.name == LIST:
        return f"[{pretty_type(t.args[0])}]"
    if t.name == TUPLE:
        return "(" + ", ".join(pretty_type(a) for a in t.args) + ")"
    if not t.args:
        return t.name
    parts = [t.name]
    for arg in t.args:
        text = pretty_type(arg)
        if isinstance(arg, TyCon) and arg.args and arg.name not in (LIST, TUPLE):
            text = f"({text})"
        parts.append(text)
    return " ".join(parts)
