"""Constraint resolution and specialisation of polymorphic constants."""

import logging
from itertools import product

from lawfinder.capabilities import Instances, ord_type
from lawfinder.capabilities.kinds import ARBITRARY
from lawfinder.catalogue.constants import Constant
from lawfinder.catalogue.predicates import is_test_case_type
from lawfinder.universe.types import TyCon, Type, arg_types, drop_args, is_function, is_ground, type_key, type_vars

logger = logging.getLogger(__name__)


def constraint_resolvable(con: Constant, registry: Instances) -> bool:
    """Whether the registry can witness the constant's constraint, if any."""
    return con.constraint is None or registry.has(con.constraint)


def specialize_constants(
    constants: list[Constant],
    registry: Instances,
    types: list[Type],
) -> list[Constant]:
    """Ground every constant at each assignment of its type variables.

    Each variable ranges over ``types``. Specialisations whose constraint
    does not resolve are dropped.

    Args:
        constants: Declared constants, possibly polymorphic
        registry: Capability registry for constraint resolution
        types: Ground types that type variables may take

    Returns:
        Monomorphic constants, in declaration order
    """
    result: list[Constant] = []
    for con in constants:
        names = type_vars(con.type)
        if not names:
            candidates = [con]
        else:
            candidates = [con.specialize(dict(zip(names, combo))) for combo in product(types, repeat=len(names))]
        for ground in candidates:
            if not constraint_resolvable(ground, registry):
                logger.debug(f"Dropping {ground.signature_line()}: constraint does not resolve")
                continue
            if ground not in result:
                result.append(ground)
    return result


def inferred_types(registry: Instances) -> list[Type]:
    """Ground base types that are both orderable and generatable.

    Used when ``infer_instance_types`` is on, to specialise polymorphic
    constants at more than just the default type.
    """
    found: list[Type] = []
    for entry in registry.entries:
        result = entry.result
        if entry.requires or not (isinstance(result, TyCon) and result.name == ARBITRARY):
            continue
        ty = result.args[0]
        if not is_ground(ty) or is_function(ty) or is_test_case_type(ty) or ty in found:
            continue
        if registry.has(ord_type(ty)):
            found.append(ty)
    return found


def type_universe(constants: list[Constant]) -> list[Type]:
    """Every type that a term built from ``constants`` can have.

    Includes each constant's type, its argument types and the types of its
    partial applications.
    """
    found: set[Type] = set()
    for con in constants:
        for n in range(con.arity + 1):
            found.add(drop_args(con.type, n))
        found.update(arg_types(con.type))
    return sorted(found, key=type_key)
