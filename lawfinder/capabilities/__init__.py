"""Type-indexed capabilities: ordering, generation, observation, naming."""

from lawfinder.capabilities.base import base_instances, base_type, names_instance, observer_instance
from lawfinder.capabilities.kinds import (
    CoArbitrary,
    Equality,
    Names,
    Observer,
    Ordering,
    arbitrary_type,
    coarbitrary_type,
    conj,
    entails,
    eq_type,
    names_type,
    observe_type,
    ord_type,
)
from lawfinder.capabilities.registry import (
    Instance,
    Instances,
    derived,
    entailment,
    instance,
)

__all__ = [
    # Registry
    "Instance",
    "Instances",
    "instance",
    "derived",
    "entailment",
    # Constraint types
    "ord_type",
    "eq_type",
    "arbitrary_type",
    "coarbitrary_type",
    "observe_type",
    "names_type",
    "conj",
    "entails",
    # Witnesses
    "Ordering",
    "Equality",
    "CoArbitrary",
    "Observer",
    "Names",
    # Registrations
    "base_instances",
    "base_type",
    "observer_instance",
    "names_instance",
]
