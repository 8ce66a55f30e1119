"""Random value generators."""

from lawfinder.generators.base import (
    GenerationError,
    Generator,
    SampleGenerator,
    stable_seed,
)
from lawfinder.generators.primitives import (
    booleans,
    characters,
    constant,
    elements,
    integers,
    naturals,
    strings,
    units,
)
from lawfinder.generators.structural import dicts, functions, lists, optionals, tuples

__all__ = [
    "Generator",
    "SampleGenerator",
    "GenerationError",
    "stable_seed",
    # Primitives
    "integers",
    "naturals",
    "booleans",
    "characters",
    "strings",
    "units",
    "elements",
    "constant",
    # Structural
    "lists",
    "tuples",
    "optionals",
    "dicts",
    "functions",
]
