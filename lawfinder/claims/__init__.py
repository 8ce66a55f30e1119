"""Terms, equations and properties."""

from lawfinder.claims.schema import Equation, Property, unit_property
from lawfinder.claims.terms import (
    App,
    Term,
    Var,
    substitute_vars,
    subterms,
    term_constants,
    term_key,
    term_measure,
    term_size,
    term_type,
    term_vars,
)

__all__ = [
    # Terms
    "Var",
    "App",
    "Term",
    "term_size",
    "term_type",
    "term_vars",
    "term_constants",
    "subterms",
    "substitute_vars",
    "term_key",
    "term_measure",
    # Laws
    "Equation",
    "Property",
    "unit_property",
]
