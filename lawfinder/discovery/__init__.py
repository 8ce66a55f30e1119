"""Law discovery: enumeration, classification and the exploration loop."""

from lawfinder.discovery.classes import EquivalenceClass, EquivalenceClasses
from lawfinder.discovery.config import (
    ExploreConfig,
    with_default_type,
    with_fixed_seed,
    with_infer_instance_types,
    with_max_term_size,
    with_max_test_size,
    with_max_tests,
    with_max_vars,
    with_pruning_depth,
    with_pruning_term_size,
)
from lawfinder.discovery.enumerator import Enumerator
from lawfinder.discovery.explore import Explorer, Law, quickspec, resolve_seed
from lawfinder.discovery.signature import Signature
from lawfinder.discovery.stats import ExplorationStats

__all__ = [
    # Config
    "ExploreConfig",
    "with_max_term_size",
    "with_max_tests",
    "with_max_test_size",
    "with_default_type",
    "with_pruning_depth",
    "with_pruning_term_size",
    "with_fixed_seed",
    "with_max_vars",
    "with_infer_instance_types",
    # Exploration
    "Signature",
    "Enumerator",
    "EquivalenceClass",
    "EquivalenceClasses",
    "ExplorationStats",
    "Explorer",
    "Law",
    "quickspec",
    "resolve_seed",
]
