"""Pruning oracle: redundancy of laws by rewriting."""

from lawfinder.pruning.completion import canonical_pair, critical_pairs, unify
from lawfinder.pruning.ordering import is_skolem, kbo_greater, skolem
from lawfinder.pruning.redundancy import PruningConfig, PruningOracle, RewritingPruner
from lawfinder.pruning.rewriting import (
    Normaliser,
    RewriteLimitExceeded,
    Rule,
    RuleSet,
    match_term,
    rules_for,
)

__all__ = [
    "PruningConfig",
    "PruningOracle",
    "RewritingPruner",
    "Rule",
    "RuleSet",
    "Normaliser",
    "RewriteLimitExceeded",
    "match_term",
    "rules_for",
    "unify",
    "critical_pairs",
    "canonical_pair",
    "kbo_greater",
    "skolem",
    "is_skolem",
]
