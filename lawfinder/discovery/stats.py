"""Counters for one exploration round."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ExplorationStats:
    """What happened to the terms of one round.

    Attributes:
        round: Round number (1-indexed)
        terms_enumerated: Terms produced by the enumerator
        terms_reducible: Terms skipped because a known law rewrites them
        terms_unobservable: Terms with no observable outcome on any test case
        representatives: Terms that started a new equivalence class
        laws: Laws accepted and emitted
        redundant: Equal pairs the pruning oracle found implied
    """

    round: int
    terms_enumerated: int = 0
    terms_reducible: int = 0
    terms_unobservable: int = 0
    representatives: int = 0
    laws: int = 0
    redundant: int = 0

    @property
    def terms_tested(self) -> int:
        return self.terms_enumerated - self.terms_reducible

    def summary(self) -> str:
        return (
            f"round {self.round}: {self.terms_enumerated} terms, "
            f"{self.representatives} classes, {self.laws} laws, "
            f"{self.redundant} redundant, {self.terms_reducible} reducible, "
            f"{self.terms_unobservable} unobservable"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "round": self.round,
            "terms_enumerated": self.terms_enumerated,
            "terms_reducible": self.terms_reducible,
            "terms_unobservable": self.terms_unobservable,
            "representatives": self.representatives,
            "laws": self.laws,
            "redundant": self.redundant,
        }
