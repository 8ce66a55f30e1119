"""What to explore: constants, predicates, instances and settings."""

from dataclasses import dataclass, field

from lawfinder.capabilities import Instances
from lawfinder.catalogue.constants import Constant
from lawfinder.catalogue.predicates import PredicateDeclaration
from lawfinder.discovery.config import ExploreConfig


@dataclass
class Signature:
    """Input to an exploration run.

    Attributes:
        constants: Constant groups; group ``i`` is introduced in round ``i + 1``
            and stays available as background in later rounds
        predicates: Predicate groups, introduced by round like ``constants``
        instances: User capability entries (take priority over the built-ins)
        config: Exploration settings
    """

    constants: list[list[Constant]] = field(default_factory=list)
    predicates: list[list[PredicateDeclaration]] = field(default_factory=list)
    instances: Instances = field(default_factory=Instances.empty)
    config: ExploreConfig = field(default_factory=ExploreConfig)

    @property
    def rounds(self) -> int:
        return max(len(self.constants), len(self.predicates), 1)

    def active_constants(self, round_number: int) -> list[Constant]:
        """Constants available in a (1-indexed) round, earlier groups first."""
        found: list[Constant] = []
        for group in self.constants[:round_number]:
            found.extend(group)
        return found

    def active_predicates(self, round_number: int) -> list[PredicateDeclaration]:
        found: list[PredicateDeclaration] = []
        for group in self.predicates[:round_number]:
            found.extend(group)
        return found

    def predicate_instances(self) -> Instances:
        result = Instances.empty()
        for group in self.predicates:
            for decl in group:
                result = result + decl.instances
        return result
