"""The exploration loop.

Each round enumerates terms over the constants introduced so far, sorts them
into observed equivalence classes by testing, and turns every term that
joins an existing class into a candidate law. Candidates implied by earlier
laws are discarded by the pruning oracle; the rest are recorded as new facts
and reported.
"""

import logging
import os
import random
from dataclasses import dataclass

from lawfinder.capabilities import Instances, base_instances
from lawfinder.catalogue.constants import TRUE, Constant
from lawfinder.catalogue.constraints import (
    constraint_resolvable,
    inferred_types,
    specialize_constants,
    type_universe,
)
from lawfinder.claims.schema import Equation, Property
from lawfinder.claims.terms import Term, Var
from lawfinder.discovery.classes import EquivalenceClasses
from lawfinder.discovery.enumerator import Enumerator
from lawfinder.discovery.signature import Signature
from lawfinder.discovery.stats import ExplorationStats
from lawfinder.generators import stable_seed
from lawfinder.harness.harness import Harness, missing_instance_warnings
from lawfinder.presentation import (
    associativity_display,
    conditionalise,
    name_vars,
    pretty_property,
    type_annotation,
)
from lawfinder.pruning.redundancy import PruningOracle, RewritingPruner
from lawfinder.universe.types import Type
from lawfinder.verbose import VerboseLogger

logger = logging.getLogger(__name__)

SEED_ENV_VAR = "QUICKCHECK_SEED"


@dataclass
class Law:
    """A discovered law, ready for display.

    Attributes:
        number: Position in discovery order (1-based, across rounds)
        prop: The law as displayed: predicate hypotheses made explicit and
            the larger side on the left
        raw: The law as accepted (representative = term)
        names: Display name of each variable in ``prop``
        type_annotation: Type of the two sides when both are bare variables
        text: Rendered law
    """

    number: int
    prop: Property
    raw: Property
    names: dict[Var, str]
    type_annotation: str | None
    text: str


def resolve_seed(fixed_seed: int | None) -> int:
    """The configured seed, else ``QUICKCHECK_SEED``, else a random one."""
    if fixed_seed is not None:
        return fixed_seed
    env = os.environ.get(SEED_ENV_VAR)
    if env:
        return int(env)
    return random.SystemRandom().randrange(2**31)


class Explorer:
    """Runs the exploration rounds of one signature.

    The capability registry and the constants are fixed for the lifetime of
    the explorer. Equivalence classes and the evaluation memo belong to one
    round; the pruning oracle's facts and the law numbering persist across
    rounds.
    """

    def __init__(
        self,
        signature: Signature,
        pruner: PruningOracle | None = None,
        reporter: VerboseLogger | None = None,
        seed: int | None = None,
    ):
        """Initialize the explorer.

        Args:
            signature: Constants, predicates, instances and settings
            pruner: Pruning oracle (a fresh RewritingPruner if not provided)
            reporter: Where to print laws (silent if not provided)
            seed: Master seed (resolved from the config/environment if not provided)
        """
        self.signature = signature
        self.config = signature.config
        self.seed = seed if seed is not None else resolve_seed(self.config.fixed_seed)
        self.registry: Instances = (
            signature.instances + signature.predicate_instances() + base_instances()
        )
        self.pruner = pruner or RewritingPruner(self.config.pruning_config())
        self.reporter = reporter
        self.laws: list[Law] = []
        self.stats: list[ExplorationStats] = []
        self._background: set[Constant] = set()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def specialization_types(self) -> list[Type]:
        types = [self.config.default_to]
        if self.config.infer_instance_types:
            types += [t for t in inferred_types(self.registry) if t not in types]
        return types

    def round_constants(self, round_number: int) -> list[Constant]:
        """Monomorphic constants active in a round."""
        active = [TRUE, *self.signature.active_constants(round_number)]
        for decl in self.signature.active_predicates(round_number):
            active.extend(decl.constants)
        return specialize_constants(active, self.registry, self.specialization_types())

    def warnings(self) -> list[str]:
        """Missing-instance warnings over every type the run can reach."""
        constants = self.round_constants(self.signature.rounds)
        return [msg for _, msg in missing_instance_warnings(self.registry, type_universe(constants))]

    # ------------------------------------------------------------------
    # Exploration
    # ------------------------------------------------------------------

    def run(self) -> list[Law]:
        """Explore every round and return the laws in discovery order."""
        logger.info(f"Exploring {self.signature.rounds} round(s) with seed {self.seed}")
        if self.reporter is not None:
            declared = [c for group in self.signature.constants for c in group]
            declared += [d.predicate for group in self.signature.predicates for d in group]
            self.reporter.signature(declared)
        for message in self.warnings():
            logger.warning(message)
            if self.reporter is not None:
                self.reporter.warning(message)
        if self.reporter is not None:
            self.reporter.heading("Laws")

        for round_number in range(1, self.signature.rounds + 1):
            self.explore_round(round_number)
        return self.laws

    def explore_round(self, round_number: int) -> ExplorationStats:
        stats = ExplorationStats(round_number)
        constants = self.round_constants(round_number)

        for decl in self.signature.active_predicates(round_number):
            if decl.predicate not in self._background:
                self._background.add(decl.predicate)
                self.pruner.record_fact(decl.background_fact())

        harness = Harness(
            self.registry,
            self.config.default_to,
            self.config.harness_config(stable_seed(self.seed, "round", round_number)),
        )
        classes = EquivalenceClasses()
        enumerator = Enumerator(
            constants,
            self.config.max_size,
            self.config.max_vars,
            allowed=self._allowed,
        )

        for term in enumerator.terms():
            stats.terms_enumerated += 1
            if self.pruner.is_reducible(term):
                stats.terms_reducible += 1
                continue

            vector = harness.outcomes(term)
            if not harness.observable(vector):
                stats.terms_unobservable += 1
                continue

            cls = classes.find_equal(term, vector)
            if cls is None:
                classes.add(term, vector)
                enumerator.accept(term)
                stats.representatives += 1
                continue

            prop = Property((), Equation(cls.representative, term))
            if self.pruner.is_redundant(prop):
                stats.redundant += 1
                continue
            self.pruner.record_fact(prop)
            self._emit(prop)
            stats.laws += 1

        harness.clear_cache()
        self.stats.append(stats)
        logger.info(stats.summary())
        if self.reporter is not None:
            self.reporter.round_stats(stats)
        return stats

    def _allowed(self, term: Term) -> bool:
        if isinstance(term, Var):
            return True
        return constraint_resolvable(term.head, self.registry)

    def _emit(self, prop: Property) -> Law:
        display = conditionalise(prop)
        display = associativity_display(display, self.pruner.normalise)
        display = Property(display.hypotheses, display.conclusion.oriented())
        names = name_vars(display, self.registry)
        annotation = type_annotation(display)
        text = pretty_property(display, names)
        if annotation is not None:
            text = f"{text} :: {annotation}"

        law = Law(len(self.laws) + 1, display, prop, names, annotation, text)
        self.laws.append(law)
        logger.debug(f"Law {law.number}: {law.text}")
        if self.reporter is not None:
            self.reporter.law(law)
        return law


def quickspec(signature: Signature, reporter: VerboseLogger | None = None) -> list[Law]:
    """Discover and print the laws of a signature.

    Args:
        signature: What to explore
        reporter: Output channel (stdout if not provided)

    Returns:
        The discovered laws in discovery order
    """
    explorer = Explorer(signature, reporter=reporter or VerboseLogger())
    return explorer.run()
