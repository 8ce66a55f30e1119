"""Test harness: evaluates terms on a fixed set of test cases."""

import logging

from lawfinder.capabilities import Instances, arbitrary_type, observe_type
from lawfinder.catalogue.predicates import is_test_case_type
from lawfinder.claims.terms import App, Term, Var
from lawfinder.harness.case import Outcome, TestCase, sample_test_cases
from lawfinder.harness.config import HarnessConfig
from lawfinder.harness.evaluator import Evaluator
from lawfinder.universe.types import Type, is_function, pretty_type
from lawfinder.universe.values import Value

logger = logging.getLogger(__name__)

OutcomeVector = list[Outcome | None]


class Harness:
    """Evaluates terms on ``config.num_tests`` shared test cases.

    Values and outcomes are memoised per term. Since a term's arguments are
    evaluated before the term itself, every application costs a single call
    per test case. The memo belongs to one exploration round and is dropped
    with ``clear_cache()``.
    """

    def __init__(
        self,
        registry: Instances,
        default_type: Type,
        config: HarnessConfig | None = None,
    ):
        """Initialize the harness.

        Args:
            registry: Capabilities for generation and observation
            default_type: Type substituted for remaining type variables
            config: Harness configuration (uses defaults if not provided)
        """
        self.config = config or HarnessConfig()
        self.registry = registry
        self.evaluator = Evaluator(registry, default_type)
        self.cases: list[TestCase] = sample_test_cases(default_type, registry, self.config)
        self._values: dict[Term, list[Value | None]] = {}
        self._outcomes: dict[Term, OutcomeVector] = {}

    def clear_cache(self) -> None:
        self._values.clear()
        self._outcomes.clear()

    def values(self, term: Term) -> list[Value | None]:
        """Value of ``term`` on every test case (None where missing or failed)."""
        cached = self._values.get(term)
        if cached is not None:
            return cached

        if isinstance(term, Var):
            result = [case.valuation(term) for case in self.cases]
        else:
            result = self._apply_vectors(term)
        self._values[term] = result
        return result

    def _apply_vectors(self, term: App) -> list[Value | None]:
        if not term.args:
            return [self.evaluator.eval_app(term.head, [])] * len(self.cases)
        columns = [self.values(arg) for arg in term.args]
        return [self.evaluator.eval_app(term.head, list(row)) for row in zip(*columns)]

    def outcomes(self, term: Term) -> OutcomeVector:
        """Observed outcome of ``term`` on every test case."""
        cached = self._outcomes.get(term)
        if cached is not None:
            return cached
        result = [
            self.evaluator.observe(case, value)
            for case, value in zip(self.cases, self.values(term))
        ]
        self._outcomes[term] = result
        return result

    @staticmethod
    def observable(vector: OutcomeVector) -> bool:
        """Whether at least one test case produced an outcome."""
        return any(o is not None for o in vector)

    @staticmethod
    def agree(left: OutcomeVector, right: OutcomeVector) -> bool:
        """Equal on every test case where both sides are observable.

        At least one such test case is required.
        """
        compared = 0
        for a, b in zip(left, right):
            if a is None or b is None:
                continue
            if a.key != b.key:
                return False
            compared += 1
        return compared > 0


def missing_instance_warnings(registry: Instances, types: list[Type]) -> list[tuple[Type, str]]:
    """Warnings for types that cannot be generated or observed.

    Function types are skipped (their capabilities derive from their
    argument and result types) as are predicate test-case types.

    Returns:
        (type, message) pairs in the order of ``types``
    """
    warnings = []
    for ty in types:
        if is_function(ty) or is_test_case_type(ty):
            continue
        if not registry.has(arbitrary_type(ty)):
            warnings.append((ty, f"WARNING: Missing instance of Arbitrary for type {pretty_type(ty)}"))
        if not registry.has(observe_type(ty)):
            warnings.append((ty, f"WARNING: Missing instance of Ord for type {pretty_type(ty)}"))
    return warnings
