"""Test cases: one random valuation of variables plus one random observation.

A test case is sampled once and then shared by every term evaluated in a
round, so that the outcomes of two terms on the same case are comparable.
Everything a case draws is derived from its own seed, never from a shared
stream, so results do not depend on evaluation order.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any

from lawfinder.capabilities import Instances, Observer, arbitrary_type, observe_type
from lawfinder.claims.terms import Var
from lawfinder.generators import stable_seed
from lawfinder.harness.config import HarnessConfig
from lawfinder.universe.types import Type, default_to, pretty_type, type_key
from lawfinder.universe.values import InternalError, Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Observed result of evaluating a term on one test case.

    Attributes:
        type: Type of the evaluated term
        key: Ordering key of the observation; outcomes compare by key
    """

    type: Type
    key: Any


class TestCase:
    """A valuation of variables and an observation function for one sample.

    Both are memoised: a variable always gets the same value within a case,
    and all values of one type are observed with the same hidden test value.
    """

    __test__ = False

    def __init__(self, index: int, seed: int, size: int, registry: Instances, default_type: Type):
        self.index = index
        self.seed = seed
        self.size = size
        self._registry = registry
        self._default_type = default_type
        self._values: dict[Var, Value | None] = {}
        self._observers: dict[Type, tuple[Observer, Any] | None] = {}

    def __repr__(self) -> str:
        return f"TestCase(index={self.index}, seed={self.seed}, size={self.size})"

    def valuation(self, var: Var) -> Value | None:
        """Value of a variable, or None if its type cannot be generated."""
        if var not in self._values:
            self._values[var] = self._generate(var)
        return self._values[var]

    def _generate(self, var: Var) -> Value | None:
        ty = default_to(self._default_type, var.type)
        generator = self._registry.find(arbitrary_type(ty))
        if generator is None:
            return None
        rng = random.Random(stable_seed(self.seed, "var", type_key(ty), var.index))
        try:
            return Value(ty, generator.generate(rng, self.size))
        except InternalError:
            raise
        except Exception as e:
            logger.debug(f"Generating {pretty_type(ty)} failed in case {self.index}: {e}")
            return None

    def observe(self, value: Value) -> Outcome | None:
        """Observe a value, or None if its type has no observer or observation fails."""
        entry = self._observer_for(value.type)
        if entry is None:
            return None
        observer, test = entry
        try:
            key = observer.key(test, value.payload)
            # Forcing probe: a result that is not equal to itself (NaN, a
            # partial value raising on comparison) is not observable
            if not key == key:
                return None
            hash(key)
        except InternalError:
            raise
        except Exception as e:
            logger.debug(f"Observing {pretty_type(value.type)} failed in case {self.index}: {e}")
            return None
        return Outcome(value.type, key)

    def _observer_for(self, ty: Type) -> tuple[Observer, Any] | None:
        if ty in self._observers:
            return self._observers[ty]
        observer = self._registry.find(observe_type(ty))
        entry = None
        if observer is not None:
            try:
                test = None
                if observer.test is not None:
                    rng = random.Random(stable_seed(self.seed, "observe", type_key(ty)))
                    test = observer.test.generate(rng, self.size)
                entry = (observer, test)
            except InternalError:
                raise
            except Exception as e:
                logger.debug(f"Drawing a test value for {pretty_type(ty)} failed: {e}")
        self._observers[ty] = entry
        return entry


def sample_test_case(
    default_type: Type,
    registry: Instances,
    seed: int,
    size: int,
    index: int = 0,
) -> TestCase:
    """Sample one test case.

    Args:
        default_type: Type substituted for any remaining type variables
        registry: Capabilities used to generate and observe values
        seed: Seed all of the case's randomness derives from
        size: Size parameter for generators
        index: Position of the case within its run

    Returns:
        A fresh test case
    """
    return TestCase(index, seed, size, registry, default_type)


def sample_test_cases(default_type: Type, registry: Instances, config: HarnessConfig) -> list[TestCase]:
    """Sample ``config.num_tests`` cases with sizes ramping up to ``max_test_size``."""
    return [
        sample_test_case(default_type, registry, stable_seed(config.seed, "case", i), config.size_for(i), i)
        for i in range(config.num_tests)
    ]
