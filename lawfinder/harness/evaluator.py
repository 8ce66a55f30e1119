"""Term evaluation.

Reduces a term to a value under a test case's valuation. Missing values
(untestable variables, unresolvable constraints) propagate as None. Any
exception raised by user code is contained and also yields None, except
``InternalError`` which always propagates.
"""

import logging
from functools import partial

from lawfinder.capabilities import Instances
from lawfinder.catalogue.constants import Constant
from lawfinder.claims.terms import Term, Var
from lawfinder.harness.case import Outcome, TestCase
from lawfinder.universe.types import Type
from lawfinder.universe.values import InternalError, Value, apply_value

logger = logging.getLogger(__name__)


class Evaluator:
    """Evaluates terms against test cases."""

    def __init__(self, registry: Instances, default_type: Type):
        self.registry = registry
        self.default_type = default_type
        self._constants: dict[Constant, Value | None] = {}

    def constant_value(self, con: Constant) -> Value | None:
        """Boxed value of a constant, with its constraint witness supplied.

        Returns None if the constant's constraint does not resolve.
        """
        if con not in self._constants:
            self._constants[con] = self._build_constant(con)
        return self._constants[con]

    def _build_constant(self, con: Constant) -> Value | None:
        if con.constraint is None:
            return Value(con.type, con.value)
        witness = self.registry.find(con.constraint)
        if witness is None:
            return None
        if con.arity > 0:
            return Value(con.type, partial(con.value, witness))
        try:
            return Value(con.type, con.value(witness))
        except InternalError:
            raise
        except Exception as e:
            logger.debug(f"Constant {con.name} failed to build: {e}")
            return None

    def apply(self, fn: Value, args: list[Value]) -> Value | None:
        """Apply a function value, containing failures in user code."""
        try:
            return apply_value(fn, args)
        except InternalError:
            raise
        except Exception as e:
            logger.debug(f"Application failed: {type(e).__name__}: {e}")
            return None

    def eval_app(self, head: Constant, args: list[Value | None]) -> Value | None:
        """Apply a constant to already evaluated arguments.

        Raises:
            InternalError: If a selector appears without its argument
        """
        if head.is_selector and not args:
            raise InternalError(f"Selector {head.name} reached as a bare term")
        fn = self.constant_value(head)
        if fn is None or any(a is None for a in args):
            return None
        if not args:
            return fn
        return self.apply(fn, args)

    def eval_term(self, case: TestCase, term: Term) -> Value | None:
        """Reduce a term to a value on one test case.

        Raises:
            InternalError: If a selector appears without its argument
        """
        if isinstance(term, Var):
            return case.valuation(term)
        return self.eval_app(term.head, [self.eval_term(case, arg) for arg in term.args])

    def evaluate(self, case: TestCase, term: Term) -> Outcome | None:
        """Evaluate and observe a term; None if there is no observable result."""
        return self.observe(case, self.eval_term(case, term))

    @staticmethod
    def observe(case: TestCase, value: Value | None) -> Outcome | None:
        if value is None:
            return None
        return case.observe(value)
