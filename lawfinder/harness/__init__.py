"""Test harness for term evaluation."""

from lawfinder.harness.case import Outcome, TestCase, sample_test_case, sample_test_cases
from lawfinder.harness.config import HarnessConfig
from lawfinder.harness.evaluator import Evaluator
from lawfinder.harness.harness import Harness, missing_instance_warnings

__all__ = [
    "HarnessConfig",
    "Outcome",
    "TestCase",
    "sample_test_case",
    "sample_test_cases",
    "Evaluator",
    "Harness",
    "missing_instance_warnings",
]
