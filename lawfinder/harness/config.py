"""Configuration for the test harness."""

from dataclasses import dataclass


@dataclass
class HarnessConfig:
    """Configuration for randomized testing.

    Attributes:
        num_tests: Number of test cases every term is evaluated on
        max_test_size: Largest size parameter handed to generators
        seed: Master random seed; test case seeds derive from it
    """

    num_tests: int = 1000
    max_test_size: int = 20
    seed: int = 42

    def __post_init__(self) -> None:
        if self.num_tests < 1:
            raise ValueError(f"num_tests must be >= 1, got {self.num_tests}")
        if self.max_test_size < 0:
            raise ValueError(f"max_test_size must be >= 0, got {self.max_test_size}")

    def size_for(self, index: int) -> int:
        """Size parameter of test case ``index``; ramps from 0 up to ``max_test_size``."""
        return index * (self.max_test_size + 1) // self.num_tests

    def content_hash(self) -> str:
        """Compute a hash of the configuration for reproducibility."""
        import hashlib
        import json

        content = {
            "num_tests": self.num_tests,
            "max_test_size": self.max_test_size,
            "seed": self.seed,
        }
        content_str = json.dumps(content, sort_keys=True)
        return hashlib.sha256(content_str.encode()).hexdigest()[:16]
