"""Exploration configuration.

``ExploreConfig`` is immutable. Options are changed with named setters,
each a function from config to new config, applied in order:

    config = ExploreConfig().with_options(with_max_term_size(5), with_fixed_seed(1))
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lawfinder.harness.config import HarnessConfig
from lawfinder.pruning.redundancy import PruningConfig
from lawfinder.universe.types import INT, TyCon, is_ground, pretty_type

Setter = Callable[["ExploreConfig"], "ExploreConfig"]


class ExploreConfig(BaseModel):
    """Knobs for one exploration run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    max_size: int = Field(default=7, ge=1, description="Largest term size enumerated")
    num_tests: int = Field(default=1000, ge=1, description="Test cases per term")
    max_test_size: int = Field(default=20, ge=0, description="Largest generator size parameter")
    fixed_seed: int | None = Field(default=None, description="Seed for reproducible runs")
    max_cp_depth: int | None = Field(
        default=None,
        ge=1,
        description="Critical-pair depth of the pruner's completion (None = unbounded)",
    )
    max_pruning_term_size: int | None = Field(
        default=None, ge=1, description="Largest law side used for rewriting"
    )
    max_vars: int = Field(default=3, ge=1, description="Distinct variables per type in a term")
    default_to: Any = Field(default=INT, description="Type given to ambiguous type variables")
    infer_instance_types: bool = Field(
        default=False, description="Also specialise at every orderable, generatable base type"
    )

    @field_validator("default_to")
    @classmethod
    def validate_default_to(cls, v: Any) -> TyCon:
        """The default type must be a ground type."""
        if not isinstance(v, TyCon) or not is_ground(v):
            shown = pretty_type(v) if isinstance(v, TyCon) else repr(v)
            raise ValueError(f"default_to must be a ground type, got {shown}")
        return v

    @property
    def pruning_term_size(self) -> int:
        """Effective pruning term size: never below ``max_size``."""
        return max(self.max_pruning_term_size or 0, self.max_size)

    def replace(self, **changes: Any) -> "ExploreConfig":
        """A validated copy with some fields changed."""
        return type(self)(**{**dict(self), **changes})

    def with_options(self, *setters: Setter) -> "ExploreConfig":
        config = self
        for setter in setters:
            config = setter(config)
        return config

    def harness_config(self, seed: int) -> HarnessConfig:
        return HarnessConfig(num_tests=self.num_tests, max_test_size=self.max_test_size, seed=seed)

    def pruning_config(self) -> PruningConfig:
        return PruningConfig(max_cp_depth=self.max_cp_depth, max_term_size=self.pruning_term_size)


def with_max_term_size(n: int) -> Setter:
    return lambda config: config.replace(max_size=n)


def with_max_tests(n: int) -> Setter:
    return lambda config: config.replace(num_tests=n)


def with_max_test_size(n: int) -> Setter:
    return lambda config: config.replace(max_test_size=n)


def with_default_type(ty: TyCon) -> Setter:
    return lambda config: config.replace(default_to=ty)


def with_pruning_depth(n: int) -> Setter:
    return lambda config: config.replace(max_cp_depth=n)


def with_pruning_term_size(n: int) -> Setter:
    return lambda config: config.replace(max_pruning_term_size=n)


def with_fixed_seed(seed: int) -> Setter:
    return lambda config: config.replace(fixed_seed=seed)


def with_max_vars(n: int) -> Setter:
    return lambda config: config.replace(max_vars=n)


def with_infer_instance_types(enabled: bool = True) -> Setter:
    return lambda config: config.replace(infer_instance_types=enabled)
