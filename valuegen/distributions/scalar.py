"""
Scalar Distributions.

Responsibility boundaries:
- Produce one integral, floating point or boolean value per call.
- Consume a fixed number of engine words per call (zero for a single value).
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from valuegen.distributions.base import (
    ConfigurationError,
    Distribution,
    DistributionParameterError,
    canonical,
    draw_words,
    words_for_bits,
)
from valuegen.registry.concepts import Capability, satisfies


@dataclass(frozen=True)
class UniformIntDistribution(Distribution):
    """
    Uniform integers over the inclusive range [low, high].

    Uses multiply-shift over whole engine words instead of rejection, so
    every call consumes the same number of words: one for any span up to
    2**word_bits.
    """
    low: int = 0
    high: int = 2 ** 63 - 1
    result_type: Any = int

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.low > self.high:
            raise DistributionParameterError(
                f"UniformIntDistribution requires low <= high, got [{self.low}, {self.high}]."
            )

    @property
    def span(self) -> int:
        return int(self.high) - int(self.low) + 1

    def generate(self, engine: Any) -> Any:
        span = self.span
        count = words_for_bits(engine, (span - 1).bit_length())
        x = draw_words(engine, count)
        offset = (x * span) >> (count * engine.word_bits)
        return self.result_type(int(self.low) + offset)


@dataclass(frozen=True)
class UniformRealDistribution(Distribution):
    """
    Uniform floating point values over [low, high].
    """
    low: float = 0.0
    high: float = 1.0
    result_type: Any = float

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not (np.isfinite(self.low) and np.isfinite(self.high)):
            raise DistributionParameterError("UniformRealDistribution bounds must be finite.")
        if self.low > self.high:
            raise DistributionParameterError(
                f"UniformRealDistribution requires low <= high, got [{self.low}, {self.high}]."
            )

    def generate(self, engine: Any) -> Any:
        u = canonical(engine)
        t = self.result_type
        # Interpolate rather than scale by (high - low), which overflows on the full range
        return t(t(self.low) * t(1.0 - u) + t(self.high) * t(u))


@dataclass(frozen=True)
class BernoulliDistribution(Distribution):
    """A Bernoulli trial; fair by default."""
    p: float = 0.5
    result_type: Any = bool

    def __post_init__(self) -> None:
        if not 0.0 <= self.p <= 1.0:
            raise DistributionParameterError(f"Bernoulli probability must lie in [0, 1], got {self.p}.")

    def generate(self, engine: Any) -> Any:
        return self.result_type(canonical(engine) < self.p)


@dataclass(frozen=True)
class SingleValueDistribution(Distribution):
    """
    Always returns the same value and never touches the engine.
    """
    value: Any

    def __post_init__(self) -> None:
        if not satisfies(Capability.EQUALITY_COMPARABLE, type(self.value)):
            raise ConfigurationError(
                f"SingleValueDistribution requires an equality comparable value, "
                f"got {type(self.value).__name__}."
            )

    @property
    def result_type(self) -> Any:
        return type(self.value)

    def generate(self, engine: Any) -> Any:
        return self.value
