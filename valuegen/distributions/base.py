"""
Distribution Interface.

Responsibility boundaries:
- Defines the single operation every distribution implements:
  given a mutable engine, produce one value.
- Provides the word-combining helpers scalar distributions build on.

Mutation constraints:
- Distributions hold only their construction parameters. Drawing never
  mutates a distribution; only the borrowed engine advances.
"""

from abc import ABC, abstractmethod
from typing import Any

CANONICAL_BITS = 53


class DistributionParameterError(ValueError):
    pass


class ConfigurationError(TypeError):
    pass


def words_for_bits(engine: Any, bits: int) -> int:
    """Number of engine words needed to cover `bits` bits (at least one)."""
    word_bits = engine.word_bits
    return max(1, -(-bits // word_bits))


def draw_words(engine: Any, count: int) -> int:
    """Concatenate `count` engine words, first draw in the high bits."""
    word_bits = engine.word_bits
    value = 0
    for _ in range(count):
        value = (value << word_bits) | engine.draw()
    return value


def draw_bits(engine: Any, bits: int) -> int:
    """Return a uniformly distributed integer in [0, 2**bits)."""
    count = words_for_bits(engine, bits)
    return draw_words(engine, count) >> (count * engine.word_bits - bits)


def canonical(engine: Any) -> float:
    """Return a uniformly distributed float in [0, 1) with 53 bits of precision."""
    return draw_bits(engine, CANONICAL_BITS) * (2.0 ** -CANONICAL_BITS)


class Distribution(ABC):
    """
    Abstract value generator.

    Two distributions of the same concrete kind are equal iff their
    construction parameters are equal.
    """

    @property
    @abstractmethod
    def result_type(self) -> Any:
        """The type of the values this distribution produces."""
        pass

    @abstractmethod
    def generate(self, engine: Any) -> Any:
        """
        Draw one value.

        Args:
            engine: Any object exposing `draw() -> int` and `word_bits`.

        Returns:
            A value of `result_type`.
        """
        pass

    def __call__(self, engine: Any) -> Any:
        return self.generate(engine)
