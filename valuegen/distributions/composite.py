"""
Composite Distributions.

Responsibility boundaries:
- Build aggregate values (sequences, strings, tuples) out of distributions
  for their shape and their parts.
- Retarget a distribution onto another result type.

Mutation constraints:
- Every aggregate is freshly allocated per call. Elements are drawn
  independently, in position order, after the length draw.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

from valuegen.distributions.base import ConfigurationError, Distribution, DistributionParameterError
from valuegen.distributions.scalar import UniformIntDistribution

DEFAULT_MAX_LENGTH = 32

# Printable ASCII without space
DEFAULT_MIN_CODE = 33
DEFAULT_MAX_CODE = 126

DEFAULT_LENGTH = UniformIntDistribution(0, DEFAULT_MAX_LENGTH)
DEFAULT_ALPHABET = UniformIntDistribution(DEFAULT_MIN_CODE, DEFAULT_MAX_CODE)


@dataclass(frozen=True)
class SequenceDistribution(Distribution):
    """
    Random sequences of random length.

    Args:
        element: Distribution of each element.
        size: Distribution of the sequence length (must yield ints >= 0).
        container: Callable building the result from a list of elements.
    """
    element: Distribution
    size: Distribution = DEFAULT_LENGTH
    container: Any = list

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.element, Distribution) or not isinstance(self.size, Distribution):
            raise ConfigurationError(f"{type(self).__name__} requires distributions for size and element.")
        if isinstance(self.size, UniformIntDistribution) and self.size.low < 0:
            raise DistributionParameterError(
                f"Size distribution must not produce negative lengths, got low={self.size.low}."
            )
        if not callable(self.container):
            raise ConfigurationError(f"Sequence container {self.container!r} is not callable.")

    @property
    def result_type(self) -> Any:
        return self.container

    def draw_length(self, engine: Any) -> int:
        n = self.size.generate(engine)
        if n < 0:
            raise DistributionParameterError(f"Size distribution produced a negative length {n}.")
        return int(n)

    def draw_elements(self, engine: Any) -> List[Any]:
        n = self.draw_length(engine)
        values: List[Any] = [None] * n
        for i in range(n):
            values[i] = self.element.generate(engine)
        return values

    def generate(self, engine: Any) -> Any:
        return self.container(self.draw_elements(engine))


@dataclass(frozen=True)
class StringDistribution(SequenceDistribution):
    """
    Random strings of printable characters.

    By default lengths are uniform over [0, 32] and character codes are
    uniform over [33, 126]. Produces `str`, or `bytes` when the container
    is `bytes`.
    """
    element: Distribution = DEFAULT_ALPHABET
    size: Distribution = DEFAULT_LENGTH
    container: Any = str

    def validate(self) -> None:
        super().validate()
        if self.container not in (str, bytes):
            raise ConfigurationError(
                f"StringDistribution produces str or bytes, got {self.container!r}."
            )
        if (
            self.container is bytes
            and isinstance(self.element, UniformIntDistribution)
            and not 0 <= self.element.low <= self.element.high <= 255
        ):
            raise DistributionParameterError("Byte string codes must lie in [0, 255].")

    def generate(self, engine: Any) -> Any:
        codes = self.draw_elements(engine)
        if self.container is bytes:
            return bytes(codes)
        return "".join(map(chr, codes))


@dataclass(frozen=True)
class AdaptedDistribution(Distribution):
    """
    Wraps each value drawn from `inner` into `target`, e.g. a domain type
    constructed from an int or a string.
    """
    inner: Distribution
    target: Any

    def __post_init__(self) -> None:
        if not isinstance(self.inner, Distribution):
            raise ConfigurationError(f"AdaptedDistribution requires a distribution, got {self.inner!r}.")
        if not callable(self.target):
            raise ConfigurationError(
                f"Result type {self.target!r} cannot be constructed from "
                f"{getattr(self.inner.result_type, '__name__', self.inner.result_type)}."
            )

    @property
    def result_type(self) -> Any:
        return self.target

    def generate(self, engine: Any) -> Any:
        return self.target(self.inner.generate(engine))


class TupleDistribution(Distribution):
    """
    Random tuples whose fields are drawn from their own distributions,
    field 0 first. Any arity is accepted, including zero.
    """

    def __init__(self, *components: Distribution) -> None:
        for index, component in enumerate(components):
            if not isinstance(component, Distribution):
                raise ConfigurationError(
                    f"TupleDistribution component {index} is not a distribution: {component!r}."
                )
        self._components: Tuple[Distribution, ...] = tuple(components)

    @property
    def components(self) -> Tuple[Distribution, ...]:
        return self._components

    @property
    def result_type(self) -> Any:
        return Tuple[tuple(c.result_type for c in self._components)]

    def __len__(self) -> int:
        return len(self._components)

    def generate(self, engine: Any) -> Tuple[Any, ...]:
        return tuple(component.generate(engine) for component in self._components)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TupleDistribution):
            return NotImplemented
        return self._components == other.components

    def __hash__(self) -> int:
        return hash(self._components)

    def __repr__(self) -> str:
        return f"TupleDistribution{self._components!r}"
