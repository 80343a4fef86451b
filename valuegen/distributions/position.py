"""
Position Distribution.

Responsibility boundaries:
- Generates uniformly chosen positions into one specific container.

Mutation constraints:
- The container is BORROWED, not copied. The caller keeps it alive and must
  not resize it while the distribution is in use; the cached size bound is
  never refreshed.
- Equality is identity of the referenced container, unlike every other
  distribution, which compares structurally.
"""

from itertools import islice
from typing import Any, Iterator

from valuegen.distributions.base import Distribution
from valuegen.distributions.scalar import UniformIntDistribution


class EmptyContainerError(ValueError):
    pass


class PositionDistribution(Distribution):
    """
    Uniform positions in [0, len(container) - 1].
    """

    def __init__(self, container: Any) -> None:
        size = len(container)
        if size == 0:
            raise EmptyContainerError("position distribution requires non-empty container")
        self._container = container
        self._index = UniformIntDistribution(0, size - 1)

    @property
    def container(self) -> Any:
        return self._container

    @property
    def index_distribution(self) -> UniformIntDistribution:
        return self._index

    @property
    def result_type(self) -> Any:
        return Iterator

    def generate_index(self, engine: Any) -> int:
        return self._index.generate(engine)

    def generate(self, engine: Any) -> Iterator[Any]:
        """Return an iterator over the container advanced to the drawn position."""
        it = iter(self._container)
        steps = self.generate_index(engine)
        # Advance without materializing the skipped elements
        next(islice(it, steps, steps), None)
        return it

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PositionDistribution):
            return NotImplemented
        return self._container is other.container

    def __hash__(self) -> int:
        return id(self._container)

    def __repr__(self) -> str:
        return f"PositionDistribution(container=<{type(self._container).__name__} at {id(self._container):#x}>, size={self._index.high + 1})"
