"""
Random Variable.

Responsibility boundaries:
- Binds one engine and one distribution into a nullary value source.
- Resolves a type descriptor to its default distribution when no
  distribution is given.

Mutation constraints:
- Calling the variable advances its engine. Whether that engine is shared
  with the caller depends on how the variable was bound (see `make_random`).
"""

from typing import Any, Iterator

from valuegen.distributions.base import Distribution
from valuegen.registry.default_registry import default_distribution_for


class RandomVariable:
    """
    A distribution bound to a specific engine.
    """

    def __init__(self, engine: Any, distribution: Distribution) -> None:
        if not isinstance(distribution, Distribution):
            raise TypeError(f"RandomVariable requires a Distribution, got {distribution!r}.")
        if not callable(getattr(engine, "draw", None)):
            raise TypeError(f"RandomVariable requires an engine with draw(), got {engine!r}.")
        self._engine = engine
        self._distribution = distribution

    @property
    def engine(self) -> Any:
        return self._engine

    @property
    def distribution(self) -> Distribution:
        return self._distribution

    @property
    def result_type(self) -> Any:
        return self._distribution.result_type

    def __call__(self) -> Any:
        return self._distribution.generate(self._engine)

    def __iter__(self) -> Iterator[Any]:
        while True:
            yield self()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RandomVariable):
            return NotImplemented
        return self._engine == other.engine and self._distribution == other.distribution

    def __repr__(self) -> str:
        return f"RandomVariable(engine={self._engine!r}, distribution={self._distribution!r})"


def make_random(engine: Any, target: Any, copy: bool = False) -> RandomVariable:
    """
    Bind an engine to a distribution.

    Args:
        engine: The engine to draw from.
        target: A Distribution, or a type whose default distribution
            should be used (e.g. `int`, `str`, `List[Tuple[int, str]]`).
        copy: Bind a private copy of the engine instead of the caller's
            instance. The caller's engine is then left untouched.

    Raises:
        NoDefaultDistributionError: `target` is a type without a default.
    """
    distribution = target if isinstance(target, Distribution) else default_distribution_for(target)
    if copy:
        engine = engine.copy()
    return RandomVariable(engine, distribution)
