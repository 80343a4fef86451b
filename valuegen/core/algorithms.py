"""
Bulk Generation Algorithms.

Responsibility boundaries:
- Write generated values into an existing mutable sequence, in order.
"""

from typing import Any, MutableSequence, Optional, Tuple

from valuegen.core.random_variable import RandomVariable, make_random
from valuegen.distributions.base import Distribution


def _bounds(destination: Any, start: int, stop: Optional[int]) -> Tuple[int, int]:
    size = len(destination)
    stop = size if stop is None else stop
    if not 0 <= start <= stop <= size:
        raise IndexError(f"Range [{start}, {stop}) is outside a destination of length {size}.")
    return start, stop


def generate(destination: MutableSequence, variable: RandomVariable, start: int = 0, stop: Optional[int] = None) -> None:
    """
    Assign `variable()` to each position of destination[start:stop].

    Positions are written in increasing order; an empty range draws nothing.
    """
    start, stop = _bounds(destination, start, stop)
    for i in range(start, stop):
        destination[i] = variable()


def fill(destination: MutableSequence, engine: Any, distribution: Distribution, start: int = 0, stop: Optional[int] = None) -> None:
    """
    Fill destination[start:stop] with values drawn from `distribution`.

    Consumes exactly `stop - start` draws from the distribution. Works on
    lists, bytearrays and numpy arrays alike.
    """
    generate(destination, make_random(engine, distribution), start, stop)
