"""
Generator Stream Adaptor.

Exposes any nullary generating function as a pull-based input stream.
The stream is infinite: it never runs out and never enters a failed state.
"""

from typing import Any, Callable, Iterator, MutableSequence


class GeneratorStream:
    """Pull-based stream over a generating function (e.g. a RandomVariable)."""

    def __init__(self, generator: Callable[[], Any]) -> None:
        if not callable(generator):
            raise TypeError(f"GeneratorStream requires a callable, got {generator!r}.")
        self._generator = generator

    @property
    def generator(self) -> Callable[[], Any]:
        return self._generator

    def pull(self) -> Any:
        """Return the next value in the stream."""
        return self._generator()

    def pull_into(self, target: MutableSequence, key: Any) -> "GeneratorStream":
        """Store the next value at target[key]."""
        target[key] = self._generator()
        return self

    def pull_n(self, destination: MutableSequence) -> "GeneratorStream":
        """Overwrite every position of `destination` with generated values."""
        for i in range(len(destination)):
            destination[i] = self._generator()
        return self

    def skip(self, n: int = 1) -> "GeneratorStream":
        """Generate and discard n values."""
        if n < 0:
            raise ValueError("Cannot skip a negative number of values.")
        for _ in range(n):
            self._generator()
        return self

    def good(self) -> bool:
        return True

    def fail(self) -> bool:
        return False

    def bad(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return self.good()

    def __iter__(self) -> Iterator[Any]:
        while True:
            yield self._generator()
