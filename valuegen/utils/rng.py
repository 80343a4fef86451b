"""
Random Engine Utility.

This module provides the uniform random bit source every distribution
draws from, built on numpy bit generators.

Responsibility boundaries:
- Must be the ONLY source of randomness for generated values.
- Distributions borrow an engine per call and never instantiate their own.

Mutation constraints:
- The internal state is mutated only when drawing words or restoring state.
- One logical thread of control per engine instance; there is no locking.
  Give each worker its own engine via `spawn()`.
"""

import json
from typing import Any, Dict, Optional

import numpy as np

from valuegen.utils.logger import AuditLogger

ALGORITHMS = {
    "pcg64": np.random.PCG64,
    "mt19937": np.random.MT19937,
    "philox": np.random.Philox,
    "sfc64": np.random.SFC64,
}

# Width of one random_raw() word per algorithm
WORD_BITS = {
    "pcg64": 64,
    "mt19937": 32,
    "philox": 64,
    "sfc64": 64,
}

_audit = AuditLogger("valuegen.engine")


class UnknownAlgorithmError(ValueError):
    pass


def _encode_state(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return {"__ndarray__": value.tolist(), "dtype": str(value.dtype)}
    if isinstance(value, dict):
        return {key: _encode_state(item) for key, item in value.items()}
    if isinstance(value, np.integer):
        return int(value)
    return value


def _decode_state(value: Any) -> Any:
    if isinstance(value, dict):
        if "__ndarray__" in value:
            return np.array(value["__ndarray__"], dtype=value["dtype"])
        return {key: _decode_state(item) for key, item in value.items()}
    return value


class RandomEngine:
    """
    A seeded source of uniformly distributed machine words.
    """

    def __init__(self, seed: Optional[int] = None, algorithm: str = "pcg64") -> None:
        """
        Initialize the engine.

        Args:
            seed: An integer seed for deterministic execution. None seeds
                from OS entropy and makes the run non-reproducible.
            algorithm: One of the keys of ALGORITHMS.
        """
        if algorithm not in ALGORITHMS:
            raise UnknownAlgorithmError(
                f"Unknown engine algorithm '{algorithm}'. Expected one of {sorted(ALGORITHMS)}."
            )
        self._seed = seed
        self._algorithm = algorithm
        self._bit_generator = ALGORITHMS[algorithm](seed)
        _audit.log_event("engine_seeded", {"seed": seed, "algorithm": algorithm})

    @classmethod
    def from_state(cls, text: str) -> "RandomEngine":
        """Rebuild an engine from a string produced by `save_state()`."""
        record = json.loads(text)
        engine = cls(seed=record["seed"], algorithm=record["algorithm"])
        engine.restore_state(text)
        return engine

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def word_bits(self) -> int:
        return WORD_BITS[self._algorithm]

    @property
    def max_word(self) -> int:
        return (1 << self.word_bits) - 1

    def draw(self) -> int:
        """Return the next uniformly distributed word in [0, max_word]."""
        return int(self._bit_generator.random_raw())

    def __call__(self) -> int:
        return self.draw()

    def discard(self, n: int) -> None:
        """Advance the engine by n draws."""
        if n < 0:
            raise ValueError("Cannot discard a negative number of draws.")
        if n:
            self._bit_generator.random_raw(n, output=False)

    def state(self) -> Dict[str, Any]:
        """Return the JSON-compatible bit generator state."""
        return _encode_state(self._bit_generator.state)

    def save_state(self) -> str:
        """Serialize the engine so a prior run can be reproduced exactly."""
        return json.dumps(
            {"seed": self._seed, "algorithm": self._algorithm, "state": self.state()},
            sort_keys=True,
        )

    def restore_state(self, text: str) -> None:
        """Restore a state produced by `save_state()` on an engine of the same algorithm."""
        record = json.loads(text)
        if record["algorithm"] != self._algorithm:
            raise UnknownAlgorithmError(
                f"Cannot restore a '{record['algorithm']}' state into a '{self._algorithm}' engine."
            )
        self._bit_generator.state = _decode_state(record["state"])
        _audit.log_event("engine_restored", {"seed": record["seed"], "algorithm": self._algorithm})

    def copy(self) -> "RandomEngine":
        """Return an independent engine with identical state."""
        return RandomEngine.from_state(self.save_state())

    def __copy__(self) -> "RandomEngine":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "RandomEngine":
        return self.copy()

    def spawn(self, worker_index: int) -> "RandomEngine":
        """
        Derive a fresh engine for a concurrent worker.

        The worker seed is `seed ^ worker_index`, so a whole pool stays
        reproducible under one top-level seed.
        """
        if self._seed is None:
            raise ValueError("Only a seeded engine can spawn reproducible worker engines.")
        if worker_index < 0:
            raise ValueError("worker_index must be non-negative.")
        return RandomEngine(self._seed ^ worker_index, self._algorithm)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RandomEngine):
            return NotImplemented
        return self._algorithm == other.algorithm and self.state() == other.state()

    def __repr__(self) -> str:
        return f"RandomEngine(seed={self._seed}, algorithm={self._algorithm})"


def make_engine(config: Any) -> RandomEngine:
    """Build an engine from a GenerationConfig."""
    return RandomEngine(seed=config.seed, algorithm=config.algorithm)
