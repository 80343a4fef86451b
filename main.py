import logging
import sys
from typing import List, Tuple

from valuegen.config.config import GenerationConfig
from valuegen.core.random_variable import make_random
from valuegen.utils.rng import make_engine


def main(argv: List[str]) -> None:
    """
    Entry point: print a few default-distributed values for a fixed seed.

    Usage: python main.py [seed]
    """
    seed = int(argv[1]) if len(argv) > 1 else GenerationConfig.seed
    config = GenerationConfig(seed=seed)
    logging.basicConfig(level=config.log_level, format="%(name)s %(levelname)s %(message)s")

    engine = make_engine(config)
    print(f"Seed {config.seed} ({config.algorithm})")

    strings = make_random(engine, str)
    for _ in range(3):
        value = strings()
        print(f"  str   len={len(value):2d} {value!r}")

    records = make_random(engine, Tuple[bool, int, float])
    for _ in range(3):
        print(f"  tuple {records()!r}")

    print(f"Engine state: {engine.save_state()[:72]}...")


if __name__ == "__main__":
    main(sys.argv)
