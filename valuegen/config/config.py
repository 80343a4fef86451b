"""
Configuration Utility.

Responsibility boundaries:
- Holds engine seeding and default-distribution bounds.
- Must be passed to the registry and engine factory explicitly.

Mutation constraints:
- Frozen after initialization so generation settings cannot drift mid-run.
"""

import logging
from dataclasses import dataclass

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Lone surrogates are not encodable as UTF-8
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF


class InvalidConfigError(ValueError):
    pass


@dataclass(frozen=True)
class GenerationConfig:
    """
    Immutable container for generation settings.
    """
    seed: int = 12345
    algorithm: str = "pcg64"

    # Default string distribution: lengths in [min, max], codes in [min, max]
    string_min_length: int = 0
    string_max_length: int = 32
    string_min_code: int = 33
    string_max_code: int = 126

    # Default sequence distribution: lengths in [0, max]
    sequence_max_length: int = 32

    # Python ints are unbounded, so the "full range" is configured
    int_min: int = INT64_MIN
    int_max: int = INT64_MAX

    log_level: int = logging.WARNING

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.string_min_length < 0 or self.string_min_length > self.string_max_length:
            raise InvalidConfigError(
                f"String length bounds [{self.string_min_length}, {self.string_max_length}] are invalid."
            )
        if not 0 <= self.string_min_code <= self.string_max_code <= 0x10FFFF:
            raise InvalidConfigError(
                f"String code bounds [{self.string_min_code}, {self.string_max_code}] are invalid."
            )
        if self.string_min_code <= SURROGATE_MAX and self.string_max_code >= SURROGATE_MIN:
            raise InvalidConfigError(
                f"String code bounds [{self.string_min_code:#x}, {self.string_max_code:#x}] overlap the "
                f"surrogate range [{SURROGATE_MIN:#x}, {SURROGATE_MAX:#x}], which cannot be encoded as UTF-8."
            )
        if self.sequence_max_length < 0:
            raise InvalidConfigError("sequence_max_length must be non-negative.")
        if self.int_min > self.int_max:
            raise InvalidConfigError(f"int bounds [{self.int_min}, {self.int_max}] are invalid.")
