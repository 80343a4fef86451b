"""
Verification script for the default distribution registry.
"""

import sys
import os
import typing
from collections import deque
from typing import Deque, List, Sequence, Tuple

import numpy as np
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from valuegen.config.config import INT64_MAX, INT64_MIN, GenerationConfig, InvalidConfigError
from valuegen.distributions.composite import (
    AdaptedDistribution,
    SequenceDistribution,
    StringDistribution,
    TupleDistribution,
)
from valuegen.distributions.scalar import (
    BernoulliDistribution,
    UniformIntDistribution,
    UniformRealDistribution,
)
from valuegen.registry.concepts import Capability, satisfies
from valuegen.registry.default_registry import (
    DefaultDistributionRegistry,
    NoDefaultDistributionError,
    default_distribution_for,
    distribution_for,
)
from valuegen.utils.rng import RandomEngine

INT64 = UniformIntDistribution(INT64_MIN, INT64_MAX)


class Celsius:
    def __init__(self, degrees):
        self.degrees = degrees


def test_boolean_rule():
    assert default_distribution_for(bool) == BernoulliDistribution()
    assert default_distribution_for(np.bool_) == BernoulliDistribution(result_type=np.bool_)


def test_string_rule_beats_sequence_rule():
    dist = default_distribution_for(str)
    assert type(dist) is StringDistribution
    assert dist == StringDistribution()

    assert default_distribution_for(bytes) == StringDistribution(container=bytes)


def test_tuple_rule_is_recursive():
    dist = default_distribution_for(Tuple[int, str, bool])
    assert dist == TupleDistribution(INT64, StringDistribution(), BernoulliDistribution())

    value = dist(RandomEngine(seed=1))
    assert isinstance(value, tuple) and len(value) == 3
    assert isinstance(value[0], int) and isinstance(value[1], str) and isinstance(value[2], bool)


def test_integral_rule():
    assert default_distribution_for(int) == INT64
    assert default_distribution_for(np.int16) == UniformIntDistribution(-32768, 32767, result_type=np.int16)
    assert default_distribution_for(np.uint64) == UniformIntDistribution(0, 2 ** 64 - 1, result_type=np.uint64)


def test_floating_rule():
    info = np.finfo(np.float64)
    assert default_distribution_for(float) == UniformRealDistribution(float(info.min), float(info.max))

    dist = default_distribution_for(np.float32)
    assert dist.result_type is np.float32
    engine = RandomEngine(seed=2)
    assert all(np.isfinite(dist(engine)) for _ in range(100))


def test_sequence_rule():
    dist = default_distribution_for(List[int])
    assert dist == SequenceDistribution(INT64, size=UniformIntDistribution(0, 32), container=list)

    assert default_distribution_for(Tuple[float, ...]).container is tuple
    assert default_distribution_for(Deque[str]).container is deque
    assert default_distribution_for(Sequence[bool]).container is list
    assert default_distribution_for(list[int]) == dist


def test_nested_resolution():
    engine = RandomEngine(seed=10)
    dist = default_distribution_for(List[Tuple[bool, str]])
    for _ in range(20):
        rows = dist(engine)
        assert isinstance(rows, list) and len(rows) <= 32
        for flag, text in rows:
            assert isinstance(flag, bool) and isinstance(text, str)


def test_unresolvable_type_names_type_and_rules():
    with pytest.raises(NoDefaultDistributionError) as excinfo:
        default_distribution_for(object)
    message = str(excinfo.value)
    assert "object" in message
    assert "no rule matched" in message
    assert "sequence" in message
    assert excinfo.value.descriptor is object


def test_bare_container_needs_element_type():
    with pytest.raises(NoDefaultDistributionError, match="element type"):
        default_distribution_for(list)


def test_bare_typing_aliases_need_arguments():
    # A bare Tuple must not pass for the empty tuple type
    with pytest.raises(NoDefaultDistributionError, match="element type"):
        default_distribution_for(Tuple)
    assert not satisfies(Capability.TUPLE, Tuple)
    assert satisfies(Capability.TUPLE, Tuple[()])
    assert default_distribution_for(Tuple[()]) == TupleDistribution()

    for alias in (List, Sequence, Deque, typing.MutableSequence):
        assert not satisfies(Capability.SEQUENCE, alias)
        with pytest.raises(NoDefaultDistributionError, match="need an element type"):
            default_distribution_for(alias)


def test_nested_failure_names_component():
    with pytest.raises(NoDefaultDistributionError) as excinfo:
        default_distribution_for(Tuple[int, object])
    assert "tuple field 1" in str(excinfo.value)
    assert excinfo.value.descriptor is object

    with pytest.raises(NoDefaultDistributionError, match="element type"):
        default_distribution_for(List[complex])


def test_explicit_registration_wins():
    registry = DefaultDistributionRegistry()
    assert registry.resolve(int) == INT64

    registry.register(int, UniformIntDistribution(0, 9))
    assert registry.is_registered(int)
    assert registry.resolve(int) == UniformIntDistribution(0, 9)
    # Nested lookups see the registration too
    assert registry.resolve(List[int]).element == UniformIntDistribution(0, 9)

    registry.unregister(int)
    assert registry.resolve(int) == INT64

    # The process-wide registry is untouched
    assert default_distribution_for(int) == INT64


def test_register_user_type_with_adapter():
    registry = DefaultDistributionRegistry()
    assert not registry.has_default(Celsius)

    registry.register(Celsius, lambda: registry.adapt(Celsius, float))
    dist = registry.resolve(Celsius)
    assert isinstance(dist, AdaptedDistribution)
    assert isinstance(dist(RandomEngine(seed=1)), Celsius)

    with pytest.raises(TypeError):
        registry.register(Celsius, 42)


def test_resolutions_are_cached():
    registry = DefaultDistributionRegistry()
    assert registry.resolve(List[int]) is registry.resolve(List[int])


def test_config_drives_defaults():
    config = GenerationConfig(string_max_length=4, sequence_max_length=2, int_min=0, int_max=9)
    registry = DefaultDistributionRegistry(config)
    engine = RandomEngine(seed=6)

    strings = registry.resolve(str)
    assert all(len(strings(engine)) <= 4 for _ in range(100))
    assert registry.resolve(List[int]) == SequenceDistribution(
        UniformIntDistribution(0, 9), size=UniformIntDistribution(0, 2)
    )


def test_invalid_config_rejected():
    with pytest.raises(InvalidConfigError):
        GenerationConfig(string_min_length=5, string_max_length=2)
    with pytest.raises(InvalidConfigError):
        GenerationConfig(int_min=1, int_max=0)

    # Lone surrogates cannot be written out as UTF-8
    with pytest.raises(InvalidConfigError, match="surrogate"):
        GenerationConfig(string_min_code=0xD800, string_max_code=0xDFFF, string_min_length=1)
    with pytest.raises(InvalidConfigError, match="surrogate"):
        GenerationConfig(string_min_code=33, string_max_code=0x10FFFF)

    config = GenerationConfig(string_min_code=0xE000, string_max_code=0xE0FF, string_min_length=1)
    text = DefaultDistributionRegistry(config).resolve(str)(RandomEngine(seed=12345))
    assert text.encode("utf-8")


def test_capability_oracle():
    assert satisfies(Capability.BOOLEAN, bool)
    assert not satisfies(Capability.INTEGRAL, bool)
    assert satisfies(Capability.INTEGRAL, np.uint8)
    assert satisfies(Capability.FLOATING_POINT, np.float16)
    assert satisfies(Capability.STRING_LIKE, str)
    assert not satisfies(Capability.SEQUENCE, str)
    assert satisfies(Capability.TUPLE, Tuple[int, int])
    assert not satisfies(Capability.TUPLE, Tuple[int, ...])
    assert satisfies(Capability.SEQUENCE, Tuple[int, ...])
    assert satisfies(Capability.EQUALITY_COMPARABLE, int)
    assert not satisfies(Capability.EQUALITY_COMPARABLE, np.ndarray)


def test_distribution_for_alias():
    assert distribution_for is default_distribution_for
