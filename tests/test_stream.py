"""
Verification script for the generator stream adaptor.
"""

import sys
import os
from itertools import count, islice

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from valuegen.core.random_variable import make_random
from valuegen.core.stream import GeneratorStream
from valuegen.distributions.scalar import UniformIntDistribution
from valuegen.utils.rng import RandomEngine


def make_pair(seed=7):
    dist = UniformIntDistribution(0, 100)
    stream = GeneratorStream(make_random(RandomEngine(seed=seed), dist))
    reference = make_random(RandomEngine(seed=seed), dist)
    return stream, reference


def test_pull_follows_generator():
    stream, reference = make_pair()
    assert [stream.pull() for _ in range(10)] == [reference() for _ in range(10)]


def test_pull_into_and_pull_n():
    stream, reference = make_pair()

    box = [None]
    assert stream.pull_into(box, 0) is stream
    assert box[0] == reference()

    destination = [None] * 5
    stream.pull_n(destination)
    assert destination == [reference() for _ in range(5)]


def test_skip_discards_values():
    stream, reference = make_pair()
    stream.skip(3).skip()
    for _ in range(4):
        reference()
    assert stream.pull() == reference()

    with pytest.raises(ValueError):
        stream.skip(-1)


def test_stream_is_always_good():
    stream, _ = make_pair()
    stream.skip(1000)
    assert stream.good()
    assert not stream.fail()
    assert not stream.bad()
    assert bool(stream)


def test_iteration_is_infinite():
    stream, reference = make_pair()
    assert list(islice(stream, 4)) == [reference() for _ in range(4)]


def test_wraps_any_nullary_callable():
    stream = GeneratorStream(count().__next__)
    assert [stream.pull() for _ in range(3)] == [0, 1, 2]

    with pytest.raises(TypeError):
        GeneratorStream(42)
