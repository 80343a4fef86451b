"""
Capability Oracle.

Responsibility boundaries:
- Answers `satisfies(Capability, type)` for plain Python types, `typing`
  generics and numpy scalar types.
- Knows nothing about distributions; the registry builds its rule table
  on top of these predicates.
"""

import collections
import collections.abc
import typing
from enum import Enum, auto
from typing import Any, Optional, Tuple

import numpy as np


class Capability(Enum):
    BOOLEAN = auto()
    STRING_LIKE = auto()
    TUPLE = auto()
    INTEGRAL = auto()
    FLOATING_POINT = auto()
    SEQUENCE = auto()
    EQUALITY_COMPARABLE = auto()


STRING_TYPES = (str, bytes)

# Origins accepted as "sequence-like" and the concrete container each produces
SEQUENCE_CONTAINERS = {
    list: list,
    tuple: tuple,
    collections.deque: collections.deque,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
}


def type_args(descriptor: Any) -> Tuple[Any, ...]:
    args = typing.get_args(descriptor)
    # Tuple[()] reports ((),) before Python 3.11
    if args == ((),):
        return ()
    return args


def type_origin(descriptor: Any) -> Any:
    return typing.get_origin(descriptor)


def is_fixed_tuple(descriptor: Any) -> bool:
    # Bare typing.Tuple names no fields at all, unlike Tuple[()]
    if type_origin(descriptor) is not tuple or descriptor is typing.Tuple:
        return False
    args = type_args(descriptor)
    return not (len(args) == 2 and args[1] is Ellipsis)


def sequence_element_type(descriptor: Any) -> Optional[Any]:
    """Element type of a sequence-like descriptor, or None if it has none."""
    origin = type_origin(descriptor)
    if origin not in SEQUENCE_CONTAINERS:
        return None
    args = type_args(descriptor)
    if origin is tuple:
        return args[0] if len(args) == 2 and args[1] is Ellipsis else None
    return args[0] if len(args) == 1 else None


def sequence_container(descriptor: Any) -> Any:
    return SEQUENCE_CONTAINERS[type_origin(descriptor)]


def _is_class(descriptor: Any) -> bool:
    return isinstance(descriptor, type)


def _is_boolean(descriptor: Any) -> bool:
    return descriptor is bool or descriptor is np.bool_


def _is_string_like(descriptor: Any) -> bool:
    return descriptor in STRING_TYPES


def _is_integral(descriptor: Any) -> bool:
    if not _is_class(descriptor) or _is_boolean(descriptor):
        return False
    return descriptor is int or issubclass(descriptor, np.integer)


def _is_floating_point(descriptor: Any) -> bool:
    if not _is_class(descriptor):
        return False
    return descriptor is float or issubclass(descriptor, np.floating)


def _is_sequence(descriptor: Any) -> bool:
    # Fixed tuples are aggregates, not sequences
    if is_fixed_tuple(descriptor):
        return False
    return sequence_element_type(descriptor) is not None


def _is_equality_comparable(descriptor: Any) -> bool:
    target = type_origin(descriptor) or descriptor
    if not _is_class(target):
        return False
    # ndarray.__eq__ is elementwise and yields an array, not a truth value
    if issubclass(target, np.ndarray):
        return False
    return getattr(target, "__eq__", None) is not None


_PREDICATES = {
    Capability.BOOLEAN: _is_boolean,
    Capability.STRING_LIKE: _is_string_like,
    Capability.TUPLE: is_fixed_tuple,
    Capability.INTEGRAL: _is_integral,
    Capability.FLOATING_POINT: _is_floating_point,
    Capability.SEQUENCE: _is_sequence,
    Capability.EQUALITY_COMPARABLE: _is_equality_comparable,
}


def satisfies(capability: Capability, descriptor: Any) -> bool:
    """Return True if the type descriptor has the given capability."""
    return _PREDICATES[capability](descriptor)
