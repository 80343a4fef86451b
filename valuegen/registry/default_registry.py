"""
Default Distribution Registry.

Responsibility boundaries:
- Maps a type descriptor to its canonical distribution without the caller
  naming one.
- Resolves tuples and sequences recursively through the same rule table.

Rules are evaluated in a fixed order: explicit registrations, then the
exact-type rules (boolean, string, tuple), then the category rules
(integral, floating point, sequence). A string is a sequence of characters,
so the string rule must stay ahead of the sequence rule.

Mutation constraints:
- Resolved distributions are immutable values and are cached per type.
  `register()` and `unregister()` invalidate the cache.
"""

import collections.abc
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np

from valuegen.config.config import GenerationConfig
from valuegen.distributions.base import Distribution
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
from valuegen.registry.concepts import (
    SEQUENCE_CONTAINERS,
    Capability,
    satisfies,
    sequence_container,
    sequence_element_type,
    type_args,
    type_origin,
)
from valuegen.utils.logger import AuditLogger

Factory = Callable[["DefaultDistributionRegistry", Any], Distribution]

_audit = AuditLogger("valuegen.registry")


class NoDefaultDistributionError(TypeError):
    """Raised when no rule resolves a default distribution for a type."""

    def __init__(self, descriptor: Any, message: str) -> None:
        super().__init__(message)
        self.descriptor = descriptor


def describe(descriptor: Any) -> str:
    """Human readable name of a type descriptor."""
    if isinstance(descriptor, type):
        return descriptor.__qualname__
    return repr(descriptor)


@dataclass(frozen=True)
class Rule:
    name: str
    capability: Capability
    factory: Factory


def _boolean_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    return BernoulliDistribution(result_type=descriptor)


def _string_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    config = registry.config
    return StringDistribution(
        element=UniformIntDistribution(config.string_min_code, config.string_max_code),
        size=UniformIntDistribution(config.string_min_length, config.string_max_length),
        container=descriptor,
    )


def _tuple_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    components = []
    for index, component in enumerate(type_args(descriptor)):
        components.append(registry.resolve_component(descriptor, component, f"tuple field {index}"))
    return TupleDistribution(*components)


def _integral_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    if descriptor is int:
        return UniformIntDistribution(registry.config.int_min, registry.config.int_max)
    info = np.iinfo(descriptor)
    return UniformIntDistribution(int(info.min), int(info.max), result_type=descriptor)


def _floating_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    info = np.finfo(descriptor)
    if descriptor is float:
        return UniformRealDistribution(float(info.min), float(info.max))
    return UniformRealDistribution(info.min, info.max, result_type=descriptor)


def _sequence_default(registry: "DefaultDistributionRegistry", descriptor: Any) -> Distribution:
    element_type = sequence_element_type(descriptor)
    element = registry.resolve_component(descriptor, element_type, "element type")
    return SequenceDistribution(
        element=element,
        size=UniformIntDistribution(0, registry.config.sequence_max_length),
        container=sequence_container(descriptor),
    )


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule("boolean", Capability.BOOLEAN, _boolean_default),
    Rule("string", Capability.STRING_LIKE, _string_default),
    Rule("tuple", Capability.TUPLE, _tuple_default),
    Rule("integral", Capability.INTEGRAL, _integral_default),
    Rule("floating_point", Capability.FLOATING_POINT, _floating_default),
    Rule("sequence", Capability.SEQUENCE, _sequence_default),
)


class DefaultDistributionRegistry:
    """
    Ordered predicate -> factory table for default distributions.
    """

    def __init__(self, config: Optional[GenerationConfig] = None, rules: Tuple[Rule, ...] = DEFAULT_RULES) -> None:
        self._config = config if config is not None else GenerationConfig()
        self._rules = tuple(rules)
        self._explicit: Dict[Any, Callable[[], Distribution]] = {}
        self._cache: Dict[Any, Distribution] = {}

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def register(self, descriptor: Any, factory: Union[Distribution, Callable[[], Distribution]]) -> None:
        """
        Give `descriptor` an explicit default, taking priority over every rule.

        Args:
            descriptor: The exact type to register.
            factory: A distribution, or a nullary callable returning one.
        """
        if isinstance(factory, Distribution):
            dist = factory
            factory = lambda: dist
        elif not callable(factory):
            raise TypeError(f"Cannot register {factory!r} as a distribution factory for {describe(descriptor)}.")
        self._explicit[descriptor] = factory
        self._cache.clear()

    def unregister(self, descriptor: Any) -> None:
        del self._explicit[descriptor]
        self._cache.clear()

    def is_registered(self, descriptor: Any) -> bool:
        return descriptor in self._explicit

    def has_default(self, descriptor: Any) -> bool:
        try:
            self.resolve(descriptor)
        except NoDefaultDistributionError:
            return False
        return True

    def resolve(self, descriptor: Any) -> Distribution:
        """
        Return the default distribution for `descriptor`.

        Raises:
            NoDefaultDistributionError: no rule matches the type, or a
                tuple field or sequence element type has no default.
        """
        cacheable = isinstance(descriptor, collections.abc.Hashable)
        if cacheable and descriptor in self._cache:
            return self._cache[descriptor]

        dist, rule_name = self._dispatch(descriptor)
        if not isinstance(dist, Distribution):
            raise NoDefaultDistributionError(
                descriptor,
                f"Rule '{rule_name}' for type {describe(descriptor)} returned {dist!r}, not a distribution.",
            )
        _audit.log_event("default_resolved", {"type": describe(descriptor), "rule": rule_name})
        if cacheable:
            self._cache[descriptor] = dist
        return dist

    def _dispatch(self, descriptor: Any) -> Tuple[Any, str]:
        if isinstance(descriptor, collections.abc.Hashable) and descriptor in self._explicit:
            return self._explicit[descriptor](), "explicit"

        for rule in self._rules:
            if satisfies(rule.capability, descriptor):
                return rule.factory(self, descriptor), rule.name

        tried = ", ".join(["explicit"] + [rule.name for rule in self._rules])
        container = type_origin(descriptor) or descriptor
        if isinstance(container, collections.abc.Hashable) and container in SEQUENCE_CONTAINERS:
            hint = f" Sequence-like types need an element type, e.g. {describe(descriptor)}[int]."
        else:
            hint = " Supply an explicit distribution or register one."
        raise NoDefaultDistributionError(
            descriptor,
            f"No default distribution for type {describe(descriptor)}: no rule matched (tried {tried}).{hint}",
        )

    def resolve_component(self, parent: Any, component: Any, role: str) -> Distribution:
        """Resolve a nested type, naming the enclosing type on failure."""
        try:
            return self.resolve(component)
        except NoDefaultDistributionError as exc:
            raise NoDefaultDistributionError(
                component,
                f"Cannot build default for {describe(parent)}: {role} {describe(component)} has no default. {exc}",
            ) from exc

    def adapt(self, target: Any, source: Any) -> AdaptedDistribution:
        """Default distribution of `source`, with each value converted to `target`."""
        return AdaptedDistribution(self.resolve(source), target)

    def clear_cache(self) -> None:
        self._cache.clear()


_default_registry = DefaultDistributionRegistry()


def default_registry() -> DefaultDistributionRegistry:
    """Return the process-wide registry used by `default_distribution_for`."""
    return _default_registry


def default_distribution_for(descriptor: Any) -> Distribution:
    """Return the canonical distribution for `descriptor` from the default registry."""
    return _default_registry.resolve(descriptor)


distribution_for = default_distribution_for


def register(descriptor: Any, factory: Union[Distribution, Callable[[], Distribution]]) -> None:
    _default_registry.register(descriptor, factory)


def adapt(target: Any, source: Any) -> AdaptedDistribution:
    return _default_registry.adapt(target, source)


if __name__ == "__main__":
    from typing import List

    print("--- Default distribution self-test ---")
    for descriptor in (bool, str, int, np.int8, float, Tuple[int, str], List[bytes]):
        print(f"{describe(descriptor):>28} -> {default_distribution_for(descriptor)!r}")

    try:
        default_distribution_for(object)
        print("FAILED: object resolved to a default distribution.")
    except NoDefaultDistributionError as e:
        print(f"\nCaught Expected NoDefaultDistributionError: {e}")
