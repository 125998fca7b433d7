from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ._errors import CircularDependencyError, UnknownSpecifierError
from ._registry import Registry
from ._resolver import Factory, IdentifyingResolver, Resolver, validate_conformance


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    DefaultInjections = Callable[[str], Mapping[str, Any]]


def no_default_injections(full_name: str) -> dict[str, Any]:
    return {}


class Container:
    """Creates, caches and injects instances for specifier strings.

    - factories come from the resolver first, then the registry
    - singletons (the default) are cached for the container's lifetime
    - `instantiate=False` registrations are returned as-is
    - `default_injections(full_name)` seeds every injection dict.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        resolver: Resolver | None = None,
        *,
        default_injections: DefaultInjections | None = None,
    ) -> None:
        if resolver is not None:
            validate_conformance(resolver, Resolver)

        self._registry = registry if registry is not None else Registry()
        self._resolver = resolver
        self.default_injections: DefaultInjections = default_injections or no_default_injections
        self._lookups: dict[str, Any] = {}
        self._resolving: list[str] = []
        self._lock = threading.RLock()

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def resolver(self) -> Resolver | None:
        return self._resolver

    def identify(self, full_name: str, referrer: str | None = None) -> str:
        """Normalize `full_name` relative to `referrer`.

        Only resolvers implementing `identify` can normalize, and only when a
        referrer is given; otherwise the name is returned unchanged.
        """
        if referrer is None or not isinstance(self._resolver, IdentifyingResolver):
            return full_name
        return self._resolver.identify(full_name, referrer)

    def factory_for(self, full_name: str, referrer: str | None = None) -> Any:
        """Return the factory for `full_name`.

        A resolver result always shadows a registry entry; the registry is
        only consulted when the resolver returns `None`.
        """
        full_name = self.identify(full_name, referrer)

        if self._resolver is not None:
            factory = self._resolver.retrieve(full_name)
            if factory is not None:
                logger.debug("Resolver supplied factory for %s", full_name)
                return factory

        registration = self._registry.registration_for(full_name)
        if registration is None:
            raise UnknownSpecifierError(full_name)
        return registration.factory

    def lookup(self, full_name: str, referrer: str | None = None) -> Any:
        """Return the instance for `full_name`, creating it if needed.

        Injected dependencies are looked up through this same container, so
        they follow the same caching and injection rules.
        """
        full_name = self.identify(full_name, referrer)

        with self._lock:
            if full_name in self._lookups:
                logger.debug("Cache hit for %s", full_name)
                return self._lookups[full_name]

            options = self._registry.options_for(full_name)
            factory = self.factory_for(full_name)

            if not options.instantiate:
                return factory

            if full_name in self._resolving:
                chain = [*self._resolving[self._resolving.index(full_name) :], full_name]
                raise CircularDependencyError(chain)

            self._resolving.append(full_name)
            try:
                instance = self._create(full_name, factory)
            finally:
                self._resolving.pop()

            if options.singleton:
                self._lookups[full_name] = instance

            return instance

    def is_cached(self, full_name: str) -> bool:
        with self._lock:
            return full_name in self._lookups

    def build_injections(self, full_name: str) -> dict[str, Any]:
        """Default injections overlaid with every registered injection rule."""
        injections = dict(self.default_injections(full_name))
        for injection in self._registry.injections_for(full_name):
            injections[injection.property_name] = self.lookup(injection.source)
        return injections

    def _create(self, full_name: str, factory: Any) -> Any:
        try:
            validate_conformance(factory, Factory)
        except TypeError as e:
            msg = f"Factory for {full_name!r} cannot create instances"
            raise TypeError(msg) from e

        injections = self.build_injections(full_name)
        instance = factory.create(injections)
        logger.debug("Created %s via %r", full_name, factory)
        return instance
