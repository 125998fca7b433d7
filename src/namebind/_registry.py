from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, NamedTuple

from ._errors import InvalidSpecifierError
from ._specifier import Specifier, is_full_name


if TYPE_CHECKING:
    # A registry key: a parsed full name, or a bare type string
    Target = Specifier | str


@dataclass(frozen=True)
class RegistrationOptions:
    """Options stored with a registration.

    `None` means "not set at this level": a type-level value (or the default,
    `True`) is used instead.
    """

    singleton: bool | None = None
    instantiate: bool | None = None


OPTION_NAMES = frozenset(f.name for f in fields(RegistrationOptions))


class Registration(NamedTuple):
    factory: Any
    options: RegistrationOptions


class Injection(NamedTuple):
    property_name: str
    source: str


class Registry:
    """Passive store of factories, options and injection rules.

    Every key is a specifier string. Factories and name-level rules use a
    full name (`"router:main"`); options and injection rules may also target
    a bare type (`"router"`), in which case they apply to every full name of
    that type.
    """

    def __init__(self) -> None:
        self._registrations: dict[Specifier, Any] = {}
        self._options: dict[Target, RegistrationOptions] = {}
        self._injections: dict[Target, list[Injection]] = {}
        self._lock = threading.RLock()

    def register(
        self,
        full_name: str,
        factory: Any,
        options: RegistrationOptions | Mapping[str, bool] | None = None,
    ) -> None:
        """Register `factory` under `full_name`, replacing any previous registration.

        Example:
          registry.register("router:main", Router)
          registry.register("config:app", settings, {"instantiate": False})

        """
        spec = Specifier.parse(full_name)
        opts = _coerce_options(options) if options is not None else None

        with self._lock:
            self._registrations[spec] = factory
            if opts is None:
                self._options.pop(spec, None)
            else:
                self._options[spec] = opts

    def unregister(self, full_name: str) -> None:
        spec = Specifier.parse(full_name)
        with self._lock:
            self._registrations.pop(spec, None)
            self._options.pop(spec, None)
            self._injections.pop(spec, None)

    def registration_for(self, full_name: str) -> Registration | None:
        """Exact lookup of a full name. No type-level fallback."""
        spec = Specifier.parse(full_name)
        with self._lock:
            if spec not in self._registrations:
                return None
            return Registration(
                factory=self._registrations[spec],
                options=self._options.get(spec, RegistrationOptions()),
            )

    def register_option(self, target: str, option: str, value: bool) -> None:
        key = _target_key(target)
        _check_option_name(option)
        with self._lock:
            current = self._options.get(key, RegistrationOptions())
            self._options[key] = replace(current, **{option: value})

    def unregister_option(self, target: str, option: str) -> None:
        key = _target_key(target)
        _check_option_name(option)
        with self._lock:
            current = self._options.get(key)
            if current is not None:
                self._options[key] = replace(current, **{option: None})

    def registered_option(self, target: str, option: str) -> bool | None:
        _check_option_name(option)
        return getattr(self.registered_options(target), option)

    def registered_options(self, target: str) -> RegistrationOptions:
        """Options stored for exactly `target`, unset fields left as `None`."""
        key = _target_key(target)
        with self._lock:
            return self._options.get(key, RegistrationOptions())

    def options_for(self, full_name: str) -> RegistrationOptions:
        """Effective options for a full name.

        Name-level values win over type-level ones; anything unset at both
        levels is `True`.
        """
        spec = Specifier.parse(full_name)
        with self._lock:
            by_name = self._options.get(spec, RegistrationOptions())
            by_type = self._options.get(spec.type, RegistrationOptions())

        resolved = {}
        for name in OPTION_NAMES:
            value = getattr(by_name, name)
            if value is None:
                value = getattr(by_type, name)
            resolved[name] = True if value is None else value
        return RegistrationOptions(**resolved)

    def register_injection(self, target: str, property_name: str, injected_full_name: str) -> None:
        """Inject `injected_full_name` as `property_name` into instances of `target`.

        `target` is either a full name (`"foo:bar"`) or a bare type (`"foo"`).
        """
        key = _target_key(target)
        if not isinstance(property_name, str) or not property_name:
            msg = f"Injection property name must be a non-empty string, got {property_name!r}"
            raise ValueError(msg)
        source = Specifier.parse(injected_full_name)

        with self._lock:
            self._injections.setdefault(key, []).append(Injection(property_name, source.full_name))

    def injections_for(self, full_name: str) -> list[Injection]:
        """Type-level rules followed by name-level rules, each in registration order."""
        spec = Specifier.parse(full_name)
        with self._lock:
            return [*self._injections.get(spec.type, ()), *self._injections.get(spec, ())]


def _target_key(target: str) -> Target:
    if is_full_name(target):
        return Specifier.parse(target)

    if not isinstance(target, str) or not target:
        msg = f"Target must be a full name or a non-empty type, got {target!r}"
        raise InvalidSpecifierError(msg)
    return target


def _check_option_name(option: str) -> None:
    if option not in OPTION_NAMES:
        msg = f"Unknown registration option {option!r}; expected one of {sorted(OPTION_NAMES)}"
        raise ValueError(msg)


def _coerce_options(options: RegistrationOptions | Mapping[str, bool]) -> RegistrationOptions:
    if isinstance(options, RegistrationOptions):
        return options

    if not isinstance(options, Mapping):
        msg = f"Registration options must be RegistrationOptions or a mapping, got {type(options).__name__}"
        raise TypeError(msg)

    for option in options:
        _check_option_name(option)
    return RegistrationOptions(**options)
