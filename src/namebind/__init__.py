"""String-keyed dependency injection container.

Factories are registered under `type:name` specifiers and looked up through a
container that caches singletons and applies injection rules declared per
name or per type. An optional resolver can supply factories that were never
registered, shadowing registry entries of the same name.

Exports:
- `Registry`: stores factories, registration options and injection rules.
- `Container`: resolves factories, creates and caches instances, applies injections.
- `Resolver`: protocol for external factory lookup (`retrieve`, optionally `identify`).
- `Specifier`: parsed `type:name` key.
- `set_owner` / `get_owner` / `owner_injections`: attach an owning context to created objects.
"""

from ._container import Container
from ._errors import CircularDependencyError, ContainerError, InvalidSpecifierError, UnknownSpecifierError
from ._owner import OWNER, get_owner, owner_injections, set_owner
from ._registry import Injection, Registration, RegistrationOptions, Registry
from ._resolver import Factory, IdentifyingResolver, Resolver
from ._specifier import Specifier


__all__ = [
    "OWNER",
    "CircularDependencyError",
    "Container",
    "ContainerError",
    "Factory",
    "IdentifyingResolver",
    "Injection",
    "InvalidSpecifierError",
    "Registration",
    "RegistrationOptions",
    "Registry",
    "Resolver",
    "Specifier",
    "UnknownSpecifierError",
    "get_owner",
    "owner_injections",
    "set_owner",
]
