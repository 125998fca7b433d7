from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class ContainerError(RuntimeError):
    pass


class InvalidSpecifierError(ContainerError, ValueError):
    """Raised when a string cannot be split into `type:name`."""


class UnknownSpecifierError(ContainerError, LookupError):
    """Raised when neither the resolver nor the registry knows a full name."""

    def __init__(self, full_name: str) -> None:
        self.full_name = full_name
        super().__init__(f"No factory found for specifier: {full_name!r}")


class CircularDependencyError(ContainerError):
    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Circular injection detected: {' -> '.join(self.chain)}")
