from __future__ import annotations

import inspect
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Resolver(Protocol):
    """External lookup consulted before the registry.

    `retrieve` returns a factory for the exact specifier, or `None` when the
    resolver has nothing to offer.
    """

    def retrieve(self, specifier: str) -> Any: ...


@runtime_checkable
class IdentifyingResolver(Resolver, Protocol):
    def identify(self, full_name: str, referrer: str) -> str: ...


@runtime_checkable
class Factory(Protocol):
    def create(self, injections: dict[str, Any]) -> Any: ...


def validate_conformance(obj: object, proto_cls: type) -> None:
    """Best-effort structural check of `obj` against the methods of `proto_cls`.

    Checks presence, callability and required positional arity. Raises
    `TypeError` listing everything that does not fit.
    """
    missing: list[str] = []
    signature_mismatches: list[str] = []

    for name, proto_attr in _protocol_methods(proto_cls):
        attr = getattr(obj, name, None)
        if attr is None:
            missing.append(name)
            continue

        if not callable(attr):
            signature_mismatches.append(f"{name}: not callable")
            continue

        try:
            impl_sig = inspect.signature(attr)
        except (TypeError, ValueError):
            # builtins and some C callables have no signature; accept them
            continue

        proto_params = [p for p in inspect.signature(proto_attr).parameters.values() if p.name != "self"]
        if not _accepts_positional(impl_sig, len(proto_params)):
            signature_mismatches.append(
                f"{name}: cannot be called with {len(proto_params)} positional argument(s)"
            )

    if missing or signature_mismatches:
        msgs = []
        if missing:
            msgs.append(f"missing members: {', '.join(missing)}")
        if signature_mismatches:
            msgs.append(f"signature mismatches: {', '.join(signature_mismatches)}")

        msg = f"{obj!r} does not conform to {proto_cls.__name__}: {'; '.join(msgs)}"
        raise TypeError(msg)


def _protocol_methods(proto_cls: type) -> list[tuple[str, Any]]:
    methods = {}
    for klass in reversed(proto_cls.__mro__):
        if klass is object or klass is Protocol or getattr(klass, "_is_protocol", False) is False:
            continue
        for name, attr in vars(klass).items():
            if not name.startswith("_") and inspect.isfunction(attr):
                methods[name] = attr
    return list(methods.items())


def _accepts_positional(sig: inspect.Signature, count: int) -> bool:
    try:
        sig.bind(*([None] * count))
    except TypeError:
        return False
    return True
