from __future__ import annotations

from typing import Any


OWNER = "owner"

# Attribute used to record the owner on created objects
_OWNER_ATTR = "__namebind_owner__"


def set_owner(obj: object, owner: object) -> None:
    setattr(obj, _OWNER_ATTR, owner)


def get_owner(obj: object) -> Any:
    return getattr(obj, _OWNER_ATTR, None)


def owner_injections(owner: object):
    """Build a `Container.default_injections` hook that injects `owner` under `OWNER`.

    Example:
      container.default_injections = owner_injections(app)

    """

    def default_injections(full_name: str) -> dict[str, Any]:
        return {OWNER: owner}

    return default_injections
