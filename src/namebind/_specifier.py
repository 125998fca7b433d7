from __future__ import annotations

from dataclasses import dataclass

from ._errors import InvalidSpecifierError


DELIMITER = ":"


def is_full_name(value: object) -> bool:
    return isinstance(value, str) and DELIMITER in value


@dataclass(frozen=True)
class Specifier:
    """A parsed `type:name` key.

    The type is everything before the first colon; the name is the rest
    (which may itself contain colons).
    """

    type: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> Specifier:
        if not isinstance(full_name, str):
            msg = f"Specifier must be a string, got {type(full_name).__name__}"
            raise InvalidSpecifierError(msg)

        type_, sep, name = full_name.partition(DELIMITER)
        if not sep:
            msg = f"Specifier {full_name!r} must have the form 'type:name'"
            raise InvalidSpecifierError(msg)
        if not type_:
            msg = f"Specifier {full_name!r} has an empty type"
            raise InvalidSpecifierError(msg)

        return cls(type=type_, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.type}{DELIMITER}{self.name}"

    def __str__(self) -> str:
        return self.full_name
