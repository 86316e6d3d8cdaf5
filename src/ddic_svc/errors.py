"""Error types shared by the dictionary layers."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound=Enum)


class InvalidArgumentError(ValueError):
    """Raised when an entity or operation receives malformed input."""
    pass


class DuplicateNameError(ValueError):
    """Raised when a name is already registered for an entity kind."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} already registered: {name}")
        self.kind = kind
        self.name = name


def require_present(value: Any, message: str) -> Any:
    """Return value, raising InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(message)
    return value


def require_not_blank(value: str | None, message: str) -> str:
    """Return value, raising InvalidArgumentError if it is None or blank."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(message)
    return value


def parse_enum(enum_cls: type[E], value: E | str | None, label: str) -> E:
    """Coerce a name to a member of enum_cls, raising InvalidArgumentError if unknown."""
    require_present(value, f"{label} must not be null")
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        raise InvalidArgumentError(f"Unknown {label.lower()}: {value}") from None
