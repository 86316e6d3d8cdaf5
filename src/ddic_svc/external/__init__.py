"""External schema - views, search helps and lock objects."""

from .types import LockMode, LockObject, SearchHelp, ViewDefinition, ViewType

__all__ = [
    "LockMode",
    "LockObject",
    "SearchHelp",
    "ViewDefinition",
    "ViewType",
]
