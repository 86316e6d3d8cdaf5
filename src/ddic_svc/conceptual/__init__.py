"""Conceptual schema - tables, structures and their fields."""

from .types import DeliveryClass, FieldContainer, FieldDefinition, Structure, TableDefinition

__all__ = [
    "DeliveryClass",
    "FieldContainer",
    "FieldDefinition",
    "Structure",
    "TableDefinition",
]
