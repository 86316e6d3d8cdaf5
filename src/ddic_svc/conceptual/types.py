"""
Conceptual schema types - fields, tables and structures.

A table is the central logical entity: an ordered collection of fields,
each backed by a DataElement. A structure has the same shape but no
physical storage semantics.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidArgumentError, parse_enum, require_not_blank, require_present
from ..internal.types import DataElement


class DeliveryClass(str, Enum):
    """Delivery class of a table (who owns and transports its contents)."""
    A = "A"  # Application table (master and transaction data)
    C = "C"  # Customizing table, maintained by the customer
    L = "L"  # Temporary data
    G = "G"  # Customizing table, protected against overwrites
    E = "E"  # Control table
    S = "S"  # System table
    W = "W"  # System table, transported with its own objects


@dataclass(frozen=True, eq=False, slots=True)
class FieldDefinition:
    """A single column of a table or structure."""
    field_name: str
    data_element: DataElement
    key_field: bool = False
    nullable: bool = False

    def __post_init__(self):
        require_not_blank(self.field_name, "Field name must not be blank")
        require_present(self.data_element, "Data element must not be null")


class FieldContainer:
    """Ordered, name-unique collection of fields shared by tables and structures."""

    def __init__(self):
        self._fields: dict[str, FieldDefinition] = {}

    def add_field(self, field: FieldDefinition) -> None:
        """Append a field. Duplicate field names are rejected."""
        require_present(field, "Field must not be null")
        if field.field_name in self._fields:
            raise InvalidArgumentError(f"Duplicate field: {field.field_name}")
        self._fields[field.field_name] = field

    def get_field(self, field_name: str) -> FieldDefinition | None:
        return self._fields.get(field_name)

    @property
    def fields(self) -> tuple[FieldDefinition, ...]:
        """All fields in declaration order."""
        return tuple(self._fields.values())

    @property
    def key_fields(self) -> tuple[FieldDefinition, ...]:
        """Key fields in declaration order."""
        return tuple(f for f in self._fields.values() if f.key_field)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def has_field(self, field_name: str) -> bool:
        return field_name in self._fields


class TableDefinition(FieldContainer):
    """
    A transparent table definition.

    Besides its fields a table carries physical metadata: the delivery
    class (default A) and whether buffering is enabled.
    """

    def __init__(
        self,
        table_name: str,
        description: str | None = None,
        delivery_class: DeliveryClass = DeliveryClass.A,
        buffered: bool = False,
    ):
        require_not_blank(table_name, "Table name must not be blank")
        super().__init__()
        self._table_name = table_name
        self.description = description
        self.delivery_class = delivery_class
        self.buffered = buffered

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def delivery_class(self) -> DeliveryClass:
        return self._delivery_class

    @delivery_class.setter
    def delivery_class(self, value: DeliveryClass | str) -> None:
        self._delivery_class = parse_enum(DeliveryClass, value, "Delivery class")

    @property
    def name(self) -> str:
        return self._table_name

    def __repr__(self) -> str:
        return (
            f"TableDefinition(name={self._table_name!r}, fields={len(self._fields)}, "
            f"delivery_class={self.delivery_class.value})"
        )


class Structure(FieldContainer):
    """A field grouping with no database table behind it."""

    def __init__(self, structure_name: str, description: str | None = None):
        require_not_blank(structure_name, "Structure name must not be blank")
        super().__init__()
        self._structure_name = structure_name
        self.description = description

    @property
    def structure_name(self) -> str:
        return self._structure_name

    @property
    def name(self) -> str:
        return self._structure_name

    def __repr__(self) -> str:
        return f"Structure(name={self._structure_name!r}, fields={len(self._fields)})"
