"""
Dictionary snapshot - the name-keyed wire form of a DataDictionary.

Object references are replaced by names so the snapshot is a plain tree
with no cycles. Wire keys are camelCase:

    {
      "domains": {"ZCHAR10": {"name": "ZCHAR10", "dataType": "CHAR", ...}},
      "dataElements": {...},
      "tables": {...},
      "structures": {...},
      "views": {...},
      "searchHelps": {...},
      "lockObjects": {...}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DomainDto:
    name: str
    data_type: str
    length: int
    decimals: int = 0
    description: str | None = None
    fixed_values: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "dataType": self.data_type,
            "length": self.length,
            "decimals": self.decimals,
            "description": self.description,
            "fixedValues": list(self.fixed_values),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DomainDto":
        return cls(
            name=data["name"],
            data_type=data["dataType"],
            length=data["length"],
            decimals=data.get("decimals", 0),
            description=data.get("description"),
            fixed_values=tuple(data.get("fixedValues") or ()),
        )


@dataclass(frozen=True, slots=True)
class DataElementDto:
    name: str
    domain_name: str
    short_label: str | None = None
    medium_label: str | None = None
    long_label: str | None = None
    documentation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "domainName": self.domain_name,
            "shortLabel": self.short_label,
            "mediumLabel": self.medium_label,
            "longLabel": self.long_label,
            "documentation": self.documentation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataElementDto":
        return cls(
            name=data["name"],
            domain_name=data["domainName"],
            short_label=data.get("shortLabel"),
            medium_label=data.get("mediumLabel"),
            long_label=data.get("longLabel"),
            documentation=data.get("documentation"),
        )


@dataclass(frozen=True, slots=True)
class FieldDto:
    field_name: str
    data_element_name: str
    key_field: bool = False
    nullable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "dataElementName": self.data_element_name,
            "keyField": self.key_field,
            "nullable": self.nullable,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldDto":
        return cls(
            field_name=data["fieldName"],
            data_element_name=data["dataElementName"],
            key_field=bool(data.get("keyField", False)),
            nullable=bool(data.get("nullable", False)),
        )


@dataclass(frozen=True, slots=True)
class TableDto:
    table_name: str
    description: str | None = None
    delivery_class: str = "A"
    buffered: bool = False
    fields: tuple[FieldDto, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "tableName": self.table_name,
            "description": self.description,
            "deliveryClass": self.delivery_class,
            "buffered": self.buffered,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TableDto":
        return cls(
            table_name=data["tableName"],
            description=data.get("description"),
            delivery_class=data.get("deliveryClass") or "A",
            buffered=bool(data.get("buffered", False)),
            fields=tuple(FieldDto.from_dict(f) for f in data.get("fields") or ()),
        )


@dataclass(frozen=True, slots=True)
class StructureDto:
    structure_name: str
    description: str | None = None
    fields: tuple[FieldDto, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "structureName": self.structure_name,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StructureDto":
        return cls(
            structure_name=data["structureName"],
            description=data.get("description"),
            fields=tuple(FieldDto.from_dict(f) for f in data.get("fields") or ()),
        )


@dataclass(frozen=True, slots=True)
class ViewDto:
    view_name: str
    view_type: str
    base_table_names: tuple[str, ...] = ()
    selected_fields: tuple[str, ...] = ()
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "viewName": self.view_name,
            "viewType": self.view_type,
            "baseTableNames": list(self.base_table_names),
            "selectedFields": list(self.selected_fields),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewDto":
        return cls(
            view_name=data["viewName"],
            view_type=data["viewType"],
            base_table_names=tuple(data.get("baseTableNames") or ()),
            selected_fields=tuple(data.get("selectedFields") or ()),
            description=data.get("description"),
        )


@dataclass(frozen=True, slots=True)
class SearchHelpDto:
    name: str
    selection_method_name: str | None = None
    display_fields: tuple[str, ...] = ()
    export_fields: tuple[str, ...] = ()
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "selectionMethodName": self.selection_method_name,
            "displayFields": list(self.display_fields),
            "exportFields": list(self.export_fields),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchHelpDto":
        return cls(
            name=data["name"],
            selection_method_name=data.get("selectionMethodName"),
            display_fields=tuple(data.get("displayFields") or ()),
            export_fields=tuple(data.get("exportFields") or ()),
            description=data.get("description"),
        )


@dataclass(frozen=True, slots=True)
class LockObjectDto:
    name: str
    primary_table_name: str
    secondary_table_names: tuple[str, ...] = ()
    lock_mode: str = "EXCLUSIVE"
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "primaryTableName": self.primary_table_name,
            "secondaryTableNames": list(self.secondary_table_names),
            "lockMode": self.lock_mode,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LockObjectDto":
        return cls(
            name=data["name"],
            primary_table_name=data["primaryTableName"],
            secondary_table_names=tuple(data.get("secondaryTableNames") or ()),
            lock_mode=data.get("lockMode") or "EXCLUSIVE",
            description=data.get("description"),
        )


def _section(data: dict[str, Any], key: str, parse: Callable[[dict[str, Any]], T]) -> dict[str, T]:
    return {name: parse(item) for name, item in (data.get(key) or {}).items()}


@dataclass(frozen=True, slots=True)
class DictionarySnapshot:
    """All dictionary objects, each section keyed by object name."""
    domains: dict[str, DomainDto] = field(default_factory=dict)
    data_elements: dict[str, DataElementDto] = field(default_factory=dict)
    tables: dict[str, TableDto] = field(default_factory=dict)
    structures: dict[str, StructureDto] = field(default_factory=dict)
    views: dict[str, ViewDto] = field(default_factory=dict)
    search_helps: dict[str, SearchHelpDto] = field(default_factory=dict)
    lock_objects: dict[str, LockObjectDto] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "domains": {k: v.to_dict() for k, v in self.domains.items()},
            "dataElements": {k: v.to_dict() for k, v in self.data_elements.items()},
            "tables": {k: v.to_dict() for k, v in self.tables.items()},
            "structures": {k: v.to_dict() for k, v in self.structures.items()},
            "views": {k: v.to_dict() for k, v in self.views.items()},
            "searchHelps": {k: v.to_dict() for k, v in self.search_helps.items()},
            "lockObjects": {k: v.to_dict() for k, v in self.lock_objects.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DictionarySnapshot":
        """
        Parse a snapshot from its wire form.

        Missing sections are treated as empty. Raises KeyError, TypeError
        or AttributeError on malformed entries.
        """
        return cls(
            domains=_section(data, "domains", DomainDto.from_dict),
            data_elements=_section(data, "dataElements", DataElementDto.from_dict),
            tables=_section(data, "tables", TableDto.from_dict),
            structures=_section(data, "structures", StructureDto.from_dict),
            views=_section(data, "views", ViewDto.from_dict),
            search_helps=_section(data, "searchHelps", SearchHelpDto.from_dict),
            lock_objects=_section(data, "lockObjects", LockObjectDto.from_dict),
        )
