"""
Dictionary serializer - converts a DataDictionary to and from snapshots.

Decoding replays registrations in dependency order:
Domains → DataElements → Tables → Structures → Views → SearchHelps →
LockObjects. A name that refers to an object not yet rebuilt is a
serialization error; there is no forward-reference resolution.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

import yaml

from ..conceptual.types import FieldContainer, FieldDefinition, Structure, TableDefinition
from ..external.types import LockObject, SearchHelp, ViewDefinition
from ..internal.types import DataElement, Domain, ValueRange
from ..registry.dictionary import DataDictionary
from .snapshot import (
    DataElementDto, DictionarySnapshot, DomainDto, FieldDto, LockObjectDto,
    SearchHelpDto, StructureDto, TableDto, ViewDto,
)

logger = logging.getLogger(__name__)


class DictionarySerializationError(Exception):
    """Raised when a dictionary cannot be encoded, decoded, read or written."""
    pass


# =============================================================================
# Entity to DTO
# =============================================================================

def field_dtos(container: FieldContainer) -> tuple[FieldDto, ...]:
    return tuple(
        FieldDto(
            field_name=f.field_name,
            data_element_name=f.data_element.name,
            key_field=f.key_field,
            nullable=f.nullable,
        )
        for f in container.fields
    )


def domain_dto(domain: Domain) -> DomainDto:
    return DomainDto(
        name=domain.name,
        data_type=domain.data_type.value,
        length=domain.length,
        decimals=domain.decimals,
        description=domain.description,
        fixed_values=domain.value_range.fixed_values if domain.value_range is not None else (),
    )


def data_element_dto(element: DataElement) -> DataElementDto:
    return DataElementDto(
        name=element.name,
        domain_name=element.domain.name,
        short_label=element.short_label,
        medium_label=element.medium_label,
        long_label=element.long_label,
        documentation=element.documentation,
    )


def table_dto(table: TableDefinition) -> TableDto:
    return TableDto(
        table_name=table.table_name,
        description=table.description,
        delivery_class=table.delivery_class.value,
        buffered=table.buffered,
        fields=field_dtos(table),
    )


def structure_dto(structure: Structure) -> StructureDto:
    return StructureDto(
        structure_name=structure.structure_name,
        description=structure.description,
        fields=field_dtos(structure),
    )


def view_dto(view: ViewDefinition) -> ViewDto:
    return ViewDto(
        view_name=view.view_name,
        view_type=view.view_type.value,
        base_table_names=tuple(t.table_name for t in view.base_tables),
        selected_fields=view.selected_fields,
        description=view.description,
    )


def search_help_dto(search_help: SearchHelp) -> SearchHelpDto:
    selection = search_help.selection_method
    return SearchHelpDto(
        name=search_help.name,
        selection_method_name=selection.table_name if selection is not None else None,
        display_fields=search_help.display_fields,
        export_fields=search_help.export_fields,
        description=search_help.description,
    )


def lock_object_dto(lock_object: LockObject) -> LockObjectDto:
    return LockObjectDto(
        name=lock_object.name,
        primary_table_name=lock_object.primary_table.table_name,
        secondary_table_names=tuple(t.table_name for t in lock_object.secondary_tables),
        lock_mode=lock_object.lock_mode.value,
        description=lock_object.description,
    )


class DictionarySerializer:
    """Converts dictionaries to snapshots, JSON and YAML, and back."""

    # =========================================================================
    # Snapshot conversion
    # =========================================================================

    def to_snapshot(self, dictionary: DataDictionary) -> DictionarySnapshot:
        """Capture a dictionary as a name-keyed snapshot."""
        return DictionarySnapshot(
            domains={k: domain_dto(v) for k, v in dictionary.domains().items()},
            data_elements={k: data_element_dto(v) for k, v in dictionary.data_elements().items()},
            tables={k: table_dto(v) for k, v in dictionary.tables().items()},
            structures={k: structure_dto(v) for k, v in dictionary.structures().items()},
            views={k: view_dto(v) for k, v in dictionary.views().items()},
            search_helps={k: search_help_dto(v) for k, v in dictionary.search_helps().items()},
            lock_objects={k: lock_object_dto(v) for k, v in dictionary.lock_objects().items()},
        )

    def from_snapshot(self, snapshot: DictionarySnapshot) -> DataDictionary:
        """
        Rebuild a fully wired dictionary from a snapshot.

        Raises:
            DictionarySerializationError: If a referenced name is missing or
                an entry is not a valid dictionary object
        """
        dictionary = DataDictionary()
        try:
            self._replay(snapshot, dictionary)
        except ValueError as e:
            # InvalidArgumentError and DuplicateNameError
            raise DictionarySerializationError(f"Invalid dictionary snapshot: {e}") from e

        counts = dictionary.count()
        logger.info(
            f"Rebuilt dictionary: {counts['domains']} domains, "
            f"{counts['dataElements']} data elements, {counts['tables']} tables, "
            f"{counts['total']} objects total"
        )
        return dictionary

    def _replay(self, snapshot: DictionarySnapshot, dd: DataDictionary) -> None:
        for dto in snapshot.domains.values():
            domain = Domain(
                dto.name,
                dto.data_type,
                dto.length,
                dto.decimals,
                description=dto.description,
            )
            if dto.fixed_values:
                domain.value_range = ValueRange(dto.fixed_values)
            dd.register_domain(domain)

        for dto in snapshot.data_elements.values():
            dd.register_data_element(DataElement(
                dto.name,
                self._lookup(dd.get_domain, "Domain", dto.domain_name),
                short_label=dto.short_label,
                medium_label=dto.medium_label,
                long_label=dto.long_label,
                documentation=dto.documentation,
            ))

        for dto in snapshot.tables.values():
            table = TableDefinition(
                dto.table_name,
                description=dto.description,
                delivery_class=dto.delivery_class,
                buffered=dto.buffered,
            )
            self._add_fields(dd, table, dto.fields)
            dd.register_table(table)

        for dto in snapshot.structures.values():
            structure = Structure(dto.structure_name, description=dto.description)
            self._add_fields(dd, structure, dto.fields)
            dd.register_structure(structure)

        for dto in snapshot.views.values():
            view = ViewDefinition(dto.view_name, dto.view_type, description=dto.description)
            for table_name in dto.base_table_names:
                view.add_base_table(self._lookup(dd.get_table, "Table", table_name))
            for field_name in dto.selected_fields:
                view.add_selected_field(field_name)
            dd.register_view(view)

        for dto in snapshot.search_helps.values():
            selection = None
            if dto.selection_method_name is not None:
                selection = self._lookup(dd.get_table, "Table", dto.selection_method_name)
            search_help = SearchHelp(dto.name, selection, description=dto.description)
            for field_name in dto.display_fields:
                search_help.add_display_field(field_name)
            for field_name in dto.export_fields:
                search_help.add_export_field(field_name)
            dd.register_search_help(search_help)

        for dto in snapshot.lock_objects.values():
            lock = LockObject(
                dto.name,
                self._lookup(dd.get_table, "Table", dto.primary_table_name),
                lock_mode=dto.lock_mode,
                description=dto.description,
            )
            for table_name in dto.secondary_table_names:
                lock.add_secondary_table(self._lookup(dd.get_table, "Table", table_name))
            dd.register_lock_object(lock)

    def _add_fields(self, dd: DataDictionary, container: FieldContainer, fields: Iterable[FieldDto]) -> None:
        for f in fields:
            container.add_field(FieldDefinition(
                f.field_name,
                self._lookup(dd.get_data_element, "DataElement", f.data_element_name),
                key_field=f.key_field,
                nullable=f.nullable,
            ))

    @staticmethod
    def _lookup(getter, kind: str, name: str) -> Any:
        entity = getter(name)
        if entity is None:
            raise DictionarySerializationError(f"{kind} not found: {name}")
        return entity

    # =========================================================================
    # Text formats
    # =========================================================================

    def to_dict(self, dictionary: DataDictionary) -> dict[str, Any]:
        return self.to_snapshot(dictionary).to_dict()

    def from_dict(self, data: Any) -> DataDictionary:
        """Rebuild a dictionary from the decoded wire form."""
        if not isinstance(data, dict):
            raise DictionarySerializationError("Dictionary snapshot must be a mapping")
        try:
            snapshot = DictionarySnapshot.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise DictionarySerializationError(f"Malformed dictionary snapshot: {e!r}") from e
        return self.from_snapshot(snapshot)

    def to_json(self, dictionary: DataDictionary) -> str:
        return json.dumps(self.to_dict(dictionary), indent=2, ensure_ascii=False)

    def from_json(self, text: str) -> DataDictionary:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DictionarySerializationError(f"Failed to deserialize dictionary from JSON: {e}") from e
        return self.from_dict(data)

    def to_yaml(self, dictionary: DataDictionary) -> str:
        return yaml.dump(
            self.to_dict(dictionary),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    def from_yaml(self, text: str) -> DataDictionary:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DictionarySerializationError(f"Failed to deserialize dictionary from YAML: {e}") from e
        return self.from_dict(data or {})
