"""
Consistency validation across the three schema layers.

Checks performed:
- Every DataElement references a Domain registered under the same name,
  and the very same Domain object.
- Every field of every table and structure references a registered
  DataElement, again by identity.
- Every view has its base tables registered and only selects fields that
  exist in at least one of them.
- Every search help with a selection method has that table registered
  and only names display/export fields of that table.
- Incomplete definitions (views without tables or fields, tables without
  fields) are reported as warnings.

All findings are collected; validation never stops at the first problem
and never raises for an inconsistency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from ..conceptual.types import FieldDefinition
from ..errors import require_present
from .dictionary import DataDictionary

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Severity level for a single validation finding."""
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single validation finding."""
    severity: Severity
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity.value, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of a consistency validation run."""
    _findings: list[Finding] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self._findings.append(Finding(Severity.ERROR, message))

    def add_warning(self, message: str) -> None:
        self._findings.append(Finding(Severity.WARNING, message))

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(self._findings)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self._findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self._findings if f.severity == Severity.WARNING]

    def is_valid(self) -> bool:
        """True when neither errors nor warnings were recorded."""
        return not self._findings

    def has_errors(self) -> bool:
        return any(f.severity == Severity.ERROR for f in self._findings)

    def has_warnings(self) -> bool:
        return any(f.severity == Severity.WARNING for f in self._findings)

    def summary(self) -> str:
        if self.is_valid():
            return "no findings"
        return f"{len(self.errors)} errors, {len(self.warnings)} warnings"

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.is_valid(),
            "errors": [f.message for f in self.errors],
            "warnings": [f.message for f in self.warnings],
            "findings": [f.to_dict() for f in self._findings],
        }


class ConsistencyValidator:
    """Validates referential integrity of a DataDictionary."""

    def __init__(self, dictionary: DataDictionary):
        self._dictionary = require_present(dictionary, "DataDictionary must not be null")

    def validate(self) -> ValidationResult:
        """Run all consistency checks and return the combined result."""
        result = ValidationResult()
        self._validate_data_elements(result)
        self._validate_table_fields(result)
        self._validate_structure_fields(result)
        self._validate_views(result)
        self._validate_search_helps(result)
        self._validate_completeness(result)

        if result.has_errors():
            logger.warning(f"Dictionary validation: {result.summary()}")
        else:
            logger.info(f"Dictionary validation: {result.summary()}")
        return result

    def _validate_data_elements(self, result: ValidationResult) -> None:
        for element in self._dictionary.data_elements().values():
            domain = element.domain
            registered = self._dictionary.get_domain(domain.name)
            if registered is None:
                result.add_error(
                    f"DataElement '{element.name}' references Domain '{domain.name}' "
                    f"which is not registered in the dictionary"
                )
            elif registered is not domain:
                result.add_error(
                    f"DataElement '{element.name}' references a Domain instance '{domain.name}' "
                    f"that differs from the registered Domain with the same name"
                )

    def _validate_table_fields(self, result: ValidationResult) -> None:
        for table in self._dictionary.tables().values():
            self._validate_fields(result, table.fields, f"Table '{table.table_name}'")

    def _validate_structure_fields(self, result: ValidationResult) -> None:
        for structure in self._dictionary.structures().values():
            self._validate_fields(result, structure.fields, f"Structure '{structure.structure_name}'")

    def _validate_fields(
        self,
        result: ValidationResult,
        fields: Iterable[FieldDefinition],
        owner_label: str,
    ) -> None:
        for fld in fields:
            element = fld.data_element
            registered = self._dictionary.get_data_element(element.name)
            if registered is None:
                result.add_error(
                    f"{owner_label}, field '{fld.field_name}' references DataElement "
                    f"'{element.name}' which is not registered in the dictionary"
                )
            elif registered is not element:
                result.add_error(
                    f"{owner_label}, field '{fld.field_name}' references a DataElement instance "
                    f"'{element.name}' that differs from the registered DataElement with the same name"
                )

    def _validate_views(self, result: ValidationResult) -> None:
        for view in self._dictionary.views().values():
            # A selected field is satisfied by any one of the base tables
            available: set[str] = set()
            for table in view.base_tables:
                if self._dictionary.get_table(table.table_name) is None:
                    result.add_error(
                        f"View '{view.view_name}' references base table '{table.table_name}' "
                        f"which is not registered in the dictionary"
                    )
                available.update(table.field_names)

            for field_name in view.selected_fields:
                if field_name not in available:
                    result.add_error(
                        f"View '{view.view_name}' selects field '{field_name}' "
                        f"which does not exist in any of its base tables"
                    )

    def _validate_search_helps(self, result: ValidationResult) -> None:
        for search_help in self._dictionary.search_helps().values():
            table = search_help.selection_method
            if table is None:
                continue

            if self._dictionary.get_table(table.table_name) is None:
                result.add_error(
                    f"SearchHelp '{search_help.name}' references selection-method table "
                    f"'{table.table_name}' which is not registered in the dictionary"
                )

            for kind, names in (
                ("display", search_help.display_fields),
                ("export", search_help.export_fields),
            ):
                for field_name in names:
                    if not table.has_field(field_name):
                        result.add_error(
                            f"SearchHelp '{search_help.name}' {kind} field '{field_name}' "
                            f"does not exist in selection-method table '{table.table_name}'"
                        )

    def _validate_completeness(self, result: ValidationResult) -> None:
        for view in self._dictionary.views().values():
            if not view.base_tables:
                result.add_warning(f"View '{view.view_name}' has no base tables defined")
            elif not view.selected_fields:
                result.add_warning(f"View '{view.view_name}' has base tables but selects no fields")

        for table in self._dictionary.tables().values():
            if not table.fields:
                result.add_warning(f"Table '{table.table_name}' has no fields defined")


def validate(dictionary: DataDictionary) -> ValidationResult:
    """Validate a dictionary. Convenience wrapper around ConsistencyValidator."""
    return ConsistencyValidator(dictionary).validate()
