"""
External schema types - views, search helps and lock objects.

External objects are what applications and users see. Each one is built
on top of tables from the conceptual layer and holds direct references
to those table objects.
"""

from __future__ import annotations

from enum import Enum

from ..conceptual.types import TableDefinition
from ..errors import parse_enum, require_not_blank, require_present


class ViewType(str, Enum):
    """Kinds of dictionary views."""
    DATABASE = "DATABASE"        # Join over tables, created on the database
    PROJECTION = "PROJECTION"    # Subset of the fields of one table
    MAINTENANCE = "MAINTENANCE"  # Used by maintenance dialogs
    HELP = "HELP"                # Selection method for search helps


class LockMode(str, Enum):
    """Lock modes a lock object can request."""
    SHARED = "SHARED"
    EXCLUSIVE = "EXCLUSIVE"
    EXCLUSIVE_NON_CUMULATIVE = "EXCLUSIVE_NON_CUMULATIVE"


class ViewDefinition:
    """
    A named projection or join over one or more tables.

    Base tables are object references and may repeat. Selected fields are
    plain names; the consistency validator checks they exist in at least
    one base table.
    """

    def __init__(
        self,
        view_name: str,
        view_type: ViewType | str,
        description: str | None = None,
    ):
        require_not_blank(view_name, "View name must not be blank")
        self._view_name = view_name
        self._view_type = parse_enum(ViewType, view_type, "View type")
        self._base_tables: list[TableDefinition] = []
        self._selected_fields: list[str] = []
        self.description = description

    def add_base_table(self, table: TableDefinition) -> None:
        require_present(table, "Base table must not be null")
        self._base_tables.append(table)

    def add_selected_field(self, field_name: str) -> None:
        require_not_blank(field_name, "Field name must not be blank")
        self._selected_fields.append(field_name)

    @property
    def view_name(self) -> str:
        return self._view_name

    @property
    def name(self) -> str:
        return self._view_name

    @property
    def view_type(self) -> ViewType:
        return self._view_type

    @property
    def base_tables(self) -> tuple[TableDefinition, ...]:
        return tuple(self._base_tables)

    @property
    def selected_fields(self) -> tuple[str, ...]:
        return tuple(self._selected_fields)

    def __repr__(self) -> str:
        return (
            f"ViewDefinition(name={self._view_name!r}, type={self._view_type.value}, "
            f"base_tables={len(self._base_tables)})"
        )


class SearchHelp:
    """
    Value-lookup specification bound to a single selection-method table.

    Display fields are shown in the hit list; export fields are returned
    to the calling screen.
    """

    def __init__(
        self,
        name: str,
        selection_method: TableDefinition | None = None,
        description: str | None = None,
    ):
        require_not_blank(name, "Search help name must not be blank")
        self._name = name
        self.selection_method = selection_method
        self._display_fields: list[str] = []
        self._export_fields: list[str] = []
        self.description = description

    def add_display_field(self, field_name: str) -> None:
        require_not_blank(field_name, "Display field name must not be blank")
        self._display_fields.append(field_name)

    def add_export_field(self, field_name: str) -> None:
        require_not_blank(field_name, "Export field name must not be blank")
        self._export_fields.append(field_name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def display_fields(self) -> tuple[str, ...]:
        return tuple(self._display_fields)

    @property
    def export_fields(self) -> tuple[str, ...]:
        return tuple(self._export_fields)

    def __repr__(self) -> str:
        selection = self.selection_method.table_name if self.selection_method else None
        return f"SearchHelp(name={self._name!r}, selection_method={selection!r})"


class LockObject:
    """
    Concurrency-control specification over a primary table and optional
    secondary tables.
    """

    def __init__(
        self,
        name: str,
        primary_table: TableDefinition,
        lock_mode: LockMode | str = LockMode.EXCLUSIVE,
        description: str | None = None,
    ):
        require_not_blank(name, "Lock object name must not be blank")
        require_present(primary_table, "Primary table must not be null")
        self._name = name
        self._primary_table = primary_table
        self._secondary_tables: list[TableDefinition] = []
        self.lock_mode = lock_mode
        self.description = description

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    @lock_mode.setter
    def lock_mode(self, value: LockMode | str) -> None:
        self._lock_mode = parse_enum(LockMode, value, "Lock mode")

    def add_secondary_table(self, table: TableDefinition) -> None:
        require_present(table, "Secondary table must not be null")
        self._secondary_tables.append(table)

    @property
    def name(self) -> str:
        return self._name

    @property
    def primary_table(self) -> TableDefinition:
        return self._primary_table

    @property
    def secondary_tables(self) -> tuple[TableDefinition, ...]:
        return tuple(self._secondary_tables)

    def references_table(self, table_name: str) -> bool:
        """True if table_name is the primary table or one of the secondary tables."""
        if self._primary_table.table_name == table_name:
            return True
        return any(t.table_name == table_name for t in self._secondary_tables)

    def __repr__(self) -> str:
        return (
            f"LockObject(name={self._name!r}, primary_table={self._primary_table.table_name!r}, "
            f"lock_mode={self.lock_mode.value})"
        )
