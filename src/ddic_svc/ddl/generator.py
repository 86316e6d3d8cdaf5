"""
DDL generation for tables and views.

Statements are returned without a trailing terminator; only
generate_schema joins them into a script.
"""

from __future__ import annotations

import logging

from ..conceptual.types import TableDefinition
from ..errors import InvalidArgumentError, require_present
from ..external.types import ViewDefinition
from ..registry.dictionary import DataDictionary
from .dialect import SqlDialect, to_sql_type

logger = logging.getLogger(__name__)

INDENT = "    "


class DdlGenerator:
    """Renders CREATE TABLE / CREATE VIEW statements."""

    def generate_create_table(self, table: TableDefinition, dialect: SqlDialect | str) -> str:
        """
        Generate a CREATE TABLE statement.

        Columns keep their declaration order. Key fields, if any, become a
        trailing PRIMARY KEY clause in declaration order.

        Args:
            table: Table definition with at least one field
            dialect: Target SQL dialect

        Returns:
            The statement, ending with ")"

        Raises:
            InvalidArgumentError: If table or dialect is missing, or the
                table has no fields
        """
        require_present(table, "Table must not be null")
        require_present(dialect, "Dialect must not be null")
        dialect = SqlDialect.parse(dialect)

        fields = table.fields
        if not fields:
            raise InvalidArgumentError(f"Table {table.table_name} has no fields")

        key_names = [f.field_name for f in table.key_fields]

        lines = [f"CREATE TABLE {table.table_name} (\n"]
        for index, fld in enumerate(fields):
            column = f"{INDENT}{fld.field_name} {to_sql_type(fld.data_element.domain, dialect)}"
            if not fld.nullable:
                column += " NOT NULL"
            if index < len(fields) - 1 or key_names:
                column += ","
            lines.append(column + "\n")

        if key_names:
            lines.append(f"{INDENT}PRIMARY KEY ({', '.join(key_names)})\n")
        lines.append(")")
        return "".join(lines)

    def generate_create_view(self, view: ViewDefinition, dialect: SqlDialect | str) -> str:
        """
        Generate a CREATE VIEW statement.

        The output is identical for every dialect; the dialect is only
        checked for presence and validity.

        Raises:
            InvalidArgumentError: If view or dialect is missing, or the view
                has no base tables
        """
        require_present(view, "View must not be null")
        require_present(dialect, "Dialect must not be null")
        SqlDialect.parse(dialect)

        base_tables = view.base_tables
        if not base_tables:
            raise InvalidArgumentError(f"View {view.view_name} has no base tables")

        selected = view.selected_fields
        columns = ", ".join(selected) if selected else "*"
        tables = ", ".join(t.table_name for t in base_tables)
        return f"CREATE VIEW {view.view_name} AS\nSELECT {columns}\nFROM {tables}"

    def generate_schema(self, dictionary: DataDictionary, dialect: SqlDialect | str) -> str:
        """
        Generate a script for every table and view in a dictionary.

        Tables come first, then views, each in registration order. Tables
        without fields and views without base tables are skipped.
        Statements are separated by a blank line and terminated with ";".

        Returns:
            The script, or an empty string when nothing can be generated
        """
        require_present(dictionary, "DataDictionary must not be null")
        dialect = SqlDialect.parse(dialect)

        statements = []
        skipped = 0
        for table in dictionary.tables().values():
            if not table.fields:
                skipped += 1
                continue
            statements.append(self.generate_create_table(table, dialect))
        for view in dictionary.views().values():
            if not view.base_tables:
                skipped += 1
                continue
            statements.append(self.generate_create_view(view, dialect))

        if skipped:
            logger.info(f"Skipped {skipped} incomplete definitions in {dialect.value} schema")
        if not statements:
            return ""
        return ";\n\n".join(statements) + ";"
