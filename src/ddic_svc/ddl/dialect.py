"""SQL dialects and the domain-to-column type mapping."""

from __future__ import annotations

from enum import Enum

from ..errors import parse_enum, require_present
from ..internal.types import DataType, Domain


class SqlDialect(str, Enum):
    """Target databases for generated DDL."""
    POSTGRESQL = "POSTGRESQL"
    H2 = "H2"
    HANA = "HANA"

    @classmethod
    def parse(cls, value: "SqlDialect | str | None") -> "SqlDialect":
        return parse_enum(cls, value, "SQL dialect")


# Column type templates per (data type, dialect). Placeholders:
# {length}, {decimals}.
_TYPE_TEMPLATES: dict[DataType, dict[SqlDialect, str]] = {
    DataType.CHAR: {
        SqlDialect.POSTGRESQL: "CHAR({length})",
        SqlDialect.H2: "CHAR({length})",
        SqlDialect.HANA: "NCHAR({length})",
    },
    DataType.STRING: {
        SqlDialect.POSTGRESQL: "VARCHAR({length})",
        SqlDialect.H2: "VARCHAR({length})",
        SqlDialect.HANA: "NVARCHAR({length})",
    },
    DataType.NUMC: {
        SqlDialect.POSTGRESQL: "CHAR({length})",
        SqlDialect.H2: "CHAR({length})",
        SqlDialect.HANA: "NCHAR({length})",
    },
    DataType.INTEGER: dict.fromkeys(SqlDialect, "INTEGER"),
    DataType.DECIMAL: dict.fromkeys(SqlDialect, "DECIMAL({length}, {decimals})"),
    DataType.DATE: dict.fromkeys(SqlDialect, "DATE"),
    DataType.TIME: dict.fromkeys(SqlDialect, "TIME"),
    DataType.TIMESTAMP: dict.fromkeys(SqlDialect, "TIMESTAMP"),
    DataType.RAW: {
        SqlDialect.POSTGRESQL: "BYTEA",
        SqlDialect.H2: "BINARY({length})",
        SqlDialect.HANA: "VARBINARY({length})",
    },
}


def to_sql_type(domain: Domain, dialect: SqlDialect | str) -> str:
    """
    Render the column type for a domain in the given dialect.

    Args:
        domain: Domain providing data type, length and decimals
        dialect: Target dialect (member or name)

    Returns:
        SQL type text, e.g. "CHAR(3)" or "DECIMAL(15, 2)"
    """
    require_present(domain, "Domain must not be null")
    dialect = SqlDialect.parse(dialect)
    template = _TYPE_TEMPLATES[domain.data_type][dialect]
    return template.format(length=domain.length, decimals=domain.decimals)
