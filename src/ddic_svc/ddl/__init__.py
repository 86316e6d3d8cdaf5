"""DDL generation - SQL dialects, type mapping and statement rendering."""

from .dialect import SqlDialect, to_sql_type
from .generator import DdlGenerator

__all__ = ["SqlDialect", "to_sql_type", "DdlGenerator"]
