"""
Where-used (impact) analysis.

Answers "what depends on X" by scanning the dictionary on every call.
There is no persistent reverse index; dictionaries are small and
read-mostly.

Result maps only contain keys for non-empty usage lists. An unknown or
unused name yields an empty result, never an error.
"""

from __future__ import annotations

from typing import Iterable

from ..conceptual.types import FieldContainer
from ..errors import require_present
from .dictionary import DataDictionary

# Result keys
DATA_ELEMENTS = "dataElements"
TABLES = "tables"
STRUCTURES = "structures"
VIEWS = "views"
SEARCH_HELPS = "searchHelps"
LOCK_OBJECTS = "lockObjects"


def _uses_data_element(container: FieldContainer, data_element_name: str) -> bool:
    return any(f.data_element.name == data_element_name for f in container.fields)


def _non_empty(pairs: Iterable[tuple[str, list[str]]]) -> dict[str, list[str]]:
    return {key: names for key, names in pairs if names}


class WhereUsedAnalyzer:
    """Reverse-dependency queries over a DataDictionary."""

    def __init__(self, dictionary: DataDictionary):
        self._dictionary = require_present(dictionary, "DataDictionary must not be null")

    def data_elements_using_domain(self, domain_name: str) -> list[str]:
        """Names of all data elements built on the given domain."""
        return [
            element.name
            for element in self._dictionary.data_elements().values()
            if element.domain.name == domain_name
        ]

    def usages_of_data_element(self, data_element_name: str) -> dict[str, list[str]]:
        """
        Find all tables and structures with a field using the data element.

        Each table or structure is listed once, no matter how many of its
        fields use the data element.

        Returns:
            Dict with optional "tables" and "structures" keys
        """
        tables = [
            name
            for name, table in self._dictionary.tables().items()
            if _uses_data_element(table, data_element_name)
        ]
        structures = [
            name
            for name, structure in self._dictionary.structures().items()
            if _uses_data_element(structure, data_element_name)
        ]
        return _non_empty([(TABLES, tables), (STRUCTURES, structures)])

    def usages_of_table(self, table_name: str) -> dict[str, list[str]]:
        """
        Find all views, search helps and lock objects referencing a table.

        Returns:
            Dict with optional "views", "searchHelps" and "lockObjects" keys
        """
        views = [
            view.view_name
            for view in self._dictionary.views().values()
            if any(t.table_name == table_name for t in view.base_tables)
        ]
        search_helps = [
            search_help.name
            for search_help in self._dictionary.search_helps().values()
            if search_help.selection_method is not None
            and search_help.selection_method.table_name == table_name
        ]
        lock_objects = [
            lock.name
            for lock in self._dictionary.lock_objects().values()
            if lock.references_table(table_name)
        ]
        return _non_empty([
            (VIEWS, views),
            (SEARCH_HELPS, search_helps),
            (LOCK_OBJECTS, lock_objects),
        ])

    def all_usages_of_domain(self, domain_name: str) -> dict[str, list[str]]:
        """
        Where-used analysis for a domain down to table/structure level.

        Finds the data elements on the domain, then every table and
        structure using any of them (de-duplicated, first-seen order).
        Views, search helps and lock objects on those tables are not
        followed.

        Returns:
            Dict with optional "dataElements", "tables" and "structures" keys
        """
        data_elements = self.data_elements_using_domain(domain_name)

        tables: dict[str, None] = {}
        structures: dict[str, None] = {}
        for element_name in data_elements:
            usages = self.usages_of_data_element(element_name)
            tables.update(dict.fromkeys(usages.get(TABLES, [])))
            structures.update(dict.fromkeys(usages.get(STRUCTURES, [])))

        return _non_empty([
            (DATA_ELEMENTS, data_elements),
            (TABLES, list(tables)),
            (STRUCTURES, list(structures)),
        ])
