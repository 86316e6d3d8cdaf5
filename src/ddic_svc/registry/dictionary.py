"""
Thread-safe data dictionary.

The central registry owning every dictionary object, one name-keyed
mapping per object kind. Registration is append-only: names are unique
per kind and registered objects are never replaced or removed.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Mapping, TypeVar

from ..conceptual.types import Structure, TableDefinition
from ..errors import DuplicateNameError, require_present
from ..external.types import LockObject, SearchHelp, ViewDefinition
from ..internal.types import DataElement, Domain

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataDictionary:
    """
    Thread-safe registry for all dictionary objects.

    A single lock serialises registration across all seven kinds. Lookups
    and listings copy under the lock, so readers always see a consistent
    view and never observe a half-registered object.

    No cross-kind checks happen here: an object whose references point at
    unregistered objects is accepted. Use the ConsistencyValidator to find
    such inconsistencies.
    """

    def __init__(self):
        self._domains: dict[str, Domain] = {}
        self._data_elements: dict[str, DataElement] = {}
        self._tables: dict[str, TableDefinition] = {}
        self._structures: dict[str, Structure] = {}
        self._views: dict[str, ViewDefinition] = {}
        self._search_helps: dict[str, SearchHelp] = {}
        self._lock_objects: dict[str, LockObject] = {}
        self._lock = threading.RLock()

    def _register(self, store: dict[str, T], name: str, entity: T, kind: str) -> None:
        """Insert entity under name (assumes entity is not None)."""
        with self._lock:
            if name in store:
                raise DuplicateNameError(kind, name)
            store[name] = entity
        logger.debug(f"Registered {kind}: {name}")

    def _snapshot(self, store: dict[str, T]) -> Mapping[str, T]:
        with self._lock:
            return MappingProxyType(dict(store))

    # =========================================================================
    # Internal schema
    # =========================================================================

    def register_domain(self, domain: Domain) -> None:
        """
        Register a domain.

        Args:
            domain: The domain to register

        Raises:
            InvalidArgumentError: If domain is None
            DuplicateNameError: If a domain with the same name already exists
        """
        require_present(domain, "Domain must not be null")
        self._register(self._domains, domain.name, domain, "Domain")

    def get_domain(self, name: str) -> Domain | None:
        with self._lock:
            return self._domains.get(name)

    def domains(self) -> Mapping[str, Domain]:
        """Read-only view of all domains in registration order."""
        return self._snapshot(self._domains)

    def register_data_element(self, element: DataElement) -> None:
        """
        Register a data element.

        The element's domain does not have to be registered yet.

        Raises:
            InvalidArgumentError: If element is None
            DuplicateNameError: If a data element with the same name already exists
        """
        require_present(element, "Data element must not be null")
        self._register(self._data_elements, element.name, element, "DataElement")

    def get_data_element(self, name: str) -> DataElement | None:
        with self._lock:
            return self._data_elements.get(name)

    def data_elements(self) -> Mapping[str, DataElement]:
        return self._snapshot(self._data_elements)

    # =========================================================================
    # Conceptual schema
    # =========================================================================

    def register_table(self, table: TableDefinition) -> None:
        require_present(table, "Table must not be null")
        self._register(self._tables, table.table_name, table, "Table")

    def get_table(self, name: str) -> TableDefinition | None:
        with self._lock:
            return self._tables.get(name)

    def tables(self) -> Mapping[str, TableDefinition]:
        return self._snapshot(self._tables)

    def register_structure(self, structure: Structure) -> None:
        require_present(structure, "Structure must not be null")
        self._register(self._structures, structure.structure_name, structure, "Structure")

    def get_structure(self, name: str) -> Structure | None:
        with self._lock:
            return self._structures.get(name)

    def structures(self) -> Mapping[str, Structure]:
        return self._snapshot(self._structures)

    # =========================================================================
    # External schema
    # =========================================================================

    def register_view(self, view: ViewDefinition) -> None:
        require_present(view, "View must not be null")
        self._register(self._views, view.view_name, view, "View")

    def get_view(self, name: str) -> ViewDefinition | None:
        with self._lock:
            return self._views.get(name)

    def views(self) -> Mapping[str, ViewDefinition]:
        return self._snapshot(self._views)

    def register_search_help(self, search_help: SearchHelp) -> None:
        require_present(search_help, "Search help must not be null")
        self._register(self._search_helps, search_help.name, search_help, "SearchHelp")

    def get_search_help(self, name: str) -> SearchHelp | None:
        with self._lock:
            return self._search_helps.get(name)

    def search_helps(self) -> Mapping[str, SearchHelp]:
        return self._snapshot(self._search_helps)

    def register_lock_object(self, lock_object: LockObject) -> None:
        require_present(lock_object, "Lock object must not be null")
        self._register(self._lock_objects, lock_object.name, lock_object, "LockObject")

    def get_lock_object(self, name: str) -> LockObject | None:
        with self._lock:
            return self._lock_objects.get(name)

    def lock_objects(self) -> Mapping[str, LockObject]:
        return self._snapshot(self._lock_objects)

    # =========================================================================
    # Statistics
    # =========================================================================

    def count(self) -> dict[str, int]:
        """Get object counts per kind, plus a total."""
        with self._lock:
            counts = {
                "domains": len(self._domains),
                "dataElements": len(self._data_elements),
                "tables": len(self._tables),
                "structures": len(self._structures),
                "views": len(self._views),
                "searchHelps": len(self._search_helps),
                "lockObjects": len(self._lock_objects),
            }
        counts["total"] = sum(counts.values())
        return counts

    def is_empty(self) -> bool:
        return self.count()["total"] == 0

    def __repr__(self) -> str:
        counts = self.count()
        return f"DataDictionary(total={counts['total']})"
