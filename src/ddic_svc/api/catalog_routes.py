"""FastAPI routes for registering and browsing dictionary objects."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from fastapi import APIRouter, HTTPException

from ..conceptual.types import FieldContainer, FieldDefinition, Structure, TableDefinition
from ..errors import InvalidArgumentError
from ..external.types import LockObject, SearchHelp, ViewDefinition
from ..internal.types import DataElement, Domain, ValueRange
from ..persistence.repository import DictionaryRepository
from ..persistence.serializer import (
    DictionarySerializationError,
    data_element_dto,
    domain_dto,
    lock_object_dto,
    search_help_dto,
    structure_dto,
    table_dto,
    view_dto,
)
from ..registry.dictionary import DataDictionary
from .models import (
    DataElementModel,
    DomainModel,
    FieldModel,
    LockObjectModel,
    SaveResponse,
    SearchHelpModel,
    StructureModel,
    TableModel,
    ViewModel,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter(prefix="/api", tags=["Dictionary"])

# Configuration - set during app startup
_dictionary: DataDictionary | None = None
_repository: DictionaryRepository | None = None


def configure(
    dictionary: DataDictionary,
    repository: Optional[DictionaryRepository] = None,
) -> None:
    """Configure the dictionary routes.

    Args:
        dictionary: The dictionary served by the API
        repository: Optional repository used by the save endpoint
    """
    global _dictionary, _repository
    _dictionary = dictionary
    _repository = repository


def _get_dictionary() -> DataDictionary:
    if _dictionary is None:
        raise HTTPException(status_code=503, detail="Data dictionary not initialized")
    return _dictionary


def _resolve(getter: Callable[[str], Optional[T]], kind: str, name: Optional[str]) -> T:
    """Look up a referenced object by name; unknown names are a client error."""
    entity = getter(name) if name is not None else None
    if entity is None:
        raise InvalidArgumentError(f"{kind} not found: {name}")
    return entity


def _add_fields(dictionary: DataDictionary, container: FieldContainer, fields: List[FieldModel]) -> None:
    for f in fields:
        element = _resolve(dictionary.get_data_element, "Data element", f.data_element_name)
        container.add_field(FieldDefinition(f.field_name, element, key_field=f.key_field, nullable=f.nullable))


def _not_found(kind: str, name: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} not found: {name}")


# =============================================================================
# Domains
# =============================================================================

def _domain_model(domain: Domain) -> DomainModel:
    return DomainModel.model_validate(domain_dto(domain).to_dict())


@router.get("/domains", response_model=List[DomainModel])
async def list_domains():
    """List all domains in registration order."""
    return [_domain_model(d) for d in _get_dictionary().domains().values()]


@router.get("/domains/{name}", response_model=DomainModel)
async def get_domain(name: str):
    domain = _get_dictionary().get_domain(name)
    if domain is None:
        raise _not_found("Domain", name)
    return _domain_model(domain)


@router.post("/domains", response_model=DomainModel, status_code=201)
async def create_domain(request: DomainModel):
    """
    Create a domain.

    fixedValues, when given, become the domain's value range.
    """
    domain = Domain(
        request.name,
        request.data_type,
        request.length,
        request.decimals,
        description=request.description,
    )
    if request.fixed_values:
        domain.value_range = ValueRange(request.fixed_values)

    _get_dictionary().register_domain(domain)
    logger.info(f"Created domain: {domain.name}")
    return _domain_model(domain)


# =============================================================================
# Data elements
# =============================================================================

def _data_element_model(element: DataElement) -> DataElementModel:
    return DataElementModel.model_validate(data_element_dto(element).to_dict())


@router.get("/data-elements", response_model=List[DataElementModel])
async def list_data_elements():
    return [_data_element_model(e) for e in _get_dictionary().data_elements().values()]


@router.get("/data-elements/{name}", response_model=DataElementModel)
async def get_data_element(name: str):
    element = _get_dictionary().get_data_element(name)
    if element is None:
        raise _not_found("Data element", name)
    return _data_element_model(element)


@router.post("/data-elements", response_model=DataElementModel, status_code=201)
async def create_data_element(request: DataElementModel):
    """Create a data element on a registered domain."""
    dictionary = _get_dictionary()
    element = DataElement(
        request.name,
        _resolve(dictionary.get_domain, "Domain", request.domain_name),
        short_label=request.short_label,
        medium_label=request.medium_label,
        long_label=request.long_label,
        documentation=request.documentation,
    )
    dictionary.register_data_element(element)
    logger.info(f"Created data element: {element.name}")
    return _data_element_model(element)


# =============================================================================
# Tables and structures
# =============================================================================

def _table_model(table: TableDefinition) -> TableModel:
    return TableModel.model_validate(table_dto(table).to_dict())


@router.get("/tables", response_model=List[TableModel])
async def list_tables():
    return [_table_model(t) for t in _get_dictionary().tables().values()]


@router.get("/tables/{name}", response_model=TableModel)
async def get_table(name: str):
    table = _get_dictionary().get_table(name)
    if table is None:
        raise _not_found("Table", name)
    return _table_model(table)


@router.post("/tables", response_model=TableModel, status_code=201)
async def create_table(request: TableModel):
    """
    Create a table.

    Every field must reference a registered data element.
    """
    dictionary = _get_dictionary()
    table = TableDefinition(
        request.table_name,
        description=request.description,
        delivery_class=request.delivery_class,
        buffered=request.buffered,
    )
    _add_fields(dictionary, table, request.fields)
    dictionary.register_table(table)
    logger.info(f"Created table: {table.table_name} ({len(table.fields)} fields)")
    return _table_model(table)


def _structure_model(structure: Structure) -> StructureModel:
    return StructureModel.model_validate(structure_dto(structure).to_dict())


@router.get("/structures", response_model=List[StructureModel])
async def list_structures():
    return [_structure_model(s) for s in _get_dictionary().structures().values()]


@router.get("/structures/{name}", response_model=StructureModel)
async def get_structure(name: str):
    structure = _get_dictionary().get_structure(name)
    if structure is None:
        raise _not_found("Structure", name)
    return _structure_model(structure)


@router.post("/structures", response_model=StructureModel, status_code=201)
async def create_structure(request: StructureModel):
    dictionary = _get_dictionary()
    structure = Structure(request.structure_name, description=request.description)
    _add_fields(dictionary, structure, request.fields)
    dictionary.register_structure(structure)
    logger.info(f"Created structure: {structure.structure_name}")
    return _structure_model(structure)


# =============================================================================
# Views, search helps and lock objects
# =============================================================================

def _view_model(view: ViewDefinition) -> ViewModel:
    return ViewModel.model_validate(view_dto(view).to_dict())


@router.get("/views", response_model=List[ViewModel])
async def list_views():
    return [_view_model(v) for v in _get_dictionary().views().values()]


@router.get("/views/{name}", response_model=ViewModel)
async def get_view(name: str):
    view = _get_dictionary().get_view(name)
    if view is None:
        raise _not_found("View", name)
    return _view_model(view)


@router.post("/views", response_model=ViewModel, status_code=201)
async def create_view(request: ViewModel):
    """Create a view over registered base tables."""
    dictionary = _get_dictionary()
    view = ViewDefinition(request.view_name, request.view_type, description=request.description)
    for table_name in request.base_table_names:
        view.add_base_table(_resolve(dictionary.get_table, "Table", table_name))
    for field_name in request.selected_fields:
        view.add_selected_field(field_name)
    dictionary.register_view(view)
    logger.info(f"Created view: {view.view_name}")
    return _view_model(view)


def _search_help_model(search_help: SearchHelp) -> SearchHelpModel:
    return SearchHelpModel.model_validate(search_help_dto(search_help).to_dict())


@router.get("/search-helps", response_model=List[SearchHelpModel])
async def list_search_helps():
    return [_search_help_model(h) for h in _get_dictionary().search_helps().values()]


@router.get("/search-helps/{name}", response_model=SearchHelpModel)
async def get_search_help(name: str):
    search_help = _get_dictionary().get_search_help(name)
    if search_help is None:
        raise _not_found("Search help", name)
    return _search_help_model(search_help)


@router.post("/search-helps", response_model=SearchHelpModel, status_code=201)
async def create_search_help(request: SearchHelpModel):
    dictionary = _get_dictionary()
    selection = None
    if request.selection_method_name is not None:
        selection = _resolve(dictionary.get_table, "Table", request.selection_method_name)

    search_help = SearchHelp(request.name, selection, description=request.description)
    for field_name in request.display_fields:
        search_help.add_display_field(field_name)
    for field_name in request.export_fields:
        search_help.add_export_field(field_name)
    dictionary.register_search_help(search_help)
    logger.info(f"Created search help: {search_help.name}")
    return _search_help_model(search_help)


def _lock_object_model(lock_object: LockObject) -> LockObjectModel:
    return LockObjectModel.model_validate(lock_object_dto(lock_object).to_dict())


@router.get("/lock-objects", response_model=List[LockObjectModel])
async def list_lock_objects():
    return [_lock_object_model(lo) for lo in _get_dictionary().lock_objects().values()]


@router.get("/lock-objects/{name}", response_model=LockObjectModel)
async def get_lock_object(name: str):
    lock_object = _get_dictionary().get_lock_object(name)
    if lock_object is None:
        raise _not_found("Lock object", name)
    return _lock_object_model(lock_object)


@router.post("/lock-objects", response_model=LockObjectModel, status_code=201)
async def create_lock_object(request: LockObjectModel):
    dictionary = _get_dictionary()
    lock_object = LockObject(
        request.name,
        _resolve(dictionary.get_table, "Table", request.primary_table_name),
        lock_mode=request.lock_mode,
        description=request.description,
    )
    for table_name in request.secondary_table_names:
        lock_object.add_secondary_table(_resolve(dictionary.get_table, "Table", table_name))
    dictionary.register_lock_object(lock_object)
    logger.info(f"Created lock object: {lock_object.name}")
    return _lock_object_model(lock_object)


# =============================================================================
# Dictionary administration
# =============================================================================

@router.get("/dictionary/summary")
async def dictionary_summary():
    """Object counts per kind, plus a total."""
    return _get_dictionary().count()


@router.post("/dictionary/save", response_model=SaveResponse)
async def save_dictionary():
    """Persist the dictionary to the configured snapshot file."""
    dictionary = _get_dictionary()
    if _repository is None:
        raise HTTPException(status_code=503, detail="Dictionary storage not configured")

    try:
        _repository.save(dictionary)
    except DictionarySerializationError as e:
        logger.error(f"Failed to save dictionary: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    total = dictionary.count()["total"]
    return SaveResponse(
        success=True,
        message=f"Saved {total} objects",
        path=str(_repository.storage_path),
    )
