"""FastAPI routes for DDL generation, where-used analysis and validation."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..ddl.dialect import SqlDialect
from ..ddl.generator import DdlGenerator
from ..registry.dictionary import DataDictionary
from ..registry.validator import ConsistencyValidator
from ..registry.where_used import WhereUsedAnalyzer
from .models import DdlResponse, ValidationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])

# Configuration - set during app startup
_dictionary: DataDictionary | None = None
_generator: DdlGenerator | None = None
_analyzer: WhereUsedAnalyzer | None = None


def configure(dictionary: DataDictionary, generator: Optional[DdlGenerator] = None) -> None:
    """Configure the analysis routes.

    Args:
        dictionary: The dictionary to analyse
        generator: DDL generator (a default one is created if omitted)
    """
    global _dictionary, _generator, _analyzer
    _dictionary = dictionary
    _generator = generator or DdlGenerator()
    _analyzer = WhereUsedAnalyzer(dictionary)


def _get_dictionary() -> DataDictionary:
    if _dictionary is None:
        raise HTTPException(status_code=503, detail="Data dictionary not initialized")
    return _dictionary


def _get_generator() -> DdlGenerator:
    if _generator is None:
        raise HTTPException(status_code=503, detail="DDL generator not initialized")
    return _generator


def _get_analyzer() -> WhereUsedAnalyzer:
    if _analyzer is None:
        raise HTTPException(status_code=503, detail="Where-used analyzer not initialized")
    return _analyzer


# =============================================================================
# DDL
# =============================================================================

@router.get("/ddl/tables/{name}", response_model=DdlResponse)
async def table_ddl(
    name: str,
    dialect: str = Query(SqlDialect.POSTGRESQL.value, description="POSTGRESQL, H2 or HANA"),
):
    """
    Generate CREATE TABLE for a registered table.

    Unknown dialects and tables without fields are rejected with 400.
    """
    table = _get_dictionary().get_table(name)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Table not found: {name}")
    return DdlResponse(ddl=_get_generator().generate_create_table(table, dialect))


@router.get("/ddl/views/{name}", response_model=DdlResponse)
async def view_ddl(
    name: str,
    dialect: str = Query(SqlDialect.POSTGRESQL.value, description="POSTGRESQL, H2 or HANA"),
):
    """Generate CREATE VIEW for a registered view."""
    view = _get_dictionary().get_view(name)
    if view is None:
        raise HTTPException(status_code=404, detail=f"View not found: {name}")
    return DdlResponse(ddl=_get_generator().generate_create_view(view, dialect))


@router.get("/ddl/schema", response_model=DdlResponse)
async def schema_ddl(
    dialect: str = Query(SqlDialect.POSTGRESQL.value, description="POSTGRESQL, H2 or HANA"),
):
    """Generate a script with every table and view of the dictionary."""
    return DdlResponse(ddl=_get_generator().generate_schema(_get_dictionary(), dialect))


# =============================================================================
# Where-used
# =============================================================================

@router.get("/where-used/domains/{name}", response_model=Dict[str, List[str]])
async def domain_usages(name: str):
    """Data elements, tables and structures depending on a domain."""
    return _get_analyzer().all_usages_of_domain(name)


@router.get("/where-used/data-elements/{name}", response_model=Dict[str, List[str]])
async def data_element_usages(name: str):
    return _get_analyzer().usages_of_data_element(name)


@router.get("/where-used/tables/{name}", response_model=Dict[str, List[str]])
async def table_usages(name: str):
    """Views, search helps and lock objects built on a table."""
    return _get_analyzer().usages_of_table(name)


# =============================================================================
# Validation
# =============================================================================

@router.get("/validation", response_model=ValidationResponse)
async def validate_dictionary():
    """Run all consistency checks and return the findings."""
    result = ConsistencyValidator(_get_dictionary()).validate()
    return ValidationResponse.model_validate(result.to_dict())
