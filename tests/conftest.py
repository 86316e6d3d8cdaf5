"""Shared test fixtures for the data dictionary tests."""

import pytest

from ddic_svc.conceptual.types import FieldDefinition, TableDefinition
from ddic_svc.ddl.generator import DdlGenerator
from ddic_svc.external.types import LockObject, SearchHelp, ViewDefinition, ViewType
from ddic_svc.internal.types import DataElement, DataType, Domain
from ddic_svc.patient import schema as patient_schema
from ddic_svc.registry.dictionary import DataDictionary


# =============================================================================
# Entity Fixtures
# =============================================================================

@pytest.fixture
def char3() -> Domain:
    return Domain("ZCHAR3", DataType.CHAR, 3, description="Client")


@pytest.fixture
def char10() -> Domain:
    return Domain("ZCHAR10", DataType.CHAR, 10, description="Short text")


@pytest.fixture
def char40() -> Domain:
    return Domain("ZCHAR40", DataType.CHAR, 40, description="Name")


@pytest.fixture
def customer_table(char3, char40) -> TableDefinition:
    """MANDT (key) / NAME (not null) / CITY (nullable) over CHAR domains."""
    mandt = DataElement("MANDT", char3, short_label="Client")
    name = DataElement("ZNAME40", char40)
    city = DataElement("ZCITY", char40)

    table = TableDefinition("ZCUSTOMER", description="Customer master")
    table.add_field(FieldDefinition("MANDT", mandt, key_field=True, nullable=False))
    table.add_field(FieldDefinition("NAME", name, key_field=False, nullable=False))
    table.add_field(FieldDefinition("CITY", city, key_field=False, nullable=True))
    return table


# =============================================================================
# Dictionary Fixtures
# =============================================================================

@pytest.fixture
def dictionary() -> DataDictionary:
    """An empty dictionary."""
    return DataDictionary()


@pytest.fixture
def customer_dictionary(char10) -> DataDictionary:
    """
    Chain ZCHAR10 -> ZNAME -> ZCUSTOMER.NAME, with a view, a search help
    and a lock object on ZCUSTOMER.
    """
    dd = DataDictionary()
    dd.register_domain(char10)

    name = DataElement("ZNAME", char10, medium_label="Name")
    dd.register_data_element(name)

    table = TableDefinition("ZCUSTOMER")
    table.add_field(FieldDefinition("ID", name, key_field=True))
    table.add_field(FieldDefinition("NAME", name))
    dd.register_table(table)

    view = ViewDefinition("ZCUST_V", ViewType.PROJECTION)
    view.add_base_table(table)
    view.add_selected_field("NAME")
    dd.register_view(view)

    search_help = SearchHelp("ZSH_CUST", table)
    search_help.add_display_field("NAME")
    search_help.add_export_field("ID")
    dd.register_search_help(search_help)

    dd.register_lock_object(LockObject("EZCUSTOMER", table))
    return dd


@pytest.fixture
def patient_dictionary() -> DataDictionary:
    """A dictionary holding the patient registration schema."""
    dd = DataDictionary()
    patient_schema.initialize(dd)
    return dd


@pytest.fixture
def generator() -> DdlGenerator:
    return DdlGenerator()
