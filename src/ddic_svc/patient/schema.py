"""
Patient registration schema.

Registers a complete sample across all three layers:
- Internal: one domain per patient attribute type
- Conceptual: data elements and the ZPATIENT table
- External: a projection view, a search help and a lock object
"""

from __future__ import annotations

import logging

from ..conceptual.types import DeliveryClass, FieldDefinition, TableDefinition
from ..external.types import LockMode, LockObject, SearchHelp, ViewDefinition, ViewType
from ..internal.types import DataElement, DataType, Domain, ValueRange
from ..registry.dictionary import DataDictionary

logger = logging.getLogger(__name__)

PATIENT_TABLE = "ZPATIENT"
PATIENT_LIST_VIEW = "ZPATIENT_LIST_V"
PATIENT_SEARCH_HELP = "ZSH_PATIENT"
PATIENT_LOCK_OBJECT = "EZPATIENT"

# name, data type, length, description
_DOMAINS = (
    ("ZPATIENT_ID", DataType.NUMC, 10, "Patient identifier"),
    ("ZNAME_40", DataType.CHAR, 40, "Name field (40 characters)"),
    ("ZDOB", DataType.DATE, 8, "Date of birth (YYYYMMDD)"),
    ("ZGENDER", DataType.CHAR, 1, "Gender code (M/F/O)"),
    ("ZPHONE_20", DataType.CHAR, 20, "Phone number"),
    ("ZEMAIL_100", DataType.STRING, 100, "Email address"),
    ("ZADDRESS_100", DataType.CHAR, 100, "Postal address"),
)

GENDER_CODES = ("M", "F", "O")

# name, domain, short / medium / long label
_DATA_ELEMENTS = (
    ("DE_PATIENT_ID", "ZPATIENT_ID", "Pat. ID", "Patient ID", "Patient Identifier"),
    ("DE_FIRST_NAME", "ZNAME_40", "First Nm", "First Name", "Patient First Name"),
    ("DE_LAST_NAME", "ZNAME_40", "Last Nm", "Last Name", "Patient Last Name"),
    ("DE_DATE_OF_BIRTH", "ZDOB", "DOB", "Date of Birth", "Patient Date of Birth"),
    ("DE_GENDER", "ZGENDER", "Gender", "Gender", "Patient Gender"),
    ("DE_PHONE", "ZPHONE_20", "Phone", "Phone Number", "Contact Phone Number"),
    ("DE_EMAIL", "ZEMAIL_100", "Email", "Email", "Email Address"),
    ("DE_ADDRESS", "ZADDRESS_100", "Address", "Address", "Patient Address"),
)

# field, data element, key, nullable
_TABLE_FIELDS = (
    ("PATIENT_ID", "DE_PATIENT_ID", True, False),
    ("FIRST_NAME", "DE_FIRST_NAME", False, False),
    ("LAST_NAME", "DE_LAST_NAME", False, False),
    ("DATE_OF_BIRTH", "DE_DATE_OF_BIRTH", False, True),
    ("GENDER", "DE_GENDER", False, True),
    ("PHONE", "DE_PHONE", False, True),
    ("EMAIL", "DE_EMAIL", False, True),
    ("ADDRESS", "DE_ADDRESS", False, True),
)

_LIST_VIEW_FIELDS = ("PATIENT_ID", "FIRST_NAME", "LAST_NAME", "DATE_OF_BIRTH", "GENDER")
_SEARCH_DISPLAY_FIELDS = ("PATIENT_ID", "FIRST_NAME", "LAST_NAME")
_SEARCH_EXPORT_FIELDS = ("PATIENT_ID",)


def initialize(dictionary: DataDictionary) -> None:
    """
    Register all patient registration objects into a dictionary.

    Raises:
        DuplicateNameError: If any of the objects is already registered
    """
    domains: dict[str, Domain] = {}
    for name, data_type, length, description in _DOMAINS:
        domain = Domain(name, data_type, length, description=description)
        if name == "ZGENDER":
            domain.value_range = ValueRange(GENDER_CODES)
        dictionary.register_domain(domain)
        domains[name] = domain

    elements: dict[str, DataElement] = {}
    for name, domain_name, short, medium, long in _DATA_ELEMENTS:
        element = DataElement(
            name,
            domains[domain_name],
            short_label=short,
            medium_label=medium,
            long_label=long,
        )
        dictionary.register_data_element(element)
        elements[name] = element

    table = TableDefinition(
        PATIENT_TABLE,
        description="Patient Registration Table",
        delivery_class=DeliveryClass.A,
    )
    for field_name, element_name, key, nullable in _TABLE_FIELDS:
        table.add_field(FieldDefinition(field_name, elements[element_name], key_field=key, nullable=nullable))
    dictionary.register_table(table)

    view = ViewDefinition(PATIENT_LIST_VIEW, ViewType.PROJECTION, "Patient List View (key fields only)")
    view.add_base_table(table)
    for field_name in _LIST_VIEW_FIELDS:
        view.add_selected_field(field_name)
    dictionary.register_view(view)

    search_help = SearchHelp(PATIENT_SEARCH_HELP, table, "Patient Search Help")
    for field_name in _SEARCH_DISPLAY_FIELDS:
        search_help.add_display_field(field_name)
    for field_name in _SEARCH_EXPORT_FIELDS:
        search_help.add_export_field(field_name)
    dictionary.register_search_help(search_help)

    dictionary.register_lock_object(
        LockObject(PATIENT_LOCK_OBJECT, table, LockMode.EXCLUSIVE, "Patient Record Lock")
    )

    logger.info(f"Registered patient schema: {len(domains)} domains, {len(elements)} data elements")
