"""
Pydantic models for the dictionary API.

Request and response bodies use camelCase keys, the same wire format as
dictionary snapshots. Python attribute names stay snake_case.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model serializing to camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Internal schema
# =============================================================================

class DomainModel(WireModel):
    """Domain representation for requests and responses."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "ZAMOUNT",
                "dataType": "DECIMAL",
                "length": 15,
                "decimals": 2,
                "description": "Currency amount",
                "fixedValues": [],
            }
        },
    )

    name: str = Field(..., description="Domain name (unique)")
    data_type: str = Field(..., description="CHAR, STRING, NUMC, INTEGER, DECIMAL, DATE, TIME, TIMESTAMP or RAW")
    length: int = Field(..., description="Length in characters, digits or bytes")
    decimals: int = Field(0, description="Decimal places")
    description: Optional[str] = Field(None, description="Free-text description")
    fixed_values: List[str] = Field(default_factory=list, description="Allowed values; empty means unrestricted")


class DataElementModel(WireModel):
    """Data element representation."""

    name: str = Field(..., description="Data element name (unique)")
    domain_name: str = Field(..., description="Name of a registered domain")
    short_label: Optional[str] = Field(None, description="Short field label")
    medium_label: Optional[str] = Field(None, description="Medium field label")
    long_label: Optional[str] = Field(None, description="Long field label")
    documentation: Optional[str] = Field(None, description="Documentation text")


# =============================================================================
# Conceptual schema
# =============================================================================

class FieldModel(WireModel):
    field_name: str = Field(..., description="Field name, unique within its table or structure")
    data_element_name: str = Field(..., description="Name of a registered data element")
    key_field: bool = Field(False, description="Part of the primary key")
    nullable: bool = Field(False, description="NULL allowed")


class TableModel(WireModel):
    """Table representation."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tableName": "ZCUSTOMER",
                "description": "Customer master",
                "deliveryClass": "A",
                "buffered": False,
                "fields": [
                    {"fieldName": "MANDT", "dataElementName": "MANDT", "keyField": True, "nullable": False},
                ],
            }
        },
    )

    table_name: str = Field(..., description="Table name (unique)")
    description: Optional[str] = Field(None, description="Free-text description")
    delivery_class: str = Field("A", description="Delivery class: A, C, L, G, E, S or W")
    buffered: bool = Field(False, description="Table buffering enabled")
    fields: List[FieldModel] = Field(default_factory=list, description="Fields in declaration order")


class StructureModel(WireModel):
    structure_name: str = Field(..., description="Structure name (unique)")
    description: Optional[str] = Field(None, description="Free-text description")
    fields: List[FieldModel] = Field(default_factory=list, description="Fields in declaration order")


# =============================================================================
# External schema
# =============================================================================

class ViewModel(WireModel):
    view_name: str = Field(..., description="View name (unique)")
    view_type: str = Field(..., description="DATABASE, PROJECTION, MAINTENANCE or HELP")
    base_table_names: List[str] = Field(default_factory=list, description="Registered base tables")
    selected_fields: List[str] = Field(default_factory=list, description="Selected fields; empty selects all")
    description: Optional[str] = Field(None, description="Free-text description")


class SearchHelpModel(WireModel):
    name: str = Field(..., description="Search help name (unique)")
    selection_method_name: Optional[str] = Field(None, description="Registered selection-method table")
    display_fields: List[str] = Field(default_factory=list, description="Fields shown in the hit list")
    export_fields: List[str] = Field(default_factory=list, description="Fields returned to the caller")
    description: Optional[str] = Field(None, description="Free-text description")


class LockObjectModel(WireModel):
    name: str = Field(..., description="Lock object name (unique)")
    primary_table_name: str = Field(..., description="Registered primary table")
    secondary_table_names: List[str] = Field(default_factory=list, description="Registered secondary tables")
    lock_mode: str = Field("EXCLUSIVE", description="SHARED, EXCLUSIVE or EXCLUSIVE_NON_CUMULATIVE")
    description: Optional[str] = Field(None, description="Free-text description")


# =============================================================================
# Analysis and administration
# =============================================================================

class DdlResponse(BaseModel):
    ddl: str = Field(..., description="Generated SQL")


class FindingModel(BaseModel):
    severity: str
    message: str


class ValidationResponse(BaseModel):
    valid: bool = Field(..., description="True when there are no findings at all")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    findings: List[FindingModel] = Field(default_factory=list)


class SaveResponse(BaseModel):
    success: bool
    message: str
    path: str


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Patients
# =============================================================================

class PatientModel(WireModel):
    patient_id: str
    first_name: str
    last_name: str
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    registered_at: str


class RegisterPatientRequest(WireModel):
    """Request model for registering a patient."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Jane",
                "lastName": "Doe",
                "dateOfBirth": "19850314",
                "gender": "F",
                "email": "jane.doe@example.com",
            }
        },
    )

    first_name: Optional[str] = Field(None, description="Required, must not be blank")
    last_name: Optional[str] = Field(None, description="Required, must not be blank")
    date_of_birth: Optional[str] = Field(None, description="YYYYMMDD")
    gender: Optional[str] = Field(None, description="M, F or O")
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
