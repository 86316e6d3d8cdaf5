"""FastAPI routes for the sample patient registration."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from ..patient import schema
from ..patient.registry import PatientRegistry
from ..patient.types import PatientRecord
from ..registry.dictionary import DataDictionary
from .models import MessageResponse, PatientModel, RegisterPatientRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/patients", tags=["Patients"])

# Configuration - set during app startup
_dictionary: DataDictionary | None = None
_patients: PatientRegistry | None = None


def configure(dictionary: DataDictionary, patients: PatientRegistry) -> None:
    """Configure the patient routes."""
    global _dictionary, _patients
    _dictionary = dictionary
    _patients = patients


def _get_patients() -> PatientRegistry:
    if _patients is None:
        raise HTTPException(status_code=503, detail="Patient registry not initialized")
    return _patients


def _patient_model(record: PatientRecord) -> PatientModel:
    return PatientModel.model_validate(record.to_dict())


@router.post("/schema/initialize", response_model=MessageResponse)
async def initialize_schema():
    """
    Register the patient schema in the dictionary.

    Initialising twice fails with 409 because the objects already exist.
    """
    if _dictionary is None:
        raise HTTPException(status_code=503, detail="Data dictionary not initialized")
    schema.initialize(_dictionary)
    return MessageResponse(message="Patient registration schema initialised successfully")


@router.get("", response_model=List[PatientModel])
async def list_patients():
    return [_patient_model(p) for p in _get_patients().find_all().values()]


@router.get("/{patient_id}", response_model=PatientModel)
async def get_patient(patient_id: str):
    record = _get_patients().find_by_id(patient_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Patient not found: {patient_id}")
    return _patient_model(record)


@router.post("", response_model=PatientModel, status_code=201)
async def register_patient(request: RegisterPatientRequest):
    """
    Register a patient.

    firstName and lastName are required; the id is assigned sequentially.
    """
    record = _get_patients().register(
        request.first_name,
        request.last_name,
        date_of_birth=request.date_of_birth,
        gender=request.gender,
        phone=request.phone,
        email=request.email,
        address=request.address,
    )
    logger.info(f"Registered patient: {record.patient_id}")
    return _patient_model(record)
