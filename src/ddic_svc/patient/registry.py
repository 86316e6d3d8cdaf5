"""
In-memory patient registry.

Stores PatientRecords, the rows of the ZPATIENT table, and hands out
sequential NUMC(10) patient ids.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Mapping

from .types import PatientRecord

logger = logging.getLogger(__name__)

PATIENT_ID_FORMAT = "{:010d}"


class PatientRegistry:
    """Thread-safe registry of patient records."""

    def __init__(self):
        self._patients: dict[str, PatientRecord] = {}
        self._sequence = 0
        self._lock = threading.Lock()

    def register(
        self,
        first_name: str,
        last_name: str,
        date_of_birth: str | None = None,
        gender: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> PatientRecord:
        """
        Register a new patient with the next sequential id.

        An id is consumed only when the record is valid.

        Raises:
            InvalidArgumentError: If first or last name is blank
        """
        with self._lock:
            record = PatientRecord(
                patient_id=PATIENT_ID_FORMAT.format(self._sequence + 1),
                first_name=first_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                gender=gender,
                phone=phone,
                email=email,
                address=address,
            )
            self._sequence += 1
            self._patients[record.patient_id] = record
        logger.debug(f"Registered patient {record.patient_id}")
        return record

    def find_by_id(self, patient_id: str) -> PatientRecord | None:
        with self._lock:
            return self._patients.get(patient_id)

    def find_all(self) -> Mapping[str, PatientRecord]:
        """Read-only copy of all patients in registration order."""
        with self._lock:
            return MappingProxyType(dict(self._patients))

    def __len__(self) -> int:
        with self._lock:
            return len(self._patients)
