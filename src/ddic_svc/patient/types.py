"""Patient record - one row of the ZPATIENT table."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..errors import require_not_blank


@dataclass(slots=True)
class PatientRecord:
    """
    A registered patient.

    Identity and names are required. Contact details may be filled in
    later; registered_at is stamped at creation.
    """
    patient_id: str
    first_name: str
    last_name: str
    date_of_birth: str | None = None
    gender: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    registered_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        require_not_blank(self.patient_id, "Patient ID must not be blank")
        require_not_blank(self.first_name, "First name must not be blank")
        require_not_blank(self.last_name, "Last name must not be blank")

    def to_dict(self) -> dict[str, Any]:
        return {
            "patientId": self.patient_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "dateOfBirth": self.date_of_birth,
            "gender": self.gender,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "registeredAt": self.registered_at.isoformat(),
        }
