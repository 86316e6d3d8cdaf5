"""Sample patient registration schema and its in-memory record store."""

from .registry import PatientRegistry
from .schema import initialize
from .types import PatientRecord

__all__ = ["PatientRecord", "PatientRegistry", "initialize"]
