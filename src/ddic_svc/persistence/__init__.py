"""Persistence - snapshots, JSON/YAML serialization and file storage."""

from .repository import DictionaryRepository
from .serializer import DictionarySerializationError, DictionarySerializer
from .snapshot import (
    DataElementDto,
    DictionarySnapshot,
    DomainDto,
    FieldDto,
    LockObjectDto,
    SearchHelpDto,
    StructureDto,
    TableDto,
    ViewDto,
)

__all__ = [
    "DictionaryRepository",
    "DictionarySerializationError",
    "DictionarySerializer",
    "DictionarySnapshot",
    "DomainDto",
    "DataElementDto",
    "FieldDto",
    "TableDto",
    "StructureDto",
    "ViewDto",
    "SearchHelpDto",
    "LockObjectDto",
]
