"""Internal schema - domains, value ranges and data elements."""

from .types import DataElement, DataType, Domain, ValueRange

__all__ = [
    "DataElement",
    "DataType",
    "Domain",
    "ValueRange",
]
