"""
Internal schema types.

The internal layer holds the technical building blocks of the dictionary:
domains (data type, length, decimals) and the value ranges that constrain
them. Data elements sit on top of a domain and add semantic labels.

    Domain (technical type)  →  DataElement (semantic labels)  →  Field
            ↓                              ↓
     "How it is stored"              "What it means"
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

from ..errors import InvalidArgumentError, parse_enum, require_not_blank, require_present


class DataType(str, Enum):
    """Built-in data types available to domains."""
    CHAR = "CHAR"            # Fixed-length character string
    STRING = "STRING"        # Variable-length character string
    NUMC = "NUMC"            # Numeric text
    INTEGER = "INTEGER"
    DECIMAL = "DECIMAL"      # Packed decimal (amounts, quantities)
    DATE = "DATE"            # YYYYMMDD
    TIME = "TIME"            # HHMMSS
    TIMESTAMP = "TIMESTAMP"
    RAW = "RAW"              # Raw byte sequence

    @classmethod
    def parse(cls, value: "DataType | str | None") -> "DataType":
        """Coerce a name to a DataType, raising InvalidArgumentError if unknown."""
        return parse_enum(cls, value, "Data type")


class ValueRange:
    """
    Allowed values for a domain.

    Values keep their insertion order and duplicates collapse. An empty
    range places no restriction on the domain.
    """

    def __init__(self, values: Iterable[str] = ()):
        self._values: dict[str, None] = {}
        for value in values:
            self.add_fixed_value(value)

    def add_fixed_value(self, value: str) -> None:
        """Add a single allowed value."""
        if value is None:
            raise InvalidArgumentError("Fixed value must not be null")
        self._values[value] = None

    @property
    def fixed_values(self) -> tuple[str, ...]:
        return tuple(self._values)

    def is_valid(self, value: str | None) -> bool:
        """Check whether a value is within the allowed range."""
        if not self._values:
            return True
        return value in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._values))

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __repr__(self) -> str:
        return f"ValueRange(fixed_values={list(self._values)!r})"


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Domain:
    """
    Lowest-level technical type definition.

    Name, data type, length and decimals are fixed at construction.
    Description and value range are descriptive and may be set before
    the domain is registered.
    """

    def __init__(
        self,
        name: str,
        data_type: DataType | str,
        length: int,
        decimals: int = 0,
        description: str | None = None,
        value_range: ValueRange | None = None,
    ):
        require_not_blank(name, "Domain name must not be blank")
        data_type = DataType.parse(data_type)
        if not _is_int(length) or length <= 0:
            raise InvalidArgumentError("Length must be positive")
        if not _is_int(decimals) or decimals < 0:
            raise InvalidArgumentError("Decimals must not be negative")

        self._name = name
        self._data_type = data_type
        self._length = length
        self._decimals = decimals
        self.description = description
        self.value_range = value_range

    @property
    def name(self) -> str:
        return self._name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def length(self) -> int:
        return self._length

    @property
    def decimals(self) -> int:
        return self._decimals

    def is_valid_value(self, value: str | None) -> bool:
        """Check a value against the domain's value range, if any."""
        if self.value_range is None:
            return True
        return self.value_range.is_valid(value)

    def __repr__(self) -> str:
        return (
            f"Domain(name={self._name!r}, type={self._data_type.value}, "
            f"length={self._length}, decimals={self._decimals})"
        )


class DataElement:
    """
    Semantic wrapper around a Domain.

    Holds the very Domain object registered in the dictionary; the
    consistency validator checks that identity, not just the name.
    """

    def __init__(
        self,
        name: str,
        domain: Domain,
        short_label: str | None = None,
        medium_label: str | None = None,
        long_label: str | None = None,
        documentation: str | None = None,
    ):
        require_not_blank(name, "Data element name must not be blank")
        require_present(domain, "Domain must not be null")

        self._name = name
        self._domain = domain
        self.short_label = short_label
        self.medium_label = medium_label
        self.long_label = long_label
        self.documentation = documentation

    @property
    def name(self) -> str:
        return self._name

    @property
    def domain(self) -> Domain:
        return self._domain

    def __repr__(self) -> str:
        return f"DataElement(name={self._name!r}, domain={self._domain.name!r})"
