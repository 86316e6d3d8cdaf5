"""Dictionary registry - the central catalog and the analyses that read it."""

from .dictionary import DataDictionary
from .validator import ConsistencyValidator, Finding, Severity, ValidationResult, validate
from .where_used import WhereUsedAnalyzer

__all__ = [
    "DataDictionary",
    "ConsistencyValidator",
    "Finding",
    "Severity",
    "ValidationResult",
    "validate",
    "WhereUsedAnalyzer",
]
