"""
Analysis module - zapytania o topologię planszy.

Zawiera:
- ConnectivityAnalyzer: Spójność, regiony, ślepe zaułki
- SequentialIdAssigner: Numerowanie pól ścieżki (DFS od startu)
- ValidationEngine: Reguły strukturalne i balansowe
"""

from .connectivity import ConnectivityAnalyzer
from .sequential_ids import IdAssignment, SequentialIdAssigner
from .validation import (
    IssueCategory,
    IssueCode,
    Severity,
    ValidationEngine,
    ValidationIssue,
    ValidationReport,
    ValidationRules,
)

__all__ = [
    "ConnectivityAnalyzer", "IdAssignment", "SequentialIdAssigner",
    "IssueCategory", "IssueCode", "Severity", "ValidationEngine",
    "ValidationIssue", "ValidationReport", "ValidationRules",
]
