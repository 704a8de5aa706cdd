"""
Interaction severity heuristic.

Coarse keyword match over the free-text description returned by the
interaction service. High-severity terms are checked before low-severity
terms, and anything matching neither set is medium.
"""

from enum import Enum
from typing import Optional, Tuple


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


HIGH_SEVERITY_TERMS: Tuple[str, ...] = (
    "severe",
    "serious",
    "major",
    "significant",
    "dangerous",
    "avoid",
    "contraindicated",
)
LOW_SEVERITY_TERMS: Tuple[str, ...] = ("minor", "mild", "slight", "minimal")


def classify_severity(description: Optional[str]) -> Severity:
    """Plain substring match, so "seriously" counts as "serious"."""
    text = (description or "").lower()

    if any(term in text for term in HIGH_SEVERITY_TERMS):
        return Severity.HIGH
    if any(term in text for term in LOW_SEVERITY_TERMS):
        return Severity.LOW
    return Severity.MEDIUM
