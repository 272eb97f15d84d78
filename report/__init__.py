"""Result model for dependency lookups."""

from .model import (
    CLASSIFICATION_ORDER,
    ProjectFailure,
    ProjectReferenceRecord,
    ReferenceKind,
    ScanResult,
)

__all__ = [
    "CLASSIFICATION_ORDER",
    "ProjectFailure",
    "ProjectReferenceRecord",
    "ReferenceKind",
    "ScanResult",
]
