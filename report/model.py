"""Data model for the projects that reference a component."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional


class ReferenceKind(Enum):
    """
    How a project document declares a dependency.

    The value of each member is the element name used in project documents.
    """

    NONE = "None"
    REFERENCE = "Reference"
    PACKAGE_REFERENCE = "PackageReference"
    PROJECT_REFERENCE = "ProjectReference"

    def __str__(self) -> str:
        return self.value


# Kinds are tested in this order; the first one that matches wins.
CLASSIFICATION_ORDER = (
    ReferenceKind.REFERENCE,
    ReferenceKind.PACKAGE_REFERENCE,
    ReferenceKind.PROJECT_REFERENCE,
)


@dataclass(frozen=True)
class ProjectReferenceRecord:
    """A project that references the target, and how it does so."""

    project_path: str
    kind: ReferenceKind


@dataclass(frozen=True)
class ProjectFailure:
    """A project that could not be examined."""

    project_path: str
    reason: str


class ScanResult:
    """
    Aggregated outcome of looking up one target across a solution.

    Matches and failures are kept in the order the projects were examined.
    """

    def __init__(
        self,
        target_name: str,
        solution_path: Optional[str] = None,
        query: Optional[str] = None,
    ):
        self.target_name = target_name
        # Name as the user gave it, e.g. "Grpc.Tools.dll" for target "Grpc.Tools"
        self.query = query if query is not None else target_name
        self.solution_path = solution_path
        self.projects_scanned = 0
        self._matches: List[ProjectReferenceRecord] = []
        self._failures: List[ProjectFailure] = []

    @property
    def matches(self) -> List[ProjectReferenceRecord]:
        """Return the matching projects."""
        return list(self._matches)

    @property
    def failures(self) -> List[ProjectFailure]:
        """Return the projects that were skipped."""
        return list(self._failures)

    def add_match(self, project_path: str, kind: ReferenceKind) -> None:
        """
        Record a project that references the target.

        Raises:
            ValueError: If kind is ReferenceKind.NONE.
        """
        if kind is ReferenceKind.NONE:
            raise ValueError(f"'{project_path}' has no reference to record")
        self._matches.append(ProjectReferenceRecord(project_path, kind))

    def add_failure(self, project_path: str, reason: str) -> None:
        """Record a project that could not be read or decoded."""
        self._failures.append(ProjectFailure(project_path, reason))

    def is_empty(self) -> bool:
        """Check if no project references the target."""
        return not self._matches

    def has_failures(self) -> bool:
        """Check if any project was skipped."""
        return bool(self._failures)

    def iter_matches(self) -> Iterator[ProjectReferenceRecord]:
        """Iterate over matching projects in examination order."""
        yield from self._matches

    def iter_failures(self) -> Iterator[ProjectFailure]:
        """Iterate over skipped projects in examination order."""
        yield from self._failures

    def count_by_kind(self) -> Dict[ReferenceKind, int]:
        """Count matches per reference kind, in priority order."""
        counts = {kind: 0 for kind in CLASSIFICATION_ORDER}
        for record in self._matches:
            counts[record.kind] += 1
        return counts

    def __len__(self) -> int:
        """Return the number of matching projects."""
        return len(self._matches)

    def __repr__(self) -> str:
        return (
            f"ScanResult(target={self.target_name!r}, scanned={self.projects_scanned}, "
            f"matches={len(self._matches)}, failures={len(self._failures)})"
        )
