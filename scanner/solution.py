"""Enumerate the member projects of a solution manifest."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


PROJECT_LINE_PREFIX = "Project("

# Type GUID of virtual folders used to organise a solution
SOLUTION_FOLDER_GUID = "2150E333-8FDC-42A3-9474-1A3956D46DE8"

_TYPE_GUID_RE = re.compile(r'^\s*Project\(\s*"\{([^}]+)\}"\s*\)')


class SolutionReadError(Exception):
    """The solution manifest cannot be used to list projects."""


@dataclass(frozen=True)
class SolutionEntry:
    """A ``Project(`` line of a manifest, with its path made absolute."""

    path: str
    type_guid: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.type_guid is not None and self.type_guid.upper() == SOLUTION_FOLDER_GUID


def enumerate_projects(solution_path: Union[str, Path]) -> List[str]:
    """
    List the project files declared by a solution manifest.

    Project lines look like::

        Project("{type-guid}") = "App", "src\\App\\App.csproj", "{guid}"

    The second field is taken as a path relative to the manifest's directory.
    Every other line is ignored.

    Args:
        solution_path: Path to the ``.sln`` file.

    Returns:
        Absolute project paths, in manifest order.

    Raises:
        SolutionReadError: If the manifest has no parent directory, or
            cannot be read or decoded.
    """
    return [entry.path for entry in enumerate_entries(solution_path)]


def enumerate_entries(solution_path: Union[str, Path]) -> List[SolutionEntry]:
    """
    List every ``Project(`` line of a manifest with its type GUID.

    Same rules and errors as enumerate_projects; solution folders are
    included and can be recognised with SolutionEntry.is_folder.
    """
    path = Path(solution_path).resolve()
    if path.parent == path:
        raise SolutionReadError(f"'{solution_path}' has no parent directory")
    solution_dir = path.parent

    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SolutionReadError(f"Unable to read solution file '{solution_path}': {e}") from e

    entries: List[SolutionEntry] = []
    for line in content.splitlines():
        relative_path = parse_project_line(line)
        if relative_path is None:
            continue
        entries.append(SolutionEntry(
            path=str(solution_dir / _to_native(relative_path)),
            type_guid=parse_type_guid(line),
        ))

    return entries


def parse_project_line(line: str) -> Optional[str]:
    """
    Extract the project path from a manifest line.

    Returns:
        The relative path as written in the manifest, or None if the line
        does not declare a project.
    """
    if not line.strip().startswith(PROJECT_LINE_PREFIX):
        return None

    parts = line.split(",")
    if len(parts) < 2:
        return None

    field = parts[1].strip()
    if field.startswith('"'):
        field = field[1:]
    if field.endswith('"'):
        field = field[:-1]
    return field or None


def parse_type_guid(line: str) -> Optional[str]:
    """Return the project type GUID of a manifest line, without braces."""
    match = _TYPE_GUID_RE.match(line)
    return match.group(1) if match else None


def _to_native(relative_path: str) -> str:
    """Manifests are written with Windows separators."""
    return relative_path.replace("\\", os.sep).replace("/", os.sep)
