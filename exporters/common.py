"""Helpers shared by the exporters."""

from pathlib import Path
from typing import Any, Dict, Optional

from report.model import ScanResult


def display_path(path: str, base: Optional[Path] = None) -> str:
    """
    Get the string representation of a project path.

    Paths under base are shown relative to it; others are shown as-is.
    """
    if base is None:
        return path
    try:
        rel_path = Path(path).resolve().relative_to(base.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        return path


def result_to_dict(result: ScanResult, base: Optional[Path] = None) -> Dict[str, Any]:
    """Build the plain-data form of a result used by the structured exporters."""
    return {
        "target": result.target_name,
        "query": result.query,
        "solution": result.solution_path,
        "projects_scanned": result.projects_scanned,
        "matches": [
            {"project": display_path(record.project_path, base), "kind": str(record.kind)}
            for record in result.iter_matches()
        ],
        "failures": [
            {"project": display_path(failure.project_path, base), "reason": failure.reason}
            for failure in result.iter_failures()
        ],
    }
