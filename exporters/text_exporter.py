"""Plain-text summary exporter for lookup results."""

from pathlib import Path
from typing import List, Optional

from report.model import ScanResult
from .common import display_path


def summary_line(result: ScanResult) -> str:
    """Return the one-line summary for a result."""
    if result.is_empty():
        return f'No dependencies to "{result.query}" were found in the project folder.'
    return f'{len(result)} references to "{result.query}" were found in the project folder.'


def to_text(result: ScanResult, base: Optional[Path] = None) -> str:
    """
    Convert a lookup result to human-readable text.

    One line per matching project, one per skipped project, then the
    summary line.
    """
    lines: List[str] = []

    if not result.is_empty():
        width = max(len(str(record.kind)) for record in result.iter_matches())
        for record in result.iter_matches():
            lines.append(f"{str(record.kind):<{width}}  {display_path(record.project_path, base)}")

    for failure in result.iter_failures():
        lines.append(f"Skipped {display_path(failure.project_path, base)}: {failure.reason}")

    lines.append(summary_line(result))
    return "\n".join(lines)
