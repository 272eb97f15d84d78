"""JSON exporter for lookup results (machine-friendly format)."""

import json
from pathlib import Path
from typing import Optional

from report.model import ScanResult
from .common import result_to_dict


def to_json(
    result: ScanResult,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a lookup result to JSON format.

    Args:
        result: The lookup result to export.
        base: Optional base path for relative path display.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the result.
    """
    return json.dumps(result_to_dict(result, base), indent=indent)
