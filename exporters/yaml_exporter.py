"""YAML exporter for lookup results."""

from pathlib import Path
from typing import Optional

import yaml

from report.model import ScanResult
from .common import result_to_dict


def to_yaml(result: ScanResult, base: Optional[Path] = None) -> str:
    """
    Convert a lookup result to a YAML document.

    Keys keep the same order as the JSON output.
    """
    return yaml.safe_dump(
        result_to_dict(result, base),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
