"""Scanner module for solution enumeration and reference classification."""

from .document import DocumentScanner
from .classifier import classify, detect_dialect, normalize_target_name
from .solution import enumerate_entries, enumerate_projects, SolutionReadError
from .finder import check_project, find_references

__all__ = [
    "DocumentScanner",
    "classify",
    "detect_dialect",
    "normalize_target_name",
    "enumerate_entries",
    "enumerate_projects",
    "SolutionReadError",
    "check_project",
    "find_references",
]
