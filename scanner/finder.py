"""Look up a component across every project of a solution."""

from pathlib import Path
from typing import Union

from report.model import ProjectFailure, ReferenceKind, ScanResult
from .classifier import Trace, classify, normalize_target_name
from .solution import enumerate_entries


def read_project(project_path: Union[str, Path]) -> str:
    """
    Read a project document as text.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8 text.
    """
    data = Path(project_path).read_bytes()
    return data.decode("utf-8-sig")


def check_project(
    project_path: str,
    target_name: str,
    trace: Trace = None,
) -> Union[ReferenceKind, ProjectFailure]:
    """
    Classify one project, turning read problems into a failure value.

    Args:
        project_path: Path to the project document.
        target_name: Component to look for.
        trace: Optional callable receiving diagnostic lines.

    Returns:
        The reference kind found, or a ProjectFailure if the document could
        not be read or decoded.
    """
    if trace is not None:
        trace(f"Reading project: {project_path}")

    try:
        document_text = read_project(project_path)
    except UnicodeDecodeError as e:
        return ProjectFailure(project_path, f"not valid UTF-8 text ({e.reason})")
    except OSError as e:
        return ProjectFailure(project_path, e.strerror or str(e))

    return classify(document_text, target_name, trace)


def find_references(
    solution_path: Union[str, Path],
    target_name: str,
    trace: Trace = None,
) -> ScanResult:
    """
    Find every project of a solution that references target_name.

    Projects are examined in manifest order. Solution folders are skipped.
    A project that cannot be read is recorded as a failure and the
    remaining projects are still examined.

    Args:
        solution_path: Path to the ``.sln`` file.
        target_name: Component name, optionally given as a ``.dll`` file name.
        trace: Optional callable receiving diagnostic lines.

    Returns:
        ScanResult with the matching projects and the skipped ones.

    Raises:
        SolutionReadError: If the solution manifest cannot be used.
    """
    entries = enumerate_entries(solution_path)
    result = ScanResult(
        target_name=normalize_target_name(target_name),
        query=target_name,
        solution_path=str(Path(solution_path).resolve()),
    )

    for entry in entries:
        project_path = entry.path
        if entry.is_folder:
            if trace is not None:
                trace(f"Skipping solution folder: {project_path}")
            continue

        outcome = check_project(project_path, target_name, trace)
        result.projects_scanned += 1

        if isinstance(outcome, ProjectFailure):
            if trace is not None:
                trace(f"Skipping project: {outcome.project_path} ({outcome.reason})")
            result.add_failure(outcome.project_path, outcome.reason)
        elif outcome is not ReferenceKind.NONE:
            result.add_match(project_path, outcome)

    return result
