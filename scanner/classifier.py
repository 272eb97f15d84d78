"""Classify how a project document references a component."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Optional

from report.model import CLASSIFICATION_ORDER, ReferenceKind
from .document import (
    DocumentScanner,
    ElementEmpty,
    ElementStart,
    EndOfDocument,
    iter_elements,
)


Trace = Optional[Callable[[str], None]]

BINARY_SUFFIX = ".dll"


@dataclass(frozen=True)
class ProjectDialect:
    """
    Format hints found on a project document's root element.

    SDK-style projects declare ``Sdk="..."``; older projects declare the
    MSBuild namespace with ``xmlns="..."``.
    """

    namespace: Optional[str] = None
    sdk: Optional[str] = None

    @property
    def is_sdk_style(self) -> bool:
        return self.sdk is not None

    @property
    def is_legacy(self) -> bool:
        return self.namespace is not None and self.sdk is None

    def describe(self) -> str:
        if self.sdk is not None:
            return f"sdk={self.sdk}"
        if self.namespace is not None:
            return f"xmlns={self.namespace}"
        return "unknown"


def normalize_target_name(target_name: str) -> str:
    """
    Reduce a binary file name to the component name it carries.

    "lib\\Grpc.Tools.dll" and "Grpc.Tools.DLL" both become "Grpc.Tools";
    names without the binary suffix are returned unchanged.
    """
    if not target_name.lower().endswith(BINARY_SUFFIX):
        return target_name
    return PurePosixPath(target_name.replace("\\", "/")).stem


def detect_dialect(document_text: str) -> ProjectDialect:
    """
    Find the first element declaring a namespace or an SDK.

    Scanning stops at the first ``xmlns`` or ``sdk`` attribute (keys are
    compared case-insensitively) or at the end of the document.
    """
    for element in iter_elements(document_text):
        for key, value in element.attributes:
            lowered = key.lower()
            if lowered == "xmlns":
                return ProjectDialect(namespace=value)
            if lowered == "sdk":
                return ProjectDialect(sdk=value)
    return ProjectDialect()


def has_reference(
    document_text: str,
    kind: ReferenceKind,
    target_name: str,
    trace: Trace = None,
) -> bool:
    """
    Check whether the document holds a ``kind`` element including target_name.

    Element names must match exactly, the ``Include`` attribute key is
    matched ignoring case, and its value must equal target_name exactly.
    """
    expected_name = str(kind)
    _emit(trace, f"## scanning: {target_name} ({kind})")

    scanner = DocumentScanner(document_text)
    for event in scanner:
        if isinstance(event, EndOfDocument):
            if event.error is not None:
                _emit(trace, f"Error reading document: {event.error}")
            break
        if not isinstance(event, (ElementStart, ElementEmpty)):
            continue
        if event.name != expected_name:
            continue

        for key, value in event.attributes:
            if key.lower() != "include":
                continue
            _emit(trace, f"-----> {value} vs {target_name}")
            if value == target_name:
                return True
            if kind is ReferenceKind.PROJECT_REFERENCE:
                _emit(trace, f"--> ProjectRef: {value}")

    return False


def classify(document_text: str, target_name: str, trace: Trace = None) -> ReferenceKind:
    """
    Determine how a project document references target_name.

    Kinds are tried in CLASSIFICATION_ORDER and the first that matches is
    returned, so a project that both references the binary directly and
    through a package reports ``Reference``.

    Args:
        document_text: Text of the project document.
        target_name: Component name, optionally given as a ``.dll`` file name.
        trace: Optional callable receiving diagnostic lines.

    Returns:
        The matching kind, or ReferenceKind.NONE.
    """
    target_name = normalize_target_name(target_name)

    if trace is not None:
        trace(f"Project format: {detect_dialect(document_text).describe()}")

    for kind in CLASSIFICATION_ORDER:
        if has_reference(document_text, kind, target_name, trace):
            return kind

    return ReferenceKind.NONE


def _emit(trace: Trace, message: str) -> None:
    if trace is not None:
        trace(message)
