"""Tests for looking up a component across a solution."""

import tempfile
from pathlib import Path

import pytest

from report.model import ProjectFailure, ReferenceKind
from scanner.finder import check_project, find_references
from scanner.solution import SolutionReadError


CSHARP = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"

SDK_PACKAGE = """<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <PackageReference Include="Newtonsoft.Json" Version="13.0.1" />
    <ProjectReference Include="..\\Lib\\Lib.csproj" />
  </ItemGroup>
</Project>
"""

SDK_EMPTY = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
  </PropertyGroup>
</Project>
"""

LEGACY_REFERENCE = """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="15.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <ItemGroup>
    <Reference Include="Newtonsoft.Json">
      <HintPath>..\\packages\\Newtonsoft.Json.13.0.1\\lib\\net45\\Newtonsoft.Json.dll</HintPath>
    </Reference>
  </ItemGroup>
</Project>
"""


def _make_solution(root: Path, projects: dict) -> Path:
    """
    Write a solution and its project files.

    ``projects`` maps a backslash-separated relative path to the file
    content (str or bytes); None leaves the file out.
    """
    lines = []
    for index, (relative, content) in enumerate(projects.items()):
        name = relative.split("\\")[-1].split(".")[0]
        lines.append(f'Project("{CSHARP}") = "{name}", "{relative}", "{{{index}}}"')
        lines.append("EndProject")
        if content is None:
            continue
        path = root.joinpath(*relative.split("\\"))
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")

    sln = root / "Demo.sln"
    sln.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return sln


class TestFindReferences:
    """Tests for find_references."""

    def test_mixed_solution(self):
        """Test matches, non-matches and skipped projects together."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {
                "App\\App.csproj": SDK_PACKAGE,
                "Lib\\Lib.csproj": SDK_EMPTY,
                "Old\\Old.csproj": LEGACY_REFERENCE,
                "Gone\\Gone.csproj": None,
                "Bin\\Bin.csproj": b"\xff\xfe\x00<Project/>",
            })

            result = find_references(sln, "Newtonsoft.Json")

            assert result.target_name == "Newtonsoft.Json"
            assert result.solution_path == str(sln)
            assert result.projects_scanned == 5
            assert [(r.project_path, r.kind) for r in result.matches] == [
                (str(root / "App" / "App.csproj"), ReferenceKind.PACKAGE_REFERENCE),
                (str(root / "Old" / "Old.csproj"), ReferenceKind.REFERENCE),
            ]
            assert [f.project_path for f in result.failures] == [
                str(root / "Gone" / "Gone.csproj"),
                str(root / "Bin" / "Bin.csproj"),
            ]
            assert len(result) == 2

    def test_dll_target(self):
        """Test that a .dll file name finds the component."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {"Old\\Old.csproj": LEGACY_REFERENCE})

            result = find_references(sln, "Newtonsoft.Json.dll")

            assert result.target_name == "Newtonsoft.Json"
            assert [r.kind for r in result.matches] == [ReferenceKind.REFERENCE]

    def test_project_reference(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {
                "App\\App.csproj": SDK_PACKAGE,
                "Lib\\Lib.csproj": SDK_EMPTY,
            })

            result = find_references(sln, "..\\Lib\\Lib.csproj")

            assert [r.kind for r in result.matches] == [ReferenceKind.PROJECT_REFERENCE]

    def test_nothing_found(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {"Lib\\Lib.csproj": SDK_EMPTY})

            result = find_references(sln, "Missing.Lib")

            assert result.is_empty()
            assert not result.has_failures()
            assert result.projects_scanned == 1

    def test_solution_folder_is_skipped(self):
        """Test that solution folders are traced, not reported as failures."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {
                "App\\App.csproj": SDK_PACKAGE,
            })
            with open(sln, "a", encoding="utf-8") as f:
                f.write('Project("{2150E333-8FDC-42A3-9474-1A3956D46DE8}") = "Docs", "Docs", "{9}"\n')
            lines = []

            result = find_references(sln, "Newtonsoft.Json", trace=lines.append)

            assert len(result) == 1
            assert not result.has_failures()
            assert result.projects_scanned == 1
            assert f"Skipping solution folder: {root / 'Docs'}" in lines

    def test_directory_entry_is_a_failure(self):
        """Test that a project entry naming a directory does not stop the run."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {
                "App\\App.csproj": SDK_PACKAGE,
            })
            with open(sln, "a", encoding="utf-8") as f:
                f.write(f'Project("{CSHARP}") = "App", "App", "{{9}}"\n')

            result = find_references(sln, "Newtonsoft.Json")

            assert len(result) == 1
            assert [f.project_path for f in result.failures] == [str(root / "App")]

    def test_query_keeps_given_name(self):
        """Test that the name is kept as given next to the normalized target."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {"Old\\Old.csproj": LEGACY_REFERENCE})

            result = find_references(sln, "Newtonsoft.Json.dll")

            assert result.query == "Newtonsoft.Json.dll"
            assert result.target_name == "Newtonsoft.Json"

    def test_trace(self):
        """Test that progress and skipped projects are traced."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            sln = _make_solution(root, {
                "App\\App.csproj": SDK_PACKAGE,
                "Gone\\Gone.csproj": None,
            })
            lines = []

            find_references(sln, "Newtonsoft.Json", trace=lines.append)

            app = str(root / "App" / "App.csproj")
            gone = str(root / "Gone" / "Gone.csproj")
            assert f"Reading project: {app}" in lines
            assert f"Reading project: {gone}" in lines
            assert any(line.startswith(f"Skipping project: {gone}") for line in lines)

    def test_missing_solution(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(SolutionReadError):
                find_references(Path(tmpdir) / "Missing.sln", "Newtonsoft.Json")


class TestCheckProject:
    """Tests for check_project."""

    def test_match(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "App.csproj"
            path.write_text(SDK_PACKAGE, encoding="utf-8")

            assert check_project(str(path), "Newtonsoft.Json") == ReferenceKind.PACKAGE_REFERENCE

    def test_byte_order_mark(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "App.csproj"
            path.write_bytes(b"\xef\xbb\xbf" + SDK_PACKAGE.encode("utf-8"))

            assert check_project(str(path), "Newtonsoft.Json") == ReferenceKind.PACKAGE_REFERENCE

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = str(Path(tmpdir) / "Missing.csproj")

            outcome = check_project(path, "Newtonsoft.Json")

            assert isinstance(outcome, ProjectFailure)
            assert outcome.project_path == path
            assert outcome.reason

    def test_not_text(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "App.csproj"
            path.write_bytes(b"<Project>\xff</Project>")

            outcome = check_project(str(path), "Newtonsoft.Json")

            assert isinstance(outcome, ProjectFailure)
            assert "UTF-8" in outcome.reason
