import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from ..errors import ProjectNotFoundError, ReadSolutionFileError, SlnxParseError
from .project import Project, load_project

# Project("{type-guid}") = "Name", "Relative\Path.csproj", "{project-guid}"
# Solution folders use the folder name as "path", which has no extension.
PROJECT_LINE_RE = re.compile(
    r'Project\("\{[^}]+\}"\) = "[^"]+", "([^"]+\.[^"]+)", "\{[^}]+\}"'
)


@dataclass(frozen=True)
class Solution:
    path: Path
    projects: Tuple[Project, ...]

    @classmethod
    def ephemeral(cls, project):
        """Wrap a single project so it can be handled like a solution."""
        return cls(path=project.path, projects=(project,))


def _normalize(project_path):
    return project_path.replace("\\", "/")


def extract_sln_project_paths(content):
    """Project paths declared in a legacy .sln file, in declaration order."""
    paths = []
    for line in content.splitlines():
        match = PROJECT_LINE_RE.search(line)
        if match:
            paths.append(_normalize(match.group(1)))
    return paths


def _local_name(tag):
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def extract_slnx_project_paths(content, path=None):
    """Project paths from an XML .slnx file: root projects first, then those in folders."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise SlnxParseError(path, e) from e

    root_projects = []
    folder_projects = []
    for child in root:
        name = _local_name(child.tag)
        if name == "Project":
            root_projects.append(child)
        elif name == "Folder":
            folder_projects.extend(
                element for element in child if _local_name(element.tag) == "Project"
            )

    return [
        _normalize(element.get("Path"))
        for element in root_projects + folder_projects
        if element.get("Path")
    ]


def _load_member(project_path):
    if not project_path.exists():
        raise ProjectNotFoundError(project_path)
    return load_project(project_path)


def load_solution(path):
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadSolutionFileError(path, e) from e

    if path.suffix.lower() == ".slnx":
        project_paths = extract_slnx_project_paths(content, path)
    else:
        project_paths = extract_sln_project_paths(content)

    # Members are loaded in declaration order and the first failure aborts the load.
    projects = tuple(_load_member(path.parent / project_path) for project_path in project_paths)
    return Solution(path=path, projects=projects)
