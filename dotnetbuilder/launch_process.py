import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .dotnet.project import ProjectType
from .errors import InvalidProcessTypeError, InvalidProjectTypeError

PROCESS_TYPE_RE = re.compile(r"^[A-Za-z0-9._-]+$")
WEB_URLS_ARGUMENT = "--urls http://*:$PORT"


@dataclass(frozen=True)
class Process:
    type: str
    command: List[str]
    default: bool = False


@dataclass(frozen=True)
class ProcessDetectionResult:
    """Outcome for one executable project: `process` is None when no artifact was published."""
    project: object
    relative_source: Path
    relative_artifact: Path
    process: Optional[Process] = field(default=None)

    @property
    def is_valid(self):
        return self.process is not None


def executable_path(project, descriptor_path, configuration, runtime_identifier):
    """Expected `dotnet publish` output for `project`.

    <project dir>/bin/<configuration>/<tfm>/<rid>/publish/<assembly name>
    """
    if not project.project_type.is_executable:
        raise InvalidProjectTypeError(project)

    descriptor_path = Path(descriptor_path)
    executable_name = project.assembly_name or descriptor_path.stem
    return (
        descriptor_path.parent
        / "bin"
        / configuration
        / project.target_framework
        / str(runtime_identifier)
        / "publish"
        / executable_name
    )


def process_type_for(project):
    name = project.assembly_name
    if not PROCESS_TYPE_RE.match(name):
        raise InvalidProcessTypeError(name)
    return name


def build_process(project, relative_executable):
    """Launch `relative_executable` (relative to the app directory) from the app directory."""
    command = f"./{relative_executable.name}"
    if project.project_type == ProjectType.WEB_APPLICATION:
        command += f" {WEB_URLS_ARGUMENT}"
    return Process(
        type=process_type_for(project),
        command=["bash", "-c", f"cd {relative_executable.parent}; {command}"],
    )


def _relative_to(path, base):
    try:
        return Path(os.path.relpath(path, base))
    except ValueError:
        return Path(path)


def detect_solution_processes(app_dir, solution, configuration, runtime_identifier):
    """One result per executable project; other project kinds are skipped."""
    app_dir = Path(app_dir)
    results = []
    for project in solution.projects:
        if not project.project_type.is_executable:
            continue
        executable = executable_path(project, project.path, configuration, runtime_identifier)
        relative_artifact = _relative_to(executable, app_dir)
        process = None
        if executable.is_file():
            process = build_process(project, relative_artifact)
        results.append(ProcessDetectionResult(
            project=project,
            relative_source=_relative_to(project.path, app_dir),
            relative_artifact=relative_artifact,
            process=process,
        ))
    return results
