"""Load MSBuild project files (.csproj, .vbproj, .fsproj) and file-based C# apps."""
import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from ..detect import directory_build_props_file
from ..errors import (
    DirectoryBuildPropsError,
    MissingTargetFrameworkError,
    ProjectXmlParseError,
    ReadFileBasedAppError,
    ReadProjectFileError,
)

DEFAULT_SDK = "Microsoft.NET.Sdk"
WEB_SDKS = ("Microsoft.NET.Sdk.Web", "Microsoft.NET.Sdk.Razor")
WORKER_SDK = "Microsoft.NET.Sdk.Worker"
FILE_BASED_APP_DEFAULT_TFM = "net10.0"

SDK_DIRECTIVE = "#:sdk "
TFM_DIRECTIVE = "#:property TargetFramework="


class ProjectType(enum.Enum):
    CONSOLE_APPLICATION = "console application"
    WEB_APPLICATION = "web application"
    WORKER_SERVICE = "worker service"
    LIBRARY = "library"
    UNKNOWN = "unknown"

    @property
    def is_executable(self):
        return self in EXECUTABLE_PROJECT_TYPES


EXECUTABLE_PROJECT_TYPES = frozenset({
    ProjectType.CONSOLE_APPLICATION,
    ProjectType.WEB_APPLICATION,
    ProjectType.WORKER_SERVICE,
})


@dataclass(frozen=True)
class Project:
    path: Path
    target_framework: str
    project_type: ProjectType
    assembly_name: str


def infer_project_type(sdk_id, output_type):
    if sdk_id in WEB_SDKS:
        return ProjectType.WEB_APPLICATION
    if sdk_id == WORKER_SDK:
        return ProjectType.WORKER_SERVICE
    if sdk_id == DEFAULT_SDK:
        if output_type == "Exe":
            return ProjectType.CONSOLE_APPLICATION
        if output_type == "Library":
            return ProjectType.LIBRARY
    return ProjectType.UNKNOWN


def _local_name(tag):
    # Legacy projects declare the MSBuild namespace on the root element.
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _text(element):
    return (element.text or "").strip()


def _children(element, name):
    return [child for child in element if _local_name(child.tag) == name]


def _properties(root):
    """Direct children of the top-level PropertyGroup elements, in document order.

    Properties assigned inside targets only apply while that target runs.
    """
    for group in _children(root, "PropertyGroup"):
        yield from group


def _last_target_framework(root):
    target_framework = None
    for element in _properties(root):
        if _local_name(element.tag) == "TargetFramework":
            target_framework = _text(element)
    return target_framework or None


def target_framework_from_directory_build_props(start_dir):
    props_path = directory_build_props_file(start_dir)
    if props_path is None:
        return None
    try:
        root = ET.fromstring(props_path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, ET.ParseError) as e:
        raise DirectoryBuildPropsError(props_path, e) from e
    return _last_target_framework(root)


def parse_project_content(content, path):
    """Build a Project from project file XML. `path` is the file the content came from."""
    path = Path(path)
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ProjectXmlParseError(path, e) from e

    root_sdk = root.get("Sdk") or None
    element_sdk = None
    target_framework = None
    output_type = None
    assembly_name = None

    for element in _children(root, "Sdk"):
        element_sdk = element.get("Name") or _text(element) or element_sdk

    for element in _properties(root):
        name = _local_name(element.tag)
        if name == "TargetFramework":
            target_framework = _text(element)
        elif name == "OutputType":
            output_type = _text(element)
        elif name == "AssemblyName":
            assembly_name = _text(element)

    if not target_framework:
        target_framework = target_framework_from_directory_build_props(path.parent)
        if not target_framework:
            raise MissingTargetFrameworkError(path)

    sdk_id = root_sdk or element_sdk
    project_type = infer_project_type(sdk_id, output_type) if sdk_id else ProjectType.UNKNOWN

    return Project(
        path=path,
        target_framework=target_framework,
        project_type=project_type,
        # A blank final AssemblyName resets to the default, like MSBuild does.
        assembly_name=assembly_name or path.stem,
    )


def load_project(path):
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadProjectFileError(path, e) from e
    return parse_project_content(content, path)


def load_file_based_app(path):
    """Treat a single .cs file as an implicit console project.

    ``#:sdk`` and ``#:property TargetFramework=`` directives are honoured
    (first occurrence wins); the assembly name is always the file stem.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFileBasedAppError(path, e) from e

    sdk_id = None
    target_framework = None
    for line in content.splitlines():
        line = line.strip()
        if sdk_id is None and line.startswith(SDK_DIRECTIVE):
            sdk_id = line[len(SDK_DIRECTIVE):].strip()
        if target_framework is None and line.startswith(TFM_DIRECTIVE):
            target_framework = line[len(TFM_DIRECTIVE):].strip()
        if sdk_id is not None and target_framework is not None:
            break

    if target_framework is None:
        target_framework = (
            target_framework_from_directory_build_props(path.parent)
            or FILE_BASED_APP_DEFAULT_TFM
        )

    return Project(
        path=path,
        target_framework=target_framework,
        project_type=infer_project_type(sdk_id or DEFAULT_SDK, "Exe"),
        assembly_name=path.stem,
    )
