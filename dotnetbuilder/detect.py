import os
from pathlib import Path

SOLUTION_EXTENSIONS = ("sln", "slnx")
PROJECT_EXTENSIONS = ("csproj", "vbproj", "fsproj")
FILE_BASED_APP_EXTENSIONS = ("cs",)

GLOBAL_JSON_FILE = "global.json"
PROJECT_TOML_FILE = "project.toml"
DIRECTORY_BUILD_PROPS_FILE = "Directory.Build.props"
DOTNET_TOOLS_MANIFEST = os.path.join(".config", "dotnet-tools.json")


def _extension(path):
    return path.suffix[1:].lower() if path.suffix else ""


def files_with_extensions(directory, extensions):
    """Return the regular files directly inside `directory` matching `extensions`.

    The listing is sorted so repeated scans of the same tree report paths in
    the same order. OSError is propagated to the caller.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        entry for entry in directory.iterdir()
        if entry.is_file() and _extension(entry) in extensions
    )


def solution_file_paths(directory):
    return files_with_extensions(directory, SOLUTION_EXTENSIONS)


def project_file_paths(directory):
    return files_with_extensions(directory, PROJECT_EXTENSIONS)


def file_based_app_paths(directory):
    return files_with_extensions(directory, FILE_BASED_APP_EXTENSIONS)


def has_dotnet_app(directory):
    """True when the directory holds any file this tool knows how to build."""
    extensions = SOLUTION_EXTENSIONS + PROJECT_EXTENSIONS + FILE_BASED_APP_EXTENSIONS
    return bool(files_with_extensions(directory, extensions))


def _existing_file(path):
    return path if path.is_file() else None


def global_json_file(app_dir):
    return _existing_file(Path(app_dir) / GLOBAL_JSON_FILE)


def project_toml_file(app_dir):
    return _existing_file(Path(app_dir) / PROJECT_TOML_FILE)


def dotnet_tools_manifest_file(app_dir):
    return _existing_file(Path(app_dir) / DOTNET_TOOLS_MANIFEST)


def directory_build_props_file(start_dir):
    """Walk from `start_dir` up to the filesystem root looking for Directory.Build.props."""
    start_dir = Path(start_dir).absolute()
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / DIRECTORY_BUILD_PROPS_FILE
        if candidate.is_file():
            return candidate
    return None
