import enum
from dataclasses import dataclass
from pathlib import Path

from . import detect
from .dotnet.project import load_file_based_app, load_project
from .dotnet.solution import Solution, load_solution
from .errors import (
    AmbiguousAppSourceError,
    DetectionIOError,
    InvalidPathError,
    NoAppFoundError,
    UnrecognizedAppExtensionError,
)


class AppSourceKind(enum.Enum):
    SOLUTION = ("solution", "solution", detect.SOLUTION_EXTENSIONS)
    PROJECT = ("project", "project", detect.PROJECT_EXTENSIONS)
    FILE_BASED_APP = ("file-based app", "C# (file-based app)", detect.FILE_BASED_APP_EXTENSIONS)

    def __init__(self, source_type, description, extensions):
        self.source_type = source_type
        self.description = description
        self.extensions = extensions

    @classmethod
    def from_extension(cls, extension):
        for kind in cls:
            if extension.lower() in kind.extensions:
                return kind
        return None


@dataclass(frozen=True)
class AppSource:
    kind: AppSourceKind
    path: Path

    @property
    def source_type(self):
        return self.kind.source_type


class FinderStrategy:
    """Scan one directory for descriptors of a single kind."""

    def __init__(self, kind, finder):
        self.kind = kind
        self.finder = finder

    def find(self, directory):
        return self.finder(directory)


# Order is precedence: a solution beats a project, a project beats a loose .cs file.
STRATEGIES = (
    FinderStrategy(AppSourceKind.SOLUTION, detect.solution_file_paths),
    FinderStrategy(AppSourceKind.PROJECT, detect.project_file_paths),
    FinderStrategy(AppSourceKind.FILE_BASED_APP, detect.file_based_app_paths),
)


def discover_from_dir(dir_path, strategies=STRATEGIES):
    dir_path = Path(dir_path)
    for strategy in strategies:
        try:
            paths = strategy.find(dir_path)
        except OSError as e:
            raise DetectionIOError(dir_path, e) from e

        if len(paths) == 1:
            return AppSource(strategy.kind, paths[0])
        if len(paths) > 1:
            raise AmbiguousAppSourceError(strategy.kind, paths)

    raise NoAppFoundError(dir_path)


def discover_from_file(file_path):
    file_path = Path(file_path)
    kind = AppSourceKind.from_extension(file_path.suffix[1:]) if file_path.suffix else None
    if kind is None:
        raise UnrecognizedAppExtensionError(file_path)
    return AppSource(kind, file_path)


def discover(path):
    """Find the single build descriptor for `path`, a directory or an explicit file."""
    path = Path(path)
    if path.is_dir():
        return discover_from_dir(path)
    if path.is_file():
        return discover_from_file(path)
    raise InvalidPathError(path)


def resolve(app_source):
    """Load `app_source` into a Solution; single projects and .cs files become ephemeral solutions."""
    if app_source.kind is AppSourceKind.SOLUTION:
        return load_solution(app_source.path)
    if app_source.kind is AppSourceKind.PROJECT:
        return Solution.ephemeral(load_project(app_source.path))
    return Solution.ephemeral(load_file_based_app(app_source.path))
