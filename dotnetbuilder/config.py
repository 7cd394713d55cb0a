import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from . import detect
from .errors import InvalidExecutionEnvironmentError, ProjectTomlParseError
from .sdk_command import VerbosityLevel

DEFAULT_BUILD_CONFIGURATION = "Release"

BUILD_CONFIGURATION_ENV = "BUILD_CONFIGURATION"
EXECUTION_ENVIRONMENT_ENV = "CNB_EXEC_ENV"
MSBUILD_VERBOSITY_LEVEL_ENV = "MSBUILD_VERBOSITY_LEVEL"


class ExecutionEnvironment(enum.Enum):
    PRODUCTION = "production"
    TEST = "test"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            raise InvalidExecutionEnvironmentError(value) from None


@dataclass(frozen=True)
class ProjectTomlConfig:
    """The [com.heroku.buildpacks.dotnet] table of project.toml."""
    solution_file: Optional[Path] = None
    msbuild_configuration: Optional[str] = None
    msbuild_verbosity: Optional[str] = None


@dataclass(frozen=True)
class BuildConfiguration:
    build_configuration: Optional[str] = None
    execution_environment: ExecutionEnvironment = ExecutionEnvironment.PRODUCTION
    msbuild_verbosity_level: Optional[VerbosityLevel] = None
    solution_file: Optional[Path] = None

    @property
    def effective_build_configuration(self):
        return self.build_configuration or DEFAULT_BUILD_CONFIGURATION


def parse_project_toml(content, path="project.toml"):
    try:
        document = toml.loads(content)
    except toml.TomlDecodeError as e:
        raise ProjectTomlParseError(path, e) from e

    dotnet = document
    for key in ("com", "heroku", "buildpacks", "dotnet"):
        dotnet = dotnet.get(key) if isinstance(dotnet, dict) else None
    if not isinstance(dotnet, dict):
        return None

    msbuild = dotnet.get("msbuild", {})
    if not isinstance(msbuild, dict):
        raise ProjectTomlParseError(path, "`msbuild` must be a table")
    solution_file = _optional_string(dotnet, "solution_file", path)
    return ProjectTomlConfig(
        solution_file=Path(solution_file) if solution_file else None,
        msbuild_configuration=_optional_string(msbuild, "configuration", path),
        msbuild_verbosity=_optional_string(msbuild, "verbosity", path),
    )


def _optional_string(table, key, path):
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ProjectTomlParseError(path, f"`{key}` must be a string")
    return value


def load_project_toml(app_dir="."):
    config_path = detect.project_toml_file(app_dir)
    if config_path is None:
        return None
    try:
        content = config_path.read_text()
    except IOError as e:
        raise ProjectTomlParseError(config_path, e) from e
    return parse_project_toml(content, config_path)


def load_config(path=".", env=None):
    """Combine project.toml settings with environment overrides."""
    env = os.environ if env is None else env
    project_toml = load_project_toml(path) or ProjectTomlConfig()

    build_configuration = env.get(BUILD_CONFIGURATION_ENV) or project_toml.msbuild_configuration
    verbosity = env.get(MSBUILD_VERBOSITY_LEVEL_ENV) or project_toml.msbuild_verbosity
    execution_environment = env.get(EXECUTION_ENVIRONMENT_ENV)

    return BuildConfiguration(
        build_configuration=build_configuration,
        execution_environment=(
            ExecutionEnvironment.parse(execution_environment)
            if execution_environment else ExecutionEnvironment.PRODUCTION
        ),
        msbuild_verbosity_level=VerbosityLevel.parse(verbosity) if verbosity else None,
        solution_file=project_toml.solution_file,
    )
