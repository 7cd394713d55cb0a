import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import detect
from .app_source import discover_from_dir, discover_from_file, resolve
from .cli_logger import logger
from .config import BuildConfiguration, ExecutionEnvironment
from .dotnet.global_json import parse_global_json
from .dotnet.inventory import Inventory
from .dotnet.runtime_identifier import Arch, Os, detect_host_runtime_identifier, get_runtime_identifier
from .dotnet.target_framework import solution_version_constraint
from .errors import (
    CommandFailedError,
    ConfiguredSolutionFileNotFoundError,
    GlobalJsonParseError,
    NoSolutionProjectsError,
    SdkVersionNotFoundError,
    UnsupportedPlatformError,
)
from .launch_process import detect_solution_processes
from .sdk_command import DotnetPublishCommand, DotnetTestCommand
from .utils.command_executor import format_command, stream_shell_command

PROCFILE = "Procfile"


@dataclass
class BuildPlan:
    app_dir: Path
    app_source: object
    solution: object
    version_constraint: object
    runtime_identifier: object
    configuration: BuildConfiguration
    artifact: Optional[object] = None
    publish_command: Optional[DotnetPublishCommand] = None
    test_command: Optional[DotnetTestCommand] = None
    tools_manifest: Optional[Path] = None
    processes: List[object] = field(default_factory=list)


def discover_app_source(app_dir, configuration):
    if configuration.solution_file:
        logger.sub_bullet(f"Using configured solution file: {configuration.solution_file}")
        configured_path = Path(app_dir) / configuration.solution_file
        if not configured_path.is_file():
            raise ConfiguredSolutionFileNotFoundError(configured_path)
        return discover_from_file(configured_path)
    return discover_from_dir(app_dir)


def detect_sdk_version_requirement(app_dir, solution):
    """Root global.json wins over the target frameworks of the solution's projects."""
    global_json_path = detect.global_json_file(app_dir)
    sdk_config = None
    if global_json_path is not None:
        try:
            content = global_json_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise GlobalJsonParseError(str(global_json_path), f"could not read {global_json_path} ({e})") from e
        sdk_config = parse_global_json(content)

    if sdk_config is not None:
        logger.sub_bullet("Detecting version requirement from root global.json file")
        constraint = sdk_config.version_constraint()
    else:
        logger.sub_bullet(f"Inferring version requirement from {solution.path}")
        constraint = solution_version_constraint(solution)

    logger.sub_bullet(f"Detected version requirement: {constraint}")
    return constraint


def _target_platform(target_os, target_arch):
    os_name = Os.parse(target_os)
    arch = Arch.parse(target_arch)
    if os_name is None or arch is None:
        raise UnsupportedPlatformError(target_os, target_arch)
    return os_name, arch


def plan_build(app_dir, configuration, inventory=None, target_os=None, target_arch=None):
    """Work out everything needed to publish the app in `app_dir` without running anything."""
    app_dir = Path(app_dir)
    logger.heading(".NET build")
    logger.bullet("SDK version detection")

    app_source = discover_app_source(app_dir, configuration)
    logger.sub_bullet(f"Detected .NET {app_source.source_type}: {app_source.path}")

    solution = resolve(app_source)
    if not solution.projects:
        raise NoSolutionProjectsError(solution.path)
    constraint = detect_sdk_version_requirement(app_dir, solution)

    artifact = None
    if target_os and target_arch:
        os_name, arch = _target_platform(target_os, target_arch)
        runtime_identifier = get_runtime_identifier(os_name, arch)
        if inventory is not None:
            artifact = inventory.resolve(os_name, arch, constraint)
            if artifact is None:
                raise SdkVersionNotFoundError(constraint, os_name, arch)
            logger.sub_bullet(f"Resolved .NET SDK version {artifact.version} ({os_name.value}-{arch.value})")
    else:
        runtime_identifier = detect_host_runtime_identifier()

    plan = BuildPlan(
        app_dir=app_dir,
        app_source=app_source,
        solution=solution,
        version_constraint=constraint,
        runtime_identifier=runtime_identifier,
        configuration=configuration,
        artifact=artifact,
        tools_manifest=detect.dotnet_tools_manifest_file(app_dir),
    )

    if configuration.execution_environment == ExecutionEnvironment.TEST:
        plan.test_command = DotnetTestCommand(
            path=solution.path,
            configuration=configuration.build_configuration,
            verbosity_level=configuration.msbuild_verbosity_level,
        )
    else:
        plan.publish_command = DotnetPublishCommand(
            path=solution.path,
            runtime_identifier=runtime_identifier,
            configuration=configuration.effective_build_configuration,
            verbosity_level=configuration.msbuild_verbosity_level,
        )
    return plan


def _stream(command, cwd, runner):
    logger.sub_bullet(f"Running {format_command(command)}")
    returncode = runner(command, lambda line: logger.step_info(line, indent=6), cwd=str(cwd))
    if returncode != 0:
        raise CommandFailedError(format_command(command), returncode)


def restore_tools(plan, runner=stream_shell_command):
    if plan.tools_manifest is None:
        return
    logger.bullet("Restore .NET tools")
    logger.sub_bullet("Tool manifest file detected")
    _stream(
        ["dotnet", "tool", "restore", "--tool-manifest", str(plan.tools_manifest)],
        plan.app_dir,
        runner,
    )


def register_processes(plan):
    """Detect launch processes from published artifacts, unless a Procfile overrides them."""
    logger.bullet("Process types")
    logger.sub_bullet("Detecting process types from published artifacts")
    results = detect_solution_processes(
        plan.app_dir,
        plan.solution,
        plan.configuration.effective_build_configuration,
        plan.runtime_identifier,
    )
    if not results:
        logger.sub_bullet("No candidate projects detected")
        return []

    logger.sub_bullet("Analyzing candidates:")
    for result in results:
        if result.is_valid:
            logger.sub_bullet(f"{result.relative_source}: Found artifact at {result.relative_artifact}")
        else:
            logger.sub_bullet(f"{result.relative_source}: No artifact found at {result.relative_artifact}")

    processes = [result.process for result in results if result.is_valid]
    if not processes:
        return []

    if os.path.exists(plan.app_dir / PROCFILE):
        logger.sub_bullet("Procfile detected")
        logger.sub_bullet("Skipping automatic registration (Procfile takes precedence)")
        logger.sub_bullet("Available process types (for reference):")
        registered = []
    else:
        logger.sub_bullet("No Procfile detected")
        logger.sub_bullet("Registering launch processes:")
        registered = processes

    for process in processes:
        logger.sub_bullet(f"{process.type}: {' '.join(process.command)}")
    return registered


def execute_build(plan, runner=stream_shell_command):
    """Run tool restore and publish for `plan`, returning the launch processes to register."""
    restore_tools(plan, runner)

    if plan.test_command is not None:
        process = plan.test_command.to_process()
        logger.bullet("Process types")
        logger.sub_bullet(f"{process.type}: {' '.join(process.command)}")
        plan.processes = [process]
        return plan.processes

    logger.bullet("Publish app")
    _stream(plan.publish_command.to_args(), plan.app_dir, runner)
    plan.processes = register_processes(plan)
    return plan.processes


def load_inventory(path):
    return Inventory.load(path) if path else None
