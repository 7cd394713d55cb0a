import click
from ..app_source import discover, resolve
from ..cli_logger import logger
from ..config import DEFAULT_BUILD_CONFIGURATION
from ..decorators import handle_exceptions
from ..dotnet.runtime_identifier import detect_host_runtime_identifier
from ..dotnet.target_framework import derive_constraint_from_moniker
from ..errors import DotnetBuilderError
from ..launch_process import executable_path

@click.command()
@click.pass_context
@click.argument("target", required=False)
@click.option("--configuration", "-c", default=DEFAULT_BUILD_CONFIGURATION, help="Build configuration (e.g., Release, Debug).")
@click.option("--rid", default=None, help="Runtime identifier to compute publish paths for (defaults to this machine).")
@handle_exceptions
def inspect(ctx, target, configuration, rid):
    """Show the solution, projects and publish paths for TARGET.

    TARGET: A directory or an explicit .sln/.slnx/.csproj/.vbproj/.fsproj/.cs file
    (defaults to the project directory).
    """
    app_source = discover(target or ctx.obj["path"])
    logger.info(f"Detected .NET {app_source.source_type}: {app_source.path}")

    solution = resolve(app_source)
    rid = rid or str(detect_host_runtime_identifier())

    if not solution.projects:
        logger.warning(f"{solution.path} does not reference any projects.")
        return

    for project in solution.projects:
        logger.bullet(f"{project.path}")
        logger.sub_bullet(f"Type: {project.project_type.value}")
        logger.sub_bullet(f"Target framework: {project.target_framework}")
        try:
            requirement = derive_constraint_from_moniker(project.target_framework)
        except DotnetBuilderError as e:
            requirement = f"none ({e})"
        logger.sub_bullet(f"SDK version requirement: {requirement}")
        logger.sub_bullet(f"Assembly name: {project.assembly_name}")
        if project.project_type.is_executable:
            logger.sub_bullet(f"Executable: {executable_path(project, project.path, configuration, rid)}")
        else:
            logger.sub_bullet("Executable: none (project does not produce an executable)")
