import click
from dataclasses import replace
from .. import builder
from .. import config as config_module
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..utils.command_executor import format_command

@click.command()
@click.pass_context
@click.option("--configuration", "-c", default=None, help="Build configuration (e.g., Release, Debug).")
@click.option("--inventory", "inventory_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="TOML inventory of SDK releases to resolve the version requirement against.")
@click.option("--os", "target_os", default=None, help="Target operating system (linux, darwin).")
@click.option("--arch", "target_arch", default=None, help="Target architecture (amd64, arm64).")
@click.option("--dry-run", is_flag=True, help="Only print the build plan, do not run dotnet.")
@handle_exceptions
def build(ctx, configuration, inventory_path, target_os, target_arch, dry_run):
    """Publish the .NET application found in the project directory."""
    app_dir = ctx.obj["path"]
    conf = config_module.load_config(path=app_dir)
    if configuration:
        conf = replace(conf, build_configuration=configuration)

    plan = builder.plan_build(
        app_dir,
        conf,
        inventory=builder.load_inventory(inventory_path),
        target_os=target_os,
        target_arch=target_arch,
    )

    if dry_run:
        if plan.publish_command is not None:
            logger.info(f"Publish command: {format_command(plan.publish_command.to_args())}")
        if plan.test_command is not None:
            logger.info(f"Test command: {format_command(plan.test_command.to_args())}")
        return

    builder.execute_build(plan)
    logger.success("Build completed successfully.")
