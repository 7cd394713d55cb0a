import click
import json
from .. import config as config_module
from ..decorators import handle_exceptions

@click.command()
@click.pass_context
@handle_exceptions
def config(ctx):
    """Show the effective build configuration (project.toml plus environment overrides)."""
    conf = config_module.load_config(path=ctx.obj["path"])
    click.echo(json.dumps({
        "build_configuration": conf.effective_build_configuration,
        "execution_environment": conf.execution_environment.value,
        "msbuild_verbosity_level": str(conf.msbuild_verbosity_level) if conf.msbuild_verbosity_level else None,
        "solution_file": str(conf.solution_file) if conf.solution_file else None,
    }, indent=4))
