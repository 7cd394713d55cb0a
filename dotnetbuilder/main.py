import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Path to the application directory.")
@click.pass_context
def cli(ctx, path):
    """dotnetbuilder CLI tool."""
    ctx.obj = {"path": path}

cli.add_command(detect)
cli.add_command(inspect)
cli.add_command(build)
cli.add_command(config)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    cli()
