import click
import os
import sys
from .. import detect as detect_module
from ..cli_logger import logger
from ..decorators import handle_exceptions

@click.command()
@click.pass_context
@handle_exceptions
def detect(ctx):
    """Check whether the project directory contains a .NET application."""
    path = os.path.abspath(ctx.obj["path"])
    if detect_module.has_dotnet_app(path):
        logger.success(f".NET application detected in {path}")
        return
    logger.error(
        "No .NET application found. This tool requires solution (.sln, .slnx), "
        "project (.csproj, .vbproj, .fsproj) or C# (.cs) files in the root directory."
    )
    sys.exit(1)
