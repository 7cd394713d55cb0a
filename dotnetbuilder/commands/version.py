import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of the dotnetbuilder tool."""
    try:
        ver = importlib.metadata.version("dotnetbuilder")
        logger.info(f"dotnetbuilder version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of dotnetbuilder. Is it installed correctly?")
