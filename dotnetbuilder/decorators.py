import functools
import click
import sys
from .cli_logger import logger
from .errors import DotnetBuilderError

def handle_exceptions(func):
    """Log failures of a CLI command and exit non-zero instead of dumping a traceback."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.Abort:
            logger.warning("\nCommand aborted by user.")
            sys.exit(1)
        except DotnetBuilderError as e:
            logger.error(f"Error: {e}")
            sys.exit(1)
        except click.ClickException:
            raise
        except Exception as e:
            logger.error(f"\nAn unexpected error occurred: {e}")
            logger.exception(*sys.exc_info())
            sys.exit(1)
    return wrapper
