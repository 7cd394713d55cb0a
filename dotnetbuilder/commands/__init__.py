from .build import build
from .config import config
from .detect import detect
from .inspect import inspect
from .log import log
from .version import version

__all__ = ["build", "config", "detect", "inspect", "log", "version"]
