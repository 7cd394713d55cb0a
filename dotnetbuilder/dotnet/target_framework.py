import re

from ..errors import (
    InvalidTargetFrameworkError,
    NoSolutionProjectsError,
    UnsupportedOsTargetFrameworkError,
)
from .version import VersionConstraint

TFM_PREFIX = "net"
_VERSION_PART_RE = re.compile(r"^\d+(?:\.\d+)*$")


class TargetFrameworkMoniker:
    """A .NET 5+ target framework moniker such as ``net8.0``."""

    def __init__(self, moniker, version_part):
        self.moniker = moniker
        self.version_part = version_part

    @classmethod
    def parse(cls, moniker):
        if not isinstance(moniker, str) or not moniker.startswith(TFM_PREFIX):
            raise InvalidTargetFrameworkError(moniker)

        rest = moniker[len(TFM_PREFIX):]
        if not rest:
            raise InvalidTargetFrameworkError(moniker)
        # net6.0-ios15.0, net8.0-windows, ...
        if "-" in rest:
            raise UnsupportedOsTargetFrameworkError(moniker)
        if not _VERSION_PART_RE.match(rest):
            raise InvalidTargetFrameworkError(moniker)

        return cls(moniker, rest)

    @property
    def version_key(self):
        return tuple(int(part) for part in self.version_part.split("."))

    def version_constraint(self):
        return VersionConstraint.parse(f"^{self.version_part}")

    def __str__(self):
        return self.moniker


def derive_constraint_from_moniker(moniker):
    """``net6.0`` -> ``^6.0`` (>=6.0.0, <7.0.0)."""
    return TargetFrameworkMoniker.parse(moniker).version_constraint()


def solution_version_constraint(solution):
    """Constraint for the newest target framework used by any project in `solution`."""
    monikers = [TargetFrameworkMoniker.parse(p.target_framework) for p in solution.projects]
    if not monikers:
        raise NoSolutionProjectsError(solution.path)
    return max(monikers, key=lambda tfm: tfm.version_key).version_constraint()
