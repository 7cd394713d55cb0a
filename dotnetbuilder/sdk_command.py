import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import InvalidVerbosityLevelError
from .launch_process import Process


class VerbosityLevel(enum.Enum):
    QUIET = "quiet"
    MINIMAL = "minimal"
    NORMAL = "normal"
    DETAILED = "detailed"
    DIAGNOSTIC = "diagnostic"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value):
        aliases = {
            "q": cls.QUIET, "quiet": cls.QUIET,
            "m": cls.MINIMAL, "minimal": cls.MINIMAL,
            "n": cls.NORMAL, "normal": cls.NORMAL,
            "d": cls.DETAILED, "detailed": cls.DETAILED,
            "diag": cls.DIAGNOSTIC, "diagnostic": cls.DIAGNOSTIC,
        }
        try:
            return aliases[value.lower()]
        except (KeyError, AttributeError):
            raise InvalidVerbosityLevelError(value) from None


@dataclass
class DotnetPublishCommand:
    path: Path
    runtime_identifier: object
    configuration: Optional[str] = None
    verbosity_level: Optional[VerbosityLevel] = None

    def to_args(self):
        args = ["dotnet", "publish", str(self.path), "--runtime", str(self.runtime_identifier)]
        if self.configuration:
            args += ["--configuration", self.configuration]
        if self.verbosity_level:
            args += ["--verbosity", str(self.verbosity_level)]
        return args


@dataclass
class DotnetTestCommand:
    path: Path
    configuration: Optional[str] = None
    verbosity_level: Optional[VerbosityLevel] = None

    def to_args(self):
        args = ["dotnet", "test", Path(self.path).name]
        if self.configuration:
            args += ["--configuration", self.configuration]
        if self.verbosity_level:
            args += ["--verbosity", str(self.verbosity_level)]
        return args

    def to_process(self):
        return Process(type="test", command=self.to_args())
