"""Select an SDK release from a TOML inventory of downloadable artifacts.

An inventory lists one table per artifact::

    [[artifacts]]
    version = "8.0.404"
    os = "linux"
    arch = "amd64"
    url = "https://builds.dotnet.microsoft.com/.../dotnet-sdk-8.0.404-linux-x64.tar.gz"
    checksum = "sha512:..."

Only selection is done here; downloading and verifying the artifact is left
to whoever consumes the result.
"""
from dataclasses import dataclass
from pathlib import Path

import toml

from ..errors import InventoryError, VersionParseError
from .runtime_identifier import Arch, Os
from .version import SemVersion


@dataclass(frozen=True)
class Artifact:
    version: SemVersion
    os: Os
    arch: Arch
    url: str
    checksum: str


class Inventory:
    def __init__(self, artifacts):
        self.artifacts = list(artifacts)

    @classmethod
    def loads(cls, content, source="<inventory>"):
        try:
            document = toml.loads(content)
        except toml.TomlDecodeError as e:
            raise InventoryError(source, e) from e

        artifacts = []
        for entry in document.get("artifacts", []):
            try:
                os_name = Os.parse(entry["os"])
                arch = Arch.parse(entry["arch"])
                if os_name is None or arch is None:
                    raise InventoryError(source, f"unsupported platform {entry['os']}/{entry['arch']}")
                artifacts.append(Artifact(
                    version=SemVersion.parse(entry["version"]),
                    os=os_name,
                    arch=arch,
                    url=entry["url"],
                    checksum=entry.get("checksum", ""),
                ))
            except KeyError as e:
                raise InventoryError(source, f"artifact is missing `{e.args[0]}`") from e
            except VersionParseError as e:
                raise InventoryError(source, str(e)) from e
        return cls(artifacts)

    @classmethod
    def load(cls, path):
        path = Path(path)
        try:
            content = path.read_text()
        except OSError as e:
            raise InventoryError(path, e) from e
        return cls.loads(content, path)

    def resolve(self, os_name, arch, constraint):
        """Highest version for the platform that satisfies `constraint`, or None."""
        candidates = [
            artifact for artifact in self.artifacts
            if artifact.os == os_name and artifact.arch == arch and constraint.matches(artifact.version)
        ]
        return max(candidates, key=lambda artifact: artifact.version, default=None)
