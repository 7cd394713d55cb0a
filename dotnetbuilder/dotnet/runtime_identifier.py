import enum
import platform

from ..errors import UnsupportedPlatformError
from ..utils.command_executor import run_shell_command


class Os(enum.Enum):
    LINUX = "linux"
    DARWIN = "darwin"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value.lower())
        except ValueError:
            return None


class Arch(enum.Enum):
    AMD64 = "amd64"
    ARM64 = "arm64"

    @classmethod
    def parse(cls, value):
        aliases = {"x86_64": "amd64", "x64": "amd64", "aarch64": "arm64"}
        value = value.lower()
        try:
            return cls(aliases.get(value, value))
        except ValueError:
            return None


class RuntimeIdentifier(enum.Enum):
    LINUX_X64 = "linux-x64"
    LINUX_ARM64 = "linux-arm64"
    LINUX_MUSL_X64 = "linux-musl-x64"
    LINUX_MUSL_ARM64 = "linux-musl-arm64"
    OSX_X64 = "osx-x64"
    OSX_ARM64 = "osx-arm64"
    UNKNOWN = "unknown"

    def __str__(self):
        return self.value


_RUNTIME_IDENTIFIERS = {
    (Os.LINUX, Arch.AMD64): RuntimeIdentifier.LINUX_X64,
    (Os.LINUX, Arch.ARM64): RuntimeIdentifier.LINUX_ARM64,
    (Os.DARWIN, Arch.AMD64): RuntimeIdentifier.OSX_X64,
    (Os.DARWIN, Arch.ARM64): RuntimeIdentifier.OSX_ARM64,
}

_MUSL_RUNTIME_IDENTIFIERS = {
    Arch.AMD64: RuntimeIdentifier.LINUX_MUSL_X64,
    Arch.ARM64: RuntimeIdentifier.LINUX_MUSL_ARM64,
}


def get_runtime_identifier(os_name, arch):
    """Map a target OS/architecture pair to its RID, failing on anything unsupported."""
    key = (
        os_name if isinstance(os_name, Os) else Os.parse(str(os_name)),
        arch if isinstance(arch, Arch) else Arch.parse(str(arch)),
    )
    if key not in _RUNTIME_IDENTIFIERS:
        raise UnsupportedPlatformError(os_name, arch)
    return _RUNTIME_IDENTIFIERS[key]


def is_musl():
    """Check `ldd --version` output for musl libc."""
    stdout, stderr, _ = run_shell_command(["ldd", "--version"])
    # musl's ldd prints its banner on stderr and exits non-zero.
    return "musl" in (stdout + stderr).lower()


def detect_host_runtime_identifier():
    """RID of the machine we are running on, or RuntimeIdentifier.UNKNOWN."""
    os_name = Os.parse(platform.system())
    arch = Arch.parse(platform.machine())
    if (os_name, arch) not in _RUNTIME_IDENTIFIERS:
        return RuntimeIdentifier.UNKNOWN
    if os_name is Os.LINUX and is_musl():
        return _MUSL_RUNTIME_IDENTIFIERS[arch]
    return _RUNTIME_IDENTIFIERS[(os_name, arch)]
