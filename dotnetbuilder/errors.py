"""Exception hierarchy shared by the discovery, parsing and build modules."""


class DotnetBuilderError(Exception):
    """Base class for every failure raised by dotnetbuilder."""


# -------------------- Discovery --------------------

class DiscoveryError(DotnetBuilderError):
    pass


class AmbiguousAppSourceError(DiscoveryError):
    def __init__(self, kind, paths):
        self.kind = kind
        self.paths = list(paths)
        joined = "`, `".join(str(p) for p in self.paths)
        super().__init__(f"Multiple {kind.description} files found: `{joined}`")


class NoAppFoundError(DiscoveryError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"No .NET solution, project or C# file found in {path}")


class InvalidPathError(DiscoveryError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Path is neither a file nor a directory: {path}")


class UnrecognizedAppExtensionError(DiscoveryError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Unrecognized .NET application file extension: {path}")


class DetectionIOError(DiscoveryError):
    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__(f"Error scanning {path}: {error}")


class ConfiguredSolutionFileNotFoundError(DiscoveryError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Configured solution file not found: {path}")


# -------------------- Descriptor loading --------------------

class LoadError(DotnetBuilderError):
    pass


class MalformedDescriptorError(LoadError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ReadProjectFileError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"could not read project file ({error})")


class ProjectXmlParseError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"invalid project XML ({error})")


class MissingTargetFrameworkError(MalformedDescriptorError):
    def __init__(self, path):
        super().__init__(path, "no TargetFramework property found")


class DirectoryBuildPropsError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"could not load Directory.Build.props ({error})")


class ReadFileBasedAppError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"could not read C# file ({error})")


class ReadSolutionFileError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"could not read solution file ({error})")


class SlnxParseError(MalformedDescriptorError):
    def __init__(self, path, error):
        self.error = error
        super().__init__(path, f"invalid solution XML ({error})")


class ProjectNotFoundError(LoadError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Project file referenced by solution not found: {path}")


class NoSolutionProjectsError(LoadError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"The solution file {path} has no project references")


# -------------------- Versions --------------------

class MalformedVersionSpecError(DotnetBuilderError):
    def __init__(self, raw, message):
        self.raw = raw
        super().__init__(message)


class VersionParseError(MalformedVersionSpecError):
    def __init__(self, raw):
        super().__init__(raw, f"Invalid version: `{raw}`")


class ConstraintParseError(MalformedVersionSpecError):
    def __init__(self, raw, reason=None):
        message = f"Invalid version constraint: `{raw}`"
        if reason:
            message += f" ({reason})"
        super().__init__(raw, message)


class UnknownRollForwardPolicyError(MalformedVersionSpecError):
    def __init__(self, raw):
        super().__init__(raw, f"Unknown rollForward policy: `{raw}`")


class GlobalJsonParseError(MalformedVersionSpecError):
    def __init__(self, raw, reason):
        super().__init__(raw, f"Invalid global.json: {reason}")


class InvalidTargetFrameworkError(MalformedVersionSpecError):
    def __init__(self, raw):
        super().__init__(raw, f"Invalid target framework moniker: `{raw}`")


class UnsupportedConstructError(DotnetBuilderError):
    pass


class UnsupportedOsTargetFrameworkError(UnsupportedConstructError):
    def __init__(self, moniker):
        self.raw = moniker
        super().__init__(f"OS-specific target framework monikers are not supported: `{moniker}`")


class UnsupportedPlatformError(UnsupportedConstructError):
    def __init__(self, os_name, arch):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Unsupported platform: {os_name}/{arch}")


# -------------------- Launch --------------------

class InapplicableOperationError(DotnetBuilderError):
    pass


class InvalidProjectTypeError(InapplicableOperationError):
    def __init__(self, project):
        self.project = project
        super().__init__(
            f"Project {project.path} of type {project.project_type.value} does not produce an executable"
        )


class InvalidProcessTypeError(DotnetBuilderError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Invalid process type name: `{name}`")


# -------------------- Build --------------------

class SdkVersionNotFoundError(DotnetBuilderError):
    def __init__(self, constraint, os_name, arch):
        self.constraint = constraint
        super().__init__(
            f"No .NET SDK release in the inventory matches `{constraint}` for {os_name.value}/{arch.value}"
        )


class CommandFailedError(DotnetBuilderError):
    def __init__(self, command, returncode):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command `{command}` failed with exit code {returncode}")


# -------------------- Configuration --------------------

class ConfigurationError(DotnetBuilderError):
    pass


class InvalidVerbosityLevelError(ConfigurationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid MSBuild verbosity level: `{value}`")


class InvalidExecutionEnvironmentError(ConfigurationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unsupported execution environment: `{value}`")


class ProjectTomlParseError(ConfigurationError):
    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__(f"Error decoding TOML file at {path}: {error}")


class InventoryError(ConfigurationError):
    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Invalid SDK inventory {path}: {reason}")
