"""Semantic versions and version range constraints for .NET SDK releases.

.NET SDK versions follow semver (``8.0.100``, ``9.0.100-rc.1.24452.12``) and
not PEP 440, so only the numeric release part is handed to
``packaging.version``; pre-release identifiers are kept verbatim and compared
with semver precedence rules.

Constraint expressions use the syntax of the Rust/Cargo ``semver`` crate,
which is what the SDK inventory is matched against::

    *                       any release version
    =6.0.100                exactly this version
    >=6.0.100, <6.0.200     comma separated comparators are combined with AND
    ^6.0                    compatible: >=6.0.0, <7.0.0
    ~6.0                    same minor: >=6.0.0, <6.1.0
"""
import functools
import re

from packaging.version import InvalidVersion, Version

from ..errors import ConstraintParseError, VersionParseError

_VERSION_RE = re.compile(
    r"^(?P<release>\d+(?:\.\d+){0,2})"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
_COMPARATOR_RE = re.compile(r"^(?P<op>\^|~|=|>=|<=|>|<)?\s*(?P<version>\S+)$")


def _split_version(text):
    """Return (release tuple, pre-release string or None) or None if malformed."""
    match = _VERSION_RE.match(text.strip())
    if not match:
        return None
    try:
        release = Version(match.group("release")).release
    except InvalidVersion:
        return None
    return release, match.group("pre")


def _prerelease_key(pre):
    # Numeric identifiers sort before alphanumeric ones, and numerically among themselves.
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in pre.split(".")
    )


@functools.total_ordering
class SemVersion:
    """A full ``major.minor.patch[-pre]`` version."""

    def __init__(self, major, minor, patch, pre=None):
        self.major = major
        self.minor = minor
        self.patch = patch
        self.pre = pre or None

    @classmethod
    def parse(cls, text):
        parts = _split_version(text) if isinstance(text, str) else None
        if parts is None or len(parts[0]) != 3:
            raise VersionParseError(text)
        (major, minor, patch), pre = parts
        return cls(major, minor, patch, pre)

    @property
    def release(self):
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self):
        return self.pre is not None

    def _key(self):
        # A release sorts after every pre-release of the same version.
        if self.pre is None:
            return (self.release, 1, ())
        return (self.release, 0, _prerelease_key(self.pre))

    def __eq__(self, other):
        if not isinstance(other, SemVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, SemVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        text = f"{self.major}.{self.minor}.{self.patch}"
        return f"{text}-{self.pre}" if self.pre else text

    def __repr__(self):
        return f"SemVersion('{self}')"


class Comparator:
    """One operator applied to a possibly partial version (``^6.0``, ``<6.0.200``)."""

    def __init__(self, op, release, pre=None):
        self.op = op
        self.release = release
        self.pre = pre

    @classmethod
    def parse(cls, text, expression):
        match = _COMPARATOR_RE.match(text.strip())
        if not match:
            raise ConstraintParseError(expression, f"unexpected comparator `{text.strip()}`")
        parts = _split_version(match.group("version"))
        if parts is None:
            raise ConstraintParseError(expression, f"invalid version `{match.group('version')}`")
        release, pre = parts
        if pre and len(release) != 3:
            raise ConstraintParseError(expression, "pre-release requires a full version")
        return cls(match.group("op") or "^", release, pre)

    def _floor(self):
        major, minor, patch = (tuple(self.release) + (0, 0))[:3]
        return SemVersion(major, minor, patch, self.pre)

    def _bump(self):
        # First version past every version the partial release covers.
        if len(self.release) == 1:
            return SemVersion(self.release[0] + 1, 0, 0)
        if len(self.release) == 2:
            return SemVersion(self.release[0], self.release[1] + 1, 0)
        return SemVersion(self.release[0], self.release[1], self.release[2] + 1)

    def _caret_ceiling(self):
        major = self.release[0]
        minor = self.release[1] if len(self.release) > 1 else None
        patch = self.release[2] if len(self.release) > 2 else None
        if major > 0 or minor is None:
            return SemVersion(major + 1, 0, 0)
        if minor > 0 or patch is None:
            return SemVersion(0, minor + 1, 0)
        return SemVersion(0, 0, patch + 1)

    def _tilde_ceiling(self):
        if len(self.release) == 1:
            return SemVersion(self.release[0] + 1, 0, 0)
        return SemVersion(self.release[0], self.release[1] + 1, 0)

    def bounds(self):
        """Expand into primitive (operator, full version) pairs."""
        full = len(self.release) == 3
        floor = self._floor()
        if self.op == "=":
            return [("=", floor)] if full else [(">=", floor), ("<", self._bump())]
        if self.op == ">=":
            return [(">=", floor)]
        if self.op == ">":
            return [(">", floor)] if full else [(">=", self._bump())]
        if self.op == "<":
            return [("<", floor)]
        if self.op == "<=":
            return [("<=", floor)] if full else [("<", self._bump())]
        if self.op == "~":
            return [(">=", floor), ("<", self._tilde_ceiling())]
        return [(">=", floor), ("<", self._caret_ceiling())]

    def __str__(self):
        version = ".".join(str(part) for part in self.release)
        if self.pre:
            version += f"-{self.pre}"
        return f"{self.op}{version}"


_CHECKS = {
    "=": lambda v, b: v == b,
    ">=": lambda v, b: v >= b,
    ">": lambda v, b: v > b,
    "<": lambda v, b: v < b,
    "<=": lambda v, b: v <= b,
}


class VersionConstraint:
    """A conjunction of comparators; ``*`` is the empty conjunction."""

    def __init__(self, comparators):
        self.comparators = list(comparators)

    @classmethod
    def parse(cls, expression):
        if not isinstance(expression, str) or not expression.strip():
            raise ConstraintParseError(expression, "empty expression")
        if expression.strip() == "*":
            return cls([])
        return cls(Comparator.parse(part, expression) for part in expression.split(","))

    @classmethod
    def any(cls):
        return cls([])

    def matches(self, version):
        if isinstance(version, str):
            version = SemVersion.parse(version)
        for comparator in self.comparators:
            for op, bound in comparator.bounds():
                if not _CHECKS[op](version, bound):
                    return False
        if version.is_prerelease:
            # Pre-releases are only eligible when explicitly opted into for the same release.
            return any(
                c.pre and tuple(c.release) == version.release for c in self.comparators
            )
        return True

    def __str__(self):
        if not self.comparators:
            return "*"
        return ", ".join(str(c) for c in self.comparators)

    def __repr__(self):
        return f"VersionConstraint('{self}')"

    def __eq__(self, other):
        if not isinstance(other, VersionConstraint):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))
