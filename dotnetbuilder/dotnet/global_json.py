import json
from dataclasses import dataclass
from typing import Optional

from ..errors import GlobalJsonParseError, UnknownRollForwardPolicyError
from .version import SemVersion, VersionConstraint

DEFAULT_ROLL_FORWARD = "patch"
FEATURE_BAND_SIZE = 100


@dataclass(frozen=True)
class SdkConfig:
    """The ``sdk`` section of a global.json file."""
    version: str
    roll_forward: Optional[str] = None

    def version_constraint(self):
        return VersionConstraint.parse(_constraint_expression(self.version, self.roll_forward))


def _constraint_expression(raw_version, roll_forward):
    version = SemVersion.parse(raw_version)
    policy = roll_forward or DEFAULT_ROLL_FORWARD

    if policy in ("patch", "latestPatch"):
        band_start = version.patch // FEATURE_BAND_SIZE * FEATURE_BAND_SIZE
        return f">={version}, <{version.major}.{version.minor}.{band_start + FEATURE_BAND_SIZE}"
    if policy in ("feature", "latestFeature"):
        return f"~{version.major}.{version.minor}"
    if policy in ("minor", "latestMinor"):
        return f"^{version.major}.{version.minor}"
    if policy in ("major", "latestMajor"):
        return "*"
    if policy == "disable":
        return f"={version}"
    raise UnknownRollForwardPolicyError(policy)


def parse_global_json(content):
    """Return the SdkConfig declared in global.json content, or None without an sdk section."""
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise GlobalJsonParseError(content, str(e)) from e

    if not isinstance(document, dict):
        raise GlobalJsonParseError(content, "expected a JSON object")
    sdk = document.get("sdk")
    if sdk is None:
        return None
    if not isinstance(sdk, dict) or not isinstance(sdk.get("version"), str):
        raise GlobalJsonParseError(content, "`sdk.version` must be a string")

    roll_forward = sdk.get("rollForward")
    if roll_forward is not None and not isinstance(roll_forward, str):
        raise GlobalJsonParseError(content, "`sdk.rollForward` must be a string")
    return SdkConfig(version=sdk["version"], roll_forward=roll_forward)


def derive_constraint_from_pin_file(content):
    sdk_config = parse_global_json(content)
    if sdk_config is None:
        raise GlobalJsonParseError(content, "no `sdk` section")
    return sdk_config.version_constraint()
