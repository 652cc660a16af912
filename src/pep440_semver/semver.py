# SPDX-License-Identifier: MIT
"""Conversion between PEP 440 versions and semantic versions.

Supports MAJOR.MINOR.PATCH format with optional pre-release and build metadata:
- Pre-release: -alpha.1, -beta.2, -rc.1, -dev.3, -post.1
- Build metadata: +build, +build.123, +20240101

PEP 440 qualifiers are folded into the semver pre-release label as
``<phase>.<number>``, ``post.<number>`` and ``dev.<number>`` (in that order),
and the local label becomes build metadata. Post-releases have no semver
counterpart, so ``1.0.post1`` becomes ``1.0.0-post.1``, which semver orders
*before* ``1.0.0``.

Round-trip guarantee: ``semver_to_version(version_to_semver(v)) == v`` for
every version with epoch 0, at most three release segments and at most one
of pre/post/dev.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from .errors import MalformedSemver, MalformedVersion, UnrepresentableSemver, UnrepresentableVersion
from .version import Version, parse_local

# Semantic versioning regex pattern (SemVer 2.0.0 compliant)
# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9][0-9]*)"
    r"\.(?P<minor>0|[1-9][0-9]*)"
    r"\.(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<prerelease>(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

# PEP 440 phase -> semver pre-release identifier
_SEMVER_PHASES = {
    "a": "alpha",
    "b": "beta",
    "rc": "rc",
}

_PHASE_LABEL = re.compile(r"^(alpha|beta|rc)\.([0-9]+)$")
_DEV_LABEL = re.compile(r"^dev\.([0-9]+)$")
_POST_LABEL = re.compile(r"^post\.([0-9]+)$")


@dataclass(frozen=True, slots=True)
class SemverTriple:
    """Represents a parsed semantic version.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        prerelease: Optional pre-release identifier (e.g., "alpha.1", "beta.2", "dev.0")
        build: Optional build metadata (e.g., "build.123", "20240101")
    """

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release version."""
        return self.prerelease is not None

    @property
    def base_version(self) -> str:
        """Return the base version without pre-release or build metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_semver(version_string: str) -> SemverTriple:
    """Parse a semantic version string into a SemverTriple.

    Args:
        version_string: A string following semantic versioning format
            (MAJOR.MINOR.PATCH[-prerelease][+build])

    Returns:
        A SemverTriple with parsed components

    Raises:
        MalformedSemver: If the string does not follow semantic versioning

    Examples:
        >>> parse_semver("1.2.3")
        SemverTriple(major=1, minor=2, patch=3, prerelease=None, build=None)

        >>> parse_semver("2.0.0-rc.1+build.456")
        SemverTriple(major=2, minor=0, patch=0, prerelease='rc.1', build='build.456')
    """
    if not isinstance(version_string, str):
        raise MalformedSemver(
            version_string, f"Version must be a string, got {type(version_string).__name__}"
        )

    version_string = version_string.strip()
    if not version_string:
        raise MalformedSemver(version_string, "Version string cannot be empty")

    match = SEMVER_PATTERN.match(version_string)
    if not match:
        raise MalformedSemver(version_string)

    try:
        major, minor, patch = (int(match.group(name)) for name in ("major", "minor", "patch"))
    except ValueError as e:
        raise MalformedSemver(version_string, "Numeric component too long") from e

    return SemverTriple(
        major=major,
        minor=minor,
        patch=patch,
        prerelease=match.group("prerelease"),
        build=match.group("buildmetadata"),
    )


def is_valid_semver(version_string: Any) -> bool:
    """Check if a string is a valid semantic version.

    Examples:
        >>> is_valid_semver("1.0.0")
        True
        >>> is_valid_semver("1.0")
        False
    """
    if not isinstance(version_string, str):
        return False
    return SEMVER_PATTERN.match(version_string.strip()) is not None


def version_to_semver(version: Version, lossy: bool = False) -> SemverTriple:
    """Convert a PEP 440 version to a semantic version.

    Args:
        version: The version to convert
        lossy: Drop a non-zero epoch and truncate release segments beyond the
            third instead of failing

    Returns:
        A SemverTriple

    Raises:
        UnrepresentableVersion: In strict mode, if the version has a non-zero
            epoch or non-zero release segments beyond the third

    Examples:
        >>> str(version_to_semver(parse_version("1.2")))
        '1.2.0'
        >>> str(version_to_semver(parse_version("1.2.4rc1+ubuntu.3")))
        '1.2.4-rc.1+ubuntu.3'
        >>> str(version_to_semver(parse_version("2!1.2.3.4"), lossy=True))
        '1.2.3'
    """
    if not lossy:
        if version.epoch != 0:
            raise UnrepresentableVersion(
                version, f"Version {version} has epoch {version.epoch}, which semver cannot express"
            )
        if any(version.release[3:]):
            raise UnrepresentableVersion(
                version, f"Version {version} has more than three release segments"
            )

    major, minor, patch = (version.release + (0, 0, 0))[:3]

    labels = []
    if version.pre is not None:
        phase, number = version.pre
        labels.append(f"{_SEMVER_PHASES[phase]}.{number}")
    if version.post is not None:
        labels.append(f"post.{version.post}")
    if version.dev is not None:
        labels.append(f"dev.{version.dev}")

    build = None
    if version.local is not None:
        build = ".".join(str(segment) for segment in version.local)

    return SemverTriple(
        major=major,
        minor=minor,
        patch=patch,
        prerelease=".".join(labels) if labels else None,
        build=build,
    )


def _label_number(triple: SemverTriple, digits: str) -> int:
    try:
        return int(digits)
    except ValueError as e:
        raise UnrepresentableSemver(
            triple, f"Pre-release number in {triple.prerelease!r} is too long"
        ) from e


def semver_to_version(semver: Union[str, SemverTriple]) -> Version:
    """Convert a semantic version to a PEP 440 version.

    The pre-release label must be exactly one of ``alpha.N``, ``beta.N``,
    ``rc.N``, ``dev.N`` or ``post.N``. Build metadata becomes the local label.

    Args:
        semver: A SemverTriple or a semantic version string

    Returns:
        A Version with a three-segment release

    Raises:
        MalformedSemver: If a string argument is not a semantic version
        UnrepresentableSemver: If the pre-release label or build metadata has
            no PEP 440 equivalent

    Examples:
        >>> str(semver_to_version("1.0.0-beta.2"))
        '1.0.0b2'
        >>> str(semver_to_version("1.0.0-post.1+build.7"))
        '1.0.0.post1+build.7'
    """
    triple = parse_semver(semver) if isinstance(semver, str) else semver

    pre = post = dev = None
    label = triple.prerelease
    if label is not None:
        if match := _PHASE_LABEL.fullmatch(label):
            phase = next(key for key, name in _SEMVER_PHASES.items() if name == match.group(1))
            pre = (phase, _label_number(triple, match.group(2)))
        elif match := _DEV_LABEL.fullmatch(label):
            dev = _label_number(triple, match.group(1))
        elif match := _POST_LABEL.fullmatch(label):
            post = _label_number(triple, match.group(1))
        else:
            raise UnrepresentableSemver(
                triple, f"Pre-release label {label!r} has no PEP 440 equivalent"
            )

    local = None
    if triple.build is not None:
        try:
            local = parse_local(triple.build)
        except MalformedVersion as e:
            raise UnrepresentableSemver(
                triple, f"Build metadata {triple.build!r} is not a valid local version label"
            ) from e

    return Version(
        release=(triple.major, triple.minor, triple.patch),
        pre=pre,
        post=post,
        dev=dev,
        local=local,
    )
