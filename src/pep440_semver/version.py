# SPDX-License-Identifier: MIT
"""PEP 440 version parsing and normalization.

Accepts the full PEP 440 grammar including the permitted spelling variants:
- Epoch: 1!2.0
- Pre-release: 1.0a1, 1.0-alpha.1, 1.0c1, 1.0-preview2, 1.0rc
- Post-release: 1.0.post1, 1.0-1, 1.0rev, 1.0_r2
- Dev-release: 1.0.dev3, 1.0dev
- Local version label: 1.0+ubuntu-1, 1.0+abc.5
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from .errors import MalformedVersion

LocalSegment = Union[int, str]

# Not anchored; compile with re.VERBOSE, re.IGNORECASE and re.ASCII.
VERSION_PATTERN = r"""
    v?
    (?:
        (?:(?P<epoch>[0-9]+)!)?                           # epoch
        (?P<release>[0-9]+(?:\.[0-9]+)*)                  # release segment
        (?P<pre>                                          # pre-release
            [-_\.]?
            (?P<pre_l>alpha|a|beta|b|preview|pre|c|rc)
            [-_\.]?
            (?P<pre_n>[0-9]+)?
        )?
        (?P<post>                                         # post release
            (?:-(?P<post_n1>[0-9]+))
            |
            (?:
                [-_\.]?
                (?P<post_l>post|rev|r)
                [-_\.]?
                (?P<post_n2>[0-9]+)?
            )
        )?
        (?P<dev>                                          # dev release
            [-_\.]?
            (?P<dev_l>dev)
            [-_\.]?
            (?P<dev_n>[0-9]+)?
        )?
    )
    (?:\+(?P<local>[a-z0-9]+(?:[-_\.][a-z0-9]+)*))?       # local version
"""

_FLAGS = re.VERBOSE | re.IGNORECASE | re.ASCII

_VERSION_RE = re.compile(r"^\s*" + VERSION_PATTERN + r"\s*$", _FLAGS)
_VERSION_PREFIX_RE = re.compile(r"\s*" + VERSION_PATTERN, _FLAGS)
_LOCAL_RE = re.compile(r"[a-z0-9]+(?:[-_\.][a-z0-9]+)*", re.IGNORECASE | re.ASCII)
_LOCAL_SEPARATORS = re.compile(r"[-_\.]")

# Every accepted spelling of a pre-release phase, mapped to its canonical form
PHASE_ALIASES = {
    "a": "a",
    "alpha": "a",
    "b": "b",
    "beta": "b",
    "c": "rc",
    "rc": "rc",
    "pre": "rc",
    "preview": "rc",
}

# Canonical phases in release-cycle order
PHASES = ("a", "b", "rc")


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Represents a parsed PEP 440 version.

    Instances compare and hash by their canonical ordering key, so
    ``1.0`` and ``1.0.0`` are equal while still rendering as written.

    Attributes:
        epoch: Version epoch (``N!`` prefix), 0 when absent
        release: Release segments, e.g. (1, 2, 3)
        pre: Optional (phase, number) with phase one of "a", "b", "rc"
        post: Optional post-release number
        dev: Optional dev-release number
        local: Optional local label segments (ints or lowercase strings)
    """

    release: tuple[int, ...]
    epoch: int = 0
    pre: Optional[tuple[str, int]] = None
    post: Optional[int] = None
    dev: Optional[int] = None
    local: Optional[tuple[LocalSegment, ...]] = None

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        return version_to_string(self)

    def _key(self) -> tuple:
        from .compare import version_key

        return version_key(self)

    def __hash__(self) -> int:
        return hash(self._key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() >= other._key()

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release or dev-release version."""
        return self.pre is not None or self.dev is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post is not None

    @property
    def is_devrelease(self) -> bool:
        return self.dev is not None

    @property
    def public(self) -> str:
        """Return the version without its local label."""
        return version_to_string(replace(self, local=None))

    @property
    def base_version(self) -> str:
        """Return the epoch and release segments only."""
        return version_to_string(Version(release=self.release, epoch=self.epoch))

    @property
    def major(self) -> int:
        return self.release[0]

    @property
    def minor(self) -> int:
        return self.release[1] if len(self.release) > 1 else 0

    @property
    def micro(self) -> int:
        return self.release[2] if len(self.release) > 2 else 0


def _parse_local(local: str) -> tuple[LocalSegment, ...]:
    """Split a local label into integer and lowercase string segments."""
    return tuple(
        int(part) if part.isdigit() else part.lower()
        for part in _LOCAL_SEPARATORS.split(local)
    )


def parse_local(local: str) -> tuple[LocalSegment, ...]:
    """Parse a local version label (the text after ``+``).

    Raises:
        MalformedVersion: If the label contains characters outside [a-z0-9._-]
            or empty segments
    """
    if not isinstance(local, str) or not _LOCAL_RE.fullmatch(local):
        raise MalformedVersion(local, message=f"Invalid local version label: {local!r}")
    try:
        return _parse_local(local)
    except ValueError as e:
        raise MalformedVersion(local, message=f"Local version segment too long: {local!r}") from e


def parse_version(version_string: str) -> Version:
    """Parse a PEP 440 version string into a Version object.

    Args:
        version_string: A version such as ``1.2.3``, ``v2!1.0rc1.post2.dev0``
            or ``1.0+ubuntu.1``. Surrounding whitespace is ignored.

    Returns:
        A Version object with every field populated

    Raises:
        MalformedVersion: If the string does not follow PEP 440

    Examples:
        >>> parse_version("1.2.3")
        Version(release=(1, 2, 3), epoch=0, pre=None, post=None, dev=None, local=None)

        >>> str(parse_version("1.0-Alpha_2"))
        '1.0a2'

        >>> parse_version("1.0-1").post
        1
    """
    if not isinstance(version_string, str):
        raise MalformedVersion(
            version_string,
            message=f"Version must be a string, got {type(version_string).__name__}",
        )

    match = _VERSION_RE.match(version_string)
    if not match:
        prefix = _VERSION_PREFIX_RE.match(version_string)
        offset = prefix.end() if prefix else len(version_string) - len(version_string.lstrip())
        raise MalformedVersion(version_string, offset)

    # int() refuses digit strings beyond sys.get_int_max_str_digits()
    try:
        pre = None
        if match.group("pre_l"):
            pre = (PHASE_ALIASES[match.group("pre_l").lower()], int(match.group("pre_n") or 0))

        post = None
        if match.group("post_n1"):
            post = int(match.group("post_n1"))
        elif match.group("post_l"):
            post = int(match.group("post_n2") or 0)

        dev = None
        if match.group("dev_l"):
            dev = int(match.group("dev_n") or 0)

        local = match.group("local")

        return Version(
            release=tuple(int(part) for part in match.group("release").split(".")),
            epoch=int(match.group("epoch") or 0),
            pre=pre,
            post=post,
            dev=dev,
            local=_parse_local(local) if local else None,
        )
    except ValueError as e:
        raise MalformedVersion(
            version_string, message=f"Numeric segment too long in version: {version_string!r}"
        ) from e


def is_valid_version(version_string: Any) -> bool:
    """Check if a string is a valid PEP 440 version.

    Examples:
        >>> is_valid_version("1.0.post1")
        True
        >>> is_valid_version("1.2.*")
        False
    """
    if not isinstance(version_string, str):
        return False
    return _VERSION_RE.match(version_string) is not None


def version_to_string(version: Version) -> str:
    """Render a version in canonical PEP 440 form.

    The epoch is shown only when non-zero, phases use their short spelling
    (``a``, ``b``, ``rc``) and release segments are kept as given.
    """
    parts = []
    if version.epoch != 0:
        parts.append(f"{version.epoch}!")
    parts.append(".".join(str(segment) for segment in version.release))
    if version.pre is not None:
        phase, number = version.pre
        parts.append(f"{phase}{number}")
    if version.post is not None:
        parts.append(f".post{version.post}")
    if version.dev is not None:
        parts.append(f".dev{version.dev}")
    if version.local is not None:
        parts.append("+" + ".".join(str(segment) for segment in version.local))
    return "".join(parts)
