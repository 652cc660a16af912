# SPDX-License-Identifier: MIT
"""Exceptions raised by version parsing, matching and conversion."""

from __future__ import annotations

from typing import Any, Optional


class VersionError(ValueError):
    """Base class for every error raised by this package."""

    pass


class MalformedVersion(VersionError):
    """Raised when text does not follow the PEP 440 version grammar.

    Attributes:
        text: The offending input
        offset: Index where the grammar stopped matching, if known
        message: Human-readable description
    """

    def __init__(self, text: Any, offset: Optional[int] = None, message: str = ""):
        self.text = text
        self.offset = offset
        if not message:
            message = f"Invalid version: {text!r}"
            if offset is not None:
                message += f" (at position {offset})"
        self.message = message
        super().__init__(self.message)


class MalformedSpecifier(VersionError):
    """Raised when a specifier clause has a bad operator or operand."""

    def __init__(self, text: Any, message: str = ""):
        self.text = text
        self.message = message or f"Invalid specifier: {text!r}"
        super().__init__(self.message)


class MalformedSemver(VersionError):
    """Raised when text does not follow the SemVer 2.0.0 grammar."""

    def __init__(self, text: Any, message: str = ""):
        self.text = text
        self.message = message or f"Invalid semantic version: {text!r}"
        super().__init__(self.message)


class UnrepresentableVersion(VersionError):
    """Raised when a PEP 440 version has no semantic version equivalent."""

    def __init__(self, version: Any, message: str = ""):
        self.version = version
        self.message = message or f"Version {version} cannot be represented as semver"
        super().__init__(self.message)


class UnrepresentableSemver(VersionError):
    """Raised when a semantic version has no PEP 440 equivalent."""

    def __init__(self, semver: Any, message: str = ""):
        self.semver = semver
        self.message = message or f"Semantic version {semver} cannot be represented in PEP 440"
        super().__init__(self.message)
