# SPDX-License-Identifier: MIT
"""PEP 440 version parsing, ordering, specifier matching and semver conversion.

Example:
    >>> from pep440_semver import (
    ...     compare_versions, parse_version, specifier_set_matches, version_to_semver
    ... )
    >>>
    >>> version = parse_version("v1!2.0-RC_1.post2+Ubuntu-3")
    >>> str(version)
    '1!2.0rc1.post2+ubuntu.3'
    >>>
    >>> compare_versions("1.0", "1.0.0")
    <Ordering.EQUAL: 0>
    >>>
    >>> specifier_set_matches("~=2.2.1", "2.2.9")
    True
    >>>
    >>> str(version_to_semver(parse_version("1.2b3")))
    '1.2.0-beta.3'
"""

__version__ = "0.1.0"

from .errors import (
    VersionError,
    MalformedVersion,
    MalformedSpecifier,
    MalformedSemver,
    UnrepresentableVersion,
    UnrepresentableSemver,
)
from .version import (
    Version,
    parse_version,
    is_valid_version,
    version_to_string,
    VERSION_PATTERN,
)
from .compare import (
    Ordering,
    compare_versions,
    version_key,
)
from .specifiers import (
    Specifier,
    SpecifierSet,
    parse_specifier,
    parse_specifier_set,
    specifier_set_matches,
)
from .semver import (
    SemverTriple,
    parse_semver,
    is_valid_semver,
    version_to_semver,
    semver_to_version,
    SEMVER_PATTERN,
)

__all__ = [
    # Errors
    "VersionError",
    "MalformedVersion",
    "MalformedSpecifier",
    "MalformedSemver",
    "UnrepresentableVersion",
    "UnrepresentableSemver",
    # Version parsing
    "Version",
    "parse_version",
    "is_valid_version",
    "version_to_string",
    "VERSION_PATTERN",
    # Version comparison
    "Ordering",
    "compare_versions",
    "version_key",
    # Specifiers
    "Specifier",
    "SpecifierSet",
    "parse_specifier",
    "parse_specifier_set",
    "specifier_set_matches",
    # Semver conversion
    "SemverTriple",
    "parse_semver",
    "is_valid_semver",
    "version_to_semver",
    "semver_to_version",
    "SEMVER_PATTERN",
]
