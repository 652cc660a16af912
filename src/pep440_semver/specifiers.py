# SPDX-License-Identifier: MIT
"""Version specifiers and specifier sets.

A specifier is one clause such as ``>=1.2`` or ``==1.4.*``; a specifier set
is a comma-separated conjunction of clauses such as ``>=1.2,!=1.3.*,<2``.

Supported operators: ``==``, ``!=``, ``<=``, ``>=``, ``<``, ``>``,
``~=`` (compatible release) and ``===`` (arbitrary equality).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterator, Union

from .compare import version_key
from .errors import MalformedSpecifier, MalformedVersion
from .version import Version, parse_version

OPERATORS = ("===", "~=", "==", "!=", "<=", ">=", "<", ">")

_OPERATOR_RE = re.compile(r"\s*(===|~=|==|!=|<=|>=|<|>)")

# Operators that accept a trailing ".*" on their operand
_WILDCARD_OPERATORS = ("==", "!=")


def _public_key(version: Version) -> tuple:
    return version_key(version, include_local=False)


def _match_prefix(prefix: Version, version: Version) -> bool:
    """Check that version starts with the epoch and release of prefix.

    The candidate release is zero-padded, so ``1`` matches ``1.0.*``.
    """
    if version.epoch != prefix.epoch:
        return False
    length = len(prefix.release)
    release = version.release[:length]
    release += (0,) * (length - len(release))
    return release == prefix.release


def _match_equal(spec: Specifier, version: Version) -> bool:
    if spec.wildcard:
        return _match_prefix(spec.version, version)
    if spec.version.local is None:
        return _public_key(version) == _public_key(spec.version)
    return version_key(version) == version_key(spec.version)


def _match_not_equal(spec: Specifier, version: Version) -> bool:
    return not _match_equal(spec, version)


def _match_less_equal(spec: Specifier, version: Version) -> bool:
    return _public_key(version) <= _public_key(spec.version)


def _match_greater_equal(spec: Specifier, version: Version) -> bool:
    return _public_key(version) >= _public_key(spec.version)


def _match_less(spec: Specifier, version: Version) -> bool:
    return _public_key(version) < _public_key(spec.version)


def _match_greater(spec: Specifier, version: Version) -> bool:
    return _public_key(version) > _public_key(spec.version)


def _match_compatible(spec: Specifier, version: Version) -> bool:
    # ~=2.2.1 is >=2.2.1 combined with ==2.2.*
    prefix = Version(release=spec.version.release[:-1], epoch=spec.version.epoch)
    return _match_greater_equal(spec, version) and _match_prefix(prefix, version)


def _match_arbitrary(spec: Specifier, version: Version) -> bool:
    return str(version) == str(spec.version)


_MATCHERS: dict[str, Callable[[Specifier, Version], bool]] = {
    "==": _match_equal,
    "!=": _match_not_equal,
    "<=": _match_less_equal,
    ">=": _match_greater_equal,
    "<": _match_less,
    ">": _match_greater,
    "~=": _match_compatible,
    "===": _match_arbitrary,
}


def _coerce_version(version: Union[str, Version]) -> Version:
    return parse_version(version) if isinstance(version, str) else version


@dataclass(frozen=True, slots=True, eq=False)
class Specifier:
    """A single version constraint clause.

    Clauses compare and hash by their canonical text, since ``===1.0`` and
    ``===1.0.0`` accept different versions.

    Attributes:
        operator: One of the supported operators
        version: The operand; for wildcard clauses only epoch and release are set
        wildcard: True when the operand carried a trailing ``.*``
    """

    operator: str
    version: Version
    wildcard: bool = False

    def __str__(self) -> str:
        suffix = ".*" if self.wildcard else ""
        return f"{self.operator}{self.version}{suffix}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Specifier):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    @property
    def is_prerelease(self) -> bool:
        """Return True if the operand itself is a pre-release or dev-release."""
        return not self.wildcard and self.version.is_prerelease

    def names(self, version: Version) -> bool:
        """Return True if version is exactly this clause's operand."""
        return not self.wildcard and version == self.version

    def matches(self, version: Union[str, Version]) -> bool:
        """Evaluate the operator against a version, ignoring pre-release policy."""
        return _MATCHERS[self.operator](self, _coerce_version(version))

    def contains(self, version: Union[str, Version], include_prereleases: bool = False) -> bool:
        """Check if a version satisfies this clause.

        Pre-release and dev-release versions are rejected unless
        include_prereleases is set, the operand is itself a pre-release,
        or the version is the operand.
        """
        v = _coerce_version(version)
        if v.is_prerelease and not (include_prereleases or self.is_prerelease or self.names(v)):
            return False
        return self.matches(v)


@dataclass(frozen=True, slots=True)
class SpecifierSet:
    """A conjunction of specifier clauses.

    An empty set matches every version (subject to the pre-release policy).
    """

    specifiers: tuple[Specifier, ...] = ()

    def __str__(self) -> str:
        return ",".join(str(spec) for spec in self.specifiers)

    def __iter__(self) -> Iterator[Specifier]:
        return iter(self.specifiers)

    def __len__(self) -> int:
        return len(self.specifiers)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (str, Version)):
            return False
        return self.contains(version)

    @property
    def is_prerelease(self) -> bool:
        """Return True if any clause names a pre-release operand."""
        return any(spec.is_prerelease for spec in self.specifiers)

    def rejecting(self, version: Union[str, Version]) -> list[Specifier]:
        """Return the clauses whose operator rejects version."""
        v = _coerce_version(version)
        return [spec for spec in self.specifiers if not spec.matches(v)]

    def contains(self, version: Union[str, Version], include_prereleases: bool = False) -> bool:
        """Check if a version satisfies every clause in the set.

        Args:
            version: Version string or Version object
            include_prereleases: Accept pre-release and dev-release versions
                even when no clause names a pre-release operand

        Returns:
            True if the version matches all clauses
        """
        v = _coerce_version(version)
        if v.is_prerelease and not (include_prereleases or self.is_prerelease):
            if not any(spec.names(v) for spec in self.specifiers):
                return False
        return all(spec.matches(v) for spec in self.specifiers)


def parse_specifier(text: str) -> Specifier:
    """Parse a single specifier clause.

    Args:
        text: A clause such as ``>=1.0``, ``== 1.2.*`` or ``~=2.2.1``

    Returns:
        A Specifier

    Raises:
        MalformedSpecifier: If the operator is unknown, the operand is not a
            valid version, or the wildcard/compatible-release rules are broken

    Examples:
        >>> str(parse_specifier(">= 1.0"))
        '>=1.0'
        >>> parse_specifier("==1.2.*").wildcard
        True
    """
    if not isinstance(text, str):
        raise MalformedSpecifier(text, f"Specifier must be a string, got {type(text).__name__}")

    match = _OPERATOR_RE.match(text)
    if not match:
        raise MalformedSpecifier(text, f"Unknown operator in specifier: {text!r}")
    operator = match.group(1)

    operand = text[match.end() :].strip()
    if not operand:
        raise MalformedSpecifier(text, f"Missing version in specifier: {text!r}")

    wildcard = operand.endswith(".*")
    if wildcard:
        if operator not in _WILDCARD_OPERATORS:
            raise MalformedSpecifier(
                text, f"Wildcard versions are only allowed with == and !=: {text!r}"
            )
        operand = operand[:-2]

    try:
        version = parse_version(operand)
    except MalformedVersion as e:
        raise MalformedSpecifier(text, f"Invalid version in specifier {text!r}: {e.message}") from e

    if wildcard and (
        version.pre is not None
        or version.post is not None
        or version.dev is not None
        or version.local is not None
    ):
        raise MalformedSpecifier(text, f"Wildcard must directly follow a release segment: {text!r}")

    if operator == "~=" and len(version.release) < 2:
        raise MalformedSpecifier(
            text, f"Compatible release needs at least two release segments: {text!r}"
        )

    return Specifier(operator=operator, version=version, wildcard=wildcard)


def parse_specifier_set(text: str) -> SpecifierSet:
    """Parse a comma-separated set of specifier clauses.

    Empty (or whitespace-only) text gives an empty set. Duplicate clauses
    are kept once, in first-seen order.

    Raises:
        MalformedSpecifier: If any clause is malformed or empty
    """
    if not isinstance(text, str):
        raise MalformedSpecifier(text, f"Specifier set must be a string, got {type(text).__name__}")

    if not text.strip():
        return SpecifierSet()

    specifiers: dict[Specifier, None] = {}
    for clause in text.split(","):
        if not clause.strip():
            raise MalformedSpecifier(text, f"Empty clause in specifier set: {text!r}")
        specifiers.setdefault(parse_specifier(clause), None)
    return SpecifierSet(tuple(specifiers))


def specifier_set_matches(
    specifier_set: Union[str, SpecifierSet],
    version: Union[str, Version],
    include_prereleases: bool = False,
) -> bool:
    """Check if a version satisfies a specifier set.

    Examples:
        >>> specifier_set_matches(">=1.0,<2", "1.5")
        True
        >>> specifier_set_matches(">=1.0", "1.1a1")
        False
        >>> specifier_set_matches(">=1.0", "1.1a1", include_prereleases=True)
        True
    """
    if isinstance(specifier_set, str):
        specifier_set = parse_specifier_set(specifier_set)
    return specifier_set.contains(version, include_prereleases=include_prereleases)
