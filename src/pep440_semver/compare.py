# SPDX-License-Identifier: MIT
"""Version comparison following PEP 440 ordering semantics.

Within one epoch and release: dev-only < pre-release < final < post-release.
Pre-release ordering: a < b < rc. A dev marker sorts just before the same
version without it. Local labels only break ties between otherwise equal
versions, and a version without a local label sorts after one with a label.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from .version import PHASES, LocalSegment, Version, parse_version

# Pre-release phase ordering (lower = earlier in release cycle)
_PHASE_ORDER = {phase: order for order, phase in enumerate(PHASES)}

# Rank of a version with no pre-release marker; sorts after every phase
_FINAL_RANK = len(PHASES)

# Rank of a dev-only version; sorts before every phase
_DEV_ONLY_RANK = -1


class Ordering(IntEnum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _release_key(release: tuple[int, ...]) -> tuple[int, ...]:
    """Drop trailing zeros so that 1.0 and 1.0.0 produce the same key."""
    end = len(release)
    while end > 0 and release[end - 1] == 0:
        end -= 1
    return release[:end]


def _qualifier_key(version: Version) -> tuple[tuple[int, int], ...]:
    """Build the (pre, post, dev) part of the sort key.

    Each component is a pair so that "absent" can sort either before or
    after every present value depending on the qualifier.
    """
    if version.pre is None and version.post is None and version.dev is not None:
        pre_key = (_DEV_ONLY_RANK, 0)
    elif version.pre is None:
        pre_key = (_FINAL_RANK, 0)
    else:
        phase, number = version.pre
        pre_key = (_PHASE_ORDER[phase], number)

    # No post-release sorts before any post-release
    post_key = (0, 0) if version.post is None else (1, version.post)

    # No dev-release sorts after any dev-release
    dev_key = (1, 0) if version.dev is None else (0, version.dev)

    return (pre_key, post_key, dev_key)


def _local_key(local: tuple[LocalSegment, ...] | None) -> tuple:
    """Build the local label part of the sort key.

    Numeric segments sort after alphanumeric ones at the same position.
    """
    if local is None:
        return (1, ())
    return (
        0,
        tuple((1, segment, "") if isinstance(segment, int) else (0, 0, segment) for segment in local),
    )


def version_key(version: Union[str, Version], include_local: bool = True) -> tuple:
    """Return a sort key for a version, suitable for sorting.

    Args:
        version: Version string or Version object
        include_local: If False, the local label is left out so that versions
            differing only in their local label produce equal keys

    Returns:
        A tuple of (epoch, release, (pre, post, dev), local)

    Raises:
        MalformedVersion: If a version string is invalid

    Examples:
        >>> sorted(["1.0", "1.0.dev0", "1.0a1", "1.0.post1"], key=version_key)
        ['1.0.dev0', '1.0a1', '1.0', '1.0.post1']
    """
    v = parse_version(version) if isinstance(version, str) else version
    local = _local_key(v.local) if include_local else _local_key(None)
    return (v.epoch, _release_key(v.release), _qualifier_key(v), local)


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> Ordering:
    """Compare two versions following PEP 440 ordering.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        Ordering.LESS (-1) if version1 < version2
        Ordering.EQUAL (0) if version1 == version2
        Ordering.GREATER (1) if version1 > version2

    Raises:
        MalformedVersion: If either version string is invalid

    Examples:
        >>> compare_versions("1.0", "1.0.0")
        <Ordering.EQUAL: 0>
        >>> compare_versions("1.0rc1", "1.0")
        <Ordering.LESS: -1>
        >>> compare_versions("1.0.post1", "1.0")
        <Ordering.GREATER: 1>
    """
    key1 = version_key(version1)
    key2 = version_key(version2)
    if key1 == key2:
        return Ordering.EQUAL
    return Ordering.LESS if key1 < key2 else Ordering.GREATER
