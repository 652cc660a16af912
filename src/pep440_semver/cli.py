# SPDX-License-Identifier: MIT
"""CLI entry point for the pep440 command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .compare import Ordering, compare_versions, version_key
from .config import ConfigError, ToolConfig, load_config
from .errors import VersionError
from .semver import semver_to_version, version_to_semver
from .specifiers import parse_specifier_set
from .version import Version, parse_version

_ORDERING_SYMBOLS = {
    Ordering.LESS: "<",
    Ordering.EQUAL: "==",
    Ordering.GREATER: ">",
}


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[ToolConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> ToolConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def _parse_or_exit(text: str) -> Version:
    try:
        return parse_version(text)
    except VersionError as e:
        echo_error(str(e))
        raise SystemExit(1)


def _config_or_exit(ctx: Context) -> ToolConfig:
    try:
        return ctx.load_config()
    except ConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)


def _describe(version: Version) -> list[str]:
    """Return one line per populated field of a version."""
    lines = [f"  epoch:   {version.epoch}", f"  release: {'.'.join(map(str, version.release))}"]
    if version.pre is not None:
        lines.append(f"  pre:     {version.pre[0]}{version.pre[1]}")
    if version.post is not None:
        lines.append(f"  post:    {version.post}")
    if version.dev is not None:
        lines.append(f"  dev:     {version.dev}")
    if version.local is not None:
        lines.append(f"  local:   {'.'.join(map(str, version.local))}")
    return lines


@click.group()
@click.version_option(version=__version__, prog_name="pep440")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Read [tool.pep440-semver] settings from this directory's pyproject.toml.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """PEP 440 version tool.

    Normalize, compare and match Python package versions and convert them
    to and from semantic versions.

    \b
    Examples:
        pep440 parse 1.0-Alpha_2
        pep440 compare 1.0 1.0.0
        pep440 sort 1.0 1.0a1 1.0.post1
        pep440 check ">=1.0,<2" 1.4
        pep440 to-semver 1.2rc1
        pep440 from-semver 1.2.0-rc.1
    """
    ctx.verbose = verbose
    ctx.project_dir = directory


@cli.command()
@click.argument("versions", nargs=-1, required=True)
@pass_context
def parse(ctx: Context, versions: tuple[str, ...]) -> None:
    """Print the canonical form of each VERSION."""
    for text in versions:
        version = _parse_or_exit(text)
        echo_info(str(version))
        if ctx.verbose:
            for line in _describe(version):
                echo_info(line)


@cli.command()
@click.argument("first")
@click.argument("second")
def compare(first: str, second: str) -> None:
    """Compare two versions."""
    result = compare_versions(_parse_or_exit(first), _parse_or_exit(second))
    echo_info(f"{first} {_ORDERING_SYMBOLS[result]} {second}")


@cli.command(name="sort")
@click.argument("versions", nargs=-1, required=True)
@click.option("--reverse", "-r", is_flag=True, help="Sort in descending order.")
def sort_versions(versions: tuple[str, ...], reverse: bool) -> None:
    """Print VERSIONS in ascending order."""
    parsed = [(_parse_or_exit(text), text) for text in versions]
    for _, text in sorted(parsed, key=lambda item: version_key(item[0]), reverse=reverse):
        echo_info(text)


@cli.command()
@click.argument("specifiers")
@click.argument("version")
@click.option(
    "--pre/--no-pre",
    "include_prereleases",
    default=None,
    help="Accept pre-release versions (default from configuration).",
)
@pass_context
def check(
    ctx: Context,
    specifiers: str,
    version: str,
    include_prereleases: Optional[bool],
) -> None:
    """Check whether VERSION satisfies SPECIFIERS.

    Exits with status 0 on a match and 1 otherwise.

    \b
    Examples:
        pep440 check ">=1.0,!=1.3.*,<2" 1.4.2
        pep440 check "~=2.2.1" 2.2.9
        pep440 check --pre ">=1.0" 1.1a1
    """
    if include_prereleases is None:
        include_prereleases = _config_or_exit(ctx).include_prereleases

    try:
        specifier_set = parse_specifier_set(specifiers)
    except VersionError as e:
        echo_error(str(e))
        raise SystemExit(1)
    candidate = _parse_or_exit(version)

    if specifier_set.contains(candidate, include_prereleases=include_prereleases):
        echo_success("match")
        return

    echo_info("no match")
    if ctx.verbose:
        rejected = specifier_set.rejecting(candidate)
        if rejected:
            for spec in rejected:
                echo_info(f"  rejected by {spec}")
        else:
            echo_info("  pre-release versions are excluded (use --pre)")
    raise SystemExit(1)


@cli.command(name="to-semver")
@click.argument("version")
@click.option(
    "--lossy/--strict",
    default=None,
    help="Drop epoch and extra release segments instead of failing.",
)
@pass_context
def to_semver(ctx: Context, version: str, lossy: Optional[bool]) -> None:
    """Convert a PEP 440 VERSION to a semantic version."""
    if lossy is None:
        lossy = _config_or_exit(ctx).lossy_semver

    parsed = _parse_or_exit(version)
    if lossy and parsed.epoch != 0:
        echo_warning(f"Dropping epoch {parsed.epoch} from {parsed}")
    if lossy and any(parsed.release[3:]):
        echo_warning(f"Dropping release segments beyond the third from {parsed}")
    try:
        echo_info(str(version_to_semver(parsed, lossy=lossy)))
    except VersionError as e:
        echo_error(str(e))
        raise SystemExit(1)


@cli.command(name="from-semver")
@click.argument("semver")
def from_semver(semver: str) -> None:
    """Convert a semantic version to a PEP 440 version."""
    try:
        echo_info(str(semver_to_version(semver)))
    except VersionError as e:
        echo_error(str(e))
        raise SystemExit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
