# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner
from hypothesis import HealthCheck, settings

# The first draw can be slow on a cold start (strategy warm-up); don't fail on timing.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[str], Path]:
    """Return a factory creating a project directory with the given tool table."""

    def _make(tool_table: str = "") -> Path:
        project_dir = tmp_path / "project"
        project_dir.mkdir(exist_ok=True)
        (project_dir / "pyproject.toml").write_text(
            f"""[project]
name = "example"
version = "1.0.0"

{tool_table}
"""
        )
        return project_dir

    return _make
