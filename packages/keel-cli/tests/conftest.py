# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory with a Keel.toml."""
    project_dir = tmp_path / "demo"
    project_dir.mkdir()
    (project_dir / "Keel.toml").write_text(
        """[project]
name = "demo"
version = "1.0.0"
authors = ["Test Author"]

[[lib]]
name = "demo"

[[bin]]
name = "demo-cli"

[dependencies]
log = "0.4"
serde = { version = "1.0", registry = "internal" }
"""
    )
    return project_dir
