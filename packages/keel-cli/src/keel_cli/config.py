# SPDX-License-Identifier: MIT
"""Locating the Keel.toml manifest for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from keel_manifest import MANIFEST_FILENAME


class ConfigError(Exception):
    """Raised when the CLI cannot work out which manifest to use."""

    pass


def find_project_root(start: Optional[Path] = None) -> Path:
    """Find the nearest directory at or above ``start`` containing Keel.toml.

    Args:
        start: Directory to start from (defaults to the current directory)

    Returns:
        The project root directory

    Raises:
        ConfigError: If no Keel.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / MANIFEST_FILENAME).is_file():
            return candidate
    raise ConfigError(f"Could not find {MANIFEST_FILENAME} in {current} or any parent directory")


def resolve_manifest_path(manifest: Optional[Path], project_dir: Optional[Path]) -> Path:
    """Return the manifest to operate on.

    An explicit ``manifest`` wins; otherwise Keel.toml is searched for from
    ``project_dir`` upwards.
    """
    if manifest is not None:
        return manifest
    return find_project_root(project_dir) / MANIFEST_FILENAME
