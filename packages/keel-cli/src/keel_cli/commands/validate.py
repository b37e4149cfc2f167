# SPDX-License-Identifier: MIT
"""Validate a Keel.toml manifest."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from keel_manifest import CompileConfig, InvalidManifestError, compile_manifest_file

from ..config import ConfigError, resolve_manifest_path
from ..main import (
    Context,
    compile_options,
    echo_error,
    echo_info,
    echo_invalid_manifest,
    echo_success,
    pass_context,
)


@click.command()
@compile_options
@pass_context
def validate(ctx: Context, manifest: Optional[Path], strict: bool, suffix: str) -> None:
    """Compile the manifest and report whether it is valid.

    \b
    Examples:
        keel validate                  # Nearest Keel.toml
        keel validate -m Keel.toml     # Specific manifest
        keel validate --strict         # Reject malformed optional sections
    """
    try:
        path = resolve_manifest_path(manifest, ctx.project_dir)
    except ConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)

    echo_info(f"Validating: {path}")

    try:
        compiled = compile_manifest_file(path, CompileConfig(source_suffix=suffix, strict=strict))
    except InvalidManifestError as e:
        echo_invalid_manifest(e)
        echo_error("Validation failed!")
        raise SystemExit(1)

    echo_info(f"  Package: {compiled.package_id}")
    echo_info(f"  Dependencies: {len(compiled.dependencies)}")
    echo_info(f"  Targets: {len(compiled.targets)}")
    echo_success("Validation passed!")
