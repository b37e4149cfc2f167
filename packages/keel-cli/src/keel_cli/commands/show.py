# SPDX-License-Identifier: MIT
"""Print the compiled form of a Keel.toml manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from keel_manifest import CompileConfig, InvalidManifestError, compile_manifest_file

from ..config import ConfigError, resolve_manifest_path
from ..main import Context, compile_options, echo_error, echo_info, echo_invalid_manifest, pass_context


@click.command()
@compile_options
@click.option("--json", "as_json", is_flag=True, help="Print the manifest as JSON.")
@pass_context
def show(
    ctx: Context,
    manifest: Optional[Path],
    strict: bool,
    suffix: str,
    as_json: bool,
) -> None:
    """Show the package, dependencies and build targets of a manifest."""
    try:
        path = resolve_manifest_path(manifest, ctx.project_dir)
    except ConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)

    try:
        compiled = compile_manifest_file(path, CompileConfig(source_suffix=suffix, strict=strict))
    except InvalidManifestError as e:
        echo_invalid_manifest(e)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(compiled.to_dict(), indent=2))
        return

    echo_info(f"{compiled.package_id}")

    echo_info("dependencies:")
    if not compiled.dependencies:
        echo_info("  (none)")
    for dep in compiled.dependencies:
        echo_info(f"  {dep.name} {dep.requirement}")

    echo_info("targets:")
    if not compiled.targets:
        echo_info("  (none)")
    for target in compiled.targets:
        echo_info(f"  {target.kind.value} {target.name} ({target.path})")

    echo_info(f"target dir: {compiled.target_dir}")
