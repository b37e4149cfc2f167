# SPDX-License-Identifier: MIT
"""CLI entry point for the keel command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from keel_manifest import CompileConfig, InvalidManifestError, SchemaMismatchError

from .config import ConfigError


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None


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


def echo_invalid_manifest(error: InvalidManifestError) -> None:
    """Print an InvalidManifestError with its cause and any field details."""
    echo_error(error.summary)
    click.secho(f"  caused by: {error.cause}", fg="red", err=True)
    if isinstance(error.cause, SchemaMismatchError):
        for detail in error.cause.errors[1:]:
            click.secho(f"  - {detail.field}: {detail.message}", fg="red", err=True)


def compile_options(func):
    """Options shared by commands that compile a manifest."""
    func = click.option(
        "--suffix",
        default=CompileConfig.source_suffix,
        show_default=True,
        help="Source file suffix used for inferred target paths.",
    )(func)
    func = click.option(
        "--strict",
        is_flag=True,
        help="Report malformed optional sections instead of ignoring them.",
    )(func)
    func = click.option(
        "--manifest",
        "-m",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Path to Keel.toml (defaults to the nearest one).",
    )(func)
    return func


@click.group()
@click.version_option(package_name="keel")
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
    help="Change to directory before running command.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Keel project manifest tool.

    Compile and inspect Keel.toml manifests.

    \b
    Examples:
        keel validate
        keel validate --strict -m path/to/Keel.toml
        keel show --json
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register commands
from .commands import show, validate

cli.add_command(validate.validate)
cli.add_command(show.show)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
