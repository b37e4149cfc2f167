# SPDX-License-Identifier: MIT
"""Compile a Keel.toml document into a ProjectManifest.

Compilation is all-or-nothing: any failure surfaces as a single
InvalidManifestError whose ``cause`` is the specific error, and no partial
manifest is ever returned.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .dependencies import DetailedDependency, RawDependency, SimpleDependency, resolve_dependencies
from .errors import (
    InvalidManifestError,
    InvalidVersionRequirementError,
    ManifestError,
    ManifestSyntaxError,
)
from .model import DEFAULT_TARGET_DIR, Dependency, PackageSummary, ProjectManifest
from .schema import decode_sections
from .targets import DEFAULT_SOURCE_SUFFIX, normalize_targets

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "Keel.toml"


@dataclass
class CompileConfig:
    """Options for manifest compilation.

    Attributes:
        source_suffix: File suffix used when inferring target source paths
        target_dir: Output directory recorded on the manifest
        strict: Report malformed optional input (lib/bin sections, extra
            libraries, unsupported dependency values) instead of ignoring it
    """

    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    target_dir: str = DEFAULT_TARGET_DIR
    strict: bool = False


def parse_document(contents: bytes) -> dict[str, Any]:
    """Parse raw manifest bytes into a TOML tree.

    Raises:
        ManifestSyntaxError: If the bytes are not UTF-8 encoded TOML
    """
    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestSyntaxError(f"Manifest is not valid UTF-8: {e}") from e

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestSyntaxError(f"Invalid TOML syntax: {e}") from e


def _requirement_of(entry: RawDependency) -> str:
    if isinstance(entry, SimpleDependency):
        return entry.requirement
    if isinstance(entry, DetailedDependency):
        return entry.requirement
    raise TypeError(f"Unknown dependency declaration: {entry!r}")


def compile_manifest_dict(
    tree: dict[str, Any],
    config: Optional[CompileConfig] = None,
) -> ProjectManifest:
    """Compile an already parsed manifest tree.

    Args:
        tree: Parsed TOML document
        config: Optional compilation options

    Returns:
        The compiled ProjectManifest

    Raises:
        InvalidManifestError: If the tree is not a valid manifest
    """
    config = config or CompileConfig()

    try:
        sections = decode_sections(tree, strict=config.strict)
        declared = resolve_dependencies(tree, strict=config.strict)
    except ManifestError as e:
        raise InvalidManifestError(f"{MANIFEST_FILENAME} is not a valid manifest", e) from e

    dependencies: list[Dependency] = []
    for name, entry in declared.items():
        try:
            dependencies.append(Dependency.parse(name, _requirement_of(entry)))
        except InvalidVersionRequirementError as e:
            raise InvalidManifestError(
                f"{MANIFEST_FILENAME} has an invalid version requirement for '{name}'", e
            ) from e

    targets = normalize_targets(sections.lib, sections.bin, suffix=config.source_suffix)
    if not targets:
        logger.debug("manifest has no build targets; project=%s", sections.project.to_package_id())

    summary = PackageSummary(project=sections.project, dependencies=tuple(dependencies))
    return ProjectManifest(
        summary=summary,
        targets=tuple(targets),
        target_dir=PurePosixPath(config.target_dir),
    )


def compile_manifest(contents: bytes, config: Optional[CompileConfig] = None) -> ProjectManifest:
    """Compile raw Keel.toml bytes into a ProjectManifest.

    Args:
        contents: The manifest document
        config: Optional compilation options

    Returns:
        The compiled ProjectManifest

    Raises:
        InvalidManifestError: If the document is not valid TOML or not a valid manifest

    Example:
        >>> manifest = compile_manifest(b'[project]\\nname = "demo"\\nversion = "0.1.0"\\n')
        >>> str(manifest.package_id)
        'demo v0.1.0'
    """
    try:
        tree = parse_document(contents)
    except ManifestSyntaxError as e:
        raise InvalidManifestError(f"{MANIFEST_FILENAME} is not valid TOML", e) from e

    return compile_manifest_dict(tree, config)


def compile_manifest_file(
    manifest_path: Union[str, Path],
    config: Optional[CompileConfig] = None,
) -> ProjectManifest:
    """Read and compile a Keel.toml file.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidManifestError: If the file is not a valid manifest
    """
    path = Path(manifest_path)
    if not path.exists():
        raise FileNotFoundError(f"{MANIFEST_FILENAME} not found: {path}")

    return compile_manifest(path.read_bytes(), config)
