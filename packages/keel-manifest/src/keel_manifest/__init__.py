# SPDX-License-Identifier: MIT
"""Compilation of Keel.toml manifests into validated project descriptions.

This package turns a raw manifest document into a ProjectManifest:
- typed decoding of the [project], lib and bin sections
- classification of plain and detailed dependency declarations
- build target normalization with default source paths

Example:
    >>> from keel_manifest import compile_manifest
    >>>
    >>> manifest = compile_manifest(b'''
    ... [project]
    ... name = "demo"
    ... version = "0.1.0"
    ...
    ... [dependencies]
    ... log = "0.4"
    ... ''')
    >>> [dep.name for dep in manifest.dependencies]
    ['log']
"""

__version__ = "0.1.0"

from .compiler import (
    MANIFEST_FILENAME,
    CompileConfig,
    compile_manifest,
    compile_manifest_dict,
    compile_manifest_file,
    parse_document,
)
from .dependencies import (
    DetailedDependency,
    RawDependency,
    SimpleDependency,
    resolve_dependencies,
)
from .errors import (
    InvalidDependenciesSectionError,
    InvalidDependencySpecError,
    InvalidManifestError,
    InvalidVersionRequirementError,
    ManifestError,
    ManifestSyntaxError,
    MissingSectionError,
    MissingVersionError,
    SchemaMismatchError,
    ValidationErrorDetail,
)
from .model import (
    DEFAULT_TARGET_DIR,
    BuildTarget,
    Dependency,
    PackageId,
    PackageSummary,
    ProjectIdentity,
    ProjectManifest,
    TargetKind,
)
from .requirements import InvalidRequirementError, VersionRequirement, parse_requirement
from .schema import (
    PROJECT_SCHEMA,
    TARGETS_SCHEMA,
    DecodedSections,
    TargetEntry,
    decode_project,
    decode_sections,
    decode_targets,
)
from .targets import DEFAULT_SOURCE_SUFFIX, normalize_targets

__all__ = [
    # Compilation
    "compile_manifest",
    "compile_manifest_dict",
    "compile_manifest_file",
    "parse_document",
    "CompileConfig",
    "MANIFEST_FILENAME",
    "DEFAULT_TARGET_DIR",
    # Schema decoding
    "PROJECT_SCHEMA",
    "TARGETS_SCHEMA",
    "DecodedSections",
    "TargetEntry",
    "decode_project",
    "decode_sections",
    "decode_targets",
    # Dependencies
    "SimpleDependency",
    "DetailedDependency",
    "RawDependency",
    "resolve_dependencies",
    # Requirements
    "parse_requirement",
    "VersionRequirement",
    "InvalidRequirementError",
    # Targets
    "normalize_targets",
    "DEFAULT_SOURCE_SUFFIX",
    # Model
    "BuildTarget",
    "Dependency",
    "PackageId",
    "PackageSummary",
    "ProjectIdentity",
    "ProjectManifest",
    "TargetKind",
    # Errors
    "ManifestError",
    "InvalidManifestError",
    "ManifestSyntaxError",
    "MissingSectionError",
    "SchemaMismatchError",
    "InvalidDependenciesSectionError",
    "InvalidDependencySpecError",
    "MissingVersionError",
    "InvalidVersionRequirementError",
    "ValidationErrorDetail",
]
