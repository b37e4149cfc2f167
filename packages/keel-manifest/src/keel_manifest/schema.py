# SPDX-License-Identifier: MIT
"""Typed decoding of Keel.toml sections.

Each section is looked up by path in the parsed TOML tree, checked against a
JSON Schema, and only then turned into typed values. ``[project]`` is
required; ``lib`` and ``bin`` are optional arrays of target tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import semantic_version
from jsonschema import Draft202012Validator, ValidationError

from .errors import MissingSectionError, SchemaMismatchError, ValidationErrorDetail
from .model import ProjectIdentity

logger = logging.getLogger(__name__)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

# JSON Schema for the [project] table
PROJECT_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Keel project section",
    "type": "object",
    "required": ["name", "version"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string", "minLength": 1},
        "authors": _STRING_LIST,
        "description": {"type": "string"},
        "license": {"type": "string"},
        "homepage": {"type": "string"},
        "repository": {"type": "string"},
        "keywords": _STRING_LIST,
    },
}

# JSON Schema shared by the lib and bin arrays
TARGETS_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Keel target list",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string"},
            "path": {"type": "string"},
        },
    },
}

_PROJECT_VALIDATOR = Draft202012Validator(PROJECT_SCHEMA)
_TARGETS_VALIDATOR = Draft202012Validator(TARGETS_SCHEMA)


@dataclass(frozen=True, slots=True)
class TargetEntry:
    """A target table as declared under ``lib`` or ``bin``."""

    name: str
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DecodedSections:
    """The typed sections of a manifest before normalization."""

    project: ProjectIdentity
    lib: Optional[list[TargetEntry]] = None
    bin: Optional[list[TargetEntry]] = None


def lookup(tree: Any, path: str) -> Any:
    """Return the value at a dotted ``path`` in ``tree``, or None if absent."""
    value = tree
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value


def _field_path(section: str, error: ValidationError) -> str:
    """Convert a jsonschema error path to a readable field path."""
    parts = [section]
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            parts.append(f".{part}")
    return "".join(parts)


def _format_error_message(error: ValidationError) -> str:
    """Format a jsonschema error into a human-readable message."""
    if error.validator == "required":
        missing = [key for key in error.validator_value if key not in error.instance]
        if len(missing) == 1:
            return f"Missing required field: {missing[0]}"
        return f"Missing required fields: {', '.join(missing)}"

    if error.validator == "type":
        return f"Expected {error.validator_value}, got {type(error.instance).__name__}"

    if error.validator == "minLength":
        return f"String must be at least {error.validator_value} character(s)"

    return error.message


def _check(section: str, value: Any, validator: Draft202012Validator) -> None:
    errors = [
        ValidationErrorDetail(
            field=_field_path(section, error),
            message=_format_error_message(error),
            value=error.instance if error.absolute_path else None,
        )
        for error in validator.iter_errors(value)
    ]
    if errors:
        raise SchemaMismatchError(section, errors)


def decode_project(tree: Any) -> ProjectIdentity:
    """Decode the required ``[project]`` section.

    Raises:
        MissingSectionError: If there is no ``project`` key
        SchemaMismatchError: If the section has the wrong shape or an invalid version
    """
    raw = lookup(tree, "project")
    if raw is None:
        raise MissingSectionError("project")

    _check("project", raw, _PROJECT_VALIDATOR)

    try:
        version = semantic_version.Version(raw["version"])
    except ValueError as e:
        raise SchemaMismatchError(
            "project",
            [
                ValidationErrorDetail(
                    field="project.version",
                    message=f"Invalid semantic version: {raw['version']}",
                    value=raw["version"],
                )
            ],
        ) from e

    return ProjectIdentity(
        name=raw["name"],
        version=version,
        authors=tuple(raw.get("authors", ())),
        description=raw.get("description", ""),
        license=raw.get("license", ""),
        homepage=raw.get("homepage", ""),
        repository=raw.get("repository", ""),
        keywords=tuple(raw.get("keywords", ())),
    )


def decode_targets(tree: Any, path: str, strict: bool = False) -> Optional[list[TargetEntry]]:
    """Decode an optional target array (``lib`` or ``bin``).

    Returns None when the section is absent. A section that is present but
    malformed is also treated as absent unless ``strict`` is set, in which
    case SchemaMismatchError is raised.
    """
    raw = lookup(tree, path)
    if raw is None:
        return None

    try:
        _check(path, raw, _TARGETS_VALIDATOR)
    except SchemaMismatchError as e:
        if strict:
            raise
        logger.warning("ignoring malformed [%s] section: %s", path, e)
        return None

    return [TargetEntry(name=entry["name"], path=entry.get("path")) for entry in raw]


def decode_sections(tree: Any, strict: bool = False) -> DecodedSections:
    """Decode ``project``, ``lib`` and ``bin`` from a parsed manifest tree."""
    project = decode_project(tree)
    lib = decode_targets(tree, "lib", strict=strict)
    bins = decode_targets(tree, "bin", strict=strict)

    if strict and lib is not None and len(lib) > 1:
        raise SchemaMismatchError(
            "lib",
            [
                ValidationErrorDetail(
                    field=f"lib[{i}]",
                    message="Only one library target may be declared",
                    value=entry.name,
                )
                for i, entry in enumerate(lib[1:], start=1)
            ],
        )

    return DecodedSections(project=project, lib=lib, bin=bins)
