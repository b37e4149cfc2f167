# SPDX-License-Identifier: MIT
"""Exceptions raised while compiling a Keel.toml manifest.

Callers of the ``compile_*`` functions only ever see InvalidManifestError;
the more specific errors below are attached to it as ``cause``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ManifestError(Exception):
    """Base exception for manifest-related errors."""

    pass


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Details about a single shape error in a manifest section.

    Attributes:
        field: Path to the offending value (e.g. "project.version" or "bin[1].name")
        message: Human-readable error message
        value: The offending value, when there is one
    """

    field: str
    message: str
    value: Any = None


class InvalidManifestError(ManifestError):
    """The manifest could not be compiled.

    Attributes:
        summary: Short human-readable description of what went wrong
        cause: The underlying error
    """

    def __init__(self, summary: str, cause: BaseException):
        self.summary = summary
        self.cause = cause
        super().__init__(summary)


class ManifestSyntaxError(ManifestError):
    """The document is not well-formed TOML."""

    pass


class MissingSectionError(ManifestError):
    """A required section is absent."""

    def __init__(self, section: str):
        self.section = section
        super().__init__(f"Missing required section: [{section}]")


class SchemaMismatchError(ManifestError):
    """A present section does not have the expected shape.

    Attributes:
        section: The section path that failed to decode
        errors: One entry per shape violation
    """

    def __init__(self, section: str, errors: list[ValidationErrorDetail]):
        self.section = section
        self.errors = errors
        message = f"Section '{section}' is invalid"
        if errors:
            message += f": {errors[0].field}: {errors[0].message}"
        super().__init__(message)


class InvalidDependenciesSectionError(ManifestError):
    """The ``dependencies`` key is present but is not a table."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"dependencies must be a table, got {type(value).__name__}")


class InvalidDependencySpecError(ManifestError):
    """A dependency declaration has an unsupported shape."""

    def __init__(self, name: str, message: str, value: Any = None):
        self.name = name
        self.value = value
        super().__init__(f"Dependency '{name}': {message}")


class MissingVersionError(ManifestError):
    """A detailed dependency table has no ``version`` key."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Dependency '{name}' must include a version")


class InvalidVersionRequirementError(ManifestError):
    """A dependency's version requirement could not be parsed."""

    def __init__(self, name: str, requirement: str, reason: str = ""):
        self.name = name
        self.requirement = requirement
        message = f"Dependency '{name}' has an invalid version requirement {requirement!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
