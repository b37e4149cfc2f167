# SPDX-License-Identifier: MIT
"""Compiled manifest types handed to the build and resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional, Union

from semantic_version import Version

from .errors import InvalidVersionRequirementError
from .requirements import InvalidRequirementError, VersionRequirement, parse_requirement

DEFAULT_TARGET_DIR = "target"


@dataclass(frozen=True, slots=True)
class PackageId:
    """Name and version identifying a package."""

    name: str
    version: Version

    def __str__(self) -> str:
        return f"{self.name} v{self.version}"


@dataclass(frozen=True, slots=True)
class ProjectIdentity:
    """The decoded ``[project]`` section.

    Attributes:
        name: Package name
        version: Package version
        authors: Author names, in declaration order
        description: Short description
        license: License identifier
        homepage: Homepage URL
        repository: Repository URL
        keywords: Search keywords
    """

    name: str
    version: Version
    authors: tuple[str, ...] = ()
    description: str = ""
    license: str = ""
    homepage: str = ""
    repository: str = ""
    keywords: tuple[str, ...] = ()

    def to_package_id(self) -> PackageId:
        return PackageId(name=self.name, version=self.version)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "version": str(self.version)}
        if self.authors:
            data["authors"] = list(self.authors)
        for key in ("description", "license", "homepage", "repository"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.keywords:
            data["keywords"] = list(self.keywords)
        return data


@dataclass(frozen=True, slots=True)
class Dependency:
    """A named dependency with a parsed version requirement."""

    name: str
    requirement: VersionRequirement

    @classmethod
    def parse(cls, name: str, requirement: str) -> "Dependency":
        """Build a Dependency from a requirement string.

        Raises:
            InvalidVersionRequirementError: If the requirement does not parse
        """
        try:
            parsed = parse_requirement(requirement)
        except InvalidRequirementError as e:
            raise InvalidVersionRequirementError(name, requirement, e.message) from e
        return cls(name=name, requirement=parsed)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "requirement": str(self.requirement)}


class TargetKind(str, Enum):
    """Kinds of build target."""

    LIBRARY = "lib"
    BINARY = "bin"


@dataclass(frozen=True, slots=True)
class BuildTarget:
    """A build artifact with its resolved source entry path."""

    kind: TargetKind
    name: str
    path: PurePosixPath

    @classmethod
    def library(cls, name: str, path: Union[str, PurePosixPath]) -> "BuildTarget":
        return cls(kind=TargetKind.LIBRARY, name=name, path=PurePosixPath(path))

    @classmethod
    def binary(cls, name: str, path: Union[str, PurePosixPath]) -> "BuildTarget":
        return cls(kind=TargetKind.BINARY, name=name, path=PurePosixPath(path))

    @property
    def is_library(self) -> bool:
        return self.kind is TargetKind.LIBRARY

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "name": self.name, "path": str(self.path)}


@dataclass(frozen=True, slots=True)
class PackageSummary:
    """Project identity plus its resolved dependencies."""

    project: ProjectIdentity
    dependencies: tuple[Dependency, ...] = ()

    @property
    def package_id(self) -> PackageId:
        return self.project.to_package_id()

    def dependency_names(self) -> set[str]:
        return {dep.name for dep in self.dependencies}


@dataclass(frozen=True, slots=True)
class ProjectManifest:
    """The compiled manifest.

    Attributes:
        summary: Package identity and dependencies
        targets: Build targets, library first then binaries in declaration order
        target_dir: Output directory, relative to the project root
    """

    summary: PackageSummary
    targets: tuple[BuildTarget, ...] = ()
    target_dir: PurePosixPath = field(default_factory=lambda: PurePosixPath(DEFAULT_TARGET_DIR))

    @property
    def package_id(self) -> PackageId:
        return self.summary.package_id

    @property
    def dependencies(self) -> tuple[Dependency, ...]:
        return self.summary.dependencies

    @property
    def library(self) -> Optional[BuildTarget]:
        """Return the library target, if the project declares one."""
        return next((t for t in self.targets if t.is_library), None)

    @property
    def binaries(self) -> list[BuildTarget]:
        return [t for t in self.targets if t.kind is TargetKind.BINARY]

    def to_dict(self) -> dict[str, Any]:
        """Convert the manifest to plain JSON-serializable data."""
        return {
            "project": self.summary.project.to_dict(),
            "dependencies": [dep.to_dict() for dep in self.summary.dependencies],
            "targets": [target.to_dict() for target in self.targets],
            "target_dir": str(self.target_dir),
        }
