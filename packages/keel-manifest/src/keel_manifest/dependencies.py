# SPDX-License-Identifier: MIT
"""Classification of the ``[dependencies]`` table.

A dependency is declared either as a plain requirement string::

    serde = "1.0"

or as a table carrying a ``version`` plus any other string keys, which are
kept verbatim for later consumers (registry or source overrides)::

    serde = { version = "1.0", registry = "internal" }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import (
    InvalidDependenciesSectionError,
    InvalidDependencySpecError,
    MissingVersionError,
)
from .schema import lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimpleDependency:
    """A dependency declared as a bare requirement string."""

    requirement: str


@dataclass(frozen=True, slots=True)
class DetailedDependency:
    """A dependency declared as a table.

    Attributes:
        requirement: Value of the ``version`` key
        extra: Every other key of the table, uninterpreted
    """

    requirement: str
    extra: dict[str, str] = field(default_factory=dict)


RawDependency = Union[SimpleDependency, DetailedDependency]


def _detailed(name: str, table: dict[str, Any]) -> DetailedDependency:
    details: dict[str, str] = {}
    for key, value in table.items():
        if not isinstance(value, str):
            raise InvalidDependencySpecError(
                name,
                f"value of '{key}' must be a string, got {type(value).__name__}",
                value,
            )
        details[key] = value

    if "version" not in details:
        raise MissingVersionError(name)

    version = details.pop("version")
    return DetailedDependency(requirement=version, extra=details)


def resolve_dependencies(tree: Any, strict: bool = False) -> dict[str, RawDependency]:
    """Classify each entry of the ``dependencies`` table.

    Args:
        tree: The parsed manifest
        strict: Raise on entries that are neither a string nor a table
            instead of skipping them

    Returns:
        Mapping of dependency name to its declaration, in table order.
        An absent table yields an empty mapping.

    Raises:
        InvalidDependenciesSectionError: If ``dependencies`` is not a table
        InvalidDependencySpecError: If a dependency table has a non-string value
        MissingVersionError: If a dependency table has no ``version``
    """
    table = lookup(tree, "dependencies")
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise InvalidDependenciesSectionError(table)

    deps: dict[str, RawDependency] = {}
    for name, value in table.items():
        if isinstance(value, str):
            deps[name] = SimpleDependency(value)
        elif isinstance(value, dict):
            deps[name] = _detailed(name, value)
        elif strict:
            raise InvalidDependencySpecError(
                name,
                f"expected a version string or a table, got {type(value).__name__}",
                value,
            )
        else:
            logger.warning(
                "skipping dependency %r: unsupported declaration of type %s",
                name,
                type(value).__name__,
            )

    return deps
