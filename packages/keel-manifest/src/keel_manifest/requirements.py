# SPDX-License-Identifier: MIT
"""Version requirements for keel dependencies.

A requirement is a comma-separated list of comparators, all of which must
match, in the syntax of ``semantic_version.SimpleSpec`` (``^1.2``, ``~0.3.1``,
``>=1.0,<2``, ``1.*``). A comparator written without an operator is a caret
requirement, so ``"1.0"`` accepts ``1.0.0`` up to but not including ``2.0.0``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import semantic_version


class InvalidRequirementError(Exception):
    """Raised when a version requirement string cannot be parsed."""

    def __init__(self, requirement: str, message: str = ""):
        self.requirement = requirement
        self.message = message or f"Invalid version requirement: {requirement!r}"
        super().__init__(self.message)


@dataclass(frozen=True, slots=True)
class VersionRequirement:
    """A parsed version requirement.

    Attributes:
        raw: The requirement as written, with surrounding whitespace removed
        spec: The equivalent SimpleSpec
    """

    raw: str
    spec: semantic_version.SimpleSpec = field(compare=False)

    def __str__(self) -> str:
        return self.raw

    def matches(self, version: Union[str, semantic_version.Version]) -> bool:
        """Return True if ``version`` satisfies the requirement.

        Examples:
            >>> parse_requirement(">=1.2, <2").matches("1.5.0")
            True
            >>> parse_requirement("1.0").matches("2.0.0")
            False
        """
        if isinstance(version, str):
            version = semantic_version.Version(version)
        return self.spec.match(version)


def _normalize_comparator(comparator: str) -> str:
    # Bare versions are caret requirements; bare wildcards stay as they are
    if comparator[0].isdigit() and not any(c in comparator for c in "*xX"):
        return f"^{comparator}"
    if comparator.startswith("=") and not comparator.startswith("=="):
        return f"={comparator}"
    return comparator


def parse_requirement(requirement: str) -> VersionRequirement:
    """Parse a version requirement string.

    Args:
        requirement: e.g. ``"1.0"``, ``"^0.3.2"``, ``">=1.2, <2"``, ``"*"``

    Returns:
        The parsed VersionRequirement

    Raises:
        InvalidRequirementError: If the string is empty or malformed
    """
    if not isinstance(requirement, str):
        raise InvalidRequirementError(
            str(requirement),
            f"Requirement must be a string, got {type(requirement).__name__}",
        )

    raw = requirement.strip()
    if not raw:
        raise InvalidRequirementError(requirement, "Version requirement cannot be empty")

    comparators = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            raise InvalidRequirementError(requirement, f"Empty comparator in {requirement!r}")
        comparators.append(_normalize_comparator(chunk))

    try:
        spec = semantic_version.SimpleSpec(",".join(comparators))
    except ValueError as e:
        raise InvalidRequirementError(requirement, f"Invalid version requirement {requirement!r}: {e}") from e

    return VersionRequirement(raw=raw, spec=spec)
