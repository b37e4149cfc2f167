# SPDX-License-Identifier: MIT
"""Normalization of declared lib and bin targets into build targets."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from .model import BuildTarget
from .schema import TargetEntry

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_SUFFIX = ".rs"


def _lib_target(libs: Sequence[TargetEntry], suffix: str) -> BuildTarget:
    lib = libs[0]
    if len(libs) > 1:
        logger.warning(
            "only one library target is supported; ignoring %s",
            ", ".join(repr(extra.name) for extra in libs[1:]),
        )
    path = lib.path if lib.path is not None else f"src/{lib.name}{suffix}"
    return BuildTarget.library(lib.name, path)


def _bin_targets(
    bins: Sequence[TargetEntry],
    default: Callable[[TargetEntry], str],
) -> list[BuildTarget]:
    return [
        BuildTarget.binary(entry.name, entry.path if entry.path is not None else default(entry))
        for entry in bins
    ]


def normalize_targets(
    lib: Optional[Sequence[TargetEntry]],
    bin: Optional[Sequence[TargetEntry]],
    suffix: str = DEFAULT_SOURCE_SUFFIX,
) -> list[BuildTarget]:
    """Produce the ordered build targets of a project.

    The first lib entry becomes the library target; further lib entries are
    ignored. Binaries follow in declaration order. Without an explicit
    ``path`` a target lives at ``src/<name><suffix>``, except that binaries
    of a project that also has a library default to ``src/bin/<name><suffix>``
    so they stay out of the library's source tree.

    An empty ``lib`` list counts as no library.
    """
    logger.debug("normalizing targets; lib=%s; bin=%s", lib, bin)

    targets: list[BuildTarget] = []

    if lib:
        targets.append(_lib_target(lib, suffix))
        if bin is not None:
            targets.extend(_bin_targets(bin, lambda entry: f"src/bin/{entry.name}{suffix}"))
    elif bin is not None:
        targets.extend(_bin_targets(bin, lambda entry: f"src/{entry.name}{suffix}"))

    return targets
