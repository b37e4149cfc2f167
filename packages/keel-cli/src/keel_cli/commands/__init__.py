# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import show, validate

__all__ = ["show", "validate"]
