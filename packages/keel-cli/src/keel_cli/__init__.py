# SPDX-License-Identifier: MIT
"""Command-line interface for keel projects."""

__version__ = "0.1.0"
