"""Responsive pointer-reactive background grid."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hovergrid")
except PackageNotFoundError:
    # Source-tree runs without installed metadata
    __version__ = "0.0.0"

__all__ = ["__version__"]
