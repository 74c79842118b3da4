"""
Catalog engines.

This package contains the pure derivations built on top of a loaded
catalog.
"""

from .graph import PrereqGraph, build_dependency_graph

__all__ = [
    "PrereqGraph",
    "build_dependency_graph",
]
