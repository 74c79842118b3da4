"""
Data models for the module catalog.

This package contains the dataclasses and enums that flow between the
codec, the loader, and the graph builder.
"""

from .prereq import (
    Combinator,
    Leaf,
    Group,
    PreReqTree,
    MODULE_CODE_PATTERN,
    normalize_code,
    is_valid_code,
)
from .module import Module, Major

__all__ = [
    # Prerequisite expression
    "Combinator",
    "Leaf",
    "Group",
    "PreReqTree",
    "MODULE_CODE_PATTERN",
    "normalize_code",
    "is_valid_code",
    # Catalog entries
    "Module",
    "Major",
]
