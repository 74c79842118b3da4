"""
Catalog persistence.

This package handles the record codec, file I/O, and catalog load/save.
"""

from .codec import Serialiser, Deserialiser
from .storage import Storage
from .loader import (
    CatalogLoader,
    LoadResult,
    load_modules,
    load_majors,
    save_catalog,
    save_majors,
)

__all__ = [
    "Serialiser",
    "Deserialiser",
    "Storage",
    "CatalogLoader",
    "LoadResult",
    "load_modules",
    "load_majors",
    "save_catalog",
    "save_majors",
]
