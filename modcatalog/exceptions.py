"""
Exceptions raised by the catalog codec, models, and storage layer.

The loader catches all of these per record and turns them into warnings,
so none of them escape a load or save call.
"""


class CatalogError(Exception):
    """Base class for every catalog failure."""


class MalformedRecordError(CatalogError):
    """A record has the wrong field count or a frame that cannot be decoded."""


class InvalidCreditsError(MalformedRecordError):
    """A credits field is non-numeric or outside the allowed range."""


class CatalogIOError(CatalogError):
    """The catalog file or its directory could not be read, written, or created."""
