"""
Remote catalog access.

This package fetches module records from the NUSMods API and maps them
onto the catalog's own models.
"""

from .nusmods import NusModsClient, module_from_remote, create_retry_session

__all__ = ["NusModsClient", "module_from_remote", "create_retry_session"]
