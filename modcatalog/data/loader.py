"""
Catalog loading and saving.

This module turns catalog files into Module and Major maps (and back)
using Storage for file I/O and the codec for records.
"""

import logging
from dataclasses import dataclass, field

from ..exceptions import CatalogIOError, MalformedRecordError
from .codec import Serialiser, Deserialiser
from .storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """
    Best-effort result of a load: every valid record plus a diagnostic for
    every record that was skipped.

    Unpacks as ``(items, warnings)``:
        catalog, warnings = loader.load_modules(path)
    """
    items: dict = field(default_factory=dict)
    warnings: list = field(default_factory=list)

    def __iter__(self):
        return iter((self.items, self.warnings))

    def __len__(self):
        return len(self.items)

    @property
    def ok(self) -> bool:
        return not self.warnings


class CatalogLoader:
    """
    Loads and saves the module catalog and major files.

    LOAD ORDER: modules first, then majors. Majors resolve their module codes
    against the already-loaded catalog and drop codes it does not contain.

    FAILURE POLICY: no load or save ever raises.
    - A record with the wrong field count, an undecodable frame, or invalid
      credits is skipped and reported in LoadResult.warnings.
    - An unreadable file yields an empty result with one warning.
    - An unwritable file abandons the save; save_* returns the warning
      string (None on success).

    Usage:
        loader = CatalogLoader()
        catalog, warnings = loader.load_modules("data/modules.txt")
        majors, _ = loader.load_majors("data/majors.txt", catalog)
        loader.save_catalog("data/modules.txt", catalog)
    """

    def __init__(self, serialiser: Serialiser = None, deserialiser: Deserialiser = None):
        self.serialiser = serialiser or Serialiser()
        self.deserialiser = deserialiser or Deserialiser()

    def load_modules(self, path) -> LoadResult:
        """Load every valid Module record in ``path`` keyed by module code."""
        result = LoadResult()
        lines = self._read_lines(path, result)

        for line_no, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                fields = self.deserialiser.deserialise_message(line)
                module = self.deserialiser.deserialise_module(fields)
            except MalformedRecordError as e:
                self._warn(result, f"{path}:{line_no}: skipped module record: {e}")
                continue

            if module.code in result.items:
                self._warn(result, f"{path}:{line_no}: duplicate module {module.code} replaces earlier record")
            result.items[module.code] = module

        logger.info("Loaded %d modules from %s (%d skipped)", len(result.items), path, len(result.warnings))
        return result

    def load_majors(self, path, catalog: dict) -> LoadResult:
        """Load every valid Major record in ``path`` keyed by major name."""
        result = LoadResult()
        lines = self._read_lines(path, result)

        for line_no, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                fields = self.deserialiser.deserialise_message(line)
                major = self.deserialiser.deserialise_major(fields, catalog)
            except MalformedRecordError as e:
                self._warn(result, f"{path}:{line_no}: skipped major record: {e}")
                continue
            result.items[major.name] = major

        logger.info("Loaded %d majors from %s (%d skipped)", len(result.items), path, len(result.warnings))
        return result

    def save_catalog(self, path, catalog: dict):
        """Write every module in ``catalog`` to ``path``, one record per line."""
        lines = [self.serialiser.serialise_module(m) for m in catalog.values()]
        return self._write_lines(path, lines)

    def save_majors(self, path, majors: dict):
        """Write every major in ``majors`` to ``path``, one record per line."""
        lines = [self.serialiser.serialise_major(m) for m in majors.values()]
        return self._write_lines(path, lines)

    def _read_lines(self, path, result: LoadResult) -> list:
        try:
            return Storage(path).load()
        except (CatalogIOError, ValueError) as e:
            self._warn(result, str(e))
            return []

    def _write_lines(self, path, lines: list):
        text = "".join(line + "\n" for line in lines)
        try:
            Storage(path).save(text)
        except (CatalogIOError, ValueError) as e:
            logger.warning("%s", e)
            return str(e)
        logger.info("Saved %d records to %s", len(lines), path)
        return None

    @staticmethod
    def _warn(result: LoadResult, message: str):
        logger.warning("%s", message)
        result.warnings.append(message)


# Module-level shortcuts for callers that don't need a custom codec
_default_loader = CatalogLoader()


def load_modules(path) -> LoadResult:
    return _default_loader.load_modules(path)


def load_majors(path, catalog: dict) -> LoadResult:
    return _default_loader.load_majors(path, catalog)


def save_catalog(path, catalog: dict):
    return _default_loader.save_catalog(path, catalog)


def save_majors(path, majors: dict):
    return _default_loader.save_majors(path, majors)
