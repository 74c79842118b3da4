"""
Plain-text file storage.

Reads a catalog file as a list of lines and writes text back over it. Knows
nothing about records; the codec and CatalogLoader handle those.
"""

import logging
import os
import tempfile
from pathlib import Path

from ..exceptions import CatalogIOError

logger = logging.getLogger(__name__)


class Storage:
    """
    Loads from and saves to a single text file.

    Saving goes through a temporary file in the same directory followed by
    os.replace(), so a reader sees either the old content or the new
    content, never a half-written file.

    Usage:
        storage = Storage("data/modules.txt")
        lines = storage.load()
        storage.save("\\n".join(lines) + "\\n")
    """

    def __init__(self, file_path):
        if file_path is None or str(file_path) == "":
            raise ValueError("File path must not be None or empty")
        self.file_path = Path(file_path)

    def load(self) -> list:
        """
        Return the file's lines without line terminators.

        Creates the file (and its directory) when missing, so a first run
        starts from an empty catalog.
        """
        logger.debug("Loading file: %s", self.file_path)
        try:
            self._ensure_directory()
            if not self.file_path.exists():
                self.file_path.touch()
            with open(self.file_path, "r", encoding="utf-8", newline="\n") as f:
                # Not splitlines(): it also breaks on \x0b, \x1c, \u2028 and
                # friends, which may legitimately appear inside a field
                lines = [line.rstrip("\r") for line in f.read().split("\n")]
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogIOError(f"Failed to load {self.file_path}: {e}") from e

        # A trailing newline leaves one empty string at the end
        if lines and lines[-1] == "":
            lines.pop()
        logger.debug("Read %d lines from %s", len(lines), self.file_path)
        return lines

    def save(self, text: str):
        """Replace the file's content with ``text``."""
        logger.debug("Saving file: %s", self.file_path)
        tmp_path = None
        try:
            self._ensure_directory()
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.file_path.name}.", suffix=".tmp", dir=self.file_path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
            os.replace(tmp_path, self.file_path)
            tmp_path = None
        except OSError as e:
            raise CatalogIOError(f"Failed to save {self.file_path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug("Saved %d characters to %s", len(text), self.file_path)

    def _ensure_directory(self):
        parent = self.file_path.parent
        parent.mkdir(parents=True, exist_ok=True)
