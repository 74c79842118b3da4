"""
Configuration constants for the module catalog.

This module contains all configuration values and constants used throughout
the catalog package. Centralizing these makes it easy to adjust behavior
when the university changes its credit rules or the catalog API moves.
"""

import os
import re
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Base data directory (relative to this file's location unless overridden)
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.environ.get("MODCATALOG_DATA_DIR", BASE_DIR / "data"))
MODULES_FILE = "modules.txt"
MAJORS_FILE = "majors.txt"


# =============================================================================
# MODULE CREDITS
# =============================================================================

# Credit weights outside this range are rejected as unparseable, not merely
# unusual. A 0-credit or 21-credit module means the record is corrupt.
MIN_CREDITS = 1
MAX_CREDITS = 20

# Sentinel returned by parse_credits() for anything that is not a valid weight
INVALID_CREDITS = -1

_CREDITS_PATTERN = re.compile(r"[0-9]+")


def parse_credits(raw) -> int:
    """Parse a credit weight, returning INVALID_CREDITS if it is not 1-20."""
    if isinstance(raw, bool):
        return INVALID_CREDITS
    text = str(raw).strip()
    # ASCII digits only; int() alone also takes "+4", "1_0" and non-ASCII digits.
    # The length cap keeps a runaway digit string away from int().
    if not _CREDITS_PATTERN.fullmatch(text) or len(text) > len(str(MAX_CREDITS)) + 2:
        return INVALID_CREDITS
    credits = int(text)
    return credits if MIN_CREDITS <= credits <= MAX_CREDITS else INVALID_CREDITS


# =============================================================================
# MODULE DEFAULTS
# =============================================================================

# Category tag given to modules that arrive without one (e.g. from the API)
DEFAULT_MODULE_TYPE = "core"


# =============================================================================
# PREREQUISITE EXPRESSIONS
# =============================================================================

# Deepest AND/OR nesting accepted from a file or the API. Real expressions
# rarely pass four levels; anything past this is rejected as malformed.
MAX_PREREQ_DEPTH = 32


# =============================================================================
# REMOTE CATALOG (NUSMods)
# =============================================================================
# Module records live at {NUSMODS_API_BASE}/{acad_year}/modules/{code}.json

NUSMODS_API_BASE = "https://api.nusmods.com/v2"
DEFAULT_ACAD_YEAR = "2025-2026"
REQUEST_TIMEOUT = 20  # seconds
