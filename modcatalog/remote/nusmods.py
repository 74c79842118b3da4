"""
NUSMods catalog client.

Fetches module records from the NUSMods v2 API and translates them into
Module objects. The translation is a pure mapping with the same
validation as locally loaded records; the fetch is best-effort and logs
instead of raising.
"""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    NUSMODS_API_BASE,
    DEFAULT_ACAD_YEAR,
    DEFAULT_MODULE_TYPE,
    REQUEST_TIMEOUT,
    parse_credits,
    INVALID_CREDITS,
)
from ..exceptions import MalformedRecordError, InvalidCreditsError
from ..models import Module, PreReqTree

logger = logging.getLogger(__name__)

# Keys of the remote module record
CODE = "moduleCode"
NAME = "title"
CREDITS = "moduleCredit"
PREREQ = "prereqTree"


def module_from_remote(record: dict, module_type: str = DEFAULT_MODULE_TYPE) -> Module:
    """
    Translate a remote module record into a Module.

    Example record (trimmed):
        {
            "moduleCode": "CS2030",
            "title": "Programming Methodology II",
            "moduleCredit": "4",
            "prereqTree": {"or": ["CS1010:D", "CS1101S:D"]}
        }

    Raises:
        MalformedRecordError: a required key is missing or a field is invalid
        InvalidCreditsError: moduleCredit is not a whole number in 1-20
    """
    if not isinstance(record, dict):
        raise MalformedRecordError(f"Remote record must be an object, got {type(record).__name__}")

    missing = [key for key in (CODE, NAME, CREDITS) if record.get(key) in (None, "")]
    if missing:
        raise MalformedRecordError(f"Module retrieved is missing fields: {', '.join(missing)}")

    credits = parse_credits(record[CREDITS])
    if credits == INVALID_CREDITS:
        raise InvalidCreditsError(f"Unable to parse module credit: {record[CREDITS]!r}")

    try:
        prerequisites = PreReqTree.from_remote(record.get(PREREQ))
        return Module(record[CODE], record[NAME], credits, module_type, prerequisites)
    except (ValueError, TypeError) as e:
        raise MalformedRecordError(f"Module {record[CODE]}: {e}") from e


def create_retry_session() -> requests.Session:
    """Session that backs off and retries on rate limits and server errors."""
    session = requests.Session()
    retries = Retry(
        total=3,
        backoff_factor=1,  # Wait 1s, 2s, 4s between attempts
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"]
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class NusModsClient:
    """
    Fetches module records for one academic year.

    Usage:
        client = NusModsClient("2025-2026")
        module = client.fetch_module("CS2113")  # Module or None
    """

    def __init__(self, acad_year: str = DEFAULT_ACAD_YEAR, session=None,
                 base_url: str = NUSMODS_API_BASE, timeout: float = REQUEST_TIMEOUT):
        self.acad_year = acad_year
        self.session = session or create_retry_session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def module_url(self, code: str) -> str:
        return f"{self.base_url}/{self.acad_year}/modules/{code.strip().upper()}.json"

    def fetch_record(self, code: str) -> Optional[dict]:
        """Return the raw module record, or None if it could not be fetched."""
        url = self.module_url(code)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.warning("Failed to fetch module data for %s: %s", code, e)
            return None
        except ValueError as e:
            logger.warning("Invalid JSON for module %s: %s", code, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected response shape for module %s", code)
            return None
        return data

    def fetch_module(self, code: str, module_type: str = DEFAULT_MODULE_TYPE) -> Optional[Module]:
        """Fetch and translate one module; None (with a warning) on any failure."""
        record = self.fetch_record(code)
        if record is None:
            return None
        try:
            return module_from_remote(record, module_type)
        except MalformedRecordError as e:
            logger.warning("Module %s retrieved but unusable: %s", code, e)
            return None

    def fetch_modules(self, codes, module_type: str = DEFAULT_MODULE_TYPE) -> dict:
        """Fetch several modules; codes that fail are left out of the result."""
        fetched = {}
        for code in codes:
            module = self.fetch_module(code, module_type)
            if module is not None:
                fetched[module.code] = module
        return fetched
