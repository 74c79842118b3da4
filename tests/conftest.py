"""
Shared fixtures for the catalog tests.

Catalog files are written into tmp_path with the real Serialiser; the
remote API is replaced by a fake requests session.
"""

import logging

import pytest
import requests

from modcatalog.data import Serialiser
from modcatalog.models import Module, PreReqTree


# ============================================================================
# Logging - keep handlers added by cli.configure_logging from leaking
# ============================================================================

@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("modcatalog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ============================================================================
# Catalog data
# ============================================================================

@pytest.fixture
def serialiser():
    return Serialiser()


@pytest.fixture
def sample_catalog():
    """A (no prereq), B (needs A), C (needs A and D, D not in the catalog)."""
    return {
        "A1000": Module("A1000", "Intro", 4, "core", PreReqTree.empty()),
        "B2000": Module("B2000", "Follow-on", 4, "core", PreReqTree.from_nested([["A1000"]])),
        "C3000": Module("C3000", "Advanced", 4, "elective", PreReqTree.from_nested([["A1000", "D9999"]])),
    }


@pytest.fixture
def write_lines(tmp_path):
    """Write raw lines to a file under tmp_path and return its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path
    return _write


# ============================================================================
# Remote API
# ============================================================================

class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Serves canned responses keyed by module code; records requested URLs."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        code = url.rsplit("/", 1)[-1].replace(".json", "")
        return self.responses.get(code, FakeResponse(404))


@pytest.fixture
def fake_session():
    def _make(records=None, **kwargs):
        responses = {code: FakeResponse(200, record) for code, record in (records or {}).items()}
        responses.update(kwargs.pop("responses", {}))
        return FakeSession(responses, **kwargs)
    return _make


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def cs2030_record():
    return {
        "acadYear": "2025/2026",
        "moduleCode": "CS2030",
        "title": "Programming Methodology II",
        "moduleCredit": "4",
        "prereqTree": {"or": ["CS1010:D", "CS1101S:D"]},
    }
