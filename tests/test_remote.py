"""
Tests for the NUSMods client and remote-record translation.
"""

import pytest
import requests

from modcatalog.exceptions import MalformedRecordError, InvalidCreditsError
from modcatalog.models import Combinator, Leaf, Group, PreReqTree
from modcatalog.remote import NusModsClient, module_from_remote


# ============================================================================
# Translation
# ============================================================================

def test_module_from_remote(cs2030_record):
    module = module_from_remote(cs2030_record)

    assert module.code == "CS2030"
    assert module.name == "Programming Methodology II"
    assert module.credits == 4
    assert module.type == "core"
    assert module.prerequisites == PreReqTree(
        Group(Combinator.ANY, (Leaf("CS1010"), Leaf("CS1101S")))
    )


def test_module_from_remote_without_prereqs():
    module = module_from_remote({"moduleCode": "CS1010", "title": "Programming", "moduleCredit": 4},
                                module_type="elective")

    assert module.prerequisites.is_empty()
    assert module.type == "elective"


@pytest.mark.parametrize("credit", ["0", "21", "four", 0])
def test_module_from_remote_bad_credits(cs2030_record, credit):
    cs2030_record["moduleCredit"] = credit
    with pytest.raises(InvalidCreditsError):
        module_from_remote(cs2030_record)


@pytest.mark.parametrize("key", ["moduleCode", "title", "moduleCredit"])
def test_module_from_remote_missing_field(cs2030_record, key):
    del cs2030_record[key]
    with pytest.raises(MalformedRecordError):
        module_from_remote(cs2030_record)


def test_module_from_remote_bad_prereq_tree(cs2030_record):
    cs2030_record["prereqTree"] = {"xor": ["CS1010"]}
    with pytest.raises(MalformedRecordError):
        module_from_remote(cs2030_record)


@pytest.mark.parametrize("prereq_tree", [
    {"and": 5},
    {"nOf": 2},
    {"nOf": [3, ["CS1010", "CS1101S"]]},
])
def test_module_from_remote_malformed_prereq_shapes(cs2030_record, prereq_tree):
    cs2030_record["prereqTree"] = prereq_tree
    with pytest.raises(MalformedRecordError):
        module_from_remote(cs2030_record)


def test_module_from_remote_rejects_non_object():
    with pytest.raises(MalformedRecordError):
        module_from_remote(["CS1010"])


# ============================================================================
# Client
# ============================================================================

def test_fetch_module_uses_year_url(fake_session, cs2030_record):
    session = fake_session({"CS2030": cs2030_record})
    client = NusModsClient("2024-2025", session=session, base_url="https://example.test/v2/")

    module = client.fetch_module("cs2030")

    assert module.code == "CS2030"
    assert session.requested == ["https://example.test/v2/2024-2025/modules/CS2030.json"]


def test_fetch_module_http_error_returns_none(fake_session, caplog):
    client = NusModsClient(session=fake_session())

    assert client.fetch_module("NOPE1") is None
    assert "Failed to fetch module data for NOPE1" in caplog.text


def test_fetch_module_network_error_returns_none(fake_session):
    client = NusModsClient(session=fake_session(error=requests.ConnectionError("offline")))
    assert client.fetch_record("CS2030") is None


def test_fetch_module_invalid_json_returns_none(fake_session, fake_response):
    session = fake_session(responses={"CS2030": fake_response(200, invalid_json=True)})
    assert NusModsClient(session=session).fetch_record("CS2030") is None


def test_fetch_module_unusable_record_returns_none(fake_session, cs2030_record):
    cs2030_record["moduleCredit"] = "99"
    client = NusModsClient(session=fake_session({"CS2030": cs2030_record}))
    assert client.fetch_module("CS2030") is None


def test_fetch_module_malformed_prereq_returns_none(fake_session, cs2030_record):
    cs2030_record["prereqTree"] = {"and": 5}
    client = NusModsClient(session=fake_session({"CS2030": cs2030_record}))
    assert client.fetch_module("CS2030") is None


def test_fetch_modules_skips_failures(fake_session, cs2030_record):
    client = NusModsClient(session=fake_session({"CS2030": cs2030_record}))

    fetched = client.fetch_modules(["CS2030", "MISSING1"])

    assert list(fetched) == ["CS2030"]


def test_default_session_retries():
    client = NusModsClient()
    adapter = client.session.get_adapter("https://api.nusmods.com/v2")
    assert adapter.max_retries.total == 3
    assert 429 in adapter.max_retries.status_forcelist
