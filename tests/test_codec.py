"""
Tests for the record codec: framing, prerequisite encoding, legacy
migration, and record validation.
"""

import pytest

from modcatalog.data import Serialiser, Deserialiser
from modcatalog.config import MAX_PREREQ_DEPTH
from modcatalog.data.codec import escape, unescape, split_frames, frame
from modcatalog.exceptions import MalformedRecordError, InvalidCreditsError
from modcatalog.models import Combinator, Leaf, Group, PreReqTree, Module


@pytest.fixture
def deserialiser():
    return Deserialiser()


# ============================================================================
# Framing
# ============================================================================

def test_frame_examples(serialiser):
    assert serialiser.serialise_message("CS2113") == "6#CS2113"
    assert serialiser.serialise_message("") == "0#"
    assert serialiser.serialise_message("a#b") == "3#a#b"


def test_newlines_are_escaped(serialiser):
    framed = serialiser.serialise_message("line\nbreak")
    assert "\n" not in framed
    assert framed == "11#line\\nbreak"


@pytest.mark.parametrize("value", ["", "#", "12#", "3#abc", "back\\slash", "a\r\nb", "\\n"])
def test_field_values_survive_framing(serialiser, deserialiser, value):
    line = serialiser.serialise_message(value) + serialiser.serialise_message("tail")
    assert deserialiser.deserialise_message(line) == [value, "tail"]


def test_escape_unescape():
    assert unescape(escape("a\\b\nc\rd")) == "a\\b\nc\rd"


def test_unescape_rejects_unknown_sequence():
    with pytest.raises(MalformedRecordError):
        unescape("bad\\t")


def test_empty_line_has_no_fields(deserialiser):
    assert deserialiser.deserialise_message("") == []


@pytest.mark.parametrize("text", ["abc", "x#abc", "-1#", "5#abc", "3#abc2"])
def test_split_frames_rejects_broken_frames(text):
    with pytest.raises(MalformedRecordError):
        split_frames(text)


def test_split_frames_rejects_oversized_length_prefix():
    with pytest.raises(MalformedRecordError):
        split_frames("9" * 5000 + "#abc")


# ============================================================================
# Prerequisite encoding
# ============================================================================

def test_prereq_node_encoding(serialiser):
    assert serialiser.serialise_node(Leaf("CS1010")) == "=CS1010"
    assert serialiser.serialise_node(Group(Combinator.ALL, (Leaf("A"), Leaf("B")))) == "&2#=A2#=B"
    assert serialiser.serialise_node(
        Group(Combinator.ANY, (Group(Combinator.ALL, (Leaf("A"),)),))
    ) == "|5#&2#=A"


def test_empty_prereqs_encode_to_empty_field(serialiser, deserialiser):
    assert serialiser.serialise_prereq_tree(PreReqTree.empty()) == "0#"
    assert deserialiser.deserialise_prereq_tree("") == PreReqTree.empty()


def test_deep_tree_keeps_exact_shape(serialiser, deserialiser):
    tree = PreReqTree(Group(Combinator.ALL, (
        Leaf("CS2030S"),
        Group(Combinator.ANY, (
            Leaf("CS2040S"),
            Group(Combinator.ALL, (Leaf("CS2040C"), Group(Combinator.ANY, ()))),
        )),
    )))
    payload = deserialiser.deserialise_message(serialiser.serialise_prereq_tree(tree))[0]
    assert deserialiser.deserialise_prereq_tree(payload) == tree


def test_unknown_node_tag_is_malformed(deserialiser):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_node("&3#!AB")


def test_invalid_leaf_code_is_malformed(deserialiser):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_prereq_tree("=CS 1010")


def _nested_payload(depth):
    payload = "=A1"
    for _ in range(depth - 1):
        payload = "&" + frame(payload)
    return payload


def test_prereq_at_nesting_limit_round_trips(serialiser, deserialiser):
    tree = deserialiser.deserialise_prereq_tree(_nested_payload(MAX_PREREQ_DEPTH))

    assert tree.codes() == ["A1"]
    assert serialiser.serialise_prereq_tree(tree) == serialiser.serialise_message(_nested_payload(MAX_PREREQ_DEPTH))


@pytest.mark.parametrize("depth", [MAX_PREREQ_DEPTH + 1, 3000])
def test_prereq_past_nesting_limit_is_malformed(deserialiser, depth):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_prereq_tree(_nested_payload(depth))


# ============================================================================
# Legacy flat lists
# ============================================================================

@pytest.mark.parametrize("payload", ["CS1010,CS1231", "[CS1010, CS1231]", " cs1010 , cs1231 ,"])
def test_legacy_list_migrates_to_single_mandatory_group(deserialiser, payload):
    tree = deserialiser.deserialise_prereq_tree(payload)
    assert tree == PreReqTree(Group(Combinator.ANY, (
        Group(Combinator.ALL, (Leaf("CS1010"), Leaf("CS1231"))),
    )))
    assert tree.flatten_groups() == [["CS1010", "CS1231"]]


def test_legacy_empty_list_is_no_prerequisites(deserialiser):
    assert deserialiser.deserialise_prereq_tree("[]").is_empty()


def test_legacy_bad_code_is_malformed(deserialiser):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_prereq_tree("CS1010,CS 12")


# ============================================================================
# Module records
# ============================================================================

def test_module_round_trip_with_awkward_text(serialiser, deserialiser):
    module = Module(
        "CS2113",
        "Software Eng. #2 | OOP & = 12#\nPart two\\",
        4,
        "core|elective#1",
        PreReqTree.from_nested([["CS2040C"], ["CS2030", "CS2040"]]),
    )
    line = serialiser.serialise_module(module)

    assert "\n" not in line
    fields = deserialiser.deserialise_message(line)
    assert len(fields) == 5
    decoded = deserialiser.deserialise_module(fields)
    assert decoded == module
    assert decoded.prerequisites.root == module.prerequisites.root


@pytest.mark.parametrize("credits", ["0", "21", "abc", "", "-4", "4.0", "+4", "1_0", "\u0664", " 4x", "9" * 30])
def test_invalid_credits_rejected(deserialiser, credits):
    with pytest.raises(InvalidCreditsError):
        deserialiser.deserialise_module(["CS1010", "Programming", credits, "core", ""])


@pytest.mark.parametrize("credits,expected", [("1", 1), ("20", 20), ("4", 4), ("12", 12)])
def test_valid_credits_accepted(deserialiser, credits, expected):
    module = deserialiser.deserialise_module(["CS1010", "Programming", credits, "core", ""])
    assert module.credits == expected


def test_invalid_credits_is_a_malformed_record():
    assert issubclass(InvalidCreditsError, MalformedRecordError)


@pytest.mark.parametrize("fields", [
    ["CS1010", "Programming", "4"],
    ["CS1010", "Programming", "4", "core", "", "extra"],
    [],
])
def test_module_arity_enforced(deserialiser, fields):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_module(fields)


def test_module_empty_name_is_malformed(deserialiser):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_module(["CS1010", "", "4", "core", ""])


# ============================================================================
# Major records
# ============================================================================

def test_major_drops_unknown_codes(deserialiser, sample_catalog):
    major = deserialiser.deserialise_major(["Computing", "CP", "A1000,NOPE1"], sample_catalog)

    assert major.name == "Computing"
    assert major.abbreviation == "CP"
    assert major.modules == (sample_catalog["A1000"],)


def test_major_reads_every_code_field(deserialiser, sample_catalog):
    major = deserialiser.deserialise_major(["Computing", "CP", "a1000", "B2000, C3000"], sample_catalog)
    assert major.module_codes == ["A1000", "B2000", "C3000"]


def test_major_needs_three_fields(deserialiser, sample_catalog):
    with pytest.raises(MalformedRecordError):
        deserialiser.deserialise_major(["Computing", "CP"], sample_catalog)


def test_major_round_trip(serialiser, deserialiser, sample_catalog):
    major = deserialiser.deserialise_major(["Comp, Sci #1", "CS", "A1000,B2000"], sample_catalog)
    line = serialiser.serialise_major(major)
    assert deserialiser.deserialise_major(deserialiser.deserialise_message(line), sample_catalog) == major
