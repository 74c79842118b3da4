"""
Catalog record codec.

Turns Module and Major records into single text lines and back.

FRAMING
-------
Every field is framed as ``<length>#<payload>`` so field boundaries survive
any content, including "#" and digits inside the payload:

    "CS2113"               -> "6#CS2113"
    "Data Structures #2"   -> "18#Data Structures #2"
    ""                     -> "0#"

Newlines, carriage returns, and backslashes are escaped before framing
(``\\n``, ``\\r``, ``\\\\``) so a record always fits on one line. The length
prefix counts the escaped payload.

PREREQUISITE FIELD
------------------
The expression is written node by node, children framed the same way as
fields, so nesting survives to any depth:

    Leaf("CS1010")                       -> "=CS1010"
    Group(ALL, [Leaf(A), Leaf(B)])       -> "&2#=A2#=B"
    Group(ANY, [Group(ALL, [Leaf(A)])])  -> "|5#&2#=A"
    no prerequisites                     -> ""

Older catalog files stored a flat list of codes ("CS1010,CS1231" or
"[CS1010, CS1231]"). Module codes are alphanumeric, so a payload not
starting with "=", "&" or "|" is that legacy list. It migrates forward as a
single mandatory combination: ANY[ ALL[codes...] ].
"""

import logging
import re

from ..config import parse_credits, INVALID_CREDITS, MAX_PREREQ_DEPTH
from ..exceptions import MalformedRecordError, InvalidCreditsError
from ..models import Combinator, Leaf, Group, PreReqTree, Module, Major

logger = logging.getLogger(__name__)

FRAME_MARKER = "#"

LEAF_TAG = "="
ALL_TAG = "&"
ANY_TAG = "|"
NODE_TAGS = (LEAF_TAG, ALL_TAG, ANY_TAG)

LEGACY_SEPARATOR = ","
MAJOR_CODE_SEPARATOR = ","

MODULE_FIELD_COUNT = 5
MAJOR_MIN_FIELD_COUNT = 3

_LENGTH_PATTERN = re.compile(r"^[0-9]+$")

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def escape(text: str) -> str:
    """Escape characters that would break a one-record-per-line file."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape(text: str) -> str:
    result = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            result.append(ch)
            continue
        nxt = next(chars, None)
        if nxt not in _UNESCAPES:
            raise MalformedRecordError(f"Invalid escape sequence in field: {text!r}")
        result.append(_UNESCAPES[nxt])
    return "".join(result)


def frame(payload: str) -> str:
    """Frame an already-escaped payload."""
    return f"{len(payload)}{FRAME_MARKER}{payload}"


def split_frames(text: str) -> list:
    """
    Split a concatenation of frames into their payloads.

    Raises MalformedRecordError when a length prefix is missing, non-numeric,
    longer than the text could ever need, or runs past the end of the text.
    """
    payloads = []
    pos = 0
    while pos < len(text):
        marker = text.find(FRAME_MARKER, pos)
        if marker == -1:
            raise MalformedRecordError(f"Missing frame marker at position {pos}: {text[pos:]!r}")

        length_text = text[pos:marker]
        if not _LENGTH_PATTERN.match(length_text):
            raise MalformedRecordError(f"Invalid frame length {length_text!r} at position {pos}")
        if len(length_text) > len(str(len(text))):
            raise MalformedRecordError(
                f"Frame length at position {pos} has {len(length_text)} digits, "
                f"more than a {len(text)}-character line can hold"
            )

        start = marker + 1
        end = start + int(length_text)
        if end > len(text):
            raise MalformedRecordError(
                f"Frame at position {pos} declares {length_text} characters "
                f"but only {len(text) - start} remain"
            )

        payloads.append(text[start:end])
        pos = end
    return payloads


class Serialiser:
    """
    Encodes catalog records into framed text lines.

    Usage:
        line = Serialiser().serialise_module(module)
    """

    def serialise_message(self, message: str) -> str:
        """Frame a single field value."""
        return frame(escape(message))

    def serialise_node(self, node) -> str:
        if isinstance(node, Leaf):
            return LEAF_TAG + node.code
        tag = ALL_TAG if node.combinator is Combinator.ALL else ANY_TAG
        return tag + "".join(frame(self.serialise_node(child)) for child in node.children)

    def serialise_prereq_tree(self, tree: PreReqTree) -> str:
        """Frame the whole prerequisite expression as one field."""
        if tree.root is None:
            return self.serialise_message("")
        return self.serialise_message(self.serialise_node(tree.root))

    def serialise_module(self, module: Module) -> str:
        logger.debug("Serialising module: %s", module.code)
        return (
            self.serialise_message(module.code)
            + self.serialise_message(module.name)
            + self.serialise_message(str(module.credits))
            + self.serialise_message(module.type)
            + self.serialise_prereq_tree(module.prerequisites)
        )

    def serialise_major(self, major: Major) -> str:
        logger.debug("Serialising major: %s", major.name)
        return (
            self.serialise_message(major.name)
            + self.serialise_message(major.abbreviation)
            + self.serialise_message(MAJOR_CODE_SEPARATOR.join(major.module_codes))
        )


class Deserialiser:
    """
    Decodes framed text lines back into catalog records.

    Decoding happens in two steps, mirroring how the loader validates:
    1. deserialise_message(line) -> list of field payloads
    2. deserialise_module(fields) / deserialise_major(fields, catalog)

    Every failure is raised as MalformedRecordError (InvalidCreditsError for
    bad credit weights) so the loader can skip the record and carry on.
    """

    def deserialise_message(self, line: str) -> list:
        """Split a raw line into its unescaped field values."""
        return [unescape(payload) for payload in split_frames(line)]

    def deserialise_node(self, payload: str, depth: int = 1):
        if not payload:
            raise MalformedRecordError("Empty prerequisite node")
        if depth > MAX_PREREQ_DEPTH:
            raise MalformedRecordError(f"Prerequisite expression nests deeper than {MAX_PREREQ_DEPTH} levels")

        tag, body = payload[0], payload[1:]
        if tag not in NODE_TAGS:
            raise MalformedRecordError(f"Unknown prerequisite node tag {tag!r}")
        try:
            if tag == LEAF_TAG:
                return Leaf(body)
            combinator = Combinator.ALL if tag == ALL_TAG else Combinator.ANY
            children = tuple(self.deserialise_node(child, depth + 1) for child in split_frames(body))
            return Group(combinator, children)
        except ValueError as e:
            raise MalformedRecordError(str(e)) from e

    def deserialise_legacy_prereqs(self, payload: str) -> PreReqTree:
        """Migrate a flat legacy code list into one mandatory ALL-of group."""
        body = payload.strip()
        if body.startswith("[") and body.endswith("]"):
            body = body[1:-1]
        codes = [c.strip() for c in body.split(LEGACY_SEPARATOR) if c.strip()]
        if not codes:
            return PreReqTree.empty()
        try:
            return PreReqTree.from_nested([codes])
        except ValueError as e:
            raise MalformedRecordError(str(e)) from e

    def deserialise_prereq_tree(self, payload: str) -> PreReqTree:
        if not payload:
            return PreReqTree.empty()
        if payload[0] in NODE_TAGS:
            return PreReqTree(self.deserialise_node(payload))
        logger.debug("Migrating legacy prerequisite list: %s", payload)
        return self.deserialise_legacy_prereqs(payload)

    def deserialise_credits(self, text: str) -> int:
        credits = parse_credits(text)
        if credits == INVALID_CREDITS:
            raise InvalidCreditsError(f"Unable to parse module credit: {text!r}")
        return credits

    def deserialise_module(self, fields: list) -> Module:
        if len(fields) != MODULE_FIELD_COUNT:
            raise MalformedRecordError(
                f"Module record needs {MODULE_FIELD_COUNT} fields, got {len(fields)}"
            )

        code, name, credits_text, module_type, prereq_payload = fields
        credits = self.deserialise_credits(credits_text)
        prerequisites = self.deserialise_prereq_tree(prereq_payload)

        try:
            return Module(code, name, credits, module_type, prerequisites)
        except ValueError as e:
            raise MalformedRecordError(str(e)) from e

    def deserialise_major(self, fields: list, catalog: dict) -> Major:
        """
        Build a Major, keeping only codes found in ``catalog``.

        Fields after the abbreviation are all comma-joined code lists.
        """
        if len(fields) < MAJOR_MIN_FIELD_COUNT:
            raise MalformedRecordError(
                f"Major record needs at least {MAJOR_MIN_FIELD_COUNT} fields, got {len(fields)}"
            )

        name, abbreviation = fields[0], fields[1]
        codes = [
            code.strip().upper()
            for joined in fields[2:]
            for code in joined.split(MAJOR_CODE_SEPARATOR)
            if code.strip()
        ]

        modules = []
        for code in codes:
            if code in catalog:
                modules.append(catalog[code])
            else:
                logger.debug("Major %s references unknown module %s, dropped", name, code)

        try:
            return Major(name, abbreviation, tuple(modules))
        except ValueError as e:
            raise MalformedRecordError(str(e)) from e
