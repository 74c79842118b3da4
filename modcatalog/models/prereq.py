"""
Prerequisite expression models.

A prerequisite expression is a boolean AND/OR tree over module codes. It is
built fresh from text (the catalog file) or from the remote catalog's
``prereqTree`` object and never mutated afterwards.

Shape examples:
    "CS1010"                        -> Leaf("CS1010")
    "(CS1010 AND MA1521) OR CS1101" -> Group(ANY, [Group(ALL, [...]), Leaf(...)])
"""

import itertools
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..config import MAX_PREREQ_DEPTH

# Module codes are alphanumeric once normalized to upper case (e.g. "CS2113T")
MODULE_CODE_PATTERN = re.compile(r"^[A-Z0-9]+$")


def normalize_code(code: str) -> str:
    """Upper-case and strip a module code."""
    return str(code).strip().upper()


def is_valid_code(code: str) -> bool:
    return bool(MODULE_CODE_PATTERN.match(code))


class Combinator(Enum):
    """
    How a group combines its children.

    ALL: every child must be satisfied (one valid combination)
    ANY: any one child suffices
    """
    ALL = "all"
    ANY = "any"


@dataclass(frozen=True)
class Leaf:
    """A single required module code."""
    code: str

    def __post_init__(self):
        code = normalize_code(self.code)
        if not is_valid_code(code):
            raise ValueError(f"Invalid module code in prerequisite: {self.code!r}")
        object.__setattr__(self, "code", code)


@dataclass(frozen=True)
class Group:
    """
    A combinator over an ordered sequence of child nodes.

    A group with no children is a vacuously satisfied branch.
    """
    combinator: Combinator
    children: tuple = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.combinator, Combinator):
            raise ValueError(f"Group combinator must be a Combinator, got {self.combinator!r}")
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, (Leaf, Group)):
                raise ValueError(f"Group child must be a Leaf or Group, got {child!r}")
        object.__setattr__(self, "children", children)


Node = Union[Leaf, Group]


def node_depth(node: Node) -> int:
    """Nesting depth of a node: 1 for a leaf or an empty group."""
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(current, Group):
            stack.extend((child, depth + 1) for child in current.children)
    return deepest


def _flatten(node: Node) -> list:
    # Expands a node into disjunctive normal form: a list of ALL-of groups
    if isinstance(node, Leaf):
        return [[node.code]]

    if not node.children:
        return [[]]

    child_groups = [_flatten(child) for child in node.children]

    if node.combinator is Combinator.ANY:
        return [group for groups in child_groups for group in groups]

    combos = []
    for parts in itertools.product(*child_groups):
        combos.append([code for part in parts for code in part])
    return combos


def _satisfied(node: Node, completed: set) -> bool:
    if isinstance(node, Leaf):
        return node.code in completed
    if not node.children:
        return True
    if node.combinator is Combinator.ALL:
        return all(_satisfied(child, completed) for child in node.children)
    return any(_satisfied(child, completed) for child in node.children)


@dataclass(frozen=True)
class PreReqTree:
    """
    The full prerequisite expression owned by a Module.

    ``root`` is None when the module has no prerequisites.

    Usage:
        tree = PreReqTree.from_nested([["CS1010", "MA1521"], ["CS1101S"]])
        tree.flatten_groups()  # [["CS1010", "MA1521"], ["CS1101S"]]
    """
    root: Optional[Node] = None

    def __post_init__(self):
        if self.root is not None and not isinstance(self.root, (Leaf, Group)):
            raise ValueError(f"Prerequisite root must be a Leaf or Group, got {self.root!r}")
        if self.root is not None and node_depth(self.root) > MAX_PREREQ_DEPTH:
            raise ValueError(f"Prerequisite expression nests deeper than {MAX_PREREQ_DEPTH} levels")

    @classmethod
    def empty(cls) -> "PreReqTree":
        return cls(None)

    @classmethod
    def from_nested(cls, groups) -> "PreReqTree":
        """
        Build from a list of lists of codes.

        Each inner list is an ALL-of group; the outer list is the ANY-of
        combination over them. An empty outer list means no prerequisites.
        """
        groups = list(groups)
        if not groups:
            return cls.empty()
        return cls(Group(Combinator.ANY, tuple(
            Group(Combinator.ALL, tuple(Leaf(code) for code in group))
            for group in groups
        )))

    @classmethod
    def from_remote(cls, prereq_tree) -> "PreReqTree":
        """
        Build from the remote catalog's ``prereqTree`` value.

        The remote shape is either a code string (possibly carrying a
        ":D" minimum-grade suffix or a "%" wildcard), an {"and": [...]} or
        {"or": [...]} object, an {"nOf": [n, [...]]} object, or null.
        """
        if prereq_tree is None or prereq_tree == "" or prereq_tree == {}:
            return cls.empty()
        return cls(_node_from_remote(prereq_tree))

    def flatten_groups(self) -> list:
        """Return the ordered ALL-of groups (each an ordered list of codes)."""
        if self.root is None:
            return []
        return _flatten(self.root)

    def codes(self) -> list:
        """Every leaf code in tree order, duplicates included."""
        found = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            if isinstance(node, Leaf):
                found.append(node.code)
            else:
                stack.extend(reversed(node.children))
        return found

    def is_empty(self) -> bool:
        return not self.codes()

    def is_satisfied_by(self, completed) -> bool:
        """Check whether a set of completed module codes meets this expression."""
        if self.root is None:
            return True
        return _satisfied(self.root, {normalize_code(c) for c in completed})

    def __str__(self):
        if self.root is None:
            return "none"
        return _describe(self.root, top=True)


def _describe(node: Node, top: bool = False) -> str:
    if isinstance(node, Leaf):
        return node.code
    if not node.children:
        return "()"
    joiner = " AND " if node.combinator is Combinator.ALL else " OR "
    text = joiner.join(_describe(child) for child in node.children)
    if top or len(node.children) == 1:
        return text
    return f"({text})"


def _remote_children(key: str, children, depth: int) -> tuple:
    if not isinstance(children, list):
        raise ValueError(f"Prerequisite {key!r} must hold a list, got {children!r}")
    return tuple(_node_from_remote(child, depth + 1) for child in children)


def _node_from_remote(value, depth: int = 1) -> Node:
    if depth > MAX_PREREQ_DEPTH:
        raise ValueError(f"Prerequisite expression nests deeper than {MAX_PREREQ_DEPTH} levels")

    if isinstance(value, str):
        # "CS1010:D" -> "CS1010", "CS1010%" -> "CS1010"
        code = value.split(":", 1)[0].replace("%", "")
        return Leaf(code)

    if isinstance(value, dict):
        if len(value) != 1:
            raise ValueError(f"Prerequisite object must have exactly one key: {value!r}")
        key, children = next(iter(value.items()))
        if key == "and":
            return Group(Combinator.ALL, _remote_children(key, children, depth))
        if key == "or":
            return Group(Combinator.ANY, _remote_children(key, children, depth))
        if key == "nOf":
            # [count, [options...]]: any `count` of the options together
            if not isinstance(children, list) or len(children) != 2:
                raise ValueError(f"Prerequisite 'nOf' must be [count, options], got {children!r}")
            count, options = children
            nodes = _remote_children(key, options, depth)
            if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= len(nodes):
                raise ValueError(f"Prerequisite 'nOf' cannot pick {count!r} of {len(nodes)} options")
            return Group(Combinator.ANY, tuple(
                Group(Combinator.ALL, combo)
                for combo in itertools.combinations(nodes, count)
            ))
        raise ValueError(f"Unknown prerequisite combinator: {key!r}")

    raise ValueError(f"Unsupported prerequisite value: {value!r}")
