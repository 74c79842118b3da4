"""
Prerequisite Dependency Graph.

This module derives the forward adjacency view of the catalog:
prerequisite code -> modules that list it as a prerequisite.
"""

import logging

from ..models import normalize_code

logger = logging.getLogger(__name__)


def build_dependency_graph(catalog: dict) -> dict:
    """
    Build the adjacency mapping for ``catalog`` (code -> Module).

    ALGORITHM:
    ----------
    1. Every catalog code becomes a key with an empty dependent list.
    2. Each module's prerequisites are flattened into ALL-of groups; for
       every code in every group, the module's code is appended to that
       code's list. Codes outside the catalog are created as keys on demand.

    ORDERING:
    ---------
    Dependent lists follow catalog iteration order. A prerequisite that
    appears in two ALL-of groups of the same module produces two entries:
        X = (A AND B) OR (A AND C)  ->  graph["A"] == ["X", "X"]

    No cycle detection: a cyclic catalog simply yields a cyclic graph.

    Returns a new dict on every call; nothing in ``catalog`` is modified.
    """
    graph = {code: [] for code in catalog}

    for module in catalog.values():
        for combo in module.prerequisites.flatten_groups():
            for prereq in combo:
                graph.setdefault(prereq, []).append(module.code)

    logger.debug("Built dependency graph: %d nodes, %d edges",
                 len(graph), sum(len(v) for v in graph.values()))
    return graph


class PrereqGraph:
    """
    Prerequisite dependency graph over a module catalog.

    Each module is a node; an edge A -> B means A must be taken before B.
    The graph is a disposable view: build a new one whenever the catalog
    changes rather than updating this one.

    Usage:
        graph = PrereqGraph(catalog)
        graph.dependents_of("CS1010")  # ["CS2030", "CS2040", ...]
    """

    def __init__(self, catalog: dict):
        self._graph = build_dependency_graph(catalog)

    @property
    def graph(self) -> dict:
        """A copy of the adjacency mapping (module -> list of dependents)."""
        return {code: list(dependents) for code, dependents in self._graph.items()}

    def nodes(self) -> list:
        return list(self._graph)

    def dependents_of(self, code: str) -> list:
        """Modules that list ``code`` as a prerequisite; empty if unknown."""
        return list(self._graph.get(normalize_code(code), []))

    def __contains__(self, code):
        return normalize_code(code) in self._graph

    def __len__(self):
        return len(self._graph)

    def describe(self) -> list:
        """One "A → [B, C]" line per node, in graph order."""
        return [f"{code} → [{', '.join(deps)}]" for code, deps in self._graph.items()]
