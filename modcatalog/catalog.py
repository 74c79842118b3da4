"""
Catalog - Main Orchestrator.

This module contains the Catalog class that connects the persistence and
graph layers to the presentation layer.
"""

import logging
from pathlib import Path

from .config import DATA_DIR, MODULES_FILE, MAJORS_FILE, DEFAULT_ACAD_YEAR
from .data import CatalogLoader
from .engines import PrereqGraph
from .models import Module, normalize_code
from .remote import NusModsClient
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


class Catalog:
    """
    Main interface for the module catalog.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    1. Loads modules, then majors (majors resolve against loaded modules)
    2. Rebuilds the dependency graph whenever the module set changes
    3. Adds modules fetched from the remote catalog and saves the module file
    4. Hands results to the display layer

    State is replaced, never mutated in place: every load or add produces a
    new modules dict and a fresh PrereqGraph.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        catalog = Catalog()            # uses DATA_DIR
        catalog.load()
        catalog.graph.dependents_of("CS1010")
        catalog.add_modules(catalog.client.fetch_modules(["CS2113"]))
        catalog.save()
    """

    def __init__(self, data_dir=None, acad_year: str = DEFAULT_ACAD_YEAR,
                 client: NusModsClient = None, display=None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.modules_path = self.data_dir / MODULES_FILE
        self.majors_path = self.data_dir / MAJORS_FILE

        self.loader = CatalogLoader()
        self._client = client
        self.acad_year = acad_year
        self.display = display or TerminalDisplay()

        self.modules = {}
        self.majors = {}
        self.warnings = []
        self.graph = PrereqGraph(self.modules)

    @property
    def client(self) -> NusModsClient:
        # Created lazily: most commands never touch the network
        if self._client is None:
            self._client = NusModsClient(self.acad_year)
        return self._client

    def load(self) -> list:
        """Load modules then majors; returns every warning raised along the way."""
        modules, module_warnings = self.loader.load_modules(self.modules_path)
        majors, major_warnings = self.loader.load_majors(self.majors_path, modules)

        self.modules = modules
        self.majors = majors
        self.warnings = module_warnings + major_warnings
        self.graph = PrereqGraph(self.modules)
        return self.warnings

    def add_modules(self, modules: dict):
        """Merge ``modules`` into the catalog (replacing same codes) and rebuild the graph."""
        merged = dict(self.modules)
        merged.update(modules)
        self.modules = merged
        self.graph = PrereqGraph(self.modules)
        logger.info("Catalog now holds %d modules", len(self.modules))

    def add_module(self, module: Module):
        self.add_modules({module.code: module})

    def save(self) -> list:
        """
        Save the module catalog; returns a warning if the file failed.

        The majors file is left alone. Majors are resolved against the
        catalog on load, so writing them back would drop every code the
        catalog did not hold at the time.
        """
        problem = self.loader.save_catalog(self.modules_path, self.modules)
        return [problem] if problem else []

    # ─────────────────────────────────────────────────────────────────────
    # Display helpers
    # ─────────────────────────────────────────────────────────────────────

    def show_modules(self):
        self.display.print_modules(self.modules)
        self.display.print_warnings(self.warnings)

    def show_majors(self):
        self.display.print_majors(self.majors)
        self.display.print_warnings(self.warnings)

    def show_graph(self, code: str = None):
        self.display.print_graph(self.graph.graph, code)

    def fetch_and_add(self, codes, module_type: str, save: bool = False) -> dict:
        """Fetch ``codes`` remotely, add what arrived, optionally save."""
        fetched = self.client.fetch_modules(codes, module_type)
        missing = [normalize_code(c) for c in codes if normalize_code(c) not in fetched]

        for module in fetched.values():
            self.display.print_module(module)
        for code in missing:
            self.display.print_error(f"Could not fetch {code}")

        if fetched:
            self.add_modules(fetched)
            if save:
                problems = self.save()
                if problems:
                    self.display.print_warnings(problems)
                else:
                    self.display.print_success(f"Saved {len(self.modules)} modules to {self.modules_path}")
        return fetched
