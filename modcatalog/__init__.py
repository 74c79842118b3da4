"""
Module Catalog Package
======================

Catalogs university course modules and the prerequisite logic governing
when each may be taken, for planning tools that validate or generate study
sequences.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ALGORITHM LAYER                                  │
│        (Pure logic - returns data structures, NO UI/printing)           │
│                                                                         │
│  ┌─────────────┐  ┌──────────────────────┐  ┌────────────────────────┐  │
│  │ PreReqTree  │  │ Serialiser           │  │ PrereqGraph            │  │
│  │ (AND/OR     │  │ Deserialiser         │  │ (prereq -> dependents) │  │
│  │  tree)      │  │ CatalogLoader (I/O)  │  │                        │  │
│  └─────────────┘  └──────────────────────┘  └────────────────────────┘  │
│                                                                         │
│  ┌───────────────────────────────────────────────────────────────────┐  │
│  │ NusModsClient (remote records -> Module)                          │  │
│  └───────────────────────────────────────────────────────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│                 TerminalDisplay (the only printer)                       │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                           Catalog                                        │
│          (Orchestrator - connects algorithm to presentation)            │
└─────────────────────────────────────────────────────────────────────────┘

DATA FLOW
---------
Load:  text file -> framed fields -> Module objects -> catalog map -> PrereqGraph
Save:  catalog map -> framed lines -> temp file -> replace

PACKAGE STRUCTURE
-----------------

modcatalog/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── exceptions.py        # Error kinds
├── catalog.py           # Catalog orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Prerequisite tree, Module, Major
├── data/                # Codec, file storage, catalog load/save
├── engines/             # Dependency graph
├── remote/              # NUSMods client
└── ui/                  # Terminal display

USAGE
-----

    from modcatalog import load_modules, load_majors, build_dependency_graph

    catalog, warnings = load_modules("data/modules.txt")
    majors, _ = load_majors("data/majors.txt", catalog)
    graph = build_dependency_graph(catalog)

Running from command line:

    python -m modcatalog modules

"""

# Version
__version__ = "1.0.0"

# Main exports
from .catalog import Catalog
from .cli import main

# Model exports
from .models import (
    Combinator,
    Leaf,
    Group,
    PreReqTree,
    Module,
    Major,
)

# Persistence exports
from .data import (
    Serialiser,
    Deserialiser,
    Storage,
    CatalogLoader,
    LoadResult,
    load_modules,
    load_majors,
    save_catalog,
    save_majors,
)

# Engine exports
from .engines import PrereqGraph, build_dependency_graph

# Remote exports
from .remote import NusModsClient, module_from_remote

# UI exports
from .ui import TerminalDisplay

# Error exports
from .exceptions import (
    CatalogError,
    MalformedRecordError,
    InvalidCreditsError,
    CatalogIOError,
)

# Configuration exports
from .config import (
    DATA_DIR,
    MIN_CREDITS,
    MAX_CREDITS,
    parse_credits,
)

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "Catalog",
    "main",
    # Models
    "Combinator",
    "Leaf",
    "Group",
    "PreReqTree",
    "Module",
    "Major",
    # Persistence
    "Serialiser",
    "Deserialiser",
    "Storage",
    "CatalogLoader",
    "LoadResult",
    "load_modules",
    "load_majors",
    "save_catalog",
    "save_majors",
    # Engines
    "PrereqGraph",
    "build_dependency_graph",
    # Remote
    "NusModsClient",
    "module_from_remote",
    # UI
    "TerminalDisplay",
    # Errors
    "CatalogError",
    "MalformedRecordError",
    "InvalidCreditsError",
    "CatalogIOError",
    # Config
    "DATA_DIR",
    "MIN_CREDITS",
    "MAX_CREDITS",
    "parse_credits",
]
