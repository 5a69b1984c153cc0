"""devmem: cross-project code memory for AI coding assistants.

This package scans local projects, extracts function- and class-like code
units with surface-syntax heuristics, stores them in SQLite and serves
keyword search and markdown export over the result.
"""

from devmem.cli import main
from devmem.models import CodeUnit, PersistedEntry, Project
from devmem.storage import IndexStore, NotFoundError

__version__ = "1.0.0"
__all__ = ["main", "CodeUnit", "PersistedEntry", "Project", "IndexStore", "NotFoundError"]
