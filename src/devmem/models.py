"""Data models for devmem."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class UnitKind(str, Enum):
    """Kind of code unit produced by extraction."""

    FUNCTION = "function"
    CLASS = "class"
    PATTERN = "pattern"


@dataclass
class CodeUnit:
    """A function, class or pattern candidate cut out of one source file.

    Attributes:
        kind: What the unit looks like
        name: Identifier of the unit, None for patterns
        raw_text: Verbatim source slice
        snippet: Display prefix of raw_text
        line_start: 1-based line where the unit starts
        line_end: line_start plus the number of newlines in raw_text
        keywords: Space-joined search tokens derived from raw_text
    """

    kind: UnitKind
    name: str | None
    raw_text: str
    snippet: str
    line_start: int
    line_end: int
    keywords: str


@dataclass
class ExtractionResult:
    """Everything the extractor found in one file."""

    functions: list[CodeUnit] = field(default_factory=list)
    classes: list[CodeUnit] = field(default_factory=list)
    patterns: list[str] = field(default_factory=list)

    @property
    def units(self) -> list[CodeUnit]:
        return self.functions + self.classes


@dataclass
class Project:
    """An indexed project.

    Attributes:
        id: Row identity
        name: Unique project name
        path: Root directory the project was indexed from
        file_count: Number of files processed by the last index run
        indexed_at: When the last index run started (UTC)
    """

    id: int
    name: str
    path: str
    file_count: int
    indexed_at: datetime


@dataclass
class PersistedEntry:
    """A stored code unit, joined with the name of its project."""

    id: int
    project_id: int
    project_name: str
    file_path: str
    name: str | None
    kind: str
    raw_text: str
    snippet: str
    line_start: int
    line_end: int
    keywords: str
    relevance: int = 0


@dataclass
class IndexResult:
    """Counters reported after indexing one project."""

    files_indexed: int = 0
    functions_found: int = 0
    classes_found: int = 0
    patterns_extracted: int = 0


@dataclass
class IndexStats:
    """Totals across every indexed project."""

    total_projects: int
    total_files: int
    total_functions: int
    total_classes: int
    total_patterns: int
    total_lines: int
