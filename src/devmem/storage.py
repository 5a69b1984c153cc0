"""SQLite persistence for projects and extracted code entries."""

import contextlib
import logging
import pathlib
import sqlite3
from collections.abc import Iterator
from datetime import datetime, timezone

from devmem.models import CodeUnit, IndexStats, PersistedEntry, Project
from devmem.ranking import rank_entries

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL,
    path TEXT NOT NULL,
    file_count INTEGER DEFAULT 0,
    indexed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS code_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL,
    file_path TEXT NOT NULL,
    name TEXT,
    type TEXT NOT NULL,
    code TEXT NOT NULL,
    snippet TEXT NOT NULL,
    line_start INTEGER NOT NULL,
    line_end INTEGER NOT NULL,
    keywords TEXT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_project_id ON code_entries(project_id);
CREATE INDEX IF NOT EXISTS idx_type ON code_entries(type);
CREATE INDEX IF NOT EXISTS idx_name ON code_entries(name);
CREATE INDEX IF NOT EXISTS idx_keywords ON code_entries(keywords);
"""

ENTRY_COLUMNS = """
    ce.id, ce.project_id, p.name AS project_name, ce.file_path, ce.name,
    ce.type, ce.code, ce.snippet, ce.line_start, ce.line_end, ce.keywords
"""


class NotFoundError(LookupError):
    """Raised when a project name or entry id is not in the index."""


def _row_to_project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["id"],
        name=row["name"],
        path=row["path"],
        file_count=row["file_count"] or 0,
        indexed_at=datetime.fromisoformat(row["indexed_at"]),
    )


def _row_to_entry(row: sqlite3.Row) -> PersistedEntry:
    return PersistedEntry(
        id=row["id"],
        project_id=row["project_id"],
        project_name=row["project_name"],
        file_path=row["file_path"],
        name=row["name"],
        kind=row["type"],
        raw_text=row["code"],
        snippet=row["snippet"],
        line_start=row["line_start"],
        line_end=row["line_end"],
        keywords=row["keywords"],
    )


class IndexStore:
    """Handle on the devmem database.

    Open one store per command and close it when the command is done; the
    class is a context manager for that purpose.
    """

    def __init__(self, db_path: str | pathlib.Path):
        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        self.conn.executescript(SCHEMA)
        logger.debug("Opened index at %s", self.db_path)

    def __enter__(self) -> "IndexStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    @contextlib.contextmanager
    def transaction(self) -> Iterator["IndexStore"]:
        """Commit everything done inside the block, or nothing on error."""
        try:
            yield self
        except BaseException:
            self.conn.rollback()
            raise
        self.conn.commit()

    # --- Projects ---

    def add_project(self, name: str, path: str) -> int:
        """Create the project, or refresh it while keeping its id.

        Returns:
            The project id
        """
        indexed_at = datetime.now(timezone.utc).isoformat()
        self.conn.execute(
            """
            INSERT INTO projects (name, path, indexed_at) VALUES (?, ?, ?)
            ON CONFLICT(name) DO UPDATE SET
                path = excluded.path,
                indexed_at = excluded.indexed_at
            """,
            (name, path, indexed_at),
        )
        row = self.conn.execute("SELECT id FROM projects WHERE name = ?", (name,)).fetchone()
        return row["id"]

    def update_project_file_count(self, project_id: int, count: int) -> None:
        self.conn.execute("UPDATE projects SET file_count = ? WHERE id = ?", (count, project_id))

    def get_projects(self) -> list[Project]:
        rows = self.conn.execute("SELECT * FROM projects ORDER BY indexed_at DESC").fetchall()
        return [_row_to_project(row) for row in rows]

    def get_project(self, name: str) -> Project | None:
        row = self.conn.execute("SELECT * FROM projects WHERE name = ?", (name,)).fetchone()
        return _row_to_project(row) if row else None

    def require_project(self, name: str) -> Project:
        project = self.get_project(name)
        if project is None:
            raise NotFoundError(f"Project not found: {name}")
        return project

    def remove_project(self, name: str) -> None:
        """Delete a project together with all of its entries."""
        project = self.require_project(name)
        with self.transaction():
            self.conn.execute("DELETE FROM code_entries WHERE project_id = ?", (project.id,))
            self.conn.execute("DELETE FROM projects WHERE id = ?", (project.id,))
        logger.info("Removed project %s", name)

    # --- Entries ---

    def clear_project_entries(self, project_id: int) -> None:
        self.conn.execute("DELETE FROM code_entries WHERE project_id = ?", (project_id,))

    def add_code_entry(self, project_id: int, file_path: str, unit: CodeUnit) -> int:
        cursor = self.conn.execute(
            """
            INSERT INTO code_entries (
                project_id, file_path, name, type, code, snippet,
                line_start, line_end, keywords
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                project_id,
                file_path,
                unit.name,
                unit.kind.value,
                unit.raw_text,
                unit.snippet,
                unit.line_start,
                unit.line_end,
                unit.keywords,
            ),
        )
        return cursor.lastrowid

    def get_code_entry(self, entry_id: int) -> PersistedEntry:
        row = self.conn.execute(
            f"""
            SELECT {ENTRY_COLUMNS}
            FROM code_entries ce JOIN projects p ON ce.project_id = p.id
            WHERE ce.id = ?
            """,
            (entry_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError(f"Code entry not found: {entry_id}")
        return _row_to_entry(row)

    def iter_entries(
        self, project: str | None = None, kind: str | None = None
    ) -> Iterator[PersistedEntry]:
        """Stream stored entries, optionally limited to a project and kind."""
        sql = f"""
            SELECT {ENTRY_COLUMNS}
            FROM code_entries ce JOIN projects p ON ce.project_id = p.id
            WHERE 1 = 1
        """
        params: list = []
        if project:
            sql += " AND p.name = ?"
            params.append(project)
        if kind:
            sql += " AND ce.type = ?"
            params.append(kind)

        for row in self.conn.execute(sql, params):
            yield _row_to_entry(row)

    def search(
        self,
        query: str,
        *,
        project: str | None = None,
        kind: str | None = None,
        limit: int | None = None,
        include_code: bool = False,
    ) -> list[PersistedEntry]:
        """Relevance-ranked search across stored entries.

        Args:
            query: Substring to look for; empty matches everything
            project: Restrict to one project name
            kind: Restrict to one unit kind
            limit: Maximum number of results
            include_code: Also match inside the full code

        Returns:
            Matching entries with ``relevance`` set, best first
        """
        return rank_entries(
            self.iter_entries(project, kind),
            query,
            project=project,
            kind=kind,
            limit=limit,
            include_code=include_code,
        )

    def get_stats(self) -> IndexStats:
        row = self.conn.execute(
            """
            SELECT
                COUNT(DISTINCT p.id) AS total_projects,
                (SELECT SUM(file_count) FROM projects) AS total_files,
                SUM(CASE WHEN ce.type = 'function' THEN 1 ELSE 0 END) AS total_functions,
                SUM(CASE WHEN ce.type = 'class' THEN 1 ELSE 0 END) AS total_classes,
                SUM(CASE WHEN ce.type = 'pattern' THEN 1 ELSE 0 END) AS total_patterns,
                SUM(ce.line_end - ce.line_start) AS total_lines
            FROM projects p
            LEFT JOIN code_entries ce ON p.id = ce.project_id
            """
        ).fetchone()
        return IndexStats(
            total_projects=row["total_projects"] or 0,
            total_files=row["total_files"] or 0,
            total_functions=row["total_functions"] or 0,
            total_classes=row["total_classes"] or 0,
            total_patterns=row["total_patterns"] or 0,
            total_lines=row["total_lines"] or 0,
        )
