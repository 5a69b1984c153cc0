"""Relevance ranking of stored code entries.

Ranking is a pipeline of small steps: a candidate predicate decides whether
an entry matches the query at all, optional project and kind filters narrow
the candidates, a tiered score is assigned, and the survivors are ordered by
score then name before the limit is applied.
"""

import dataclasses
from collections.abc import Iterable

from devmem.models import PersistedEntry

NAME_SCORE = 100
KEYWORD_SCORE = 50
SNIPPET_SCORE = 25
FALLBACK_SCORE = 10


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").lower()


def matches_query(entry: PersistedEntry, query: str, include_code: bool = False) -> bool:
    """Case-insensitive substring test over the searchable fields.

    Args:
        entry: Stored entry to test
        query: Free-text query; an empty query matches every entry
        include_code: Also look inside the full code, not only its snippet

    Returns:
        True if the entry is a search candidate
    """
    needle = query.lower()
    if _contains(entry.name, needle) or _contains(entry.keywords, needle):
        return True
    if _contains(entry.snippet, needle):
        return True
    return include_code and _contains(entry.raw_text, needle)


def score_entry(entry: PersistedEntry, query: str) -> int:
    """Score a candidate by the first field the query is found in.

    Tiers are name (100), keywords (50), snippet (25) and anything else (10).
    The last tier only applies to matches beyond the snippet.
    """
    needle = query.lower()
    if _contains(entry.name, needle):
        return NAME_SCORE
    if _contains(entry.keywords, needle):
        return KEYWORD_SCORE
    if _contains(entry.snippet, needle):
        return SNIPPET_SCORE
    return FALLBACK_SCORE


def passes_filters(
    entry: PersistedEntry, project: str | None = None, kind: str | None = None
) -> bool:
    if project and entry.project_name != project:
        return False
    if kind and entry.kind != kind:
        return False
    return True


def sort_key(entry: PersistedEntry) -> tuple[int, str]:
    return (-entry.relevance, entry.name or "")


def rank_entries(
    entries: Iterable[PersistedEntry],
    query: str,
    *,
    project: str | None = None,
    kind: str | None = None,
    limit: int | None = None,
    include_code: bool = False,
) -> list[PersistedEntry]:
    """Filter, score and order entries for a query.

    Args:
        entries: Entries to rank
        query: Free-text query
        project: Keep only entries of this project
        kind: Keep only entries of this kind
        limit: Maximum number of results, applied after sorting
        include_code: Let matches inside the full code make an entry a candidate

    Returns:
        Copies of the matching entries with ``relevance`` set, best first
    """
    ranked = [
        dataclasses.replace(entry, relevance=score_entry(entry, query))
        for entry in entries
        if passes_filters(entry, project, kind) and matches_query(entry, query, include_code)
    ]
    ranked.sort(key=sort_key)
    if limit is not None:
        ranked = ranked[: max(limit, 0)]
    return ranked
