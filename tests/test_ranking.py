"""Tests for the candidate predicate, relevance tiers and ordering."""

from devmem.models import PersistedEntry
from devmem.ranking import matches_query, passes_filters, rank_entries, score_entry


def make_entry(
    name: str | None,
    keywords: str = "",
    snippet: str = "",
    raw_text: str | None = None,
    project: str = "api",
    kind: str = "function",
    entry_id: int = 1,
) -> PersistedEntry:
    return PersistedEntry(
        id=entry_id,
        project_id=1,
        project_name=project,
        file_path="src/app.ts",
        name=name,
        kind=kind,
        raw_text=snippet if raw_text is None else raw_text,
        snippet=snippet,
        line_start=1,
        line_end=1,
        keywords=keywords,
    )


def test_name_match_outranks_keyword_match() -> None:
    login = make_entry("login", keywords="auth token", entry_id=2)
    auth_login = make_entry("authLogin", keywords="token session", entry_id=1)

    results = rank_entries([login, auth_login], "auth")

    assert [r.name for r in results] == ["authLogin", "login"]
    assert [r.relevance for r in results] == [100, 50]


def test_tiers_first_match_wins() -> None:
    assert score_entry(make_entry("parseToken", keywords="token", snippet="token"), "token") == 100
    assert score_entry(make_entry("parse", keywords="token", snippet="token"), "token") == 50
    assert score_entry(make_entry("parse", keywords="input", snippet="token()"), "token") == 25
    assert score_entry(make_entry("parse", keywords="input", snippet="x"), "token") == 10


def test_matching_is_case_insensitive() -> None:
    entry = make_entry("AuthService")

    assert matches_query(entry, "authservice")
    assert score_entry(entry, "AUTH") == 100


def test_equal_scores_sort_by_name() -> None:
    entries = [make_entry("beta"), make_entry("alpha"), make_entry("gamma")]

    results = rank_entries(entries, "a")

    assert [r.name for r in results] == ["alpha", "beta", "gamma"]


def test_limit_applies_after_sorting() -> None:
    entries = [
        make_entry("zeta", keywords="cache"),
        make_entry("cacheGet"),
        make_entry("alpha", snippet="cache hit"),
    ]

    results = rank_entries(entries, "cache", limit=2)

    assert [(r.name, r.relevance) for r in results] == [("cacheGet", 100), ("zeta", 50)]


def test_project_and_kind_filters_compose() -> None:
    entries = [
        make_entry("UserRepo", project="api", kind="class"),
        make_entry("userRepo", project="api", kind="function"),
        make_entry("UserRepo", project="web", kind="class"),
    ]

    results = rank_entries(entries, "user", project="api", kind="class")

    assert len(results) == 1
    assert (results[0].project_name, results[0].kind) == ("api", "class")
    assert not passes_filters(entries[2], project="api")
    assert passes_filters(entries[2])


def test_empty_query_matches_everything() -> None:
    entries = [make_entry("b"), make_entry(None, kind="pattern"), make_entry("a")]

    results = rank_entries(entries, "")

    assert len(results) == 3
    assert all(r.relevance == 100 for r in results)
    assert [r.name for r in results] == [None, "a", "b"]


def test_non_candidates_are_dropped() -> None:
    results = rank_entries([make_entry("login", keywords="user")], "payment")

    assert results == []


def test_fallback_tier_only_for_matches_beyond_snippet() -> None:
    raw_text = "function process() {" + " " * 250 + "legacyHook(); }"
    entry = make_entry("process", keywords="process", snippet=raw_text[:200], raw_text=raw_text)

    assert not matches_query(entry, "legacyhook")
    assert rank_entries([entry], "legacyhook") == []

    results = rank_entries([entry], "legacyhook", include_code=True)
    assert [r.relevance for r in results] == [10]


def test_ranking_leaves_inputs_untouched() -> None:
    entry = make_entry("token")

    rank_entries([entry], "token")

    assert entry.relevance == 0
