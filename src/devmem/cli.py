"""Command-line interface for devmem."""

import argparse
import logging
import sys

from devmem.config import get_db_path
from devmem.constants import DEFAULT_EXPORT_FILE, DEFAULT_SEARCH_LIMIT
from devmem.indexer import index_project, update_all_projects, update_project
from devmem.models import IndexResult, UnitKind
from devmem.output_generators import export_context
from devmem.storage import IndexStore, NotFoundError


def print_index_result(result: IndexResult) -> None:
    print(f"  Files: {result.files_indexed}")
    print(f"  Functions: {result.functions_found}")
    print(f"  Classes: {result.classes_found}")
    print(f"  Patterns: {result.patterns_extracted}")


def cmd_index(store: IndexStore, args: argparse.Namespace) -> None:
    print("🔄 Indexing...")
    result = index_project(
        store,
        args.path,
        name=args.name,
        recursive=args.recursive,
        exclude=args.exclude,
        workers=args.workers,
        show_progress=True,
    )
    print("✅ Indexed project")
    print_index_result(result)


def cmd_search(store: IndexStore, args: argparse.Namespace) -> None:
    results = store.search(
        args.query,
        project=args.project,
        kind=args.type,
        limit=args.limit,
        include_code=args.deep,
    )
    if not results:
        print("⚠ No results found")
        return

    print(f"Found {len(results)} result(s):\n")
    for i, entry in enumerate(results, start=1):
        print(f"{i}. {entry.name} [#{entry.id}]")
        print(f"   {entry.project_name} • {entry.file_path}:{entry.line_start}")
        print(f"   Type: {entry.kind} • Relevance: {entry.relevance}")
        print()
        print("   " + entry.snippet)
        print()


def cmd_show(store: IndexStore, args: argparse.Namespace) -> None:
    entry = store.get_code_entry(args.id)
    print("Full Code:\n")
    print(entry.raw_text)


def cmd_list(store: IndexStore, args: argparse.Namespace) -> None:
    projects = store.get_projects()
    if not projects:
        print("⚠ No projects indexed yet")
        print("Run `devmem index <path>` to get started")
        return

    print("Indexed Projects:\n")
    for project in projects:
        print(f"• {project.name}")
        print(f"  {project.path}")
        print(f"  {project.file_count} files • Indexed {project.indexed_at.strftime('%Y-%m-%d')}")
        print()


def cmd_update(store: IndexStore, args: argparse.Namespace) -> None:
    if args.project:
        print(f"🔄 Updating {args.project}...")
        update_project(store, args.project, show_progress=True)
        print("✅ Project updated")
    else:
        print("🔄 Updating all projects...")
        update_all_projects(store, show_progress=True)
        print("✅ All projects updated")


def cmd_remove(store: IndexStore, args: argparse.Namespace) -> None:
    store.remove_project(args.project)
    print("✅ Project removed")


def cmd_stats(store: IndexStore, args: argparse.Namespace) -> None:
    stats = store.get_stats()
    print("DevMem Statistics:\n")
    print(f"Projects: {stats.total_projects}")
    print(f"Files Indexed: {stats.total_files}")
    print(f"Functions: {stats.total_functions}")
    print(f"Classes: {stats.total_classes}")
    print(f"Patterns: {stats.total_patterns}")
    print(f"Total Lines: {stats.total_lines:,}")


def cmd_export(store: IndexStore, args: argparse.Namespace) -> None:
    output_path = export_context(store, args.output, project=args.project)
    print(f"✅ Context exported to {output_path}")
    print("  Use this file as context for AI assistants")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devmem",
        description="Cross-project memory for AI coding assistants.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--db", help="Path to the index database (default: ~/.devmem/index.db).")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed processing information.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index = subparsers.add_parser("index", help="Index a project or directory.")
    index.add_argument("path", help="Project root directory.")
    index.add_argument("-n", "--name", help="Project name (defaults to the directory name).")
    index.add_argument(
        "-r",
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Index subdirectories.",
    )
    index.add_argument("--exclude", help="Extra exclude patterns (comma-separated).")
    index.add_argument(
        "-w",
        "--workers",
        type=int,
        default=1,
        help="Number of processes used to extract code units.",
    )
    index.set_defaults(handler=cmd_index)

    search = subparsers.add_parser(
        "search", help="Search for code patterns across all indexed projects."
    )
    search.add_argument("query", help="Text to search for.")
    search.add_argument("-p", "--project", help="Limit to a specific project.")
    search.add_argument(
        "-t", "--type", choices=[kind.value for kind in UnitKind], help="Code unit type."
    )
    search.add_argument(
        "-l", "--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Number of results."
    )
    search.add_argument(
        "--deep",
        action="store_true",
        help="Also match inside full code bodies, not only snippets.",
    )
    search.set_defaults(handler=cmd_search)

    show = subparsers.add_parser("show", help="Show full code for a specific result.")
    show.add_argument("id", type=int, help="Entry id printed by search.")
    show.set_defaults(handler=cmd_show)

    list_cmd = subparsers.add_parser("list", help="List all indexed projects.")
    list_cmd.set_defaults(handler=cmd_list)

    update = subparsers.add_parser("update", help="Re-index a project or all projects.")
    update.add_argument("project", nargs="?", help="Project to re-index (default: all).")
    update.set_defaults(handler=cmd_update)

    remove = subparsers.add_parser("remove", help="Remove a project from the index.")
    remove.add_argument("project", help="Project name.")
    remove.set_defaults(handler=cmd_remove)

    stats = subparsers.add_parser("stats", help="Show indexing statistics.")
    stats.set_defaults(handler=cmd_stats)

    export = subparsers.add_parser("export", help="Export the index as markdown for AI context.")
    export.add_argument("-p", "--project", help="Export a specific project.")
    export.add_argument("-o", "--output", default=DEFAULT_EXPORT_FILE, help="Output file.")
    export.set_defaults(handler=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the devmem CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with IndexStore(get_db_path(args.db)) as store:
            args.handler(store, args)
    except (NotFoundError, OSError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
