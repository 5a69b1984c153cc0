"""Markdown export of indexed code for AI assistant context."""

import logging
import pathlib
import re

from devmem.constants import EXPORT_FETCH_LIMIT, EXPORT_GROUP_LIMIT
from devmem.language_detection import get_language_from_path
from devmem.models import PersistedEntry, Project, UnitKind
from devmem.storage import IndexStore

logger = logging.getLogger(__name__)

GROUPS = (
    (UnitKind.FUNCTION, "Functions"),
    (UnitKind.CLASS, "Classes"),
)


def generate_gfm_anchor(heading_text: str) -> str:
    """Generate a GitHub-Flavored Markdown anchor from heading text.

    Args:
        heading_text: The heading text (without # prefix)

    Returns:
        Anchor slug matching GFM behavior

    Examples:
        >>> generate_gfm_anchor("Project: my_api")
        'project-my-api'
    """
    slug = heading_text.replace("`", "").lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    return slug.strip("-")


def format_entry(entry: PersistedEntry) -> str:
    """Render one entry as a heading, its file and its fenced snippet."""
    language = get_language_from_path(entry.file_path) or ""
    section = f"#### {entry.name}\n\n"
    section += f"File: `{entry.file_path}`\n\n"
    section += f"```{language}\n"
    section += entry.snippet
    section += "\n```\n\n"
    return section


def generate_project_section(store: IndexStore, project: Project) -> str:
    """Render one project with its functions, then its classes.

    Each group shows its full count but lists at most EXPORT_GROUP_LIMIT
    entries, in search order.
    """
    entries = store.search("", project=project.name, limit=EXPORT_FETCH_LIMIT)

    section = f"## Project: {project.name}\n\n"
    section += f"Path: {project.path}\n\n"

    for kind, title in GROUPS:
        group = [entry for entry in entries if entry.kind == kind.value]
        if not group:
            continue
        section += f"### {title} ({len(group)})\n\n"
        for entry in group[:EXPORT_GROUP_LIMIT]:
            section += format_entry(entry)

    section += "\n---\n\n"
    return section


def generate_context_markdown(store: IndexStore, project: str | None = None) -> str:
    """Build the context document for one project or for all of them.

    Raises:
        NotFoundError: If a project name is given but not indexed
    """
    projects = [store.require_project(project)] if project else store.get_projects()

    markdown = "# DevMem Code Context\n\n"
    markdown += "This file contains indexed code patterns from your projects.\n"
    markdown += "Use it as context when working with AI coding assistants.\n\n"

    if len(projects) > 1:
        markdown += "## Table of Contents\n\n"
        for item in projects:
            anchor = generate_gfm_anchor(f"Project: {item.name}")
            markdown += f"- [{item.name}](#{anchor})\n"
        markdown += "\n"

    for item in projects:
        markdown += generate_project_section(store, item)

    return markdown


def export_context(
    store: IndexStore, output_file: str | pathlib.Path, project: str | None = None
) -> pathlib.Path:
    """Write the context document to a file.

    Args:
        store: Open index store
        output_file: Destination markdown path
        project: Export only this project

    Returns:
        Resolved path of the written file
    """
    markdown = generate_context_markdown(store, project)

    output_path = pathlib.Path(output_file).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as md_file:
        md_file.write(markdown)

    logger.info("Exported context to %s", output_path)
    return output_path
