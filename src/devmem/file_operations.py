"""File discovery and reading for project indexing."""

import logging
import os
import pathlib

import pathspec

from devmem.constants import ALWAYS_IGNORE_PATTERNS
from devmem.language_detection import is_indexable

logger = logging.getLogger(__name__)


def split_patterns(exclude: str | None) -> list[str]:
    """Split a comma-separated exclusion list, dropping empty items."""
    if not exclude:
        return []
    return [pattern.strip() for pattern in exclude.split(",") if pattern.strip()]


def get_combined_spec(exclude: str | list[str] | None = None) -> pathspec.GitIgnoreSpec:
    """Combines ALWAYS_IGNORE_PATTERNS with caller-supplied exclusion globs.

    Args:
        exclude: Comma-separated string or list of gitignore-style patterns

    Returns:
        GitIgnoreSpec matching every excluded path
    """
    extra = split_patterns(exclude) if isinstance(exclude, str) else list(exclude or [])
    all_patterns = list(ALWAYS_IGNORE_PATTERNS) + extra
    return pathspec.GitIgnoreSpec.from_lines(all_patterns)


def collect_files(
    start_path: str | pathlib.Path,
    recursive: bool = True,
    exclude: str | list[str] | None = None,
) -> list[str]:
    """Collect the indexable files under a project root.

    Directories matched by the exclusion PathSpec are pruned; files must have an
    indexable extension and must not be excluded themselves.

    Args:
        start_path: Project root directory
        recursive: Descend into subdirectories
        exclude: Extra exclusion patterns on top of the defaults

    Returns:
        Sorted-walk list of POSIX paths relative to start_path

    Raises:
        FileNotFoundError: If start_path is not a directory
    """
    root_path = pathlib.Path(start_path)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Directory not found: {start_path}")

    spec = get_combined_spec(exclude)
    files_to_process = []

    for root, dirs, files in os.walk(root_path, topdown=True):
        current = pathlib.Path(root)
        if not recursive:
            dirs.clear()

        # Prune ignored directories; trailing slash so "build/" style patterns match
        for d in sorted(dirs):
            relative_dir = (current / d).relative_to(root_path).as_posix() + "/"
            if spec.match_file(relative_dir):
                dirs.remove(d)
        dirs.sort()

        for filename in sorted(files):
            relative_file = (current / filename).relative_to(root_path).as_posix()
            if spec.match_file(relative_file):
                continue
            if is_indexable(relative_file):
                files_to_process.append(relative_file)

    logger.debug("Collected %d files under %s", len(files_to_process), root_path)
    return files_to_process


def read_source(file_path: str | pathlib.Path) -> str:
    """Read a source file as UTF-8, replacing undecodable bytes.

    OSError propagates to the caller.
    """
    with open(file_path, encoding="utf-8", errors="replace") as f:
        return f.read()
