"""Project indexing: discovery, extraction and storage of code units."""

import logging
import os
import pathlib
from collections.abc import Iterator
from concurrent.futures import ProcessPoolExecutor

from tqdm import tqdm

from devmem.extraction import extract_units
from devmem.file_operations import collect_files, read_source
from devmem.models import ExtractionResult, IndexResult
from devmem.storage import IndexStore

logger = logging.getLogger(__name__)


def extract_file(file_path: str) -> ExtractionResult:
    """Read one file and extract its units."""
    return extract_units(read_source(file_path))


def _extract_all(paths: list[str], workers: int) -> Iterator[ExtractionResult]:
    if workers > 1 and len(paths) > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            yield from executor.map(extract_file, paths)
    else:
        for path in paths:
            yield extract_file(path)


def index_project(
    store: IndexStore,
    path: str | pathlib.Path,
    name: str | None = None,
    recursive: bool = True,
    exclude: str | list[str] | None = None,
    workers: int = 1,
    show_progress: bool = False,
) -> IndexResult:
    """Index (or re-index) a project directory.

    Previous entries of the project are dropped first, so the index always
    reflects exactly one run. The whole run is a single transaction: a file
    that cannot be read aborts it and leaves the previous index untouched.

    Args:
        store: Open index store
        path: Project root directory
        name: Project name, defaults to the directory's basename
        recursive: Descend into subdirectories
        exclude: Extra exclusion patterns
        workers: Number of processes used for extraction
        show_progress: Display a progress bar

    Returns:
        IndexResult with file and unit counters
    """
    root = pathlib.Path(path).resolve()
    project_name = name or root.name
    result = IndexResult()

    with store.transaction():
        project_id = store.add_project(project_name, str(root))
        store.clear_project_entries(project_id)

        files = collect_files(root, recursive=recursive, exclude=exclude)
        full_paths = [os.path.join(root, file) for file in files]

        extracted = _extract_all(full_paths, workers)
        with tqdm(total=len(files), desc="Indexing", unit="file", disable=not show_progress) as pbar:
            for file, found in zip(files, extracted):
                for unit in found.functions:
                    store.add_code_entry(project_id, file, unit)
                for unit in found.classes:
                    store.add_code_entry(project_id, file, unit)

                result.functions_found += len(found.functions)
                result.classes_found += len(found.classes)
                result.patterns_extracted += len(found.patterns)
                logger.debug(
                    "%s: %d functions, %d classes, %d patterns",
                    file,
                    len(found.functions),
                    len(found.classes),
                    len(found.patterns),
                )
                pbar.update(1)

        result.files_indexed = len(files)
        store.update_project_file_count(project_id, len(files))

    logger.info("Indexed %s: %d files", project_name, result.files_indexed)
    return result


def update_project(store: IndexStore, project_name: str, **kwargs) -> IndexResult:
    """Re-index a known project from its stored path.

    Raises:
        NotFoundError: If the project is not indexed
    """
    project = store.require_project(project_name)
    return index_project(store, project.path, name=project.name, **kwargs)


def update_all_projects(store: IndexStore, **kwargs) -> dict[str, IndexResult]:
    return {
        project.name: index_project(store, project.path, name=project.name, **kwargs)
        for project in store.get_projects()
    }
