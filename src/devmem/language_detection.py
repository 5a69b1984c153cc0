"""Language detection for indexable source files."""

import pathlib

from devmem.constants import LANGUAGE_MAP


def get_language_from_path(file_path: str | pathlib.Path) -> str | None:
    """Determines the language hint from the file extension.

    Args:
        file_path: Path to the file, absolute or relative

    Returns:
        Language name if the extension is indexable, None otherwise

    Examples:
        >>> get_language_from_path("src/app.tsx")
        'tsx'
        >>> get_language_from_path("README.md") is None
        True
    """
    return LANGUAGE_MAP.get(pathlib.PurePath(file_path).suffix.lower())


def is_indexable(file_path: str | pathlib.Path) -> bool:
    return get_language_from_path(file_path) is not None
