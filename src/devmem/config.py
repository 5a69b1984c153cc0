"""Location of the devmem database."""

import os
import pathlib

from devmem.constants import DATA_DIR_ENV, DATA_DIR_NAME, DB_FILE_NAME


def get_data_dir() -> pathlib.Path:
    """Directory holding devmem state.

    ``$DEVMEM_HOME`` wins over the default ``~/.devmem``.
    """
    override = os.getenv(DATA_DIR_ENV)
    if override:
        return pathlib.Path(override).expanduser()
    return pathlib.Path.home() / DATA_DIR_NAME


def get_db_path(override: str | None = None) -> pathlib.Path:
    """Resolve the database file, creating its parent directory.

    Args:
        override: Explicit database path (``--db``), if any

    Returns:
        Path to the SQLite database file
    """
    db_path = pathlib.Path(override).expanduser() if override else get_data_dir() / DB_FILE_NAME
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path
