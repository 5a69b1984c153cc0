"""Shared fixtures: a throwaway index and a small multi-language project."""

from pathlib import Path

import pytest

from devmem.storage import IndexStore

AUTH_TS = """import { hash } from "./crypto";

export function authLogin(user, password) {
  const token = hash(user + password);
  return token;
}

class SessionStore {
  save(token) {
    return token;
  }
}
"""

UTIL_JS = """const formatDate = (date) => {
  return date.toISOString();
};
"""

MAIN_PY = """def main():
    print("hi")
"""


def write_file(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def store(tmp_path: Path):
    with IndexStore(tmp_path / "index.db") as index_store:
        yield index_store


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Project with two JS/TS sources, one Python file and excluded noise."""
    root = tmp_path / "sample"
    write_file(root, "main.py", MAIN_PY)
    write_file(root, "README.md", "# sample\n")
    write_file(root, "src/auth.ts", AUTH_TS)
    write_file(root, "src/util.js", UTIL_JS)
    write_file(root, "node_modules/lib/index.js", "function ignored() {}\n")
    write_file(root, "dist/bundle.js", "function bundled() {}\n")
    return root
