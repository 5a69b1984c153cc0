"""Tests for file discovery and language detection."""

import warnings
from pathlib import Path

import pytest

from devmem.file_operations import collect_files, get_combined_spec, split_patterns
from devmem.language_detection import get_language_from_path


def test_collect_files_applies_allow_list_and_default_excludes(sample_project: Path) -> None:
    assert collect_files(sample_project) == ["main.py", "src/auth.ts", "src/util.js"]


def test_collect_files_extra_patterns(sample_project: Path) -> None:
    assert collect_files(sample_project, exclude="src/") == ["main.py"]
    assert collect_files(sample_project, exclude=["**/*.ts"]) == ["main.py", "src/util.js"]


def test_collect_files_non_recursive(sample_project: Path) -> None:
    assert collect_files(sample_project, recursive=False) == ["main.py"]


def test_collect_files_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        collect_files(tmp_path / "missing")


def test_default_excludes_match_nested_directories() -> None:
    spec = get_combined_spec()

    assert spec.match_file("packages/web/node_modules/react/index.js")
    assert spec.match_file("coverage/lcov.js")
    assert not spec.match_file("src/build_tools.ts")


def test_split_patterns() -> None:
    assert split_patterns(" *.spec.ts, ,vendor/ ") == ["*.spec.ts", "vendor/"]
    assert split_patterns(None) == []


@pytest.mark.parametrize(
    ("path", "language"),
    [
        ("src/app.tsx", "tsx"),
        ("lib/Main.JAVA", "java"),
        ("tool.rs", "rust"),
        ("README.md", None),
        ("Makefile", None),
    ],
)
def test_language_from_path(path: str, language: str | None) -> None:
    assert get_language_from_path(path) == language


def test_combined_spec_builds_without_deprecation_warnings(sample_project: Path) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        spec = get_combined_spec("*.spec.ts")
        files = collect_files(sample_project)

    assert spec.match_file("src/app.spec.ts")
    assert files == ["main.py", "src/auth.ts", "src/util.js"]
