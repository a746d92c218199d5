"""
Shared test fixtures and configuration.
"""

import shutil
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the sample pages directory."""
    return Path(__file__).parent / "fixtures" / "pages"


@pytest.fixture
def page_text(fixtures_dir: Path):
    """Return a loader for sample page source by fixture name."""

    def _load(name: str) -> str:
        return (fixtures_dir / f"{name}.elm").read_text(encoding="utf-8")

    return _load


@pytest.fixture
def page_file(tmp_path: Path, fixtures_dir: Path):
    """Copy a sample page into a temp ``src/Pages`` tree and return its path."""

    def _copy(name: str) -> Path:
        pages = tmp_path / "src" / "Pages"
        pages.mkdir(parents=True, exist_ok=True)
        target = pages / f"{name}.elm"
        shutil.copyfile(fixtures_dir / f"{name}.elm", target)
        return target

    return _copy
