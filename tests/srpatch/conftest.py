"""Shared fixtures for srpatch command-line tests."""

import logging
from pathlib import Path
import shutil

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root logger changes made by each command-line run."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()

    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def workspace(tmp_path):
    """Copy the example source and patch files into a temporary directory."""
    shutil.copy(FIXTURES_DIR / "example.py", tmp_path / "example.py")
    shutil.copy(FIXTURES_DIR / "example.patch", tmp_path / "example.patch")
    return tmp_path


@pytest.fixture
def write_patch(tmp_path):
    """Factory that writes a SEARCH/REPLACE block to a patch file."""
    def _write_patch(search: str, replace: str, name: str = "change.patch") -> Path:
        path = tmp_path / name
        path.write_text(
            f"<<<<<<< SEARCH\n{search}\n=======\n{replace}\n>>>>>>> REPLACE\n",
            encoding='utf-8'
        )
        return path
    return _write_patch
