"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def csv_payload() -> Callable[[str], bytes]:
    """Return a loader for CSV fixture payloads by file name."""
    fixtures_root = Path(__file__).resolve().parent / "fixtures" / "csv"

    def _load(file_name: str) -> bytes:
        return (fixtures_root / file_name).read_bytes()

    return _load
