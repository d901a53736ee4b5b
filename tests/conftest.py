from __future__ import annotations

from pathlib import Path

import pytest

from docport.logging import reset_logging
from tests._fixtures.docs_builder import DocsBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsBuilder:
    """Provide a legacy/current docs layout rooted at the pytest tmp_path."""
    return DocsBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_docport_logging():  # type: ignore[no-untyped-def]
    """Drop handlers a test installed so they never write to a closed capture stream."""
    yield
    reset_logging()
