from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.source_builder import JsonTreeParser, SourceTreeBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceTreeBuilder:
    """Provide a contracts directory rooted at the pytest tmp_path."""
    return SourceTreeBuilder(tmp_path)


@pytest.fixture
def json_parser() -> JsonTreeParser:
    return JsonTreeParser()
