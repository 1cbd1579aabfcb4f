"""Helpers for writing throwaway source directories in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from solpuml.errors import ParseError
from solpuml.parsing import SourceParser


class JsonTreeParser(SourceParser):
    """Parser double that reads the syntax tree as JSON from the source text."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def parse(self, text: str, path: str) -> Any:
        self.calls.append(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(path, f"syntax error: {exc}") from exc


class SourceTreeBuilder:
    """Writes ``path -> tree`` entries as JSON encoded source files."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "contracts"
        self.root.mkdir()

    def write_tree(self, relative: str, tree: Mapping[str, Any]) -> Path:
        return self.write_text(relative, json.dumps(tree))

    def write_text(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


__all__ = ["JsonTreeParser", "SourceTreeBuilder"]
