"""Parser adapters that turn Solidity source text into a raw syntax tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from antlr4 import CommonTokenStream, InputStream
from antlr4.error.ErrorListener import ErrorListener

from .errors import ParseError


class SourceParser(ABC):
    """Contract for parsers that produce ``type``-tagged syntax trees."""

    @abstractmethod
    def parse(self, text: str, path: str) -> Any:
        """Return the tree root for ``text``; raise ``ParseError`` on invalid input."""

    def parse_file(self, path: Path) -> Any:
        """Read ``path`` as UTF-8 and parse it."""
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(path, f"could not read source: {exc}") from exc
        return self.parse(text, str(path))


class _RaisingErrorListener(ErrorListener):
    """Turns the first lexer or parser error into a ``ParseError``."""

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):  # type: ignore[no-untyped-def]
        raise ParseError(self.path, f"line {line}:{column} {msg}")


class SolidityParser(SourceParser):
    """Adapter over the ANTLR grammar shipped with the ``solidity_parser`` distribution.

    The library's own ``parse`` helper lets ANTLR recover from syntax errors and
    returns a partial tree, so the lexer and parser are driven here with an
    error listener that aborts on the first error instead.
    """

    def parse(self, text: str, path: str) -> Any:
        from solidity_parser.parser import AstVisitor, Node
        from solidity_parser.solidity_antlr4.SolidityLexer import SolidityLexer
        from solidity_parser.solidity_antlr4.SolidityParser import SolidityParser as AntlrParser

        listener = _RaisingErrorListener(path)

        lexer = SolidityLexer(InputStream(text))
        lexer.removeErrorListeners()
        lexer.addErrorListener(listener)

        parser = AntlrParser(CommonTokenStream(lexer))
        parser.removeErrorListeners()
        parser.addErrorListener(listener)

        Node.ENABLE_LOC = False
        return AstVisitor().visit(parser.sourceUnit())


__all__ = ["SolidityParser", "SourceParser"]
