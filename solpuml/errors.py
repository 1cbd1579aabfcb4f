"""Exception types raised while building diagrams."""

from __future__ import annotations

from pathlib import Path


class DiagramError(RuntimeError):
    """Base class for every failure raised by solpuml."""


class ConfigError(DiagramError):
    """Raised when the configuration file cannot be parsed."""


class EnumerationError(DiagramError):
    """Raised when the source directory cannot be traversed."""


class WriteError(DiagramError):
    """Raised when the rendered document cannot be persisted."""


class FileError(DiagramError):
    """A failure scoped to a single source file.

    The pipeline records these and keeps processing the remaining files.
    """

    stage = "file"

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ParseError(FileError):
    """Raised when source text cannot be read or parsed."""

    stage = "parse"


class ExtractionError(FileError):
    """Raised when a syntax tree does not have the expected node shape."""

    stage = "extract"


__all__ = [
    "ConfigError",
    "DiagramError",
    "EnumerationError",
    "ExtractionError",
    "FileError",
    "ParseError",
    "WriteError",
]
