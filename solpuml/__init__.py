"""Generate PlantUML class diagrams from Solidity source code."""

from .errors import (
    ConfigError,
    DiagramError,
    EnumerationError,
    ExtractionError,
    FileError,
    ParseError,
    WriteError,
)
from .extractor import extract_contracts
from .models import ContractMetadata, Import, Member, Method
from .pipeline import DiagramPipeline, RunReport
from .serializer import DiagramSerializer, render_document

__version__ = "0.2.0"

__all__ = [
    "ConfigError",
    "ContractMetadata",
    "DiagramError",
    "DiagramPipeline",
    "DiagramSerializer",
    "EnumerationError",
    "ExtractionError",
    "FileError",
    "Import",
    "Member",
    "Method",
    "ParseError",
    "RunReport",
    "WriteError",
    "extract_contracts",
    "render_document",
]
