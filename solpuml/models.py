"""Core data models shared across solpuml components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import FileError

CONSTRUCTOR_NAME = "constructor"
VOID_TYPE = "void"


@dataclass(frozen=True)
class Import:
    """A file-scoped import directive."""

    path: str


@dataclass(frozen=True)
class Member:
    """A state variable declared at contract scope."""

    type_name: str
    name: str


@dataclass(frozen=True)
class Method:
    """A function signature declared at contract scope."""

    name: str
    parameter_types: Tuple[str, ...] = ()
    return_types: Tuple[str, ...] = (VOID_TYPE,)


@dataclass(frozen=True)
class ContractMetadata:
    """Structural summary of one contract-like definition."""

    name: str
    members: Tuple[Member, ...] = ()
    methods: Tuple[Method, ...] = ()
    imports: Tuple[Import, ...] = ()
    kind: str = "contract"
    source_path: Optional[str] = None


@dataclass
class FileResult:
    """Outcome of processing a single source file."""

    path: str
    contracts: List[ContractMetadata] = field(default_factory=list)
    error: Optional[FileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "CONSTRUCTOR_NAME",
    "ContractMetadata",
    "FileResult",
    "Import",
    "Member",
    "Method",
    "VOID_TYPE",
]
