"""Render contract metadata as a PlantUML class diagram."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import VOID_TYPE, ContractMetadata, Import, Member, Method

START_MARKER = "@startuml"
END_MARKER = "@enduml"

_BLOCK_INDENT = "  "
_BODY_INDENT = "    "


def render_import(item: Import) -> str:
    return f"import {item.path}"


def render_member(member: Member) -> str:
    return f"{member.type_name} {member.name}"


def render_method(method: Method) -> str:
    parameters = ", ".join(method.parameter_types)
    returns = ", ".join(method.return_types) or VOID_TYPE
    return f"{method.name}({parameters}) : {returns}"


def render_class_block(contract: ContractMetadata) -> List[str]:
    """Return the lines of one class block, imports first, then members, then methods."""
    body = [render_import(item) for item in contract.imports]
    body.extend(render_member(member) for member in contract.members)
    body.extend(render_method(method) for method in contract.methods)
    lines = [f"class {contract.name} {{"]
    lines.extend(f"{_BODY_INDENT}{line}" for line in body)
    lines.append("}")
    return lines


def render_document(contracts: Iterable[ContractMetadata]) -> str:
    """Render every contract into a single ``@startuml``/``@enduml`` document."""
    lines = [START_MARKER]
    for contract in contracts:
        lines.extend(f"{_BLOCK_INDENT}{line}" for line in render_class_block(contract))
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"


class DiagramSerializer:
    """Accumulates contracts across files and renders them in insertion order."""

    def __init__(self) -> None:
        self._contracts: List[ContractMetadata] = []

    def add(self, contract: ContractMetadata) -> None:
        self._contracts.append(contract)

    def extend(self, contracts: Iterable[ContractMetadata]) -> None:
        self._contracts.extend(contracts)

    @property
    def contracts(self) -> Sequence[ContractMetadata]:
        return tuple(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def render(self) -> str:
        return render_document(self._contracts)


__all__ = [
    "DiagramSerializer",
    "END_MARKER",
    "START_MARKER",
    "render_class_block",
    "render_document",
    "render_import",
    "render_member",
    "render_method",
]
