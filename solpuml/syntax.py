"""Typed view over the raw syntax tree produced by the Solidity parser.

The parser hands back nested mappings tagged with a ``type`` key. This module
turns the parts of that tree the extractor cares about into frozen dataclasses,
one per node kind, so the extractor can dispatch on concrete types instead of
inspecting dictionaries. Kinds without a dedicated variant become ``OtherNode``
and keep their tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Union


class NodeShapeError(ValueError):
    """Raised when a raw node is missing a structurally required field."""


@dataclass(frozen=True)
class ImportDirective:
    kind: ClassVar[str] = "ImportDirective"

    path: str


@dataclass(frozen=True)
class VariableDeclaration:
    kind: ClassVar[str] = "VariableDeclaration"

    name: Optional[str]
    type_name: Optional[str]


@dataclass(frozen=True)
class StateVariableDeclaration:
    kind: ClassVar[str] = "StateVariableDeclaration"

    variables: Tuple[VariableDeclaration, ...]


@dataclass(frozen=True)
class Parameter:
    kind: ClassVar[str] = "Parameter"

    name: Optional[str]
    type_name: Optional[str]


@dataclass(frozen=True)
class FunctionDefinition:
    """A function; ``name`` is ``None`` for constructors and other anonymous functions."""

    kind: ClassVar[str] = "FunctionDefinition"

    name: Optional[str]
    parameters: Tuple[Parameter, ...]
    return_parameters: Optional[Tuple[Parameter, ...]]


@dataclass(frozen=True)
class OtherNode:
    """Any node kind the extractor does not inspect (pragmas, events, structs...)."""

    kind: str


@dataclass(frozen=True)
class ContractDefinition:
    kind: ClassVar[str] = "ContractDefinition"

    name: Optional[str]
    contract_kind: str
    sub_nodes: Tuple["ContractMember", ...]


@dataclass(frozen=True)
class SourceUnit:
    kind: ClassVar[str] = "SourceUnit"

    children: Tuple["TopLevelNode", ...]


ContractMember = Union[StateVariableDeclaration, FunctionDefinition, OtherNode]
TopLevelNode = Union[ImportDirective, ContractDefinition, OtherNode]
SyntaxNode = Union[
    SourceUnit,
    ImportDirective,
    ContractDefinition,
    StateVariableDeclaration,
    VariableDeclaration,
    FunctionDefinition,
    Parameter,
    OtherNode,
]


def build_source_unit(raw: Any) -> SourceUnit:
    """Convert a parser tree root into a ``SourceUnit``.

    Raises ``NodeShapeError`` when the root or one of the inspected nodes is
    malformed. Unresolvable type names are kept as ``None``; deciding whether
    they matter is left to the extractor.
    """
    node = _require_mapping(raw, "source unit")
    children = _require_sequence(node.get("children"), "SourceUnit.children")
    return SourceUnit(children=tuple(_build_top_level(child) for child in children))


def resolve_type_name(raw: Any) -> Optional[str]:
    """Return the display text for a type-name node, or ``None`` if it has none."""
    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("type")
    if kind == "ElementaryTypeName":
        return _non_empty_str(raw.get("name"))
    if kind == "UserDefinedTypeName":
        return _non_empty_str(raw.get("namePath"))
    if kind == "ArrayTypeName":
        base = resolve_type_name(raw.get("baseTypeName"))
        if base is None:
            return None
        return f"{base}[{_array_length(raw.get('length'))}]"
    if kind == "Mapping":
        key = resolve_type_name(raw.get("keyType"))
        value = resolve_type_name(raw.get("valueType"))
        if key is None or value is None:
            return None
        return f"mapping({key} => {value})"
    return None


# ----------------------------------------------------------------------
# Builders


def _build_top_level(raw: Any) -> TopLevelNode:
    node = _require_mapping(raw, "top-level node")
    kind = _node_kind(node)
    builder = _TOP_LEVEL_BUILDERS.get(kind)
    if builder is None:
        return OtherNode(kind=kind)
    return builder(node)


def _build_contract_member(raw: Any) -> ContractMember:
    node = _require_mapping(raw, "contract sub-node")
    kind = _node_kind(node)
    builder = _CONTRACT_MEMBER_BUILDERS.get(kind)
    if builder is None:
        return OtherNode(kind=kind)
    return builder(node)


def _build_import(node: Mapping[str, Any]) -> ImportDirective:
    path = node.get("path")
    if not isinstance(path, str):
        raise NodeShapeError("ImportDirective is missing its path")
    return ImportDirective(path=path)


def _build_contract(node: Mapping[str, Any]) -> ContractDefinition:
    sub_nodes = _require_sequence(node.get("subNodes"), "ContractDefinition.subNodes")
    contract_kind = node.get("kind")
    return ContractDefinition(
        name=_non_empty_str(node.get("name")),
        contract_kind=contract_kind if isinstance(contract_kind, str) else "contract",
        sub_nodes=tuple(_build_contract_member(child) for child in sub_nodes),
    )


def _build_state_variable(node: Mapping[str, Any]) -> StateVariableDeclaration:
    variables = _require_sequence(node.get("variables"), "StateVariableDeclaration.variables")
    declarations: List[VariableDeclaration] = []
    for raw in variables:
        variable = _require_mapping(raw, "VariableDeclaration")
        declarations.append(
            VariableDeclaration(
                name=_non_empty_str(variable.get("name")),
                type_name=resolve_type_name(variable.get("typeName")),
            )
        )
    return StateVariableDeclaration(variables=tuple(declarations))


def _build_function(node: Mapping[str, Any]) -> FunctionDefinition:
    parameters = _build_parameter_list(node.get("parameters"), "parameters")
    raw_returns = node.get("returnParameters")
    return_parameters = (
        None if raw_returns is None else _build_parameter_list(raw_returns, "returnParameters")
    )
    return FunctionDefinition(
        name=_function_name(node),
        parameters=parameters,
        return_parameters=return_parameters,
    )


def _build_parameter_list(raw: Any, field_name: str) -> Tuple[Parameter, ...]:
    if raw is None:
        return ()
    # Some parser releases wrap parameters in a ParameterList node.
    if isinstance(raw, Mapping):
        if raw.get("type") != "ParameterList":
            raise NodeShapeError(f"FunctionDefinition.{field_name} is not a parameter list")
        raw = raw.get("parameters")
    items = _require_sequence(raw, f"FunctionDefinition.{field_name}")
    parameters: List[Parameter] = []
    for item in items:
        parameter = _require_mapping(item, "Parameter")
        parameters.append(
            Parameter(
                name=_non_empty_str(parameter.get("name")),
                type_name=resolve_type_name(parameter.get("typeName")),
            )
        )
    return tuple(parameters)


_TOP_LEVEL_BUILDERS: Dict[str, Callable[[Mapping[str, Any]], TopLevelNode]] = {
    ImportDirective.kind: _build_import,
    ContractDefinition.kind: _build_contract,
}

_CONTRACT_MEMBER_BUILDERS: Dict[str, Callable[[Mapping[str, Any]], ContractMember]] = {
    StateVariableDeclaration.kind: _build_state_variable,
    FunctionDefinition.kind: _build_function,
}


# ----------------------------------------------------------------------
# Helpers


_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def _function_name(node: Mapping[str, Any]) -> Optional[str]:
    # Anonymous functions (constructors, legacy fallbacks) may carry the keyword or
    # the whole function text as their name depending on the parser release.
    if node.get("isConstructor") is True:
        return None
    name = _non_empty_str(node.get("name"))
    if name is None or not _IDENTIFIER.fullmatch(name):
        return None
    return name


def _node_kind(node: Mapping[str, Any]) -> str:
    kind = node.get("type")
    if not isinstance(kind, str) or not kind:
        raise NodeShapeError("node has no type tag")
    return kind


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise NodeShapeError(f"expected {label} to be a node, got {type(value).__name__}")
    return value


def _require_sequence(value: Any, label: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise NodeShapeError(f"expected {label} to be a list")
    return value


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _array_length(value: Any) -> str:
    if isinstance(value, Mapping) and value.get("type") == "NumberLiteral":
        number = value.get("number")
        if isinstance(number, str):
            return number
    return ""


__all__ = [
    "ContractDefinition",
    "FunctionDefinition",
    "ImportDirective",
    "NodeShapeError",
    "OtherNode",
    "Parameter",
    "SourceUnit",
    "StateVariableDeclaration",
    "SyntaxNode",
    "VariableDeclaration",
    "build_source_unit",
    "resolve_type_name",
]
