"""Builders for raw syntax trees shaped like the Solidity parser output."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


def elementary(name: str) -> Dict[str, Any]:
    return {"type": "ElementaryTypeName", "name": name}


def user_defined(name_path: str) -> Dict[str, Any]:
    return {"type": "UserDefinedTypeName", "namePath": name_path}


def parameter(type_name: Any, name: Optional[str] = None) -> Dict[str, Any]:
    if isinstance(type_name, str):
        type_name = elementary(type_name)
    return {"type": "Parameter", "typeName": type_name, "name": name}


def state_variable(type_name: Any, name: str, *more: str) -> Dict[str, Any]:
    if isinstance(type_name, str):
        type_name = elementary(type_name)
    names = (name, *more)
    return {
        "type": "StateVariableDeclaration",
        "variables": [
            {"type": "VariableDeclaration", "typeName": type_name, "name": item, "isStateVar": True}
            for item in names
        ],
        "initialValue": None,
    }


def function(
    name: Optional[str],
    params: Sequence[Any] = (),
    returns: Optional[Sequence[Any]] = None,
) -> Dict[str, Any]:
    return {
        "type": "FunctionDefinition",
        "name": name,
        "parameters": [_as_parameter(item) for item in params],
        "returnParameters": None if returns is None else [_as_parameter(item) for item in returns],
        "body": None,
        "visibility": "public",
    }


def contract(name: str, *sub_nodes: Dict[str, Any], kind: str = "contract") -> Dict[str, Any]:
    return {
        "type": "ContractDefinition",
        "name": name,
        "baseContracts": [],
        "subNodes": list(sub_nodes),
        "kind": kind,
    }


def import_directive(path: str) -> Dict[str, Any]:
    return {"type": "ImportDirective", "path": path, "unitAlias": None, "symbolAliases": None}


def pragma(value: str = "^0.8.0") -> Dict[str, Any]:
    return {"type": "PragmaDirective", "name": "solidity", "value": value}


def source_unit(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "SourceUnit", "children": list(children)}


def token_tree() -> Dict[str, Any]:
    """A file with one ``Token`` contract, a balance field, and a transfer method."""
    return source_unit(
        pragma(),
        contract(
            "Token",
            state_variable("uint", "balance"),
            function("transfer", ["address", "uint"], ["bool"]),
        ),
    )


def _as_parameter(item: Any) -> Dict[str, Any]:
    if isinstance(item, dict) and item.get("type") == "Parameter":
        return item
    return parameter(item)


__all__ = [
    "contract",
    "elementary",
    "function",
    "import_directive",
    "parameter",
    "pragma",
    "source_unit",
    "state_variable",
    "token_tree",
    "user_defined",
]
