"""Extract contract metadata from a parsed Solidity source unit."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence, Tuple

from .errors import ExtractionError
from .logging import get_logger
from .models import CONSTRUCTOR_NAME, VOID_TYPE, ContractMetadata, Import, Member, Method
from .syntax import (
    ContractDefinition,
    FunctionDefinition,
    ImportDirective,
    NodeShapeError,
    OtherNode,
    Parameter,
    SourceUnit,
    StateVariableDeclaration,
    build_source_unit,
)

_LOGGER = get_logger("extractor")


def extract_contracts(tree: Any, path: str | Path = "<memory>") -> List[ContractMetadata]:
    """Return one ``ContractMetadata`` per top-level contract definition in ``tree``.

    ``tree`` is either the raw parser output or an already built ``SourceUnit``.
    Imports are collected once per file and attached to every contract found in
    it. Any malformed node raises ``ExtractionError`` for the whole file.
    """
    source_path = str(path)
    try:
        unit = tree if isinstance(tree, SourceUnit) else build_source_unit(tree)
    except NodeShapeError as exc:
        raise ExtractionError(source_path, str(exc)) from exc

    imports = tuple(
        Import(path=child.path) for child in unit.children if isinstance(child, ImportDirective)
    )

    contracts: List[ContractMetadata] = []
    for child in unit.children:
        if isinstance(child, ContractDefinition):
            contracts.append(_extract_contract(child, imports, source_path))
        elif isinstance(child, ImportDirective):
            continue
        elif isinstance(child, OtherNode):
            _LOGGER.debug("Skipping top-level %s in %s", child.kind, source_path)
        else:  # pragma: no cover - build_source_unit only yields the variants above
            raise ExtractionError(source_path, f"unexpected top-level node {child!r}")
    return contracts


def _extract_contract(
    contract: ContractDefinition, imports: Tuple[Import, ...], path: str
) -> ContractMetadata:
    if contract.name is None:
        raise ExtractionError(path, "contract definition has no name")

    members: List[Member] = []
    methods: List[Method] = []
    for node in contract.sub_nodes:
        if isinstance(node, StateVariableDeclaration):
            members.append(_extract_member(node, contract.name, path))
        elif isinstance(node, FunctionDefinition):
            methods.append(_extract_method(node, contract.name, path))
        elif isinstance(node, OtherNode):
            continue
        else:  # pragma: no cover - build_source_unit only yields the variants above
            raise ExtractionError(path, f"unexpected node in {contract.name}: {node!r}")

    return ContractMetadata(
        name=contract.name,
        members=tuple(members),
        methods=tuple(methods),
        imports=imports,
        kind=contract.contract_kind,
        source_path=path,
    )


def _extract_member(node: StateVariableDeclaration, contract: str, path: str) -> Member:
    # Only the first variable of a multi-variable declaration is kept.
    if not node.variables:
        raise ExtractionError(path, f"state variable declaration in {contract} declares nothing")
    variable = node.variables[0]
    if variable.type_name is None:
        raise ExtractionError(
            path, f"state variable {variable.name or '<unnamed>'} in {contract} has no type name"
        )
    if variable.name is None:
        raise ExtractionError(path, f"state variable of type {variable.type_name} in {contract} has no name")
    return Member(type_name=variable.type_name, name=variable.name)


def _extract_method(node: FunctionDefinition, contract: str, path: str) -> Method:
    name = node.name or CONSTRUCTOR_NAME
    label = f"{contract}.{name}"
    parameter_types = _type_names(node.parameters, label, path)
    return_types = _type_names(node.return_parameters or (), label, path)
    return Method(
        name=name,
        parameter_types=parameter_types,
        return_types=return_types or (VOID_TYPE,),
    )


def _type_names(parameters: Sequence[Parameter], label: str, path: str) -> Tuple[str, ...]:
    names: List[str] = []
    for index, parameter in enumerate(parameters):
        if parameter.type_name is None:
            raise ExtractionError(path, f"parameter {index} of {label} has no type name")
        names.append(parameter.type_name)
    return tuple(names)


__all__ = ["extract_contracts"]
