"""Tests for solpuml.parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from solpuml.errors import ParseError
from solpuml.extractor import extract_contracts
from solpuml.parsing import SolidityParser
from tests._fixtures.source_builder import JsonTreeParser

TOKEN_SOURCE = """
pragma solidity ^0.8.0;

import "./Ownable.sol";

contract Token {
    uint balance;

    constructor(address owner) {}

    function transfer(address to, uint amount) public returns (bool) {
        return true;
    }
}
"""


@pytest.fixture
def solidity_parser() -> SolidityParser:
    pytest.importorskip("solidity_parser")
    return SolidityParser()


def test_parse_file_reads_utf8(tmp_path: Path) -> None:
    path = tmp_path / "Tree.sol"
    path.write_text('{"type": "SourceUnit", "children": []}', encoding="utf-8")

    assert JsonTreeParser().parse_file(path) == {"type": "SourceUnit", "children": []}


def test_parse_file_missing_file_is_parse_error(tmp_path: Path) -> None:
    missing = tmp_path / "Missing.sol"
    with pytest.raises(ParseError) as excinfo:
        JsonTreeParser().parse_file(missing)
    assert excinfo.value.path == str(missing)


def test_solidity_parser_produces_extractable_tree(solidity_parser: SolidityParser) -> None:
    tree = solidity_parser.parse(TOKEN_SOURCE, "Token.sol")

    (token,) = extract_contracts(tree, "Token.sol")

    assert token.name == "Token"
    assert [(m.type_name, m.name) for m in token.members] == [("uint", "balance")]
    constructor, transfer = token.methods
    assert constructor.name == "constructor"
    assert constructor.parameter_types == ("address",)
    assert constructor.return_types == ("void",)
    assert transfer.name == "transfer"
    assert transfer.parameter_types == ("address", "uint")
    assert transfer.return_types == ("bool",)
    assert [item.path for item in token.imports] == ["./Ownable.sol"]


def test_unterminated_contract_is_parse_error(solidity_parser: SolidityParser) -> None:
    with pytest.raises(ParseError) as excinfo:
        solidity_parser.parse("contract Broken {", "Broken.sol")

    assert excinfo.value.path == "Broken.sol"
    assert excinfo.value.stage == "parse"
    assert excinfo.value.message.startswith("line 1:")


def test_non_solidity_text_is_parse_error(solidity_parser: SolidityParser) -> None:
    with pytest.raises(ParseError):
        solidity_parser.parse("this is not solidity at all ;;;", "Garbage.sol")


def test_parse_file_with_solidity_parser(solidity_parser: SolidityParser, tmp_path: Path) -> None:
    path = tmp_path / "Broken.sol"
    path.write_text("contract Broken { uint x }", encoding="utf-8")

    with pytest.raises(ParseError) as excinfo:
        solidity_parser.parse_file(path)
    assert excinfo.value.path == str(path)
