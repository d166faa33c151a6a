"""Tests for sumi.render.tree."""

from __future__ import annotations

from pathlib import Path

import pytest

from sumi.exceptions import RenderError
from sumi.models import Function, Input, Module
from sumi.render.tree import NodeKind, node_kind, to_tree


def _module() -> Module:
    return Module(
        name="erc20",
        evm_identifier="0x0F",
        functions=(
            Function(
                name="transfer",
                inputs=(
                    Input(name="to", evm_type="address", mapped_type="H160"),
                    Input(name="amount", evm_type="uint256", mapped_type="U256"),
                ),
                selector="transfer(address,uint256)",
                selector_hash="a9059cbb",
            ),
        ),
    )


class TestNodeKind:
    def test_record(self) -> None:
        assert node_kind(_module()) is NodeKind.RECORD
        assert node_kind({"a": 1}) is NodeKind.RECORD

    def test_sequence(self) -> None:
        assert node_kind([1]) is NodeKind.SEQUENCE
        assert node_kind(()) is NodeKind.SEQUENCE

    @pytest.mark.parametrize("value", ["s", 1, 1.5, True, None])
    def test_scalar(self, value: object) -> None:
        assert node_kind(value) is NodeKind.SCALAR

    def test_unsupported(self) -> None:
        with pytest.raises(RenderError, match="Path"):
            node_kind(Path("/tmp"))


class TestToTree:
    def test_module_tree(self) -> None:
        tree = to_tree(_module())
        assert tree == {
            "name": "erc20",
            "evm_identifier": "0x0F",
            "functions": [
                {
                    "name": "transfer",
                    "inputs": [
                        {"name": "to", "evm_type": "address", "mapped_type": "H160"},
                        {"name": "amount", "evm_type": "uint256", "mapped_type": "U256"},
                    ],
                    "output": "bool",
                    "selector": "transfer(address,uint256)",
                    "selector_hash": "a9059cbb",
                }
            ],
        }

    def test_tuples_become_lists(self) -> None:
        assert to_tree({"xs": (1, (2, 3))}) == {"xs": [1, [2, 3]]}

    def test_error_names_path(self) -> None:
        with pytest.raises(RenderError, match=r"at \$\.functions\[1\]\.when"):
            to_tree({"functions": [{}, {"when": object()}]})

    def test_error_is_render_error_exit_code(self) -> None:
        with pytest.raises(RenderError) as exc_info:
            to_tree({"x": {1, 2}})
        assert exc_info.value.exit_code == 8
