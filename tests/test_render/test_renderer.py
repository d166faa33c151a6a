"""Tests for sumi.render.renderer -- Jinja2 expansion of the module template."""

from __future__ import annotations

from pathlib import Path

import pytest

from sumi.exceptions import FilterTypeError, RenderError
from sumi.models import Function, Input, Module
from sumi.render.filters import build_filters
from sumi.render.renderer import MODULE_TEMPLATE, ModuleRenderer


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> ModuleRenderer:
    return ModuleRenderer(build_filters())


def _transfer_from() -> Function:
    return Function(
        name="transferFrom",
        inputs=(
            Input(name="from", evm_type="address", mapped_type="H160"),
            Input(name="to", evm_type="address", mapped_type="H160"),
            Input(name="amount", evm_type="uint256", mapped_type="U256"),
        ),
        selector="transferFrom(address,address,uint256)",
        selector_hash="23b872dd",
    )


def _pause() -> Function:
    return Function(name="pause", selector="pause()", selector_hash="8456cb59")


# ---------------------------------------------------------------------------
# render_source
# ---------------------------------------------------------------------------


class TestRenderSource:
    """Inline templates exercise the environment and filter table."""

    def test_filters_installed(self, renderer: ModuleRenderer) -> None:
        out = renderer.render_source(
            "{{ name | snake }} {{ name | upper_snake }} {{ name | capitalize }}",
            {"name": "transferFrom"},
        )
        assert out == "transfer_from TRANSFER_FROM TransferFrom"

    def test_capitalize_overrides_builtin(self, renderer: ModuleRenderer) -> None:
        # Jinja's built-in would lowercase the rest.
        assert renderer.render_source("{{ n | capitalize }}", {"n": "myToken"}) == "MyToken"

    def test_no_autoescape(self, renderer: ModuleRenderer) -> None:
        out = renderer.render_source("{{ t }}", {"t": "Vec<u8>"})
        assert out == "Vec<u8>"

    def test_block_lines_trimmed(self, renderer: ModuleRenderer) -> None:
        source = "a\n{% for x in xs %}\n{{ x }}\n{% endfor %}\nb\n"
        assert renderer.render_source(source, {"xs": ["1", "2"]}) == "a\n1\n2\nb\n"

    def test_undefined_name(self, renderer: ModuleRenderer) -> None:
        with pytest.raises(RenderError, match="Undefined name"):
            renderer.render_source("{{ missing }}", {"name": "x"})

    def test_undefined_attribute_through_filter(self, renderer: ModuleRenderer) -> None:
        with pytest.raises(RenderError, match="undefined value"):
            renderer.render_source("{{ f.nope | snake }}", {"f": {"name": "x"}})

    def test_filter_on_non_string(self, renderer: ModuleRenderer) -> None:
        with pytest.raises(FilterTypeError):
            renderer.render_source("{{ n | snake }}", {"n": 3})

    def test_syntax_error(self, renderer: ModuleRenderer) -> None:
        with pytest.raises(RenderError, match="syntax error"):
            renderer.render_source("{% for x in %}", {"xs": []})

    def test_root_must_be_record(self, renderer: ModuleRenderer) -> None:
        with pytest.raises(RenderError, match="must be a record"):
            renderer.render_source("x", ["not", "a", "record"])


# ---------------------------------------------------------------------------
# The module template
# ---------------------------------------------------------------------------


class TestModuleTemplate:
    def test_default_template(self, tmp_path: Path) -> None:
        (tmp_path / MODULE_TEMPLATE).write_text("mod {{ name }};\n", encoding="utf-8")
        renderer = ModuleRenderer(build_filters(), template_dir=tmp_path)
        assert renderer.render(Module(name="erc20", evm_identifier="1")) == "mod erc20;\n"

    def test_header_and_names(self, renderer: ModuleRenderer) -> None:
        out = renderer.render(Module(name="erc20", evm_identifier="0x0F"))
        assert out.startswith("//! This file was autogenerated by sumi\n")
        assert "mod erc20 {" in out
        assert "pub struct Erc20 {" in out
        assert "    Erc20Ref," in out
        assert "const EVM_ID: u8 = 0x0F;" in out

    def test_function_blocks(self, renderer: ModuleRenderer) -> None:
        module = Module(name="erc20", evm_identifier="0x0F", functions=(_transfer_from(),))
        out = renderer.render(module)
        assert "// Selector for `transferFrom(address,address,uint256)`" in out
        assert 'const TRANSFER_FROM_SELECTOR: [u8; 4] = hex!["23b872dd"];' in out
        assert (
            "pub fn transfer_from(&mut self, from: H160, to: H160, amount: U256) -> bool {"
            in out
        )
        assert "let encoded_input = Self::transfer_from_encode(from, to, amount);" in out
        assert "fn transfer_from_encode(from: H160, to: H160, amount: U256) -> Vec<u8> {" in out
        assert "let input = [from.tokenize(), to.tokenize(), amount.tokenize()];" in out
        assert "let mut encoded = TRANSFER_FROM_SELECTOR.to_vec();" in out

    def test_function_without_inputs(self, renderer: ModuleRenderer) -> None:
        module = Module(name="m", evm_identifier="1", functions=(_pause(),))
        out = renderer.render(module)
        assert "pub fn pause(&mut self) -> bool {" in out
        assert "let encoded_input = Self::pause_encode();" in out
        assert "fn pause_encode() -> Vec<u8> {" in out
        assert "let input = [];" in out

    def test_functions_in_order(self, renderer: ModuleRenderer) -> None:
        module = Module(
            name="m", evm_identifier="1", functions=(_transfer_from(), _pause())
        )
        out = renderer.render(module)
        assert out.index("fn transfer_from(") < out.index("fn pause(")
        assert out.index("TRANSFER_FROM_SELECTOR") < out.index("PAUSE_SELECTOR")

    def test_no_leftover_template_syntax(self, renderer: ModuleRenderer) -> None:
        module = Module(name="m", evm_identifier="1", functions=(_transfer_from(),))
        out = renderer.render(module)
        assert "{{" not in out
        assert "{%" not in out

    def test_deterministic(self, renderer: ModuleRenderer) -> None:
        module = Module(name="m", evm_identifier="1", functions=(_transfer_from(),))
        assert renderer.render(module) == ModuleRenderer(build_filters()).render(module)


class TestTemplateLoading:
    def test_missing_template(self, tmp_path: Path) -> None:
        renderer = ModuleRenderer(build_filters(), template_dir=tmp_path)
        with pytest.raises(RenderError, match="not found"):
            renderer.render(Module(name="m", evm_identifier="1"))

    def test_custom_template(self, tmp_path: Path) -> None:
        (tmp_path / "short.rs.j2").write_text("mod {{ name | snake }};\n", encoding="utf-8")
        renderer = ModuleRenderer(
            build_filters(), template_dir=tmp_path, template_name="short.rs.j2"
        )
        assert renderer.render(Module(name="MyToken", evm_identifier="1")) == "mod my_token;\n"

    def test_template_syntax_error(self, tmp_path: Path) -> None:
        (tmp_path / "bad.rs.j2").write_text("{% if %}\n", encoding="utf-8")
        renderer = ModuleRenderer(build_filters(), template_dir=tmp_path, template_name="bad.rs.j2")
        with pytest.raises(RenderError, match="bad.rs.j2"):
            renderer.render(Module(name="m", evm_identifier="1"))
