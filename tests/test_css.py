"""
Tests for CSS emission.
"""

import pytest

from chuk_block_style.compiler import (
    declarations_for,
    render_block_css,
    render_stylesheet,
    rule_for,
    selector_for,
)
from chuk_block_style.models import DeviceDefinition, PseudoDefinition
from chuk_block_style.styles import ContextRegistry


@pytest.fixture
def hover_contexts() -> ContextRegistry:
    contexts = ContextRegistry()
    contexts.register_pseudo(PseudoDefinition(key="hover", name="Hover"))
    contexts.register_pseudo(PseudoDefinition(key="focus", name="Focus"))
    return contexts


class TestSelectors:
    """Tests for selector_for."""

    def test_plain(self):
        assert selector_for("1") == "#block-1"

    def test_pseudo(self):
        assert selector_for("1", "hover") == "#block-1:hover"

    def test_generic_pseudo(self):
        assert selector_for("1", "all") == "#block-1"


class TestRules:
    """Tests for declarations_for and rule_for."""

    def test_single_declaration(self):
        css = rule_for("#block-1", {"opacity": "0.5"})
        assert css == "#block-1 {\n  opacity: 0.5;\n}"
        assert css.count("opacity: 0.5;") == 1

    def test_declaration_order_and_kebab_case(self):
        body = declarations_for({"zIndex": "1", "backgroundColor": "red"})
        assert body == "  z-index: 1;\n  background-color: red;"

    def test_falsy_values_skipped(self):
        assert declarations_for({"color": "", "opacity": None, "width": "auto"}) == "  width: auto;"

    def test_empty_map(self):
        assert rule_for("#block-1", {}) == ""
        assert rule_for("#block-1", {"color": ""}) == ""

    def test_indent(self):
        assert rule_for("#b", {"color": "red"}, indent=1) == "  #b {\n    color: red;\n  }"


class TestRenderBlockCss:
    """Tests for render_block_css."""

    def test_generic_then_pseudo_rules(self, hover_contexts: ContextRegistry):
        """Pseudo rules carry only the values that differ from the generic rule."""
        value_map = {
            "all": {
                "all": {
                    "all": {"color": "red", "opacity": "1"},
                    "hover": {"color": "blue", "opacity": "1"},
                }
            }
        }
        css = render_block_css("1", value_map, None, hover_contexts)

        assert css == (
            "#block-1 {\n  color: red;\n  opacity: 1;\n}\n\n#block-1:hover {\n  color: blue;\n}"
        )

    def test_pseudo_preview(self, hover_contexts: ContextRegistry):
        """A concrete pseudo renders a preview rule under the plain selector."""
        value_map = {"all": {"all": {"all": {"color": "red"}, "hover": {"color": "blue"}}}}
        css = render_block_css("1", value_map, None, hover_contexts, pseudo="hover")
        assert css == "#block-1 {\n  color: blue;\n}"

    def test_device_context(self, hover_contexts: ContextRegistry):
        value_map = {
            "all": {"all": {"all": {"color": "red"}}},
            "mobile-sm": {"all": {"all": {"color": "green"}}},
        }
        css = render_block_css("1", value_map, None, hover_contexts, device="mobile-sm")
        assert css == "#block-1 {\n  color: green;\n}"

    def test_empty_block(self, hover_contexts: ContextRegistry):
        assert render_block_css("1", {}, None, hover_contexts) == ""


class TestRenderStylesheet:
    """Tests for render_stylesheet."""

    def test_media_queries(self):
        contexts = ContextRegistry()
        contexts.register_device(DeviceDefinition(key="mobile-sm", name="Mobile", media_max=480))
        contexts.register_device(
            DeviceDefinition(key="desktop-lg", name="Desktop", media_min=1920)
        )
        value_map = {
            "all": {"all": {"all": {"color": "red", "opacity": "1"}}},
            "mobile-sm": {"all": {"all": {"color": "green"}}},
        }

        css = render_stylesheet("1", value_map, None, contexts)

        assert css == (
            "#block-1 {\n  color: red;\n  opacity: 1;\n}\n\n"
            "@media (max-width: 480px) {\n  #block-1 {\n    color: green;\n  }\n}"
        )
