"""
Tests for MCP tools.

Tests the MCP tool implementations for property discovery, block value
maps and CSS rendering.
"""

import json

import pytest

from chuk_block_style.blocks import BlockStyleManager
from chuk_block_style.styles import StyleRegistry


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


class TestDefinitionTools:
    """Tests for property definition tools."""

    @pytest.mark.asyncio
    async def test_registers_tools(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        mcp = MockMCPServer("test")
        tools = register_definition_tools(mcp, registry)

        assert set(tools) == set(mcp.tools)
        assert "style_describe_property" in tools

    @pytest.mark.asyncio
    async def test_list_properties(self, registry: StyleRegistry):
        """List properties filtered by prefix."""
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_list_properties"](prefix="padding"))
        assert data["status"] == "success"
        assert data["count"] == 5
        assert data["properties"][0]["key"] == "padding"
        assert data["properties"][0]["shorthand"] is True

    @pytest.mark.asyncio
    async def test_describe_property(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_describe_property"](key="opacity"))
        assert data["status"] == "success"
        assert data["property"]["initial"] == "1"
        assert data["property"]["shapes"] == [
            {"shape": "<number [0,1]>", "normalized": "<number>", "separators": []}
        ]

    @pytest.mark.asyncio
    async def test_describe_limits_shapes(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_describe_property"](key="padding", limit=3))
        assert len(data["property"]["shapes"]) == 3
        assert data["property"]["shape_count"] > 3
        assert data["property"]["longhand"][0] == "padding-top"

    @pytest.mark.asyncio
    async def test_describe_missing_property(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_describe_property"](key="sparkle"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_validate_value(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        valid = json.loads(await tools["style_validate_value"](key="padding", value="10px 20px"))
        assert valid["valid"] is True
        assert valid["normalized"] == "<length> <length>"

        invalid = json.loads(await tools["style_validate_value"](key="opacity", value="2"))
        assert invalid["valid"] is False
        assert invalid["issues"][0]["code"] == "INVALID_VALUE"

    @pytest.mark.asyncio
    async def test_list_tokens(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_list_tokens"]())
        assert data["count"] > 0
        assert "dimension" in data["token_types"]

    @pytest.mark.asyncio
    async def test_property_options(self, registry: StyleRegistry):
        from chuk_block_style.tools.definitions import register_definition_tools

        tools = register_definition_tools(MockMCPServer("test"), registry)

        data = json.loads(await tools["style_property_options"](key="width"))
        assert data["status"] == "success"
        names = [option["name"] for option in data["slots"][0]]
        assert "auto" in names
        assert "px" in names


class TestBlockTools:
    """Tests for block tools."""

    @pytest.mark.asyncio
    async def test_create_set_resolve(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)

        created = json.loads(await tools["style_create_block"](block_id="hero"))
        assert created["status"] == "success"
        assert created["styles"]["all"]["all"]["all"]["opacity"] == "1"

        written = json.loads(
            await tools["style_set"](
                block_id="hero", property_key="opacity", value="0.5", pseudo="hover"
            )
        )
        assert written["status"] == "success"
        assert written["shape"] == "<number [0,1]>"

        resolved = json.loads(
            await tools["style_resolve"](
                block_id="hero",
                property_key="opacity",
                device="desktop-lg",
                orientation="landscape",
                pseudo="hover",
            )
        )
        assert resolved["value"] == "0.5"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)

        await tools["style_create_block"](block_id="hero")
        data = json.loads(await tools["style_create_block"](block_id="hero"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_set_invalid(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)
        await tools["style_create_block"](block_id="hero")

        data = json.loads(
            await tools["style_set"](block_id="hero", property_key="opacity", value="loud")
        )
        assert data["status"] == "error"
        assert data["issues"][0]["code"] == "INVALID_VALUE"

    @pytest.mark.asyncio
    async def test_remove(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)
        await tools["style_create_block"](block_id="hero")
        await tools["style_set"](block_id="hero", property_key="opacity", value="0.2", device="mobile-sm")

        removed = json.loads(
            await tools["style_remove"](block_id="hero", property_key="opacity", device="mobile-sm")
        )
        assert removed["status"] == "success"

        resolved = json.loads(
            await tools["style_resolve"](block_id="hero", property_key="opacity", device="mobile-sm")
        )
        assert resolved["value"] == "1"

    @pytest.mark.asyncio
    async def test_resolve_block_and_delete(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)
        await tools["style_create_block"](block_id="hero", seed_initial=False)
        await tools["style_set"](block_id="hero", property_key="color", value="red")

        data = json.loads(await tools["style_resolve_block"](block_id="hero"))
        assert data["styles"] == {"color": "red"}

        deleted = json.loads(await tools["style_delete_block"](block_id="hero"))
        assert deleted["status"] == "success"

        missing = json.loads(await tools["style_resolve_block"](block_id="hero"))
        assert missing["status"] == "error"

    @pytest.mark.asyncio
    async def test_resolve_unknown_block(self, manager: BlockStyleManager):
        from chuk_block_style.tools.blocks import register_block_tools

        tools = register_block_tools(MockMCPServer("test"), manager)

        data = json.loads(await tools["style_resolve"](block_id="ghost", property_key="opacity"))
        assert data["status"] == "error"


class TestCssTools:
    """Tests for CSS tools."""

    @pytest.mark.asyncio
    async def test_render_css(self, manager: BlockStyleManager):
        from chuk_block_style.tools.css import register_css_tools

        tools = register_css_tools(MockMCPServer("test"), manager)
        manager.create_block("1", seed_initial=False)
        manager.set_style("1", "all", "all", "all", "opacity", "0.5")
        manager.set_style("1", "all", "all", "hover", "opacity", "0.8")

        data = json.loads(await tools["style_render_css"](block_id="1"))
        assert data["status"] == "success"
        assert data["css"] == (
            "#block-1 {\n  opacity: 0.5;\n}\n\n#block-1:hover {\n  opacity: 0.8;\n}"
        )
        assert manager.registry.frozen

    @pytest.mark.asyncio
    async def test_render_media_queries(self, manager: BlockStyleManager):
        from chuk_block_style.tools.css import register_css_tools

        tools = register_css_tools(MockMCPServer("test"), manager)
        manager.create_block("1", seed_initial=False)
        manager.set_style("1", "all", "all", "all", "opacity", "0.5")
        manager.set_style("1", "mobile-sm", "all", "all", "opacity", "1")

        data = json.loads(await tools["style_render_css"](block_id="1", media_queries=True))
        assert "@media (min-width: 0px) and (max-width: 480px) {" in data["css"]
        assert data["css"].count("opacity: 1;") == 1

    @pytest.mark.asyncio
    async def test_render_missing_block(self, manager: BlockStyleManager):
        from chuk_block_style.tools.css import register_css_tools

        tools = register_css_tools(MockMCPServer("test"), manager)

        data = json.loads(await tools["style_render_css"](block_id="ghost"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_render_rule(self, manager: BlockStyleManager):
        from chuk_block_style.tools.css import register_css_tools

        tools = register_css_tools(MockMCPServer("test"), manager)

        data = json.loads(
            await tools["style_render_rule"](block_id="1", properties={"opacity": "0.5"})
        )
        assert data["selector"] == "#block-1"
        assert data["css"] == "#block-1 {\n  opacity: 0.5;\n}"
