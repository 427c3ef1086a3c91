"""
CSS tools - MCP tools for rendering block styles as CSS.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_block_style.blocks import BlockStyleManager
from chuk_block_style.compiler import render_block_css, render_stylesheet, rule_for, selector_for
from chuk_block_style.constants import ALL_KEY

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_css_tools(
    mcp: ChukMCPServer,
    manager: BlockStyleManager,
) -> dict[str, Any]:
    """
    Register CSS rendering tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The block style manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def style_render_css(
        block_id: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
        media_queries: bool = False,
    ) -> str:
        """
        Render a block's CSS.

        With pseudo 'all' the generic rule is followed by one rule per
        pseudo-state; with a concrete pseudo a preview rule is rendered
        under the plain selector. With media_queries the generic rule is
        followed by one @media block per device instead.

        Args:
            block_id: Block identifier
            device: Active device key
            orientation: Active orientation key
            pseudo: Pseudo-state to render (default: 'all')
            media_queries: Render per-device media queries

        Returns:
            JSON string with the CSS text

        Example:
            style_render_css(block_id="hero", pseudo="hover")
        """
        try:
            value_map = manager.snapshot(block_id)
            if value_map is None:
                return json.dumps({"status": "error", "message": f"Block not found: {block_id}"})

            manager.freeze()
            if media_queries:
                css = render_stylesheet(
                    block_id, value_map, manager.registry, manager.contexts, orientation
                )
            else:
                css = render_block_css(
                    block_id,
                    value_map,
                    manager.registry,
                    manager.contexts,
                    device,
                    orientation,
                    pseudo,
                )
            return json.dumps({"status": "success", "block_id": block_id, "css": css})
        except Exception as e:
            logger.exception("Failed to render CSS")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_render_css"] = style_render_css

    @mcp.tool  # type: ignore[arg-type]
    async def style_render_rule(
        block_id: str,
        properties: dict[str, str],
        pseudo: str = ALL_KEY,
    ) -> str:
        """
        Render a CSS rule for an explicit property map.

        Args:
            block_id: Block identifier used for the selector
            properties: property -> value map, rendered in the given order
            pseudo: Pseudo-state suffix for the selector (default: 'all' = none)

        Returns:
            JSON string with the selector and rule text

        Example:
            style_render_rule(block_id="1", properties={"opacity": "0.5"})
        """
        try:
            selector = selector_for(block_id, pseudo)
            return json.dumps(
                {"status": "success", "selector": selector, "css": rule_for(selector, properties)}
            )
        except Exception as e:
            logger.exception("Failed to render rule")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_render_rule"] = style_render_rule

    return tools
