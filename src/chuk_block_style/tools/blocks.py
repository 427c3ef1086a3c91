"""
Block tools - MCP tools for block value maps.

Tools for creating blocks, writing and clearing values at a context
coordinate, and resolving effective values through the cascade.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_block_style.blocks import BlockStyleManager, ValidationResult
from chuk_block_style.constants import ALL_KEY

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _write_response(result: ValidationResult, **fields: Any) -> str:
    if not result:
        return json.dumps(
            {
                "status": "error",
                "message": "; ".join(issue.message for issue in result.errors),
                "issues": [issue.to_dict() for issue in result.issues],
            }
        )
    return json.dumps({"status": "success", **fields})


def register_block_tools(
    mcp: ChukMCPServer,
    manager: BlockStyleManager,
) -> dict[str, Any]:
    """
    Register block style tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The block style manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def style_create_block(
        block_id: str,
        defaults: dict[str, str] | None = None,
        seed_initial: bool = True,
    ) -> str:
        """
        Create a block value map.

        The generic (all, all, all) coordinate is seeded with each
        property's declared initial value plus the given defaults.

        Args:
            block_id: Unique block identifier
            defaults: Extra property values to seed (e.g., {"opacity": "0.8"})
            seed_initial: Seed declared initial values (default: True)

        Returns:
            JSON string with the seeded values and any skipped defaults

        Example:
            style_create_block(block_id="hero", defaults={"display": "flex"})
        """
        try:
            result = manager.create_block(block_id, defaults, seed_initial)
            return json.dumps(
                {
                    "status": "success",
                    "block_id": block_id,
                    "styles": manager.snapshot(block_id),
                    "warnings": [issue.to_dict() for issue in result.warnings],
                }
            )
        except Exception as e:
            logger.exception("Failed to create block")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_create_block"] = style_create_block

    @mcp.tool  # type: ignore[arg-type]
    async def style_set(
        block_id: str,
        property_key: str,
        value: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
    ) -> str:
        """
        Set a property value at one context coordinate.

        The value must match the property's grammar. Invalid values are
        rejected and nothing is written.

        Args:
            block_id: Block identifier
            property_key: Property key (e.g., 'padding')
            value: Property value (e.g., '10px 20px')
            device: Device key (default: 'all')
            orientation: Orientation key (default: 'all')
            pseudo: Pseudo-state key (default: 'all')

        Returns:
            JSON string with the written coordinate

        Example:
            style_set(block_id="hero", property_key="opacity", value="0.5", pseudo="hover")
        """
        try:
            result = manager.set_style(block_id, device, orientation, pseudo, property_key, value)
            return _write_response(
                result,
                block_id=block_id,
                property_key=property_key,
                value=value,
                shape=result.shape,
                context={"device": device, "orientation": orientation, "pseudo": pseudo},
            )
        except Exception as e:
            logger.exception("Failed to set style")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_set"] = style_set

    @mcp.tool  # type: ignore[arg-type]
    async def style_remove(
        block_id: str,
        property_key: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
    ) -> str:
        """
        Clear a property at one context coordinate.

        Less specific coordinates are untouched, so the cascade falls
        back to them.

        Args:
            block_id: Block identifier
            property_key: Property key
            device: Device key (default: 'all')
            orientation: Orientation key (default: 'all')
            pseudo: Pseudo-state key (default: 'all')

        Returns:
            JSON string confirming the cleared coordinate

        Example:
            style_remove(block_id="hero", property_key="opacity", pseudo="hover")
        """
        try:
            result = manager.remove_style(block_id, device, orientation, pseudo, property_key)
            return _write_response(
                result,
                block_id=block_id,
                property_key=property_key,
                context={"device": device, "orientation": orientation, "pseudo": pseudo},
            )
        except Exception as e:
            logger.exception("Failed to remove style")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_remove"] = style_remove

    @mcp.tool  # type: ignore[arg-type]
    async def style_resolve(
        block_id: str,
        property_key: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
        use_initial: bool = False,
    ) -> str:
        """
        Resolve the effective value of one property.

        Args:
            block_id: Block identifier
            property_key: Property key
            device: Active device key
            orientation: Active orientation key
            pseudo: Active pseudo-state key
            use_initial: Fall back to the declared initial value

        Returns:
            JSON string with the value (null when unset)

        Example:
            style_resolve(block_id="hero", property_key="opacity", device="mobile-sm")
        """
        try:
            if not manager.has_block(block_id):
                return json.dumps({"status": "error", "message": f"Block not found: {block_id}"})

            value = manager.resolve_style(
                block_id, property_key, device, orientation, pseudo, use_initial
            )
            return json.dumps(
                {
                    "status": "success",
                    "block_id": block_id,
                    "property_key": property_key,
                    "value": value,
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve style")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_resolve"] = style_resolve

    @mcp.tool  # type: ignore[arg-type]
    async def style_resolve_block(
        block_id: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
    ) -> str:
        """
        Resolve every property of a block in a context.

        Args:
            block_id: Block identifier
            device: Active device key
            orientation: Active orientation key
            pseudo: Active pseudo-state key

        Returns:
            JSON string with the flat property map

        Example:
            style_resolve_block(block_id="hero", device="desktop-lg", pseudo="hover")
        """
        try:
            styles = manager.resolve_block(block_id, device, orientation, pseudo)
            if styles is None:
                return json.dumps({"status": "error", "message": f"Block not found: {block_id}"})

            return json.dumps({"status": "success", "block_id": block_id, "styles": styles})
        except Exception as e:
            logger.exception("Failed to resolve block")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_resolve_block"] = style_resolve_block

    @mcp.tool  # type: ignore[arg-type]
    async def style_delete_block(block_id: str) -> str:
        """
        Delete a block value map.

        Args:
            block_id: Block identifier

        Returns:
            JSON string confirming deletion

        Example:
            style_delete_block(block_id="hero")
        """
        try:
            if not manager.delete_block(block_id):
                return json.dumps({"status": "error", "message": f"Block not found: {block_id}"})
            return json.dumps({"status": "success", "message": f"Deleted block: {block_id}"})
        except Exception as e:
            logger.exception("Failed to delete block")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_delete_block"] = style_delete_block

    return tools
