"""
Definition tools - MCP tools for property and token discovery.

Tools for listing style properties, describing their grammar and
shapes, and validating candidate values.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_block_style.blocks import StyleValueValidator
from chuk_block_style.styles import StyleRegistry

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)

# Shapes returned by style_describe_property unless a limit is given
DEFAULT_SHAPE_LIMIT = 50


def register_definition_tools(
    mcp: ChukMCPServer,
    registry: StyleRegistry,
) -> dict[str, Any]:
    """
    Register property definition tools with the MCP server.

    Args:
        mcp: The MCP server instance
        registry: The style definition registry

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    validator = StyleValueValidator(registry)

    @mcp.tool  # type: ignore[arg-type]
    async def style_list_properties(prefix: str | None = None) -> str:
        """
        List registered style properties.

        Args:
            prefix: Only list properties whose key starts with this (e.g., 'border')

        Returns:
            JSON string with property summaries

        Example:
            style_list_properties(prefix="padding")
        """
        try:
            definitions = registry.list_style_definitions()
            if prefix:
                definitions = [d for d in definitions if d.key.startswith(prefix)]

            return json.dumps(
                {
                    "status": "success",
                    "properties": [
                        {
                            "key": d.key,
                            "syntax": d.syntax,
                            "description": d.description,
                            "shorthand": d.is_shorthand,
                        }
                        for d in definitions
                    ],
                    "count": len(definitions),
                }
            )
        except Exception as e:
            logger.exception("Failed to list properties")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_list_properties"] = style_list_properties

    @mcp.tool  # type: ignore[arg-type]
    async def style_describe_property(key: str, limit: int = DEFAULT_SHAPE_LIMIT) -> str:
        """
        Describe a style property.

        Returns the raw and expanded grammar, the concrete shapes a value
        may take (with their separators) and the longhands of a shorthand.

        Args:
            key: Property key (e.g., 'border-radius')
            limit: Maximum number of shapes to return

        Returns:
            JSON string with the property description

        Example:
            style_describe_property(key="opacity")
        """
        try:
            definition = registry.get_style_definition(key)
            if definition is None:
                return json.dumps({"status": "error", "message": f"Property not found: {key}"})

            shapes = registry.get_shapes(key) or []
            separators = registry.get_separators(key) or []
            normalized = registry.get_normalized_shapes(key) or []

            return json.dumps(
                {
                    "status": "success",
                    "property": {
                        "key": definition.key,
                        "syntax": definition.syntax,
                        "expanded": registry.get_expanded_syntax(key),
                        "description": definition.description,
                        "longhand": registry.get_longhand(definition),
                        "icons": definition.icons,
                        "initial": definition.initial,
                        "shape_count": len(shapes),
                        "shapes": [
                            {"shape": shape, "normalized": norm, "separators": seps}
                            for shape, norm, seps in list(zip(shapes, normalized, separators))[
                                :limit
                            ]
                        ],
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe property")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_describe_property"] = style_describe_property

    @mcp.tool  # type: ignore[arg-type]
    async def style_list_tokens() -> str:
        """
        List the tokens property grammars are written with.

        Returns:
            JSON string with token definitions and token types

        Example:
            style_list_tokens()
        """
        try:
            tokens = registry.list_token_definitions()
            return json.dumps(
                {
                    "status": "success",
                    "tokens": [t.model_dump() for t in tokens],
                    "token_types": [t.name for t in registry.token_types.list_token_types()],
                    "count": len(tokens),
                }
            )
        except Exception as e:
            logger.exception("Failed to list tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_list_tokens"] = style_list_tokens

    @mcp.tool  # type: ignore[arg-type]
    async def style_validate_value(key: str, value: str) -> str:
        """
        Check a value against a property's grammar.

        Args:
            key: Property key
            value: Candidate value (e.g., '10px 20px')

        Returns:
            JSON string with validity, the matched shape and any issues

        Example:
            style_validate_value(key="padding", value="10px 20px")
        """
        try:
            result = validator.validate(key, value)
            return json.dumps(
                {
                    "status": "success",
                    "valid": result.is_valid,
                    "shape": result.shape,
                    "normalized": validator.normalize_value(value) if value else "",
                    "issues": [issue.to_dict() for issue in result.issues],
                }
            )
        except Exception as e:
            logger.exception("Failed to validate value")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_validate_value"] = style_validate_value

    @mcp.tool  # type: ignore[arg-type]
    async def style_property_options(key: str) -> str:
        """
        Editor options for each value slot of a property.

        Slot i lists the options a widget can offer for the i-th
        component of the value: keywords (with icons), units for
        dimensions with their ranges, color pickers, functions.

        Args:
            key: Property key

        Returns:
            JSON string with option descriptors per slot

        Example:
            style_property_options(key="width")
        """
        try:
            slots = registry.get_slot_options(key)
            if slots is None:
                return json.dumps({"status": "error", "message": f"Property not found: {key}"})

            return json.dumps(
                {
                    "status": "success",
                    "key": key,
                    "slots": [
                        [option.model_dump(mode="json", exclude_none=True) for option in slot]
                        for slot in slots
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to build property options")
            return json.dumps({"status": "error", "message": str(e)})

    tools["style_property_options"] = style_property_options

    return tools
