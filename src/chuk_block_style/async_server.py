#!/usr/bin/env python3
"""
Async Block Style MCP Server using chuk-mcp-server

This server exposes the style grammar and cascade engine of a visual
block builder as MCP tools.

The server provides tools for:
- Discovering style properties, their grammars and value shapes
- Validating values and describing editor options per value slot
- Writing and clearing values per device/orientation/pseudo-state
- Resolving effective values through the cascade
- Rendering block styles as CSS
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_block_style.blocks import BlockStyleManager
from chuk_block_style.constants import LIBRARY_PATH_ENV, PROJECT_PATH_ENV
from chuk_block_style.styles import DefinitionLoader
from chuk_block_style.tools import (
    register_block_tools,
    register_css_tools,
    register_definition_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-block-style")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
LIBRARY_PATH = Path(os.environ.get(LIBRARY_PATH_ENV, Path(__file__).parent / "styles" / "library"))
PROJECT_PATH = Path(os.environ.get(PROJECT_PATH_ENV, BASE_PATH / "styles"))

# Load definitions and create managers
definition_loader = DefinitionLoader(
    library_path=LIBRARY_PATH,
    project_path=PROJECT_PATH,
)
style_registry = definition_loader.build_registry()
context_registry = definition_loader.build_contexts()
block_manager = BlockStyleManager(style_registry, context_registry)

# Register all tools
definition_tools = register_definition_tools(mcp, style_registry)
block_tools = register_block_tools(mcp, block_manager)
css_tools = register_css_tools(mcp, block_manager)

# Export tool functions for direct access
style_list_properties = definition_tools["style_list_properties"]
style_describe_property = definition_tools["style_describe_property"]
style_list_tokens = definition_tools["style_list_tokens"]
style_validate_value = definition_tools["style_validate_value"]
style_property_options = definition_tools["style_property_options"]

style_create_block = block_tools["style_create_block"]
style_set = block_tools["style_set"]
style_remove = block_tools["style_remove"]
style_resolve = block_tools["style_resolve"]
style_resolve_block = block_tools["style_resolve_block"]
style_delete_block = block_tools["style_delete_block"]

style_render_css = css_tools["style_render_css"]
style_render_rule = css_tools["style_render_rule"]

logger.info("CHUK Block Style MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Project path: {PROJECT_PATH}")
