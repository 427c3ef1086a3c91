"""
MCP tool implementations.

Tools are organized by domain:
- definitions - Property and token discovery, value validation
- blocks - Block value maps, writes and cascade resolution
- css - CSS rendering
"""

from chuk_block_style.tools.blocks import register_block_tools
from chuk_block_style.tools.css import register_css_tools
from chuk_block_style.tools.definitions import register_definition_tools

__all__ = [
    "register_block_tools",
    "register_css_tools",
    "register_definition_tools",
]
