"""
Style system - property definitions, contexts and cascade resolution.

Definitions are seeded from YAML at startup, registered into explicit
registry objects, and consulted by the resolver and the block manager.
"""

from chuk_block_style.styles.contexts import ContextRegistry
from chuk_block_style.styles.loader import DefinitionLoader
from chuk_block_style.styles.registry import StyleRegistry
from chuk_block_style.styles.resolver import (
    cascade_paths,
    property_keys,
    resolve_block_styles,
    resolve_shorthand,
    resolve_style,
    resolve_style_value,
)

__all__ = [
    "ContextRegistry",
    "DefinitionLoader",
    "StyleRegistry",
    "cascade_paths",
    "property_keys",
    "resolve_block_styles",
    "resolve_shorthand",
    "resolve_style",
    "resolve_style_value",
]
