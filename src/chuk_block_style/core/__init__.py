"""
Core algorithms - pure functions over strings.

This module provides:
- Style key composition and kebab-casing
- Separator extraction for shapes and values
- Token expansion and grammar parsing into shapes
"""

from chuk_block_style.core.keys import compose_style_key, compose_style_keys, to_kebab_case
from chuk_block_style.core.separators import (
    extract_separator,
    extract_separators,
    join_components,
    split_components,
)
from chuk_block_style.core.syntax import expand_tokens, parse_production, parse_syntax

__all__ = [
    "compose_style_key",
    "compose_style_keys",
    "expand_tokens",
    "extract_separator",
    "extract_separators",
    "join_components",
    "parse_production",
    "parse_syntax",
    "split_components",
    "to_kebab_case",
]
