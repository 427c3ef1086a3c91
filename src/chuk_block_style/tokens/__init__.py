"""
Token types - classifiers for the primitive literal values of a grammar.

This module provides:
- TokenType: a value family (color, dimension, keyword, ...)
- TokenTypeRegistry: ordered first-match dispatch over types
- default_token_types: the built-in families
"""

from chuk_block_style.tokens.registry import TokenTypeRegistry
from chuk_block_style.tokens.types import (
    OptionContext,
    TokenType,
    canonical_token,
    default_token_types,
    token_param,
)

__all__ = [
    "OptionContext",
    "TokenType",
    "TokenTypeRegistry",
    "canonical_token",
    "default_token_types",
    "token_param",
]
