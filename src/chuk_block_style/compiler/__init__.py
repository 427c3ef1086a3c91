"""
Compiler - turns resolved styles into CSS text.
"""

from chuk_block_style.compiler.css import (
    declarations_for,
    render_block_css,
    render_stylesheet,
    rule_for,
    selector_for,
)

__all__ = [
    "declarations_for",
    "render_block_css",
    "render_stylesheet",
    "rule_for",
    "selector_for",
]
