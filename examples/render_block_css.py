#!/usr/bin/env python3
"""
Example: Styling a block across devices and states.

This demonstrates the full flow: load the definition library, create a
block, write values at a few context coordinates, resolve them through
the cascade and render the block's CSS.

Usage:
    python examples/render_block_css.py
"""

from pathlib import Path

from chuk_block_style.blocks import BlockStyleManager
from chuk_block_style.compiler import render_block_css, render_stylesheet
from chuk_block_style.styles import DefinitionLoader


def main() -> None:
    """Demonstrate block styling."""
    print("CHUK Block Style Demo")
    print("=" * 40)
    print()

    library_path = Path(__file__).parent.parent / "src/chuk_block_style/styles/library"
    loader = DefinitionLoader(library_path)
    registry = loader.build_registry()
    contexts = loader.build_contexts()
    manager = BlockStyleManager(registry, contexts)

    print(f"Loaded {len(registry.list_style_definitions())} properties")
    print(f"Padding shapes: {len(registry.get_shapes('padding') or [])}")
    print()

    manager.create_block("hero")
    writes = [
        ("all", "all", "all", "padding", "16px"),
        ("all", "all", "all", "background-color", "#1e293b"),
        ("all", "all", "hover", "opacity", "0.8"),
        ("mobile-sm", "all", "all", "padding", "8px"),
        ("mobile-sm", "portrait", "all", "display", "flex"),
        ("all", "all", "all", "opacity", "loud"),
    ]
    for device, orientation, pseudo, key, value in writes:
        result = manager.set_style("hero", device, orientation, pseudo, key, value)
        status = "ok" if result else f"rejected ({result.errors[0].code})"
        print(f"  {device}/{orientation}/{pseudo} {key}={value!r}: {status}")
    print()

    print("Resolved values:")
    for device, orientation, pseudo in [
        ("desktop-lg", "landscape", "all"),
        ("desktop-lg", "landscape", "hover"),
        ("mobile-sm", "portrait", "hover"),
    ]:
        padding = manager.resolve_style("hero", "padding", device, orientation, pseudo)
        opacity = manager.resolve_style("hero", "opacity", device, orientation, pseudo)
        print(f"  {device}/{orientation}/{pseudo}: padding={padding} opacity={opacity}")
    print()

    value_map = manager.snapshot("hero") or {}
    print("CSS (desktop):")
    print(render_block_css("hero", value_map, registry, contexts, "desktop-lg", "landscape"))
    print()
    print("Stylesheet with media queries:")
    print(render_stylesheet("hero", value_map, registry, contexts))


if __name__ == "__main__":
    main()
