"""
CSS Emitter - serializes resolved property maps into CSS text.

Declarations keep the insertion order of the property map, property keys
are written in kebab-case and falsy values are skipped. Indentation is
two spaces per level.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from chuk_block_style.constants import ALL_KEY
from chuk_block_style.core.keys import to_kebab_case
from chuk_block_style.styles.contexts import ContextRegistry
from chuk_block_style.styles.registry import StyleRegistry
from chuk_block_style.styles.resolver import ValueMap, resolve_block_styles

logger = logging.getLogger(__name__)

INDENT = "  "


def selector_for(block_id: str, pseudo_key: str = ALL_KEY) -> str:
    """
    CSS selector for a block.

    Example:
        selector_for("1") -> "#block-1"
        selector_for("1", "hover") -> "#block-1:hover"
    """
    selector = f"#block-{block_id}"
    if pseudo_key and pseudo_key != ALL_KEY:
        selector += f":{pseudo_key}"
    return selector


def declarations_for(property_map: Mapping[str, str | None], indent: int = 1) -> str:
    """
    Serialize a flat property map into declaration lines.

    Args:
        property_map: property -> value, in output order
        indent: Indentation level of each line

    Returns:
        One ``property: value;`` line per truthy value, newline separated
    """
    prefix = INDENT * indent
    return "\n".join(
        f"{prefix}{to_kebab_case(key)}: {value};" for key, value in property_map.items() if value
    )


def rule_for(selector: str, property_map: Mapping[str, str | None], indent: int = 0) -> str:
    """
    Wrap declarations in a selector block.

    Returns:
        The CSS rule, or "" when the map has no truthy values

    Example:
        rule_for("#block-1", {"opacity": "0.5"})
        -> "#block-1 {\\n  opacity: 0.5;\\n}"
    """
    body = declarations_for(property_map, indent + 1)
    if not body:
        return ""
    prefix = INDENT * indent
    return f"{prefix}{selector} {{\n{body}\n{prefix}}}"


def render_block_css(
    block_id: str,
    value_map: ValueMap,
    registry: StyleRegistry | None = None,
    contexts: ContextRegistry | None = None,
    device: str = ALL_KEY,
    orientation: str = ALL_KEY,
    pseudo: str = ALL_KEY,
) -> str:
    """
    Render the CSS of one block in a device/orientation context.

    With pseudo "all" the generic rule is emitted first followed by one
    rule per registered pseudo-state, each under its pseudo selector and
    holding only the values that differ from the generic rule. With a
    concrete pseudo a single preview rule is emitted under the plain
    selector, so the state can be previewed without interacting.

    Args:
        block_id: Block identifier
        value_map: The block's per-context values
        registry: Registry used to skip unknown properties
        contexts: Registered pseudo-states, only needed for pseudo "all"
        device: Active device key
        orientation: Active orientation key
        pseudo: Pseudo-state to render, "all" for every state

    Returns:
        CSS text, rules separated by a blank line
    """
    if pseudo != ALL_KEY:
        resolved = resolve_block_styles(value_map, registry, device, orientation, pseudo)
        return rule_for(selector_for(block_id), resolved)

    base = resolve_block_styles(value_map, registry, device, orientation, ALL_KEY)
    rules = [rule_for(selector_for(block_id), base)]

    pseudo_keys = [p.key for p in contexts.pseudos] if contexts else []
    for pseudo_key in pseudo_keys:
        if pseudo_key == ALL_KEY:
            continue
        resolved = resolve_block_styles(value_map, registry, device, orientation, pseudo_key)
        changed = {key: value for key, value in resolved.items() if base.get(key) != value}
        rules.append(rule_for(selector_for(block_id, pseudo_key), changed))

    css = "\n\n".join(rule for rule in rules if rule)
    logger.debug(f"Rendered {len(css)} characters of CSS for block {block_id}")
    return css


def render_stylesheet(
    block_id: str,
    value_map: ValueMap,
    registry: StyleRegistry | None,
    contexts: ContextRegistry,
    orientation: str = ALL_KEY,
) -> str:
    """
    Render a block's generic rule plus one media query per device.

    Each device block only carries the values that differ from the
    generic rule; devices without differences are omitted.
    """
    generic = resolve_block_styles(value_map, registry, ALL_KEY, orientation, ALL_KEY)
    parts = [rule_for(selector_for(block_id), generic)]

    for device in contexts.devices:
        query = device.media_query()
        if device.key == ALL_KEY or not query:
            continue
        resolved = resolve_block_styles(value_map, registry, device.key, orientation, ALL_KEY)
        changed = {key: value for key, value in resolved.items() if generic.get(key) != value}
        rule = rule_for(selector_for(block_id), changed, indent=1)
        if rule:
            parts.append(f"{query} {{\n{rule}\n}}")

    return "\n\n".join(part for part in parts if part)
