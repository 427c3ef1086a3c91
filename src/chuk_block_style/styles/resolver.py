"""
Cascade Resolver - the effective value of a property in a context.

A block's value map is keyed device -> orientation -> pseudo -> property.
Resolution searches eight coordinates from most to least specific, each
axis being either the concrete key or the generic "all":

    1. (device, orientation, pseudo)
    2. (device, orientation, all)
    3. (device, all, pseudo)
    4. (device, all, all)
    5. (all, orientation, pseudo)
    6. (all, orientation, all)
    7. (all, all, pseudo)
    8. (all, all, all)

The first coordinate holding a non-empty value wins. When none does the
property is absent (None). Every function here is pure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from chuk_block_style.constants import ALL_KEY, MIXED_VALUE

if TYPE_CHECKING:
    from chuk_block_style.models.style import StyleDefinition
    from chuk_block_style.styles.registry import StyleRegistry

logger = logging.getLogger(__name__)

ValueMap = Mapping[str, Mapping[str, Mapping[str, Mapping[str, str]]]]


def cascade_paths(device: str, orientation: str, pseudo: str) -> list[tuple[str, str, str]]:
    """
    The eight coordinates searched for a context, most specific first.

    Duplicates (when an axis is already "all") are kept so the list is
    always eight long; they cannot change the outcome.
    """
    return [
        (device, orientation, pseudo),
        (device, orientation, ALL_KEY),
        (device, ALL_KEY, pseudo),
        (device, ALL_KEY, ALL_KEY),
        (ALL_KEY, orientation, pseudo),
        (ALL_KEY, orientation, ALL_KEY),
        (ALL_KEY, ALL_KEY, pseudo),
        (ALL_KEY, ALL_KEY, ALL_KEY),
    ]


def lookup(value_map: ValueMap, device: str, orientation: str, pseudo: str, key: str) -> str | None:
    """Value stored at one exact coordinate, None if absent."""
    return value_map.get(device, {}).get(orientation, {}).get(pseudo, {}).get(key)


def resolve_style(
    value_map: ValueMap,
    property_key: str,
    device: str = ALL_KEY,
    orientation: str = ALL_KEY,
    pseudo: str = ALL_KEY,
) -> str | None:
    """
    Resolve one property through the cascade.

    Args:
        value_map: The block's per-context values
        property_key: Property to resolve
        device: Active device key
        orientation: Active orientation key
        pseudo: Active pseudo-state key

    Returns:
        The first non-empty value found, None if the property is unset
    """
    for path in cascade_paths(device, orientation, pseudo):
        value = lookup(value_map, *path, property_key)
        if value:
            return value
    return None


def resolve_shorthand(values: Iterable[str | None]) -> str:
    """
    Merge resolved longhand values into one shorthand value.

    Example:
        resolve_shorthand(["10px", "10px", "10px", "10px"]) -> "10px"
        resolve_shorthand(["10px", "15px", "10px", "20px"]) -> "mixed"
        resolve_shorthand([None, None]) -> ""
    """
    distinct = list(dict.fromkeys(value for value in values if value))
    if not distinct:
        return ""
    if len(distinct) == 1:
        return distinct[0]
    return MIXED_VALUE


def resolve_style_value(
    value_map: ValueMap,
    definition: StyleDefinition,
    device: str = ALL_KEY,
    orientation: str = ALL_KEY,
    pseudo: str = ALL_KEY,
) -> str | None:
    """
    Shorthand-aware resolution.

    A value written directly under the shorthand key wins; otherwise the
    longhands are resolved and merged with resolve_shorthand.
    """
    direct = resolve_style(value_map, definition.key, device, orientation, pseudo)
    if direct or not definition.longhand:
        return direct
    merged = resolve_shorthand(
        resolve_style(value_map, longhand, device, orientation, pseudo)
        for longhand in definition.longhand
    )
    return merged or None


def property_keys(value_map: ValueMap) -> list[str]:
    """Every property key present anywhere in the map, first-seen order."""
    keys: dict[str, None] = {}
    for orientations in value_map.values():
        for pseudos in orientations.values():
            for properties in pseudos.values():
                for key in properties:
                    keys.setdefault(key, None)
    return list(keys)


def resolve_block_styles(
    value_map: ValueMap,
    registry: StyleRegistry | None = None,
    device: str = ALL_KEY,
    orientation: str = ALL_KEY,
    pseudo: str = ALL_KEY,
) -> dict[str, str]:
    """
    Resolve every property of a block into a flat map.

    Args:
        value_map: The block's per-context values
        registry: When given, keys it does not define are skipped
        device: Active device key
        orientation: Active orientation key
        pseudo: Active pseudo-state key

    Returns:
        property -> value for every property that resolves, in the
        order keys first appear in the map
    """
    resolved: dict[str, str] = {}
    for key in property_keys(value_map):
        if registry is not None and not registry.has_style(key):
            logger.debug(f"Skipping unknown property during resolution: {key}")
            continue
        value = resolve_style(value_map, key, device, orientation, pseudo)
        if value:
            resolved[key] = value
    return resolved
