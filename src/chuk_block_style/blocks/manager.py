"""
Block Style Manager - per-block value maps and single-coordinate writes.

Each block owns a value map keyed device -> orientation -> pseudo ->
property. Writes are copy-on-write: a write builds new dictionaries
along the written path and swaps the block's reference, so a map handed
out earlier (a snapshot) never changes underneath its reader.

Writes never go through the cascade: set_style touches exactly one
coordinate. Invalid writes are reported in the returned ValidationResult
and nothing is committed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from chuk_block_style.blocks.validator import StyleValueValidator, ValidationResult
from chuk_block_style.constants import ALL_KEY, ContextAxis, ErrorMessages
from chuk_block_style.styles.contexts import ContextRegistry
from chuk_block_style.styles.registry import StyleRegistry
from chuk_block_style.styles.resolver import (
    resolve_block_styles,
    resolve_style,
    resolve_style_value,
)

logger = logging.getLogger(__name__)

BlockStyles = dict[str, dict[str, dict[str, dict[str, str]]]]
Coordinate = tuple[str, str, str, str]


def write_coordinate(
    value_map: Mapping[str, Mapping[str, Mapping[str, Mapping[str, str]]]],
    device: str,
    orientation: str,
    pseudo: str,
    updates: Mapping[str, str],
) -> BlockStyles:
    """
    Return a new value map with updates applied at one coordinate.

    Only the dictionaries along the written path are copied; untouched
    branches are shared with the input, which is never mutated.
    """
    orientations = dict(value_map.get(device, {}))
    pseudos = dict(orientations.get(orientation, {}))
    properties = dict(pseudos.get(pseudo, {}))
    properties.update(updates)

    pseudos[pseudo] = properties
    orientations[orientation] = pseudos
    updated = dict(value_map)
    updated[device] = orientations
    return updated  # type: ignore[return-value]


class BlockStyleManager:
    """
    Manages the style value maps of blocks.

    The manager freezes the style and context registries on the first
    resolution so the vocabulary cannot change mid-session.
    """

    def __init__(self, registry: StyleRegistry, contexts: ContextRegistry | None = None):
        """
        Initialize the manager.

        Args:
            registry: Style definition registry
            contexts: Known devices, orientations and pseudo-states
        """
        self.registry = registry
        self.contexts = contexts or ContextRegistry()
        self.validator = StyleValueValidator(registry)
        self._blocks: dict[str, BlockStyles] = {}
        self._cleared: dict[str, set[Coordinate]] = {}

    # -- lifecycle ---------------------------------------------------------

    def create_block(
        self,
        block_id: str,
        defaults: Mapping[str, str] | None = None,
        seed_initial: bool = True,
    ) -> ValidationResult:
        """
        Create a block with its generic (all, all, all) values seeded.

        Args:
            block_id: Block identifier
            defaults: Extra default values, overriding declared initials
            seed_initial: Seed the ``initial`` of every style definition

        Returns:
            ValidationResult with a warning per default that was skipped

        Raises:
            ValueError: If the block already exists
        """
        if block_id in self._blocks:
            raise ValueError(ErrorMessages.BLOCK_EXISTS.format(block_id=block_id))

        seeds: list[tuple[str, str]] = []
        if seed_initial:
            seeds.extend(
                (d.key, d.initial) for d in self.registry.list_style_definitions() if d.initial
            )
        seeds.extend((defaults or {}).items())

        # Defaults are applied after initials; a rejected default leaves the initial in place
        result = ValidationResult()
        accepted: dict[str, str] = {}
        for key, value in seeds:
            check = self.validator.validate(key, value)
            if not check:
                logger.warning(f"Skipping default {key}={value!r} for block {block_id}: {check}")
                result.add_warning("DEFAULT_SKIPPED", str(check), key)
                continue
            accepted[key] = value

        self._blocks[block_id] = write_coordinate({}, ALL_KEY, ALL_KEY, ALL_KEY, accepted)
        self._cleared[block_id] = set()
        logger.debug(f"Created block {block_id} with {len(accepted)} defaults")
        return result

    def delete_block(self, block_id: str) -> bool:
        """Delete a block. Returns True if it existed."""
        self._cleared.pop(block_id, None)
        return self._blocks.pop(block_id, None) is not None

    def has_block(self, block_id: str) -> bool:
        return block_id in self._blocks

    def list_blocks(self) -> list[str]:
        return list(self._blocks)

    def snapshot(self, block_id: str) -> BlockStyles | None:
        """
        Current value map of a block.

        The returned map is never mutated by later writes; treat it as
        read-only.
        """
        return self._blocks.get(block_id)

    # -- writes ------------------------------------------------------------

    def _check_target(
        self, block_id: str, device: str, orientation: str, pseudo: str
    ) -> ValidationResult:
        result = ValidationResult()
        if block_id not in self._blocks:
            result.add_error("BLOCK_NOT_FOUND", ErrorMessages.BLOCK_NOT_FOUND.format(block_id=block_id))
            return result
        for axis, key in (
            (ContextAxis.DEVICE, device),
            (ContextAxis.ORIENTATION, orientation),
            (ContextAxis.PSEUDO, pseudo),
        ):
            if not self.contexts.has(axis, key):
                result.add_error(
                    "UNKNOWN_CONTEXT",
                    ErrorMessages.UNKNOWN_CONTEXT.format(axis=axis.value, key=key),
                    axis.value,
                )
        return result

    def set_style(
        self,
        block_id: str,
        device: str,
        orientation: str,
        pseudo: str,
        property_key: str,
        value: str,
    ) -> ValidationResult:
        """
        Write one property value at one exact coordinate.

        A shorthand value that is also valid for each of its longhands is
        written to the longhands instead (e.g. padding "10px" sets the
        four padding sides). An empty value clears the property, and for
        a shorthand its longhands too.

        Args:
            block_id: Block identifier
            device: Device key
            orientation: Orientation key
            pseudo: Pseudo-state key
            property_key: Property to write
            value: Value to write, "" to clear

        Returns:
            ValidationResult; invalid writes are not committed
        """
        result = self._check_target(block_id, device, orientation, pseudo)
        if not result:
            return result

        result.extend(self.validator.validate(property_key, value))
        if not result:
            logger.debug(f"Rejected {property_key}={value!r} on block {block_id}: {result}")
            return result

        updates = self._plan_updates(block_id, (device, orientation, pseudo), property_key, value)
        self._blocks[block_id] = write_coordinate(
            self._blocks[block_id], device, orientation, pseudo, updates
        )

        cleared = self._cleared[block_id]
        for key, written in updates.items():
            coordinate = (device, orientation, pseudo, key)
            if written:
                cleared.discard(coordinate)
            else:
                cleared.add(coordinate)
        return result

    def _plan_updates(
        self, block_id: str, context: tuple[str, str, str], property_key: str, value: str
    ) -> dict[str, str]:
        definition = self.registry.get_style_definition(property_key)
        longhands = self.registry.get_longhand(definition) if definition else None
        if not longhands:
            return {property_key: value}

        if value == "":
            return {property_key: "", **{longhand: "" for longhand in longhands}}

        if all(
            self.registry.has_style(longhand) and self.validator.validate(longhand, value)
            for longhand in longhands
        ):
            updates = {longhand: value for longhand in longhands}
            existing = self._blocks[block_id].get(context[0], {}).get(context[1], {})
            if existing.get(context[2], {}).get(property_key):
                # a direct shorthand value would shadow the longhands
                updates[property_key] = ""
            return updates
        return {property_key: value}

    def remove_style(
        self,
        block_id: str,
        device: str,
        orientation: str,
        pseudo: str,
        property_key: str,
    ) -> ValidationResult:
        """
        Clear one property at one exact coordinate.

        The coordinate keeps an empty value, which resolution treats as
        never set; cleared_keys reports it.
        """
        return self.set_style(block_id, device, orientation, pseudo, property_key, "")

    def cleared_keys(self, block_id: str) -> list[Coordinate]:
        """Coordinates explicitly cleared on a block, sorted."""
        return sorted(self._cleared.get(block_id, set()))

    # -- resolution --------------------------------------------------------

    def freeze(self) -> None:
        """Freeze the style and context registries."""
        self.registry.freeze()
        self.contexts.freeze()

    def resolve_style(
        self,
        block_id: str,
        property_key: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
        use_initial: bool = False,
    ) -> str | None:
        """
        Effective value of one property in a context.

        Shorthands resolve to their own value or the merge of their
        longhands ("mixed" when they differ).

        Args:
            block_id: Block identifier
            property_key: Property to resolve
            device: Active device key
            orientation: Active orientation key
            pseudo: Active pseudo-state key
            use_initial: Fall back to the definition's declared initial

        Returns:
            The resolved value, None when unset or the block is unknown
        """
        self.freeze()
        value_map = self._blocks.get(block_id)
        if value_map is None:
            return None

        definition = self.registry.get_style_definition(property_key)
        if definition is None:
            return resolve_style(value_map, property_key, device, orientation, pseudo)

        value = resolve_style_value(value_map, definition, device, orientation, pseudo)
        if not value and use_initial and definition.initial:
            return definition.initial
        return value

    def resolve_block(
        self,
        block_id: str,
        device: str = ALL_KEY,
        orientation: str = ALL_KEY,
        pseudo: str = ALL_KEY,
    ) -> dict[str, str] | None:
        """Flat property -> value map of a block in a context, None if unknown."""
        self.freeze()
        value_map = self._blocks.get(block_id)
        if value_map is None:
            return None
        return resolve_block_styles(value_map, self.registry, device, orientation, pseudo)
