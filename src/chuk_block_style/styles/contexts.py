"""
Context registry - the devices, orientations and pseudo-states a value
can be scoped to.

Every axis always contains the generic "all" entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chuk_block_style.constants import ALL_KEY, ContextAxis, ErrorMessages
from chuk_block_style.errors import ConflictError, RegistryFrozenError
from chuk_block_style.models.context import (
    DeviceDefinition,
    OrientationDefinition,
    PseudoDefinition,
)

logger = logging.getLogger(__name__)

ContextDefinition = DeviceDefinition | OrientationDefinition | PseudoDefinition


class ContextRegistry:
    """Known context keys per axis, in registration order."""

    def __init__(self) -> None:
        self._entries: dict[ContextAxis, dict[str, ContextDefinition]] = {
            ContextAxis.DEVICE: {ALL_KEY: DeviceDefinition(key=ALL_KEY, name="All")},
            ContextAxis.ORIENTATION: {ALL_KEY: OrientationDefinition(key=ALL_KEY, name="All")},
            ContextAxis.PSEUDO: {ALL_KEY: PseudoDefinition(key=ALL_KEY, name="All")},
        }
        self._frozen = False

    def freeze(self) -> None:
        self._frozen = True

    def _register(self, axis: ContextAxis, definition: ContextDefinition) -> None:
        if self._frozen:
            message = ErrorMessages.REGISTRY_FROZEN.format(kind=axis.value, key=definition.key)
            logger.error(message)
            raise RegistryFrozenError(message)
        entries = self._entries[axis]
        if definition.key in entries:
            message = ErrorMessages.DUPLICATE_CONTEXT.format(axis=axis.value, key=definition.key)
            logger.warning(message)
            raise ConflictError(message)
        entries[definition.key] = definition

    def register_device(self, device: DeviceDefinition) -> None:
        self._register(ContextAxis.DEVICE, device)

    def register_orientation(self, orientation: OrientationDefinition) -> None:
        self._register(ContextAxis.ORIENTATION, orientation)

    def register_pseudo(self, pseudo: PseudoDefinition) -> None:
        self._register(ContextAxis.PSEUDO, pseudo)

    def register_many(self, axis: ContextAxis, definitions: Iterable[ContextDefinition]) -> list[str]:
        """Register entries on one axis, skipping and logging duplicates."""
        accepted = []
        for definition in definitions:
            try:
                self._register(axis, definition)
            except ConflictError:
                logger.info(f"Context {axis.value} '{definition.key}' already registered, skipping")
                continue
            accepted.append(definition.key)
        return accepted

    def keys(self, axis: ContextAxis) -> list[str]:
        return list(self._entries[axis])

    def get(self, axis: ContextAxis, key: str) -> ContextDefinition | None:
        return self._entries[axis].get(key)

    def has(self, axis: ContextAxis, key: str) -> bool:
        return key in self._entries[axis]

    @property
    def devices(self) -> list[DeviceDefinition]:
        return list(self._entries[ContextAxis.DEVICE].values())  # type: ignore[arg-type]

    @property
    def orientations(self) -> list[OrientationDefinition]:
        return list(self._entries[ContextAxis.ORIENTATION].values())  # type: ignore[arg-type]

    @property
    def pseudos(self) -> list[PseudoDefinition]:
        return list(self._entries[ContextAxis.PSEUDO].values())  # type: ignore[arg-type]
