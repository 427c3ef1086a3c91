"""
Style Definition Registry - properties, their grammars and derived shapes.

The registry owns the token definitions and units grammars are written
with, and lazily caches everything derived from a property's grammar:
the expanded syntax, the concrete shapes, their separators and their
normalized (canonical token) form.

Registration happens once at startup. Duplicate keys are rejected with
ConflictError and logged; the first registration stays in place. Once
frozen (the block manager freezes it on first resolution) every
register call raises RegistryFrozenError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chuk_block_style.constants import ErrorMessages
from chuk_block_style.core.separators import extract_separators, split_components
from chuk_block_style.core.syntax import expand_tokens, parse_production, parse_syntax
from chuk_block_style.errors import ConfigurationError, ConflictError, RegistryFrozenError
from chuk_block_style.models.style import StyleDefinition
from chuk_block_style.models.token import OptionDescriptor, TokenDefinition, UnitDefinition
from chuk_block_style.tokens import OptionContext, TokenTypeRegistry

logger = logging.getLogger(__name__)


class StyleRegistry:
    """
    In-memory, append-only registry of style definitions.

    Not a module singleton: construct one per engine and pass it to the
    block manager, resolver and emitter.
    """

    def __init__(self, token_types: TokenTypeRegistry | None = None):
        """
        Initialize the registry.

        Args:
            token_types: Token type registry, built-in types if omitted
        """
        self.token_types = token_types or TokenTypeRegistry.with_defaults()
        self._tokens: dict[str, TokenDefinition] = {}
        self._units: dict[str, UnitDefinition] = {}
        self._styles: dict[str, StyleDefinition] = {}
        self._frozen = False

        self._expanded_cache: dict[str, str] = {}
        self._shapes_cache: dict[str, list[str]] = {}
        self._separators_cache: dict[str, list[list[str]]] = {}
        self._normalized_cache: dict[str, list[str]] = {}

    # -- lifecycle ---------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Freeze this registry and its token types."""
        if not self._frozen:
            logger.debug(f"Freezing style registry with {len(self._styles)} definitions")
        self._frozen = True
        self.token_types.freeze()

    def _check_open(self, kind: str, key: str) -> None:
        if self._frozen:
            message = ErrorMessages.REGISTRY_FROZEN.format(kind=kind, key=key)
            logger.error(message)
            raise RegistryFrozenError(message)

    # -- tokens and units --------------------------------------------------

    def register_token_definition(self, definition: TokenDefinition) -> None:
        """
        Register a token definition.

        Tokens must precede style definitions: a grammar is expanded once,
        when its style is registered.

        Raises:
            RegistryFrozenError: If the registry is frozen
            ConflictError: If the token is already registered
            ConfigurationError: If a style definition is already registered
        """
        self._check_open("token", definition.key)
        if definition.key in self._tokens:
            message = ErrorMessages.DUPLICATE_TOKEN.format(key=definition.key)
            logger.warning(message)
            raise ConflictError(message)
        if self._styles:
            message = ErrorMessages.TOKEN_AFTER_STYLES.format(key=definition.key)
            logger.warning(message)
            raise ConfigurationError(message)
        self._tokens[definition.key] = definition

    def register_token_definitions(self, definitions: Iterable[TokenDefinition]) -> list[str]:
        """Register many tokens, skipping (and logging) failures. Returns accepted keys."""
        return self._register_many(definitions, self.register_token_definition)

    def register_unit(self, unit: UnitDefinition) -> None:
        """
        Register a unit.

        Raises:
            RegistryFrozenError: If the registry is frozen
            ConflictError: If the unit is already registered
        """
        self._check_open("unit", unit.key)
        if unit.key in self._units:
            message = ErrorMessages.DUPLICATE_UNIT.format(key=unit.key)
            logger.warning(message)
            raise ConflictError(message)
        self._units[unit.key] = unit

    def register_units(self, units: Iterable[UnitDefinition]) -> list[str]:
        """Register many units, skipping (and logging) failures. Returns accepted keys."""
        return self._register_many(units, self.register_unit)

    def get_token_definition(self, key: str) -> TokenDefinition | None:
        return self._tokens.get(key)

    def list_token_definitions(self) -> list[TokenDefinition]:
        return list(self._tokens.values())

    def get_unit(self, key: str) -> UnitDefinition | None:
        return self._units.get(key)

    @property
    def units(self) -> dict[str, UnitDefinition]:
        return dict(self._units)

    def token_defaults(self) -> dict[str, str]:
        """Default literal per token name, for tokens that declare one."""
        return {key: token.default for key, token in self._tokens.items() if token.default}

    # -- style definitions -------------------------------------------------

    def register_style_definition(self, definition: StyleDefinition) -> None:
        """
        Register a style definition.

        The grammar is expanded and parsed immediately so cyclic or
        malformed definitions fail here rather than at first use.

        Raises:
            RegistryFrozenError: If the registry is frozen
            ConflictError: If the key is already registered
            ConfigurationError: If the grammar is cyclic or malformed
        """
        self._check_open("style definition", definition.key)
        if definition.key in self._styles:
            message = ErrorMessages.DUPLICATE_STYLE.format(key=definition.key)
            logger.warning(message)
            raise ConflictError(message)

        expanded = expand_tokens(definition.syntax, self._tokens)
        parse_production(expanded)

        self._styles[definition.key] = definition
        self._expanded_cache[definition.key] = expanded

    def register_style_definitions(self, definitions: Iterable[StyleDefinition]) -> list[str]:
        """Register many definitions, skipping (and logging) failures. Returns accepted keys."""
        return self._register_many(definitions, self.register_style_definition)

    def get_style_definition(self, key: str) -> StyleDefinition | None:
        """
        Get a style definition by key.

        Returns:
            StyleDefinition if registered, None otherwise
        """
        return self._styles.get(key)

    def has_style(self, key: str) -> bool:
        return key in self._styles

    def list_style_definitions(self) -> list[StyleDefinition]:
        """All definitions in registration order."""
        return list(self._styles.values())

    def get_longhand(self, definition: StyleDefinition | str) -> list[str] | None:
        """
        Longhand properties of a shorthand.

        Returns:
            The longhand keys, or None if the property is not a shorthand
        """
        if isinstance(definition, str):
            found = self.get_style_definition(definition)
            if found is None:
                return None
            definition = found
        return list(definition.longhand) if definition.longhand else None

    def shorthand_of(self, key: str) -> list[str]:
        """Shorthand properties that list key among their longhands."""
        return [
            definition.key
            for definition in self._styles.values()
            if definition.longhand and key in definition.longhand
        ]

    # -- derived grammar data (lazily cached) ------------------------------

    def get_expanded_syntax(self, key: str) -> str | None:
        definition = self.get_style_definition(key)
        if definition is None:
            return None
        if key not in self._expanded_cache:
            self._expanded_cache[key] = expand_tokens(definition.syntax, self._tokens)
        return self._expanded_cache[key]

    def get_shapes(self, key: str) -> list[str] | None:
        """Concrete shapes of a property's grammar, in discovery order."""
        if key not in self._shapes_cache:
            expanded = self.get_expanded_syntax(key)
            if expanded is None:
                return None
            self._shapes_cache[key] = parse_syntax(expanded)
        return list(self._shapes_cache[key])

    def get_separators(self, key: str) -> list[list[str]] | None:
        """Separator set per shape, aligned with get_shapes."""
        if key not in self._separators_cache:
            shapes = self.get_shapes(key)
            if shapes is None:
                return None
            self._separators_cache[key] = extract_separators(shapes)
        return [list(separators) for separators in self._separators_cache[key]]

    def get_normalized_shapes(self, key: str) -> list[str] | None:
        """
        Shapes with every component reduced to its canonical token.

        Example:
            "<length [0,∞]> fit-content(<length>)" -> "<length> fit-content()"
        """
        if key not in self._normalized_cache:
            shapes = self.get_shapes(key)
            if shapes is None:
                return None
            self._normalized_cache[key] = [self.normalize_shape(shape) for shape in shapes]
        return list(self._normalized_cache[key])

    def normalize_shape(self, shape: str) -> str:
        """Replace each component of a shape with its canonical token."""
        components, separators = split_components(shape)
        parts = [self.token_types.canonical_token(components[0])] if components else []
        for separator, component in zip(separators, components[1:], strict=True):
            parts.append(separator)
            parts.append(self.token_types.canonical_token(component))
        return "".join(parts)

    def get_slot_tokens(self, key: str) -> list[list[str]] | None:
        """
        Distinct raw tokens per component position across all shapes.

        Slot i lists, in discovery order, every token that can appear as
        the i-th component of a value.
        """
        shapes = self.get_shapes(key)
        if shapes is None:
            return None
        slots: list[dict[str, None]] = []
        for shape in shapes:
            components, _ = split_components(shape)
            for index, component in enumerate(components):
                if index >= len(slots):
                    slots.append({})
                slots[index].setdefault(component, None)
        return [list(slot) for slot in slots]

    def get_slot_options(self, key: str) -> list[list[OptionDescriptor]] | None:
        """Editor option descriptors per slot."""
        definition = self.get_style_definition(key)
        slots = self.get_slot_tokens(key)
        if definition is None or slots is None:
            return None
        context = OptionContext(
            units=self._units,
            defaults=self.token_defaults(),
            icons=definition.icons or {},
        )
        result: list[list[OptionDescriptor]] = []
        for slot in slots:
            options: list[OptionDescriptor] = []
            seen: set[tuple[str, str]] = set()
            for token in slot:
                for option in self.token_types.make_options(token, context):
                    marker = (option.type, option.name)
                    if marker not in seen:
                        seen.add(marker)
                        options.append(option)
            result.append(options)
        return result

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _register_many(entries, register) -> list[str]:
        accepted: list[str] = []
        for entry in entries:
            try:
                register(entry)
            except RegistryFrozenError:
                raise
            except ConfigurationError as e:
                logger.warning(f"Skipping {entry.key}: {e}")
                continue
            accepted.append(entry.key)
        return accepted
