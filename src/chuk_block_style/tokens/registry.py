"""
Token Type Registry - ordered first-match dispatch over token types.

Types are consulted in registration order; the first type that accepts
a value classifies it. An unclassified value is not an error, free-form
text is legal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from chuk_block_style.constants import ErrorMessages, TokenKind
from chuk_block_style.core.separators import split_components
from chuk_block_style.core.syntax import parse_syntax
from chuk_block_style.errors import ConfigurationError, ConflictError, RegistryFrozenError
from chuk_block_style.models.token import OptionDescriptor, TokenParam, UnitDefinition
from chuk_block_style.tokens.types import (
    OptionContext,
    TokenType,
    canonical_token,
    default_token_types,
    function_arguments,
    token_param,
)

logger = logging.getLogger(__name__)


class TokenTypeRegistry:
    """
    Ordered registry of token types.

    The registry is an explicit object; build one at startup, register
    the types, then freeze it before resolution begins.
    """

    def __init__(self, token_types: Iterable[TokenType] | None = None):
        """
        Initialize the registry.

        Args:
            token_types: Types to register in order
        """
        self._types: list[TokenType] = []
        self._frozen = False
        self._argument_cache: dict[str, list[tuple[list[str], list[str]]] | None] = {}
        for token_type in token_types or []:
            self.register_token_type(token_type)

    @classmethod
    def with_defaults(cls) -> TokenTypeRegistry:
        """Create a registry holding the built-in token types."""
        return cls(default_token_types())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    def register_token_type(self, token_type: TokenType) -> None:
        """
        Register a token type after the existing ones.

        Raises:
            RegistryFrozenError: If the registry has been frozen
            ConflictError: If a type with the same name exists
        """
        if self._frozen:
            message = ErrorMessages.REGISTRY_FROZEN.format(kind="token type", key=token_type.name)
            logger.error(message)
            raise RegistryFrozenError(message)
        if self.get_token_type(token_type.name) is not None:
            message = ErrorMessages.DUPLICATE_TOKEN_TYPE.format(name=token_type.name)
            logger.warning(message)
            raise ConflictError(message)
        self._types.append(token_type)

    def get_token_type(self, name: str) -> TokenType | None:
        """Get a token type by name."""
        for token_type in self._types:
            if token_type.name == name:
                return token_type
        return None

    def list_token_types(self) -> list[TokenType]:
        """All token types in dispatch order."""
        return list(self._types)

    def match_token_type(self, value: str) -> TokenType | None:
        """
        Classify a literal value.

        Args:
            value: Literal value, e.g. "10px" or "#fff"

        Returns:
            The first registered type whose matcher accepts the value,
            None if no type does
        """
        for token_type in self._types:
            if token_type.matches(value):
                return token_type
        return None

    def token_type_for(self, raw_token: str) -> TokenType | None:
        """Find the type a grammar token (e.g. <length [0,5]>, auto) belongs to."""
        for token_type in self._types:
            if token_type.canonical_token(raw_token) is not None:
                return token_type
        return None

    def canonical_token(self, raw_token: str) -> str:
        """Canonical form of a grammar token."""
        token_type = self.token_type_for(raw_token)
        if token_type is not None:
            canonical = token_type.canonical_token(raw_token)
            if canonical is not None:
                return canonical
        return canonical_token(raw_token)

    def token_param(self, raw_token: str) -> TokenParam | None:
        """Range or argument syntax of a grammar token."""
        return token_param(raw_token)

    def value_token(self, value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        """
        Grammar token a literal value corresponds to.

        Example:
            value_token("10px", units) -> "<length>"
            value_token("calc(1px + 2px)", units) -> "calc()"
        """
        for token_type in self._types:
            if token_type.matches(value):
                token = token_type.value_token(value, units)
                if token is not None:
                    return token
        return None

    def accepts(self, value: str, raw_token: str, units: Mapping[str, UnitDefinition]) -> bool:
        """
        Does a literal value satisfy a grammar token, ranges included.

        A function token that declares an argument grammar, e.g.
        ``blur(<length [0,∞]>)``, also requires the value's arguments to
        match one of its shapes.
        """
        token_type = self.token_type_for(raw_token)
        if token_type is None:
            return value.strip() == raw_token.strip()
        if not token_type.accepts(value, raw_token, units):
            return False
        if token_type.kind != TokenKind.FUNCTION:
            return True
        return self._accepts_arguments(value, raw_token, units)

    def _argument_shapes(self, raw_token: str) -> list[tuple[list[str], list[str]]] | None:
        param = token_param(raw_token)
        if param is None or not param.syntax:
            return None
        syntax = param.syntax
        if syntax not in self._argument_cache:
            try:
                shapes = parse_syntax(syntax)
            except ConfigurationError as e:
                logger.warning(f"Cannot parse arguments of {raw_token}; checking the name only: {e}")
                self._argument_cache[syntax] = None
            else:
                self._argument_cache[syntax] = [split_components(shape) for shape in shapes]
        return self._argument_cache[syntax]

    def _accepts_arguments(
        self, value: str, raw_token: str, units: Mapping[str, UnitDefinition]
    ) -> bool:
        shapes = self._argument_shapes(raw_token)
        if shapes is None:
            return True
        components, separators = split_components(function_arguments(value) or "")
        for shape_components, shape_separators in shapes:
            if len(shape_components) != len(components) or shape_separators != separators:
                continue
            if all(
                self.accepts(component, token, units)
                for component, token in zip(components, shape_components, strict=True)
            ):
                return True
        return False

    def make_options(self, raw_token: str, context: OptionContext) -> list[OptionDescriptor]:
        """Editor option descriptors for a grammar token, empty if unclassified."""
        token_type = self.token_type_for(raw_token)
        if token_type is None:
            logger.debug(f"No token type for {raw_token}")
            return []
        return token_type.make_option(raw_token, token_param(raw_token), context)
