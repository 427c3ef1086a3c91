"""
Constants and enums for the block style engine.

No magic strings - use enums and module constants for constrained values.
"""

from enum import Enum

# Generic key matching any concrete device, orientation or pseudo-state
ALL_KEY = "all"

# Upper bound on occurrences generated for open-ended repetition (+, *, {m,})
REPEAT_BOUND = 4

# Top-level separators recognised between value components
DEFAULT_SEPARATORS: tuple[str, ...] = (" ", ",", "/")

# Resolved value of a shorthand whose longhands disagree
MIXED_VALUE = "mixed"

# Token type of alias tokens (defined in terms of other tokens)
COMPOSED_TOKEN = "composed"

# Infinity marker accepted inside token ranges, e.g. <length [0,∞]>
INFINITY_MARKERS = ("∞", "inf", "infinity")

# Environment variables the server reads its definition paths from
LIBRARY_PATH_ENV = "CHUK_BLOCK_STYLE_LIBRARY"
PROJECT_PATH_ENV = "CHUK_BLOCK_STYLE_PROJECT"


class TokenKind(str, Enum):
    """Families of literal values a token type classifies."""

    LINK = "link"
    DIMENSION = "dimension"
    COLOR = "color"
    KEYWORD = "keyword"
    FUNCTION = "function"
    INTEGER = "integer"
    NUMBER = "number"


class UnitType(str, Enum):
    """Dimension family a unit belongs to."""

    LENGTH = "length"
    PERCENTAGE = "percentage"
    ANGLE = "angle"
    FLEX = "flex"
    TIME = "time"


class OptionCategory(str, Enum):
    """Editor option categories produced by token types."""

    KEYWORD = "keyword"
    COLOR = "color"
    DIMENSION = "dimension"
    NUMBER = "number"
    INTEGER = "integer"
    FUNCTION = "function"
    LINK = "link"


class ContextAxis(str, Enum):
    """The three axes of a rendering context."""

    DEVICE = "device"
    ORIENTATION = "orientation"
    PSEUDO = "pseudo"


class ErrorMessages:
    """Standard error message templates."""

    DUPLICATE_TOKEN_TYPE = "Token type already registered: {name}"
    DUPLICATE_TOKEN = "Token already registered: {key}"
    DUPLICATE_UNIT = "Unit already registered: {key}"
    DUPLICATE_STYLE = "Style definition already registered: {key}"
    DUPLICATE_CONTEXT = "Context {axis} already registered: {key}"
    REGISTRY_FROZEN = "Registry is frozen; cannot register {kind} '{key}' after resolution started"
    TOKEN_CYCLE = "Cyclic token definition: {path}"
    TOKEN_AFTER_STYLES = "Token {key} must be registered before any style definition"
    MALFORMED_SYNTAX = "Malformed syntax '{syntax}': {reason}"
    INVALID_KEY_PART = "Style key {part} must be a string, got {type_name}"
    BLOCK_NOT_FOUND = "Block not found: {block_id}"
    BLOCK_EXISTS = "Block already exists: {block_id}"
    UNKNOWN_PROPERTY = "Unknown style property: {key}"
    UNKNOWN_CONTEXT = "Unknown {axis} key: {key}"
    INVALID_VALUE = "Value '{value}' does not match any shape of '{key}'"
