"""
Style key composition.

Property keys are built from a base, an optional position and an
optional suffix: ("border", "top", "width") -> "border-top-width".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from chuk_block_style.constants import ErrorMessages
from chuk_block_style.errors import InvalidInputError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_SEPARATOR_RUN = re.compile(r"[\s_]+")


def _require_str(value: Any, part: str) -> None:
    if not isinstance(value, str):
        raise InvalidInputError(
            ErrorMessages.INVALID_KEY_PART.format(part=part, type_name=type(value).__name__)
        )


def compose_style_key(base: str, position: str | None = None, suffix: str | None = None) -> str:
    """
    Compose a property key.

    Args:
        base: Base property name, e.g. "border"
        position: Optional side or corner, e.g. "top"
        suffix: Optional sub-property, e.g. "width"

    Returns:
        The composed key

    Raises:
        InvalidInputError: If any supplied part is not a string

    Example:
        compose_style_key("border", "top", "width") -> "border-top-width"
        compose_style_key("border", suffix="width") -> "border-width"
    """
    _require_str(base, "base")
    if position is not None:
        _require_str(position, "position")
    if suffix is not None:
        _require_str(suffix, "suffix")

    parts = [base]
    if position:
        parts.append(position)
    if suffix:
        parts.append(suffix)
    return "-".join(parts)


def compose_style_keys(
    base: str, positions: Iterable[str], suffix: str | None = None
) -> list[str]:
    """Compose one key per position, e.g. the four sides of a border."""
    return [compose_style_key(base, position, suffix) for position in positions]


def to_kebab_case(key: str) -> str:
    """
    Convert a property key to CSS kebab-case.

    backgroundColor -> background-color, z_index -> z-index. Keys that
    are already kebab-case pass through unchanged.
    """
    _require_str(key, "key")
    key = _CAMEL_BOUNDARY.sub(r"-\1", key.strip())
    key = _SEPARATOR_RUN.sub("-", key)
    return key.lower()
