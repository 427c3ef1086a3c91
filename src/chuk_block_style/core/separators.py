"""
Separator extraction - find the top-level joins between value components.

Bracketed tokens (``<length [0,10]>``), function calls with nested
parentheses (``rgba(1,2,3,0.5)``) and quoted strings are opaque: any
punctuation inside them is never treated as a separator. Whitespace
around a non-space separator collapses into that separator, so
``"10px 20px / 30px"`` has the separators ``[" ", "/"]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from chuk_block_style.constants import DEFAULT_SEPARATORS

_OPENERS = {"(": ")", "[": "]", "<": ">"}
_CLOSERS = set(_OPENERS.values())
_QUOTES = ("'", '"')


def split_components(
    text: str, separators: Sequence[str] = DEFAULT_SEPARATORS
) -> tuple[list[str], list[str]]:
    """
    Split a shape or value into its top-level components and separators.

    Args:
        text: Shape or literal value
        separators: Separator characters to recognise

    Returns:
        (components, separators) with len(separators) == len(components) - 1
        whenever text is non-empty
    """
    split_on_space = " " in separators
    components: list[str] = []
    found: list[str] = []
    current: list[str] = []
    stack: list[str] = []
    quote: str | None = None
    pending: str | None = None

    def flush() -> None:
        if current:
            components.append("".join(current))
            current.clear()

    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue

        at_top = not stack
        if at_top and char.isspace() and split_on_space:
            flush()
            if pending is None:
                pending = " "
            continue
        if at_top and char in separators and not char.isspace():
            flush()
            if pending is not None and pending != " ":
                # two explicit separators in a row: keep an empty component between them
                components.append("")
                found.append(pending)
            elif not components:
                # leading separator: an empty first component
                components.append("")
            pending = char
            continue

        # Start of a component: commit the separator that preceded it
        if pending is not None:
            if components:
                found.append(pending)
            pending = None

        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS and stack and stack[-1] == char:
            stack.pop()
        current.append(char)

    flush()
    if pending is not None and pending != " ":
        # trailing separator: an empty last component
        found.append(pending)
        components.append("")
    return components, found


def extract_separator(shape: str, separators: Sequence[str] = DEFAULT_SEPARATORS) -> list[str]:
    """
    Extract the ordered top-level separators of a single shape.

    Example:
        extract_separator("10px 20px / 30px") -> [" ", "/"]
        extract_separator("rgba(1,2,3,0.5)") -> []
    """
    _, found = split_components(shape, separators)
    return found


def extract_separators(
    shapes: Iterable[str], separators: Sequence[str] = DEFAULT_SEPARATORS
) -> list[list[str]]:
    """Extract separators for many shapes, preserving shape order."""
    return [extract_separator(shape, separators) for shape in shapes]


def join_components(components: Sequence[str], separators: Sequence[str]) -> str:
    """
    Join components with their separators, the inverse of split_components.

    Raises:
        ValueError: If the separator count does not fit the components
    """
    if not components:
        return ""
    if len(separators) != len(components) - 1:
        raise ValueError(
            f"Expected {len(components) - 1} separators for {len(components)} components, "
            f"got {len(separators)}"
        )
    parts = [components[0]]
    for separator, component in zip(separators, components[1:], strict=True):
        parts.append(separator)
        parts.append(component)
    return "".join(parts)
