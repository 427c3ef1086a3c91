"""
Built-in token types.

A token type classifies a family of literal values (colors, lengths,
keywords, ...) and knows how to describe an editor option for a grammar
token of its family. Types are plain records of callables, dispatched in
registration order by TokenTypeRegistry; the first type that recognises
a value wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from chuk_block_style.constants import INFINITY_MARKERS, OptionCategory, TokenKind, UnitType
from chuk_block_style.core.separators import join_components, split_components
from chuk_block_style.core.syntax import TOKEN_PATTERN, parse_syntax
from chuk_block_style.errors import ConfigurationError
from chuk_block_style.models.token import OptionDescriptor, TokenParam, UnitDefinition

logger = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_INTEGER_RE = re.compile(r"[+-]?\d+")
_NUMBER_RE = re.compile(_NUMBER)
_DIMENSION_RE = re.compile(rf"({_NUMBER})([a-zA-Z]+|%)")
_KEYWORD_RE = re.compile(r"-?[a-zA-Z_][a-zA-Z0-9_-]*")
_FUNCTION_RE = re.compile(r"(-?[a-zA-Z_][a-zA-Z0-9_-]*)\((.*)\)", re.DOTALL)
_HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_LINK_RE = re.compile(r"""(["']).*\1""", re.DOTALL)

COLOR_FUNCTIONS = frozenset({"rgb", "rgba", "hsl", "hsla", "hwb", "lab", "lch", "oklab", "oklch"})
NAMED_COLORS = frozenset(
    {
        "transparent", "currentcolor", "black", "white", "red", "green", "blue",
        "yellow", "orange", "purple", "pink", "gray", "grey", "silver", "maroon",
        "olive", "lime", "aqua", "teal", "navy", "fuchsia", "brown", "cyan", "magenta",
    }
)  # fmt: skip

UNIT_TOKENS: dict[UnitType, str] = {
    UnitType.LENGTH: "<length>",
    UnitType.PERCENTAGE: "<percentage>",
    UnitType.ANGLE: "<angle>",
    UnitType.FLEX: "<flex>",
    UnitType.TIME: "<time>",
}
DIMENSION_TOKENS: dict[str, UnitType] = {token: unit for unit, token in UNIT_TOKENS.items()}


@dataclass
class OptionContext:
    """Lookups a token type needs to describe editor options."""

    units: Mapping[str, UnitDefinition] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)
    icons: Mapping[str, str] = field(default_factory=dict)


@dataclass
class TokenType:
    """
    A family of literal values.

    Attributes:
        name: Unique registry name
        kind: Value family
        matches: Does a literal value belong to this family
        canonical_token: Canonical form of a grammar token of this family,
            None when the grammar token belongs to another family
        value_token: Grammar token a literal value corresponds to
        accepts: Does a literal value satisfy a (parameterised) grammar token
        make_option: Editor option descriptors for a grammar token
    """

    name: str
    kind: TokenKind
    matches: Callable[[str], bool]
    canonical_token: Callable[[str], str | None]
    value_token: Callable[[str, Mapping[str, UnitDefinition]], str | None]
    accepts: Callable[[str, str, Mapping[str, UnitDefinition]], bool]
    make_option: Callable[[str, TokenParam | None, OptionContext], list[OptionDescriptor]]


# ---------------------------------------------------------------------------
# Grammar token helpers
# ---------------------------------------------------------------------------


def _parse_bound(text: str) -> float | None:
    text = text.strip()
    if not text or text.lstrip("+-").lower() in INFINITY_MARKERS:
        return None
    return float(text)


def token_param(raw: str) -> TokenParam | None:
    """
    Extract the parameters of a grammar token.

    Example:
        token_param("<length [0,10]>") -> TokenParam(min=0, max=10)
        token_param("<number [0,1,0.1]>") -> TokenParam(min=0, max=1, step=0.1)
        token_param("fit-content(<length>)") -> TokenParam(syntax="<length>")
    """
    raw = raw.strip()
    match = TOKEN_PATTERN.fullmatch(raw)
    if match:
        if match.group(2) is None:
            return None
        bounds = match.group(2).split(",")
        try:
            low = _parse_bound(bounds[0]) if len(bounds) > 0 else None
            high = _parse_bound(bounds[1]) if len(bounds) > 1 else None
            step = _parse_bound(bounds[2]) if len(bounds) > 2 else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid token range in '{raw}': {e}") from e
        return TokenParam(min=low, max=high, step=step)

    function = _FUNCTION_RE.fullmatch(raw)
    if function:
        return TokenParam(syntax=function.group(2).strip())
    return None


def function_arguments(value: str) -> str | None:
    """Argument text of a function call, None if value is not one."""
    function = _FUNCTION_RE.fullmatch(value.strip())
    return function.group(2).strip() if function else None


def canonical_token(raw: str) -> str:
    """
    Canonical form of any grammar token or literal.

    <length [0,10]> -> <length>, fit-content(10px) -> fit-content(),
    keywords are returned unchanged.
    """
    raw = raw.strip()
    match = TOKEN_PATTERN.fullmatch(raw)
    if match:
        return f"<{match.group(1)}>"
    function = _FUNCTION_RE.fullmatch(raw)
    if function:
        return f"{function.group(1)}()"
    return raw


def _in_range(number: float, raw: str) -> bool:
    param = token_param(raw)
    return param is None or param.contains(number)


def default_for_shape(shape: str, defaults: Mapping[str, str]) -> str:
    """Build a sample value for a shape from per-token defaults."""
    components, separators = split_components(shape)
    values = []
    for component in components:
        canonical = canonical_token(component)
        if canonical.startswith("<"):
            values.append(defaults.get(canonical, ""))
        else:
            values.append(component)
    return join_components(values, separators)


# ---------------------------------------------------------------------------
# Built-in types
# ---------------------------------------------------------------------------


def _link_type() -> TokenType:
    def matches(value: str) -> bool:
        return bool(_LINK_RE.fullmatch(value.strip()))

    def canonical(raw: str) -> str | None:
        return "<link>" if canonical_token(raw) == "<link>" else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        return "<link>" if matches(value) else None

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        return matches(value)

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        value = ctx.defaults.get("<link>", '"https://example.com/image.png"')
        return [
            OptionDescriptor(
                name="link", value=value, category=OptionCategory.LINK, type="<link>"
            )
        ]

    return TokenType("link", TokenKind.LINK, matches, canonical, value_token, accepts, make_option)


def _dimension_type() -> TokenType:
    def split(value: str) -> tuple[float, str] | None:
        match = _DIMENSION_RE.fullmatch(value.strip())
        if not match:
            return None
        return float(match.group(1)), match.group(2)

    def matches(value: str) -> bool:
        return split(value) is not None

    def canonical(raw: str) -> str | None:
        token = canonical_token(raw)
        return token if token in DIMENSION_TOKENS else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        parts = split(value)
        if parts is None:
            return None
        unit = units.get(parts[1])
        if unit is None:
            return None
        return UNIT_TOKENS[unit.type]

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        expected = canonical_token(raw)
        parts = split(value)
        if parts is None:
            # unitless zero is a valid length or percentage
            if expected in ("<length>", "<percentage>") and _NUMBER_RE.fullmatch(value.strip()):
                number = float(value)
                return number == 0 and _in_range(number, raw)
            return False
        if value_token(value, units) != expected:
            return False
        return _in_range(parts[0], raw)

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        expected = canonical_token(raw)
        family = DIMENSION_TOKENS[expected]
        default = ctx.defaults.get(expected)
        default_number = "0"
        if default:
            parts = split(default)
            if parts:
                default_number = default[: -len(parts[1])]
        if param and param.min is not None and float(default_number) < param.min:
            default_number = f"{param.min:g}"
        options = []
        for unit in ctx.units.values():
            if unit.type != family or not unit.supported:
                continue
            options.append(
                OptionDescriptor(
                    name=unit.key,
                    value=f"{default_number}{unit.key}",
                    category=OptionCategory.DIMENSION,
                    type=expected,
                    min=param.min if param else None,
                    max=param.max if param else None,
                    step=param.step if param else None,
                    unit=unit.key,
                )
            )
        return options

    return TokenType(
        "dimension", TokenKind.DIMENSION, matches, canonical, value_token, accepts, make_option
    )


def _color_type() -> TokenType:
    def matches(value: str) -> bool:
        value = value.strip()
        if _HEX_COLOR_RE.fullmatch(value):
            return True
        if value.lower() in NAMED_COLORS:
            return True
        function = _FUNCTION_RE.fullmatch(value)
        return bool(function) and function.group(1).lower() in COLOR_FUNCTIONS

    def canonical(raw: str) -> str | None:
        return "<color>" if canonical_token(raw) == "<color>" else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        return "<color>" if matches(value) else None

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        return matches(value)

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        return [
            OptionDescriptor(
                name="color",
                value=ctx.defaults.get("<color>", "#000000"),
                category=OptionCategory.COLOR,
                type="<color>",
            )
        ]

    return TokenType("color", TokenKind.COLOR, matches, canonical, value_token, accepts, make_option)


def _keyword_type() -> TokenType:
    def matches(value: str) -> bool:
        return bool(_KEYWORD_RE.fullmatch(value.strip()))

    def canonical(raw: str) -> str | None:
        raw = raw.strip()
        return raw if _KEYWORD_RE.fullmatch(raw) else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        value = value.strip()
        return value if matches(value) else None

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        return value.strip() == raw.strip()

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        keyword = raw.strip()
        return [
            OptionDescriptor(
                name=keyword,
                value=keyword,
                category=OptionCategory.KEYWORD,
                type=keyword,
                icon=ctx.icons.get(keyword),
            )
        ]

    return TokenType(
        "keyword", TokenKind.KEYWORD, matches, canonical, value_token, accepts, make_option
    )


def _function_type() -> TokenType:
    def matches(value: str) -> bool:
        return bool(_FUNCTION_RE.fullmatch(value.strip()))

    def canonical(raw: str) -> str | None:
        raw = raw.strip()
        return canonical_token(raw) if _FUNCTION_RE.fullmatch(raw) else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        value = value.strip()
        return canonical_token(value) if matches(value) else None

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        return value_token(value, units) == canonical_token(raw)

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        name = canonical_token(raw)[:-2]
        argument = ""
        if param and param.syntax:
            try:
                shapes = parse_syntax(param.syntax)
            except ConfigurationError:
                logger.debug(f"Cannot derive default arguments for {raw}")
                shapes = []
            if shapes:
                argument = default_for_shape(shapes[0], ctx.defaults)
        return [
            OptionDescriptor(
                name=name,
                value=f"{name}({argument})",
                category=OptionCategory.FUNCTION,
                type=f"{name}()",
                syntax=param.syntax if param else None,
            )
        ]

    return TokenType(
        "function", TokenKind.FUNCTION, matches, canonical, value_token, accepts, make_option
    )


def _numeric_type(kind: TokenKind) -> TokenType:
    token = f"<{kind.value}>"
    pattern = _INTEGER_RE if kind == TokenKind.INTEGER else _NUMBER_RE
    category = OptionCategory.INTEGER if kind == TokenKind.INTEGER else OptionCategory.NUMBER

    def matches(value: str) -> bool:
        return bool(pattern.fullmatch(value.strip()))

    def canonical(raw: str) -> str | None:
        return token if canonical_token(raw) == token else None

    def value_token(value: str, units: Mapping[str, UnitDefinition]) -> str | None:
        return token if matches(value) else None

    def accepts(value: str, raw: str, units: Mapping[str, UnitDefinition]) -> bool:
        # <number> also accepts integers; the number pattern covers both
        if not matches(value):
            return False
        return _in_range(float(value), raw)

    def make_option(raw: str, param: TokenParam | None, ctx: OptionContext) -> list[OptionDescriptor]:
        value = ctx.defaults.get(token, "0")
        if param and param.min is not None and float(value) < param.min:
            value = f"{param.min:g}"
        return [
            OptionDescriptor(
                name=kind.value,
                value=value,
                category=category,
                type=token,
                min=param.min if param else None,
                max=param.max if param else None,
                step=param.step if param else None,
            )
        ]

    return TokenType(kind.value, kind, matches, canonical, value_token, accepts, make_option)


def default_token_types() -> list[TokenType]:
    """
    Built-in token types in first-match order.

    Link and dimension come before keyword so quoted strings and ``10px``
    are never read as keywords; color comes before keyword so named
    colors classify as colors.
    """
    return [
        _link_type(),
        _dimension_type(),
        _color_type(),
        _keyword_type(),
        _function_type(),
        _numeric_type(TokenKind.INTEGER),
        _numeric_type(TokenKind.NUMBER),
    ]
