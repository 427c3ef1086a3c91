"""
Value grammar expansion and parsing.

Two stages turn a property's raw grammar into concrete shapes:

1. expand_tokens substitutes composed (alias) tokens with their own
   grammar until only primitive tokens, keywords and function calls
   remain. Cyclic definitions raise ConfigurationError.
2. parse_syntax builds a small production tree from the expanded text
   and enumerates every concrete alternative it accepts.

Grammar, loosest binding first::

    a | b       exactly one of a, b
    a || b      one or more of a, b in any order
    a && b      all of a, b in any order
    a b         juxtaposition (also a, b and a / b with explicit separators)
    [ ... ]     grouping
    x? x* x+    zero-or-one, zero-or-more, one-or-more
    x{m} x{m,} x{m,n}

Open-ended repetition is capped at REPEAT_BOUND occurrences.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from chuk_block_style.constants import ErrorMessages, REPEAT_BOUND
from chuk_block_style.errors import ConfigurationError
from chuk_block_style.models.token import TokenDefinition

# <name> or <name [params]>
TOKEN_PATTERN = re.compile(r"<([A-Za-z0-9_-]+)(?:\s*\[([^\]]*)\])?\s*>")
_PARAMLESS_TOKEN = re.compile(r"<([A-Za-z0-9_-]+)>")
_SINGLE_ATOM = re.compile(r"<[^<>]*>|[^\s\[\]|&,/?+*{}<>()]+")
_MULTIPLIER = re.compile(r"\{\s*(\d+)\s*(?:(,)\s*(\d+)?\s*)?\}")

EXPLICIT_SEPARATORS = (",", "/")

Fragment = tuple[str, ...]


# ---------------------------------------------------------------------------
# Token expansion
# ---------------------------------------------------------------------------


def expand_tokens(raw: str, token_definitions: Mapping[str, TokenDefinition]) -> str:
    """
    Expand composed tokens in a raw grammar to a fixed point.

    A range on the referencing token, e.g. ``<length-percentage [0,∞]>``,
    is carried onto every parameterless token of the substituted grammar.
    Tokens without a definition are left untouched.

    Args:
        raw: Raw grammar string
        token_definitions: Token definitions keyed by token name

    Returns:
        Grammar containing only primitive tokens, keywords and functions

    Raises:
        ConfigurationError: If a token refers back to itself; the message
            and the ``cycle`` attribute carry the offending path
    """
    memo: dict[str, str] = {}
    return _expand(raw.strip(), token_definitions, (), memo)


def _expand(
    text: str,
    definitions: Mapping[str, TokenDefinition],
    path: tuple[str, ...],
    memo: dict[str, str],
) -> str:
    def replace(match: re.Match[str]) -> str:
        name = f"<{match.group(1)}>"
        definition = definitions.get(name)
        if definition is None or not definition.is_composed:
            return match.group(0)

        if name in path:
            cycle = [*path[path.index(name) :], name]
            raise ConfigurationError(
                ErrorMessages.TOKEN_CYCLE.format(path=" -> ".join(cycle)),
                cycle=cycle,
            )

        if name not in memo:
            memo[name] = _expand(definition.syntax.strip(), definitions, (*path, name), memo)
        body = memo[name]

        params = match.group(2)
        if params is not None:
            body = _PARAMLESS_TOKEN.sub(lambda m: f"<{m.group(1)} [{params.strip()}]>", body)

        if _SINGLE_ATOM.fullmatch(body):
            return body
        return f"[{body}]"

    return TOKEN_PATTERN.sub(replace, text)


# ---------------------------------------------------------------------------
# Productions
# ---------------------------------------------------------------------------


@dataclass
class Production:
    """A node of a parsed grammar."""

    def fragments(self) -> list[Fragment]:
        """Enumerate the concrete item sequences this production accepts."""
        raise NotImplementedError


@dataclass
class Atom(Production):
    """A keyword, token reference, function call or explicit separator."""

    text: str

    def fragments(self) -> list[Fragment]:
        return [(self.text,)]


@dataclass
class Concatenation(Production):
    """Juxtaposed productions, in order."""

    elements: list[Production] = field(default_factory=list)

    def fragments(self) -> list[Fragment]:
        return _cross(element.fragments() for element in self.elements)


@dataclass
class Alternatives(Production):
    """Exactly one of the elements (``|``)."""

    elements: list[Production] = field(default_factory=list)

    def fragments(self) -> list[Fragment]:
        result: list[Fragment] = []
        for element in self.elements:
            result.extend(element.fragments())
        return result


@dataclass
class AllOf(Production):
    """Every element, in any order (``&&``)."""

    elements: list[Production] = field(default_factory=list)

    def fragments(self) -> list[Fragment]:
        expanded = [element.fragments() for element in self.elements]
        result: list[Fragment] = []
        for order in itertools.permutations(range(len(expanded))):
            result.extend(_cross(expanded[i] for i in order))
        return result


@dataclass
class AnyOf(Production):
    """One or more elements, in any order (``||``)."""

    elements: list[Production] = field(default_factory=list)

    def fragments(self) -> list[Fragment]:
        expanded = [element.fragments() for element in self.elements]
        result: list[Fragment] = []
        for size in range(1, len(expanded) + 1):
            for subset in itertools.combinations(range(len(expanded)), size):
                for order in itertools.permutations(subset):
                    result.extend(_cross(expanded[i] for i in order))
        return result


@dataclass
class Repetition(Production):
    """The element repeated between min and max times, counting upward."""

    element: Production
    min: int = 0
    max: int = 1

    def fragments(self) -> list[Fragment]:
        inner = self.element.fragments()
        result: list[Fragment] = []
        for count in range(self.min, self.max + 1):
            if count == 0:
                result.append(())
            else:
                result.extend(_cross([inner] * count))
        return result


def _cross(parts: Iterable[list[Fragment]]) -> list[Fragment]:
    combined: list[Fragment] = [()]
    for options in parts:
        combined = [prefix + option for prefix in combined for option in options]
    return combined


# ---------------------------------------------------------------------------
# Tokenizer and recursive-descent parser
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Lexeme:
    kind: str  # atom, open, close, bar, double_bar, double_amp, sep, mult
    text: str
    bounds: tuple[int, int] | None = None


def _read_balanced(text: str, start: int, opener: str, closer: str) -> int:
    """Return the index just past the closer matching text[start]."""
    depth = 0
    quote: str | None = None
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index + 1
    raise ValueError(f"unbalanced '{opener}' at position {start}")


def _tokenize(syntax: str) -> list[_Lexeme]:
    lexemes: list[_Lexeme] = []
    index = 0
    length = len(syntax)
    word_breaks = set(" \t\n[]|&,/?+*{}<>()'\"")

    while index < length:
        char = syntax[index]

        if char.isspace():
            index += 1
        elif char == "<":
            end = _read_balanced(syntax, index, "<", ">")
            lexemes.append(_Lexeme("atom", syntax[index:end]))
            index = end
        elif char in ("'", '"'):
            end = syntax.find(char, index + 1)
            if end < 0:
                raise ValueError(f"unterminated string at position {index}")
            lexemes.append(_Lexeme("atom", syntax[index : end + 1]))
            index = end + 1
        elif char == "[":
            lexemes.append(_Lexeme("open", char))
            index += 1
        elif char == "]":
            lexemes.append(_Lexeme("close", char))
            index += 1
        elif syntax.startswith("||", index):
            lexemes.append(_Lexeme("double_bar", "||"))
            index += 2
        elif char == "|":
            lexemes.append(_Lexeme("bar", char))
            index += 1
        elif syntax.startswith("&&", index):
            lexemes.append(_Lexeme("double_amp", "&&"))
            index += 2
        elif char in EXPLICIT_SEPARATORS:
            lexemes.append(_Lexeme("sep", char))
            index += 1
        elif char == "?":
            lexemes.append(_Lexeme("mult", char, (0, 1)))
            index += 1
        elif char == "*":
            lexemes.append(_Lexeme("mult", char, (0, REPEAT_BOUND)))
            index += 1
        elif char == "+":
            lexemes.append(_Lexeme("mult", char, (1, REPEAT_BOUND)))
            index += 1
        elif char == "{":
            match = _MULTIPLIER.match(syntax, index)
            if not match:
                raise ValueError(f"invalid multiplier at position {index}")
            low = int(match.group(1))
            if match.group(2) is None:
                high = low
            elif match.group(3) is None:
                high = max(low, REPEAT_BOUND)
            else:
                high = int(match.group(3))
            if high < low:
                raise ValueError(f"multiplier {match.group(0)} has max below min")
            lexemes.append(_Lexeme("mult", match.group(0), (low, high)))
            index = match.end()
        elif char in "()&}>":
            raise ValueError(f"unexpected '{char}' at position {index}")
        else:
            end = index
            while end < length and syntax[end] not in word_breaks:
                end += 1
            if end < length and syntax[end] == "(":
                end = _read_balanced(syntax, end, "(", ")")
            lexemes.append(_Lexeme("atom", syntax[index:end]))
            index = end

    return lexemes


class _Parser:
    """Recursive-descent parser over the lexeme stream."""

    def __init__(self, lexemes: list[_Lexeme]):
        self.lexemes = lexemes
        self.position = 0

    def peek(self) -> _Lexeme | None:
        if self.position < len(self.lexemes):
            return self.lexemes[self.position]
        return None

    def take(self) -> _Lexeme:
        lexeme = self.lexemes[self.position]
        self.position += 1
        return lexeme

    def parse(self) -> Production:
        production = self.alternatives()
        if self.peek() is not None:
            raise ValueError(f"unexpected '{self.peek().text}'")
        return production

    def _binary(self, kind: str, operand, node_type) -> Production:
        parts = [operand()]
        while (lexeme := self.peek()) is not None and lexeme.kind == kind:
            self.take()
            parts.append(operand())
        return parts[0] if len(parts) == 1 else node_type(parts)

    def alternatives(self) -> Production:
        return self._binary("bar", self.any_of, Alternatives)

    def any_of(self) -> Production:
        return self._binary("double_bar", self.all_of, AnyOf)

    def all_of(self) -> Production:
        return self._binary("double_amp", self.sequence, AllOf)

    def sequence(self) -> Production:
        elements: list[Production] = []
        has_item = False
        while (lexeme := self.peek()) is not None and lexeme.kind in ("atom", "open", "sep"):
            if lexeme.kind == "sep":
                self.take()
                elements.append(Atom(lexeme.text))
            else:
                elements.append(self.item())
                has_item = True
        if not has_item:
            found = self.peek()
            raise ValueError(f"expected a component before '{found.text}'" if found else "empty operand")
        return elements[0] if len(elements) == 1 else Concatenation(elements)

    def item(self) -> Production:
        lexeme = self.take()
        if lexeme.kind == "open":
            production = self.alternatives()
            closing = self.peek()
            if closing is None or closing.kind != "close":
                raise ValueError("missing ']'")
            self.take()
        else:
            production = Atom(lexeme.text)

        while (mult := self.peek()) is not None and mult.kind == "mult":
            self.take()
            low, high = mult.bounds or (1, 1)
            production = Repetition(production, low, high)
        return production


def parse_production(syntax: str) -> Production:
    """
    Parse an expanded grammar into a production tree.

    Raises:
        ConfigurationError: If the grammar is malformed
    """
    try:
        return _Parser(_tokenize(syntax)).parse()
    except ValueError as e:
        raise ConfigurationError(
            ErrorMessages.MALFORMED_SYNTAX.format(syntax=syntax, reason=e)
        ) from e


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def render_fragment(fragment: Fragment) -> str:
    """
    Render an item sequence as a shape string.

    Juxtaposed components are joined with a space, explicit separators
    are written without surrounding spaces. Leading, trailing and
    doubled separators left behind by omitted optional parts are dropped.
    """
    out: list[str] = []
    pending: str | None = None
    for item in fragment:
        if item in EXPLICIT_SEPARATORS:
            if out:
                pending = item
            continue
        if out:
            out.append(pending or " ")
        out.append(item)
        pending = None
    return "".join(out)


def parse_syntax(expanded: str) -> list[str]:
    """
    Enumerate every concrete shape of an expanded grammar.

    Shapes are returned in depth-first, left-to-right discovery order
    with duplicates removed (first occurrence kept) and the empty shape
    dropped. Parsing the same input always yields the same list.

    Args:
        expanded: Grammar produced by expand_tokens

    Returns:
        Ordered list of shapes

    Example:
        parse_syntax("auto | <length>{1,2}")
        -> ["auto", "<length>", "<length> <length>"]
    """
    if not expanded.strip():
        return []
    production = parse_production(expanded)
    shapes: dict[str, None] = {}
    for fragment in production.fragments():
        shape = render_fragment(fragment)
        if shape:
            shapes.setdefault(shape, None)
    return list(shapes)
