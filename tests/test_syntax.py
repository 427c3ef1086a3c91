"""
Tests for grammar expansion and shape enumeration.

Tests cover:
- expand_tokens alias substitution, range propagation and cycle detection
- parse_syntax combinators, repetition bounds and ordering
- Malformed grammars
"""

import pytest

from chuk_block_style.constants import REPEAT_BOUND
from chuk_block_style.core import expand_tokens, parse_syntax
from chuk_block_style.errors import ConfigurationError
from chuk_block_style.models import TokenDefinition


def make_tokens(**aliases: str) -> dict[str, TokenDefinition]:
    """Composed tokens from name=syntax pairs (underscores become dashes)."""
    tokens = {
        "<length>": TokenDefinition(key="<length>", syntax="<length>", type="dimension"),
        "<percentage>": TokenDefinition(key="<percentage>", syntax="<percentage>", type="dimension"),
        "<number>": TokenDefinition(key="<number>", syntax="<number>", type="number"),
    }
    for name, syntax in aliases.items():
        key = f"<{name.replace('_', '-')}>"
        tokens[key] = TokenDefinition(key=key, syntax=syntax)
    return tokens


class TestExpandTokens:
    """Tests for expand_tokens."""

    def test_primitive_left_alone(self):
        """Primitive tokens are not substituted."""
        assert expand_tokens("<length>", make_tokens()) == "<length>"

    def test_unknown_token_left_alone(self):
        assert expand_tokens("<mystery> | auto", make_tokens()) == "<mystery> | auto"

    def test_alias_is_grouped(self):
        """A multi-part alias body is wrapped in brackets."""
        tokens = make_tokens(length_percentage="<length>|<percentage>")
        assert expand_tokens("<length-percentage>", tokens) == "[<length>|<percentage>]"

    def test_single_atom_alias_not_grouped(self):
        tokens = make_tokens(size="<length>")
        assert expand_tokens("<size> auto", tokens) == "<length> auto"

    def test_range_propagates(self):
        """A range on the alias reference applies to each parameterless token."""
        tokens = make_tokens(length_percentage="<length>|<percentage>")
        expanded = expand_tokens("<length-percentage [0,∞]>", tokens)
        assert expanded == "[<length [0,∞]>|<percentage [0,∞]>]"

    def test_range_does_not_override_existing(self):
        """Tokens that already carry a range keep it."""
        tokens = make_tokens(lp="<length [1,2]>|<percentage>")
        expanded = expand_tokens("<lp [0,5]>", tokens)
        assert expanded == "[<length [1,2]>|<percentage [0,5]>]"

    def test_nested_aliases(self):
        tokens = make_tokens(outer="<inner> auto", inner="a|b")
        assert expand_tokens("<outer>", tokens) == "[[a|b] auto]"

    def test_shared_alias_is_not_a_cycle(self):
        """The same alias used twice along different branches expands twice."""
        tokens = make_tokens(pair="<unit> <unit>", unit="<length>")
        assert expand_tokens("<pair>", tokens) == "[<length> <length>]"

    def test_cycle_detected(self):
        """A token that refers back to itself raises with the cycle path."""
        tokens = make_tokens(a="<b> | x", b="<a>")
        with pytest.raises(ConfigurationError) as exc_info:
            expand_tokens("<a>", tokens)

        assert exc_info.value.cycle == ["<a>", "<b>", "<a>"]
        assert "<a> -> <b> -> <a>" in str(exc_info.value)

    def test_self_reference_detected(self):
        tokens = make_tokens(loop="<loop>+")
        with pytest.raises(ConfigurationError):
            expand_tokens("auto | <loop>", tokens)


class TestParseSyntax:
    """Tests for parse_syntax."""

    def test_alternatives_then_repetition(self):
        """Shapes come out in discovery order."""
        assert parse_syntax("auto | <length>{1,2}") == ["auto", "<length>", "<length> <length>"]

    def test_optional_zero_form_first(self):
        assert parse_syntax("a b?") == ["a", "a b"]

    def test_exact_repetition(self):
        assert parse_syntax("[a|b]{2}") == ["a a", "a b", "b a", "b b"]

    def test_all_of(self):
        """&& yields every ordering."""
        assert parse_syntax("a && b") == ["a b", "b a"]

    def test_any_of(self):
        """|| yields every non-empty subset in every ordering."""
        assert parse_syntax("a || b") == ["a", "b", "a b", "b a"]

    def test_precedence(self):
        """Juxtaposition binds tighter than &&, then ||, then |."""
        assert parse_syntax("a b | c") == ["a b", "c"]
        assert parse_syntax("a | b || c") == ["a", "b", "c", "b c", "c b"]

    def test_plus_is_bounded(self):
        shapes = parse_syntax("x+")
        assert len(shapes) == REPEAT_BOUND
        assert shapes[0] == "x"
        assert shapes[-1] == " ".join(["x"] * REPEAT_BOUND)

    def test_star_drops_empty_shape(self):
        """The zero-occurrence form of * is not a shape."""
        assert parse_syntax("x*") == parse_syntax("x+")

    def test_open_range(self):
        """{m,} repeats from m up to the bound."""
        shapes = parse_syntax("x{2,}")
        assert shapes[0] == "x x"
        assert len(shapes) == REPEAT_BOUND - 1

    def test_explicit_separator(self):
        """Explicit separators are written without spaces."""
        assert parse_syntax("<number> [ / <number> ]?") == ["<number>", "<number>/<number>"]
        assert parse_syntax("a , b") == ["a,b"]

    def test_function_is_atomic(self):
        assert parse_syntax("fit-content(<length>) | auto") == ["fit-content(<length>)", "auto"]

    def test_token_range_is_atomic(self):
        assert parse_syntax("<length [0,∞]>{1,2}") == [
            "<length [0,∞]>",
            "<length [0,∞]> <length [0,∞]>",
        ]

    def test_duplicates_removed(self):
        assert parse_syntax("a | a | b") == ["a", "b"]

    def test_empty_grammar(self):
        assert parse_syntax("") == []

    def test_deterministic(self):
        """Parsing the same grammar twice gives the same list."""
        grammar = "none | [<length> <color>?]{1,3} || auto"
        assert parse_syntax(grammar) == parse_syntax(grammar)

    def test_repeated_alias_group(self):
        """none | [<filter-function>]+ after expansion."""
        tokens = make_tokens(filter_function="blur(<length>)|brightness(<number>)")
        expanded = expand_tokens("none | [<filter-function>]+", tokens)
        shapes = parse_syntax(expanded)

        assert shapes[0] == "none"
        assert shapes[1] == "blur(<length>)"
        assert "blur(<length>) brightness(<number>)" in shapes
        # 1 + 2 + 4 + 8 + 16
        assert len(shapes) == 31
        assert parse_syntax(expanded) == shapes


class TestMalformedSyntax:
    """Malformed grammars raise ConfigurationError."""

    @pytest.mark.parametrize(
        "grammar",
        ["[a | b", "a |", "| a", "a ]", "a{3,1}", "a{x}", "fn(a"],
    )
    def test_malformed(self, grammar: str):
        with pytest.raises(ConfigurationError):
            parse_syntax(grammar)
