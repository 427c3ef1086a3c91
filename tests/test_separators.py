"""
Tests for top-level separator extraction.
"""

import pytest

from chuk_block_style.core import (
    extract_separator,
    extract_separators,
    join_components,
    split_components,
)


class TestExtractSeparator:
    """Tests for extract_separator."""

    def test_space_then_slash(self):
        """Whitespace around a slash collapses into the slash."""
        assert extract_separator("10px 20px / 30px") == [" ", "/"]

    def test_function_arguments_are_opaque(self):
        """Commas inside a function call are not separators."""
        assert extract_separator("rgba(1,2,3,0.5)") == []

    def test_token_ranges_are_opaque(self):
        """Commas inside a token range are not separators."""
        assert extract_separator("<length [0,10]> <color>") == [" "]

    def test_nested_functions(self):
        assert extract_separator("calc(100% - var(--a, 1px)) auto") == [" "]

    def test_quoted_strings_are_opaque(self):
        assert extract_separator('url("a b/c") 10px') == [" "]

    def test_commas(self):
        """Spaces around commas are absorbed."""
        assert extract_separator("a,b , c") == [",", ","]

    def test_single_component(self):
        assert extract_separator("auto") == []

    def test_empty(self):
        assert extract_separator("") == []

    def test_custom_separators(self):
        """Only the given separators are recognised."""
        assert extract_separator("a b,c", separators=(",",)) == [","]

    def test_separator_count_matches_components(self):
        """There is always one separator fewer than components."""
        for text in ("10px 20px / 30px", "a,b , c", "x", "<length> / <length> <length>"):
            components, separators = split_components(text)
            assert len(separators) == len(components) - 1

    def test_many_shapes(self):
        """Separator sets are returned per shape, in order."""
        assert extract_separators(["a b", "a/b", "a"]) == [[" "], ["/"], []]


class TestSplitAndJoin:
    """Tests for split_components and join_components."""

    def test_surrounding_whitespace_dropped(self):
        assert split_components("  10px   20px ") == (["10px", "20px"], [" "])

    def test_double_explicit_separator(self):
        """Two explicit separators in a row keep an empty component between them."""
        assert split_components("a,,b") == (["a", "", "b"], [",", ","])

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (",10px", (["", "10px"], [","])),
            (" / 10px", (["", "10px"], ["/"])),
            (",,10px", (["", "", "10px"], [",", ","])),
            ("10px,", (["10px", ""], [","])),
            ("1px 2px /", (["1px", "2px", ""], [" ", "/"])),
            (",", (["", ""], [","])),
        ],
    )
    def test_stray_separator_kept(self, text: str, expected: tuple[list[str], list[str]]):
        """A leading or trailing explicit separator yields an empty component."""
        assert split_components(text) == expected

    def test_stray_separator_round_trip(self):
        components, separators = split_components("10px,")
        assert join_components(components, separators) == "10px,"

    def test_join(self):
        assert join_components(["10px", "20px"], ["/"]) == "10px/20px"

    def test_join_mismatch(self):
        """A separator count that does not fit raises ValueError."""
        with pytest.raises(ValueError):
            join_components(["a", "b"], [])
