"""Tests for the quote- and paren-aware delimiter scanner."""

import pytest

from cssif.errors import UnterminatedFunction
from cssif.parser import find_top_level, match_balanced_parens, split_top_level


# ---------------------------------------------------------------------------
# find_top_level
# ---------------------------------------------------------------------------


class TestFindTopLevel:
    def test_simple_colon(self):
        assert find_top_level(":", "color: red") == 5

    def test_not_found(self):
        assert find_top_level(":", "red") == -1

    def test_skips_nested_parens(self):
        text = "media(min-width: 768px): blue"
        assert find_top_level(":", text) == text.index("):") + 1

    def test_skips_double_quoted(self):
        text = '"a:b": c'
        assert find_top_level(":", text) == 5

    def test_skips_single_quoted(self):
        text = "'a;b'; c"
        assert find_top_level(";", text) == 5

    def test_escaped_quote_does_not_close_string(self):
        text = r'"a\";b"; c'
        assert find_top_level(";", text) == text.index('"; c') + 1

    def test_start_offset(self):
        assert find_top_level(";", "a;b;c", 2) == 3

    def test_other_quote_kind_inside_string(self):
        text = "\"it's;\"; x"
        assert find_top_level(";", text) == 7


# ---------------------------------------------------------------------------
# match_balanced_parens
# ---------------------------------------------------------------------------


class TestMatchBalancedParens:
    def test_flat(self):
        text = "if(a)"
        assert match_balanced_parens(text, 3) == 4

    def test_nested(self):
        text = "if(supports(color: lab(50% 20 -30)): x) tail"
        assert match_balanced_parens(text, 3) == text.index(") tail")

    def test_paren_inside_string_ignored(self):
        text = 'if(x: ")"; else: y)'
        assert match_balanced_parens(text, 3) == len(text) - 1

    def test_unterminated_raises(self):
        with pytest.raises(UnterminatedFunction) as exc_info:
            match_balanced_parens("if(media(a: b", 3)
        assert exc_info.value.offset == 3


# ---------------------------------------------------------------------------
# split_top_level
# ---------------------------------------------------------------------------


class TestSplitTopLevel:
    def test_split_clauses(self):
        parts = split_top_level("media(a): b; else: c", ";")
        assert parts == ["media(a): b", " else: c"]

    def test_semicolons_in_parens_kept(self):
        parts = split_top_level("url(a;b); c", ";")
        assert parts == ["url(a;b)", " c"]

    def test_trailing_separator_keeps_empty_segment(self):
        assert split_top_level("a;", ";") == ["a", ""]

    def test_no_separator(self):
        assert split_top_level("abc", ";") == ["abc"]
