"""Tests for if() occurrence extraction."""

from cssif.model.expression import ExtractedMatch
from cssif.parser import contains_if_function, extract_if_functions


class TestSingleOccurrence:
    def test_whole_value(self):
        for text in (
            "if(media(min-width: 768px): blue; else: red)",
            "if(supports(display: grid): transparent; else: white)",
            "if(style(--large): 24px; else: 16px)",
        ):
            matches = extract_if_functions(text)
            assert len(matches) == 1
            assert matches[0].full_text == text
            assert matches[0].inner_content == text[3:-1]

    def test_offsets(self):
        text = "1px solid if(media(print): black; else: gray)"
        [match] = extract_if_functions(text)
        assert match == ExtractedMatch(
            full_text="if(media(print): black; else: gray)",
            inner_content="media(print): black; else: gray",
            start=10,
            end=len(text),
        )
        assert text[match.start:match.end] == match.full_text

    def test_nested_parentheses(self):
        text = "if(supports(color: lab(50% 20 -30)): lab(50% 20 -30); else: blue)"
        [match] = extract_if_functions(text)
        assert match.inner_content == "supports(color: lab(50% 20 -30)): lab(50% 20 -30); else: blue"

    def test_paren_in_quoted_value(self):
        text = 'if(media(print): ")"; else: "(")'
        [match] = extract_if_functions(text)
        assert match.full_text == text


class TestMultipleOccurrences:
    def test_two_in_shorthand(self):
        text = "if(media(min-width: 768px): blue; else: red) if(supports(grid): 1fr; else: auto)"
        matches = extract_if_functions(text)
        assert [m.full_text for m in matches] == [
            "if(media(min-width: 768px): blue; else: red)",
            "if(supports(grid): 1fr; else: auto)",
        ]
        assert matches[0].end < matches[1].start

    def test_nested_if_reported_once(self):
        text = "if(media(print): if(media(color): a; else: b); else: c)"
        matches = extract_if_functions(text)
        assert len(matches) == 1
        assert matches[0].full_text == text


class TestFalsePositives:
    def test_identifier_suffix_is_not_if(self):
        assert extract_if_functions("my-if(a: b)") == []
        assert extract_if_functions("gif(1)") == []
        assert extract_if_functions("_if(1)") == []

    def test_real_if_after_lookalike(self):
        matches = extract_if_functions("my-if(x) if(media(print): a; else: b)")
        assert len(matches) == 1
        assert matches[0].start == 9

    def test_unterminated_is_skipped(self):
        assert extract_if_functions("if(media(print): a; else: b") == []

    def test_unterminated_does_not_hide_later_matches(self):
        text = "if(media(x): a if(media(print): a; else: b)"
        [match] = extract_if_functions(text)
        assert match.full_text == "if(media(print): a; else: b)"
        assert match.start == 15


class TestContainsIfFunction:
    def test_terminated(self):
        assert contains_if_function("if(media(print): a; else: b)")

    def test_unterminated(self):
        assert contains_if_function("if(media(print): a")

    def test_lookalike_only(self):
        assert not contains_if_function("my-if(a)")

    def test_plain_value(self):
        assert not contains_if_function("red")
