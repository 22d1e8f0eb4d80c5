"""Tests for the in-memory platform oracles."""

import pytest

from cssif.runtime.platform import StaticPlatform, normalize_query


class TestNormalizeQuery:
    def test_strips_outer_parens_and_spacing(self):
        assert normalize_query("( min-width:768px )") == "min-width: 768px"

    def test_keeps_inner_groups(self):
        assert normalize_query("(a: 1) and (b: 2)") == "(a: 1) and (b: 2)"


class TestMediaEvaluation:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("(min-width: 768px)", True),
            ("(min-width: 1025px)", False),
            ("(max-width: 1024px)", True),
            ("(width: 1024px)", True),
            ("(min-width: 48em)", True),
            ("(min-height: 800px)", False),
            ("(orientation: landscape)", True),
            ("(orientation: portrait)", False),
            ("(prefers-color-scheme: light)", True),
            ("(hover)", True),
            ("(min-width: 768px) and (max-width: 900px)", False),
            ("(max-width: 500px), (min-width: 1000px)", True),
            ("(max-width: 500px) or (min-width: 1000px)", True),
            ("not (max-width: 500px)", True),
            ("screen", True),
            ("print", False),
            ("(min-width: wide)", False),
        ],
    )
    def test_default_viewport(self, query, expected):
        assert StaticPlatform(width=1024, height=768).evaluate_media(query) is expected

    def test_override_wins(self):
        platform = StaticPlatform(media={"print": True})
        assert platform.evaluate_media("(print)") is True


class TestChangeNotification:
    def test_resize_fires_only_flipped_queries(self):
        platform = StaticPlatform(width=1024)
        wide = platform.match_media("(min-width: 768px)")
        narrow = platform.match_media("(max-width: 2000px)")
        fired = []
        wide.add_change_listener(lambda mql: fired.append(("wide", mql.matches)))
        narrow.add_change_listener(lambda mql: fired.append(("narrow", mql.matches)))

        platform.resize(500)
        assert fired == [("wide", False)]

    def test_no_event_without_change(self):
        platform = StaticPlatform(width=1024)
        mql = platform.match_media("(min-width: 768px)")
        fired = []
        mql.add_change_listener(fired.append)
        platform.resize(900)
        assert fired == []

    def test_set_media_and_environment(self):
        platform = StaticPlatform()
        print_mql = platform.match_media("(print)")
        dark_mql = platform.match_media("(prefers-color-scheme: dark)")
        fired = []
        print_mql.add_change_listener(fired.append)
        dark_mql.add_change_listener(fired.append)
        platform.set_media("print", True)
        platform.set_environment("prefers-color-scheme", "dark")
        assert fired == [print_mql, dark_mql]

    def test_listener_count(self):
        platform = StaticPlatform()
        mql = platform.match_media("(print)")

        def callback(_):
            pass

        mql.add_change_listener(callback)
        mql.add_change_listener(callback)
        assert platform.listener_count == 1
        mql.remove_change_listener(callback)
        assert platform.listener_count == 0


class TestFeatureSupport:
    def test_supports_declaration(self):
        platform = StaticPlatform(features=["display: grid"])
        assert platform.supports_declaration("display", "grid")
        assert not platform.supports_declaration("display", "masonry")

    def test_native_if_probe(self):
        assert not StaticPlatform().supports_declaration("color", "if(style(--t): red; else: blue)")
        assert StaticPlatform(native_if=True).supports_declaration("color", "if(style(--t): red; else: blue)")
