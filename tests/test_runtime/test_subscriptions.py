"""Tests for the media query subscription registry."""

from cssif.errors import MalformedExpression
from cssif.events import EventBus, MediaQueryChanged, MediaQueryRegistered
from cssif.runtime.document import StyleNode
from cssif.runtime.platform import StaticPlatform
from cssif.runtime.subscriptions import MediaQueryRegistry, Subscriber


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _registry(platform: StaticPlatform, bus: EventBus | None = None):
    """Registry whose renderer reports the current width in the text."""
    renders: list[Subscriber] = []

    def render(subscriber: Subscriber) -> str:
        renders.append(subscriber)
        return f"{subscriber.original_text} @ {platform.width}"

    return MediaQueryRegistry(platform, render, bus=bus), renders


class TestRegister:
    def test_one_listener_per_query(self):
        platform = StaticPlatform()
        registry, _ = _registry(platform)
        first, second = StyleNode("a"), StyleNode("b")

        registry.register("min-width: 768px", first, "a")
        registry.register("min-width: 768px", second, "b")

        assert registry.listener_count == 1
        assert platform.listener_count == 1
        assert [s.element for s in registry.subscribers("min-width: 768px")] == [first, second]

    def test_register_is_idempotent(self):
        platform = StaticPlatform()
        registry, _ = _registry(platform)
        node = StyleNode("a")
        registry.register("print", node, "a")
        registry.register("print", node, "a")
        assert len(registry.subscribers("print")) == 1
        assert platform.listener_count == 1

    def test_distinct_queries_get_distinct_listeners(self):
        platform = StaticPlatform()
        registry, _ = _registry(platform)
        node = StyleNode("a")
        registry.register("min-width: 768px", node, "a")
        registry.register("max-width: 300px", node, "a")
        assert registry.queries == ["min-width: 768px", "max-width: 300px"]
        assert platform.listener_count == 2

    def test_registered_event(self):
        bus = EventBus()
        events = []
        bus.on_all(events.append)
        registry, _ = _registry(StaticPlatform(), bus)
        registry.register("print", StyleNode(), "x")
        registry.register("print", StyleNode(), "y")
        assert events == [MediaQueryRegistered(query="print")]

    def test_failing_platform_still_records_subscriber(self):
        class Broken(StaticPlatform):
            def match_media(self, query):
                raise RuntimeError("no matchMedia")

        registry, _ = _registry(Broken())
        registry.register("print", StyleNode(), "x")
        assert registry.listener_count == 0
        assert len(registry.subscribers("print")) == 1


class TestReprocess:
    def test_change_updates_every_subscriber(self):
        platform = StaticPlatform(width=1024)
        registry, _ = _registry(platform)
        first, second = StyleNode("a @ 1024"), StyleNode("b @ 1024")
        registry.register("min-width: 768px", first, "a")
        registry.register("min-width: 768px", second, "b")

        platform.resize(500)

        assert first.text_content == "a @ 500"
        assert second.text_content == "b @ 500"

    def test_unchanged_text_not_rewritten(self):
        platform = StaticPlatform(width=1024)
        registry, _ = _registry(platform)
        node = StyleNode("a @ 1024")
        registry.register("print", node, "a")
        assert registry.reprocess("print") == 0
        assert registry.reprocess("print") == 0
        assert node.text_content == "a @ 1024"

    def test_changed_event(self):
        bus = EventBus()
        changes = []
        bus.subscribe(MediaQueryChanged, changes.append)
        platform = StaticPlatform(width=1024)
        registry, _ = _registry(platform, bus)
        registry.register("min-width: 768px", StyleNode(), "a")
        platform.resize(700)
        platform.resize(800)
        assert changes == [
            MediaQueryChanged(query="min-width: 768px", matches=False),
            MediaQueryChanged(query="min-width: 768px", matches=True),
        ]

    def test_failing_subscriber_does_not_block_others(self):
        platform = StaticPlatform(width=1024)
        broken, healthy = StyleNode("broken"), StyleNode("healthy @ 1024")

        def render(subscriber: Subscriber) -> str:
            if subscriber.element is broken:
                raise MalformedExpression("bad if()")
            return f"{subscriber.original_text} @ {platform.width}"

        registry = MediaQueryRegistry(platform, render)
        registry.register("min-width: 768px", broken, "broken")
        registry.register("min-width: 768px", healthy, "healthy")

        platform.resize(500)

        assert broken.text_content == "broken"
        assert healthy.text_content == "healthy @ 500"
        assert registry.reprocess("min-width: 768px") == 0

    def test_unknown_query(self):
        registry, renders = _registry(StaticPlatform())
        assert registry.reprocess("print") == 0
        assert renders == []


class TestCleanup:
    def test_removes_listeners_and_subscribers(self):
        platform = StaticPlatform(width=1024)
        registry, renders = _registry(platform)
        node = StyleNode("a @ 1024")
        registry.register("min-width: 768px", node, "a")
        registry.register("print", node, "a")

        registry.cleanup()

        assert registry.listener_count == 0
        assert registry.queries == []
        assert platform.listener_count == 0
        platform.resize(300)
        assert renders == []
        assert node.text_content == "a @ 1024"

    def test_cleanup_when_empty_is_noop(self):
        registry, _ = _registry(StaticPlatform())
        registry.cleanup()
        registry.cleanup()
        assert registry.listener_count == 0
