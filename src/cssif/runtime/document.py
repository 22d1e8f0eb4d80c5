"""Minimal document model: style and link nodes plus batched mutation records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

__all__ = [
    "Document",
    "LinkNode",
    "MutationRecord",
    "ORIGINAL_HREF_KEY",
    "PENDING_KEY",
    "PROCESSED_KEY",
    "StyleNode",
    "StylesheetObserver",
]

# dataset keys set on nodes by the runtime
PROCESSED_KEY = "css-if-polyfill-processed"
PENDING_KEY = "css-if-polyfill-pending"
ORIGINAL_HREF_KEY = "original-href"


@dataclass(eq=False)
class StyleNode:
    """An inline ``<style>`` element."""

    text_content: str = ""
    dataset: dict[str, str] = field(default_factory=dict)

    @property
    def processed(self) -> bool:
        return PROCESSED_KEY in self.dataset


@dataclass(eq=False)
class LinkNode:
    """A ``<link>`` element; only ``rel="stylesheet"`` links are processed."""

    href: str
    rel: str = "stylesheet"
    disabled: bool = False
    dataset: dict[str, str] = field(default_factory=dict)

    @property
    def processed(self) -> bool:
        return PROCESSED_KEY in self.dataset


Node = Union[StyleNode, LinkNode]


@dataclass(frozen=True)
class MutationRecord:
    added_nodes: tuple[Node, ...]


Observer = Callable[[list[MutationRecord]], None]


class Document:
    """Ordered head and body node lists for one origin.

    Insertions are queued as :class:`MutationRecord` objects and handed to
    observers in one batch by :meth:`flush_mutations`.
    """

    def __init__(self, origin: str = "http://localhost") -> None:
        self.origin = origin
        self.head: list[Node] = []
        self.body: list[Node] = []
        self._observers: list[Observer] = []
        self._pending: list[MutationRecord] = []

    def append(self, node: Node, *, to_body: bool = False) -> Node:
        (self.body if to_body else self.head).append(node)
        self._pending.append(MutationRecord(added_nodes=(node,)))
        return node

    def insert_after(self, reference: Node, node: Node) -> Node:
        for container in (self.head, self.body):
            for index, existing in enumerate(container):
                if existing is reference:
                    container.insert(index + 1, node)
                    self._pending.append(MutationRecord(added_nodes=(node,)))
                    return node
        raise ValueError("Reference node is not in the document")

    def remove(self, node: Node) -> None:
        for container in (self.head, self.body):
            for index, existing in enumerate(container):
                if existing is node:
                    del container[index]
                    return

    def contains(self, node: Node) -> bool:
        return any(existing is node for existing in (*self.head, *self.body))

    def style_nodes(self) -> list[StyleNode]:
        return [n for n in (*self.head, *self.body) if isinstance(n, StyleNode)]

    def link_nodes(self) -> list[LinkNode]:
        return [n for n in (*self.head, *self.body) if isinstance(n, LinkNode)]

    def observe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def disconnect(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def flush_mutations(self) -> int:
        """Deliver all queued records to observers; return the record count."""
        batch, self._pending = self._pending, []
        if batch:
            for observer in list(self._observers):
                observer(batch)
        return len(batch)


class StylesheetObserver:
    """Dispatches newly inserted style and link nodes, once per node per batch.

    Nodes already marked processed are skipped, so a burst of records for
    the same node, or records for nodes the runtime inserted itself, cause
    no extra work.
    """

    def __init__(
        self,
        on_style: Callable[[StyleNode], object],
        on_link: Callable[[LinkNode], object],
    ) -> None:
        self._on_style = on_style
        self._on_link = on_link

    def __call__(self, records: list[MutationRecord]) -> None:
        seen: list[Node] = []
        for record in records:
            for node in record.added_nodes:
                if any(node is other for other in seen) or node.processed:
                    continue
                seen.append(node)
                if isinstance(node, StyleNode):
                    self._on_style(node)
                elif node.rel == "stylesheet":
                    self._on_link(node)
