"""Stylesheet model: declarations, rules and opaque passthrough blocks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair inside a rule body."""

    property: str
    value: str

    def __str__(self) -> str:
        return f"{self.property}: {self.value}"


@dataclass(frozen=True)
class Rule:
    """A selector with its ordered declarations.

    ``raw`` keeps the original rule text so rules that need no rewriting
    can be emitted verbatim.
    """

    selector: str
    declarations: tuple[Declaration, ...] = ()
    raw: str = ""


@dataclass(frozen=True)
class RawBlock:
    """Text kept verbatim: comments, body-less at-rules, malformed fragments."""

    text: str


@dataclass(frozen=True)
class Stylesheet:
    """Rules and raw blocks in source order."""

    items: tuple[Rule | RawBlock, ...] = field(default_factory=tuple)

    @property
    def rules(self) -> list[Rule]:
        return [item for item in self.items if isinstance(item, Rule)]
