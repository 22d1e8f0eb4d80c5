"""Transform results for a single property and for a whole stylesheet."""

from __future__ import annotations

from dataclasses import dataclass, field

from cssif.model.diagnostic import Diagnostic


@dataclass(frozen=True)
class TransformStats:
    total_rules: int = 0
    transformed_rules: int = 0


@dataclass(frozen=True)
class PropertyTransform:
    """Generated CSS for one declaration whose value contains if()."""

    native_css: str = ""
    runtime_css: str = ""
    has_runtime_rules: bool = False
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class TransformResult:
    """Output of the build-time transform.

    ``native_css`` never contains an unresolved ``if()`` function; any
    declaration that could not be rewritten statically is carried whole
    in ``runtime_css``.
    """

    native_css: str
    runtime_css: str = ""
    has_runtime_rules: bool = False
    stats: TransformStats = field(default_factory=TransformStats)
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]
