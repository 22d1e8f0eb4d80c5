"""Diagnostic model: structured messages about if() expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced while transforming a stylesheet.

    Attributes:
        code: Identifier for the kind of finding (e.g. ``malformed_expression``).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        selector: The rule selector involved, if applicable.
        prop: The declaration property involved, if applicable.
    """

    code: str
    severity: Severity
    message: str
    selector: str | None = None
    prop: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.selector and self.prop:
            location = f" [{self.selector} {{ {self.prop} }}]"
        elif self.selector:
            location = f" [{self.selector}]"
        return f"{self.severity.value} {self.code}{location}: {self.message}"
