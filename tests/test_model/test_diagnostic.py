"""Tests for the diagnostic model."""

from cssif.model import Diagnostic, Severity


class TestDiagnostic:
    def test_severity_flags(self):
        error = Diagnostic(code="malformed_expression", severity=Severity.ERROR, message="bad")
        warning = Diagnostic(code="opaque_block", severity=Severity.WARNING, message="skip")
        assert error.is_error and not error.is_warning
        assert warning.is_warning and not warning.is_error

    def test_defaults(self):
        diag = Diagnostic(code="x", severity=Severity.INFO, message="m")
        assert diag.selector is None
        assert diag.prop is None

    def test_str_with_selector_and_prop(self):
        diag = Diagnostic(
            code="runtime_condition",
            severity=Severity.INFO,
            message="style() condition requires runtime evaluation",
            selector=".card",
            prop="color",
        )
        assert str(diag) == (
            "INFO runtime_condition [.card { color }]: "
            "style() condition requires runtime evaluation"
        )

    def test_str_with_selector_only(self):
        diag = Diagnostic(code="opaque_block", severity=Severity.WARNING, message="m", selector="@media x")
        assert str(diag) == "WARNING opaque_block [@media x]: m"

    def test_str_without_location(self):
        assert str(Diagnostic(code="c", severity=Severity.ERROR, message="m")) == "ERROR c: m"
