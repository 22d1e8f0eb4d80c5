"""Build-time transform: rewrite a whole stylesheet's if() functions."""

from __future__ import annotations

import logging
import re

from cssif.model.config import TransformOptions
from cssif.model.diagnostic import Diagnostic, Severity
from cssif.model.result import TransformResult, TransformStats
from cssif.model.stylesheet import Declaration, Rule
from cssif.parser.extractor import contains_if_function
from cssif.stylesheet.parser import parse_rule, split_rules
from cssif.transforms.native import transform_property

__all__ = ["minify", "transform"]

log = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"\s*([{};])\s*")


def minify(css: str) -> str:
    """Collapse whitespace runs and drop whitespace around ``{``, ``}`` and ``;``."""
    css = _WHITESPACE_RE.sub(" ", css)
    css = _PUNCTUATION_RE.sub(r"\1", css)
    return css.strip()


def _base_rule(selector: str, declarations: list[Declaration]) -> str:
    body = "; ".join(str(decl) for decl in declarations)
    return f"{selector} {{ {body}; }}"


def _needs_transform(rule: Rule) -> bool:
    return any(contains_if_function(decl.value) for decl in rule.declarations)


def _transform_rule(
    rule: Rule,
    native: list[str],
    runtime: list[str],
    diagnostics: list[Diagnostic],
) -> bool:
    """Emit *rule* into the output streams; return True if runtime CSS was added."""
    base: list[Declaration] = []
    generated: list[str] = []
    has_runtime = False

    for decl in rule.declarations:
        if not contains_if_function(decl.value):
            base.append(decl)
            continue
        result = transform_property(rule.selector, decl.property, decl.value)
        if result.native_css:
            generated.append(result.native_css)
        if result.has_runtime_rules:
            runtime.append(result.runtime_css)
            has_runtime = True
        diagnostics.extend(result.diagnostics)

    # Unconditional declarations go first so conditional blocks override them.
    if base:
        native.append(_base_rule(rule.selector, base))
    native.extend(generated)
    return has_runtime


def transform(css: str, options: TransformOptions | None = None) -> TransformResult:
    """Rewrite *css* into native CSS plus the rules that need runtime evaluation.

    Parse failures in one if() never abort the stylesheet: the affected
    declaration is moved to ``runtime_css`` and reported in
    ``diagnostics``. ``stats.transformed_rules`` counts the items that
    were rewritten or moved to runtime.
    """
    options = options or TransformOptions()
    items = split_rules(css)

    if "if(" not in css:
        native_css = minify(css) if options.minify else css.strip()
        return TransformResult(native_css=native_css, stats=TransformStats(total_rules=len(items)))

    native: list[str] = []
    runtime: list[str] = []
    diagnostics: list[Diagnostic] = []
    has_runtime = False
    transformed = 0

    for text in items:
        rule = parse_rule(text)
        if rule is None:
            if not text.startswith("/*") and contains_if_function(text):
                # Nested at-rule bodies are opaque; keep if() out of native CSS.
                runtime.append(text)
                has_runtime = True
                transformed += 1
                diagnostics.append(Diagnostic(
                    code="opaque_block",
                    severity=Severity.WARNING,
                    message=f"if() inside a nested block is left for runtime: {text[:40]!r}",
                ))
            else:
                native.append(text)
            continue

        if not _needs_transform(rule):
            native.append(text)
            continue

        transformed += 1
        if _transform_rule(rule, native, runtime, diagnostics):
            has_runtime = True

    native_css = "\n".join(native).strip()
    if options.minify:
        native_css = minify(native_css)

    stats = TransformStats(total_rules=len(items), transformed_rules=transformed)
    log.debug(
        "Transformed %d/%d rules, %d diagnostic(s)",
        stats.transformed_rules,
        stats.total_rules,
        len(diagnostics),
    )
    return TransformResult(
        native_css=native_css,
        runtime_css="\n".join(runtime).strip(),
        has_runtime_rules=has_runtime,
        stats=stats,
        diagnostics=tuple(diagnostics),
    )
