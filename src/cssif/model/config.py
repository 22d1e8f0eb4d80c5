"""Option structures for the build-time and runtime entry points."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransformOptions:
    """Options for the build-time transform."""

    minify: bool = False


@dataclass(frozen=True)
class RuntimeOptions:
    """Options for runtime processing."""

    debug: bool = False
    use_native_transform: bool = True
