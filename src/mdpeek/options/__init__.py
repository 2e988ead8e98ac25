#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mdpeek parser and emitters.

Each component has its own frozen Options dataclass with component-specific
parameters.
"""

from __future__ import annotations

from mdpeek.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdpeek.options.html import HtmlRendererOptions
from mdpeek.options.markdown import MarkdownParserOptions
from mdpeek.options.terminal import TerminalRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "TerminalRendererOptions",
]
