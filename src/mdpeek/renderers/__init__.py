#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/renderers/__init__.py
"""Emitters turning event streams into HTML or terminal text.

Both emitters share :class:`~mdpeek.renderers.base.BaseEmitter` and
implement the full :class:`~mdpeek.visitors.EventVisitor` interface.
"""

from mdpeek.renderers.base import BaseEmitter, RenderState
from mdpeek.renderers.html import HtmlEmitter, HtmlRenderState
from mdpeek.renderers.terminal import TerminalEmitter, TerminalRenderState

__all__ = [
    "BaseEmitter",
    "RenderState",
    "HtmlEmitter",
    "HtmlRenderState",
    "TerminalEmitter",
    "TerminalRenderState",
]
