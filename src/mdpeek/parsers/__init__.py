#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/parsers/__init__.py
"""Parsers producing event streams from source documents."""

from mdpeek.parsers.markdown import MarkdownEventParser, markdown_to_events

__all__ = ["MarkdownEventParser", "markdown_to_events"]
