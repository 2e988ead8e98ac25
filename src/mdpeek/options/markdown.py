#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdpeek/options/markdown.py
"""Configuration options for Markdown parsing.

This module defines which mistune plugins and adapter features the
Markdown-to-event parser enables.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpeek.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for the Markdown event parser.

    Parameters
    ----------
    parse_tables : bool, default True
        Enable GFM pipe tables.
    parse_strikethrough : bool, default True
        Enable ``~~strikethrough~~``.
    parse_footnotes : bool, default True
        Enable ``[^label]`` footnotes.
    parse_task_lists : bool, default True
        Enable ``- [x]`` task list items.
    parse_math : bool, default True
        Enable ``$inline$`` and ``$$display$$`` math.
    parse_definition_lists : bool, default True
        Enable definition lists.
    parse_superscript : bool, default False
        Enable ``^superscript^``.
    parse_subscript : bool, default False
        Enable ``~subscript~``. Conflicts with single-tilde strikethrough
        in some documents, so it is off by default.
    parse_front_matter : bool, default True
        Turn a leading ``---`` fenced YAML block into a metadata block.
    parse_alerts : bool, default True
        Turn ``> [!NOTE]`` style quotes into alert block quotes.
    parse_heading_attributes : bool, default True
        Read trailing ``{#id .class key=value}`` on headings.

    """

    parse_tables: bool = field(default=True, metadata={"help": "Parse tables", "importance": "core"})
    parse_strikethrough: bool = field(default=True, metadata={"help": "Parse strikethrough", "importance": "core"})
    parse_footnotes: bool = field(default=True, metadata={"help": "Parse footnotes", "importance": "core"})
    parse_task_lists: bool = field(default=True, metadata={"help": "Parse task lists", "importance": "core"})
    parse_math: bool = field(default=True, metadata={"help": "Parse inline and display math", "importance": "core"})
    parse_definition_lists: bool = field(
        default=True, metadata={"help": "Parse definition lists", "importance": "advanced"}
    )
    parse_superscript: bool = field(default=False, metadata={"help": "Parse ^superscript^", "importance": "advanced"})
    parse_subscript: bool = field(default=False, metadata={"help": "Parse ~subscript~", "importance": "advanced"})
    parse_front_matter: bool = field(
        default=True, metadata={"help": "Treat leading YAML front matter as metadata", "importance": "core"}
    )
    parse_alerts: bool = field(
        default=True, metadata={"help": "Recognize GitHub alert block quotes", "importance": "core"}
    )
    parse_heading_attributes: bool = field(
        default=True, metadata={"help": "Read {#id .class} heading attributes", "importance": "advanced"}
    )
