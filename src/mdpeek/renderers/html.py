#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/renderers/html.py
"""HTML rendering from the event stream.

This module provides the HtmlEmitter class which converts a well-nested
event stream into sanitized HTML5 markup. By default the output is the inner
body fragment; with ``standalone=True`` it is wrapped in a minimal page.

Every piece of user text passes through one of the escapers in
:mod:`mdpeek.utils.escape`. Raw HTML events are the one exception and are
passed through unless ``escape_raw_html`` is set.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from mdpeek.constants import DEFAULT_PAGE_CSS
from mdpeek.events import (
    Alignment,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    DisplayMath,
    Emphasis,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    HtmlBlock,
    Image,
    InlineHtml,
    InlineMath,
    Item,
    Link,
    List,
    MetadataBlock,
    Paragraph,
    Rule,
    SoftBreak,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableHead,
    TableRow,
    TaskListMarker,
    Text,
)
from mdpeek.options.html import HtmlRendererOptions
from mdpeek.renderers.base import BaseEmitter, RenderState
from mdpeek.utils.escape import escape_attribute, escape_href, escape_text

logger = logging.getLogger(__name__)


class TableState(Enum):
    """Which part of a table the cells being emitted belong to."""

    HEAD = "head"
    BODY = "body"


@dataclass
class HtmlRenderState(RenderState):
    """Render state of the HTML emitter.

    Parameters
    ----------
    table_state : TableState, default = TableState.HEAD
        Whether cells render as ``th`` or ``td``
    table_alignments : list of Alignment or None
        Column alignments of the open table
    table_cell_index : int, default = 0
        Position of the next cell in the current row

    """

    table_state: TableState = TableState.HEAD
    table_alignments: list[Optional[Alignment]] = field(default_factory=list)
    table_cell_index: int = 0

    def is_baseline(self) -> bool:
        """Return True when no block is open and no table state remains."""
        return (
            super().is_baseline()
            and self.table_state is TableState.HEAD
            and not self.table_alignments
            and self.table_cell_index == 0
        )


class HtmlEmitter(BaseEmitter):
    """Render an event stream to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdpeek import markdown_to_events
        >>> from mdpeek.renderers.html import HtmlEmitter
        >>> HtmlEmitter().render(markdown_to_events("# Title\\n\\nHello **world**."))
        '<h1>Title</h1>\\n<p>Hello <strong>world</strong>.</p>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML emitter with options."""
        BaseEmitter._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseEmitter.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []

    @property
    def state(self) -> HtmlRenderState:
        """State of the most recent (or current) render call."""
        return self._state  # type: ignore[return-value]

    def _new_state(self) -> HtmlRenderState:
        self._output = []
        return HtmlRenderState()

    def _finish(self) -> str:
        fragment = "".join(self._output)
        if self.options.standalone:
            return self._wrap_page(fragment)
        return fragment

    def _wrap_page(self, fragment: str) -> str:
        """Wrap a rendered fragment into a minimal HTML5 document."""
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_attribute(self.options.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_text(self.options.title)}</title>",
        ]
        if self.options.css_style == "embedded":
            parts.append("<style>")
            parts.append(DEFAULT_PAGE_CSS.strip())
            parts.append("</style>")
        parts.append("</head>")
        parts.append("<body>")
        parts.append(fragment.rstrip("\n"))
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts) + "\n"

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        if not text:
            return
        self._output.append(text)
        self._state.end_newline = text.endswith("\n")

    def _write_newline_if_needed(self) -> None:
        if not self._state.end_newline:
            self._write("\n")

    def _write_text(self, text: str) -> None:
        if self._state.in_non_writing_block:
            return
        self._write(text)

    def _flatten_leaf(self, event: Event) -> str:
        if isinstance(event, (Text, Code)):
            return escape_attribute(event.text)
        if isinstance(event, InlineMath):
            return f"${escape_attribute(event.text)}$"
        if isinstance(event, DisplayMath):
            return f"$${escape_attribute(event.text)}$$"
        if isinstance(event, FootnoteReference):
            return f"[{self._footnote_number(event.name)}]"
        if isinstance(event, TaskListMarker):
            return "[x]" if event.checked else "[ ]"
        return ""

    # ------------------------------------------------------------------
    # Leaf events
    # ------------------------------------------------------------------

    def visit_text(self, event: Text) -> None:
        """Write escaped text."""
        self._write_text(escape_text(event.text))

    def visit_code(self, event: Code) -> None:
        """Write an inline code span."""
        self._write_text(f"<code>{escape_text(event.text)}</code>")

    def visit_inline_math(self, event: InlineMath) -> None:
        """Write inline math for a client-side renderer."""
        self._write_text(f'<span class="math math-inline">{escape_text(event.text)}</span>')

    def visit_display_math(self, event: DisplayMath) -> None:
        """Write display math for a client-side renderer."""
        self._write_text(f'<span class="math math-display">{escape_text(event.text)}</span>')

    def visit_html(self, event: Html) -> None:
        """Pass raw HTML through, or escape it when configured to."""
        if self.options.escape_raw_html:
            self._write_text(escape_text(event.text))
        else:
            self._write_text(event.text)

    def visit_inline_html(self, event: InlineHtml) -> None:
        """Pass raw inline HTML through, or escape it when configured to."""
        if self.options.escape_raw_html:
            self._write_text(escape_text(event.text))
        else:
            self._write_text(event.text)

    def visit_soft_break(self, event: SoftBreak) -> None:
        """Write a newline."""
        self._write("\n")

    def visit_hard_break(self, event: HardBreak) -> None:
        """Write a line break element."""
        self._write("<br />\n")

    def visit_rule(self, event: Rule) -> None:
        """Write a horizontal rule on its own line."""
        self._write_newline_if_needed()
        self._write("<hr />\n")

    def visit_footnote_reference(self, event: FootnoteReference) -> None:
        """Write a numbered link to the footnote definition."""
        number = self._footnote_number(event.name)
        self._write(
            f'<sup class="footnote-reference"><a href="#{escape_attribute(event.name)}">{number}</a></sup>'
        )

    def visit_task_list_marker(self, event: TaskListMarker) -> None:
        """Write a disabled checkbox."""
        if event.checked:
            self._write('<input disabled="" type="checkbox" checked="">\n')
        else:
            self._write('<input disabled="" type="checkbox">\n')

    # ------------------------------------------------------------------
    # Block tags
    # ------------------------------------------------------------------

    def start_paragraph(self, tag: Paragraph) -> None:
        """Open a paragraph."""
        self._write_newline_if_needed()
        self._write("<p>")

    def end_paragraph(self, tag: Paragraph) -> None:
        """Close a paragraph."""
        self._write("</p>\n")

    def start_heading(self, tag: Heading) -> None:
        """Open a heading with its id, classes and attributes."""
        self._write_newline_if_needed()
        parts = [f"<h{tag.level}"]
        if tag.id:
            parts.append(f' id="{escape_attribute(tag.id)}"')
        if tag.classes:
            parts.append(f' class="{" ".join(escape_attribute(name) for name in tag.classes)}"')
        for name, value in tag.attrs:
            parts.append(f' {escape_attribute(name)}="{escape_attribute(value or "")}"')
        parts.append(">")
        self._write("".join(parts))

    def end_heading(self, tag: Heading) -> None:
        """Close a heading."""
        self._write(f"</h{tag.level}>\n")

    def start_block_quote(self, tag: BlockQuote) -> None:
        """Open a block quote, classed by alert kind when it has one."""
        self._write_newline_if_needed()
        if tag.kind is None:
            self._write("<blockquote>\n")
        else:
            self._write(f'<blockquote class="markdown-alert-{tag.kind.value}">\n')

    def end_block_quote(self, tag: BlockQuote) -> None:
        """Close a block quote."""
        self._write("</blockquote>\n")

    def start_code_block(self, tag: CodeBlock) -> None:
        """Open a code block, with a language class for fenced blocks."""
        self._write_newline_if_needed()
        language = tag.language
        if language:
            self._write(f'<pre><code class="language-{escape_attribute(language)}">')
        else:
            self._write("<pre><code>")

    def end_code_block(self, tag: CodeBlock) -> None:
        """Close a code block."""
        self._write("</code></pre>\n")

    def start_html_block(self, tag: HtmlBlock) -> None:
        """HTML blocks carry no markup of their own."""
        pass

    def end_html_block(self, tag: HtmlBlock) -> None:
        """HTML blocks carry no markup of their own."""
        pass

    def start_list(self, tag: List) -> None:
        """Open an ordered or unordered list."""
        self._write_newline_if_needed()
        if tag.start is None:
            self._write("<ul>\n")
        elif tag.start == 1:
            self._write("<ol>\n")
        else:
            self._write(f'<ol start="{tag.start}">\n')

    def end_list(self, tag: List) -> None:
        """Close a list."""
        self._write("</ul>\n" if tag.start is None else "</ol>\n")

    def start_item(self, tag: Item) -> None:
        """Open a list item."""
        self._write_newline_if_needed()
        self._write("<li>")

    def end_item(self, tag: Item) -> None:
        """Close a list item."""
        self._write("</li>\n")

    def start_definition_list(self, tag: DefinitionList) -> None:
        """Open a definition list."""
        self._write_newline_if_needed()
        self._write("<dl>\n")

    def end_definition_list(self, tag: DefinitionList) -> None:
        """Close a definition list."""
        self._write("</dl>\n")

    def start_definition_term(self, tag: DefinitionTerm) -> None:
        """Open a definition term."""
        self._write_newline_if_needed()
        self._write("<dt>")

    def end_definition_term(self, tag: DefinitionTerm) -> None:
        """Close a definition term."""
        self._write("</dt>\n")

    def start_definition_description(self, tag: DefinitionDescription) -> None:
        """Open a definition description."""
        self._write_newline_if_needed()
        self._write("<dd>")

    def end_definition_description(self, tag: DefinitionDescription) -> None:
        """Close a definition description."""
        self._write("</dd>\n")

    def start_table(self, tag: Table) -> None:
        """Open a table and remember its column alignments."""
        self._write_newline_if_needed()
        self.state.table_alignments = list(tag.alignments)
        self._write("<table>")

    def end_table(self, tag: Table) -> None:
        """Close a table and reset the table state."""
        self._write("</tbody></table>\n")
        state = self.state
        state.table_state = TableState.HEAD
        state.table_alignments = []
        state.table_cell_index = 0

    def start_table_head(self, tag: TableHead) -> None:
        """Open the header row."""
        self.state.table_state = TableState.HEAD
        self.state.table_cell_index = 0
        self._write("<thead><tr>")

    def end_table_head(self, tag: TableHead) -> None:
        """Close the header row and open the body."""
        self._write("</tr></thead><tbody>\n")
        self.state.table_state = TableState.BODY
        self.state.table_cell_index = 0

    def start_table_row(self, tag: TableRow) -> None:
        """Open a body row."""
        self.state.table_cell_index = 0
        self._write("<tr>")

    def end_table_row(self, tag: TableRow) -> None:
        """Close a body row."""
        self._write("</tr>\n")
        self.state.table_cell_index = 0

    def start_table_cell(self, tag: TableCell) -> None:
        """Open a header or body cell with the column's alignment."""
        state = self.state
        element = "th" if state.table_state is TableState.HEAD else "td"
        alignment = None
        if state.table_cell_index < len(state.table_alignments):
            alignment = state.table_alignments[state.table_cell_index]
        if alignment is None:
            self._write(f"<{element}>")
        else:
            self._write(f'<{element} style="text-align: {alignment}">')

    def end_table_cell(self, tag: TableCell) -> None:
        """Close a cell and advance to the next column."""
        state = self.state
        self._write("</th>" if state.table_state is TableState.HEAD else "</td>")
        state.table_cell_index += 1

    def start_footnote_definition(self, tag: FootnoteDefinition) -> None:
        """Open a footnote definition with its number."""
        self._write_newline_if_needed()
        number = self._footnote_number(tag.name)
        self._write(
            f'<div class="footnote-definition" id="{escape_attribute(tag.name)}">'
            f'<sup class="footnote-definition-label">{number}</sup>'
        )

    def end_footnote_definition(self, tag: FootnoteDefinition) -> None:
        """Close a footnote definition."""
        self._write("</div>\n")

    def start_metadata_block(self, tag: MetadataBlock) -> None:
        """Suppress text until the metadata block ends."""
        self._state.in_non_writing_block = True

    def end_metadata_block(self, tag: MetadataBlock) -> None:
        """Resume writing text."""
        self._state.in_non_writing_block = False

    # ------------------------------------------------------------------
    # Inline tags
    # ------------------------------------------------------------------

    def start_emphasis(self, tag: Emphasis) -> None:
        """Open emphasis."""
        self._write("<em>")

    def end_emphasis(self, tag: Emphasis) -> None:
        """Close emphasis."""
        self._write("</em>")

    def start_strong(self, tag: Strong) -> None:
        """Open strong emphasis."""
        self._write("<strong>")

    def end_strong(self, tag: Strong) -> None:
        """Close strong emphasis."""
        self._write("</strong>")

    def start_strikethrough(self, tag: Strikethrough) -> None:
        """Open a deletion."""
        self._write("<del>")

    def end_strikethrough(self, tag: Strikethrough) -> None:
        """Close a deletion."""
        self._write("</del>")

    def start_subscript(self, tag: Subscript) -> None:
        """Open a subscript."""
        self._write("<sub>")

    def end_subscript(self, tag: Subscript) -> None:
        """Close a subscript."""
        self._write("</sub>")

    def start_superscript(self, tag: Superscript) -> None:
        """Open a superscript."""
        self._write("<sup>")

    def end_superscript(self, tag: Superscript) -> None:
        """Close a superscript."""
        self._write("</sup>")

    def start_link(self, tag: Link) -> None:
        """Open an anchor."""
        parts = [f'<a href="{escape_href(tag.href)}"']
        if tag.title:
            parts.append(f' title="{escape_attribute(tag.title)}"')
        parts.append(">")
        self._write("".join(parts))

    def end_link(self, tag: Link) -> None:
        """Close an anchor."""
        self._write("</a>")

    def start_image(self, tag: Image) -> None:
        """Write an image element, consuming the alt text events up to its end."""
        self._write(f'<img src="{escape_href(tag.dest_url)}" alt="')
        self._write(self._flatten())
        if tag.title:
            self._write(f'" title="{escape_attribute(tag.title)}')
        self._write('" />')

    def end_image(self, tag: Image) -> None:
        """Never reached: the alt text flattening consumes the image's end."""
        pass
