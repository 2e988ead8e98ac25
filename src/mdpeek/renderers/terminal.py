#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/renderers/terminal.py
"""ANSI terminal rendering from the event stream.

This module provides the TerminalEmitter class which converts a well-nested
event stream into plain text decorated with ANSI escape sequences, styled by
a :class:`~mdpeek.themes.Theme`. Styles are encoded with
:meth:`rich.style.Style.render`, so null styles (the ``mono`` theme) produce
no escape sequences at all.

Layout
------
All output passes through one line-aware writer. It counts trailing newlines
to keep exactly one blank line between blocks, and prefixes every content
line inside block quotes with one ``│ `` bar per quote level. Blank lines
inside a quote are held back until it is known whether more quoted content
follows: if it does they become bar lines, otherwise plain newlines.

List markers are written lazily. An item's marker is only printed when the
item's first inline content arrives, so empty items print nothing and a task
checkbox can replace the bullet.

Tables are buffered in full and laid out when the table ends, since column
widths depend on every row.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from rich.color import ColorSystem
from rich.style import Style

from mdpeek.constants import (
    BULLET_MARKER,
    CHECKED_MARKER,
    CODE_FENCE,
    QUOTE_BAR,
    RULE_CHAR,
    TABLE_COLUMN_SEPARATOR,
    TABLE_RULE_CHAR,
    TABLE_RULE_JUNCTION,
    UNCHECKED_MARKER,
)
from mdpeek.events import (
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
from mdpeek.options.terminal import TerminalRendererOptions
from mdpeek.renderers.base import BaseEmitter, RenderState
from mdpeek.themes import Theme, get_theme

logger = logging.getLogger(__name__)

_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
}


@dataclass
class OrderedList:
    """Open ordered list; ``next_index`` is the number of the next item."""

    next_index: int


@dataclass
class UnorderedList:
    """Open unordered list."""


ListContext = Union[OrderedList, UnorderedList]


@dataclass
class ListMarker:
    """Marker of a list item that has not been written yet."""

    indent: str
    label: str


@dataclass
class TerminalRenderState(RenderState):
    """Render state of the terminal emitter.

    Parameters
    ----------
    trailing_newlines : int, default = 2
        Newlines at the end of the output; starts as if a blank line preceded
        the document so no leading separator is written
    pending_quote_blank_lines : int, default = 0
        Blank lines inside a block quote not yet written
    quote_depth : int, default = 0
        Number of open block quotes
    list_stack : list of OrderedList or UnorderedList
        Open lists, innermost last
    pending_list_marker : ListMarker or None
        Marker of the current item, until its first content
    link_stack : list of str
        Destinations of open links
    heading_level : int, default = 0
        Level of the open heading, 0 outside headings
    definition_term_depth, definition_description_depth : int
        Number of open definition terms and descriptions
    in_code_block : bool, default = False
        Inside a code block
    suppress_block_break : bool, default = False
        The next paragraph continues the current line (after a footnote or
        definition label)
    in_table, in_table_head, in_table_cell : bool
        Position inside a table being buffered
    table_header : list of str
        Cells of the header row
    table_rows : list of list of str
        Cells of the body rows
    current_row : list of str
        Cells of the row being buffered
    current_cell : list of str
        Text pieces of the cell being buffered

    """

    trailing_newlines: int = 2
    pending_quote_blank_lines: int = 0
    quote_depth: int = 0
    list_stack: list[ListContext] = field(default_factory=list)
    pending_list_marker: Optional[ListMarker] = None
    link_stack: list[str] = field(default_factory=list)
    heading_level: int = 0
    definition_term_depth: int = 0
    definition_description_depth: int = 0
    in_code_block: bool = False
    suppress_block_break: bool = False
    in_table: bool = False
    in_table_head: bool = False
    in_table_cell: bool = False
    table_header: list[str] = field(default_factory=list)
    table_rows: list[list[str]] = field(default_factory=list)
    current_row: list[str] = field(default_factory=list)
    current_cell: list[str] = field(default_factory=list)

    def is_baseline(self) -> bool:
        """Return True when every stack is empty and every flag is reset."""
        return (
            super().is_baseline()
            and self.pending_quote_blank_lines == 0
            and self.quote_depth == 0
            and not self.list_stack
            and self.pending_list_marker is None
            and not self.link_stack
            and self.heading_level == 0
            and self.definition_term_depth == 0
            and self.definition_description_depth == 0
            and not self.in_code_block
            and not self.suppress_block_break
            and not self.in_table
            and not self.in_table_head
            and not self.in_table_cell
            and not self.table_header
            and not self.table_rows
            and not self.current_row
            and not self.current_cell
        )


class TerminalEmitter(BaseEmitter):
    """Render an event stream to ANSI-styled terminal text.

    Parameters
    ----------
    options : TerminalRendererOptions or None, default = None
        Terminal rendering options
    theme : Theme or None, default = None
        Theme to style with; overrides ``options.theme`` when given

    Raises
    ------
    InvalidThemeError
        If no theme is given and ``options.theme`` names no preset

    Examples
    --------
        >>> from mdpeek import get_theme, markdown_to_events
        >>> from mdpeek.renderers.terminal import TerminalEmitter
        >>> emitter = TerminalEmitter(theme=get_theme("mono"))
        >>> emitter.render(markdown_to_events("# Title\\n\\nHello **world**."))
        ' Title \\n\\nHello **world**.\\n\\n'

    """

    def __init__(self, options: TerminalRendererOptions | None = None, theme: Theme | None = None):
        """Initialize the terminal emitter with options and a theme."""
        BaseEmitter._validate_options_type(options, TerminalRendererOptions, "terminal")
        options = options or TerminalRendererOptions()
        BaseEmitter.__init__(self, options)
        self.options: TerminalRendererOptions = options
        self.theme: Theme = theme if theme is not None else get_theme(options.theme)
        self._color_system = _COLOR_SYSTEMS[options.color_system]
        self._output: list[str] = []

    @property
    def state(self) -> TerminalRenderState:
        """State of the most recent (or current) render call."""
        return self._state  # type: ignore[return-value]

    def _new_state(self) -> TerminalRenderState:
        self._output = []
        return TerminalRenderState()

    def _finish(self) -> str:
        return "".join(self._output)

    def _flatten_leaf(self, event: Event) -> str:
        if isinstance(event, (Text, Code)):
            return event.text
        if isinstance(event, InlineMath):
            return f"${event.text}$"
        if isinstance(event, DisplayMath):
            return f"$${event.text}$$"
        if isinstance(event, FootnoteReference):
            return f"[^{self._footnote_number(event.name)}]"
        if isinstance(event, TaskListMarker):
            return "[x]" if event.checked else "[ ]"
        return ""

    # ------------------------------------------------------------------
    # Writer
    # ------------------------------------------------------------------

    def _styled(self, text: str, style: Style | None) -> str:
        if not style:
            return text
        return style.render(text, color_system=self._color_system)

    def _quote_prefix(self) -> str:
        return (self._styled(QUOTE_BAR, self.theme.quote_bar) + " ") * self.state.quote_depth

    def _quote_blank_line(self) -> str:
        return " ".join([self._styled(QUOTE_BAR, self.theme.quote_bar)] * self.state.quote_depth)

    def _begin_line(self) -> None:
        """Write quote bars (and held-back quoted blank lines) before line content."""
        state = self.state
        if state.trailing_newlines == 0:
            return
        if state.quote_depth > 0:
            for _ in range(state.pending_quote_blank_lines):
                self._output.append(self._quote_blank_line() + "\n")
            state.pending_quote_blank_lines = 0
            self._output.append(self._quote_prefix())
        state.trailing_newlines = 0
        state.end_newline = False

    def _newline(self) -> None:
        state = self.state
        if state.quote_depth > 0 and state.trailing_newlines > 0:
            state.pending_quote_blank_lines += 1
            return
        self._output.append("\n")
        state.trailing_newlines += 1
        state.end_newline = True

    def _write(self, text: str, style: Style | None = None) -> None:
        """Write ``text`` line by line, styling each non-empty line separately."""
        if not text:
            return
        for index, line in enumerate(text.split("\n")):
            if index > 0:
                self._newline()
            if line:
                self._begin_line()
                self._output.append(self._styled(line, style))

    def _line_breaks(self) -> int:
        return self.state.trailing_newlines + self.state.pending_quote_blank_lines

    def _ensure_newline(self) -> None:
        if self.state.trailing_newlines == 0:
            self._newline()

    def _ensure_blank_line(self) -> None:
        self._ensure_newline()
        if self._line_breaks() < 2:
            self._newline()

    def _in_compact_block(self) -> bool:
        state = self.state
        return bool(state.list_stack) or state.definition_description_depth > 0

    def _block_break(self) -> None:
        """Separate blocks: a newline inside lists and descriptions, a blank line elsewhere."""
        if self._in_compact_block():
            self._ensure_newline()
        else:
            self._ensure_blank_line()

    def _flush_list_marker(self) -> bool:
        """Write the pending list marker; return True if one was written."""
        marker = self.state.pending_list_marker
        if marker is None:
            return False
        self.state.pending_list_marker = None
        self._write(marker.indent)
        self._write(marker.label, self.theme.list_marker)
        return True

    def _continue_line(self) -> bool:
        """Let the next block start on the current line after a list marker or label.

        Returns True if a pending list marker was written or a pending
        footnote or definition label is still open on the line.
        """
        if self._flush_list_marker():
            return True
        state = self.state
        if state.suppress_block_break:
            state.suppress_block_break = False
            return True
        return False

    def _text_style(self) -> Style | None:
        state = self.state
        if state.in_code_block:
            return self.theme.code
        if state.heading_level == 1:
            return self.theme.banner
        if state.heading_level > 1 or state.definition_term_depth > 0:
            return self.theme.heading_text
        if state.link_stack:
            return self.theme.link_text
        if state.quote_depth > 0:
            return self.theme.block_quote
        return None

    def _inline(self, text: str, style: Style | None = None) -> None:
        """Write inline content, buffering it unstyled inside table cells."""
        state = self.state
        if state.in_non_writing_block or not text:
            return
        if state.in_table_cell:
            state.current_cell.append(text)
            return
        self._flush_list_marker()
        self._write(text, style)

    # ------------------------------------------------------------------
    # Leaf events
    # ------------------------------------------------------------------

    def visit_text(self, event: Text) -> None:
        """Write text in the style of its context."""
        self._inline(event.text, self._text_style())

    def visit_code(self, event: Code) -> None:
        """Write an inline code span between backticks."""
        self._inline("`")
        self._inline(event.text, self.theme.code)
        self._inline("`")

    def visit_inline_math(self, event: InlineMath) -> None:
        """Write inline math between single dollars."""
        self._inline("$")
        self._inline(event.text, self.theme.code)
        self._inline("$")

    def visit_display_math(self, event: DisplayMath) -> None:
        """Write display math between double dollars."""
        self._inline("$$")
        self._inline(event.text, self.theme.code)
        self._inline("$$")

    def visit_html(self, event: Html) -> None:
        """Raw HTML is not shown in the terminal."""
        pass

    def visit_inline_html(self, event: InlineHtml) -> None:
        """Raw HTML is not shown in the terminal."""
        pass

    def visit_soft_break(self, event: SoftBreak) -> None:
        """Join the lines with a space."""
        self._inline(" ")

    def visit_hard_break(self, event: HardBreak) -> None:
        """Start a new line (a space inside table cells)."""
        if self.state.in_table_cell:
            self._inline(" ")
        else:
            self._inline("\n")

    def visit_rule(self, event: Rule) -> None:
        """Write a horizontal line between blank lines."""
        self._flush_list_marker()
        self._ensure_blank_line()
        self._write(RULE_CHAR * self.options.rule_width, self.theme.rule)
        self._ensure_blank_line()

    def visit_footnote_reference(self, event: FootnoteReference) -> None:
        """Write the footnote number as ``[^n]``."""
        number = self._footnote_number(event.name)
        self._inline(f"[^{number}]", self.theme.footnote)

    def visit_task_list_marker(self, event: TaskListMarker) -> None:
        """Replace the pending bullet with a checkbox, or append it to an ordinal."""
        glyph = CHECKED_MARKER if event.checked else UNCHECKED_MARKER
        marker = self.state.pending_list_marker
        if marker is None:
            self._inline(glyph, self.theme.list_marker)
            return
        if marker.label == BULLET_MARKER:
            marker.label = glyph
        else:
            marker.label += glyph
        self._flush_list_marker()

    # ------------------------------------------------------------------
    # Block tags
    # ------------------------------------------------------------------

    def start_paragraph(self, tag: Paragraph) -> None:
        """Separate the paragraph from the previous block."""
        state = self.state
        if state.suppress_block_break:
            state.suppress_block_break = False
            return
        if state.pending_list_marker is None and not state.in_table_cell:
            self._block_break()

    def end_paragraph(self, tag: Paragraph) -> None:
        """End the paragraph's line."""
        if not self.state.in_table_cell:
            self._block_break()

    def start_heading(self, tag: Heading) -> None:
        """Write the heading prefix: a banner edge for level 1, hashes otherwise."""
        if not self._continue_line():
            self._block_break()
        self.state.heading_level = tag.level
        if tag.level == 1:
            self._write(" ", self.theme.banner)
        else:
            self._write("#" * tag.level + " ", self.theme.heading_text)

    def end_heading(self, tag: Heading) -> None:
        """Close the banner and end the heading's line."""
        if tag.level == 1:
            self._write(" ", self.theme.banner)
        self.state.heading_level = 0
        self._block_break()

    def start_block_quote(self, tag: BlockQuote) -> None:
        """Open a quote level and write the alert label if there is one.

        A quote that opens a list item starts on the marker's line.
        """
        state = self.state
        continued = self._continue_line()
        if not continued:
            self._ensure_newline()
        state.quote_depth += 1
        if continued:
            # Outer bars are already on this line
            self._output.append(self._styled(QUOTE_BAR, self.theme.quote_bar) + " ")
            state.suppress_block_break = tag.kind is None
        if tag.kind is not None:
            self._write(tag.kind.label, self.theme.block_quote)
            self._newline()

    def end_block_quote(self, tag: BlockQuote) -> None:
        """Close a quote level; held-back blank lines become plain newlines."""
        state = self.state
        state.quote_depth -= 1
        state.suppress_block_break = False
        if state.quote_depth == 0:
            pending = state.pending_quote_blank_lines
            state.pending_quote_blank_lines = 0
            for _ in range(min(pending, 2 - min(state.trailing_newlines, 2))):
                self._newline()
        self._block_break()

    def start_code_block(self, tag: CodeBlock) -> None:
        """Write the opening fence with the language."""
        if not self._continue_line():
            self._block_break()
        self._write(CODE_FENCE + tag.language)
        self._newline()
        self.state.in_code_block = True

    def end_code_block(self, tag: CodeBlock) -> None:
        """Write the closing fence."""
        self.state.in_code_block = False
        self._ensure_newline()
        self._write(CODE_FENCE)
        self._block_break()

    def start_html_block(self, tag: HtmlBlock) -> None:
        """Raw HTML is not shown in the terminal."""
        pass

    def end_html_block(self, tag: HtmlBlock) -> None:
        """Raw HTML is not shown in the terminal."""
        pass

    def start_list(self, tag: List) -> None:
        """Push a list context."""
        state = self.state
        if state.list_stack:
            self._flush_list_marker()
            self._ensure_newline()
        else:
            self._block_break()
        state.list_stack.append(OrderedList(tag.start) if tag.start is not None else UnorderedList())

    def end_list(self, tag: List) -> None:
        """Pop the list context; a top-level list ends with a blank line."""
        state = self.state
        state.list_stack.pop()
        self._block_break()

    def start_item(self, tag: Item) -> None:
        """Prepare the item's marker; it is written with the first content."""
        state = self.state
        self._ensure_newline()
        context = state.list_stack[-1] if state.list_stack else UnorderedList()
        indent = " " * (self.options.list_indent * max(len(state.list_stack) - 1, 0))
        if isinstance(context, OrderedList):
            label = f"{context.next_index}. "
        else:
            label = BULLET_MARKER
        state.pending_list_marker = ListMarker(indent=indent, label=label)

    def end_item(self, tag: Item) -> None:
        """Drop an unused marker and advance the ordered counter."""
        state = self.state
        state.pending_list_marker = None
        if state.list_stack and isinstance(state.list_stack[-1], OrderedList):
            state.list_stack[-1].next_index += 1
        self._ensure_newline()

    def start_definition_list(self, tag: DefinitionList) -> None:
        """Separate the definition list from the previous block."""
        self._flush_list_marker()
        self._block_break()

    def end_definition_list(self, tag: DefinitionList) -> None:
        """End the definition list with a block break."""
        self._block_break()

    def start_definition_term(self, tag: DefinitionTerm) -> None:
        """Start the term on its own line."""
        self._ensure_newline()
        self.state.definition_term_depth += 1

    def end_definition_term(self, tag: DefinitionTerm) -> None:
        """End the term's line."""
        self.state.definition_term_depth -= 1
        self._ensure_newline()

    def start_definition_description(self, tag: DefinitionDescription) -> None:
        """Write the ``: `` prefix; the first paragraph continues on its line."""
        state = self.state
        self._ensure_newline()
        self._write(": ")
        state.definition_description_depth += 1
        state.suppress_block_break = True

    def end_definition_description(self, tag: DefinitionDescription) -> None:
        """End the description's line."""
        state = self.state
        state.definition_description_depth -= 1
        state.suppress_block_break = False
        self._ensure_newline()

    def start_table(self, tag: Table) -> None:
        """Start buffering a table."""
        self._flush_list_marker()
        self._block_break()
        state = self.state
        state.in_table = True
        state.table_header = []
        state.table_rows = []
        state.current_row = []

    def end_table(self, tag: Table) -> None:
        """Lay out the buffered table and reset the table state."""
        state = self.state
        self._write_table(state.table_header, state.table_rows)
        state.in_table = False
        state.table_header = []
        state.table_rows = []
        state.current_row = []
        self._block_break()

    def start_table_head(self, tag: TableHead) -> None:
        """Start buffering the header row."""
        self.state.in_table_head = True
        self.state.current_row = []

    def end_table_head(self, tag: TableHead) -> None:
        """Keep the header row apart from the body rows."""
        state = self.state
        state.table_header = state.current_row
        state.current_row = []
        state.in_table_head = False

    def start_table_row(self, tag: TableRow) -> None:
        """Start buffering a body row."""
        self.state.current_row = []

    def end_table_row(self, tag: TableRow) -> None:
        """Append the buffered row to the body."""
        state = self.state
        state.table_rows.append(state.current_row)
        state.current_row = []

    def start_table_cell(self, tag: TableCell) -> None:
        """Start buffering a cell."""
        self.state.in_table_cell = True
        self.state.current_cell = []

    def end_table_cell(self, tag: TableCell) -> None:
        """Append the trimmed cell text to the current row."""
        state = self.state
        state.current_row.append("".join(state.current_cell).strip())
        state.current_cell = []
        state.in_table_cell = False

    def _write_table(self, header: list[str], body: list[list[str]]) -> None:
        rows = ([header] if header else []) + body
        columns = max((len(row) for row in rows), default=0)
        if columns == 0:
            return
        rows = [row + [""] * (columns - len(row)) for row in rows]
        widths = [max(len(row[index]) for row in rows) for index in range(columns)]
        indent = " " * self.options.table_indent

        def write_row(cells: list[str], style: Style | None) -> None:
            self._write(indent)
            for index, (cell, width) in enumerate(zip(cells, widths)):
                if index > 0:
                    self._write(TABLE_COLUMN_SEPARATOR)
                self._write(cell.ljust(width), style)
            self._newline()

        if header:
            write_row(rows[0], self.theme.table_header)
            self._write(indent + self._table_rule(widths))
            self._newline()
            rows = rows[1:]
        for row in rows:
            write_row(row, None)

    @staticmethod
    def _table_rule(widths: list[int]) -> str:
        """Build the header underline so each junction sits under a column separator."""
        if len(widths) == 1:
            return TABLE_RULE_CHAR * widths[0]
        segments = [TABLE_RULE_CHAR * (widths[0] + 1)]
        segments.extend(TABLE_RULE_CHAR * (width + 2) for width in widths[1:-1])
        segments.append(TABLE_RULE_CHAR * (widths[-1] + 1))
        return TABLE_RULE_JUNCTION.join(segments)

    def start_footnote_definition(self, tag: FootnoteDefinition) -> None:
        """Write the ``[^n]: `` label; the first paragraph continues on its line."""
        self._flush_list_marker()
        self._block_break()
        number = self._footnote_number(tag.name)
        self._write(f"[^{number}]: ", self.theme.footnote)
        self.state.suppress_block_break = True

    def end_footnote_definition(self, tag: FootnoteDefinition) -> None:
        """End the definition with a block break."""
        self.state.suppress_block_break = False
        self._block_break()

    def start_metadata_block(self, tag: MetadataBlock) -> None:
        """Suppress output until the metadata block ends."""
        self.state.in_non_writing_block = True

    def end_metadata_block(self, tag: MetadataBlock) -> None:
        """Resume output."""
        self.state.in_non_writing_block = False

    # ------------------------------------------------------------------
    # Inline tags
    # ------------------------------------------------------------------

    def start_emphasis(self, tag: Emphasis) -> None:
        """Write the opening ``*``."""
        self._inline("*", self.theme.code)

    def end_emphasis(self, tag: Emphasis) -> None:
        """Write the closing ``*``."""
        self._inline("*", self.theme.code)

    def start_strong(self, tag: Strong) -> None:
        """Write the opening ``**``."""
        self._inline("**", self.theme.code)

    def end_strong(self, tag: Strong) -> None:
        """Write the closing ``**``."""
        self._inline("**", self.theme.code)

    def start_strikethrough(self, tag: Strikethrough) -> None:
        """Write the opening ``~~``."""
        self._inline("~~", self.theme.code)

    def end_strikethrough(self, tag: Strikethrough) -> None:
        """Write the closing ``~~``."""
        self._inline("~~", self.theme.code)

    def start_subscript(self, tag: Subscript) -> None:
        """Write the opening ``~``."""
        self._inline("~")

    def end_subscript(self, tag: Subscript) -> None:
        """Write the closing ``~``."""
        self._inline("~")

    def start_superscript(self, tag: Superscript) -> None:
        """Write the opening ``^``."""
        self._inline("^")

    def end_superscript(self, tag: Superscript) -> None:
        """Write the closing ``^``."""
        self._inline("^")

    def start_link(self, tag: Link) -> None:
        """Remember the destination until the link text is written."""
        self.state.link_stack.append(tag.href)

    def end_link(self, tag: Link) -> None:
        """Write the destination after the link text."""
        destination = self.state.link_stack.pop()
        if destination:
            self._inline(" ")
            self._inline(f"({destination})", self.theme.link_destination)

    def start_image(self, tag: Image) -> None:
        """Write ``[image: alt]``, consuming the alt text events up to its end."""
        alt = self._flatten()
        self._inline(f"[image: {alt}]", self.theme.code)
        if tag.dest_url:
            self._inline(" ")
            self._inline(f"({tag.dest_url})", self.theme.link)

    def end_image(self, tag: Image) -> None:
        """Never reached: the alt text flattening consumes the image's end."""
        pass
