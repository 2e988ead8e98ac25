#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/visitors.py
"""Visitor base class for event stream consumers.

Every event kind and every tag kind in :mod:`mdpeek.events` maps to one
abstract method here. Emitters subclass :class:`EventVisitor` and implement
all of them; adding a tag kind to the event model without teaching every
emitter about it makes those emitters abstract, and instantiating them fails
with ``TypeError``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdpeek.events import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    DisplayMath,
    Emphasis,
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


class EventVisitor(ABC):
    """Abstract base class for event stream visitors.

    Leaf events call ``visit_<kind>(event)``; ``Start(tag)`` and ``End(tag)``
    call ``start_<kind>(tag)`` and ``end_<kind>(tag)``. Return values are
    ignored by the emitters.

    """

    @abstractmethod
    def visit_text(self, event: Text) -> Any:
        """Handle a text run."""
        pass

    @abstractmethod
    def visit_code(self, event: Code) -> Any:
        """Handle an inline code span."""
        pass

    @abstractmethod
    def visit_inline_math(self, event: InlineMath) -> Any:
        """Handle inline math."""
        pass

    @abstractmethod
    def visit_display_math(self, event: DisplayMath) -> Any:
        """Handle display math."""
        pass

    @abstractmethod
    def visit_html(self, event: Html) -> Any:
        """Handle raw block HTML."""
        pass

    @abstractmethod
    def visit_inline_html(self, event: InlineHtml) -> Any:
        """Handle raw inline HTML."""
        pass

    @abstractmethod
    def visit_soft_break(self, event: SoftBreak) -> Any:
        """Handle a soft line break."""
        pass

    @abstractmethod
    def visit_hard_break(self, event: HardBreak) -> Any:
        """Handle a hard line break."""
        pass

    @abstractmethod
    def visit_rule(self, event: Rule) -> Any:
        """Handle a thematic break."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, event: FootnoteReference) -> Any:
        """Handle a footnote reference."""
        pass

    @abstractmethod
    def visit_task_list_marker(self, event: TaskListMarker) -> Any:
        """Handle a task list checkbox."""
        pass

    @abstractmethod
    def start_paragraph(self, tag: Paragraph) -> Any:
        """Handle the opening of a paragraph."""
        pass

    @abstractmethod
    def end_paragraph(self, tag: Paragraph) -> Any:
        """Handle the closing of a paragraph."""
        pass

    @abstractmethod
    def start_heading(self, tag: Heading) -> Any:
        """Handle the opening of a heading."""
        pass

    @abstractmethod
    def end_heading(self, tag: Heading) -> Any:
        """Handle the closing of a heading."""
        pass

    @abstractmethod
    def start_block_quote(self, tag: BlockQuote) -> Any:
        """Handle the opening of a block quote."""
        pass

    @abstractmethod
    def end_block_quote(self, tag: BlockQuote) -> Any:
        """Handle the closing of a block quote."""
        pass

    @abstractmethod
    def start_code_block(self, tag: CodeBlock) -> Any:
        """Handle the opening of a code block."""
        pass

    @abstractmethod
    def end_code_block(self, tag: CodeBlock) -> Any:
        """Handle the closing of a code block."""
        pass

    @abstractmethod
    def start_html_block(self, tag: HtmlBlock) -> Any:
        """Handle the opening of a raw HTML block."""
        pass

    @abstractmethod
    def end_html_block(self, tag: HtmlBlock) -> Any:
        """Handle the closing of a raw HTML block."""
        pass

    @abstractmethod
    def start_list(self, tag: List) -> Any:
        """Handle the opening of a list."""
        pass

    @abstractmethod
    def end_list(self, tag: List) -> Any:
        """Handle the closing of a list."""
        pass

    @abstractmethod
    def start_item(self, tag: Item) -> Any:
        """Handle the opening of a list item."""
        pass

    @abstractmethod
    def end_item(self, tag: Item) -> Any:
        """Handle the closing of a list item."""
        pass

    @abstractmethod
    def start_definition_list(self, tag: DefinitionList) -> Any:
        """Handle the opening of a definition list."""
        pass

    @abstractmethod
    def end_definition_list(self, tag: DefinitionList) -> Any:
        """Handle the closing of a definition list."""
        pass

    @abstractmethod
    def start_definition_term(self, tag: DefinitionTerm) -> Any:
        """Handle the opening of a definition term."""
        pass

    @abstractmethod
    def end_definition_term(self, tag: DefinitionTerm) -> Any:
        """Handle the closing of a definition term."""
        pass

    @abstractmethod
    def start_definition_description(self, tag: DefinitionDescription) -> Any:
        """Handle the opening of a definition description."""
        pass

    @abstractmethod
    def end_definition_description(self, tag: DefinitionDescription) -> Any:
        """Handle the closing of a definition description."""
        pass

    @abstractmethod
    def start_table(self, tag: Table) -> Any:
        """Handle the opening of a table."""
        pass

    @abstractmethod
    def end_table(self, tag: Table) -> Any:
        """Handle the closing of a table."""
        pass

    @abstractmethod
    def start_table_head(self, tag: TableHead) -> Any:
        """Handle the opening of a table header row."""
        pass

    @abstractmethod
    def end_table_head(self, tag: TableHead) -> Any:
        """Handle the closing of a table header row."""
        pass

    @abstractmethod
    def start_table_row(self, tag: TableRow) -> Any:
        """Handle the opening of a table body row."""
        pass

    @abstractmethod
    def end_table_row(self, tag: TableRow) -> Any:
        """Handle the closing of a table body row."""
        pass

    @abstractmethod
    def start_table_cell(self, tag: TableCell) -> Any:
        """Handle the opening of a table cell."""
        pass

    @abstractmethod
    def end_table_cell(self, tag: TableCell) -> Any:
        """Handle the closing of a table cell."""
        pass

    @abstractmethod
    def start_footnote_definition(self, tag: FootnoteDefinition) -> Any:
        """Handle the opening of a footnote definition."""
        pass

    @abstractmethod
    def end_footnote_definition(self, tag: FootnoteDefinition) -> Any:
        """Handle the closing of a footnote definition."""
        pass

    @abstractmethod
    def start_metadata_block(self, tag: MetadataBlock) -> Any:
        """Handle the opening of a metadata block."""
        pass

    @abstractmethod
    def end_metadata_block(self, tag: MetadataBlock) -> Any:
        """Handle the closing of a metadata block."""
        pass

    @abstractmethod
    def start_emphasis(self, tag: Emphasis) -> Any:
        """Handle the opening of emphasis."""
        pass

    @abstractmethod
    def end_emphasis(self, tag: Emphasis) -> Any:
        """Handle the closing of emphasis."""
        pass

    @abstractmethod
    def start_strong(self, tag: Strong) -> Any:
        """Handle the opening of strong emphasis."""
        pass

    @abstractmethod
    def end_strong(self, tag: Strong) -> Any:
        """Handle the closing of strong emphasis."""
        pass

    @abstractmethod
    def start_strikethrough(self, tag: Strikethrough) -> Any:
        """Handle the opening of strikethrough."""
        pass

    @abstractmethod
    def end_strikethrough(self, tag: Strikethrough) -> Any:
        """Handle the closing of strikethrough."""
        pass

    @abstractmethod
    def start_subscript(self, tag: Subscript) -> Any:
        """Handle the opening of subscript."""
        pass

    @abstractmethod
    def end_subscript(self, tag: Subscript) -> Any:
        """Handle the closing of subscript."""
        pass

    @abstractmethod
    def start_superscript(self, tag: Superscript) -> Any:
        """Handle the opening of superscript."""
        pass

    @abstractmethod
    def end_superscript(self, tag: Superscript) -> Any:
        """Handle the closing of superscript."""
        pass

    @abstractmethod
    def start_link(self, tag: Link) -> Any:
        """Handle the opening of a link."""
        pass

    @abstractmethod
    def end_link(self, tag: Link) -> Any:
        """Handle the closing of a link."""
        pass

    @abstractmethod
    def start_image(self, tag: Image) -> Any:
        """Handle the opening of an image."""
        pass

    @abstractmethod
    def end_image(self, tag: Image) -> Any:
        """Handle the closing of an image."""
        pass
