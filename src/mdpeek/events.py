#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/events.py
"""Event classes for the flat document stream consumed by the emitters.

A parsed Markdown document reaches the emitters as an ordered, well-nested
sequence of events. Structural elements are bracketed by ``Start(tag)`` and
``End(tag)`` pairs; leaf content (text runs, inline code, breaks, markers)
appears as standalone events between them.

Event Kinds
-----------
Bracketing events:
    - Start, End

Leaf events:
    - Text, Code, InlineMath, DisplayMath, Html, InlineHtml
    - SoftBreak, HardBreak, Rule
    - FootnoteReference, TaskListMarker

Tags
----
Block tags:
    - Paragraph, Heading, BlockQuote, CodeBlock, HtmlBlock
    - List, Item, DefinitionList, DefinitionTerm, DefinitionDescription
    - Table, TableHead, TableRow, TableCell
    - FootnoteDefinition, MetadataBlock

Inline tags:
    - Emphasis, Strong, Strikethrough, Subscript, Superscript, Link, Image

Every tag and leaf event dispatches to a named method of an
:class:`~mdpeek.visitors.EventVisitor`, so the set of kinds is closed: a
visitor that lacks a handler for some kind cannot be instantiated.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Literal, Optional, Union

Alignment = Literal["left", "center", "right"]


class BlockQuoteKind(str, Enum):
    """GitHub alert kinds carried by a block quote."""

    NOTE = "note"
    TIP = "tip"
    IMPORTANT = "important"
    WARNING = "warning"
    CAUTION = "caution"

    @property
    def label(self) -> str:
        """Return the source marker for this kind, e.g. ``[!NOTE]``."""
        return f"[!{self.value.upper()}]"


class LinkType(str, Enum):
    """How a link or image was written in the source."""

    INLINE = "inline"
    REFERENCE = "reference"
    AUTOLINK = "autolink"
    EMAIL = "email"


# ============================================================================
# Tags
# ============================================================================


class Tag:
    """Base class for the payload of a ``Start``/``End`` pair.

    Subclasses set ``handler_name``; the visitor methods called are
    ``start_<handler_name>`` and ``end_<handler_name>``.
    """

    handler_name: ClassVar[str] = ""

    def accept_start(self, visitor: Any) -> Any:
        """Dispatch the opening of this tag to ``visitor``."""
        return getattr(visitor, f"start_{self.handler_name}")(self)

    def accept_end(self, visitor: Any) -> Any:
        """Dispatch the closing of this tag to ``visitor``."""
        return getattr(visitor, f"end_{self.handler_name}")(self)


@dataclass(frozen=True)
class Paragraph(Tag):
    """Paragraph of inline content."""

    handler_name: ClassVar[str] = "paragraph"


@dataclass(frozen=True)
class Heading(Tag):
    """Heading (h1-h6) with optional id, classes and extra attributes.

    Parameters
    ----------
    level : int
        Heading level (1-6)
    id : str or None, default = None
        Explicit anchor id
    classes : tuple of str, default = ()
        CSS class names
    attrs : tuple of (str, str or None), default = ()
        Extra attributes; a value of None means the attribute has no value

    """

    handler_name: ClassVar[str] = "heading"

    level: int
    id: Optional[str] = None
    classes: tuple[str, ...] = ()
    attrs: tuple[tuple[str, Optional[str]], ...] = ()

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass(frozen=True)
class BlockQuote(Tag):
    """Block quote, optionally a GitHub alert of the given kind."""

    handler_name: ClassVar[str] = "block_quote"

    kind: Optional[BlockQuoteKind] = None


@dataclass(frozen=True)
class CodeBlock(Tag):
    """Fenced or indented code block.

    Parameters
    ----------
    fenced : bool, default = True
        False for indented code blocks
    info : str, default = ""
        Info string of a fenced block (language first)

    """

    handler_name: ClassVar[str] = "code_block"

    fenced: bool = True
    info: str = ""

    @property
    def language(self) -> str:
        """Return the first whitespace-delimited token of the info string."""
        if not self.fenced:
            return ""
        parts = self.info.split(maxsplit=1)
        return parts[0] if parts else ""


@dataclass(frozen=True)
class HtmlBlock(Tag):
    """Container for raw HTML block events."""

    handler_name: ClassVar[str] = "html_block"


@dataclass(frozen=True)
class List(Tag):
    """Ordered (``start`` set) or unordered (``start`` None) list."""

    handler_name: ClassVar[str] = "list"

    start: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the ordered list start number."""
        if self.start is not None and self.start < 0:
            raise ValueError(f"List start must be non-negative, got {self.start}")

    @property
    def ordered(self) -> bool:
        """Return True for ordered lists."""
        return self.start is not None


@dataclass(frozen=True)
class Item(Tag):
    """List item."""

    handler_name: ClassVar[str] = "item"


@dataclass(frozen=True)
class DefinitionList(Tag):
    """Definition list."""

    handler_name: ClassVar[str] = "definition_list"


@dataclass(frozen=True)
class DefinitionTerm(Tag):
    """Term being defined inside a definition list."""

    handler_name: ClassVar[str] = "definition_term"


@dataclass(frozen=True)
class DefinitionDescription(Tag):
    """Description of the preceding term."""

    handler_name: ClassVar[str] = "definition_description"


@dataclass(frozen=True)
class Table(Tag):
    """Table with per-column alignments (None means unset)."""

    handler_name: ClassVar[str] = "table"

    alignments: tuple[Optional[Alignment], ...] = ()


@dataclass(frozen=True)
class TableHead(Tag):
    """Header row of a table; contains cells directly."""

    handler_name: ClassVar[str] = "table_head"


@dataclass(frozen=True)
class TableRow(Tag):
    """Body row of a table."""

    handler_name: ClassVar[str] = "table_row"


@dataclass(frozen=True)
class TableCell(Tag):
    """Table cell; header or body depends on the enclosing row."""

    handler_name: ClassVar[str] = "table_cell"


@dataclass(frozen=True)
class FootnoteDefinition(Tag):
    """Footnote definition block for the footnote ``name``."""

    handler_name: ClassVar[str] = "footnote_definition"

    name: str


@dataclass(frozen=True)
class MetadataBlock(Tag):
    """Front matter block; its text is never written."""

    handler_name: ClassVar[str] = "metadata_block"

    kind: Literal["yaml", "toml"] = "yaml"


@dataclass(frozen=True)
class Emphasis(Tag):
    """Emphasised inline span."""

    handler_name: ClassVar[str] = "emphasis"


@dataclass(frozen=True)
class Strong(Tag):
    """Strong inline span."""

    handler_name: ClassVar[str] = "strong"


@dataclass(frozen=True)
class Strikethrough(Tag):
    """Struck-through inline span."""

    handler_name: ClassVar[str] = "strikethrough"


@dataclass(frozen=True)
class Subscript(Tag):
    """Subscript inline span."""

    handler_name: ClassVar[str] = "subscript"


@dataclass(frozen=True)
class Superscript(Tag):
    """Superscript inline span."""

    handler_name: ClassVar[str] = "superscript"


@dataclass(frozen=True)
class Link(Tag):
    """Hyperlink around inline content.

    Parameters
    ----------
    dest_url : str
        Link destination (without ``mailto:`` for e-mail links)
    title : str, default = ""
        Optional link title
    link_type : LinkType, default = LinkType.INLINE
        How the link was written
    id : str, default = ""
        Reference label for reference-style links

    """

    handler_name: ClassVar[str] = "link"

    dest_url: str
    title: str = ""
    link_type: LinkType = LinkType.INLINE
    id: str = ""

    @property
    def href(self) -> str:
        """Return the destination as it should be followed."""
        if self.link_type is LinkType.EMAIL:
            return f"mailto:{self.dest_url}"
        return self.dest_url


@dataclass(frozen=True)
class Image(Tag):
    """Image; the events up to its ``End`` form the alt text."""

    handler_name: ClassVar[str] = "image"

    dest_url: str
    title: str = ""
    link_type: LinkType = LinkType.INLINE
    id: str = ""


# ============================================================================
# Events
# ============================================================================


class _Leaf:
    """Base class for leaf events; dispatches to ``visit_<handler_name>``."""

    handler_name: ClassVar[str] = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch this event to ``visitor``."""
        return getattr(visitor, f"visit_{self.handler_name}")(self)


@dataclass(frozen=True)
class Start:
    """Opening of ``tag``."""

    tag: Tag

    def accept(self, visitor: Any) -> Any:
        """Dispatch to the visitor's start handler for the tag."""
        return self.tag.accept_start(visitor)


@dataclass(frozen=True)
class End:
    """Closing of ``tag``; carries the same tag value as the matching ``Start``."""

    tag: Tag

    def accept(self, visitor: Any) -> Any:
        """Dispatch to the visitor's end handler for the tag."""
        return self.tag.accept_end(visitor)


@dataclass(frozen=True)
class Text(_Leaf):
    """Run of literal text."""

    handler_name: ClassVar[str] = "text"

    text: str


@dataclass(frozen=True)
class Code(_Leaf):
    """Inline code span."""

    handler_name: ClassVar[str] = "code"

    text: str


@dataclass(frozen=True)
class InlineMath(_Leaf):
    """Inline math (``$...$``)."""

    handler_name: ClassVar[str] = "inline_math"

    text: str


@dataclass(frozen=True)
class DisplayMath(_Leaf):
    """Display math (``$$...$$``)."""

    handler_name: ClassVar[str] = "display_math"

    text: str


@dataclass(frozen=True)
class Html(_Leaf):
    """Raw block-level HTML."""

    handler_name: ClassVar[str] = "html"

    text: str


@dataclass(frozen=True)
class InlineHtml(_Leaf):
    """Raw inline HTML."""

    handler_name: ClassVar[str] = "inline_html"

    text: str


@dataclass(frozen=True)
class SoftBreak(_Leaf):
    """Line ending inside a paragraph."""

    handler_name: ClassVar[str] = "soft_break"


@dataclass(frozen=True)
class HardBreak(_Leaf):
    """Forced line break."""

    handler_name: ClassVar[str] = "hard_break"


@dataclass(frozen=True)
class Rule(_Leaf):
    """Thematic break."""

    handler_name: ClassVar[str] = "rule"


@dataclass(frozen=True)
class FootnoteReference(_Leaf):
    """Reference to the footnote ``name``."""

    handler_name: ClassVar[str] = "footnote_reference"

    name: str


@dataclass(frozen=True)
class TaskListMarker(_Leaf):
    """Checkbox at the start of a task list item."""

    handler_name: ClassVar[str] = "task_list_marker"

    checked: bool


Event = Union[
    Start,
    End,
    Text,
    Code,
    InlineMath,
    DisplayMath,
    Html,
    InlineHtml,
    SoftBreak,
    HardBreak,
    Rule,
    FootnoteReference,
    TaskListMarker,
]


__all__ = [
    "Alignment",
    "BlockQuoteKind",
    "LinkType",
    "Tag",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "CodeBlock",
    "HtmlBlock",
    "List",
    "Item",
    "DefinitionList",
    "DefinitionTerm",
    "DefinitionDescription",
    "Table",
    "TableHead",
    "TableRow",
    "TableCell",
    "FootnoteDefinition",
    "MetadataBlock",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Subscript",
    "Superscript",
    "Link",
    "Image",
    "Event",
    "Start",
    "End",
    "Text",
    "Code",
    "InlineMath",
    "DisplayMath",
    "Html",
    "InlineHtml",
    "SoftBreak",
    "HardBreak",
    "Rule",
    "FootnoteReference",
    "TaskListMarker",
]
