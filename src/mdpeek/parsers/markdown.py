#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/parsers/markdown.py
"""Markdown to event stream parser.

This module turns Markdown text into the flat event stream the emitters
consume. Parsing is done by mistune (with its renderer disabled so it returns
its token tree); the adapter walks that tree and emits ``Start``/``End``
pairs around nested content and leaf events for everything else.

A few features are handled by the adapter itself rather than by a mistune
plugin:

- YAML (``---``) and TOML (``+++``) front matter at the very start of the
  document becomes a metadata block carrying the raw text
- GitHub alerts (``> [!NOTE]``) become block quotes with a kind
- trailing ``{#id .class key=value}`` on headings becomes heading attributes
- ``<user@host>`` autolinks become e-mail links without the ``mailto:`` prefix

"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import mistune
from mistune.util import unikey

from mdpeek.events import (
    BlockQuote,
    BlockQuoteKind,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    DisplayMath,
    Emphasis,
    End,
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
    LinkType,
    List,
    MetadataBlock,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableHead,
    TableRow,
    Tag,
    TaskListMarker,
    Text,
)
from mdpeek.exceptions import InvalidOptionsError, ParsingError
from mdpeek.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

_ALERT_PATTERN = re.compile(r"^\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\][ \t]*", re.IGNORECASE)
_HEADING_ATTRIBUTES_PATTERN = re.compile(r"[ \t]*\{([^{}]*)\}[ \t]*$")
_ATTRIBUTE_TOKEN_PATTERN = re.compile(r"""\s*(?:([^\s=]+)=(?:"([^"]*)"|'([^']*)'|(\S+))|(\S+))""")

_FRONT_MATTER_FENCES = {"---": "yaml", "+++": "toml"}

# Same label syntax as mistune's footnotes plugin
_FOOTNOTE_LABEL_PATTERN = re.compile(r"\[\^((?:[^\\\[\]]|\\.){1,500})\]")


class MarkdownEventParser:
    r"""Parse Markdown text into an event stream.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownEventParser()
        >>> events = parser.parse("# Hello\n\nThis is **bold**.")
        >>> events[0]
        Start(tag=Heading(level=1, id=None, classes=(), attrs=()))

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise InvalidOptionsError(
                component_name="markdown",
                expected_type=MarkdownParserOptions,
                received_type=type(options),
            )
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()
        self._events: list[Event] = []
        self._footnote_labels: dict[str, str] = {}
        self._markdown = mistune.create_markdown(renderer=None, plugins=self._plugins())

    def _plugins(self) -> list[str]:
        """Return the mistune plugin names enabled by the options."""
        switches = [
            ("table", self.options.parse_tables),
            ("strikethrough", self.options.parse_strikethrough),
            ("footnotes", self.options.parse_footnotes),
            ("task_lists", self.options.parse_task_lists),
            ("math", self.options.parse_math),
            ("def_list", self.options.parse_definition_lists),
            ("superscript", self.options.parse_superscript),
            ("subscript", self.options.parse_subscript),
        ]
        plugins = [name for name, enabled in switches if enabled]
        logger.debug("mistune plugins: %s", ", ".join(plugins) or "(none)")
        return plugins

    def parse(self, text: str) -> list[Event]:
        """Parse Markdown text into a list of events.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        list of Event
            Well-nested events in document order

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        self._events = []
        body = text
        if self.options.parse_front_matter:
            body = self._emit_front_matter(text)
        if self.options.parse_footnotes:
            self._footnote_labels = self._collect_footnote_labels(body)

        try:
            tokens, _state = self._markdown.parse(body)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", original_error=e) from e

        self._emit_tokens(tokens if isinstance(tokens, list) else [])
        events = self._events
        self._events = []
        self._footnote_labels = {}
        logger.debug("Parsed %d characters into %d events", len(text), len(events))
        return events

    # ------------------------------------------------------------------
    # Emission helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _collect_footnote_labels(text: str) -> dict[str, str]:
        """Map mistune's normalized footnote keys to the labels as written.

        The first spelling of a label wins.
        """
        labels: dict[str, str] = {}
        for match in _FOOTNOTE_LABEL_PATTERN.finditer(text):
            labels.setdefault(unikey(match.group(1)), match.group(1))
        return labels

    def _footnote_name(self, key: str) -> str:
        return self._footnote_labels.get(key, key)

    def _emit(self, event: Event) -> None:
        self._events.append(event)

    def _emit_wrapped(self, tag: Tag, children: list[dict[str, Any]]) -> None:
        self._emit(Start(tag))
        self._emit_tokens(children)
        self._emit(End(tag))

    def _emit_tokens(self, tokens: list[dict[str, Any]]) -> None:
        for token in tokens:
            self._emit_token(token)

    def _emit_token(self, token: dict[str, Any]) -> None:
        token_type = token.get("type", "")
        handler = getattr(self, f"_handle_{token_type}", None)
        if handler is None:
            logger.debug("Skipping unsupported mistune token '%s'", token_type)
            return
        handler(token)

    def _emit_front_matter(self, text: str) -> str:
        """Emit a metadata block for leading front matter and return the rest."""
        lines = text.splitlines(keepends=True)
        if not lines:
            return text
        fence = lines[0].rstrip("\r\n")
        kind = _FRONT_MATTER_FENCES.get(fence)
        if kind is None:
            return text

        for index in range(1, len(lines)):
            if lines[index].rstrip("\r\n") == fence:
                tag = MetadataBlock(kind=kind)  # type: ignore[arg-type]
                raw = "".join(lines[1:index])
                self._emit(Start(tag))
                if raw:
                    self._emit(Text(raw))
                self._emit(End(tag))
                return "".join(lines[index + 1 :])
        return text

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _handle_blank_line(self, token: dict[str, Any]) -> None:
        pass

    def _handle_paragraph(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Paragraph(), token.get("children", []))

    def _handle_block_text(self, token: dict[str, Any]) -> None:
        # Tight list items carry their inline content without a paragraph
        self._emit_tokens(token.get("children", []))

    def _handle_heading(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1)
        children = list(token.get("children", []))
        heading_id: Optional[str] = None
        classes: tuple[str, ...] = ()
        extra: tuple[tuple[str, Optional[str]], ...] = ()
        if self.options.parse_heading_attributes:
            children, heading_id, classes, extra = self._split_heading_attributes(children)
        self._emit_wrapped(Heading(level=level, id=heading_id, classes=classes, attrs=extra), children)

    def _split_heading_attributes(
        self, children: list[dict[str, Any]]
    ) -> tuple[list[dict[str, Any]], Optional[str], tuple[str, ...], tuple[tuple[str, Optional[str]], ...]]:
        """Strip a trailing ``{...}`` attribute block from heading content."""
        if not children or children[-1].get("type") != "text":
            return children, None, (), ()
        raw = children[-1].get("raw", "")
        match = _HEADING_ATTRIBUTES_PATTERN.search(raw)
        if match is None or not match.group(1).strip():
            return children, None, (), ()

        heading_id: Optional[str] = None
        classes: list[str] = []
        extra: list[tuple[str, Optional[str]]] = []
        for item in _ATTRIBUTE_TOKEN_PATTERN.finditer(match.group(1)):
            name, double_quoted, single_quoted, bare_value, word = item.groups()
            if name is not None:
                value = next(v for v in (double_quoted, single_quoted, bare_value) if v is not None)
                extra.append((name, value))
            elif word.startswith("#") and len(word) > 1:
                heading_id = word[1:]
            elif word.startswith(".") and len(word) > 1:
                classes.append(word[1:])
            else:
                extra.append((word, None))

        remaining = raw[: match.start()]
        children = children[:-1]
        if remaining:
            children.append(_text_token(remaining))
        return children, heading_id, tuple(classes), tuple(extra)

    def _handle_block_quote(self, token: dict[str, Any]) -> None:
        children = list(token.get("children", []))
        kind: Optional[BlockQuoteKind] = None
        if self.options.parse_alerts:
            kind, children = self._split_alert(children)
        self._emit_wrapped(BlockQuote(kind=kind), children)

    def _split_alert(self, children: list[dict[str, Any]]) -> tuple[Optional[BlockQuoteKind], list[dict[str, Any]]]:
        """Detect a ``[!KIND]`` marker at the start of a quote and remove it."""
        if not children or children[0].get("type") != "paragraph":
            return None, children
        inline = list(children[0].get("children", []))

        # mistune may split the marker over several text tokens
        prefix = ""
        consumed = 0
        for child in inline:
            if child.get("type") != "text":
                break
            prefix += child.get("raw", "")
            consumed += 1
            if "]" in prefix:
                break

        match = _ALERT_PATTERN.match(prefix)
        if match is None:
            return None, children

        kind = BlockQuoteKind(match.group(1).lower())
        rest = prefix[match.end() :]
        remaining = inline[consumed:]
        if rest:
            remaining.insert(0, _text_token(rest))
        while remaining and remaining[0].get("type") in ("softbreak", "linebreak"):
            remaining.pop(0)

        if remaining:
            return kind, [{**children[0], "children": remaining}] + children[1:]
        return kind, children[1:]

    def _handle_block_code(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        fenced = token.get("style") != "indent"
        tag = CodeBlock(fenced=fenced, info=(attrs.get("info") or "").strip() if fenced else "")
        self._emit(Start(tag))
        raw = token.get("raw", "")
        if raw:
            self._emit(Text(raw))
        self._emit(End(tag))

    def _handle_block_html(self, token: dict[str, Any]) -> None:
        tag = HtmlBlock()
        self._emit(Start(tag))
        self._emit(Html(token.get("raw", "")))
        self._emit(End(tag))

    def _handle_block_math(self, token: dict[str, Any]) -> None:
        tag = Paragraph()
        self._emit(Start(tag))
        self._emit(DisplayMath(token.get("raw", "").strip("\n")))
        self._emit(End(tag))

    def _handle_thematic_break(self, token: dict[str, Any]) -> None:
        self._emit(Rule())

    def _handle_list(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        start: Optional[int] = None
        if attrs.get("ordered", False):
            start = attrs.get("start", 1)
        self._emit_wrapped(List(start=start), token.get("children", []))

    def _handle_list_item(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Item(), token.get("children", []))

    def _handle_task_list_item(self, token: dict[str, Any]) -> None:
        tag = Item()
        self._emit(Start(tag))
        self._emit(TaskListMarker(checked=bool(token.get("attrs", {}).get("checked", False))))
        self._emit_tokens(token.get("children", []))
        self._emit(End(tag))

    def _handle_table(self, token: dict[str, Any]) -> None:
        children = token.get("children", [])
        alignments: tuple[Any, ...] = ()
        for child in children:
            if child.get("type") == "table_head":
                alignments = tuple(cell.get("attrs", {}).get("align") for cell in child.get("children", []))
        self._emit_wrapped(Table(alignments=alignments), children)

    def _handle_table_head(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(TableHead(), token.get("children", []))

    def _handle_table_body(self, token: dict[str, Any]) -> None:
        self._emit_tokens(token.get("children", []))

    def _handle_table_row(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(TableRow(), token.get("children", []))

    def _handle_table_cell(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(TableCell(), token.get("children", []))

    def _handle_footnotes(self, token: dict[str, Any]) -> None:
        self._emit_tokens(token.get("children", []))

    def _handle_footnote_item(self, token: dict[str, Any]) -> None:
        name = self._footnote_name(token.get("attrs", {}).get("key", ""))
        self._emit_wrapped(FootnoteDefinition(name=name), token.get("children", []))

    def _handle_def_list(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(DefinitionList(), token.get("children", []))

    def _handle_def_list_head(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(DefinitionTerm(), token.get("children", []))

    def _handle_def_list_item(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(DefinitionDescription(), token.get("children", []))

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _handle_text(self, token: dict[str, Any]) -> None:
        raw = token.get("raw", "")
        if raw:
            self._emit(Text(raw))

    def _handle_codespan(self, token: dict[str, Any]) -> None:
        self._emit(Code(token.get("raw", "")))

    def _handle_inline_math(self, token: dict[str, Any]) -> None:
        self._emit(InlineMath(token.get("raw", "")))

    def _handle_inline_html(self, token: dict[str, Any]) -> None:
        self._emit(InlineHtml(token.get("raw", "")))

    def _handle_softbreak(self, token: dict[str, Any]) -> None:
        self._emit(SoftBreak())

    def _handle_linebreak(self, token: dict[str, Any]) -> None:
        self._emit(HardBreak())

    def _handle_emphasis(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Emphasis(), token.get("children", []))

    def _handle_strong(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Strong(), token.get("children", []))

    def _handle_strikethrough(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Strikethrough(), token.get("children", []))

    def _handle_subscript(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Subscript(), token.get("children", []))

    def _handle_superscript(self, token: dict[str, Any]) -> None:
        self._emit_wrapped(Superscript(), token.get("children", []))

    def _handle_footnote_ref(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        self._emit(FootnoteReference(name=self._footnote_name(attrs.get("label") or token.get("raw", ""))))

    def _handle_link(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        children = token.get("children", [])
        url = attrs.get("url", "")
        title = attrs.get("title") or ""
        label = attrs.get("label") or ""
        link_type = LinkType.INLINE
        child_text = children[0].get("raw") if len(children) == 1 and children[0].get("type") == "text" else None

        if url.startswith("mailto:") and child_text == url[len("mailto:") :]:
            link_type = LinkType.EMAIL
            url = child_text
        elif child_text is not None and child_text == url:
            link_type = LinkType.AUTOLINK
        elif label:
            link_type = LinkType.REFERENCE

        self._emit_wrapped(Link(dest_url=url, title=title, link_type=link_type, id=label), children)

    def _handle_image(self, token: dict[str, Any]) -> None:
        attrs = token.get("attrs", {})
        label = attrs.get("label") or ""
        tag = Image(
            dest_url=attrs.get("url", ""),
            title=attrs.get("title") or "",
            link_type=LinkType.REFERENCE if label else LinkType.INLINE,
            id=label,
        )
        self._emit_wrapped(tag, token.get("children", []))


def _text_token(raw: str) -> dict[str, Any]:
    """Build a mistune-shaped text token."""
    return {"type": "text", "raw": raw}


def markdown_to_events(markdown_content: str, options: MarkdownParserOptions | None = None) -> list[Event]:
    r"""Convert a Markdown string to an event stream.

    This is a convenience function that creates a parser and parses the
    markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    list of Event
        Event stream

    Examples
    --------
    >>> from mdpeek.parsers.markdown import markdown_to_events
    >>> len(markdown_to_events("Hello"))
    3

    """
    return MarkdownEventParser(options).parse(markdown_content)
