"""Unit tests for the HTML emitter.

The emitter is driven with hand-built event streams so that these tests do
not depend on how the Markdown parser tokenizes its input.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

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
    TaskListMarker,
    Text,
)
from mdpeek.exceptions import InvalidOptionsError
from mdpeek.options import HtmlRendererOptions, TerminalRendererOptions
from mdpeek.renderers.html import HtmlEmitter
from mdpeek.utils.escape import escape_text
from tests.utils import wrap


def render(events, **options):
    return HtmlEmitter(HtmlRendererOptions(**options)).render(events)


def para(*inner):
    return wrap(Paragraph(), *inner)


@pytest.mark.unit
class TestHtmlBlocks:
    """Test block-level markup."""

    def test_paragraph_text_escaped(self):
        """Test that paragraph text is escaped."""
        assert render(para("a < b & c")) == "<p>a &lt; b &amp; c</p>\n"

    def test_consecutive_paragraphs(self):
        """Test that each paragraph starts on its own line."""
        assert render(para("a") + para("b")) == "<p>a</p>\n<p>b</p>\n"

    def test_empty_stream(self):
        """Test that no events render to an empty string."""
        assert render([]) == ""

    def test_heading_plain(self):
        """Test a heading without attributes."""
        assert render(wrap(Heading(level=3), "Title")) == "<h3>Title</h3>\n"

    def test_heading_attributes(self):
        """Test id, classes and extra attributes on a heading."""
        tag = Heading(level=2, id="intro", classes=("lead", "wide"), attrs=(("data-x", "1"), ("hidden", None)))
        assert render(wrap(tag, "Intro")) == '<h2 id="intro" class="lead wide" data-x="1" hidden="">Intro</h2>\n'

    def test_heading_attribute_values_escaped(self):
        """Test that attribute values cannot break out of their quotes."""
        tag = Heading(level=1, id='x" onclick="y')
        assert render(wrap(tag, "T")) == '<h1 id="x&quot; onclick=&quot;y">T</h1>\n'

    def test_block_quote(self):
        """Test a plain block quote."""
        assert render(wrap(BlockQuote(), para("q"))) == "<blockquote>\n<p>q</p>\n</blockquote>\n"

    def test_alert_block_quote(self):
        """Test that alerts carry a class named after their kind."""
        output = render(wrap(BlockQuote(kind=BlockQuoteKind.WARNING), para("careful")))
        assert output == '<blockquote class="markdown-alert-warning">\n<p>careful</p>\n</blockquote>\n'

    def test_fenced_code_block_language(self):
        """Test that fenced code carries a language class and escaped content."""
        output = render(wrap(CodeBlock(info="python extra"), "x < 1\n"))
        assert output == '<pre><code class="language-python">x &lt; 1\n</code></pre>\n'

    def test_indented_code_block(self):
        """Test that indented code has no language class."""
        assert render(wrap(CodeBlock(fenced=False), "x\n")) == "<pre><code>x\n</code></pre>\n"

    def test_unordered_list(self):
        """Test an unordered list."""
        events = wrap(List(), wrap(Item(), "a"), wrap(Item(), "b"))
        assert render(events) == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_ordered_list_starting_at_one(self):
        """Test that a list starting at 1 has no start attribute."""
        assert render(wrap(List(start=1), wrap(Item(), "a"))) == "<ol>\n<li>a</li>\n</ol>\n"

    @pytest.mark.parametrize("start", [0, 3, 42])
    def test_ordered_list_start_attribute(self, start):
        """Test that other start numbers are written out."""
        assert render(wrap(List(start=start), wrap(Item(), "a"))).startswith(f'<ol start="{start}">\n')

    def test_empty_ordered_item(self):
        """Test that an empty item still gets its element."""
        assert render(wrap(List(start=1), wrap(Item()))) == "<ol>\n<li></li>\n</ol>\n"

    def test_nested_list(self):
        """Test that a nested list starts on a new line inside the item."""
        inner = wrap(List(), wrap(Item(), "b"))
        events = wrap(List(), wrap(Item(), "a", inner))
        assert render(events) == "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"

    def test_task_list_markers(self):
        """Test disabled checkboxes for task items."""
        checked = render(wrap(Item(), TaskListMarker(checked=True), "done"))
        unchecked = render(wrap(Item(), TaskListMarker(checked=False), "todo"))
        assert checked == '<li><input disabled="" type="checkbox" checked="">\ndone</li>\n'
        assert unchecked == '<li><input disabled="" type="checkbox">\ntodo</li>\n'

    def test_definition_list(self):
        """Test definition list markup."""
        events = wrap(DefinitionList(), wrap(DefinitionTerm(), "Term"), wrap(DefinitionDescription(), "Meaning"))
        assert render(events) == "<dl>\n<dt>Term</dt>\n<dd>Meaning</dd>\n</dl>\n"

    def test_rule(self):
        """Test that a rule is written on its own line."""
        assert render([Rule()]) == "<hr />\n"
        assert render(para("a") + [Rule()]) == "<p>a</p>\n<hr />\n"

    def test_raw_html_passed_through(self):
        """Test that raw HTML is written as-is by default."""
        events = wrap(HtmlBlock(), Html("<div>hi</div>\n"))
        assert render(events) == "<div>hi</div>\n"

    def test_raw_html_escaped_when_configured(self):
        """Test that raw HTML is escaped with escape_raw_html."""
        events = wrap(HtmlBlock(), Html("<div>hi</div>\n")) + para(InlineHtml("<b>"))
        assert render(events, escape_raw_html=True) == "&lt;div&gt;hi&lt;/div&gt;\n<p>&lt;b&gt;</p>\n"

    def test_metadata_block_is_not_written(self):
        """Test that front matter text never reaches the output."""
        events = wrap(MetadataBlock(kind="yaml"), "title: secret\n") + para("body")
        assert render(events) == "<p>body</p>\n"


@pytest.mark.unit
class TestHtmlTables:
    """Test table markup."""

    def test_table_with_alignment(self):
        """Test header and body cells with per-column alignment."""
        events = wrap(
            Table(alignments=("left", None)),
            wrap(TableHead(), wrap(TableCell(), "a"), wrap(TableCell(), "b")),
            wrap(TableRow(), wrap(TableCell(), "1"), wrap(TableCell(), "2")),
        )
        assert render(events) == (
            '<table><thead><tr><th style="text-align: left">a</th><th>b</th></tr></thead><tbody>\n'
            '<tr><td style="text-align: left">1</td><td>2</td></tr>\n'
            "</tbody></table>\n"
        )

    def test_more_cells_than_alignments(self):
        """Test that cells beyond the alignment list are unaligned."""
        events = wrap(
            Table(alignments=("right",)),
            wrap(TableHead(), wrap(TableCell(), "a"), wrap(TableCell(), "b")),
        )
        output = render(events)
        assert '<th style="text-align: right">a</th><th>b</th>' in output

    def test_table_state_reset_between_tables(self):
        """Test that a second table starts with header cells again."""
        table = wrap(
            Table(alignments=("center",)),
            wrap(TableHead(), wrap(TableCell(), "h")),
            wrap(TableRow(), wrap(TableCell(), "d")),
        )
        emitter = HtmlEmitter()
        output = emitter.render(table + table)
        assert output.count('<th style="text-align: center">h</th>') == 2
        assert emitter.state.is_baseline()


@pytest.mark.unit
class TestHtmlInline:
    """Test inline markup."""

    @pytest.mark.parametrize(
        "tag,element",
        [
            (Emphasis(), "em"),
            (Strong(), "strong"),
            (Strikethrough(), "del"),
            (Subscript(), "sub"),
            (Superscript(), "sup"),
        ],
    )
    def test_inline_tags(self, tag, element):
        """Test the element written for each inline tag."""
        assert render(para(wrap(tag, "x"))) == f"<p><{element}>x</{element}></p>\n"

    def test_code_span(self):
        """Test that inline code is escaped inside a code element."""
        assert render(para(Code("a<b"))) == "<p><code>a&lt;b</code></p>\n"

    def test_math(self):
        """Test inline and display math spans."""
        assert render(para(InlineMath("x<2"))) == '<p><span class="math math-inline">x&lt;2</span></p>\n'
        assert render(para(DisplayMath("y"))) == '<p><span class="math math-display">y</span></p>\n'

    def test_soft_and_hard_breaks(self):
        """Test that soft breaks are newlines and hard breaks are br elements."""
        assert render(para("a", SoftBreak(), "b")) == "<p>a\nb</p>\n"
        assert render(para("a", HardBreak(), "b")) == "<p>a<br />\nb</p>\n"

    def test_link_with_title(self):
        """Test that the href is URL-escaped and the title attribute-escaped."""
        events = para(wrap(Link(dest_url="https://e.com/a b", title='say "hi"'), "go"))
        assert render(events) == '<p><a href="https://e.com/a%20b" title="say &quot;hi&quot;">go</a></p>\n'

    def test_email_link(self):
        """Test that e-mail links point at a mailto: URL."""
        events = para(wrap(Link(dest_url="user@example.com", link_type=LinkType.EMAIL), "user@example.com"))
        assert render(events) == '<p><a href="mailto:user@example.com">user@example.com</a></p>\n'

    def test_javascript_quotes_cannot_escape_href(self):
        """Test that quotes in a destination are percent-encoded."""
        output = render(para(wrap(Link(dest_url='x" onmouseover="alert(1)'), "x")))
        assert 'onmouseover="' not in output

    def test_image_alt_text_flattened(self):
        """Test that nested markup inside alt text is reduced to its text."""
        events = para(
            wrap(Image(dest_url="cat.png", title="T"), "a ", wrap(Emphasis(), "fat"), ' "cat"'),
            " after",
        )
        assert render(events) == '<p><img src="cat.png" alt="a fat &quot;cat&quot;" title="T" /> after</p>\n'

    def test_image_alt_text_special_leaves(self):
        """Test the alt text contribution of math, code and breaks."""
        events = para(wrap(Image(dest_url="i.png"), InlineMath("x"), Code("c"), HardBreak(), SoftBreak()))
        assert render(events) == '<p><img src="i.png" alt="$x$c" /></p>\n'

    def test_footnote_reference_in_alt_text_is_numbered(self):
        """Test that footnotes met in alt text share the document numbering."""
        events = para(wrap(Image(dest_url="i.png"), "pic", FootnoteReference("a")), FootnoteReference("b"))
        output = render(events)
        assert 'alt="pic[1]"' in output
        assert '<a href="#b">2</a>' in output


@pytest.mark.unit
class TestHtmlFootnotes:
    """Test footnote references and definitions."""

    def test_reference_and_definition(self):
        """Test that references link to a numbered definition."""
        events = para("x", FootnoteReference("n")) + wrap(FootnoteDefinition("n"), para("note"))
        assert render(events) == (
            '<p>x<sup class="footnote-reference"><a href="#n">1</a></sup></p>\n'
            '<div class="footnote-definition" id="n"><sup class="footnote-definition-label">1</sup>\n'
            "<p>note</p>\n"
            "</div>\n"
        )

    def test_numbering_by_first_appearance(self):
        """Test that repeated references reuse their number."""
        events = para(FootnoteReference("b"), FootnoteReference("a"), FootnoteReference("b"))
        output = render(events)
        assert output == (
            "<p>"
            '<sup class="footnote-reference"><a href="#b">1</a></sup>'
            '<sup class="footnote-reference"><a href="#a">2</a></sup>'
            '<sup class="footnote-reference"><a href="#b">1</a></sup>'
            "</p>\n"
        )

    def test_definition_numbered_before_its_reference(self):
        """Test that a definition met first takes the next number."""
        events = (
            para(FootnoteReference("a"))
            + wrap(FootnoteDefinition("b"), para("bee"))
            + para(FootnoteReference("b"))
        )
        output = render(events)
        assert '<a href="#a">1</a>' in output
        assert '<sup class="footnote-definition-label">2</sup>' in output
        assert '<a href="#b">2</a>' in output

    def test_numbering_restarts_per_render(self):
        """Test that each render call numbers footnotes from one."""
        emitter = HtmlEmitter()
        emitter.render(para(FootnoteReference("a")))
        output = emitter.render(para(FootnoteReference("z")))
        assert '<a href="#z">1</a>' in output


@pytest.mark.unit
class TestHtmlStandalone:
    """Test the standalone page wrapper."""

    def test_standalone_page(self):
        """Test the document structure around the fragment."""
        output = render(para("x"), standalone=True, title="A & B")
        assert output.startswith('<!DOCTYPE html>\n<html lang="en">\n<head>\n<meta charset="UTF-8">')
        assert "<title>A &amp; B</title>" in output
        assert "<style>" in output
        assert output.endswith("<body>\n<p>x</p>\n</body>\n</html>\n")

    def test_standalone_without_css(self):
        """Test that css_style='none' leaves out the style element."""
        output = render(para("x"), standalone=True, css_style="none")
        assert "<style>" not in output

    def test_standalone_language(self):
        """Test the lang attribute of the page."""
        assert '<html lang="de">' in render(para("x"), standalone=True, language="de")


@pytest.mark.unit
class TestHtmlEmitterState:
    """Test emitter construction and per-render state."""

    def test_rejects_wrong_options_type(self):
        """Test that terminal options are refused."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            HtmlEmitter(TerminalRendererOptions())  # type: ignore[arg-type]
        assert exc_info.value.component_name == "html"

    def test_state_is_baseline_after_render(self):
        """Test that a well-nested stream leaves no open state behind."""
        emitter = HtmlEmitter()
        events = (
            wrap(MetadataBlock(), "x")
            + wrap(
                Table(alignments=("left",)),
                wrap(TableHead(), wrap(TableCell(), "h")),
                wrap(TableRow(), wrap(TableCell(), "d")),
            )
            + para(wrap(Image(dest_url="i.png"), "alt"))
        )
        emitter.render(events)
        assert emitter.state.is_baseline()

    def test_render_is_repeatable(self):
        """Test that rendering the same stream twice gives the same output."""
        emitter = HtmlEmitter()
        events = para("a", wrap(Strong(), "b"))
        assert emitter.render(events) == emitter.render(events)

    def test_accepts_generator(self):
        """Test that any iterable of events can be rendered."""
        assert HtmlEmitter().render(event for event in para("g")) == "<p>g</p>\n"

    @given(st.text(min_size=1))
    def test_paragraph_text_round_trips_through_escaping(self, text):
        """Test that paragraph content is exactly the escaped text."""
        assert render(para(text)) == f"<p>{escape_text(text)}</p>\n"
