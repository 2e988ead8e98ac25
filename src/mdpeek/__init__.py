"""mdpeek - Render Markdown as HTML or as styled terminal text.

mdpeek parses a Markdown document into a flat stream of structural events
and feeds that stream to one of two emitters:

- :class:`~mdpeek.renderers.html.HtmlEmitter` writes sanitized HTML5 markup
- :class:`~mdpeek.renderers.terminal.TerminalEmitter` writes text decorated
  with ANSI escape sequences according to a color theme

Both emitters work on the same event stream and never see the raw document
text, so any producer of well-nested events can drive them.

Requirements
------------
- Python 3.10+
- mistune (Markdown parsing), rich (ANSI styles), watchdog (``--watch``)

Examples
--------
Render Markdown for the terminal:

    >>> from mdpeek import markdown_to_terminal
    >>> print(markdown_to_terminal("# Hello\\n\\nSome *text*.", theme="nord"))

Render Markdown to an HTML fragment:

    >>> from mdpeek import markdown_to_html
    >>> markdown_to_html("Some *text*.")
    '<p>Some <em>text</em>.</p>\\n'

Drive an emitter with a hand-built event stream:

    >>> from mdpeek import HtmlEmitter
    >>> from mdpeek.events import End, Paragraph, Start, Text
    >>> HtmlEmitter().render([Start(Paragraph()), Text("a < b"), End(Paragraph())])
    '<p>a &lt; b</p>\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdpeek requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.4.0"

from mdpeek.api import (  # noqa: E402
    markdown_to_html,
    markdown_to_terminal,
    read_document,
    render_file,
    render_html,
    render_terminal,
)
from mdpeek.exceptions import (  # noqa: E402
    ConfigError,
    DocumentDecodeError,
    DocumentNotFoundError,
    FileError,
    InvalidOptionsError,
    InvalidThemeError,
    MdpeekError,
    ParsingError,
    ValidationError,
)
from mdpeek.options import (  # noqa: E402
    HtmlRendererOptions,
    MarkdownParserOptions,
    TerminalRendererOptions,
)
from mdpeek.parsers.markdown import MarkdownEventParser, markdown_to_events  # noqa: E402
from mdpeek.renderers.html import HtmlEmitter  # noqa: E402
from mdpeek.renderers.terminal import TerminalEmitter  # noqa: E402
from mdpeek.themes import THEME_NAMES, THEMES, Theme, get_theme  # noqa: E402

__all__ = [
    "__version__",
    # API
    "markdown_to_events",
    "markdown_to_html",
    "markdown_to_terminal",
    "read_document",
    "render_file",
    "render_html",
    "render_terminal",
    # Components
    "HtmlEmitter",
    "MarkdownEventParser",
    "TerminalEmitter",
    # Options
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "TerminalRendererOptions",
    # Themes
    "THEMES",
    "THEME_NAMES",
    "Theme",
    "get_theme",
    # Exceptions
    "ConfigError",
    "DocumentDecodeError",
    "DocumentNotFoundError",
    "FileError",
    "InvalidOptionsError",
    "InvalidThemeError",
    "MdpeekError",
    "ParsingError",
    "ValidationError",
]
