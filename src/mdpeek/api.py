#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/api.py
"""High-level rendering API.

The functions here glue the Markdown parser to the two emitters. Each call
creates its own parser and emitter, so the functions are safe to call from
several threads at once.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

from mdpeek.constants import RenderTarget
from mdpeek.events import Event
from mdpeek.exceptions import DocumentDecodeError, DocumentNotFoundError, FileError, ValidationError
from mdpeek.options.html import HtmlRendererOptions
from mdpeek.options.markdown import MarkdownParserOptions
from mdpeek.options.terminal import TerminalRendererOptions
from mdpeek.parsers.markdown import markdown_to_events
from mdpeek.renderers.html import HtmlEmitter
from mdpeek.renderers.terminal import TerminalEmitter
from mdpeek.themes import Theme, get_theme

logger = logging.getLogger(__name__)


def _resolve_theme(theme: Union[str, Theme, None]) -> Theme | None:
    if isinstance(theme, str):
        return get_theme(theme)
    return theme


def render_html(events: Iterable[Event], options: HtmlRendererOptions | None = None) -> str:
    """Render an event stream to HTML.

    Parameters
    ----------
    events : iterable of Event
        Well-nested event stream
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Returns
    -------
    str
        HTML fragment, or a complete page with ``options.standalone``

    """
    return HtmlEmitter(options).render(events)


def render_terminal(
    events: Iterable[Event],
    theme: Union[str, Theme, None] = None,
    options: TerminalRendererOptions | None = None,
) -> str:
    """Render an event stream to ANSI terminal text.

    Parameters
    ----------
    events : iterable of Event
        Well-nested event stream
    theme : str, Theme or None, default = None
        Theme or preset name; overrides ``options.theme``
    options : TerminalRendererOptions or None, default = None
        Terminal rendering options

    Returns
    -------
    str
        Styled text

    Raises
    ------
    InvalidThemeError
        If the theme name is unknown

    """
    return TerminalEmitter(options, theme=_resolve_theme(theme)).render(events)


def markdown_to_html(
    markdown_content: str,
    options: HtmlRendererOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    r"""Parse Markdown and render it to HTML.

    Examples
    --------
        >>> markdown_to_html("Hello *there*")
        '<p>Hello <em>there</em></p>\n'

    """
    return render_html(markdown_to_events(markdown_content, parser_options), options)


def markdown_to_terminal(
    markdown_content: str,
    theme: Union[str, Theme, None] = None,
    options: TerminalRendererOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    r"""Parse Markdown and render it for the terminal.

    Examples
    --------
        >>> markdown_to_terminal("Hello *there*", theme="mono")
        'Hello *there*\n\n'

    """
    return render_terminal(markdown_to_events(markdown_content, parser_options), theme=theme, options=options)


def read_document(path: Union[str, Path]) -> str:
    """Read a Markdown document as UTF-8 text.

    Parameters
    ----------
    path : str or Path
        Document path

    Returns
    -------
    str
        Document text

    Raises
    ------
    DocumentNotFoundError
        If the path does not exist or is not a regular file
    DocumentDecodeError
        If the bytes are not valid UTF-8
    FileError
        If the file cannot be read

    """
    document = Path(path)
    if not document.is_file():
        raise DocumentNotFoundError(str(document))
    try:
        data = document.read_bytes()
    except OSError as e:
        raise FileError(f"Could not read '{document}': {e}", file_path=str(document), original_error=e) from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(str(document), original_error=e) from e


def render_file(
    path: Union[str, Path],
    target: RenderTarget = "term",
    *,
    theme: Union[str, Theme, None] = None,
    terminal_options: TerminalRendererOptions | None = None,
    html_options: HtmlRendererOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
) -> str:
    """Read a Markdown file and render it.

    Parameters
    ----------
    path : str or Path
        Document path
    target : {"term", "html"}, default "term"
        Output kind
    theme : str, Theme or None, default = None
        Terminal theme; ignored for HTML
    terminal_options : TerminalRendererOptions or None, default = None
        Terminal rendering options
    html_options : HtmlRendererOptions or None, default = None
        HTML rendering options
    parser_options : MarkdownParserOptions or None, default = None
        Markdown parser options

    Returns
    -------
    str
        Rendered output

    Raises
    ------
    DocumentNotFoundError
        If the path does not exist or is not a regular file
    DocumentDecodeError
        If the bytes are not valid UTF-8
    ValidationError
        If ``target`` is not a known output kind

    """
    if target not in ("term", "html"):
        raise ValidationError(f"Unknown render target '{target}'", parameter_name="target", parameter_value=target)

    text = read_document(path)
    logger.debug("Rendering %s as %s", path, target)
    events = markdown_to_events(text, parser_options)
    if target == "html":
        return render_html(events, html_options)
    return render_terminal(events, theme=theme, options=terminal_options)


__all__ = [
    "render_html",
    "render_terminal",
    "markdown_to_html",
    "markdown_to_terminal",
    "read_document",
    "render_file",
]
