#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdpeek/options/html.py
"""Configuration options for HTML rendering.

This module defines options for the HTML emitter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpeek.constants import DEFAULT_CSS_STYLE, DEFAULT_HTML_LANGUAGE, DEFAULT_HTML_TITLE, CssStyle
from mdpeek.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for HTML rendering.

    Parameters
    ----------
    standalone : bool, default False
        Wrap the rendered fragment in a complete HTML5 page. The default is
        the bare body fragment.
    title : str, default "Document"
        Page title used when ``standalone`` is True.
    language : str, default "en"
        ``lang`` attribute of the page when ``standalone`` is True.
    css_style : {"embedded", "none"}, default "embedded"
        Whether the standalone page embeds the default stylesheet.
    escape_raw_html : bool, default False
        Escape raw HTML events as text instead of passing them through.

    Examples
    --------
        >>> from mdpeek.options import HtmlRendererOptions
        >>> options = HtmlRendererOptions(standalone=True, title="Notes")

    """

    standalone: bool = field(
        default=False,
        metadata={"help": "Wrap output in a complete HTML document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_HTML_TITLE,
        metadata={"help": "Page title for standalone output", "type": str, "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language for standalone output", "type": str, "importance": "advanced"},
    )
    css_style: CssStyle = field(
        default=DEFAULT_CSS_STYLE,
        metadata={
            "help": "Stylesheet handling for standalone output",
            "choices": ["embedded", "none"],
            "importance": "advanced",
        },
    )
    escape_raw_html: bool = field(
        default=False,
        metadata={"help": "Escape raw HTML instead of passing it through", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If css_style is not a known mode.

        """
        super().__post_init__()
        if self.css_style not in ("embedded", "none"):
            raise ValueError(f"css_style must be 'embedded' or 'none', got {self.css_style!r}")
