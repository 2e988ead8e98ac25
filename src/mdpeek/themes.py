#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/themes.py
"""Terminal color themes.

A :class:`Theme` maps the semantic roles the terminal emitter knows about
(headings, quotes, code, links, list markers, rules, table headers and
footnotes) to :class:`rich.style.Style` values. Themes are immutable and can
be shared freely between renders.

Seven presets are available through :func:`get_theme`. The ``mono`` preset
uses null styles only, so output rendered with it contains no ANSI escape
sequences at all.

"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from rich.style import Style

from mdpeek.constants import DEFAULT_THEME
from mdpeek.exceptions import InvalidThemeError


@dataclass(frozen=True)
class Theme:
    """Immutable set of display styles for the terminal emitter.

    Parameters
    ----------
    name : str
        Preset name
    heading : Style
        Heading text (bold is added by the emitter)
    block_quote : Style
        Text inside block quotes and alert labels
    quote_bar : Style
        The bar drawn at the start of each quoted line
    code : Style
        Code block text, inline code, math and emphasis delimiters
    link : Style
        Link text and destinations
    list_marker : Style
        Bullets, ordinals and task checkboxes
    rule : Style
        Thematic breaks
    table_header : Style
        Table header cells
    footnote : Style
        Footnote references and definition labels

    """

    name: str
    heading: Style
    block_quote: Style
    quote_bar: Style
    code: Style
    link: Style
    list_marker: Style
    rule: Style
    table_header: Style
    footnote: Style

    @staticmethod
    def derive(style: Style, **modifiers: Any) -> Style:
        """Return ``style`` with extra attributes, keeping null styles null.

        Parameters
        ----------
        style : Style
            Base style from the theme
        **modifiers : Any
            Keyword arguments for :class:`rich.style.Style` (``bold``, ``dim``, ...)

        Returns
        -------
        Style
            The combined style, or ``style`` itself when it is null

        """
        if not style:
            return style
        return style + Style(**modifiers)

    @property
    def heading_text(self) -> Style:
        """Style for level 2-6 heading text."""
        return self.derive(self.heading, bold=True)

    @property
    def banner(self) -> Style:
        """Style for the level 1 heading banner."""
        return self.derive(self.heading, bold=True, reverse=True)

    @property
    def link_text(self) -> Style:
        """Style for the visible text of a link."""
        return self.derive(self.link, bold=True)

    @property
    def link_destination(self) -> Style:
        """Style for a link destination printed after the link text."""
        return self.derive(self.link, underline=True, dim=True)

    @property
    def is_monochrome(self) -> bool:
        """Return True when every role uses the null style."""
        return not any(
            (
                self.heading,
                self.block_quote,
                self.quote_bar,
                self.code,
                self.link,
                self.list_marker,
                self.rule,
                self.table_header,
                self.footnote,
            )
        )


def _preset(
    name: str,
    heading: str,
    block_quote: str,
    code: str,
    list_marker: str,
) -> Theme:
    return Theme(
        name=name,
        heading=Style(color=heading, bold=True),
        block_quote=Style(color=block_quote),
        quote_bar=Style(color="bright_black"),
        code=Style(color=code),
        link=Style(color="bright_blue"),
        list_marker=Style(color=list_marker, bold=True),
        rule=Style(color="bright_black"),
        table_header=Style(color="bright_white", bold=True),
        footnote=Style(color="bright_black"),
    )


MONO = Theme(
    name="mono",
    heading=Style.null(),
    block_quote=Style.null(),
    quote_bar=Style.null(),
    code=Style.null(),
    link=Style.null(),
    list_marker=Style.null(),
    rule=Style.null(),
    table_header=Style.null(),
    footnote=Style.null(),
)

GLOW = _preset("glow", heading="bright_cyan", block_quote="bright_magenta", code="bright_yellow", list_marker="bright_green")
CATPPUCCIN = _preset(
    "catppuccin", heading="bright_yellow", block_quote="bright_magenta", code="bright_cyan", list_marker="bright_green"
)
DRACULA = _preset(
    "dracula", heading="bright_magenta", block_quote="bright_cyan", code="bright_yellow", list_marker="bright_green"
)
SOLARIZED = _preset(
    "solarized", heading="bright_cyan", block_quote="bright_green", code="bright_yellow", list_marker="bright_magenta"
)
NORD = _preset("nord", heading="bright_blue", block_quote="bright_cyan", code="bright_white", list_marker="bright_green")
AYU = _preset("ayu", heading="bright_yellow", block_quote="bright_magenta", code="bright_cyan", list_marker="bright_green")

THEMES: Mapping[str, Theme] = MappingProxyType(
    {theme.name: theme for theme in (GLOW, MONO, CATPPUCCIN, DRACULA, SOLARIZED, NORD, AYU)}
)

THEME_NAMES: list[str] = list(THEMES)


def get_theme(name: str | None = None) -> Theme:
    """Look up a theme preset by name.

    Parameters
    ----------
    name : str or None, default = None
        Preset name, case-insensitive. None selects the default preset.

    Returns
    -------
    Theme
        The preset

    Raises
    ------
    InvalidThemeError
        If no preset has that name

    Examples
    --------
        >>> get_theme("mono").is_monochrome
        True

    """
    key = (name or DEFAULT_THEME).strip().lower()
    try:
        return THEMES[key]
    except KeyError:
        raise InvalidThemeError(name or "", THEME_NAMES) from None


__all__ = ["Theme", "THEMES", "THEME_NAMES", "get_theme", "GLOW", "MONO"]
