#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdpeek/options/terminal.py
"""Configuration options for terminal rendering.

This module defines options for the ANSI terminal emitter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpeek.constants import (
    DEFAULT_COLOR_SYSTEM,
    DEFAULT_LIST_INDENT,
    DEFAULT_RULE_WIDTH,
    DEFAULT_TABLE_INDENT,
    DEFAULT_THEME,
    ColorSystemName,
)
from mdpeek.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TerminalRendererOptions(BaseRendererOptions):
    """Configuration options for terminal rendering.

    Parameters
    ----------
    theme : str, default "glow"
        Name of the theme preset (see :data:`mdpeek.themes.THEME_NAMES`).
        A :class:`~mdpeek.themes.Theme` passed to the emitter directly wins
        over this name.
    color_system : {"standard", "256", "truecolor"}, default "standard"
        Color system used to encode styles as ANSI sequences.
    rule_width : int, default 40
        Width in characters of a thematic break.
    list_indent : int, default 2
        Indentation per nesting level for list markers.
    table_indent : int, default 1
        Left indentation of rendered tables.

    Examples
    --------
        >>> from mdpeek.options import TerminalRendererOptions
        >>> options = TerminalRendererOptions(theme="nord", rule_width=60)

    """

    theme: str = field(
        default=DEFAULT_THEME,
        metadata={"help": "Terminal color theme", "type": str, "importance": "core"},
    )
    color_system: ColorSystemName = field(
        default=DEFAULT_COLOR_SYSTEM,
        metadata={
            "help": "ANSI color system for styled output",
            "choices": ["standard", "256", "truecolor"],
            "importance": "advanced",
        },
    )
    rule_width: int = field(
        default=DEFAULT_RULE_WIDTH,
        metadata={"help": "Width of thematic breaks", "type": int, "importance": "advanced"},
    )
    list_indent: int = field(
        default=DEFAULT_LIST_INDENT,
        metadata={"help": "Indentation per nested list level", "type": int, "importance": "advanced"},
    )
    table_indent: int = field(
        default=DEFAULT_TABLE_INDENT,
        metadata={"help": "Left indentation of tables", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and the color system.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.color_system not in ("standard", "256", "truecolor"):
            raise ValueError(f"color_system must be 'standard', '256' or 'truecolor', got {self.color_system!r}")
        if self.rule_width <= 0:
            raise ValueError(f"rule_width must be positive, got {self.rule_width}")
        if self.list_indent < 0:
            raise ValueError(f"list_indent must be non-negative, got {self.list_indent}")
        if self.table_indent < 0:
            raise ValueError(f"table_indent must be non-negative, got {self.table_indent}")
