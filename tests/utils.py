"""Test utilities for the mdpeek test suite.

This module provides helpers for building event streams by hand and for
inspecting terminal output.
"""

import re

from mdpeek.events import End, Start, Tag, Text

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def wrap(tag: Tag, *inner):
    """Surround events with the ``Start``/``End`` pair of ``tag``.

    Plain strings among ``inner`` become ``Text`` events and lists are
    spliced in, so nested structures read like the document they describe.
    """
    events = [Start(tag)]
    for item in inner:
        if isinstance(item, str):
            events.append(Text(item))
        elif isinstance(item, list):
            events.extend(item)
        else:
            events.append(item)
    events.append(End(tag))
    return events


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from terminal output."""
    return _ANSI_PATTERN.sub("", text)


def has_ansi(text: str) -> bool:
    """Return True if ``text`` contains any escape sequence."""
    return "\x1b[" in text
