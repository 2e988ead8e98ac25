#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/utils/escape.py
"""HTML escaping utilities.

This module provides the three escapers used by the HTML emitter: one for
element text, one for quoted attribute values and one for URL-valued
attributes (``href``/``src``). Each copies runs of unchanged characters
verbatim and only materializes replacement text where an escape is needed.

"""

from __future__ import annotations

import re

_TEXT_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}

_ATTRIBUTE_ESCAPES = {
    **_TEXT_ESCAPES,
    '"': "&quot;",
    "'": "&#39;",
}

_TEXT_PATTERN = re.compile(r"[&<>]")
_ATTRIBUTE_PATTERN = re.compile(r"[&<>\"']")

# Everything outside ASCII letters, digits and -._~:/?#[]@!$()*+,;=% is unsafe
_HREF_UNSAFE_PATTERN = re.compile(rb"[^A-Za-z0-9\-._~:/?#\[\]@!$()*+,;=%]")

_HREF_SPECIAL_ESCAPES = {
    ord("&"): b"&amp;",
    ord("'"): b"&#x27;",
}


def escape_text(text: str) -> str:
    """Escape text for use as HTML element content.

    Parameters
    ----------
    text : str
        Raw text

    Returns
    -------
    str
        Text with ``&``, ``<`` and ``>`` replaced by named entities

    Examples
    --------
        >>> escape_text("a < b && c")
        'a &lt; b &amp;&amp; c'

    """
    if not text:
        return text
    return _TEXT_PATTERN.sub(lambda m: _TEXT_ESCAPES[m.group()], text)


def escape_attribute(text: str) -> str:
    """Escape text for use inside a quoted HTML attribute value.

    Parameters
    ----------
    text : str
        Raw attribute value

    Returns
    -------
    str
        Text escaped like :func:`escape_text`, with ``"`` and ``'`` also replaced

    Examples
    --------
        >>> escape_attribute('say "hi"')
        'say &quot;hi&quot;'

    """
    if not text:
        return text
    return _ATTRIBUTE_PATTERN.sub(lambda m: _ATTRIBUTE_ESCAPES[m.group()], text)


def _escape_href_byte(match: re.Match[bytes]) -> bytes:
    byte = match.group()[0]
    special = _HREF_SPECIAL_ESCAPES.get(byte)
    if special is not None:
        return special
    return b"%%%02X" % byte


def escape_href(url: str) -> str:
    """Escape a URL for use in an ``href`` or ``src`` attribute.

    The URL is processed as UTF-8 bytes. Safe bytes are copied as-is, ``&``
    becomes ``&amp;``, ``'`` becomes ``&#x27;`` and every other byte
    (including all non-ASCII bytes) is percent-encoded with uppercase hex.

    Parameters
    ----------
    url : str
        Raw URL

    Returns
    -------
    str
        Attribute-safe URL

    Examples
    --------
        >>> escape_href("https://example.com/a b?x=1&y='2'")
        'https://example.com/a%20b?x=1&amp;y=&#x27;2&#x27;'
        >>> escape_href("/café")
        '/caf%C3%A9'

    """
    if not url:
        return url
    escaped = _HREF_UNSAFE_PATTERN.sub(_escape_href_byte, url.encode("utf-8"))
    return escaped.decode("ascii")


__all__ = ["escape_text", "escape_attribute", "escape_href"]
