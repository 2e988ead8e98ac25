#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/renderers/base.py
"""Base classes for event stream emitters.

This module defines the abstract base class that both emitters inherit from,
and the per-render state record they extend. The BaseEmitter provides a
consistent interface for turning a flat event stream into one output string:
it owns the options, the shared event iterator, footnote numbering and the
alt-text flattening loop used for images.

"""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from mdpeek.events import End, Event, Start
from mdpeek.exceptions import InvalidOptionsError
from mdpeek.options.base import BaseRendererOptions
from mdpeek.visitors import EventVisitor

logger = logging.getLogger(__name__)


@dataclass
class RenderState:
    """Mutable state owned by a single render call.

    Parameters
    ----------
    end_newline : bool, default = True
        Output currently ends at a line boundary (empty output does)
    in_non_writing_block : bool, default = False
        Inside a metadata block; text is dropped until its end
    footnote_numbers : dict of str to int
        Footnote name to number, assigned in order of first appearance

    """

    end_newline: bool = True
    in_non_writing_block: bool = False
    footnote_numbers: dict[str, int] = field(default_factory=dict)

    def footnote_number(self, name: str) -> int:
        """Return the number for footnote ``name``, assigning the next one if new."""
        number = self.footnote_numbers.get(name)
        if number is None:
            number = len(self.footnote_numbers) + 1
            self.footnote_numbers[name] = number
        return number

    def is_baseline(self) -> bool:
        """Return True when no block is open.

        Footnote numbers and ``end_newline`` describe what has been written,
        not what is open, so they are not part of the check.
        """
        return not self.in_non_writing_block


class BaseEmitter(EventVisitor):
    """Abstract base class for emitters.

    Subclasses implement every handler of :class:`EventVisitor`, plus
    :meth:`_new_state`, :meth:`_finish` and :meth:`_flatten_leaf`.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Emitter-specific options

    Examples
    --------
    Rendering a stream with a concrete emitter:

        >>> from mdpeek.events import End, Paragraph, Start, Text
        >>> from mdpeek.renderers.html import HtmlEmitter
        >>> HtmlEmitter().render([Start(Paragraph()), Text("hi"), End(Paragraph())])
        '<p>hi</p>\\n'

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the emitter with optional configuration."""
        self.options = options
        self._state: RenderState = self._new_state()
        self._events: Iterator[Event] = iter(())

    @property
    def state(self) -> RenderState:
        """State of the most recent (or current) render call."""
        return self._state

    def render(self, events: Iterable[Event]) -> str:
        """Drain ``events`` and return the rendered output.

        Parameters
        ----------
        events : iterable of Event
            Well-nested event stream in document order

        Returns
        -------
        str
            Rendered output

        """
        self._state = self._new_state()
        self._events = iter(events)
        count = 0
        for event in self._events:
            count += 1
            event.accept(self)
        self._events = iter(())
        output = self._finish()
        logger.debug("%s rendered %d top-level events into %d characters", type(self).__name__, count, len(output))
        return output

    @abstractmethod
    def _new_state(self) -> RenderState:
        """Create a fresh state record for one render call."""
        pass

    @abstractmethod
    def _finish(self) -> str:
        """Assemble the output once the stream is drained."""
        pass

    @abstractmethod
    def _flatten_leaf(self, event: Event) -> str:
        """Return the plain-text contribution of a leaf event inside alt text."""
        pass

    def _footnote_number(self, name: str) -> int:
        return self._state.footnote_number(name)

    def _flatten(self) -> str:
        """Consume events up to the ``End`` matching an already consumed ``Start``.

        Nested tags only move the depth counter; leaf events contribute the
        text returned by :meth:`_flatten_leaf`. Footnote references met here
        are numbered like everywhere else.

        Returns
        -------
        str
            Concatenated text of the consumed span

        """
        parts: list[str] = []
        depth = 1
        for event in self._events:
            if isinstance(event, Start):
                depth += 1
            elif isinstance(event, End):
                depth -= 1
                if depth == 0:
                    break
            else:
                parts.append(self._flatten_leaf(event))
        return "".join(parts)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, emitter_name: str) -> None:
        """Validate that options are of the correct type for this emitter.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        emitter_name : str
            Name of the emitter (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=emitter_name,
                expected_type=expected_type,
                received_type=type(options),
            )
