#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for emitter and parser options.

This module defines the foundation classes for the component-specific options
used by the Markdown adapter and the two emitters.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_help(cls) -> Dict[str, str]:
        """Return the help text of each field, keyed by field name.

        Fields without help metadata get a generic description.

        Examples
        --------
            >>> from mdpeek.options.terminal import TerminalRendererOptions
            >>> TerminalRendererOptions.field_help()["rule_width"]
            'Width of thematic breaks'

        """
        return {f.name: f.metadata.get("help", f"Configure {f.name}") for f in fields(cls)}


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all emitter options.

    Notes
    -----
    Subclasses should define emitter-specific options as frozen dataclass fields
    and call ``super().__post_init__()`` from their own validation.

    """

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses should define parser-specific options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        pass
