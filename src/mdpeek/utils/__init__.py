#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpeek/utils/__init__.py
"""Utility modules for the mdpeek package."""

from mdpeek.utils.escape import escape_attribute, escape_href, escape_text

__all__ = ["escape_attribute", "escape_href", "escape_text"]
