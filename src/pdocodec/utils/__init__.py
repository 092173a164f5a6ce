"""Utility functions for pdocodec.

This module provides parsing and rendering of 32-bit literals.
"""

from __future__ import annotations

from .literals import WORD_MAX, format_word, parse_word

__all__ = [
    "WORD_MAX",
    "format_word",
    "parse_word",
]
