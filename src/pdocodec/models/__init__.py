"""Pydantic models for pdocodec.

This module provides the decode result models and the validated query models
used for operator input.
"""

from __future__ import annotations

from .base import CodecModel
from .objects import DecodedField, DecodedObject
from .queries import PdoQuery, RdoQuery

__all__ = [
    "CodecModel",
    "DecodedField",
    "DecodedObject",
    "PdoQuery",
    "RdoQuery",
]
