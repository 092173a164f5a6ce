"""Validated decode requests built from operator input.

The query models run literal words and reference codes through the same
checks whether they arrive as ints (from Python callers) or as text (from
the command line).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator

from ..codec.classify import PdoVariant, RdoReference, rdo_reference_from_code
from ..exceptions import LiteralError
from ..utils.literals import WORD_MAX, parse_word
from .base import CodecModel


def _word_before(value: Any) -> Any:
    if isinstance(value, str):
        return parse_word(value)
    return value


class PdoQuery(CodecModel):
    """Request to decode one PDO.

    Attributes:
        word: PDO value
        first: True if the PDO is at object position 1
        source: True for a source capability, False for a sink capability
        variant: Variant override; classified from the word when None
    """

    word: int = Field(ge=0, le=WORD_MAX)
    first: bool = False
    source: bool = True
    variant: Optional[PdoVariant] = None

    @field_validator("word", mode="before")
    @classmethod
    def _parse_word(cls, value: Any) -> Any:
        return _word_before(value)

    @classmethod
    def from_literal(cls, literal: str, **kwargs: Any) -> PdoQuery:
        """Build a query from a command line literal.

        Raises:
            LiteralError: If the literal is not a valid 32-bit word
        """
        try:
            return cls(word=literal, **kwargs)
        except ValidationError as e:
            raise LiteralError(literal, _reason(e), "PDO decode") from e


class RdoQuery(CodecModel):
    """Request to decode one RDO.

    Attributes:
        word: RDO value
        reference: Type of the PDO the request refers to; a single-letter
            code (F, B, V, P, A, E, S) is accepted
    """

    word: int = Field(ge=0, le=WORD_MAX)
    reference: RdoReference

    @field_validator("word", mode="before")
    @classmethod
    def _parse_word(cls, value: Any) -> Any:
        return _word_before(value)

    @field_validator("reference", mode="before")
    @classmethod
    def _parse_reference(cls, value: Any) -> Any:
        if isinstance(value, str) and len(value.strip()) == 1:
            return rdo_reference_from_code(value)
        return value

    @classmethod
    def from_literal(cls, literal: str, reference: Any) -> RdoQuery:
        """Build a query from a command line literal and reference code.

        Raises:
            LiteralError: If the literal or the reference code is invalid
        """
        try:
            return cls(word=literal, reference=reference)
        except ValidationError as e:
            raise LiteralError(literal, _reason(e), f"RDO decode (reference {reference})") from e


def _reason(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
