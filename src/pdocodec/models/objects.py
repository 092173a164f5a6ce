"""Decode result models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from ..codec.fields import FieldName
from ..utils.literals import WORD_MAX, format_word
from .base import CodecModel


class DecodedField(CodecModel):
    """One named field of a decoded word.

    Attributes:
        name: Field name
        raw_bits: Field bits as extracted from the word
        display_value: Scaled value ("5.00") or the raw integer for flags
    """

    name: FieldName
    raw_bits: int = Field(ge=0)
    display_value: str

    def as_line(self) -> str:
        return f"{self.name.value}={self.display_value}\n"


class DecodedObject(CodecModel):
    """A decoded PDO or RDO.

    Attributes:
        kind: "pdo" or "rdo"
        word: The decoded 32-bit word
        variant: PDO variant or RDO reference the word was decoded as
        fields: Decoded fields in table order; empty if the word could not
            be decoded
    """

    kind: Literal["pdo", "rdo"]
    word: int = Field(ge=0, le=WORD_MAX)
    variant: str
    fields: List[DecodedField] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.fields

    def names(self) -> List[str]:
        return [field.name.value for field in self.fields]

    def get(self, name: Union[FieldName, str]) -> Optional[DecodedField]:
        """Return the first field with the given name, or None."""
        key = name.value if isinstance(name, FieldName) else name
        for field in self.fields:
            if field.name.value == key:
                return field
        return None

    def as_text(self) -> str:
        """Render the fields as ``name=value`` lines."""
        return "".join(field.as_line() for field in self.fields)

    def as_dict(self) -> Dict[str, Any]:
        """Plain-data form for JSON output."""
        return {
            "kind": self.kind,
            "raw": format_word(self.word),
            "variant": self.variant,
            "fields": {field.name.value: field.display_value for field in self.fields},
        }
