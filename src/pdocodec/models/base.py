"""Base model class and pdocodec-specific Pydantic configuration.

This module provides the CodecModel class that the result and query models
inherit from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CodecModel(BaseModel):
    """Base class for all pdocodec models.

    Models are immutable value objects: a decode result or a validated query
    is created once per call and never changed afterwards.
    """

    model_config = ConfigDict(
        # Values are produced per call and never updated in place
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Enums keep their members on the model, values in dumps
        use_enum_values=False,
    )
