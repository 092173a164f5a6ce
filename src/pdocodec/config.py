"""Output configuration for the pdocodec command line.

The codec itself has no global settings. Everything that varies per
invocation (how chatty to be, how to render results, which AVS range an
ambiguous capability leaf belongs to) is carried in an explicit
configuration value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .codec.classify import PdoVariant


@dataclass
class OutputConfig:
    """Configuration for rendering codec results.

    Attributes:
        verbosity: 0 logs warnings only, 1 adds info, 2 and above add debug
            records from the codec (empty blocks, unparsed attributes)
        json: Render decoded objects as JSON instead of ``name=value`` lines
        avs_variant: Variant used for an ``adjustable_supply`` capability
            leaf, which does not name its power range. SPR_AVS or EPR_AVS.

    Examples:
        ```python
        from pdocodec.config import OutputConfig

        config = OutputConfig(verbosity=2, json=True)
        config.configure_logging()
        ```
    """

    verbosity: int = 0
    json: bool = False
    avs_variant: PdoVariant = PdoVariant.EPR_AVS

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.verbosity < 0:
            raise ValueError(f"verbosity must be >= 0, got {self.verbosity}")

        if self.avs_variant not in (PdoVariant.SPR_AVS, PdoVariant.EPR_AVS):
            raise ValueError(f"avs_variant must be SPR_AVS or EPR_AVS, got {self.avs_variant}")

    @property
    def log_level(self) -> int:
        if self.verbosity >= 2:
            return logging.DEBUG
        if self.verbosity == 1:
            return logging.INFO
        return logging.WARNING

    def configure_logging(self) -> None:
        """Send log records to stderr at the configured level."""
        logging.basicConfig(
            level=self.log_level,
            format="%(name)s: %(levelname)s: %(message)s",
        )
