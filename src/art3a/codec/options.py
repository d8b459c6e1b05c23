"""Reader configuration and results."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from art3a.codec.version import FormatVersion
from art3a.core.constants import LEGACY_DEFAULT_DELAY_MS
from art3a.errors import LegacyFieldDropped

if TYPE_CHECKING:
    from art3a.core.art import Art


@dataclass(frozen=True)
class ReadOptions:
    """
    Options controlling how documents are decoded.

    Attributes:
        legacy_default_delay: Frame duration (ms) given to legacy
            documents that carry no timing information.
    """
    legacy_default_delay: int = LEGACY_DEFAULT_DELAY_MS

    def __post_init__(self) -> None:
        if self.legacy_default_delay <= 0:
            raise ValueError(
                f"legacy_default_delay must be positive, got {self.legacy_default_delay}"
            )


@dataclass
class ParseResult:
    """Result of decoding a document."""
    art: "Art"
    version: FormatVersion
    warnings: list[LegacyFieldDropped] = field(default_factory=list)

    @property
    def was_approximated(self) -> bool:
        """True if any field was dropped or replaced by a default."""
        return bool(self.warnings)
