"""Version-dispatching entry points of the codec."""

import logging

from art3a.codec.current import CurrentFormatReader
from art3a.codec.legacy import LegacyFormatReader
from art3a.codec.options import ParseResult, ReadOptions
from art3a.codec.version import FormatVersion, detect_version
from art3a.core.art import Art
from art3a.errors import UnsupportedVersion

logger = logging.getLogger(__name__)


def parse(data: bytes, options: ReadOptions | None = None) -> ParseResult:
    """
    Decode a document of either supported generation.

    The generation is decided once from the first line and the matching
    reader handles the rest; the two readers share no state.

    Args:
        data: Raw bytes of the document
        options: Reader configuration (defaults to ReadOptions())

    Returns:
        ParseResult holding the art, the detected version and any
        warnings raised while approximating a legacy document.

    Raises:
        UnsupportedVersion: If the input is neither current nor legacy.
        CodecError: Any other decoding failure (no partial result).
    """
    version = detect_version(data)
    logger.debug("Detected format version: %s", version.value)

    if version is FormatVersion.CURRENT:
        art = CurrentFormatReader.from_bytes(data).read()
        return ParseResult(art, version)

    if version is FormatVersion.LEGACY:
        reader = LegacyFormatReader.from_bytes(data, options)
        art = reader.read()
        return ParseResult(art, version, reader.warnings)

    raise UnsupportedVersion("input is not a 3a document")


def loads(data: bytes, options: ReadOptions | None = None) -> Art:
    """Decode a document, discarding warnings."""
    return parse(data, options).art
