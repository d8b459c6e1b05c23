"""Load 3a art files."""

import logging
from pathlib import Path

from art3a.codec.options import ParseResult, ReadOptions
from art3a.codec.parser import parse
from art3a.core.art import Art

logger = logging.getLogger("art3a")


def read(path: str | Path, options: ReadOptions | None = None) -> ParseResult:
    """
    Read a 3a file from disk, keeping any legacy warnings.

    OS errors from opening or reading the file propagate unchanged.
    """
    path = Path(path)
    result = parse(path.read_bytes(), options)
    for warning in result.warnings:
        logger.warning("%s: %s", path.name, warning)
    return result


def load(path: str | Path, options: ReadOptions | None = None) -> Art:
    """
    Load a 3a file from disk.

    Both the current and the legacy generation are accepted; legacy
    files are converted on a best-effort basis and each approximation
    is logged as a warning.
    """
    return read(path, options).art


def load_bytes(data: bytes, options: ReadOptions | None = None) -> Art:
    """Load 3a art from raw bytes."""
    result = parse(data, options)
    for warning in result.warnings:
        logger.warning("%s", warning)
    return result.art
