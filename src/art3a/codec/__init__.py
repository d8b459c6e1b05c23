"""Encoding/decoding for 3a documents."""

from art3a.codec.ansi_parser import AnsiLineParser, parse_ansi_line
from art3a.codec.current import CurrentFormatReader
from art3a.codec.legacy import LegacyFormatReader
from art3a.codec.options import ParseResult, ReadOptions
from art3a.codec.parser import loads, parse
from art3a.codec.version import FormatVersion, detect_version
from art3a.codec.writer import CurrentFormatWriter, dumps

__all__ = [
    "AnsiLineParser",
    "parse_ansi_line",
    "CurrentFormatReader",
    "LegacyFormatReader",
    "CurrentFormatWriter",
    "ParseResult",
    "ReadOptions",
    "FormatVersion",
    "detect_version",
    "parse",
    "loads",
    "dumps",
]
