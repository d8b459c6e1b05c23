"""Detect which generation of the 3a format a document uses."""

import re
from enum import Enum

from art3a.core.constants import FORMAT_MAGIC, LEGACY_KEYS

# "@3a", "@3b", "@4a"... anything that looks like a format marker
VERSION_MARKER = re.compile(r'^@\d+[A-Za-z]\S*$')


class FormatVersion(Enum):
    """Format generation of a document."""
    CURRENT = "3a"
    LEGACY = "legacy"
    UNSUPPORTED = "unsupported"


def _first_line(data: bytes) -> str | None:
    if data.startswith(b'\xef\xbb\xbf'):
        data = data[3:]
    line = data.split(b'\n', 1)[0].rstrip(b'\r')
    try:
        return line.decode('utf-8')
    except UnicodeDecodeError:
        return None


def detect_version(data: bytes) -> FormatVersion:
    """
    Classify a document from its first line.

    The current format starts with the line "@3a". Other version
    markers are unsupported. Legacy documents have no marker and start
    with a header key, a tag line, or a comment.
    """
    line = _first_line(data)
    if not line:
        return FormatVersion.UNSUPPORTED
    stripped = line.strip()
    if stripped == FORMAT_MAGIC:
        return FormatVersion.CURRENT
    if VERSION_MARKER.match(stripped):
        return FormatVersion.UNSUPPORTED
    if line.startswith(('@', '#', '\t')):
        return FormatVersion.LEGACY
    key = stripped.split(None, 1)[0].lower() if stripped else ''
    if key in LEGACY_KEYS:
        return FormatVersion.LEGACY
    return FormatVersion.UNSUPPORTED
