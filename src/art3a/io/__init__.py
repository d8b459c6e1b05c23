"""File I/O for 3a art files."""

from art3a.io.reader import load, load_bytes, read
from art3a.io.writer import save

__all__ = ["load", "load_bytes", "read", "save"]
