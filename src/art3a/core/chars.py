"""Character policy for cell glyphs."""

# Code points stored as a plain space
_SPACES = frozenset(
    [0x09, 0x20, 0xA0, 0x1680, 0x180E, 0x202F, 0x205F, 0x3000]
    + list(range(0x2000, 0x200B))
)

# Code points (inclusive ranges) that never occupy a cell
_REJECTED_RANGES = (
    (0x0000, 0x001F),  # C0 controls
    (0x007F, 0x007F),  # DEL
    (0x0300, 0x036F),  # combining diacritical marks
    (0x200B, 0x200F),  # zero-width space, joiners, direction marks
    (0x202A, 0x202E),  # bidi embeddings and overrides
    (0x2066, 0x2069),  # bidi isolates
    (0xD800, 0xDFFF),  # surrogates
    (0xFE00, 0xFE0F),  # variation selectors
    (0xFEFF, 0xFEFF),  # byte order mark
)
_REJECTED_C1 = frozenset((0x81, 0x8D, 0x8F, 0x90, 0x9D))


def check_char(char: str) -> str | None:
    """
    Return the stored form of a character, or None if it is disallowed.

    Whitespace variants become a plain space. Control, combining,
    zero-width and bidirectional-control code points are rejected.
    """
    cp = ord(char)
    if cp in _SPACES:
        return ' '
    if cp in _REJECTED_C1:
        return None
    for low, high in _REJECTED_RANGES:
        if low <= cp <= high:
            return None
    return char


def is_allowed(char: str) -> bool:
    return check_char(char) is not None


def normalize_text(text: str) -> str:
    """Apply check_char to every character, dropping rejected ones."""
    return ''.join(c for c in map(check_char, text) if c is not None)


def check_glyph(char: str) -> None:
    """
    Check that a cell glyph is stored exactly as given.

    Raises:
        ValueError: If `char` is not one allowed code point, or would be
            stored as a different character.
    """
    if len(char) != 1 or check_char(char) != char:
        raise ValueError(f"Invalid cell glyph: {char!r}")
