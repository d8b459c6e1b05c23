"""Exceptions and warnings raised by art3a."""


class ArtError(Exception):
    """Base class for every error raised by the library."""


class CodecError(ArtError):
    """A 3a document could not be decoded or encoded."""


class MalformedHeader(CodecError):
    """The header section is not well formed."""


class UnsupportedVersion(CodecError):
    """The input is not a 3a generation this library understands."""


class TruncatedData(CodecError):
    """The input ended before a complete document was read."""


class InvalidColorIndex(CodecError):
    """A cell refers to a colour that is not in the palette."""

    def __init__(self, message: str, name: str | int | None = None):
        super().__init__(message)
        self.name = name


class MalformedBody(CodecError):
    """The block or frame section is not well formed."""


class FrameSizeMismatch(MalformedBody):
    """Frames or rows do not share the same dimensions."""


class FrameOutOfRange(ArtError, IndexError):
    """A frame index does not name an existing frame."""

    def __init__(self, index: int, count: int):
        super().__init__(f"frame {index} out of range ({count} frames)")
        self.index = index
        self.count = count


class IndexOutOfRange(ArtError, IndexError):
    """A palette index or cell coordinate is out of range."""

    def __init__(self, message: str, index: int | None = None, length: int | None = None):
        super().__init__(message)
        self.index = index
        self.length = length


class ArtWarning(UserWarning):
    """Base class for non-fatal conditions reported by the library."""


class LegacyFieldDropped(ArtWarning):
    """A legacy document field was dropped or replaced by a default."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        return f"{self.field}: {self.args[0]}"
