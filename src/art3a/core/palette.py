"""Palette - ordered, append-only table of color pairs."""

from dataclasses import dataclass, field
from typing import Iterator

from art3a.core.color import ColorPair
from art3a.errors import IndexOutOfRange


@dataclass
class Palette:
    """
    An ordered sequence of distinct ColorPairs.

    Cells refer to colors by their index in the palette. Entries are
    only ever appended, so an index stays valid for the lifetime of the
    palette.
    """
    _entries: list[ColorPair] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Collapse duplicates from the initial entries
        entries = self._entries
        self._entries = []
        for pair in entries:
            self.search_or_create(pair)

    def search(self, pair: ColorPair) -> int | None:
        """Index of an entry equal to pair, or None."""
        try:
            return self._entries.index(pair)
        except ValueError:
            return None

    def search_or_create(self, pair: ColorPair) -> int:
        """Index of an entry equal to pair, appending it if missing."""
        index = self.search(pair)
        if index is None:
            self._entries.append(pair)
            index = len(self._entries) - 1
        return index

    def get(self, index: int) -> ColorPair:
        """
        Return the pair at index.

        Raises:
            IndexOutOfRange: If index is negative or past the end.
        """
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRange(
                f"palette index {index} out of range ({len(self._entries)} entries)",
                index=index,
                length=len(self._entries),
            )
        return self._entries[index]

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._entries)

    def copy(self) -> "Palette":
        return Palette(list(self._entries))

    def __getitem__(self, index: int) -> ColorPair:
        return self.get(index)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ColorPair]:
        return iter(self._entries)

    def __contains__(self, pair: object) -> bool:
        return pair in self._entries
