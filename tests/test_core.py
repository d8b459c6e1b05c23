"""Tests for core data structures (no external files needed)."""

from typing import get_type_hints

import pytest

from art3a.core.art import Art
from art3a.core.cell import CLEAR, KEEP, Cell, SetColor
from art3a.core.chars import check_char, check_glyph, normalize_text
from art3a.core.color import Color, ColorMode, ColorPair
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.core.palette import Palette
from art3a.errors import FrameOutOfRange, FrameSizeMismatch, IndexOutOfRange


class TestCell:
    """Tests for Cell dataclass."""

    def test_default_cell(self) -> None:
        cell = Cell()
        assert cell.char == ' '
        assert cell.color is None

    def test_with_helpers(self) -> None:
        cell = Cell('X', 2)
        assert cell.with_char('Y') == Cell('Y', 2)
        assert cell.with_color(None) == Cell('X')
        assert cell == Cell('X', 2)

    def test_is_default(self) -> None:
        assert Cell().is_default() is True
        assert Cell(char='X').is_default() is False
        assert Cell(color=0).is_default() is False


class TestColorEdit:
    """Tests for the tri-state color edits."""

    def test_keep(self) -> None:
        assert KEEP.apply(Cell('a', 3)) == Cell('a', 3)

    def test_clear(self) -> None:
        assert CLEAR.apply(Cell('a', 3)) == Cell('a')

    def test_set(self) -> None:
        assert SetColor(1).apply(Cell('a', 3)) == Cell('a', 1)
        assert SetColor(1).apply(Cell('a')) == Cell('a', 1)


class TestColor:
    """Tests for Color."""

    def test_parse_names(self) -> None:
        assert Color.parse("red") == Color.RED
        assert Color.parse("bright-blue") == Color.BRIGHT_BLUE
        assert Color.parse("Gray") == Color.BRIGHT_BLACK
        assert Color.parse("default") == Color.NONE

    def test_parse_numeric(self) -> None:
        assert Color.parse("196") == Color(ColorMode.EXTENDED_256, 196)
        assert Color.parse("ff8000") == Color(ColorMode.TRUE_COLOR, (255, 128, 0))
        # Six digits read as hex, not as a palette index
        assert Color.parse("000000").mode == ColorMode.TRUE_COLOR

    def test_parse_invalid(self) -> None:
        with pytest.raises(ValueError):
            Color.parse("purple")
        with pytest.raises(ValueError):
            Color.parse("256")

    def test_text_form(self) -> None:
        assert str(Color.RED) == "red"
        assert str(Color.from_256(42)) == "42"
        assert str(Color.from_rgb(1, 2, 255)) == "0102ff"
        assert str(Color.NONE) == ""

    def test_from_sgr(self) -> None:
        assert Color.from_sgr(31) == Color.RED
        assert Color.from_sgr(44) == Color.BLUE
        assert Color.from_sgr(91) == Color.BRIGHT_RED
        assert Color.from_sgr(39) == Color.NONE
        with pytest.raises(ValueError):
            Color.from_sgr(12)

    def test_from_builtin(self) -> None:
        assert Color.from_builtin('1') == Color.RED
        assert Color.from_builtin('c') == Color.BRIGHT_BLUE
        assert Color.from_builtin('z') == Color.NONE

    def test_to_ansi(self) -> None:
        assert Color.RED.to_ansi() == "\x1b[31m"
        assert Color.RED.to_ansi(foreground=False) == "\x1b[41m"
        assert Color.BRIGHT_BLUE.to_ansi() == "\x1b[94m"
        assert Color.from_256(196).to_ansi() == "\x1b[38;5;196m"
        assert Color.from_rgb(1, 2, 3).to_ansi(False) == "\x1b[48;2;1;2;3m"
        assert Color.NONE.to_ansi() == "\x1b[39m"

    def test_range_checks(self) -> None:
        with pytest.raises(ValueError):
            Color.from_16(16)
        with pytest.raises(ValueError):
            Color.from_rgb(0, 0, 300)


class TestColorPair:
    """Tests for ColorPair."""

    def test_parse(self) -> None:
        pair = ColorPair.parse("fg:red bg:black")
        assert pair == ColorPair(Color.RED, Color.BLACK)
        assert str(pair) == "fg:red bg:black"

    def test_parse_one_channel(self) -> None:
        assert ColorPair.parse("bg:blue") == ColorPair(bg=Color.BLUE)
        assert ColorPair.parse("").is_default

    def test_parse_rejects_duplicates(self) -> None:
        with pytest.raises(ValueError):
            ColorPair.parse("fg:red fg:blue")
        with pytest.raises(ValueError):
            ColorPair.parse("red")

    def test_structural_equality(self) -> None:
        assert ColorPair(Color.RED) == ColorPair(Color.from_16(1))
        assert hash(ColorPair(Color.RED)) == hash(ColorPair(Color.from_16(1)))

    def test_invert_and_ansi(self) -> None:
        pair = ColorPair(Color.RED, Color.BLUE)
        assert pair.invert() == ColorPair(Color.BLUE, Color.RED)
        assert pair.to_ansi() == "\x1b[31m\x1b[44m"


class TestPalette:
    """Tests for Palette."""

    def test_search_or_create_dedups(self) -> None:
        palette = Palette()
        a = palette.search_or_create(ColorPair(Color.RED, Color.BLACK))
        b = palette.search_or_create(ColorPair.parse("fg:red bg:black"))
        assert a == b == 0
        assert len(palette) == 1

    def test_new_entries_append(self) -> None:
        palette = Palette()
        palette.search_or_create(ColorPair(Color.RED))
        assert palette.search_or_create(ColorPair(Color.BLUE)) == 1
        assert len(palette) == 2
        assert list(palette) == [ColorPair(Color.RED), ColorPair(Color.BLUE)]

    def test_initial_duplicates_collapse(self) -> None:
        palette = Palette([ColorPair(Color.RED), ColorPair(Color.RED), ColorPair(Color.BLUE)])
        assert len(palette) == 2

    def test_search_missing(self) -> None:
        assert Palette().search(ColorPair(Color.RED)) is None

    def test_get_out_of_range(self) -> None:
        palette = Palette([ColorPair(Color.RED)])
        with pytest.raises(IndexOutOfRange) as exc:
            palette.get(1)
        assert exc.value.index == 1
        assert exc.value.length == 1
        with pytest.raises(IndexError):
            palette[-1]


class TestChars:
    """Tests for the character policy."""

    def test_spaces_normalized(self) -> None:
        assert check_char('\t') == ' '
        assert check_char('\u00a0') == ' '

    def test_rejected(self) -> None:
        assert check_char('\x07') is None
        assert check_char('\u200b') is None
        assert check_char('\u0301') is None

    def test_allowed(self) -> None:
        assert check_char('█') == '█'
        assert normalize_text("a\x1bb\tc") == "ab c"

    def test_check_glyph(self) -> None:
        check_glyph('x')
        check_glyph(' ')
        for char in ("", "xy", "\t", "\x00", "\u0301"):
            with pytest.raises(ValueError):
                check_glyph(char)


class TestFrame:
    """Tests for Frame."""

    def test_new_frame(self) -> None:
        frame = Frame(3, 2)
        assert frame.size == (3, 2)
        assert frame.duration == 50
        assert frame.text() == ["   ", "   "]

    def test_get_set(self) -> None:
        frame = Frame(3, 2)
        frame[1, 1] = Cell('X', 0)
        assert frame.get(1, 1) == Cell('X', 0)
        assert frame.color_indices() == {0}

    def test_out_of_bounds(self) -> None:
        frame = Frame(3, 2)
        with pytest.raises(IndexOutOfRange):
            frame.get(3, 0)
        with pytest.raises(IndexOutOfRange):
            frame.set(0, -1, Cell())

    def test_print_clips_right(self) -> None:
        frame = Frame(5, 1)
        frame.print(3, 0, "abcd")
        assert frame.text() == ["   ab"]

    def test_print_clips_left(self) -> None:
        frame = Frame(5, 1)
        frame.print(-1, 0, "xyz")
        assert frame.text() == ["yz   "]

    def test_print_outside_is_noop(self) -> None:
        frame = Frame(5, 1)
        frame.print(5, 0, "abc")
        frame.print(0, 1, "abc")
        assert frame.text() == ["     "]

    def test_print_drops_controls(self) -> None:
        frame = Frame(5, 1)
        frame.print(0, 0, "a\x07b\tc")
        assert frame.text() == ["ab c "]

    def test_fill_rect_clips(self) -> None:
        frame = Frame(3, 3)
        frame.fill_rect(1, 1, 5, 5, Cell('#'))
        assert frame.text() == ["   ", " ##", " ##"]

    def test_shift(self) -> None:
        frame = Frame(3, 1)
        frame.print(0, 0, "abc")
        frame.shift(1, 0)
        assert frame.text() == [" ab"]
        frame.shift(-2, 0, Cell('.'))
        assert frame.text() == ["b.."]

    def test_copy_is_independent(self) -> None:
        frame = Frame(2, 1)
        copy = frame.copy()
        copy.print(0, 0, "x")
        assert frame.text() == ["  "]
        assert copy != frame

    def test_from_rows_rejects_ragged(self) -> None:
        with pytest.raises(ValueError):
            Frame.from_rows([[Cell()], [Cell(), Cell()]])

    def test_annotations_resolve_to_builtins(self) -> None:
        assert get_type_hints(Frame.color_indices)["return"] == set[int]
        assert Frame(2, 1).color_indices() == set()

    def test_rejects_bad_glyphs(self) -> None:
        frame = Frame(2, 1)
        for char in ("", "ab", "\x01", "\t", "\u200b"):
            with pytest.raises(ValueError):
                frame.set(0, 0, Cell(char))
            with pytest.raises(ValueError):
                frame.fill(Cell(char))
            with pytest.raises(ValueError):
                frame.fill_rect(0, 0, 1, 1, Cell(char))
        assert frame.text() == ["  "]

    def test_zero_duration_is_default(self) -> None:
        assert Frame(1, 1, duration=0).duration == 50
        assert Frame(1, 1, duration=120).duration == 120

    def test_negative_duration(self) -> None:
        with pytest.raises(ValueError):
            Frame(1, 1, duration=-5)


class TestHeader:
    """Tests for Header."""

    def test_tags(self) -> None:
        header = Header()
        header.add_tag("#demo")
        header.add_tag("demo")
        header.add_tag("cat")
        assert header.tags == ["demo", "cat"]
        header.remove_tag("demo")
        assert header.tags == ["cat"]

    def test_title_line(self) -> None:
        assert Header().title_line() == ""
        assert Header(title="Cat").title_line() == "Cat"
        header = Header(title="Cat", authors=["ann"], orig_authors=["bob"])
        assert header.title_line() == "Cat by bob, ann"
        assert Header(authors=["ann"]).title_line() == "art by ann"


class TestArtPrint:
    """Tests for Art.print and the palette invariant."""

    def test_scenario(self, blank_art: Art) -> None:
        """Printing into one frame leaves the others untouched."""
        index = blank_art.search_or_create_color(ColorPair(Color.RED, Color.BLACK))
        blank_art.print(1, 2, 0, "hi", SetColor(index))

        assert blank_art.get_cell(1, 2, 0) == Cell('h', index)
        assert blank_art.get_cell(1, 3, 0) == Cell('i', index)
        assert blank_art.get_cell(1, 4, 0) == Cell()
        assert blank_art.frames[0] == Frame(10, 2)
        assert blank_art.frames[2] == Frame(10, 2)
        assert len(blank_art.palette) == 1

    def test_keep_preserves_colors(self, colored_art: Art) -> None:
        colored_art.print(0, 0, 0, "zz")
        assert colored_art.get_cell(0, 0, 0) == Cell('z', 0)
        assert colored_art.get_cell(0, 1, 0) == Cell('z', 0)

    def test_clear_removes_colors(self, colored_art: Art) -> None:
        colored_art.print(0, 0, 1, "q", CLEAR)
        assert colored_art.get_cell(0, 0, 1) == Cell('q')
        assert colored_art.get_cell(0, 1, 1) == Cell('d', 1)

    def test_set_replaces_colors(self, colored_art: Art) -> None:
        colored_art.print(0, 0, 0, "ab", SetColor(1))
        assert colored_art.get_cell(0, 0, 0).color == 1
        assert colored_art.get_cell(0, 1, 0).color == 1

    def test_bad_color_aborts(self, colored_art: Art) -> None:
        before = colored_art.copy()
        with pytest.raises(IndexOutOfRange):
            colored_art.print(0, 0, 0, "zz", SetColor(2))
        assert colored_art == before

    def test_bad_frame(self, blank_art: Art) -> None:
        with pytest.raises(FrameOutOfRange) as exc:
            blank_art.print(3, 0, 0, "x")
        assert exc.value.index == 3
        assert exc.value.count == 3

    def test_invariant_after_prints(self, colored_art: Art) -> None:
        colored_art.print(1, -2, 1, "hello", SetColor(0))
        colored_art.print(0, 3, 0, "world", CLEAR)
        colored_art.print(1, 9, 9, "nowhere", SetColor(1))
        for frame in colored_art.frames:
            assert all(i < len(colored_art.palette) for i in frame.color_indices())

    def test_set_cell_checks_color(self, blank_art: Art) -> None:
        with pytest.raises(IndexOutOfRange):
            blank_art.set_cell(0, 0, 0, Cell('x', 0))

    def test_set_cell_checks_glyph(self, blank_art: Art) -> None:
        for char in ("", "ab", "\x01", "\t"):
            with pytest.raises(ValueError):
                blank_art.set_cell(0, 0, 0, Cell(char))
        assert blank_art.get_cell(0, 0, 0) == Cell()

    def test_print_ansi(self, blank_art: Art) -> None:
        blank_art.print_ansi(0, 0, 0, "\x1b[31mab\x1b[0mc\x1b[1;44md")
        assert blank_art.frame(0).row_text(0).startswith("abcd")
        red = blank_art.palette.search(ColorPair(Color.RED))
        blue_bg = blank_art.palette.search(ColorPair(bg=Color.BLUE))
        assert blank_art.get_cell(0, 0, 0).color == red
        assert blank_art.get_cell(0, 2, 0).color is None
        assert blank_art.get_cell(0, 3, 0).color == blue_bg

    def test_new_rejects_colored_fill(self) -> None:
        with pytest.raises(IndexOutOfRange):
            Art.new(1, 2, 2, Cell('x', 0))


class TestArtFrames:
    """Tests for frame list editing."""

    def _numbered(self, count: int) -> Art:
        art = Art.new(frames=count, width=1, height=1)
        for i in range(count):
            art.print(i, 0, 0, str(i))
        return art

    def _order(self, art: Art) -> str:
        return ''.join(f.row_text(0) for f in art.frames)

    def test_add_and_dup(self) -> None:
        art = self._numbered(2)
        art.add_frame()
        art.dup_frame(0)
        assert self._order(art) == "0011"

    def test_insert_and_remove(self) -> None:
        art = self._numbered(3)
        frame = Frame(1, 1)
        frame.print(0, 0, "x")
        art.insert_frame(1, frame)
        assert self._order(art) == "0x12"
        removed = art.remove_frame(0)
        assert removed.row_text(0) == "0"
        assert self._order(art) == "x12"

    def test_insert_rejects_dangling_colors(self) -> None:
        art = self._numbered(1)
        frame = Frame(1, 1)
        frame[0, 0] = Cell('x', 4)
        with pytest.raises(IndexOutOfRange):
            art.insert_frame(0, frame)
        assert len(art) == 1

    def test_reorder(self) -> None:
        art = self._numbered(4)
        art.swap_frames(0, 3)
        assert self._order(art) == "3120"
        art.reverse_frames()
        assert self._order(art) == "0213"
        art.rotate_frames(1)
        assert self._order(art) == "2130"

    def test_slice_and_dedup(self) -> None:
        art = self._numbered(4)
        art.slice_frames(1, 2)
        assert self._order(art) == "12"
        art.dup_frame(0)
        art.dedup_frames()
        assert self._order(art) == "12"

    def test_out_of_range(self) -> None:
        art = self._numbered(2)
        with pytest.raises(FrameOutOfRange):
            art.remove_frame(2)
        with pytest.raises(FrameOutOfRange):
            art.swap_frames(0, 5)

    def test_shift_all_frames(self) -> None:
        art = self._numbered(2)
        art.shift(1, 0, Cell('.'))
        assert self._order(art) == ".."


class TestPins:
    """Tests for pinning text or colors across frames."""

    def test_pin_text(self, colored_art: Art) -> None:
        colored_art.pin_text(0)
        assert colored_art.frames[1].text() == colored_art.frames[0].text()
        # Colors of the other frame survive
        assert colored_art.get_cell(1, 2, 0).color == 1
        assert colored_art.pinned() == (True, False)

    def test_pin_color(self, colored_art: Art) -> None:
        colored_art.pin_color(1)
        assert colored_art.frames[0].colors() == colored_art.frames[1].colors()
        assert colored_art.pinned() == (False, True)

    def test_pin_size_mismatch(self, colored_art: Art) -> None:
        colored_art.add_frame(Frame(2, 2))
        with pytest.raises(FrameSizeMismatch):
            colored_art.pin_text(0)

    def test_single_frame_not_pinned(self) -> None:
        assert Art.new(1, 2, 2).pinned() == (False, False)


class TestDurations:
    """Tests for frame timing."""

    def test_defaults(self, blank_art: Art) -> None:
        assert blank_art.durations() == [50, 50, 50]
        assert blank_art.duration() == pytest.approx(0.15)

    def test_set_duration(self, blank_art: Art) -> None:
        blank_art.set_duration(1, 400)
        blank_art.set_duration(2, 0)
        assert blank_art.durations() == [50, 400, 50]

    def test_negative_rejected(self, blank_art: Art) -> None:
        with pytest.raises(ValueError):
            blank_art.set_all_durations(-1)

    def test_has_color(self, blank_art: Art, colored_art: Art) -> None:
        assert blank_art.has_color() is False
        assert colored_art.has_color() is True
        colored_art.header.colors = False
        assert colored_art.has_color() is False
