"""Tests for best-effort reading of legacy documents."""

import logging

import pytest

from art3a.codec.legacy import LegacyColorMode, translate_color
from art3a.codec.options import ReadOptions
from art3a.codec.parser import loads, parse
from art3a.codec.version import FormatVersion
from art3a.codec.writer import dumps
from art3a.core.color import Color, ColorPair
from art3a.errors import ArtWarning, LegacyFieldDropped, MalformedHeader
from art3a.io.reader import load_bytes


def legacy(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


class TestLegacyRead:
    """Tests for the legacy reader."""

    def test_missing_timing(self, legacy_bytes: bytes) -> None:
        """No delay line: default duration and a warning, not an error."""
        result = parse(legacy_bytes)
        assert result.version is FormatVersion.LEGACY
        assert result.art.durations() == [50, 50]
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, LegacyFieldDropped)
        assert isinstance(warning, ArtWarning)
        assert warning.field == "delay"
        assert result.was_approximated is True

    def test_configured_default_delay(self, legacy_bytes: bytes) -> None:
        result = parse(legacy_bytes, ReadOptions(legacy_default_delay=120))
        assert result.art.durations() == [120, 120]

    def test_frames_and_colors(self, legacy_bytes: bytes) -> None:
        art = loads(legacy_bytes)
        assert art.header.title == "Old"
        assert [f.text() for f in art.frames] == [["ab"], ["ba"]]
        # Legacy codes swap red and blue
        assert art.resolve(art.get_cell(0, 0, 0)) == ColorPair(fg=Color.BLUE)
        assert art.resolve(art.get_cell(0, 1, 0)) == ColorPair(fg=Color.RED)
        assert art.resolve(art.get_cell(1, 0, 0)) == ColorPair(fg=Color.RED)
        assert len(art.palette) == 2

    def test_delay_given(self) -> None:
        result = parse(legacy("width 1", "height 1", "delay 200", "", "a", "b"))
        assert result.warnings == []
        assert result.art.durations() == [200, 200]

    def test_full_color_mode(self) -> None:
        art = loads(legacy("width 1", "height 1", "colors full", "delay 50", "", "a14"))
        assert art.resolve(art.get_cell(0, 0, 0)) == ColorPair(Color.BLUE, Color.RED)

    def test_background_only(self) -> None:
        art = loads(legacy("width 2", "height 1", "colors bg", "delay 50", "", "ab_2"))
        assert art.get_cell(0, 0, 0).color is None
        assert art.resolve(art.get_cell(0, 1, 0)) == ColorPair(bg=Color.GREEN)

    def test_unknown_color_code(self) -> None:
        result = parse(legacy("width 2", "height 1", "colors fg", "delay 50", "", "abz1"))
        assert [w.field for w in result.warnings] == ["colors"]
        assert result.art.get_cell(0, 0, 0).color is None
        assert result.art.get_cell(0, 1, 0).color is not None

    def test_trailing_data(self) -> None:
        result = parse(legacy("width 2", "height 2", "delay 50", "", "ab", "cd", "ef"))
        assert len(result.art) == 1
        assert [w.field for w in result.warnings] == ["body"]

    def test_bad_values_warn(self) -> None:
        result = parse(legacy(
            "width 1", "height 1", "loop maybe", "preview first",
            "colors rainbow", "delay soon", "", "a",
        ))
        fields = [w.field for w in result.warnings]
        assert fields == ["loop", "preview", "colors", "delay", "delay"]
        assert result.art.header.loop is None

    def test_comments_and_tags(self) -> None:
        art = loads(legacy(
            "\tfirst note", "@second note", "#old #demo", "width 2", "height 1", "delay 50",
            "", "ab\tignored",
        ))
        assert art.header.comments == ["first note", "second note"]
        assert art.header.tags == ["old", "demo"]
        assert art.frames[0].text() == ["ab"]

    def test_missing_size(self) -> None:
        with pytest.raises(MalformedHeader):
            loads(legacy("title x", "", "ab"))

    def test_upgrade_on_write(self, legacy_bytes: bytes) -> None:
        art = loads(legacy_bytes)
        data = dumps(art)
        assert data.startswith(b"@3a\n")
        result = parse(data)
        assert result.version is FormatVersion.CURRENT
        assert result.art == art

    def test_warnings_logged(self, legacy_bytes: bytes, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="art3a"):
            load_bytes(legacy_bytes)
        assert any("delay" in record.getMessage() for record in caplog.records)


class TestLegacyColors:
    """Tests for legacy color translation."""

    def test_translation(self) -> None:
        assert translate_color('1') == Color.BLUE
        assert translate_color('4') == Color.RED
        assert translate_color('3') == Color.CYAN
        assert translate_color('6') == Color.YELLOW
        assert translate_color('2') == Color.GREEN
        assert translate_color('C') == Color.BRIGHT_RED

    def test_no_color(self) -> None:
        assert translate_color('_') == Color.NONE
        assert translate_color(' ') == Color.NONE

    def test_unknown(self) -> None:
        assert translate_color('z') is None

    def test_modes(self) -> None:
        assert LegacyColorMode.FULL.has_fg and LegacyColorMode.FULL.has_bg
        assert not LegacyColorMode.BG.has_fg
        assert not LegacyColorMode.NONE.has_bg
