"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Optional

import pytest

from art3a import Art, Color, ColorPair, SetColor

# A small two-frame document in the current format
SAMPLE_3A = (
    "@3a\n"
    "title Blink\n"
    "author ann\n"
    "delay 100 1:300\n"
    "loop yes\n"
    "col r fg:red bg:black\n"
    "col g fg:bright-green\n"
    "#demo #blink\n"
    "\n"
    "@body\n"
    "abcrg_\n"
    "defgg_\n"
    "\n"
    "cba_r_\n"
    "fed___\n"
    "\n"
).encode("utf-8")

# A legacy document without a format marker or frame timing
SAMPLE_LEGACY = (
    "title Old\n"
    "width 2\n"
    "height 1\n"
    "colors fg\n"
    "\n"
    "ab14\n"
    "ba41\n"
).encode("utf-8")


def get_test_art_dir() -> Optional[Path]:
    """
    Get external art directory from the environment.

    Set ART3A_TEST_DIR to a directory holding .3a files to run the
    external tests.
    """
    if env_path := os.environ.get("ART3A_TEST_DIR"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path
    return None


@pytest.fixture(scope="session")
def test_art_dir() -> Path:
    """Fixture providing external art directory, skips if unavailable."""
    art_dir = get_test_art_dir()
    if art_dir is None:
        pytest.skip("External art directory not found. Set ART3A_TEST_DIR")
    return art_dir


@pytest.fixture(scope="session")
def sample_3a_files(test_art_dir: Path) -> list[Path]:
    """Get list of .3a files for testing."""
    files = list(test_art_dir.glob("*.3a"))
    if not files:
        pytest.skip(f"No .3a files found in {test_art_dir}")
    # Limit to avoid very slow tests
    return sorted(files)[:50]


@pytest.fixture
def sample_bytes() -> bytes:
    return SAMPLE_3A


@pytest.fixture
def legacy_bytes() -> bytes:
    return SAMPLE_LEGACY


@pytest.fixture
def blank_art() -> Art:
    """Three empty 10x2 frames and an empty palette."""
    return Art.new(frames=3, width=10, height=2)


@pytest.fixture
def colored_art() -> Art:
    """Two 4x2 frames using two palette entries."""
    art = Art.new(frames=2, width=4, height=2)
    red = art.search_or_create_color(ColorPair(Color.RED, Color.BLACK))
    blue = art.search_or_create_color(ColorPair(fg=Color.BRIGHT_BLUE))
    art.print(0, 0, 0, "ab", SetColor(red))
    art.print(0, 0, 1, "cd", SetColor(blue))
    art.print(1, 2, 0, "xy", SetColor(blue))
    art.set_duration(1, 200)
    art.header.title = "Dots"
    art.header.authors.append("ann")
    return art


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "external: tests that need external .3a files")
