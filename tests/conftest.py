"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_music_theory.core import Chord, Note


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def c_major_chord() -> Chord:
    """C major triad at middle C, one beat long."""
    return Chord.from_root("C", "major", octave=4, duration=1)


@pytest.fixture
def first_inversion_c() -> list[Note]:
    """E4 G4 C5 - C major with the root on top."""
    return [Note("E", 4), Note("G", 4), Note("C", 5)]
