"""
Tests for core pitch primitives.

Tests cover:
- PitchClass and NoteName (pitch.py)
- The semitone table (pitch.py)
- Note (note.py)
"""

import pytest

from chuk_music_theory.core import SEMITONE_OFFSETS, Note, NoteName, PitchClass, absolute_semitone
from chuk_music_theory.errors import InvalidPitchClass, MusicTheoryError


class TestPitchClass:
    """Tests for PitchClass enum."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.D == 2
        assert PitchClass.E == 4
        assert PitchClass.F == 5
        assert PitchClass.G == 7
        assert PitchClass.A == 9
        assert PitchClass.B == 11

    def test_transpose_up(self) -> None:
        """Transposing up works correctly."""
        assert PitchClass.C.transpose(2) == PitchClass.D
        assert PitchClass.C.transpose(7) == PitchClass.G
        assert PitchClass.A.transpose(3) == PitchClass.C

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.C.transpose(-1) == PitchClass.B

    def test_from_midi(self) -> None:
        """Extract pitch class from MIDI note."""
        assert PitchClass.from_midi(60) == PitchClass.C
        assert PitchClass.from_midi(69) == PitchClass.A
        assert PitchClass.from_midi(61) == PitchClass.Cs

    def test_spellings(self) -> None:
        """Each chroma has a sharp and a flat name."""
        assert PitchClass.Cs.sharp_name == NoteName.Cs
        assert PitchClass.Cs.flat_name == NoteName.Db
        assert PitchClass.C.sharp_name == PitchClass.C.flat_name == NoteName.C

    def test_parse(self) -> None:
        """Parse pitch classes from either spelling."""
        assert PitchClass.parse("C#") == PitchClass.Cs
        assert PitchClass.parse("Db") == PitchClass.Cs


class TestNoteName:
    """Tests for spelled note names."""

    def test_enharmonic_names_share_chroma(self) -> None:
        """C# and Db are different names for one chroma."""
        assert NoteName.Cs != NoteName.Db
        assert NoteName.Cs.pitch_class == NoteName.Db.pitch_class
        assert NoteName.Cs.enharmonic_equal(NoteName.Db)
        assert not NoteName.C.enharmonic_equal(NoteName.Db)

    def test_accidental_flags(self) -> None:
        """Sharps and flats are recognized; B is not a flat."""
        assert NoteName.Fs.is_sharp
        assert NoteName.Bb.is_flat
        assert not NoteName.B.is_flat
        assert not NoteName.C.is_sharp

    def test_seventeen_spellings(self) -> None:
        """Naturals plus one sharp and one flat per black key."""
        assert len(NoteName) == 17

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("C", NoteName.C),
            ("c", NoteName.C),
            ("C#", NoteName.Cs),
            ("Cs", NoteName.Cs),
            ("C!", NoteName.Cs),
            ("bb", NoteName.Bb),
            ("E♭", NoteName.Eb),
            ("F♯", NoteName.Fs),
        ],
    )
    def test_parse(self, text: str, expected: NoteName) -> None:
        """Parse display names, enum names and accidental markers."""
        assert NoteName.parse(text) == expected

    def test_parse_invalid(self) -> None:
        """Unknown names raise InvalidPitchClass."""
        with pytest.raises(InvalidPitchClass, match="Unknown pitch class"):
            NoteName.parse("H")
        with pytest.raises(MusicTheoryError):
            NoteName.parse("Cb")
        with pytest.raises(ValueError):
            NoteName.parse("")


class TestSemitones:
    """Tests for the absolute semitone table."""

    def test_middle_c(self) -> None:
        """C4 is 60 and A4 is 69, as in MIDI."""
        assert absolute_semitone(NoteName.C, 4) == 60
        assert absolute_semitone(NoteName.A, 4) == 69
        assert absolute_semitone(NoteName.C, -1) == 0

    def test_offsets(self) -> None:
        """Offsets start at 12 for C."""
        assert SEMITONE_OFFSETS[NoteName.C] == 12
        assert SEMITONE_OFFSETS[NoteName.B] == 23

    def test_enharmonics_share_number(self) -> None:
        """Every spelling of a chroma maps to the same number."""
        for name in NoteName:
            for other in NoteName:
                if name.pitch_class == other.pitch_class:
                    assert absolute_semitone(name, 3) == absolute_semitone(other, 3)


class TestNote:
    """Tests for the Note value."""

    def test_create(self) -> None:
        """Notes coerce string names."""
        note = Note("Bb", 3)
        assert note.name == NoteName.Bb
        assert note.octave == 3
        assert note.midi == 58
        assert note.pitch_class == PitchClass.As

    def test_defaults_without_attributes(self) -> None:
        """With neither duration nor velocity both stay unset."""
        note = Note("C", 4)
        assert note.duration is None
        assert note.velocity is None
        assert note.channel is None

    def test_duration_implies_velocity(self) -> None:
        """A duration without velocity gets velocity 100."""
        note = Note("C", 4, duration=2)
        assert note.velocity == 100

    def test_velocity_implies_duration(self) -> None:
        """A velocity without duration gets a quarter note."""
        note = Note("C", 4, velocity=80)
        assert note.duration == 1

    def test_validation(self) -> None:
        """Velocity and channel are range checked."""
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            Note("C", 4, velocity=128)
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            Note("C", 4, channel=16)

    def test_octave_shift_keeps_attributes(self) -> None:
        """Octave shifts carry duration, velocity and channel."""
        note = Note("E", 4, duration=0.5, velocity=90, channel=3)
        up = note.octave_up()
        assert up.octave == 5
        assert (up.duration, up.velocity, up.channel) == (0.5, 90, 3)
        assert note.octave_down(2).octave == 2
        assert note.octave == 4

    def test_enharmonic_equal(self) -> None:
        """Equal pitch regardless of spelling, but not across octaves."""
        assert Note("C#", 4).enharmonic_equal(Note("Db", 4))
        assert not Note("C", 4).enharmonic_equal(Note("C", 5))
        assert Note("C#", 4) != Note("Db", 4)

    def test_str(self) -> None:
        """Notes render as name plus octave."""
        assert str(Note("F#", 3)) == "F#3"
        assert str(Note("C", -1)) == "C-1"

    @pytest.mark.parametrize(
        "text,name,octave",
        [
            ("C4", NoteName.C, 4),
            ("Bb3", NoteName.Bb, 3),
            ("f#5", NoteName.Fs, 5),
            ("F#-1", NoteName.Fs, -1),
        ],
    )
    def test_parse(self, text: str, name: NoteName, octave: int) -> None:
        """Parse notes with an octave."""
        note = Note.parse(text)
        assert note.name == name
        assert note.octave == octave

    def test_parse_default_octave(self) -> None:
        """A bare name needs a default octave."""
        assert Note.parse("G", default_octave=2) == Note("G", 2)
        with pytest.raises(InvalidPitchClass, match="Invalid note"):
            Note.parse("G")
        with pytest.raises(InvalidPitchClass):
            Note.parse("X4", default_octave=4)

    def test_from_midi(self) -> None:
        """MIDI numbers become sharp-spelled notes."""
        assert Note.from_midi(60) == Note("C", 4)
        assert Note.from_midi(61) == Note("C#", 4)
        assert Note.from_midi(21) == Note("A", 0)
        assert Note.from_midi(64, duration=1).velocity == 100

    def test_hashable(self) -> None:
        """Notes are immutable values."""
        assert len({Note("C", 4), Note("C", 4), Note("D", 4)}) == 2
