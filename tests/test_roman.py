"""
Tests for Roman numeral resolution.
"""

import pytest

from chuk_music_theory.constants import Mode
from chuk_music_theory.core import (
    ChordQuality,
    NoteName,
    RomanNumeral,
    chord_from_roman_numeral,
    diatonic_chords,
    modal_scale,
    resolve,
    resolve_sequence,
)
from chuk_music_theory.core.roman import SYMBOL_TABLE
from chuk_music_theory.errors import InvalidRomanNumeral


class TestSymbolTable:
    """Tests for the static symbol table."""

    @pytest.mark.parametrize(
        "symbol,degree,quality",
        [
            ("I", 1, ChordQuality.MAJOR),
            ("ii", 2, ChordQuality.MINOR),
            ("V7", 5, ChordQuality.DOMINANT_SEVENTH),
            ("IVmaj7", 4, ChordQuality.MAJOR_SEVENTH),
            ("ii7", 2, ChordQuality.MINOR_SEVENTH),
            ("vii0", 7, ChordQuality.DIMINISHED),
            ("vii°", 7, ChordQuality.DIMINISHED),
            ("viiø7", 7, ChordQuality.HALF_DIMINISHED_SEVENTH),
            ("vii°7", 7, ChordQuality.DIMINISHED_SEVENTH),
            ("III+", 3, ChordQuality.AUGMENTED),
            ("imaj7", 1, ChordQuality.MINOR_MAJOR_SEVENTH),
        ],
    )
    def test_parse(self, symbol: str, degree: int, quality: ChordQuality) -> None:
        """Numeral case and suffix give degree and quality."""
        numeral = RomanNumeral.parse(symbol)
        assert numeral.degree == degree
        assert numeral.quality == quality
        assert str(numeral) == symbol

    def test_every_degree_present(self) -> None:
        """Both cases exist for all seven degrees."""
        degrees = {numeral.degree for numeral in SYMBOL_TABLE.values()}
        assert degrees == set(range(1, 8))

    @pytest.mark.parametrize("symbol", ["VIII", "iiv", "X", "", "V9"])
    def test_invalid(self, symbol: str) -> None:
        """Unknown symbols raise."""
        with pytest.raises(InvalidRomanNumeral, match="Unknown Roman numeral"):
            RomanNumeral.parse(symbol)

    def test_invalid_is_value_error(self) -> None:
        """Callers can catch ValueError."""
        with pytest.raises(ValueError):
            RomanNumeral.parse("Z")


class TestResolve:
    """Tests for resolve and resolve_sequence."""

    def test_dominant_seventh_in_g(self) -> None:
        """V7 in G is D7, an octave up from the tonic's octave."""
        result = resolve("V7", "G", 0, Mode.MAJOR)
        assert result.root == NoteName.D
        assert result.octave == 1
        assert result.quality == ChordQuality.DOMINANT_SEVENTH

    def test_tonic(self) -> None:
        """I is the key itself."""
        result = resolve("I", "Eb", 3)
        assert (result.root, result.octave) == (NoteName.Eb, 3)

    def test_key_spelling(self) -> None:
        """Degrees take the key's spelling."""
        assert resolve("IV", "F").root == NoteName.Bb
        assert resolve("vii°", "E").root == NoteName.Ds

    def test_minor_key(self) -> None:
        """Degrees are read from the requested mode."""
        assert resolve("III", "A", 0, "minor").root == NoteName.C
        assert resolve("VI", "C", 0, Mode.MINOR).root == NoteName.Ab

    def test_sequence_order(self) -> None:
        """A progression resolves in order."""
        result = resolve_sequence(["I", "vi", "IV", "V"], "C")
        assert [r.root for r in result] == [NoteName.C, NoteName.A, NoteName.F, NoteName.G]
        assert [r.quality for r in result] == [
            ChordQuality.MAJOR,
            ChordQuality.MINOR,
            ChordQuality.MAJOR,
            ChordQuality.MAJOR,
        ]

    def test_root_note(self) -> None:
        """A resolved chord exposes its root as a Note."""
        assert str(resolve("V", "C", 4).root_note) == "G4"


class TestChordFromRomanNumeral:
    """Tests for chord_from_roman_numeral."""

    def test_minor_ii(self) -> None:
        """ii in C is D minor."""
        chord = chord_from_roman_numeral("ii", "C")
        assert [str(n) for n in chord.to_notes()] == ["D0", "F0", "A0"]
        assert str(chord) == "Dm"

    def test_inversion_and_duration(self) -> None:
        """Inversion and duration pass through to the chord."""
        chord = chord_from_roman_numeral("V7", "C", octave=4, duration=2, inversion=1)
        assert [str(n) for n in chord.to_notes()] == ["B4", "D5", "F5", "G5"]
        assert chord.duration == 2
        assert chord.inversion == 1

    def test_leading_tone_in_flat_key(self) -> None:
        """vii° in Db is spelled from the Db major scale."""
        chord = chord_from_roman_numeral("vii°", "Db", octave=4)
        assert [str(n) for n in chord.to_notes()] == ["C5", "Eb5", "Gb5"]
        assert chord.to_notes()[0] == modal_scale("Db", Mode.MAJOR, 4)[6]


class TestDiatonicChords:
    """Tests for diatonic_chords."""

    def test_major_triads(self) -> None:
        """Triads of C major."""
        chords = diatonic_chords("C")
        assert [numeral for numeral, _ in chords] == ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
        assert [str(chord) for _, chord in chords] == [
            "C", "Dm", "Em", "F", "G", "Am", "Bdim",
        ]  # fmt: skip

    def test_major_sevenths(self) -> None:
        """Seventh chords of C major."""
        chords = diatonic_chords("C", sevenths=True)
        assert [numeral for numeral, _ in chords] == [
            "Imaj7", "ii7", "iii7", "IVmaj7", "V7", "vi7", "viiø7",
        ]  # fmt: skip

    def test_minor_triads(self) -> None:
        """Triads of A natural minor."""
        chords = diatonic_chords("A", Mode.MINOR)
        assert [numeral for numeral, _ in chords] == ["i", "ii°", "III", "iv", "v", "VI", "VII"]

    def test_flat_key_roots(self) -> None:
        """Chord roots follow the key's spelling."""
        roots = [chord.root for _, chord in diatonic_chords("F")]
        assert roots[3] == NoteName.Bb
