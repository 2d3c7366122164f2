"""
Roman numeral resolution - scale-degree symbols to concrete chords.

A Roman numeral names a chord by its scale degree, independent of key.
Case carries the triad quality (V is major, ii is minor) and a suffix
carries the rest (V7, ii7, vii°, viiø7, III+).

    resolve("V7", key="G") -> D dominant_seventh

The symbol table is built once at import from the numerals and the suffix
tables for each case.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from chuk_music_theory.constants import ErrorMessages, Mode
from chuk_music_theory.core.analysis import analyze
from chuk_music_theory.core.chord import Chord, ChordQuality
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import NoteName
from chuk_music_theory.core.scale import modal_scale
from chuk_music_theory.errors import InvalidRomanNumeral

NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

# Suffixes valid after an uppercase numeral (major-third chords, plus diminished)
_UPPER_SUFFIXES: dict[str, ChordQuality] = {
    "": ChordQuality.MAJOR,
    "7": ChordQuality.DOMINANT_SEVENTH,
    "maj7": ChordQuality.MAJOR_SEVENTH,
    "+": ChordQuality.AUGMENTED,
    "+7": ChordQuality.AUGMENTED_SEVENTH,
    "+maj7": ChordQuality.AUGMENTED_MAJOR_SEVENTH,
    "°": ChordQuality.DIMINISHED,
    "0": ChordQuality.DIMINISHED,
    "°7": ChordQuality.DIMINISHED_SEVENTH,
    "07": ChordQuality.DIMINISHED_SEVENTH,
}

# Suffixes valid after a lowercase numeral (minor-third chords)
_LOWER_SUFFIXES: dict[str, ChordQuality] = {
    "": ChordQuality.MINOR,
    "7": ChordQuality.MINOR_SEVENTH,
    "maj7": ChordQuality.MINOR_MAJOR_SEVENTH,
    "°": ChordQuality.DIMINISHED,
    "0": ChordQuality.DIMINISHED,
    "ø7": ChordQuality.HALF_DIMINISHED_SEVENTH,
    "°7": ChordQuality.DIMINISHED_SEVENTH,
    "07": ChordQuality.DIMINISHED_SEVENTH,
}


@dataclass(frozen=True)
class RomanNumeral:
    """
    A key-independent chord reference.

    degree is 1-based (I = 1, VII = 7).
    """

    symbol: str
    degree: int
    quality: ChordQuality

    def __post_init__(self) -> None:
        if not 1 <= self.degree <= len(NUMERALS):
            raise ValueError(f"Degree must be 1-{len(NUMERALS)}, got {self.degree}")

    def __str__(self) -> str:
        return self.symbol

    @classmethod
    def parse(cls, symbol: str) -> RomanNumeral:
        """
        Look up a symbol like 'I', 'vi', 'V7', 'viiø7'.

        Raises:
            InvalidRomanNumeral: if the symbol is not in the table
        """
        numeral = SYMBOL_TABLE.get(symbol.strip())
        if numeral is None:
            raise InvalidRomanNumeral(ErrorMessages.INVALID_ROMAN_NUMERAL.format(symbol=symbol))
        return numeral

    @classmethod
    def for_chord(cls, degree: int, quality: ChordQuality) -> RomanNumeral | None:
        """The preferred symbol for a quality on a degree, if one exists."""
        for numeral in SYMBOL_TABLE.values():
            if numeral.degree == degree and numeral.quality == quality:
                return numeral
        return None


def _build_symbol_table() -> dict[str, RomanNumeral]:
    table: dict[str, RomanNumeral] = {}
    for degree, upper in enumerate(NUMERALS, start=1):
        # Lowercase first so diminished chords read vii° rather than VII°
        for suffix, quality in _LOWER_SUFFIXES.items():
            symbol = upper.lower() + suffix
            table[symbol] = RomanNumeral(symbol, degree, quality)
        for suffix, quality in _UPPER_SUFFIXES.items():
            symbol = upper + suffix
            table[symbol] = RomanNumeral(symbol, degree, quality)
    return table


SYMBOL_TABLE: dict[str, RomanNumeral] = _build_symbol_table()


@dataclass(frozen=True)
class ResolvedChord:
    """A Roman numeral resolved against a key: root spelling, octave and quality."""

    root: NoteName
    octave: int
    quality: ChordQuality

    @property
    def root_note(self) -> Note:
        return Note(self.root, self.octave)


def resolve(
    symbol: str | RomanNumeral,
    key: NoteName | str,
    octave: int = 0,
    scale_type: Mode | str = Mode.MAJOR,
) -> ResolvedChord:
    """
    Resolve a Roman numeral against a key.

    Args:
        symbol: Roman numeral ('I', 'V7', 'ii', ...)
        key: Tonic of the key
        octave: Octave of the tonic
        scale_type: Mode of the key (major, minor, dorian, ...)

    Returns:
        ResolvedChord with the degree's spelled root and octave

    Example:
        resolve("V7", "G") -> ResolvedChord(D, 1, dominant_seventh)
    """
    numeral = symbol if isinstance(symbol, RomanNumeral) else RomanNumeral.parse(symbol)
    scale = modal_scale(key, scale_type, octave)
    root = scale[numeral.degree - 1]
    return ResolvedChord(root.name, root.octave, numeral.quality)


def resolve_sequence(
    symbols: Sequence[str | RomanNumeral],
    key: NoteName | str,
    octave: int = 0,
    scale_type: Mode | str = Mode.MAJOR,
) -> list[ResolvedChord]:
    """Resolve a progression in order."""
    return [resolve(symbol, key, octave, scale_type) for symbol in symbols]


def chord_from_roman_numeral(
    symbol: str | RomanNumeral,
    key: NoteName | str,
    octave: int = 0,
    duration: Any = None,
    scale_type: Mode | str = Mode.MAJOR,
    inversion: int = 0,
) -> Chord:
    """
    Build a concrete Chord from a Roman numeral in a key.

    Example:
        chord_from_roman_numeral("ii", "C") -> D minor (D0 F0 A0)
    """
    resolved = resolve(symbol, key, octave, scale_type)
    return Chord.from_root(
        resolved.root,
        resolved.quality,
        octave=resolved.octave,
        duration=duration,
        inversion=inversion,
    )


def diatonic_chords(
    key: NoteName | str,
    mode: Mode | str = Mode.MAJOR,
    sevenths: bool = False,
    octave: int = 0,
) -> list[tuple[str, Chord]]:
    """
    Get the chord on every degree of a key.

    Thirds are stacked from each scale degree using only scale notes, and
    the result is classified by chord inference, so the qualities follow
    the mode (C major gives I ii iii IV V vi vii°).

    Args:
        key: Tonic of the key
        mode: Mode of the key
        sevenths: Stack four notes instead of three
        octave: Octave of the tonic

    Returns:
        List of (roman numeral symbol, chord) in degree order
    """
    scale = modal_scale(key, mode, octave)
    size = 4 if sevenths else 3
    chords = []
    for degree in range(1, len(scale) + 1):
        notes = [scale.degree(degree + 2 * step) for step in range(size)]
        chord = Chord.from_analysis(analyze(notes))
        numeral = RomanNumeral.for_chord(degree, chord.quality)
        chords.append((numeral.symbol if numeral else NUMERALS[degree - 1], chord))
    return chords
