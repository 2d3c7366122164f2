"""
Chord construction - ChordQuality, build_chord, invert, Chord.

Chord qualities are interval formulas measured from the root (not stacked).
A chord is built with exactly the scale machinery: the formula is picked out
of a chromatic octave and respelled. An inversion moves the lowest notes to
the top, an octave up.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from chuk_music_theory.constants import ErrorMessages, Mode, SpellingContext
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import NoteName, PitchClass
from chuk_music_theory.core.scale import build, key_spelling, root_note
from chuk_music_theory.errors import UnknownChordQuality

if TYPE_CHECKING:
    from chuk_music_theory.core.analysis import ChordAnalysis

logger = logging.getLogger(__name__)

# Seventh intervals stacked on a triad
MINOR_SEVENTH = 10
MAJOR_SEVENTH = 11
DIMINISHED_SEVENTH = 9


class ChordQuality(str, Enum):
    """
    The supported chord qualities: four triads and eight seventh chords.
    """

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    DOMINANT_SEVENTH = "dominant_seventh"
    MAJOR_SEVENTH = "major_seventh"
    MINOR_SEVENTH = "minor_seventh"
    HALF_DIMINISHED_SEVENTH = "half_diminished_seventh"
    DIMINISHED_SEVENTH = "diminished_seventh"
    MINOR_MAJOR_SEVENTH = "minor_major_seventh"
    AUGMENTED_MAJOR_SEVENTH = "augmented_major_seventh"
    AUGMENTED_SEVENTH = "augmented_seventh"

    @property
    def formula(self) -> tuple[int, ...]:
        """Semitone offsets from the root."""
        return INTERVAL_FORMULAS[self]

    @property
    def degrees(self) -> tuple[int, ...]:
        """Scale degrees present in the chord (1, 3, 5 and 7 for sevenths)."""
        return (1, 3, 5, 7) if self.is_seventh else (1, 3, 5)

    @property
    def is_seventh(self) -> bool:
        return len(self.formula) == 4

    @property
    def suffix(self) -> str:
        """Chord-symbol suffix (Dm, G7, Bm7b5)."""
        return _SUFFIXES[self]

    @classmethod
    def parse(cls, value: ChordQuality | str, strict: bool = False) -> ChordQuality:
        """
        Parse a quality from its name or chord-symbol suffix.

        Unknown qualities fall back to MAJOR with a warning, unless strict.

        Args:
            value: 'minor', 'dominant_seventh', 'm7', 'maj7', 'dim', ...
            strict: Raise UnknownChordQuality instead of falling back

        Returns:
            The parsed ChordQuality
        """
        if isinstance(value, ChordQuality):
            return value

        text = value.strip()
        key = text.lower().replace(" ", "_").replace("-", "_")
        for member in cls:
            if member.value == key or member.suffix == text:
                return member
        if key in _ALIASES:
            return _ALIASES[key]

        if strict:
            raise UnknownChordQuality(ErrorMessages.UNKNOWN_QUALITY.format(quality=value))
        logger.warning(f"Unknown chord quality {value!r}, falling back to major")
        return cls.MAJOR


_TRIADS: dict[ChordQuality, tuple[int, ...]] = {
    ChordQuality.MAJOR: (0, 4, 7),
    ChordQuality.MINOR: (0, 3, 7),
    ChordQuality.DIMINISHED: (0, 3, 6),
    ChordQuality.AUGMENTED: (0, 4, 8),
}

# (base triad, seventh interval)
_SEVENTHS: dict[ChordQuality, tuple[ChordQuality, int]] = {
    ChordQuality.DOMINANT_SEVENTH: (ChordQuality.MAJOR, MINOR_SEVENTH),
    ChordQuality.MAJOR_SEVENTH: (ChordQuality.MAJOR, MAJOR_SEVENTH),
    ChordQuality.MINOR_SEVENTH: (ChordQuality.MINOR, MINOR_SEVENTH),
    ChordQuality.HALF_DIMINISHED_SEVENTH: (ChordQuality.DIMINISHED, MINOR_SEVENTH),
    ChordQuality.DIMINISHED_SEVENTH: (ChordQuality.DIMINISHED, DIMINISHED_SEVENTH),
    ChordQuality.MINOR_MAJOR_SEVENTH: (ChordQuality.MINOR, MAJOR_SEVENTH),
    ChordQuality.AUGMENTED_MAJOR_SEVENTH: (ChordQuality.AUGMENTED, MAJOR_SEVENTH),
    ChordQuality.AUGMENTED_SEVENTH: (ChordQuality.AUGMENTED, MINOR_SEVENTH),
}

INTERVAL_FORMULAS: dict[ChordQuality, tuple[int, ...]] = {
    **_TRIADS,
    **{quality: _TRIADS[triad] + (seventh,) for quality, (triad, seventh) in _SEVENTHS.items()},
}

_SUFFIXES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.AUGMENTED: "aug",
    ChordQuality.DOMINANT_SEVENTH: "7",
    ChordQuality.MAJOR_SEVENTH: "maj7",
    ChordQuality.MINOR_SEVENTH: "m7",
    ChordQuality.HALF_DIMINISHED_SEVENTH: "m7b5",
    ChordQuality.DIMINISHED_SEVENTH: "dim7",
    ChordQuality.MINOR_MAJOR_SEVENTH: "mMaj7",
    ChordQuality.AUGMENTED_MAJOR_SEVENTH: "augMaj7",
    ChordQuality.AUGMENTED_SEVENTH: "aug7",
}

_ALIASES: dict[str, ChordQuality] = {
    "maj": ChordQuality.MAJOR,
    "min": ChordQuality.MINOR,
    "+": ChordQuality.AUGMENTED,
    "°": ChordQuality.DIMINISHED,
    "dom7": ChordQuality.DOMINANT_SEVENTH,
    "ø7": ChordQuality.HALF_DIMINISHED_SEVENTH,
    "half_diminished": ChordQuality.HALF_DIMINISHED_SEVENTH,
    "°7": ChordQuality.DIMINISHED_SEVENTH,
    "+7": ChordQuality.AUGMENTED_SEVENTH,
    "+maj7": ChordQuality.AUGMENTED_MAJOR_SEVENTH,
    "mmaj7": ChordQuality.MINOR_MAJOR_SEVENTH,
    "augmaj7": ChordQuality.AUGMENTED_MAJOR_SEVENTH,
}

# The mode whose tonic chord has this quality decides its spelling
_SPELLING_MODES: dict[ChordQuality, Mode] = {
    ChordQuality.MAJOR: Mode.MAJOR,
    ChordQuality.MINOR: Mode.MINOR,
    ChordQuality.DIMINISHED: Mode.LOCRIAN,
    ChordQuality.AUGMENTED: Mode.LYDIAN,
    ChordQuality.DOMINANT_SEVENTH: Mode.MIXOLYDIAN,
    ChordQuality.MAJOR_SEVENTH: Mode.MAJOR,
    ChordQuality.MINOR_SEVENTH: Mode.MINOR,
    ChordQuality.HALF_DIMINISHED_SEVENTH: Mode.LOCRIAN,
    ChordQuality.DIMINISHED_SEVENTH: Mode.LOCRIAN,
    ChordQuality.MINOR_MAJOR_SEVENTH: Mode.MINOR,
    ChordQuality.AUGMENTED_MAJOR_SEVENTH: Mode.LYDIAN,
    ChordQuality.AUGMENTED_SEVENTH: Mode.LYDIAN,
}


def chord_spelling(root: NoteName, quality: ChordQuality) -> SpellingContext:
    """
    Spelling context for a chord.

    An accidental on the root wins (Gb minor stays flat, G# major stays
    sharp). Natural roots are spelled like the mode whose tonic chord has
    this quality, so C minor gets Eb and C7 gets Bb.
    """
    if root.is_flat:
        return SpellingContext.FLAT
    if root.is_sharp:
        return SpellingContext.SHARP
    return key_spelling(root, _SPELLING_MODES[quality])


def build_chord(
    root: NoteName | Note | str,
    quality: ChordQuality | str = ChordQuality.MAJOR,
    octave: int | None = None,
    strict: bool = False,
) -> list[Note]:
    """
    Build a root-position chord.

    Args:
        root: Root name, or a Note whose attributes should be carried through
        quality: Chord quality (unknown names fall back to major unless strict)
        octave: Octave of the root (default 0)
        strict: Raise UnknownChordQuality for unknown qualities

    Returns:
        The chord's notes, root first, ascending

    Example:
        build_chord("F", "major") -> [F0, A0, C1]
    """
    chord_quality = ChordQuality.parse(quality, strict=strict)
    start = root_note(root, octave)
    scale = build(
        start,
        chord_quality.formula,
        spelling=chord_spelling(start.name, chord_quality),
        name=chord_quality.value,
    )
    return list(scale.notes)


def invert(notes: Sequence[Note], degree: int) -> list[Note]:
    """
    Invert a voicing.

    The first `degree` notes move to the top, each an octave higher.
    Degree 0 is root position.

    Example:
        invert([F0, A0, C1], 1) -> [A0, C1, F1]
    """
    if degree == 0:
        return list(notes)
    if not 0 < degree < len(notes):
        raise ValueError(ErrorMessages.INVALID_INVERSION.format(degree=degree, size=len(notes)))
    return list(notes[degree:]) + [note.octave_up() for note in notes[:degree]]


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord: root, quality, voicing and optional alterations.

    `notes` is the base voicing (inversion already applied). Bass note,
    additions and omissions are layered on by `to_notes`. Every modifier
    returns a new Chord.

    Immutable and hashable.
    """

    root: NoteName
    quality: ChordQuality
    notes: tuple[Note, ...]
    octave: int = 0
    inversion: int = 0
    duration: Any = None
    bass: Note | None = None  # For slash chords
    additions: tuple[Note, ...] = ()
    omissions: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", NoteName.parse(self.root))
        object.__setattr__(self, "quality", ChordQuality.parse(self.quality, strict=True))
        object.__setattr__(self, "notes", tuple(self.notes))
        if not self.notes:
            raise ValueError("Chord must have at least one note")
        if self.inversion < 0:
            raise ValueError(f"Inversion must be non-negative, got {self.inversion}")

        expected = {self.root.pitch_class.transpose(offset) for offset in self.quality.formula}
        actual = {note.pitch_class for note in self.notes}
        if actual != expected:
            raise ValueError(
                f"Notes {[str(n) for n in self.notes]} do not form a "
                f"{self.root.value} {self.quality.value} chord"
            )

    @classmethod
    def from_root(
        cls,
        root: NoteName | str,
        quality: ChordQuality | str = ChordQuality.MAJOR,
        octave: int = 0,
        duration: Any = None,
        inversion: int = 0,
        strict: bool = False,
    ) -> Chord:
        """
        Build a chord from a root and quality.

        Args:
            root: Root name
            quality: Chord quality
            octave: Octave of the root
            duration: Opaque duration carried by the chord
            inversion: Inversion degree applied to the voicing
            strict: Raise for unknown qualities instead of falling back

        Returns:
            A Chord whose notes are the (inverted) quality formula
        """
        chord_quality = ChordQuality.parse(quality, strict=strict)
        base = build_chord(root, chord_quality, octave)
        return cls(
            root=base[0].name,
            quality=chord_quality,
            notes=tuple(invert(base, inversion)),
            octave=octave,
            inversion=inversion,
            duration=duration,
        )

    @classmethod
    def from_analysis(cls, analysis: ChordAnalysis, duration: Any = None) -> Chord:
        """
        Wrap a chord inference result.

        The analyzed voicing is kept as the chord's notes. A fallback result
        has no matching voicing, so it gets the root-position major chord on
        its root note.
        """
        if analysis.matched:
            notes = tuple(analysis.voicing)
        else:
            notes = tuple(build_chord(analysis.root_note, ChordQuality.MAJOR))
        return cls(
            root=analysis.root,
            quality=analysis.quality,
            notes=notes,
            octave=analysis.root_note.octave,
            inversion=analysis.inversion,
            duration=duration,
        )

    @property
    def pitch_classes(self) -> frozenset[PitchClass]:
        return frozenset(note.pitch_class for note in self.to_notes())

    def with_bass(self, note: Note | str) -> Chord:
        """Copy with a bass note (slash chord)."""
        bass = note if isinstance(note, Note) else Note.parse(note, default_octave=self.octave)
        return replace(self, bass=bass)

    def with_additions(self, notes: Sequence[Note]) -> Chord:
        """Copy with extra notes added on top."""
        return replace(self, additions=tuple(notes))

    def with_omissions(self, degrees: Sequence[int]) -> Chord:
        """Copy with chord degrees (1, 3, 5, 7) left out."""
        for degree in degrees:
            if degree not in self.quality.degrees:
                raise ValueError(f"Degree {degree} is not in a {self.quality.value} chord")
        return replace(self, omissions=tuple(degrees))

    def degree_pitch(self, degree: int) -> PitchClass:
        """Pitch class of a chord degree (1 = root, 3 = third, ...)."""
        index = self.quality.degrees.index(degree)
        return self.root.pitch_class.transpose(self.quality.formula[index])

    def to_notes(self) -> list[Note]:
        """
        Resolve the final voicing.

        Omitted degrees are dropped from the base notes, then additions are
        appended. The bass note is metadata only and is not inserted.
        """
        notes = list(self.notes)
        if self.omissions:
            omitted = {self.degree_pitch(degree) for degree in self.omissions}
            notes = [note for note in notes if note.pitch_class not in omitted]
        return notes + list(self.additions)

    def has_root_enharmonic_with(self, other: NoteName | Note | str) -> bool:
        """True if `other` spells the chord's root, ignoring octave and spelling."""
        if isinstance(other, Note):
            name = other.name
        else:
            name = NoteName.parse(other)
        return name.enharmonic_equal(self.root)

    def __str__(self) -> str:
        result = f"{self.root.value}{self.quality.suffix}"
        if self.bass and self.bass.pitch_class != self.root.pitch_class:
            result += f"/{self.bass.name.value}"
        return result
