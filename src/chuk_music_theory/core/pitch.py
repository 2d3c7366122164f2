"""
Pitch primitives - PitchClass and NoteName.

PitchClass is the octave-independent chroma (0-11). Enharmonic equivalents
share a value: C# and Db are both PitchClass.Cs.

NoteName is a *spelled* pitch class. Spelling is context-dependent (F major
wants Bb, E major wants G#), so notes carry a NoteName and the chroma is
derived from it.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from chuk_music_theory.constants import ErrorMessages
from chuk_music_theory.errors import InvalidPitchClass

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_FLAT_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    @property
    def sharp_name(self) -> NoteName:
        """The sharp spelling of this chroma."""
        return NoteName(_SHARP_NAMES[self.value])

    @property
    def flat_name(self) -> NoteName:
        """The flat spelling of this chroma."""
        return NoteName(_FLAT_NAMES[self.value])

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db', 'Cs'."""
        return NoteName.parse(name).pitch_class


class NoteName(str, Enum):
    """
    A spelled pitch class.

    Seventeen spellings cover the 12 chromas: the naturals plus a sharp and a
    flat name for each black key. Double accidentals and E#/Cb style spellings
    are outside the vocabulary.
    """

    C = "C"
    Cs = "C#"
    Db = "Db"
    D = "D"
    Ds = "D#"
    Eb = "Eb"
    E = "E"
    F = "F"
    Fs = "F#"
    Gb = "Gb"
    G = "G"
    Gs = "G#"
    Ab = "Ab"
    A = "A"
    As = "A#"
    Bb = "Bb"
    B = "B"

    @property
    def pitch_class(self) -> PitchClass:
        """The chroma this name spells."""
        return PitchClass(_CHROMA[self])

    @property
    def is_sharp(self) -> bool:
        return self.value.endswith("#")

    @property
    def is_flat(self) -> bool:
        return len(self.value) == 2 and self.value.endswith("b")

    def enharmonic_equal(self, other: NoteName) -> bool:
        """True if both names spell the same chroma (C# and Db)."""
        return self.pitch_class == other.pitch_class

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str | NoteName) -> NoteName:
        """
        Parse a note name.

        Accepts display names ('C#', 'Bb'), enum names ('Cs', 'As') and the
        '!' sharp marker ('C!'). Raises InvalidPitchClass for anything else.
        """
        if isinstance(name, NoteName):
            return name
        text = name.strip()
        if len(text) >= 1:
            text = text[0].upper() + text[1:]
        text = text.replace("!", "#").replace("♯", "#").replace("♭", "b")

        for member in cls:
            if member.value == text or member.name == text:
                return member

        raise InvalidPitchClass(ErrorMessages.INVALID_PITCH_CLASS.format(name=name))


_CHROMA: dict[NoteName, int] = {
    NoteName.C: 0,
    NoteName.Cs: 1,
    NoteName.Db: 1,
    NoteName.D: 2,
    NoteName.Ds: 3,
    NoteName.Eb: 3,
    NoteName.E: 4,
    NoteName.F: 5,
    NoteName.Fs: 6,
    NoteName.Gb: 6,
    NoteName.G: 7,
    NoteName.Gs: 8,
    NoteName.Ab: 8,
    NoteName.A: 9,
    NoteName.As: 10,
    NoteName.Bb: 10,
    NoteName.B: 11,
}

# Offset of each name in octave 0; absolute = offset + 12 * octave, so C4 = 60
SEMITONE_OFFSETS: dict[NoteName, int] = {name: chroma + 12 for name, chroma in _CHROMA.items()}


def absolute_semitone(name: NoteName, octave: int) -> int:
    """
    Absolute semitone number of a spelled pitch in an octave.

    Matches standard MIDI numbering: C4 = 60, A4 = 69, C-1 = 0.
    Enharmonic spellings map to the same number.
    """
    return SEMITONE_OFFSETS[name] + 12 * octave
