"""
Constants and enums for the theory engine.

No magic strings - use enums for constrained values.
"""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """
    The seven diatonic modes.

    Each mode is a rotation of the major scale formula; `rotation` is the
    rotation distance (major = 0, minor = 5).
    """

    MAJOR = "major"
    DORIAN = "dorian"
    PHRYGIAN = "phrygian"
    LYDIAN = "lydian"
    MIXOLYDIAN = "mixolydian"
    MINOR = "minor"
    LOCRIAN = "locrian"

    @property
    def rotation(self) -> int:
        """Rotation index into the major formula."""
        return list(Mode).index(self)

    @classmethod
    def parse(cls, value: str | Mode) -> Mode:
        """Parse a mode name like 'major', 'Dorian', 'natural_minor'."""
        if isinstance(value, Mode):
            return value
        name = value.strip().lower().replace(" ", "_")
        aliases = {
            "ionian": "major",
            "aeolian": "minor",
            "natural_minor": "minor",
            "mixolodian": "mixolydian",
        }
        name = aliases.get(name, name)
        for member in cls:
            if member.value == name:
                return member
        raise ValueError(ErrorMessages.UNKNOWN_MODE.format(mode=value))


class AccidentalType(str, Enum):
    """Which accidentals a key signature carries."""

    SHARPS = "sharps"
    FLATS = "flats"


class SpellingContext(str, Enum):
    """
    Enharmonic spelling contexts.

    NORMAL keeps C# and F# but writes the other black keys as flats,
    FLAT writes every black key as a flat, SHARP writes every black key as a sharp.
    """

    NORMAL = "normal"
    FLAT = "flat"
    SHARP = "sharp"


class Cycle(str, Enum):
    """The 12-element generator cycles a note can be advanced along."""

    FIFTHS = "fifths"
    FOURTHS = "fourths"
    CHROMATIC = "chromatic"


class ArpeggioPattern(str, Enum):
    """Named arpeggio patterns (explicit index lists are also accepted)."""

    UP = "up"
    DOWN = "down"
    UP_DOWN = "up_down"
    DOWN_UP = "down_up"


# Key signatures carry at most seven accidentals
MAX_ACCIDENTALS = 7

# Velocity applied when a note is given a duration but no velocity
DEFAULT_VELOCITY = 100

# Duration (in quarter notes) applied when a note is given a velocity but no duration
DEFAULT_DURATION = 1


class ErrorMessages:
    """Standardized error messages."""

    INVALID_PITCH_CLASS = "Unknown pitch class: '{name}'."
    INVALID_NOTE = "Invalid note: '{note}'. Expected a pitch and octave like 'C4' or 'Bb3'."
    INVALID_KEY_SIGNATURE = (
        "Invalid key signature: {count} {accidentals} in {mode}. "
        "Expected 0-{max} accidentals for a major or minor key."
    )
    INVALID_ROMAN_NUMERAL = "Unknown Roman numeral: '{symbol}'."
    UNKNOWN_MODE = "Unknown mode: '{mode}'."
    UNKNOWN_QUALITY = "Unknown chord quality: '{quality}'."
    UNMATCHED_CHORD = "No chord quality matches notes: {notes}."
    INVALID_INVERSION = "Inversion {degree} is out of range for a {size}-note chord."
    EMPTY_CHORD = "Cannot analyze an empty note list."
