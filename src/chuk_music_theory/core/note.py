"""
Note primitive - a spelled pitch in an octave, plus pass-through attributes.

duration, velocity and channel are opaque to the theory engine. They are
carried unchanged through every transformation (build, rotate, invert,
respell) so that notation and MIDI collaborators see what the caller set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

from chuk_music_theory.constants import DEFAULT_DURATION, DEFAULT_VELOCITY, ErrorMessages
from chuk_music_theory.core.pitch import NoteName, PitchClass, absolute_semitone
from chuk_music_theory.errors import InvalidPitchClass

_NOTE_PATTERN = re.compile(r"^\s*([A-Ga-g][#!sb♯♭]?)\s*(-?\d+)\s*$")


@dataclass(frozen=True)
class Note:
    """
    A spelled pitch at an octave.

    Octave 4 holds middle C (C4 = MIDI 60).

    Construction defaults follow the note-entry convention: a duration
    without a velocity gets velocity 100, a velocity without a duration gets
    a quarter-note duration. With neither, both stay None.

    Immutable and hashable.
    """

    name: NoteName
    octave: int = 4
    duration: Any = None
    velocity: int | None = None
    channel: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, NoteName):
            object.__setattr__(self, "name", NoteName.parse(self.name))
        if self.velocity is not None and not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if self.channel is not None and not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")

        if self.duration is not None and self.velocity is None:
            object.__setattr__(self, "velocity", DEFAULT_VELOCITY)
        elif self.velocity is not None and self.duration is None:
            object.__setattr__(self, "duration", DEFAULT_DURATION)

    @property
    def pitch_class(self) -> PitchClass:
        """Octave-independent chroma."""
        return self.name.pitch_class

    @property
    def midi(self) -> int:
        """Absolute semitone number (C4 = 60)."""
        return absolute_semitone(self.name, self.octave)

    def octave_up(self, n: int = 1) -> Note:
        """Same note n octaves higher."""
        return replace(self, octave=self.octave + n)

    def octave_down(self, n: int = 1) -> Note:
        """Same note n octaves lower."""
        return replace(self, octave=self.octave - n)

    def with_name(self, name: NoteName) -> Note:
        """Same note, different spelling or pitch, all other attributes kept."""
        return replace(self, name=name)

    def with_duration(self, duration: Any) -> Note:
        """Copy with a new duration."""
        return replace(self, duration=duration)

    def enharmonic_equal(self, other: Note) -> bool:
        """
        True if both notes sound the same pitch.

        C#4 and Db4 are equal; C4 and C5 are not.
        """
        return self.midi == other.midi

    def __str__(self) -> str:
        return f"{self.name.value}{self.octave}"

    def __repr__(self) -> str:
        extras = ""
        if self.duration is not None:
            extras += f", duration={self.duration!r}"
        if self.velocity is not None:
            extras += f", velocity={self.velocity}"
        if self.channel is not None:
            extras += f", channel={self.channel}"
        return f"Note({self.name.value!r}, {self.octave}{extras})"

    @classmethod
    def parse(cls, text: str, default_octave: int | None = None, **attrs: Any) -> Note:
        """
        Parse a note from a string like 'C4', 'Bb3', 'F#-1'.

        Args:
            text: Pitch name followed by an octave number
            default_octave: Octave to assume when the text has none
            **attrs: duration/velocity/channel passed through

        Returns:
            Parsed Note
        """
        match = _NOTE_PATTERN.match(text)
        if match:
            return cls(NoteName.parse(match.group(1)), int(match.group(2)), **attrs)
        if default_octave is not None:
            try:
                return cls(NoteName.parse(text), default_octave, **attrs)
            except InvalidPitchClass:
                pass
        raise InvalidPitchClass(ErrorMessages.INVALID_NOTE.format(note=text))

    @classmethod
    def from_midi(
        cls,
        midi_note: int,
        duration: Any = None,
        velocity: int | None = None,
        channel: int | None = None,
    ) -> Note:
        """
        Create a note from a MIDI note number (sharp spelling).

        60 -> C4, 61 -> C#4, 21 -> A0.
        """
        pitch = PitchClass.from_midi(midi_note)
        octave = midi_note // 12 - 1
        return cls(pitch.sharp_name, octave, duration, velocity, channel)
