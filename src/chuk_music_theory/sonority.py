"""
Sonorities - everything that can occupy a span of musical time.

At any point on a track there is a single note, a chord, a rest, or an
arpeggiated chord. These four value types form a closed union, and each
capability (kind, duration, to_notes, show) is one function that handles
every member.

Text rendering uses Guido-style tokens:
    Note      C#4*1/4
    Chord     {C4*1/4, E4*1/4, G4*1/4}
    Rest      _*1/4
    Arpeggio  C4*1/8 E4*1/8 G4*1/8 E4*1/8
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Union

from chuk_music_theory.constants import DEFAULT_DURATION, ArpeggioPattern
from chuk_music_theory.core.chord import Chord
from chuk_music_theory.core.note import Note


@dataclass(frozen=True)
class Rest:
    """Silence for a duration."""

    duration: Any = DEFAULT_DURATION


@dataclass(frozen=True)
class Arpeggio:
    """
    A chord played one note at a time.

    The pattern is either a named ArpeggioPattern or an explicit tuple of
    1-based indices into the chord's notes. The arpeggio's duration is
    shared equally between the played notes.
    """

    chord: Chord
    pattern: ArpeggioPattern | tuple[int, ...] = ArpeggioPattern.UP
    duration: Any = DEFAULT_DURATION
    channel: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", ArpeggioPattern(self.pattern))
        elif not isinstance(self.pattern, tuple):
            object.__setattr__(self, "pattern", tuple(self.pattern))

        size = len(self.chord.to_notes())
        for index in self.indices():
            if not 1 <= index <= size:
                raise ValueError(f"Arpeggio index {index} is out of range for {size} notes")

    def indices(self) -> list[int]:
        """The pattern as 1-based note indices."""
        if not isinstance(self.pattern, ArpeggioPattern):
            return list(self.pattern)

        size = len(self.chord.to_notes())
        up = list(range(1, size + 1))
        down = up[::-1]
        if self.pattern == ArpeggioPattern.UP:
            return up
        if self.pattern == ArpeggioPattern.DOWN:
            return down
        if self.pattern == ArpeggioPattern.UP_DOWN:
            return up + down[1:-1]
        return down + up[1:-1]

    def repeat(self, times: int) -> Arpeggio:
        """Play the pattern `times` times in a row, lengthening the duration to match."""
        if times < 1:
            raise ValueError(f"Repeat count must be >= 1, got {times}")
        return replace(self, pattern=tuple(self.indices() * times), duration=self.duration * times)


Sonority = Union[Note, Chord, Rest, Arpeggio]

_KINDS: dict[type, str] = {Note: "note", Chord: "chord", Rest: "rest", Arpeggio: "arpeggio"}


def kind(sonority: Sonority) -> str:
    """Variant name: 'note', 'chord', 'rest' or 'arpeggio'."""
    try:
        return _KINDS[type(sonority)]
    except KeyError:
        raise TypeError(f"Not a sonority: {sonority!r}") from None


def duration(sonority: Sonority) -> Any:
    """Duration of a sonority, in quarter notes."""
    kind(sonority)
    return sonority.duration


def to_notes(sonority: Sonority) -> list[Note]:
    """
    The notes a sonority sounds, in playing order.

    Chord notes take the chord's duration when it has one. Arpeggio notes
    share the arpeggio's duration equally. A rest sounds nothing.
    """
    if isinstance(sonority, Note):
        return [sonority]
    if isinstance(sonority, Rest):
        return []
    if isinstance(sonority, Chord):
        notes = sonority.to_notes()
        if sonority.duration is None:
            return notes
        return [note.with_duration(sonority.duration) for note in notes]
    if isinstance(sonority, Arpeggio):
        indices = sonority.indices()
        step = sonority.duration / len(indices)
        notes = sonority.chord.to_notes()
        played = [notes[index - 1].with_duration(step) for index in indices]
        if sonority.channel is not None:
            played = [replace(note, channel=sonority.channel) for note in played]
        return played
    raise TypeError(f"Not a sonority: {sonority!r}")


def duration_token(value: Any) -> str:
    """
    Notation token for a duration in quarter notes.

    Examples:
        duration_token(1) -> "*1/4"
        duration_token(0.5) -> "*1/8"
        duration_token(None) -> ""
    """
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return _DURATION_TOKENS.get(value, f"*{value:g}/4")
    return f"*{value}/4"


_DURATION_TOKENS: dict[float, str] = {
    0.25: "*1/16",
    0.5: "*1/8",
    1: "*1/4",
    2: "*2/4",
    4: "*4/4",
}


def show(sonority: Sonority) -> str:
    """Render a sonority as Guido-style text."""
    if isinstance(sonority, Note):
        return f"{sonority}{duration_token(sonority.duration)}"
    if isinstance(sonority, Rest):
        return f"_{duration_token(sonority.duration)}"
    if isinstance(sonority, Chord):
        return "{" + ", ".join(show(note) for note in to_notes(sonority)) + "}"
    if isinstance(sonority, Arpeggio):
        return " ".join(show(note) for note in to_notes(sonority))
    raise TypeError(f"Not a sonority: {sonority!r}")
