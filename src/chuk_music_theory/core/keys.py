"""
Key signature resolution - circle of fifths/fourths and enharmonic spelling.

Three 12-element generator cycles drive everything here:
- fifths:    C G D A E B F# C# G# D# A# F   (key signatures with sharps)
- fourths:   C F Bb Eb Ab Db Gb B E A D G   (key signatures with flats)
- chromatic: C C# D D# E F F# G G# A A# B   (half steps)

Stepping along a cycle wraps from the last element back to the first with
the octave incremented. Spelling normalization is a static name -> name map
per context, so it is idempotent.
"""

from __future__ import annotations

from dataclasses import replace

from chuk_music_theory.constants import (
    MAX_ACCIDENTALS,
    AccidentalType,
    Cycle,
    ErrorMessages,
    Mode,
    SpellingContext,
)
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import NoteName
from chuk_music_theory.errors import InvalidKeySignature

N = NoteName

CIRCLE_OF_FIFTHS: tuple[NoteName, ...] = (
    N.C, N.G, N.D, N.A, N.E, N.B, N.Fs, N.Cs, N.Gs, N.Ds, N.As, N.F,
)  # fmt: skip
CIRCLE_OF_FOURTHS: tuple[NoteName, ...] = (
    N.C, N.F, N.Bb, N.Eb, N.Ab, N.Db, N.Gb, N.B, N.E, N.A, N.D, N.G,
)  # fmt: skip
CHROMATIC: tuple[NoteName, ...] = (
    N.C, N.Cs, N.D, N.Ds, N.E, N.F, N.Fs, N.G, N.Gs, N.A, N.As, N.B,
)  # fmt: skip

_CYCLES: dict[Cycle, tuple[NoteName, ...]] = {
    Cycle.FIFTHS: CIRCLE_OF_FIFTHS,
    Cycle.FOURTHS: CIRCLE_OF_FOURTHS,
    Cycle.CHROMATIC: CHROMATIC,
}

# Keys that are conventionally written with flats
NORMAL_FLAT_KEYS: frozenset[NoteName] = frozenset(
    {N.Gs, N.Ds, N.As, N.F, N.Gb, N.Db, N.Ab, N.Eb, N.Bb}
)

_TO_FLAT: dict[NoteName, NoteName] = {
    N.Cs: N.Db,
    N.Ds: N.Eb,
    N.Fs: N.Gb,
    N.Gs: N.Ab,
    N.As: N.Bb,
}
_TO_SHARP: dict[NoteName, NoteName] = {flat: sharp for sharp, flat in _TO_FLAT.items()}

_SPELLING_MAPS: dict[SpellingContext, dict[NoteName, NoteName]] = {
    SpellingContext.FLAT: _TO_FLAT,
    # C# and F# read better than Db and Gb in most sharp-side contexts
    SpellingContext.NORMAL: {
        sharp: flat for sharp, flat in _TO_FLAT.items() if sharp not in (N.Cs, N.Fs)
    },
    SpellingContext.SHARP: _TO_SHARP,
}


def circle_of_fifths() -> list[NoteName]:
    """The circle of fifths starting at C."""
    return list(CIRCLE_OF_FIFTHS)


def circle_of_fourths() -> list[NoteName]:
    """The circle of fourths starting at C."""
    return list(CIRCLE_OF_FOURTHS)


def normalize_spelling(
    name: NoteName,
    context: SpellingContext = SpellingContext.NORMAL,
) -> NoteName:
    """
    Respell a note name for a context.

    Args:
        name: The note name to respell
        context: NORMAL (flats except C#/F#), FLAT or SHARP

    Returns:
        The same chroma spelled for the context
    """
    return _SPELLING_MAPS[SpellingContext(context)].get(name, name)


def respell(notes: list[Note], context: SpellingContext) -> list[Note]:
    """Respell every note in a sequence, keeping octaves and attributes."""
    return [note.with_name(normalize_spelling(note.name, context)) for note in notes]


def key_for_signature(
    mode: Mode | str,
    accidental_count: int,
    accidental_type: AccidentalType | str,
) -> NoteName:
    """
    Get the tonic for a key signature.

    Sharps index the circle of fifths, flats the circle of fourths. Minor
    keys are offset three positions along the same cycle. The result is
    spelled to match the accidental type.

    Args:
        mode: Mode.MAJOR or Mode.MINOR
        accidental_count: Number of accidentals (0-7)
        accidental_type: AccidentalType.SHARPS or AccidentalType.FLATS

    Returns:
        The key's tonic

    Examples:
        key_for_signature(Mode.MAJOR, 3, AccidentalType.SHARPS) -> A
        key_for_signature(Mode.MAJOR, 3, AccidentalType.FLATS) -> Eb
    """
    key_mode = Mode.parse(mode)
    accidentals = AccidentalType(accidental_type)

    if key_mode not in (Mode.MAJOR, Mode.MINOR) or not 0 <= accidental_count <= MAX_ACCIDENTALS:
        raise InvalidKeySignature(
            ErrorMessages.INVALID_KEY_SIGNATURE.format(
                count=accidental_count,
                accidentals=accidentals.value,
                mode=key_mode.value,
                max=MAX_ACCIDENTALS,
            )
        )

    index = accidental_count + (3 if key_mode == Mode.MINOR else 0)
    if accidentals == AccidentalType.SHARPS:
        return normalize_spelling(CIRCLE_OF_FIFTHS[index], SpellingContext.SHARP)
    return normalize_spelling(CIRCLE_OF_FOURTHS[index], SpellingContext.FLAT)


def next_by_interval(note: Note, cycle: Cycle | str) -> Note:
    """
    Advance a note one step along a generator cycle.

    The note's chroma is located in the cycle (enharmonically, so Db finds
    C#). Stepping off the end wraps to the first element and raises the
    octave. The octave cutoff is therefore always at C, whatever the cycle.

    Args:
        note: The starting note
        cycle: Cycle.FIFTHS, Cycle.FOURTHS or Cycle.CHROMATIC

    Returns:
        The next note, with duration/velocity/channel preserved
    """
    circle = _CYCLES[Cycle(cycle)]
    index = next(i for i, name in enumerate(circle) if name.enharmonic_equal(note.name))

    if index == len(circle) - 1:
        return replace(note, name=circle[0], octave=note.octave + 1)
    return replace(note, name=circle[index + 1])


def next_fifth(note: Note) -> Note:
    """Next note on the circle of fifths."""
    return next_by_interval(note, Cycle.FIFTHS)


def next_fourth(note: Note) -> Note:
    """Next note on the circle of fourths."""
    return next_by_interval(note, Cycle.FOURTHS)


def next_half_step(note: Note) -> Note:
    """Next note in the chromatic cycle."""
    return next_by_interval(note, Cycle.CHROMATIC)
