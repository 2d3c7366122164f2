"""
Scale construction - interval formulas applied to a root.

A formula is a strictly increasing list of semitone offsets from the root,
starting at 0. Building a scale walks one chromatic octave up from the root
and picks the formula's offsets out of it; offsets of 12 or more land in the
next octave. The result is then respelled consistently for the key.

Modes are rotations of the single major formula:

    rotate_zero([0, 2, 4, 5, 7, 9, 11], 1) == [0, 2, 3, 5, 7, 9, 10]   # dorian
    rotate_zero([0, 2, 4, 5, 7, 9, 11], 5) == [0, 2, 3, 5, 7, 8, 10]   # minor
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace

from chuk_music_theory.constants import Mode, SpellingContext
from chuk_music_theory.core.keys import (
    NORMAL_FLAT_KEYS,
    next_half_step,
    normalize_spelling,
    respell,
)
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import NoteName, PitchClass

MAJOR_FORMULA: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)
PENTATONIC_FORMULA: tuple[int, ...] = (0, 3, 5, 7, 10)
BLUES_FORMULA: tuple[int, ...] = (0, 3, 5, 6, 7, 10)

_LETTERS = "CDEFGAB"


def validate_formula(formula: Sequence[int]) -> None:
    """
    Check that a formula is a valid interval formula.

    Raises:
        ValueError: if it is empty, does not start at 0, or is not strictly increasing
    """
    if not formula:
        raise ValueError("Interval formula must not be empty")
    if formula[0] != 0:
        raise ValueError(f"Interval formula must start at 0, got {list(formula)}")
    if any(b <= a for a, b in zip(formula, formula[1:])):
        raise ValueError(f"Interval formula must be strictly increasing, got {list(formula)}")


def rotate(formula: Sequence[int], by: int) -> list[int]:
    """
    Rotate a formula left, lifting the wrapped elements an octave.

    rotate([0, 4, 7], 1) == [4, 7, 12]
    """
    return list(formula[by:]) + [offset + 12 for offset in formula[:by]]


def rotate_zero(formula: Sequence[int], degree: int) -> list[int]:
    """
    Rotate a formula and re-zero it on its new first element.

    This is how every diatonic mode is derived from the major formula, and
    how chord inversions are related to root position.

    Args:
        formula: Interval formula starting at 0
        degree: Number of positions to rotate (0 is the identity)

    Returns:
        A new formula starting at 0
    """
    first, *rest = rotate(formula, degree)
    return [0] + [offset - first for offset in rest]


def scale_interval(mode: Mode | str) -> list[int]:
    """Interval formula for a diatonic mode."""
    return rotate_zero(MAJOR_FORMULA, Mode.parse(mode).rotation)


def key_spelling(root: NoteName, mode: Mode | str = Mode.MAJOR) -> SpellingContext:
    """
    Spelling context for a key.

    Conventionally flat keys (F, Bb, Eb, ...) spell with flats, everything
    else with sharps. Non-major modes are judged by the major key that shares
    their notes, so D minor spells like F major. That key's letter is counted
    back from the root's letter, so C locrian is judged as Db, not C#.
    """
    key_mode = Mode.parse(mode)
    if key_mode == Mode.MAJOR:
        key = root
    else:
        chroma = root.pitch_class.transpose(-MAJOR_FORMULA[key_mode.rotation])
        letter = _LETTERS[(_LETTERS.index(root.value[0]) - key_mode.rotation) % len(_LETTERS)]
        for candidate in (chroma.sharp_name, chroma.flat_name):
            if candidate.value[0] == letter:
                key = candidate
                break
        else:
            key = chroma.flat_name if root.is_flat else normalize_spelling(chroma.sharp_name)
    return SpellingContext.FLAT if key in NORMAL_FLAT_KEYS else SpellingContext.SHARP


def chromatic_scale(root: Note) -> list[Note]:
    """
    One octave of half steps starting at a note.

    Black keys after the root use the NORMAL context (C# and F#, but Eb, Ab
    and Bb), so the run reads C C# D Eb E F F# G Ab A Bb B from C.

    Args:
        root: Starting note (its attributes are carried to every note)

    Returns:
        12 notes, octave carried at C
    """
    notes = [root]
    for _ in range(11):
        step = next_half_step(notes[-1])
        notes.append(step.with_name(normalize_spelling(step.name, SpellingContext.NORMAL)))
    return notes


@dataclass(frozen=True)
class Scale:
    """
    An ordered sequence of notes built from a root and a formula.

    Notes are strictly ascending in absolute pitch. Iterating a Scale yields
    its notes; indexing is 0-based (scale[0] is the root).

    Immutable and hashable.
    """

    root: NoteName
    formula: tuple[int, ...]
    notes: tuple[Note, ...]
    name: str = ""

    def __post_init__(self) -> None:
        pitches = [note.midi for note in self.notes]
        if any(b <= a for a, b in zip(pitches, pitches[1:])):
            raise ValueError(f"Scale notes must be strictly ascending, got {self.notes}")

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __len__(self) -> int:
        return len(self.notes)

    def __getitem__(self, index: int) -> Note:
        return self.notes[index]

    @property
    def names(self) -> list[NoteName]:
        """Spelled names in scale order."""
        return [note.name for note in self.notes]

    @property
    def pitch_classes(self) -> frozenset[PitchClass]:
        """Set of chromas in the scale."""
        return frozenset(note.pitch_class for note in self.notes)

    def to_midi(self) -> list[int]:
        """Absolute semitone numbers in scale order."""
        return [note.midi for note in self.notes]

    def degree(self, degree: int) -> Note:
        """
        Get a note by 1-based scale degree.

        Degrees past the last wrap into higher octaves (degree 8 of a
        seven-note scale is the root an octave up).
        """
        if degree < 1:
            raise ValueError(f"Degree must be >= 1, got {degree}")
        octaves, index = divmod(degree - 1, len(self.notes))
        return self.notes[index].octave_up(octaves)

    def __str__(self) -> str:
        label = f"{self.root.value} {self.name}".strip()
        return f"{label}: {' '.join(str(note) for note in self.notes)}"


def root_note(root: NoteName | Note | str, octave: int | None) -> Note:
    """Coerce a root name or note to a Note at the requested octave."""
    if isinstance(root, Note):
        return root if octave is None else replace(root, octave=octave)
    return Note(NoteName.parse(root), 0 if octave is None else octave)


def build(
    root: NoteName | Note | str,
    formula: Sequence[int],
    octave: int | None = None,
    spelling: SpellingContext | None = None,
    name: str = "",
) -> Scale:
    """
    Build a scale from a root and an interval formula.

    Args:
        root: Root name, or a Note whose attributes should be carried through
        formula: Semitone offsets from the root (strictly increasing, from 0)
        octave: Octave of the root (default 0, or the Note's own octave)
        spelling: Spelling context; defaults to the root's key spelling
        name: Optional label for the scale

    Returns:
        A Scale

    Examples:
        build("C", [0, 2, 4, 5, 7, 9, 11]) -> C0 D0 E0 F0 G0 A0 B0
        build("F", [0, 2, 4, 5, 7, 9, 11]) -> F0 G0 A0 Bb0 C1 D1 E1
    """
    validate_formula(formula)
    start = root_note(root, octave)
    chromatic = chromatic_scale(start)

    raw = [chromatic[offset % 12].octave_up(offset // 12) for offset in formula]
    context = spelling or key_spelling(start.name)
    return Scale(start.name, tuple(formula), tuple(respell(raw, context)), name)


def modal_scale(key: NoteName | Note | str, mode: Mode | str, octave: int | None = None) -> Scale:
    """
    Build a diatonic mode on a key.

    Args:
        key: The tonic of the mode
        mode: Which mode (major, dorian, ..., minor, locrian)
        octave: Octave of the tonic (default 0)

    Returns:
        A seven-note Scale spelled like its relative major key
    """
    key_mode = Mode.parse(mode)
    start = root_note(key, octave)
    return build(
        start,
        scale_interval(key_mode),
        spelling=key_spelling(start.name, key_mode),
        name=key_mode.value,
    )


def major_scale(key: NoteName | Note | str, octave: int | None = None) -> Scale:
    """Major scale on a key."""
    return modal_scale(key, Mode.MAJOR, octave)


def minor_scale(key: NoteName | Note | str, octave: int | None = None) -> Scale:
    """Natural minor scale on a key."""
    return modal_scale(key, Mode.MINOR, octave)


def dorian_scale(key: NoteName | Note | str, octave: int | None = None) -> Scale:
    """Dorian mode on a key."""
    return modal_scale(key, Mode.DORIAN, octave)


def pentatonic_scale(key: NoteName | Note | str, octave: int | None = None) -> Scale:
    """Minor pentatonic scale on a key."""
    return build(key, PENTATONIC_FORMULA, octave, name="pentatonic")


def blues_scale(key: NoteName | Note | str, octave: int | None = None) -> Scale:
    """Blues scale (minor pentatonic plus the flat fifth) on a key."""
    return build(key, BLUES_FORMULA, octave, name="blues")


def equivalent_key(key: NoteName | str, mode: Mode | str, target_mode: Mode | str) -> NoteName:
    """
    Find the key in another mode that shares this mode's notes.

    Examples:
        equivalent_key("A", "minor", "major") -> C
        equivalent_key("D", "dorian", "major") -> C
        equivalent_key("D", "dorian", "minor") -> A
    """
    source = Mode.parse(mode)
    index = Mode.parse(target_mode).rotation - source.rotation
    return modal_scale(key, source, 0).notes[index].name


def enharmonic_equal(first: Sequence[Note], second: Sequence[Note]) -> bool:
    """True if two note sequences sound the same pitches in the same order."""
    return len(first) == len(second) and all(
        a.enharmonic_equal(b) for a, b in zip(first, second)
    )
