"""
Chord inference - the inverse of chord construction.

Given any collection of notes, find the root, quality and inversion that
would have produced them. Inversion is modelled exactly as `invert` builds
it, so each rotation of the input is tested against the root-position
fingerprints:

    [E4, G4, C5]  r=0 -> (0, 3, 8)   no match
                  r=1 -> (0, 5, 9)   no match
                  r=2 -> (0, 4, 7)   major, root C

If no rotation of the input order matches, the notes are sorted by pitch
and the search is repeated, so unstacked voicings are still recognized.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from chuk_music_theory.constants import ErrorMessages
from chuk_music_theory.core.chord import INTERVAL_FORMULAS, Chord, ChordQuality, invert
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import NoteName
from chuk_music_theory.errors import UnmatchedChord

logger = logging.getLogger(__name__)

# Root-position offset signature -> quality
FINGERPRINTS: dict[tuple[int, ...], ChordQuality] = {
    formula: quality for quality, formula in INTERVAL_FORMULAS.items()
}


@dataclass(frozen=True)
class ChordAnalysis:
    """
    Result of chord inference.

    `inversion` is the rotation that brought the notes into root position.
    `matched` is False when the result is the first-note-major fallback.
    """

    root: NoteName
    quality: ChordQuality
    inversion: int
    root_note: Note
    voicing: tuple[Note, ...]
    matched: bool = True

    def __str__(self) -> str:
        suffix = "" if self.inversion == 0 else f" (rotation {self.inversion})"
        return f"{self.root.value}{self.quality.suffix}{suffix}"


def dedupe_pitch_classes(notes: Sequence[Note]) -> list[Note]:
    """Drop octave doublings, keeping the first note of each pitch class."""
    seen = set()
    unique = []
    for note in notes:
        if note.pitch_class not in seen:
            seen.add(note.pitch_class)
            unique.append(note)
    return unique


def fingerprint(notes: Sequence[Note]) -> tuple[int, ...]:
    """Semitone offsets of each note from the lowest one, in list order."""
    pitches = [note.midi for note in notes]
    lowest = min(pitches)
    return tuple(pitch - lowest for pitch in pitches)


def _match_rotations(notes: list[Note]) -> ChordAnalysis | None:
    for rotation in range(len(notes)):
        voicing = invert(notes, rotation)
        quality = FINGERPRINTS.get(fingerprint(voicing))
        if quality is not None:
            return ChordAnalysis(
                root=voicing[0].name,
                quality=quality,
                inversion=rotation,
                root_note=voicing[0],
                voicing=tuple(voicing),
            )
    return None


def analyze(notes: Sequence[Note], strict: bool = False) -> ChordAnalysis:
    """
    Infer root, quality and inversion from a set of notes.

    Args:
        notes: One or more notes in any order; octave doublings are ignored
        strict: Raise UnmatchedChord instead of falling back to major

    Returns:
        ChordAnalysis for the smallest matching rotation. With no match,
        the first note as a major root in root position (matched=False).

    Raises:
        ValueError: if notes is empty
        UnmatchedChord: if nothing matches and strict is set
    """
    if not notes:
        raise ValueError(ErrorMessages.EMPTY_CHORD)

    unique = dedupe_pitch_classes(notes)
    result = _match_rotations(unique)
    if result is None:
        result = _match_rotations(sorted(unique, key=lambda note: note.midi))
    if result is not None:
        logger.debug(f"Analyzed {[str(n) for n in notes]} as {result}")
        return result

    names = [str(note) for note in notes]
    if strict:
        raise UnmatchedChord(ErrorMessages.UNMATCHED_CHORD.format(notes=names))
    logger.warning(f"No chord quality matches {names}, falling back to {notes[0].name} major")
    return ChordAnalysis(
        root=notes[0].name,
        quality=ChordQuality.MAJOR,
        inversion=0,
        root_note=notes[0],
        voicing=tuple(unique),
        matched=False,
    )


def chord_from_notes(notes: Sequence[Note], duration: Any = None, strict: bool = False) -> Chord:
    """Build a Chord by analyzing raw notes."""
    return Chord.from_analysis(analyze(notes, strict=strict), duration=duration)
