"""
Core music theory - the algorithmic layer.

Leaves first:
- pitch: PitchClass (12 chromas) and NoteName (their spellings)
- note: Note, a spelled pitch at an octave
- keys: key signatures, the generator cycles, enharmonic spelling
- scale: scales from interval formulas, modes by rotation
- chord: chord qualities, construction and inversion
- analysis: chord inference, the inverse of construction
- roman: Roman numerals resolved against a key
"""

from chuk_music_theory.core.analysis import ChordAnalysis, analyze, chord_from_notes
from chuk_music_theory.core.chord import (
    INTERVAL_FORMULAS,
    Chord,
    ChordQuality,
    build_chord,
    invert,
)
from chuk_music_theory.core.keys import (
    circle_of_fifths,
    circle_of_fourths,
    key_for_signature,
    next_by_interval,
    next_fifth,
    next_fourth,
    next_half_step,
    normalize_spelling,
)
from chuk_music_theory.core.note import Note
from chuk_music_theory.core.pitch import SEMITONE_OFFSETS, NoteName, PitchClass, absolute_semitone
from chuk_music_theory.core.roman import (
    ResolvedChord,
    RomanNumeral,
    chord_from_roman_numeral,
    diatonic_chords,
    resolve,
    resolve_sequence,
)
from chuk_music_theory.core.scale import (
    Scale,
    blues_scale,
    build,
    chromatic_scale,
    dorian_scale,
    enharmonic_equal,
    equivalent_key,
    major_scale,
    minor_scale,
    modal_scale,
    pentatonic_scale,
    rotate_zero,
    scale_interval,
)

__all__ = [
    # Pitch
    "PitchClass",
    "NoteName",
    "SEMITONE_OFFSETS",
    "absolute_semitone",
    "Note",
    # Keys
    "key_for_signature",
    "normalize_spelling",
    "next_by_interval",
    "next_fifth",
    "next_fourth",
    "next_half_step",
    "circle_of_fifths",
    "circle_of_fourths",
    # Scale
    "Scale",
    "build",
    "chromatic_scale",
    "rotate_zero",
    "scale_interval",
    "major_scale",
    "minor_scale",
    "dorian_scale",
    "modal_scale",
    "pentatonic_scale",
    "blues_scale",
    "equivalent_key",
    "enharmonic_equal",
    # Chord
    "ChordQuality",
    "INTERVAL_FORMULAS",
    "Chord",
    "build_chord",
    "invert",
    # Analysis
    "ChordAnalysis",
    "analyze",
    "chord_from_notes",
    # Roman numerals
    "RomanNumeral",
    "ResolvedChord",
    "resolve",
    "resolve_sequence",
    "chord_from_roman_numeral",
    "diatonic_chords",
]
