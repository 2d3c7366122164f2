"""
Compilation - sonorities to MIDI.

    Note / Chord / Rest / Arpeggio
    → MidiEvent list (absolute ticks)
    → MIDI File
"""

from chuk_music_theory.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    note_to_event,
    sonorities_to_events,
    to_midi_file,
)

__all__ = [
    "TICKS_PER_BEAT",
    "MidiEvent",
    "beats_to_ticks",
    "events_to_midi",
    "note_to_event",
    "sonorities_to_events",
    "to_midi_file",
]
