"""
MIDI export - the numeric end of the theory engine.

Sonorities are laid end to end on a tick timeline, flattened to MidiEvents
and written into an in-memory mido MidiFile. Pitch numbers come from the
same semitone table the core uses (C4 = 60). Saving the file is up to the
caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_music_theory.config import DEFAULT_CONFIG, TheoryConfig
from chuk_music_theory.constants import DEFAULT_DURATION
from chuk_music_theory.core.chord import Chord
from chuk_music_theory.core.note import Note
from chuk_music_theory.sonority import Arpeggio, Rest, Sonority, to_notes

# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a length in quarter-note beats to ticks."""
    return int(beats * ticks_per_beat)


def _beats(value: Any) -> float:
    return DEFAULT_DURATION if value is None else value


def note_to_event(note: Note, start_ticks: int, config: TheoryConfig = DEFAULT_CONFIG) -> MidiEvent:
    """
    Convert one note to an event, filling unset attributes from the config.
    """
    return MidiEvent(
        pitch=note.midi,
        start_ticks=start_ticks,
        duration_ticks=beats_to_ticks(_beats(note.duration), config.ticks_per_beat),
        velocity=config.default_velocity if note.velocity is None else note.velocity,
        channel=config.default_channel if note.channel is None else note.channel,
    )


def sonorities_to_events(
    sonorities: Sequence[Sonority],
    config: TheoryConfig = DEFAULT_CONFIG,
) -> list[MidiEvent]:
    """
    Lay sonorities end to end and flatten them to note events.

    Notes and rests each occupy their own duration. A chord's notes start
    together and the next sonority starts after the chord's duration. An
    arpeggio's notes play one after another.

    Args:
        sonorities: Notes, chords, rests and arpeggios in playing order
        config: Supplies resolution and default velocity/channel

    Returns:
        Events in start order
    """
    events: list[MidiEvent] = []
    position = 0

    for sonority in sonorities:
        if isinstance(sonority, Rest):
            position += beats_to_ticks(_beats(sonority.duration), config.ticks_per_beat)
        elif isinstance(sonority, Arpeggio):
            for note in to_notes(sonority):
                events.append(note_to_event(note, position, config))
                position += beats_to_ticks(_beats(note.duration), config.ticks_per_beat)
        elif isinstance(sonority, Chord):
            notes = to_notes(sonority)
            events.extend(note_to_event(note, position, config) for note in notes)
            if sonority.duration is not None:
                length = sonority.duration
            else:
                length = max(_beats(note.duration) for note in notes)
            position += beats_to_ticks(length, config.ticks_per_beat)
        else:
            event = note_to_event(sonority, position, config)
            events.append(event)
            position += event.duration_ticks

    return events


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved

    Deterministic: same events, same file.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick so repeated pitches retrigger cleanly
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def to_midi_file(
    sonorities: Sequence[Sonority],
    config: TheoryConfig = DEFAULT_CONFIG,
) -> MidiFile:
    """Render sonorities straight to a MidiFile using the config's tempo and resolution."""
    return events_to_midi(
        sonorities_to_events(sonorities, config),
        tempo_bpm=config.tempo_bpm,
        ticks_per_beat=config.ticks_per_beat,
    )
