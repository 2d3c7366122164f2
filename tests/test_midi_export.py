"""
MIDI export tests.

Sonorities are flattened to events on a tick timeline and written with mido.
"""

from pathlib import Path

import pytest
from mido import MidiFile

from chuk_music_theory.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    note_to_event,
    sonorities_to_events,
    to_midi_file,
)
from chuk_music_theory.config import TheoryConfig
from chuk_music_theory.constants import ArpeggioPattern
from chuk_music_theory.core import Chord, Note, major_scale
from chuk_music_theory.sonority import Arpeggio, Rest


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        """Can create a valid MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100, channel=0)
        assert event.pitch == 60
        assert event.duration_ticks == 480

    def test_event_validation_pitch_range(self) -> None:
        """Pitch must be 0-127."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480, velocity=100)
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=-1, start_ticks=0, duration_ticks=480, velocity=100)

    def test_event_validation_velocity_range(self) -> None:
        """Velocity must be 0-127."""
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)

    def test_event_validation_channel_range(self) -> None:
        """Channel must be 0-15."""
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100, channel=16)

    def test_event_validation_ticks(self) -> None:
        """Times cannot be negative."""
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=480, velocity=100)


class TestNoteToEvent:
    """Tests for note_to_event."""

    def test_pitch_matches_semitone_table(self) -> None:
        """Note numbers come from the core's table."""
        assert note_to_event(Note("C", 4), 0).pitch == 60
        assert note_to_event(Note("A", 4), 0).pitch == 69
        assert note_to_event(Note("Db", 4), 0).pitch == note_to_event(Note("C#", 4), 0).pitch

    def test_defaults_from_config(self) -> None:
        """Unset velocity, channel and duration take defaults."""
        config = TheoryConfig(default_velocity=90, default_channel=2, ticks_per_beat=96)
        event = note_to_event(Note("C", 4), 0, config)
        assert event.velocity == 90
        assert event.channel == 2
        assert event.duration_ticks == 96

    def test_note_attributes_win(self) -> None:
        """Attributes set on the note are used as is."""
        event = note_to_event(Note("C", 4, duration=0.5, velocity=40, channel=9), 10)
        assert (event.start_ticks, event.duration_ticks) == (10, 240)
        assert (event.velocity, event.channel) == (40, 9)


class TestSonoritiesToEvents:
    """Tests for laying sonorities on the timeline."""

    def test_note_rest_chord(self) -> None:
        """Rests advance time and chord notes start together."""
        chord = Chord.from_root("C", "major", octave=4, duration=2)
        events = sonorities_to_events([Note("C", 4, duration=1), Rest(1), chord])
        assert [(e.pitch, e.start_ticks) for e in events] == [
            (60, 0),
            (60, 960),
            (64, 960),
            (67, 960),
        ]
        assert all(e.duration_ticks == 960 for e in events[1:])

    def test_arpeggio_is_sequential(self, c_major_chord: Chord) -> None:
        """Arpeggio notes follow one another."""
        events = sonorities_to_events([Arpeggio(c_major_chord, ArpeggioPattern.UP, 3)])
        assert [e.start_ticks for e in events] == [0, 480, 960]
        assert [e.pitch for e in events] == [60, 64, 67]

    def test_scale(self) -> None:
        """A scale plays as consecutive notes."""
        notes = [note.with_duration(1) for note in major_scale("C", 4)]
        events = sonorities_to_events(notes)
        assert [e.pitch for e in events] == [60, 62, 64, 65, 67, 69, 71]
        assert events[-1].start_ticks == 6 * TICKS_PER_BEAT


class TestEventsToMidi:
    """Tests for events_to_midi and to_midi_file."""

    def test_creates_file(self) -> None:
        """A MidiFile with one track is produced."""
        events = [MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)]
        mid = events_to_midi(events)
        assert isinstance(mid, MidiFile)
        assert mid.ticks_per_beat == TICKS_PER_BEAT
        assert len(mid.tracks) == 1

    def test_tempo(self) -> None:
        """Tempo is written as microseconds per beat."""
        mid = events_to_midi([], tempo_bpm=120)
        tempo = [m for m in mid.tracks[0] if m.type == "set_tempo"]
        assert tempo[0].tempo == 500_000

    def test_note_messages(self, c_major_chord: Chord) -> None:
        """Each note produces a note_on and a note_off."""
        mid = to_midi_file([c_major_chord])
        types = [m.type for m in mid.tracks[0]]
        assert types.count("note_on") == 3
        assert types.count("note_off") == 3

    def test_deterministic(self, c_major_chord: Chord) -> None:
        """Same input, same messages."""
        first = [str(m) for m in to_midi_file([c_major_chord, Rest(1)]).tracks[0]]
        second = [str(m) for m in to_midi_file([c_major_chord, Rest(1)]).tracks[0]]
        assert first == second

    def test_config_resolution(self, c_major_chord: Chord) -> None:
        """The config's tempo and resolution are used."""
        mid = to_midi_file([c_major_chord], TheoryConfig(ticks_per_beat=96, tempo_bpm=60))
        assert mid.ticks_per_beat == 96
        tempo = [m for m in mid.tracks[0] if m.type == "set_tempo"]
        assert tempo[0].tempo == 1_000_000

    def test_save_and_load(self, c_major_chord: Chord, temp_midi_path: Path) -> None:
        """The file round-trips through disk."""
        to_midi_file([c_major_chord]).save(temp_midi_path)
        loaded = MidiFile(temp_midi_path)
        notes = [m.note for m in loaded.tracks[0] if m.type == "note_on"]
        assert notes == [60, 64, 67]


class TestBeatsToTicks:
    """Tests for beats_to_ticks."""

    def test_conversion(self) -> None:
        """Quarter-note beats to ticks."""
        assert beats_to_ticks(1) == 480
        assert beats_to_ticks(0.5) == 240
        assert beats_to_ticks(2, ticks_per_beat=96) == 192
