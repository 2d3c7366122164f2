"""
Tests for engine configuration.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chuk_music_theory.config import DEFAULT_CONFIG, TheoryConfig


class TestTheoryConfig:
    """Tests for TheoryConfig."""

    def test_defaults(self) -> None:
        """Defaults match the MIDI conventions."""
        assert DEFAULT_CONFIG.ticks_per_beat == 480
        assert DEFAULT_CONFIG.tempo_bpm == 120
        assert DEFAULT_CONFIG.default_velocity == 100
        assert DEFAULT_CONFIG.default_channel == 0
        assert DEFAULT_CONFIG.default_octave == 4
        assert not DEFAULT_CONFIG.strict_qualities
        assert not DEFAULT_CONFIG.strict_inference

    def test_validation(self) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            TheoryConfig(default_velocity=200)
        with pytest.raises(ValidationError):
            TheoryConfig(default_channel=16)
        with pytest.raises(ValidationError):
            TheoryConfig(ticks_per_beat=0)

    def test_unknown_keys_rejected(self) -> None:
        """Typos in config keys are errors."""
        with pytest.raises(ValidationError):
            TheoryConfig(tempo=90)

    def test_frozen(self) -> None:
        """Configs are immutable."""
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.tempo_bpm = 90


class TestYaml:
    """Tests for YAML loading."""

    def test_from_yaml(self, temp_dir: Path) -> None:
        """Keys in the file override defaults."""
        path = temp_dir / "theory.yaml"
        path.write_text("tempo_bpm: 90\nstrict_inference: true\n")
        config = TheoryConfig.from_yaml(path)
        assert config.tempo_bpm == 90
        assert config.strict_inference
        assert config.ticks_per_beat == 480

    def test_empty_file(self, temp_dir: Path) -> None:
        """An empty file gives the defaults."""
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert TheoryConfig.from_yaml(path) == DEFAULT_CONFIG

    def test_invalid_file(self, temp_dir: Path) -> None:
        """Bad values in the file fail validation."""
        path = temp_dir / "bad.yaml"
        path.write_text("default_velocity: loud\n")
        with pytest.raises(ValidationError):
            TheoryConfig.from_yaml(path)

    def test_to_yaml(self, temp_dir: Path) -> None:
        """A dumped config loads back equal."""
        config = TheoryConfig(tempo_bpm=140, default_octave=3)
        path = temp_dir / "dumped.yaml"
        path.write_text(config.to_yaml())
        assert TheoryConfig.from_yaml(path) == config
