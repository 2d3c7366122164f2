"""
Engine configuration.

A single pydantic model holding the knobs the outer layers (MIDI bridge,
MCP tools) need. Core theory functions stay pure and take explicit
arguments; the config only supplies their defaults at the edges.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from chuk_music_theory.constants import DEFAULT_VELOCITY


class TheoryConfig(BaseModel):
    """
    Configuration for the theory engine's outer layers.

    Loaded from YAML with `from_yaml`; every field has a sensible default
    so `TheoryConfig()` works out of the box.
    """

    ticks_per_beat: int = Field(480, gt=0, description="MIDI resolution (ticks per quarter)")
    tempo_bpm: int = Field(120, ge=20, le=400, description="Tempo for exported MIDI")
    default_velocity: int = Field(
        DEFAULT_VELOCITY, ge=0, le=127, description="Velocity for notes without one"
    )
    default_channel: int = Field(0, ge=0, le=15, description="Channel for notes without one")
    default_octave: int = Field(4, description="Octave assumed for note names without one")
    strict_qualities: bool = Field(
        False, description="Raise on unknown chord qualities instead of falling back to major"
    )
    strict_inference: bool = Field(
        False, description="Raise when chord inference finds no match instead of falling back"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_yaml(cls, path: Path) -> TheoryConfig:
        """
        Load a config from a YAML file.

        Missing keys take their defaults; an empty file yields the default config.

        Args:
            path: Path to the YAML file

        Returns:
            Validated TheoryConfig
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def to_yaml(self) -> str:
        """Serialize this config to a YAML string."""
        return yaml.dump(self.model_dump(), default_flow_style=False, sort_keys=False)


DEFAULT_CONFIG = TheoryConfig()
