"""
Theory tools - MCP tools over the theory engine.

Tools for key signatures, scales, chords, chord analysis and Roman-numeral
progressions. Every tool returns a JSON string with a "status" field and
never raises: failures are logged and reported as status "error".
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_music_theory.config import DEFAULT_CONFIG, TheoryConfig
from chuk_music_theory.constants import AccidentalType, Mode
from chuk_music_theory.core import (
    Chord,
    Note,
    analyze,
    build,
    diatonic_chords,
    equivalent_key,
    key_for_signature,
    modal_scale,
    resolve_sequence,
)
from chuk_music_theory.core.scale import BLUES_FORMULA, PENTATONIC_FORMULA

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)

# Scale types beyond the seven diatonic modes
_EXTRA_SCALES: dict[str, tuple[int, ...]] = {
    "pentatonic": PENTATONIC_FORMULA,
    "blues": BLUES_FORMULA,
}


def _chord_summary(chord: Chord) -> dict[str, Any]:
    return {
        "symbol": str(chord),
        "root": chord.root.value,
        "quality": chord.quality.value,
        "inversion": chord.inversion,
        "notes": [str(note) for note in chord.to_notes()],
        "midi": [note.midi for note in chord.to_notes()],
    }


def register_theory_tools(
    mcp: ChukMCPServer,
    config: TheoryConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """
    Register music theory tools with the MCP server.

    Args:
        mcp: The MCP server instance
        config: Engine configuration (default octave, strictness)

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_key_signature(
        accidentals: int,
        accidental_type: str = "sharps",
        mode: str = "major",
    ) -> str:
        """
        Find the key for a key signature.

        Args:
            accidentals: Number of sharps or flats (0-7)
            accidental_type: "sharps" or "flats"
            mode: "major" or "minor"

        Returns:
            JSON string with the key's tonic

        Example:
            music_key_signature(accidentals=3, accidental_type="flats")
        """
        try:
            key = key_for_signature(Mode.parse(mode), accidentals, AccidentalType(accidental_type))
            return json.dumps(
                {
                    "status": "success",
                    "key": key.value,
                    "mode": Mode.parse(mode).value,
                    "accidentals": accidentals,
                    "accidental_type": accidental_type,
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve key signature")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_key_signature"] = music_key_signature

    @mcp.tool  # type: ignore[arg-type]
    async def music_build_scale(
        root: str,
        scale_type: str = "major",
        octave: int | None = None,
    ) -> str:
        """
        Build a scale on a root.

        Args:
            root: Root note name (e.g., "F", "Bb", "C#")
            scale_type: A mode (major, dorian, ..., minor, locrian), "pentatonic" or "blues"
            octave: Octave of the root (defaults to the configured octave)

        Returns:
            JSON string with spelled notes and MIDI numbers

        Example:
            music_build_scale(root="F", scale_type="major", octave=4)
        """
        try:
            start = octave if octave is not None else config.default_octave
            formula = _EXTRA_SCALES.get(scale_type.strip().lower())
            if formula is not None:
                scale = build(root, formula, start, name=scale_type.strip().lower())
            else:
                scale = modal_scale(root, Mode.parse(scale_type), start)
            return json.dumps(
                {
                    "status": "success",
                    "root": scale.root.value,
                    "scale_type": scale.name,
                    "formula": list(scale.formula),
                    "notes": [str(note) for note in scale],
                    "midi": scale.to_midi(),
                }
            )
        except Exception as e:
            logger.exception("Failed to build scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_build_scale"] = music_build_scale

    @mcp.tool  # type: ignore[arg-type]
    async def music_build_chord(
        root: str,
        quality: str = "major",
        octave: int | None = None,
        inversion: int = 0,
        bass: str | None = None,
    ) -> str:
        """
        Build a chord from a root and quality.

        Args:
            root: Root note name
            quality: Chord quality name or suffix (e.g., "minor", "m7", "dominant_seventh")
            octave: Octave of the root (defaults to the configured octave)
            inversion: 0 for root position, 1 for first inversion, ...
            bass: Optional bass note for a slash chord (e.g., "E")

        Returns:
            JSON string with the chord's notes

        Example:
            music_build_chord(root="G", quality="7", inversion=1)
        """
        try:
            chord = Chord.from_root(
                root,
                quality,
                octave=octave if octave is not None else config.default_octave,
                inversion=inversion,
                strict=config.strict_qualities,
            )
            if bass:
                chord = chord.with_bass(bass)
            return json.dumps({"status": "success", "chord": _chord_summary(chord)})
        except Exception as e:
            logger.exception("Failed to build chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_build_chord"] = music_build_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_analyze_chord(notes: list[str]) -> str:
        """
        Identify a chord from its notes.

        Notes may be in any order and may double pitch classes. Names
        without an octave use the configured default octave.

        Args:
            notes: Note names such as ["E4", "G4", "C5"]

        Returns:
            JSON string with root, quality and inversion

        Example:
            music_analyze_chord(notes=["E4", "G4", "C5"])
        """
        try:
            parsed = [Note.parse(n, default_octave=config.default_octave) for n in notes]
            analysis = analyze(parsed, strict=config.strict_inference)
            return json.dumps(
                {
                    "status": "success",
                    "root": analysis.root.value,
                    "quality": analysis.quality.value,
                    "symbol": f"{analysis.root.value}{analysis.quality.suffix}",
                    "inversion": analysis.inversion,
                    "matched": analysis.matched,
                    "voicing": [str(note) for note in analysis.voicing],
                }
            )
        except Exception as e:
            logger.exception("Failed to analyze chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_analyze_chord"] = music_analyze_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_resolve_progression(
        progression: list[str],
        key: str,
        mode: str = "major",
        octave: int | None = None,
    ) -> str:
        """
        Resolve a Roman-numeral progression in a key.

        Args:
            progression: Roman numerals in order (e.g., ["ii7", "V7", "Imaj7"])
            key: Tonic of the key
            mode: Mode of the key
            octave: Octave of the tonic (defaults to the configured octave)

        Returns:
            JSON string with one chord per numeral

        Example:
            music_resolve_progression(progression=["I", "vi", "IV", "V"], key="G")
        """
        try:
            start = octave if octave is not None else config.default_octave
            resolved = resolve_sequence(progression, key, start, Mode.parse(mode))
            chords = []
            for symbol, item in zip(progression, resolved):
                chord = Chord.from_root(item.root, item.quality, octave=item.octave)
                chords.append(
                    {
                        "numeral": symbol,
                        "octave": item.octave,
                        **_chord_summary(chord),
                    }
                )
            return json.dumps(
                {
                    "status": "success",
                    "key": key,
                    "mode": Mode.parse(mode).value,
                    "chords": chords,
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_resolve_progression"] = music_resolve_progression

    @mcp.tool  # type: ignore[arg-type]
    async def music_equivalent_key(key: str, mode: str, target_mode: str = "major") -> str:
        """
        Find the key in another mode that shares the same notes.

        Args:
            key: Tonic of the source key
            mode: Mode of the source key
            target_mode: Mode to translate to

        Returns:
            JSON string with the equivalent tonic

        Example:
            music_equivalent_key(key="D", mode="dorian", target_mode="major")
        """
        try:
            target = Mode.parse(target_mode)
            tonic = equivalent_key(key, Mode.parse(mode), target)
            return json.dumps(
                {
                    "status": "success",
                    "key": tonic.value,
                    "mode": target.value,
                }
            )
        except Exception as e:
            logger.exception("Failed to find equivalent key")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_equivalent_key"] = music_equivalent_key

    @mcp.tool  # type: ignore[arg-type]
    async def music_diatonic_chords(key: str, mode: str = "major", sevenths: bool = False) -> str:
        """
        List the chord on every degree of a key.

        Args:
            key: Tonic of the key
            mode: Mode of the key
            sevenths: Return seventh chords instead of triads

        Returns:
            JSON string with one chord per degree

        Example:
            music_diatonic_chords(key="A", mode="minor", sevenths=True)
        """
        try:
            chords = diatonic_chords(key, Mode.parse(mode), sevenths, config.default_octave)
            return json.dumps(
                {
                    "status": "success",
                    "key": key,
                    "mode": Mode.parse(mode).value,
                    "chords": [
                        {"numeral": numeral, **_chord_summary(chord)} for numeral, chord in chords
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list diatonic chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_diatonic_chords"] = music_diatonic_chords

    return tools
