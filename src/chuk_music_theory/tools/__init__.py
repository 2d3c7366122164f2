"""
MCP tool implementations.

- theory - key signatures, scales, chords, analysis, progressions
"""

from chuk_music_theory.tools.theory import register_theory_tools

__all__ = [
    "register_theory_tools",
]
