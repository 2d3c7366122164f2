"""
Exception types raised by the theory engine.

Every error is also a ValueError, so callers that guard inputs with
`except ValueError` keep working.
"""

from __future__ import annotations


class MusicTheoryError(Exception):
    """Base class for all theory engine errors."""


class InvalidPitchClass(MusicTheoryError, ValueError):
    """A pitch symbol outside the 12-class vocabulary."""


class InvalidKeySignature(MusicTheoryError, ValueError):
    """An accidental count outside the range valid for the mode and cycle."""


class InvalidRomanNumeral(MusicTheoryError, ValueError):
    """A scale-degree symbol not present in the symbol table."""


class UnknownChordQuality(MusicTheoryError, ValueError):
    """A chord quality name with no interval formula (strict mode only)."""


class UnmatchedChord(MusicTheoryError, ValueError):
    """A note set that matches no chord fingerprint (strict mode only)."""
