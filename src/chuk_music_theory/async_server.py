#!/usr/bin/env python3
"""
Async Music Theory MCP Server using chuk-mcp-server

This server exposes the music theory engine as MCP tools:
- Key signatures and equivalent keys across modes
- Scales and modes built from interval formulas
- Chords by root and quality, with inversions and slash basses
- Chord identification from arbitrary notes
- Roman-numeral progressions and diatonic chords in a key

Set CHUK_MUSIC_THEORY_CONFIG to a YAML file to override the defaults.
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_music_theory.config import DEFAULT_CONFIG, TheoryConfig
from chuk_music_theory.tools import register_theory_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-music-theory")

CONFIG_PATH = os.environ.get("CHUK_MUSIC_THEORY_CONFIG")
config = TheoryConfig.from_yaml(Path(CONFIG_PATH)) if CONFIG_PATH else DEFAULT_CONFIG

# Register all tools
theory_tools = register_theory_tools(mcp, config)

# Export tool functions for direct access
music_key_signature = theory_tools["music_key_signature"]
music_build_scale = theory_tools["music_build_scale"]
music_build_chord = theory_tools["music_build_chord"]
music_analyze_chord = theory_tools["music_analyze_chord"]
music_resolve_progression = theory_tools["music_resolve_progression"]
music_equivalent_key = theory_tools["music_equivalent_key"]
music_diatonic_chords = theory_tools["music_diatonic_chords"]

logger.info("CHUK Music Theory MCP Server initialized")
logger.info(f"  Config: {CONFIG_PATH or 'defaults'}")
