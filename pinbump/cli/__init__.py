"""Pinbump CLI — Typer-based command-line interface.

Provides the ``pinbump`` command with subcommands for scanning a tree,
resolving the latest patch of a track, and running the full bump.

All output uses Rich for formatted terminal display.
"""
