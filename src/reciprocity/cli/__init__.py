"""Reciprocity CLI module.

Provides an argparse-based runner for single tournaments.

Usage:
    uv run reciprocity tit-for-tat always-defect

Or directly:
    python -m reciprocity.cli.app tit-for-tat always-defect
"""

from reciprocity.cli.app import build_parser, main

__all__ = ["build_parser", "main"]
