"""Command-line interface for Vision Doctor."""

from __future__ import annotations

from visiondoctor.cli.entry_points import main
from visiondoctor.cli.parser import create_main_parser


__all__ = [
    "create_main_parser",
    "main",
]
