"""Presentation CLI exports."""
from .fetch_command import FetchCommand, build_parser, run

__all__ = [
    "FetchCommand",
    "build_parser",
    "run",
]
