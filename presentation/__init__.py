"""Presentation layer - Command-line caller of the acquisition client."""
from .cli import FetchCommand

__all__ = [
    "FetchCommand",
]
