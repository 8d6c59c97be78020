"""Presentation layer - User interfaces."""
from .cli import ReportCommand

__all__ = [
    "ReportCommand",
]
