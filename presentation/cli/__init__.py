"""Presentation CLI exports."""
from .report_command import ReportCommand, build_parser

__all__ = [
    "ReportCommand",
    "build_parser",
]
