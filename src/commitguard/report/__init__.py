"""Report rendering for detection results."""

from .render import render_report, render_warnings, write_report

__all__ = ["render_report", "render_warnings", "write_report"]
