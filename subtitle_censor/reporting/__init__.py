"""Reporting subpackage."""

from .summary import format_duration, generate_summary, print_summary, save_mute_timeline, save_summary_json

__all__ = ['format_duration', 'generate_summary', 'print_summary', 'save_mute_timeline', 'save_summary_json']
