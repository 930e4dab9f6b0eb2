"""
Analysis Module
===============

Post-parse helpers that need a sampling frequency.

- time_axis: Sample index to seconds
- summarize / RecordingSummary: Duration, sample count, value range
- format_summary: Text rendering of a summary
"""

from openbci_txt.analysis.summary import (
    time_axis,
    summarize,
    format_summary,
    RecordingSummary,
)

__all__ = [
    'time_axis',
    'summarize',
    'format_summary',
    'RecordingSummary',
]
