"""
Reporting module for QLab Solver.

Provides:
- JSON export snapshot of a solve (parameters, potential, uncertainty
  metrics and the full grid / spectrum / potential data)
- Plain-text tables of spectra and session summaries
"""

from qlab_solver.reporting.export import (
    build_snapshot,
    format_session_summary,
    format_spectrum_table,
    snapshot_to_json,
    write_snapshot,
)

__all__ = [
    "build_snapshot",
    "format_session_summary",
    "format_spectrum_table",
    "snapshot_to_json",
    "write_snapshot",
]
