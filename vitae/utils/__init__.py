"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logging setup and pipeline events
- Timestamps
- Text helpers
- PDF read-back for diagnostics
"""

from vitae.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
