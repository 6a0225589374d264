"""Process exit statuses for kite-dataset.

The dispatcher only ever returns :data:`SUCCESS`, :data:`GENERAL_ERROR`
or a command's own status.  :data:`KEYBOARD_INTERRUPT` is used by the
console-script wrapper alone.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed, help was requested, or the version was printed."""

GENERAL_ERROR: int = 1
"""Parse failure, missing command, empty invocation or command failure."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
