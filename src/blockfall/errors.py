"""Exceptions raised by the output surfaces."""

from __future__ import annotations


class TerminalError(RuntimeError):
    """The output surface failed; the round cannot continue."""
