from __future__ import annotations


class PlotSpecError(ValueError):
    """Raised when a plot spec or layout is malformed."""


class PlotStateError(RuntimeError):
    """Raised when a destroyed plot instance is used."""
