"""CLI command implementations exposed via `ogsmith.ui.cli`."""

from __future__ import annotations

from .dimensions import dimensions
from .resolve import resolve


__all__ = ["dimensions", "resolve"]
