"""CLI command implementations exposed via ``annotext.ui.cli``."""

from __future__ import annotations

from .kinds import kinds
from .render import render, strip


__all__ = ["kinds", "render", "strip"]
