"""UI helper exports for the PLAYTOOLS CLI."""

from .components import console, render_card, render_invocation_result, render_status
from .theme import THEME, style

__all__ = [
    "console",
    "render_card",
    "render_invocation_result",
    "render_status",
    "THEME",
    "style",
]
