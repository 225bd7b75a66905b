"""Colour palette shared by the CLI output and the interactive menu."""

THEME = {
    "accent": "color(205)",
    "accent_alt": "color(39)",
    "text_primary": "default",
    "text_muted": "color(244)",
    "border": "color(240)",
    "selected": "bold color(205)",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
}


def style(name: str) -> str:
    """Return the rich style string for a theme slot."""
    return THEME.get(name, THEME["text_primary"])
