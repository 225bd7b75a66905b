"""Reusable Rich components for the PLAYTOOLS CLI."""

from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from playtools.models import InvocationResult

from .theme import style


console = Console()


def _compute_width(padding: int = 4) -> int:
    """Return a width that keeps layouts readable in narrow terminals."""
    return max(40, console.size.width - padding)


def render_card(
    title: Optional[str],
    body: str,
    footer: Optional[str] = None,
    border_style: Optional[str] = None,
) -> Panel:
    """Render a generic informational card.

    Lines are kept verbatim; rich folds the long ones to the card width.
    """
    text_parts: list[Text] = []

    if body:
        text_parts.extend(
            Text(line, style=style("text_primary")) for line in body.splitlines()
        )

    group = Group(*text_parts) if text_parts else Text("", style=style("text_primary"))

    panel = Panel(
        Align.left(group),
        title=Text(title, style=f"bold {style('accent')}") if title else None,
        title_align="left",
        border_style=border_style or style("border"),
        box=box.ROUNDED,
        padding=(1, 2),
        width=_compute_width(),
    )
    console.print(panel)

    if footer:
        footer_text = Text(footer, style=style("text_muted"))
        console.print(Align.left(footer_text, width=_compute_width()))

    console.print()
    return panel


def render_status(
    message: str,
    level: str = "info",
    footer: Optional[str] = None,
) -> Text:
    """Render a status line with semantic coloring."""
    icons = {
        "success": "✔",
        "warning": "!",
        "error": "✖",
        "info": "•",
    }
    styles = {
        "success": style("success"),
        "warning": style("warning"),
        "error": style("error"),
        "info": style("accent_alt"),
    }

    icon = icons.get(level, icons["info"])
    text_style = styles.get(level, styles["info"])
    status_text = Text(f"{icon} {message}", style=text_style)
    console.print(status_text)

    if footer:
        footer_text = Text(footer, style=style("text_muted"))
        console.print(footer_text)

    console.print()
    return status_text


def render_invocation_result(result: InvocationResult) -> None:
    """Print an invocation's output lines, log tail and final status."""
    render_card(
        "Lambda Execution Summary",
        "\n".join(result.output_lines),
        border_style=style("error") if result.error else None,
    )
    if result.logs:
        render_card("Lambda Logs", result.logs.rstrip("\n"))
    if result.error:
        render_status(f"Error: {result.error}", level="error")
    elif any(line.startswith("Function error:") for line in result.output_lines):
        render_status("The function reported an error, see the response above.", level="warning")
    else:
        render_status("Invocation completed.", level="success")
