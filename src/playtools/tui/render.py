"""
Frame rendering for the interactive menu.

Every function here is a pure function of ``AppState``: it builds rich
renderables and never mutates state or writes to the real terminal.
``render_frame`` turns the current screen into an ANSI string sized to the
terminal.
"""

import io

from rich.console import Console, Group, RenderableType
from rich.padding import Padding
from rich.text import Text

from playtools.tui.state import AppState, Screen
from playtools.tui.widgets import ListWidget
from playtools.ui.theme import style

# Padding around every frame: (vertical, horizontal)
MARGIN = (1, 2)
LIST_HELP = "↑/k up • ↓/j down • / filter • enter select • q quit"
FILTER_HELP = "enter apply filter • esc clear filter"
RESULT_FOOTER = "Press 'b' to go back or 'q' to quit"


def content_width(state: AppState) -> int:
    return max(10, state.width - 2 * MARGIN[1])


def content_height(state: AppState) -> int:
    return max(1, state.height - 2 * MARGIN[0])


def _measure_console(width: int) -> Console:
    return Console(file=io.StringIO(), width=width, color_system=None)


def render_list(widget: ListWidget) -> RenderableType:
    lines: list[Text] = [
        Text(f" {widget.title} ", style=f"bold reverse {style('accent')}"),
        Text(""),
    ]

    if widget.filtering or widget.filter_text:
        cursor = "█" if widget.filtering else ""
        lines.append(Text.assemble(("Filter: ", style("accent_alt")), widget.filter_text + cursor))
        lines.append(Text(""))

    page_items = widget.page_items()
    if not page_items:
        lines.append(Text("No items.", style=style("text_muted")))
        lines.append(Text(""))

    selected = widget.selected_item
    for _, item in page_items:
        if item is selected:
            lines.append(Text.assemble(("│ ", style("accent")), (item.title, style("selected"))))
            lines.append(Text.assemble(("│ ", style("accent")), (item.description, style("accent"))))
        else:
            lines.append(Text(f"  {item.title}", style=style("text_primary")))
            lines.append(Text(f"  {item.description}", style=style("text_muted")))
        lines.append(Text(""))

    if widget.page_count > 1:
        dots = Text()
        for page in range(widget.page_count):
            dots.append("•" if page == widget.page else "○", style=style("accent") if page == widget.page else style("text_muted"))
        lines.append(dots)
        lines.append(Text(""))

    lines.append(Text(FILTER_HELP if widget.filtering else LIST_HELP, style=style("text_muted")))
    return Group(*lines)


def render_prompt(state: AppState) -> RenderableType:
    action = state.selected_action.value if state.selected_action else ""
    field = state.prompt_input
    if field.value:
        value = Text.assemble(("> ", style("accent")), field.value, ("█", style("accent")))
    else:
        value = Text.assemble(("> ", style("accent")), ("█", style("accent")), (field.placeholder, style("text_muted")))

    lines: list[Text] = [
        Text(""),
        Text(f"{state.prompt_label} for {action}:", style="bold"),
        Text(""),
        value,
        Text(""),
    ]
    if state.prompt_message:
        lines.append(Text(state.prompt_message, style=style("error")))
        lines.append(Text(""))
    lines.append(Text("Press Enter to continue or Esc to go back", style=style("text_muted")))
    return Group(*lines)


def render_loading(state: AppState) -> RenderableType:
    env = state.selected_env.value if state.selected_env else ""
    action = state.selected_action.value if state.selected_action else ""
    return Group(
        Text(""),
        Text.assemble(
            (state.spinner.view(), style("accent")),
            f" Invoking Lambda in {env} environment with action {action}...",
        ),
        Text(""),
        Text("Please wait, this may take a few moments...", style=style("text_muted")),
    )


def result_text(state: AppState) -> Text:
    """Build the unwrapped result block: header, output lines and logs."""
    result = state.result
    text = Text()
    if result is None:
        return text

    if result.error:
        text.append(f"Error: {result.error}\n\n", style=style("error"))
    else:
        text.append("Lambda Execution Summary:\n\n", style="bold")

    for line in result.output_lines:
        text.append(line + "\n")

    if result.logs:
        text.append("\n--- Lambda Logs ---\n\n", style=style("accent_alt"))
        text.append(result.logs.rstrip("\n"))
    return text


def result_lines(state: AppState) -> list[Text]:
    """Return the result block word-wrapped to the content width."""
    width = content_width(state)
    wrapped = result_text(state).wrap(_measure_console(width), width, overflow="fold")
    return list(wrapped)


def result_viewport(state: AppState) -> int:
    # footer line plus the blank line above it
    return max(1, content_height(state) - 2)


def max_result_scroll(state: AppState) -> int:
    return max(0, len(result_lines(state)) - result_viewport(state))


def render_result(state: AppState) -> RenderableType:
    lines = result_lines(state)
    viewport = result_viewport(state)
    scroll = max(0, min(state.result_scroll, len(lines) - viewport))
    visible = lines[scroll:scroll + viewport]

    footer = RESULT_FOOTER
    if len(lines) > viewport:
        footer += f"  (↑/↓ scroll, lines {scroll + 1}-{scroll + len(visible)} of {len(lines)})"
    return Group(*visible, Text(""), Text(footer, style=style("text_muted")))


def render(state: AppState) -> RenderableType:
    """Map the current screen to its renderable, padded by the frame margin."""
    if state.screen is Screen.ENVIRONMENT_SELECT:
        body = render_list(state.env_list)
    elif state.screen is Screen.ACTION_SELECT:
        body = render_list(state.action_list)
    elif state.screen is Screen.PARAMETER_PROMPT:
        body = render_prompt(state)
    elif state.screen is Screen.LOADING:
        body = render_loading(state)
    elif state.screen is Screen.RESULT:
        body = render_result(state)
    else:
        body = Text("Loading...")
    return Padding(body, MARGIN)


def render_frame(state: AppState, color: bool = True) -> str:
    """Render the current screen to a string, with ANSI styling if ``color``."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=max(1, state.width),
        height=max(1, state.height),
        force_terminal=color,
        color_system="256" if color else None,
        legacy_windows=False,
    )
    console.print(render(state), end="")
    return buffer.getvalue()
