"""Screen layout built with rich from a Snapshot and the controller's UI state."""

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .keymap import MENU_TITLES, Field, InputController, Tab
from .scheduler import Snapshot

FOOTER = "TOTP-CLI - Authenticator"


def render_menu(active: Tab) -> Panel:
    line = Text()
    for i, title in enumerate(MENU_TITLES):
        if i:
            line.append(" | ")
        base = "yellow" if i == active.value else "white"
        line.append(title[0], style="green underline")
        line.append(title[1:], style=base)
    return Panel(line, title="Menu", box=box.SQUARE)


def render_home() -> Panel:
    body = Text(justify="center")
    body.append("\nTime-based One-time Password (TOTP) Authenticator\n\n", style="bright_green")
    body.append("Press 'c' to access Codes\n")
    body.append("'a' to add an account and 'd' to delete the currently selected code.")
    return Panel(body, title="Home", box=box.SQUARE)


def render_codes(snapshot: Snapshot) -> RenderableType:
    table = Table(box=box.SQUARE, title="TOTPs", expand=True)
    table.add_column("Account", style="white")
    table.add_column("Code", style="bold cyan", no_wrap=True)
    for i, (label, code) in enumerate(snapshot.rows):
        style = "bold black on yellow" if i == snapshot.selected else None
        table.add_row(label, code, style=style)
    if not snapshot.rows:
        return table
    bar = ProgressBar(total=1.0, completed=snapshot.countdown, complete_style="green")
    return Group(table, Panel(bar, title="30s Timer", box=box.SQUARE))


def render_add(controller: InputController) -> RenderableType:
    style = "yellow" if controller.editing else "white"

    def field(title: str, value: str, focused: bool) -> Panel:
        marker = "> " if focused and controller.editing else ""
        return Panel(Text(value), title=marker + title, border_style=style, box=box.SQUARE)

    instructions = Text("Press <Tab> to change input\nPress <Enter> to add\nPress <Esc> to access the Menu")
    return Group(
        field("address", controller.account, controller.field is Field.ACCOUNT),
        field("secret key", "*" * len(controller.key), controller.field is Field.KEY),
        Panel(instructions, title="Instructions", style="bright_cyan", box=box.SQUARE),
    )


def render(snapshot: Snapshot, controller: InputController, message: str = None) -> RenderableType:
    if controller.tab is Tab.CODES:
        body = render_codes(snapshot)
    elif controller.tab is Tab.ADD:
        body = render_add(controller)
    else:
        body = render_home()
    status = Text(message, style="red") if message else Text(FOOTER, style="bright_cyan")
    status.justify = "center"
    footer = Panel(status, title="TOTP", box=box.SQUARE)
    return Group(render_menu(controller.tab), body, footer)
