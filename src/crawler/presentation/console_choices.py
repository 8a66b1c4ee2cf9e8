from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from crawler.application.dtos import MenuView, PlayerStatsView, RoomView


_BORDER_MENU = "yellow"
_BORDER_MESSAGE = "cyan"
_BORDER_STATS = "green"


def _ornate_title(title: str) -> str:
    core = str(title or "").strip() or "Menu"
    return f"[bold yellow]{core}[/bold yellow]"


def parse_selection(raw: str | None) -> Optional[int]:
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


class ConsoleChoiceSource:
    """Reads numbered selections from the terminal and renders menus with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _menu_panel(self, menu: MenuView) -> Panel:
        body_lines: List[str] = [str(line) for line in menu.lines]
        if body_lines:
            body_lines.append("")
        body_lines.extend(f"[white]{option}[/white]" for option in menu.options)
        if menu.hint:
            body_lines.append("")
            body_lines.append(f"[yellow]{menu.hint}[/yellow]")
        return Panel.fit(
            "\n".join(body_lines) if body_lines else " ",
            title=_ornate_title(menu.title),
            border_style=_BORDER_MENU,
            padding=(0, 1),
        )

    def choose(self, menu: MenuView) -> Optional[int]:
        self.console.print(self._menu_panel(menu))
        try:
            raw = self.console.input("[bold]> [/bold]")
        except EOFError:
            return None
        return parse_selection(raw)

    def notify(self, lines: List[str]) -> None:
        rows = [str(line) for line in lines if str(line).strip()]
        if not rows:
            return
        self.console.print(Panel.fit("\n".join(rows), border_style=_BORDER_MESSAGE, padding=(0, 1)))


def render_status(console: Console, stats: PlayerStatsView, room: RoomView) -> None:
    header = Table.grid(padding=(0, 1))
    header.add_column(style="bold yellow", justify="right")
    header.add_column(style="white")
    header.add_row("Room", f"{room.room_name} ({room.x}, {room.y})")
    header.add_row("HP", f"{stats.health:.2f}/{stats.max_health:.2f}")
    header.add_row("Defense", f"{stats.defense:.2f}")
    header.add_row("Chests", f"{room.lootable_chests} lootable, {room.locked_chests} locked")
    if room.enemies_alive:
        header.add_row("Enemies", str(room.enemies_alive))
    header.add_row("Exits", ", ".join(room.exits) or "none")
    console.print(
        Panel.fit(
            header,
            title=_ornate_title("Dungeon"),
            border_style=_BORDER_STATS,
        )
    )
