from __future__ import annotations

from rich.console import Console

from crawler.application.services.player_state_machine import PlayerStateMachine
from crawler.presentation.console_choices import render_status


def run_game_loop(engine: PlayerStateMachine, console: Console | None = None, max_turns: int | None = None) -> int:
    """Drive ``engine.update`` until it asks to stop; returns the number of turns played."""
    turns = 0
    while max_turns is None or turns < max_turns:
        if console is not None:
            render_status(console, engine.player_stats_view(), engine.room_view())
        turns += 1
        if not engine.update():
            break

    if console is not None:
        if engine.player.is_defeated:
            console.print("[bold red]You have fallen in the dungeon.[/bold red]")
        else:
            console.print("Goodbye.")
    return turns
