"""Rich console rendering for sessions and ledgers."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from betround.core.ledger import Ledger
from betround.table.session import SessionResult


def render_standings(result: SessionResult, console: Console | None = None) -> Table:
    """Print final standings, biggest stack first. Returns the table."""
    console = console or Console()
    table = Table(title=f"Standings after {result.hands_played} hands")
    table.add_column("#", justify="right")
    table.add_column("Seat", justify="right")
    table.add_column("Agent")
    table.add_column("Stack", justify="right")
    table.add_column("Net", justify="right")

    net = result.net()
    for rank, (seat, stack) in enumerate(result.standings(), 1):
        name = result.agent_names[seat] if seat < len(result.agent_names) else f"seat {seat}"
        delta = net[seat]
        style = "green" if delta > 0 else "red" if delta < 0 else ""
        table.add_row(str(rank), str(seat), name, f"{stack:,}", f"[{style}]{delta:+,}[/]" if style else "0")

    console.print(table)
    return table


def render_ledger(ledger: Ledger, console: Console | None = None) -> Table:
    """Print per-seat ledger state. Returns the table."""
    console = console or Console()
    table = Table(title=f"{ledger.street.value.upper()}  pot {ledger.pot_size:,}")
    table.add_column("Seat", justify="right")
    table.add_column("Stack", justify="right")
    table.add_column("Committed", justify="right")
    table.add_column("Status")

    for seat in range(ledger.player_count):
        if ledger.is_folded(seat):
            status = "folded"
        elif ledger.is_all_in(seat):
            status = "all-in"
        elif not ledger.is_closed and seat == ledger.actor_seat:
            status = "to act"
        else:
            status = ""
        marker = " (B)" if seat == ledger.button_seat else ""
        table.add_row(
            f"{seat}{marker}",
            f"{ledger.stack(seat):,}",
            f"{ledger.committed(seat):,}",
            status,
        )

    console.print(table)
    return table
