"""CLI entry point: python -m betround <session.yaml>"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from betround.agents import build_agent
from betround.agents.parser import load_decisions
from betround.config import SessionConfig, load_config
from betround.core.engine import BettingEngine
from betround.core.errors import BettingError
from betround.core.ledger import Ledger
from betround.core.seed import SeedManager
from betround.reporting.console import render_ledger, render_standings
from betround.table.history import HandHistoryLogger
from betround.table.observer import LoggingObserver
from betround.table.session import Session


def _run_session(config: SessionConfig, console: Console) -> None:
    """Play the configured number of hands and print standings."""
    seeds = SeedManager(config.seed)
    agents = [
        build_agent(
            a.strategy,
            a.params,
            rng=seeds.get_rng(seeds.get_agent_seed(a.name)),
        )
        for a in config.agents.values()
    ]
    for agent, name in zip(agents, config.agents):
        agent.name = name

    observers = [LoggingObserver()]
    history = None
    if config.output_dir:
        history = HandHistoryLogger(config.output_dir, config.name)
        observers.append(history)

    table = config.table
    session = Session(
        table.betting_config(),
        agents,
        table.seat_stacks(config.seats),
        seed=config.seed,
        button_seat=table.button,
        observers=observers,
        max_actions_per_street=table.max_actions_per_street,
    )
    result = session.play(config.hands)

    render_standings(result, console)
    if history is not None:
        console.print(f"Hand history: {history.file_path}")


def _run_replay(config: SessionConfig, actions_path: Path, console: Console) -> None:
    """Apply a scripted action list to a fresh ledger and print the result."""
    table = config.table
    ledger = Ledger(
        table.betting_config(),
        config.seats,
        table.button,
        table.seat_stacks(config.seats),
    )
    engine = BettingEngine(ledger)

    for i, decision in enumerate(load_decisions(actions_path), 1):
        if ledger.is_closed:
            console.print(f"Hand closed after {i - 1} actions; ignoring the rest.")
            break
        check = engine.validate(decision.action, decision.amount)
        if not check.legal:
            raise BettingError(f"action {i} ({decision.to_dict()}) rejected: {check.reason}")
        engine.apply_decision(decision)

    render_ledger(ledger, console)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="betround",
        description="No-limit Hold'em betting-round simulator",
    )
    parser.add_argument(
        "config",
        type=Path,
        help="Path to session YAML config file",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Directory for JSONL hand history (default: output_dir from config)",
    )
    parser.add_argument(
        "-n", "--hands",
        type=int,
        default=None,
        help="Override the number of hands to play",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="JSON/YAML list of actions to apply to a single hand instead of a session",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log every action",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    if not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    console = Console()
    try:
        config = load_config(args.config)
        if args.output:
            config.output_dir = args.output
        if args.hands is not None:
            config.hands = args.hands

        if args.replay:
            _run_replay(config, args.replay, console)
        else:
            console.print(
                f"Session: {config.name} (seed={config.seed}, hands={config.hands}, "
                f"seats={config.seats})"
            )
            _run_session(config, console)
    except BettingError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
