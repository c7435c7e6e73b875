"""betround reporting module.

Usage:
    from betround.reporting import HandHistory, render_standings

    history = HandHistory.from_file("output/hands/demo.jsonl")
    print(history.hands_played, history.showdown_rate())
"""

from .reader import HandHistory, HandSummary
from .console import render_ledger, render_standings

__all__ = [
    "HandHistory",
    "HandSummary",
    "render_ledger",
    "render_standings",
]
