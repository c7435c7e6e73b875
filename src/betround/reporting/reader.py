"""Hand history reader -- loads JSONL session files into structured data.

Usage:
    history = HandHistory.from_file("path/to/session.jsonl")
    print(history.hands_played)      # 100
    print(history.wins_by_seat())    # {0: 41, 1: 59}
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class HandSummary:
    """Summary line of one hand."""

    hand_number: int
    winner: int
    pot: int
    showdown: bool
    last_street: str
    final_stacks: list[int]


@dataclass
class HandHistory:
    """Parsed contents of one session's JSONL file."""

    session_id: str | None
    hands: list[HandSummary] = field(default_factory=list)
    actions: list[dict] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> HandHistory:
        session_id = None
        hands: list[HandSummary] = []
        actions: list[dict] = []
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                session_id = session_id or record.get("session_id")
                if record.get("record_type") == "hand_summary":
                    hands.append(HandSummary(
                        hand_number=record["hand_number"],
                        winner=record["winner"],
                        pot=record["pot"],
                        showdown=record["showdown"],
                        last_street=record["last_street"],
                        final_stacks=record["final_stacks"],
                    ))
                elif record.get("record_type") == "action":
                    actions.append(record)
        return cls(session_id=session_id, hands=hands, actions=actions)

    @property
    def hands_played(self) -> int:
        return len(self.hands)

    def wins_by_seat(self) -> dict[int, int]:
        return dict(Counter(h.winner for h in self.hands))

    def showdown_rate(self) -> float:
        if not self.hands:
            return 0.0
        return sum(1 for h in self.hands if h.showdown) / len(self.hands)

    def forfeits(self) -> list[dict]:
        """Actions the driver replaced because they were illegal."""
        return [a for a in self.actions if a.get("forfeited")]
