"""Value types shared between the betting core and its agents."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

__all__ = ["Street", "Action", "ActionDecision", "GameView", "STREET_ORDER"]


class Street(Enum):
    """Betting streets in Hold'em, plus the terminal CLOSED marker."""

    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    CLOSED = "closed"


# Ordered street progression
STREET_ORDER = [Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER, Street.CLOSED]


class Action(Enum):
    """The action vocabulary the engine understands."""

    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all_in"


@dataclass(frozen=True)
class ActionDecision:
    """An agent's chosen action.

    ``amount`` is a set-to target for the street (total committed after the
    action), meaningful only for BET and RAISE.
    """

    action: Action
    amount: int | None = None

    @classmethod
    def fold(cls) -> ActionDecision:
        return cls(Action.FOLD)

    @classmethod
    def check(cls) -> ActionDecision:
        return cls(Action.CHECK)

    @classmethod
    def call(cls) -> ActionDecision:
        return cls(Action.CALL)

    @classmethod
    def bet(cls, target: int) -> ActionDecision:
        return cls(Action.BET, target)

    @classmethod
    def raise_to(cls, target: int) -> ActionDecision:
        return cls(Action.RAISE, target)

    @classmethod
    def all_in(cls) -> ActionDecision:
        return cls(Action.ALL_IN)

    def to_dict(self) -> dict:
        payload: dict = {"action": self.action.value}
        if self.amount is not None:
            payload["amount"] = self.amount
        return payload


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot of a hand, as seen by the seat about to act.

    All per-seat sequences are copies; mutating them never touches the ledger.
    """

    street: Street
    pot_size: int
    player_count: int
    button_seat: int
    actor_seat: int
    stacks: tuple[int, ...]
    committed: tuple[int, ...]
    folded: tuple[bool, ...]
    all_in: tuple[bool, ...]
    to_call: int
    min_raise_increment: int
    last_raise_increment: int
    legal_actions: frozenset[Action]
    hole_cards: tuple[str, ...] = ()
    board: tuple[str, ...] = ()

    @property
    def seat(self) -> int:
        """Alias for the acting seat's index."""
        return self.actor_seat

    @property
    def my_stack(self) -> int:
        return self.stacks[self.actor_seat]

    @property
    def my_committed(self) -> int:
        return self.committed[self.actor_seat]

    @property
    def max_committed(self) -> int:
        return max(self.committed, default=0)

    def with_cards(self, hole_cards, board) -> GameView:
        """Return a copy carrying the acting seat's hole cards and the board."""
        return replace(
            self,
            hole_cards=tuple(str(c) for c in hole_cards),
            board=tuple(str(c) for c in board),
        )

    def to_dict(self) -> dict:
        """Serializable form for hand history."""
        return {
            "street": self.street.value,
            "pot": self.pot_size,
            "button": self.button_seat,
            "actor": self.actor_seat,
            "stacks": list(self.stacks),
            "committed": list(self.committed),
            "folded": [s for s, f in enumerate(self.folded) if f],
            "all_in": [s for s, a in enumerate(self.all_in) if a],
            "to_call": self.to_call,
            "legal_actions": sorted(a.value for a in self.legal_actions),
        }
