"""Session -- multi-hand play at one table.

Carries stacks from hand to hand, rotates the button past empty seats,
and stops after the configured number of hands or when fewer than two
seats still hold chips. Each hand gets its own HMAC-derived deck seed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from betround.agents.base import Agent
from betround.core.betting_config import BettingConfig
from betround.core.errors import InvalidConfiguration
from betround.core.seed import SeedManager
from betround.table.dealer import DEFAULT_MAX_ACTIONS_PER_STREET, HandResult, HandRunner
from betround.table.evaluator import HandEvaluator
from betround.table.observer import HandObserver

__all__ = ["Session", "SessionResult"]

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """Stacks and per-hand results at the end of a session."""

    starting_stacks: list[int]
    final_stacks: list[int]
    hands: list[HandResult] = field(default_factory=list)
    agent_names: list[str] = field(default_factory=list)

    @property
    def hands_played(self) -> int:
        return len(self.hands)

    def net(self) -> list[int]:
        return [end - start for start, end in zip(self.starting_stacks, self.final_stacks)]

    def standings(self) -> list[tuple[int, int]]:
        """(seat, final stack) pairs, biggest stack first."""
        return sorted(enumerate(self.final_stacks), key=lambda x: x[1], reverse=True)


class Session:
    """Plays a series of hands for a fixed table of agents."""

    def __init__(
        self,
        config: BettingConfig,
        agents: Sequence[Agent],
        stacks: Sequence[int],
        seed: int,
        button_seat: int = 0,
        observers: Sequence[HandObserver] = (),
        evaluator: HandEvaluator | None = None,
        max_actions_per_street: int = DEFAULT_MAX_ACTIONS_PER_STREET,
    ) -> None:
        if len(agents) != len(stacks):
            raise InvalidConfiguration(
                f"{len(agents)} agents but {len(stacks)} stacks"
            )
        self._agents = list(agents)
        self._stacks = list(stacks)
        self._button = button_seat % len(stacks) if stacks else 0
        self._seeds = SeedManager(seed)
        self._runner = HandRunner(
            config,
            self._agents,
            evaluator=evaluator,
            observers=observers,
            max_actions_per_street=max_actions_per_street,
        )

    @property
    def stacks(self) -> list[int]:
        return list(self._stacks)

    @property
    def button_seat(self) -> int:
        return self._button

    def live_seats(self) -> list[int]:
        return [s for s, chips in enumerate(self._stacks) if chips > 0]

    def play(self, hands: int) -> SessionResult:
        """Play up to ``hands`` hands and return the session result."""
        result = SessionResult(
            starting_stacks=list(self._stacks),
            final_stacks=list(self._stacks),
            agent_names=[getattr(a, "name", type(a).__name__) for a in self._agents],
        )

        for hand_number in range(1, hands + 1):
            if len(self.live_seats()) < 2:
                logger.info("Session over after %d hands: one seat holds every chip", hand_number - 1)
                break

            if hand_number > 1:
                self._button = self._next_live_seat(self._button)
            elif self._stacks[self._button] == 0:
                self._button = self._next_live_seat(self._button)

            rng = self._seeds.get_rng(self._seeds.get_hand_seed(hand_number))
            hand = self._runner.play(hand_number, self._button, self._stacks, rng)
            result.hands.append(hand)

            for seat, (before, after) in enumerate(zip(self._stacks, hand.final_stacks)):
                if before > 0 and after == 0:
                    logger.info("Seat %d busted on hand %d", seat, hand_number)
            self._stacks = list(hand.final_stacks)

        result.final_stacks = list(self._stacks)
        return result

    def _next_live_seat(self, seat: int) -> int:
        n = len(self._stacks)
        for offset in range(1, n + 1):
            candidate = (seat + offset) % n
            if self._stacks[candidate] > 0:
                return candidate
        return seat
